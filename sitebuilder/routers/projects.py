"""Stateless project endpoints: hydrate, review, suggest a layout, render."""

import logging

from fastapi import APIRouter, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from sitebuilder.models.project import ProjectRecord
from sitebuilder.models.project_request import CreateProjectRequest, ProjectRequest, RenderRequest
from sitebuilder.models.project_response import LayoutSuggestionResponse, RenderResponse, ReviewResponse
from sitebuilder.models.site import SiteOptions
from sitebuilder.services.layouts import suggest_layout
from sitebuilder.services.pipeline import create_project, render_project, review_project
from sitebuilder.services.site import PAGES

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)
router = APIRouter(prefix="/projects", tags=["projects"])


@router.post("", response_model=ProjectRecord, summary="Start a project from a profile")
@limiter.limit("30/minute")
async def new_project(request: Request, body: CreateProjectRequest) -> ProjectRecord:
    """Return a draft project with default theme, layout and content. Nothing is stored."""
    project = create_project(body.profile)
    logger.info("Created project %s for %s", project.id, project.profile.slug)
    return project


@router.post("/review", response_model=ReviewResponse, summary="Screen project copy for risky claims")
@limiter.limit("30/minute")
async def review(request: Request, body: ProjectRequest) -> ReviewResponse:
    result = review_project(body.project)
    return ReviewResponse(compliance=result.summary, orphaned_note_ids=sorted(result.orphaned_notes))


@router.post(
    "/layout-suggestion",
    response_model=LayoutSuggestionResponse,
    summary="Recommend a layout preset for the project's content",
)
@limiter.limit("30/minute")
async def layout_suggestion(request: Request, body: ProjectRequest) -> LayoutSuggestionResponse:
    suggestion = suggest_layout(body.project.profile, body.project.content)
    return LayoutSuggestionResponse(
        recommended_preset_id=suggestion.recommended_preset_id,
        reasons=suggestion.reasons,
        section_toggles=suggestion.section_toggles,
    )


@router.post("/render", response_model=RenderResponse, summary="Render the static site file set")
@limiter.limit("10/minute")
async def render(request: Request, body: RenderRequest) -> RenderResponse:
    """Return every text file of the site; images are referenced by their source URL."""
    options = SiteOptions(include_llms_txt=body.include_llms_txt, include_humans_txt=body.include_humans_txt)
    if body.year is not None:
        options.year = body.year
    files = render_project(body.project, options)
    logger.info("Rendered %d files for project %s", len(files), body.project.id)
    return RenderResponse(pages=[page.file for page in PAGES], files=files)

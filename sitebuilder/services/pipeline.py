"""Project lifecycle orchestration: create, hydrate, review and generate."""

import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, NamedTuple, Optional

from sitebuilder.models.compliance import ComplianceSummary
from sitebuilder.models.profile import BusinessProfile
from sitebuilder.models.project import ProjectRecord
from sitebuilder.models.site import SiteOptions
from sitebuilder.models.theme import ProjectLayout
from sitebuilder.services.compliance import scan, split_substantiation_notes, to_compliance_profile
from sitebuilder.services.content import create_from_profile, normalize_content
from sitebuilder.services.fetcher import fetch_image
from sitebuilder.services.layouts import build_sections_from_layout_preset, normalize_sections
from sitebuilder.services.normalizer import validate_site_slug
from sitebuilder.services.publisher import ImageFetcher, materialize_images, write_site
from sitebuilder.services.renderer import RenderableImage
from sitebuilder.services.site import PAGES, build_site
from sitebuilder.services.themes import normalize_theme

logger = logging.getLogger(__name__)


class ProjectReview(NamedTuple):
    summary: ComplianceSummary
    attached_notes: Dict[str, str]
    orphaned_notes: Dict[str, str]


class GeneratedSite(NamedTuple):
    site_dir: Path
    slug: str
    pages: List[str]
    files: List[Path]


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def create_project(
    profile: BusinessProfile,
    project_id: Optional[str] = None,
    now: Optional[str] = None,
) -> ProjectRecord:
    """Start a draft project for *profile* with default theme, layout and content."""
    timestamp = now or _now()
    layout = ProjectLayout()
    return ProjectRecord(
        id=project_id or str(uuid.uuid4()),
        created_at=timestamp,
        updated_at=timestamp,
        status="draft",
        profile=profile,
        theme=normalize_theme(None),
        layout=layout,
        sections=build_sections_from_layout_preset(layout.preset_id),
        content=create_from_profile(profile),
    )


def hydrate_project(project: ProjectRecord) -> ProjectRecord:
    """Fill every derivable field of a stored or edited record.

    The result has a known theme preset, a complete section list and fully
    populated content, whatever subset the input carried.
    """
    return project.model_copy(
        update={
            "theme": normalize_theme(project.theme),
            "sections": normalize_sections(project.layout, project.sections),
            "content": normalize_content(project.profile, project.content),
        }
    )


def review_project(project: ProjectRecord, reviewed_at: Optional[str] = None) -> ProjectReview:
    """Screen the copy that will ship, and report notes whose issue no longer exists."""
    content = normalize_content(project.profile, project.content)
    summary = scan(to_compliance_profile(project.profile, content), reviewed_at=reviewed_at)
    attached, orphaned = split_substantiation_notes(project.substantiation_notes, summary)
    if orphaned:
        logger.info("Project %s has %d orphaned substantiation note(s)", project.id, len(orphaned))
    return ProjectReview(summary, attached, orphaned)


def remote_images(profile: BusinessProfile) -> List[RenderableImage]:
    """Reference the profile's images by URL, without downloading them."""
    return [
        RenderableImage(src=image.url, alt=image.alt or f"{profile.name} photo {i}", hero=image.selected_hero)
        for i, image in enumerate(profile.images, start=1)
    ]


def render_project(
    project: ProjectRecord,
    options: Optional[SiteOptions] = None,
    reviewed_at: Optional[str] = None,
) -> Dict[str, str]:
    """Build the text file set for *project* with images referenced by URL."""
    project = hydrate_project(project)
    review = review_project(project, reviewed_at=reviewed_at)
    return build_site(project, review.summary, remote_images(project.profile), options)


async def generate_site(
    project: ProjectRecord,
    output_dir: Path,
    options: Optional[SiteOptions] = None,
    fetch: ImageFetcher = fetch_image,
) -> GeneratedSite:
    """Render *project* into ``output_dir/<slug>`` with its images downloaded.

    Raises ValueError when the profile slug is reserved or malformed.
    """
    slug_check = validate_site_slug(project.profile.slug)
    if not slug_check.ok:
        raise ValueError(f"Cannot publish to {project.profile.slug!r}: {slug_check.error}")

    project = hydrate_project(project)
    review = review_project(project)
    if review.summary.requires_user_review:
        logger.info(
            "Generating %s with %d unresolved compliance issue(s)", project.id, len(review.summary.issues)
        )

    materialized = await materialize_images(project.profile, fetch=fetch)
    files = build_site(project, review.summary, [item.image for item in materialized], options)

    slug = slug_check.slug
    site_dir = Path(output_dir) / slug
    written = write_site(files, materialized, site_dir)
    return GeneratedSite(site_dir, slug, [page.file for page in PAGES], written)

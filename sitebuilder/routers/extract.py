"""Profile extraction endpoints: from a live URL or from uploaded HTML."""

import logging

import httpx
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.util import get_remote_address

from sitebuilder.models.extract_request import ExtractHtmlRequest, ExtractRequest
from sitebuilder.models.extract_response import FALLBACK_SUGGESTIONS, ExtractResponse
from sitebuilder.services.extractor import parse_profile, parse_uploaded_profile
from sitebuilder.services.fetcher import fetch_url

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)
router = APIRouter()


def _failure(status_code: int, message: str) -> JSONResponse:
    body = ExtractResponse(ok=False, error=message, fallback_suggestions=FALLBACK_SUGGESTIONS)
    return JSONResponse(status_code=status_code, content=body.to_json_dict())


@router.post(
    "/extract",
    response_model=ExtractResponse,
    summary="Extract a business profile from a public profile page",
    description=(
        "Fetches the page and returns a draft BusinessProfile. On failure the "
        "response carries `fallbackSuggestions` (upload the HTML, or enter the "
        "details manually)."
    ),
)
@limiter.limit("5/minute")
async def extract_profile(request: Request, body: ExtractRequest) -> ExtractResponse | JSONResponse:
    url = str(body.url)
    logger.info("Extract request received", extra={"url": url})

    try:
        html = await fetch_url(url)
    except ValueError as exc:
        logger.warning("Invalid or blocked URL: %s – %s", url, exc)
        return _failure(400, str(exc))
    except httpx.TimeoutException:
        logger.error("Timeout fetching URL: %s", url)
        return _failure(504, "The profile page timed out.")
    except httpx.HTTPStatusError as exc:
        logger.error("HTTP error fetching URL %s: %s", url, exc)
        return _failure(502, f"Profile page returned HTTP {exc.response.status_code}.")
    except (httpx.RequestError, RuntimeError) as exc:
        logger.error("Error fetching URL %s: %s", url, exc)
        return _failure(502, str(exc))

    return ExtractResponse(ok=True, data=parse_profile(html, url, mode="auto"))


@router.post(
    "/extract-html",
    response_model=ExtractResponse,
    summary="Extract a business profile from uploaded HTML",
)
@limiter.limit("20/minute")
async def extract_profile_html(request: Request, body: ExtractHtmlRequest) -> ExtractResponse:
    logger.info("Extract-html request received", extra={"source_url": body.source_url, "size": len(body.html)})
    return ExtractResponse(ok=True, data=parse_uploaded_profile(body.html, body.source_url))

"""Slug and hours helpers used by manual entry, extraction and publishing."""

import re
import unicodedata
from typing import Dict, NamedTuple, Optional

_FALLBACK_SLUG = "business-profile"

# Slugs that collide with routes of the hosting application
RESERVED_SITE_SLUGS = frozenset(
    {"admin", "api", "site", "assets", "favicon", "robots.txt", "sitemap.xml"}
)

_VALID_SLUG_RE = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


class SlugValidation(NamedTuple):
    ok: bool
    slug: str
    error: Optional[str] = None


def create_slug(value: str) -> str:
    """Return a lowercase, ASCII-only, hyphen-separated slug for *value*.

    The transform is stable: ``create_slug(create_slug(x)) == create_slug(x)``.
    """
    slug = unicodedata.normalize("NFKD", value or "")
    slug = slug.encode("ascii", "ignore").decode("ascii")
    slug = re.sub(r"[^a-z0-9\s-]", "", slug.lower().strip())
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug).strip("-")
    return slug or _FALLBACK_SLUG


def validate_site_slug(raw_slug: str) -> SlugValidation:
    """Normalise *raw_slug* and check it can be used as a public site path."""
    if not (raw_slug or "").strip():
        return SlugValidation(False, "", "Slug is required.")
    slug = create_slug(raw_slug)
    if slug in RESERVED_SITE_SLUGS:
        return SlugValidation(False, slug, "This slug is reserved and cannot be used.")
    if not _VALID_SLUG_RE.match(slug):
        return SlugValidation(False, slug, "Use lowercase letters, numbers, and dashes only.")
    return SlugValidation(True, slug)


def hours_to_text(hours: Dict[str, str]) -> str:
    return "\n".join(f"{day}: {value}" for day, value in hours.items())


def text_to_hours(text: str) -> Dict[str, str]:
    """Parse ``Day: hours`` lines; lines without a colon are skipped."""
    hours: Dict[str, str] = {}
    for line in (text or "").splitlines():
        line = line.strip()
        if not line:
            continue
        day, sep, rest = line.partition(":")
        if not sep or not day.strip():
            continue
        hours[day.strip()] = rest.strip()
    return hours

"""Download profile images into the site tree and write the site to disk."""

import logging
import re
from pathlib import Path
from typing import Awaitable, Callable, Dict, List, Mapping, NamedTuple, Sequence

import httpx

from sitebuilder.models.profile import BusinessProfile
from sitebuilder.services.fetcher import FetchedBody, fetch_image
from sitebuilder.services.renderer import RenderableImage

logger = logging.getLogger(__name__)

IMAGE_DIR = "assets/images"

_EXTENSION_RE = re.compile(r"\.(png|jpe?g|gif|webp|svg)(?:$|\?)", re.IGNORECASE)
_MIME_EXTENSIONS = {"jpeg": "jpg", "png": "png", "gif": "gif", "webp": "webp", "svg": "svg"}

ImageFetcher = Callable[[str], Awaitable[FetchedBody]]


class MaterializedImage(NamedTuple):
    path: str  # relative to the site root
    data: bytes
    image: RenderableImage


def image_extension(url: str, content_type: str = "") -> str:
    """Extension from the URL, else from the content type, else ``jpg``."""
    match = _EXTENSION_RE.search(url)
    if match:
        return match.group(1).lower().replace("jpeg", "jpg")
    for marker, extension in _MIME_EXTENSIONS.items():
        if marker in content_type.lower():
            return extension
    return "jpg"


async def materialize_images(
    profile: BusinessProfile, fetch: ImageFetcher = fetch_image
) -> List[MaterializedImage]:
    """Download the profile's images one at a time.

    An image that cannot be fetched is logged and skipped; the remaining
    images keep their ``photo-N`` index from the profile list.  When the
    flagged hero is among the skipped ones, the first kept image becomes
    the hero.
    """
    collected: List[MaterializedImage] = []
    for index, asset in enumerate(profile.images, start=1):
        try:
            fetched = await fetch(asset.url)
        except (ValueError, httpx.HTTPError, RuntimeError) as exc:
            logger.warning("Skipping image %s: %s", asset.url, exc)
            continue

        path = f"{IMAGE_DIR}/photo-{index}.{image_extension(asset.url, fetched.content_type)}"
        image = RenderableImage(
            src=path,
            alt=asset.alt or f"{profile.name} photo {index}",
            hero=asset.selected_hero,
        )
        collected.append(MaterializedImage(path, fetched.body, image))

    if collected and not any(item.image.hero for item in collected):
        first = collected[0]
        collected[0] = first._replace(image=first.image._replace(hero=True))

    logger.info("Materialized %d of %d images for %s", len(collected), len(profile.images), profile.slug)
    return collected


def write_site(
    files: Mapping[str, str],
    images: Sequence[MaterializedImage],
    output_dir: Path,
) -> List[Path]:
    """Write the text file set and image bytes under *output_dir*.

    Raises:
        ValueError: if a relative path would escape *output_dir*.
    """
    root = Path(output_dir).resolve()
    written: List[Path] = []

    binary: Dict[str, bytes] = {item.path: item.data for item in images}
    for relative, payload in [*files.items(), *binary.items()]:
        target = (root / relative).resolve()
        if root not in target.parents:
            raise ValueError(f"Refusing to write outside the site directory: {relative}")
        target.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(payload, bytes):
            target.write_bytes(payload)
        else:
            target.write_text(payload, encoding="utf-8")
        written.append(target)

    logger.info("Wrote %d files to %s", len(written), root)
    return written

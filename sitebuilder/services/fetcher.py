"""SSRF-guarded HTTP retrieval of profile pages and profile images."""

import ipaddress
import logging
import socket
from typing import NamedTuple
from urllib.parse import urljoin, urlparse

import httpx

logger = logging.getLogger(__name__)

MAX_CONTENT_SIZE = 10 * 1024 * 1024  # 10 MB
MAX_IMAGE_SIZE = 8 * 1024 * 1024  # 8 MB
TIMEOUT = 10  # seconds
MAX_REDIRECTS = 10
ALLOWED_SCHEMES = {"http", "https"}
USER_AGENT = "Mozilla/5.0 (compatible; ProfileSiteBuilder/1.0)"


class FetchedBody(NamedTuple):
    url: str
    content_type: str
    body: bytes


def _is_private_address(hostname: str) -> bool:
    """Return True if *hostname* resolves to a private, loopback, or link-local address."""
    try:
        infos = socket.getaddrinfo(hostname, None)
    except socket.gaierror:
        return False

    for info in infos:
        # Strip IPv6 zone IDs (e.g. "fe80::1%eth0")
        raw_ip = info[4][0].split("%")[0]
        try:
            addr = ipaddress.ip_address(raw_ip)
        except ValueError:
            continue
        if addr.is_private or addr.is_loopback or addr.is_link_local or addr.is_reserved:
            return True
    return False


def _validate_url(url: str) -> None:
    """Raise ValueError if *url* fails SSRF / scheme validation."""
    parsed = urlparse(url)

    if parsed.scheme not in ALLOWED_SCHEMES:
        raise ValueError(f"Scheme '{parsed.scheme}' is not allowed. Use http or https.")

    hostname = parsed.hostname
    if not hostname:
        raise ValueError("URL must have a valid hostname.")

    if _is_private_address(hostname):
        raise ValueError("Requests to private/internal addresses are not allowed.")


async def _fetch(url: str, max_size: int) -> FetchedBody:
    """GET *url*, validating every redirect hop and capping the body at *max_size* bytes."""
    _validate_url(url)

    current_url = url
    async with httpx.AsyncClient(
        follow_redirects=False, timeout=TIMEOUT, headers={"user-agent": USER_AGENT}
    ) as client:
        for _ in range(MAX_REDIRECTS + 1):
            async with client.stream("GET", current_url) as response:
                if response.is_redirect:
                    next_url = urljoin(current_url, response.headers.get("location", ""))
                    _validate_url(next_url)
                    current_url = next_url
                    continue

                response.raise_for_status()

                content_length = response.headers.get("content-length")
                if content_length and int(content_length) > max_size:
                    raise RuntimeError("Response body exceeds the maximum allowed size.")

                chunks = []
                total = 0
                async for chunk in response.aiter_bytes():
                    total += len(chunk)
                    if total > max_size:
                        raise RuntimeError("Response body exceeds the maximum allowed size.")
                    chunks.append(chunk)

                return FetchedBody(
                    url=current_url,
                    content_type=response.headers.get("content-type", ""),
                    body=b"".join(chunks),
                )

    raise RuntimeError("Too many redirects.")


async def fetch_url(url: str) -> str:
    """Fetch the page at *url* and return its body as text.

    Raises:
        ValueError: if the URL fails SSRF / scheme validation.
        httpx.HTTPError: on network or HTTP errors.
        RuntimeError: if the body is too large or redirects do not settle.
    """
    fetched = await _fetch(url, MAX_CONTENT_SIZE)
    logger.info("Fetched %s (%d bytes)", fetched.url, len(fetched.body))
    return fetched.body.decode(errors="replace")


async def fetch_image(url: str) -> FetchedBody:
    """Fetch an image; same errors as :func:`fetch_url`, plus ValueError for non-image bodies."""
    fetched = await _fetch(url, MAX_IMAGE_SIZE)
    if not fetched.content_type.lower().startswith("image/"):
        raise ValueError(f"Expected an image but got '{fetched.content_type or 'unknown'}'.")
    return fetched

"""Tests for sitebuilder.services.fetcher URL validation and image checks."""

import asyncio
from unittest.mock import AsyncMock, patch

import pytest

from sitebuilder.services.fetcher import FetchedBody, _validate_url, fetch_image, fetch_url


class TestValidateUrl:
    @pytest.mark.parametrize("url", ["ftp://example.com/file", "file:///etc/passwd", "javascript:alert(1)"])
    def test_rejects_other_schemes(self, url):
        with pytest.raises(ValueError):
            _validate_url(url)

    def test_rejects_missing_hostname(self):
        with pytest.raises(ValueError):
            _validate_url("http:///path")

    @pytest.mark.parametrize("url", ["http://127.0.0.1/", "http://10.0.0.5/admin", "http://[::1]/"])
    def test_rejects_private_addresses(self, url):
        with pytest.raises(ValueError):
            _validate_url(url)


class TestFetchImage:
    def test_rejects_non_image_content(self):
        body = FetchedBody("https://x.test/a.jpg", "text/html; charset=utf-8", b"<html></html>")
        with patch("sitebuilder.services.fetcher._fetch", new=AsyncMock(return_value=body)):
            with pytest.raises(ValueError):
                asyncio.run(fetch_image("https://x.test/a.jpg"))

    def test_returns_image_body(self):
        body = FetchedBody("https://x.test/a.png", "image/png", b"\x89PNG")
        with patch("sitebuilder.services.fetcher._fetch", new=AsyncMock(return_value=body)):
            assert asyncio.run(fetch_image("https://x.test/a.png")) == body


class TestFetchUrl:
    def test_decodes_body(self):
        body = FetchedBody("https://x.test/", "text/html", "<h1>Café</h1>".encode())
        with patch("sitebuilder.services.fetcher._fetch", new=AsyncMock(return_value=body)):
            assert asyncio.run(fetch_url("https://x.test/")) == "<h1>Café</h1>"

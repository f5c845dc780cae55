"""Tests for sitebuilder.services.normalizer."""

import pytest

from sitebuilder.services.normalizer import create_slug, hours_to_text, text_to_hours, validate_site_slug


class TestCreateSlug:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("My New Business", "my-new-business"),
            ("  Café & Bakery  ", "cafe-bakery"),
            ("A -- B", "a-b"),
            ("Joe's #1 Plumbing!", "joes-1-plumbing"),
        ],
    )
    def test_slugifies(self, value, expected):
        assert create_slug(value) == expected

    def test_empty_input_falls_back(self):
        assert create_slug("") == "business-profile"
        assert create_slug("!!!") == "business-profile"

    def test_stable(self):
        slug = create_slug("Ünïcode Štuff Co.")
        assert create_slug(slug) == slug


class TestValidateSiteSlug:
    def test_reserved_slug_rejected(self):
        result = validate_site_slug("admin")
        assert result.ok is False
        assert "reserved" in result.error

    def test_valid_slug_normalized(self):
        result = validate_site_slug("My New Business")
        assert result.ok is True
        assert result.slug == "my-new-business"
        assert result.error is None

    def test_blank_slug_required(self):
        result = validate_site_slug("   ")
        assert result.ok is False
        assert result.error == "Slug is required."


class TestHoursText:
    def test_round_trip(self):
        hours = {"Monday": "9:00 AM - 5:00 PM", "Saturday": "Closed"}
        assert text_to_hours(hours_to_text(hours)) == hours

    def test_lines_without_colon_skipped(self):
        assert text_to_hours("Monday: 9-5\nby appointment\n\nTue: 10-4") == {"Monday": "9-5", "Tue": "10-4"}

"""Tests for sitebuilder.services.extractor."""

from sitebuilder.services.extractor import (
    FALLBACK_DESCRIPTION,
    FALLBACK_NAME,
    MAX_LIST_ITEMS,
    parse_profile,
    parse_uploaded_profile,
)

SOURCE_URL = "https://www.example.com/profile/acme"

# ---------------------------------------------------------------------------
# Shared HTML fixtures
# ---------------------------------------------------------------------------

_PROFILE_HTML = """
<!DOCTYPE html>
<html>
<head>
  <title>Acme Roofing | Profile</title>
  <meta name="description" content="Family-owned roofing contractor serving Central Texas.">
  <meta property="og:image" content="https://cdn.example.com/og.jpg">
</head>
<body>
  <img src="/img/logo.png" alt="Acme Roofing logo">
  <h1>Acme Roofing</h1>
  <section>
    <h2>Business Categories</h2>
    <ul><li>Roofing Contractors</li><li>Gutters</li><li>roofing contractors</li></ul>
  </section>
  <section>
    <h2>Products and Services</h2>
    <p>Roof Repair, Roof Replacement; Gutter Installation</p>
  </section>
  <div class="details">
    <p><strong>Service Area:</strong> Austin, Round Rock, Cedar Park</p>
  </div>
  <a href="tel:+15125550100">Call</a>
  <a href="mailto:info@acme.example">Email</a>
  <a href="https://acme.example/">Website</a>
  <address>100 Main St, Austin, TX</address>
  <table>
    <tr><th>Monday</th><td>8:00 AM - 5:00 PM</td></tr>
    <tr><th>Sat</th><td>Closed</td></tr>
    <tr><td>Holiday</td><td>Varies</td></tr>
  </table>
  <img src="/img/roof.jpg" alt="New roof">
  <img data-src="https://cdn.example.com/crew.jpg">
  <img src="data:image/png;base64,AAAA">
  <h3>Do you offer free estimates?</h3>
  <p>Yes, estimates are available on request.</p>
  <h3>Our warranty</h3>
  <p>Ten years on workmanship.</p>
</body>
</html>
"""

_CATEGORIES_ONLY_HTML = """
<html><body>
  <h1>Bob's Plumbing</h1>
  <h2>Business Categories</h2>
  <ul><li>Plumbing</li><li>Water Heaters</li></ul>
</body></html>
"""


class TestParseProfile:
    def setup_method(self):
        self.profile = parse_profile(_PROFILE_HTML, SOURCE_URL)

    def test_name_and_slug(self):
        assert self.profile.name == "Acme Roofing"
        assert self.profile.slug == "acme-roofing"

    def test_description_from_meta(self):
        assert self.profile.description == "Family-owned roofing contractor serving Central Texas."
        assert self.profile.about == self.profile.description

    def test_categories_from_following_list(self):
        assert self.profile.types_of_business == ["Roofing Contractors", "Gutters"]

    def test_products_from_delimited_paragraph(self):
        assert self.profile.products_and_services == ["Roof Repair", "Roof Replacement", "Gutter Installation"]

    def test_service_areas_from_inline_label(self):
        assert self.profile.service_areas == ["Austin", "Round Rock", "Cedar Park"]

    def test_contact(self):
        contact = self.profile.contact
        assert contact.phone == "+15125550100"
        assert contact.email == "info@acme.example"
        assert contact.website == "https://acme.example/"
        assert contact.address == "100 Main St, Austin, TX"

    def test_hours_only_from_day_rows(self):
        assert self.profile.hours == {"Monday": "8:00 AM - 5:00 PM", "Sat": "Closed"}

    def test_images_resolved_deduplicated_and_http_only(self):
        urls = [image.url for image in self.profile.images]
        assert urls == [
            "https://cdn.example.com/og.jpg",
            "https://www.example.com/img/logo.png",
            "https://www.example.com/img/roof.jpg",
            "https://cdn.example.com/crew.jpg",
        ]
        assert [image.selected_hero for image in self.profile.images] == [True, False, False, False]
        assert all(image.source == "extracted" for image in self.profile.images)

    def test_image_alt_fallback(self):
        assert self.profile.images[3].alt == "Business image"
        assert self.profile.images[2].alt == "New roof"

    def test_logo(self):
        assert self.profile.logo_url == "https://www.example.com/img/logo.png"

    def test_faqs_only_question_headings(self):
        assert [faq.question for faq in self.profile.faqs] == ["Do you offer free estimates?"]
        assert self.profile.faqs[0].answer == "Yes, estimates are available on request."
        assert self.profile.quick_answers == self.profile.faqs

    def test_mode_and_source(self):
        assert self.profile.mode == "auto"
        assert self.profile.source_url == SOURCE_URL


class TestFieldIsolation:
    def test_categories_section_does_not_leak_into_other_fields(self):
        profile = parse_profile(_CATEGORIES_ONLY_HTML, SOURCE_URL)
        assert profile.types_of_business == ["Plumbing", "Water Heaters"]
        assert profile.products_and_services == []
        assert profile.service_areas == []

    def test_label_inside_longer_heading_does_not_match(self):
        html = "<h2>Our Service Area Policy</h2><ul><li>Austin</li></ul>"
        assert parse_profile(html, SOURCE_URL).service_areas == []

    def test_tokens_equal_to_a_label_are_excluded(self):
        html = "<h2>Categories</h2><ul><li>Categories</li><li>Plumbing</li></ul>"
        assert parse_profile(html, SOURCE_URL).types_of_business == ["Plumbing"]

    def test_empty_definition_does_not_take_next_definition(self):
        html = "<dl><dt>Business Categories</dt><dd></dd><dt>Service Area</dt><dd>Austin, Dallas</dd></dl>"
        profile = parse_profile(html, SOURCE_URL)
        assert profile.types_of_business == []
        assert profile.service_areas == ["Austin", "Dallas"]

    def test_empty_heading_section_does_not_take_sibling_section(self):
        html = """
        <main>
          <h2>Service Areas</h2>
          <h2>Products and Services</h2>
          <ul><li>Roof Repair</li><li>Gutters</li></ul>
          <a href="tel:+1555">Call us</a>
        </main>
        """
        profile = parse_profile(html, SOURCE_URL)
        assert profile.service_areas == []
        assert profile.products_and_services == ["Roof Repair", "Gutters"]

    def test_label_wrapped_in_paragraph_reads_following_links(self):
        html = '<div class="areas"><p><span>Areas Served</span></p><a href="/a">Austin</a><a href="/d">Dallas</a></div>'
        assert parse_profile(html, SOURCE_URL).service_areas == ["Austin", "Dallas"]


class TestLabelScopes:
    def test_definition_list(self):
        html = """
        <dl>
          <dt>Service Areas</dt><dd>Austin</dd><dd>Dallas, Plano</dd>
          <dt>Founded</dt><dd>1999</dd>
        </dl>
        """
        assert parse_profile(html, SOURCE_URL).service_areas == ["Austin", "Dallas", "Plano"]

    def test_sibling_run_stops_at_next_heading(self):
        html = """
        <div>
          <h3>Services Offered</h3>
          <a href="/s/1">Drain Cleaning</a>
          <a href="/s/2">Leak Detection</a>
          <h3>About</h3>
          <p>We have been in business for decades.</p>
        </div>
        """
        assert parse_profile(html, SOURCE_URL).products_and_services == ["Drain Cleaning", "Leak Detection"]

    def test_list_capped(self):
        items = "".join(f"<li>City {i}</li>" for i in range(30))
        html = f"<h2>Areas Served</h2><ul>{items}</ul>"
        areas = parse_profile(html, SOURCE_URL).service_areas
        assert len(areas) == MAX_LIST_ITEMS
        assert areas[0] == "City 0"


class TestFallbacks:
    def test_empty_document(self):
        profile = parse_profile("", SOURCE_URL)
        assert profile.name == FALLBACK_NAME
        assert profile.description == FALLBACK_DESCRIPTION
        assert profile.contact.website == SOURCE_URL
        assert profile.images == []
        assert profile.hours == {}
        assert profile.logo_url is None

    def test_title_used_when_no_heading(self):
        html = "<html><head><title>Only Title</title></head><body></body></html>"
        assert parse_profile(html, SOURCE_URL).name == "Only Title"

    def test_faq_without_answer_block_skipped(self):
        html = "<h2>Do you deliver?</h2><ul><li>Yes</li></ul>"
        assert parse_profile(html, SOURCE_URL).faqs == []


class TestParseUploadedProfile:
    def test_sets_upload_mode(self):
        profile = parse_uploaded_profile(_CATEGORIES_ONLY_HTML, SOURCE_URL)
        assert profile.mode == "upload_html"
        assert profile.name == "Bob's Plumbing"

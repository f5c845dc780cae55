"""Tests for sitebuilder.services.renderer."""

from sitebuilder.models.profile import BusinessProfile
from sitebuilder.models.theme import ProjectSection
from sitebuilder.services.content import create_from_profile, normalize_content
from sitebuilder.services.layouts import build_sections_from_layout_preset
from sitebuilder.services.renderer import PLACEHOLDER_IMAGE, RenderableImage, pick_hero, render_pages


def _profile(**fields):
    defaults = dict(name="Acme Roofing", products_and_services=["Roof Repair"], description="Roofing in Austin.")
    defaults.update(fields)
    return BusinessProfile(**defaults)


def _render(profile, sections=None, images=(), content=None):
    content = content or create_from_profile(profile)
    sections = sections if sections is not None else build_sections_from_layout_preset("local-service-classic")
    return render_pages(profile, content, sections, list(images))


class TestPickHero:
    def test_flagged_image_wins(self):
        images = [RenderableImage("a.jpg", "A"), RenderableImage("b.jpg", "B", True)]
        assert pick_hero(images, "Acme").src == "b.jpg"

    def test_first_image_when_none_flagged(self):
        assert pick_hero([RenderableImage("a.jpg", "A")], "Acme").src == "a.jpg"

    def test_placeholder_when_no_images(self):
        hero = pick_hero([], "Acme")
        assert hero.src == PLACEHOLDER_IMAGE
        assert hero.alt == "Acme placeholder image"


class TestHomePage:
    def test_zero_images_renders_placeholder_hero_and_no_gallery(self):
        pages = _render(_profile())
        assert PLACEHOLDER_IMAGE in pages.home
        assert "<h2>Gallery</h2>" not in pages.home

    def test_disabled_sections_omitted(self):
        sections = [ProjectSection(id="hero", enabled=True), ProjectSection(id="about", enabled=False)]
        pages = _render(_profile(), sections=sections)
        assert "panel hero" in pages.home
        assert "About Acme Roofing" not in pages.home

    def test_unknown_section_renders_nothing(self):
        sections = [ProjectSection(id="testimonials", enabled=True)]
        assert _render(_profile(), sections=sections).home == ""

    def test_section_order_followed(self):
        sections = [ProjectSection(id="contact", enabled=True), ProjectSection(id="hero", enabled=True)]
        home = _render(_profile(), sections=sections).home
        assert home.index("<h2>Contact</h2>") < home.index("panel hero")

    def test_edited_headline_shown(self):
        profile = _profile()
        content = normalize_content(profile, {"heroHeadline": "Roofs done right"})
        assert "Roofs done right" in _render(profile, content=content).home

    def test_gallery_uses_images(self):
        images = [RenderableImage(f"assets/images/photo-{i}.jpg", f"Photo {i}") for i in range(1, 9)]
        home = _render(_profile(), images=images).home
        assert "photo-6.jpg" in home
        assert "photo-7.jpg" not in home


class TestEscaping:
    def test_user_text_is_escaped(self):
        profile = _profile(name="Bob's <Roofing> & Co", description='"Quoted" <script>alert(1)</script>')
        pages = _render(profile)
        for body in pages:
            assert "<script>" not in body
        assert "Bob&#x27;s &lt;Roofing&gt; &amp; Co" in pages.about

    def test_image_attributes_escaped(self):
        images = [RenderableImage('x.jpg" onerror="alert(1)', "alt")]
        home = _render(_profile(), images=images).home
        assert 'onerror="alert(1)"' not in home


class TestOtherPages:
    def test_services_page_lists_all_services(self):
        names = [f"Service {i}" for i in range(8)]
        pages = _render(_profile(products_and_services=names))
        assert all(name in pages.services for name in names)

    def test_services_page_placeholder(self):
        assert "Services available upon request." in _render(_profile(products_and_services=[])).services

    def test_contact_page_placeholders(self):
        contact = _render(_profile()).contact
        assert "Available on request" in contact
        assert "Hours available on request." in contact

    def test_privacy_page_reflects_opt_in(self):
        off = _render(_profile()).privacy
        on = _render(_profile(privacy_tracker_opt_in=True, privacy_notes="We never sell data.")).privacy
        assert "not enabled by default" in off
        assert "enabled only after user choice" in on
        assert "We never sell data." in on
        assert "[Insert business address]" in off

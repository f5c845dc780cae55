"""Render page bodies from the content model.

Only the home page follows the project's section list; the other pages have
a fixed structure.  Every piece of user-supplied text is HTML-escaped.
"""

from html import escape
from typing import Callable, Dict, List, NamedTuple, Optional, Sequence

from sitebuilder.models.content import GeneratedContent, GeneratedService
from sitebuilder.models.profile import FAQ, BusinessProfile
from sitebuilder.models.theme import ProjectSection
from sitebuilder.services.privacy import render_privacy_policy

PLACEHOLDER_IMAGE = "assets/images/placeholder.svg"
MAX_HOME_SERVICES = 6
MAX_GALLERY_IMAGES = 6

_ON_REQUEST = "Available on request"


class RenderableImage(NamedTuple):
    src: str
    alt: str
    hero: bool = False


class RenderedPages(NamedTuple):
    home: str
    services: str
    about: str
    contact: str
    privacy: str


class _RenderInput(NamedTuple):
    profile: BusinessProfile
    content: GeneratedContent
    images: List[RenderableImage]


def pick_hero(images: Sequence[RenderableImage], name: str) -> RenderableImage:
    """Flagged image, else the first image, else the placeholder."""
    for image in images:
        if image.hero:
            return image
    if images:
        return images[0]
    return RenderableImage(PLACEHOLDER_IMAGE, f"{name} placeholder image", True)


def _service_cards(services: Sequence[GeneratedService]) -> str:
    return "".join(
        f'<article class="card"><h3>{escape(service.name)}</h3>'
        f'<p>{escape(service.description or "Request a tailored quote for this service.")}</p></article>'
        for service in services
    )


def _hours_table(hours: Dict[str, str]) -> str:
    if not hours:
        return "<p>Hours available on request.</p>"
    rows = "".join(
        f'<tr><th scope="row">{escape(day)}</th><td>{escape(value)}</td></tr>' for day, value in hours.items()
    )
    return f'<table><thead><tr><th scope="col">Day</th><th scope="col">Hours</th></tr></thead><tbody>{rows}</tbody></table>'


def _contact_list(content: GeneratedContent) -> str:
    contact = content.contact
    website = (
        f'<a href="{escape(contact.website)}">{escape(contact.website)}</a>' if contact.website else _ON_REQUEST
    )
    return (
        "<ul>"
        f"<li><strong>Phone:</strong> {escape(contact.phone or _ON_REQUEST)}</li>"
        f"<li><strong>Email:</strong> {escape(contact.email or _ON_REQUEST)}</li>"
        f"<li><strong>Website:</strong> {website}</li>"
        f"<li><strong>Address:</strong> {escape(contact.address or _ON_REQUEST)}</li>"
        "</ul>"
    )


def _question_grid(items: Sequence[FAQ], css_class: str, item_class: Optional[str] = None) -> str:
    attr = f' class="{item_class}"' if item_class else ""
    cards = "\n".join(
        f"<article{attr}><h3>{escape(item.question)}</h3><p>{escape(item.answer)}</p></article>" for item in items
    )
    return f'<div class="{css_class}">{cards}</div>'


def _about_section(data: _RenderInput) -> str:
    text = data.content.about_text or data.content.meta_description
    return f'<section class="panel"><h2>About {escape(data.profile.name)}</h2><p>{escape(text)}</p></section>'


def _contact_section(data: _RenderInput) -> str:
    return f'<section class="panel"><h2>Contact</h2>{_contact_list(data.content)}</section>'


# ---------------------------------------------------------------------------
# Home page sections
# ---------------------------------------------------------------------------

def _hero(data: _RenderInput) -> str:
    content = data.content
    hero = pick_hero(data.images, data.profile.name)
    return (
        '<section class="panel hero">'
        "<article>"
        f"<h2>{escape(content.hero_headline or data.profile.name)}</h2>"
        f"<p>{escape(content.hero_subheadline or content.meta_description)}</p>"
        f'<p><a class="button" href="contact.html">{escape(content.hero_cta_text or "Contact Us")}</a></p>'
        "</article>"
        f'<figure><img src="{escape(hero.src)}" alt="{escape(hero.alt)}" class="hero-image" /></figure>'
        "</section>"
    )


def _quick_answers(data: _RenderInput) -> str:
    if not data.content.quick_answers:
        return ""
    return (
        '<section class="panel quick-answers" aria-labelledby="quick-answers-heading">'
        '<h2 id="quick-answers-heading">Quick answers</h2>'
        f"{_question_grid(data.content.quick_answers, 'quick-grid')}"
        "</section>"
    )


def _services(data: _RenderInput) -> str:
    cards = _service_cards(data.content.services[:MAX_HOME_SERVICES])
    return f'<section class="panel"><h2>Products and Services</h2><div class="card-grid">{cards}</div></section>'


def _service_areas(data: _RenderInput) -> str:
    areas = ", ".join(data.content.contact.service_areas) or "Contact us to confirm service coverage."
    return f'<section class="panel"><h2>Service Areas</h2><p>{escape(areas)}</p></section>'


def _faq(data: _RenderInput) -> str:
    if not data.content.faqs:
        return ""
    return (
        '<section class="panel" aria-labelledby="faq-heading">'
        '<h2 id="faq-heading">Frequently asked questions</h2>'
        f"{_question_grid(data.content.faqs, 'faq-grid', 'faq-item')}"
        "</section>"
    )


def _hours(data: _RenderInput) -> str:
    return f'<section class="panel"><h2>Business Hours</h2>{_hours_table(data.content.contact.hours)}</section>'


def _gallery(data: _RenderInput) -> str:
    images = data.images[:MAX_GALLERY_IMAGES]
    if not images:
        return ""
    figures = "\n".join(
        f'<figure class="card"><img src="{escape(image.src)}" alt="{escape(image.alt)}" class="hero-image" /></figure>'
        for image in images
    )
    return f'<section class="panel"><h2>Gallery</h2><div class="card-grid">{figures}</div></section>'


SECTION_RENDERERS: Dict[str, Callable[[_RenderInput], str]] = {
    "hero": _hero,
    "quick_answers": _quick_answers,
    "services": _services,
    "about": _about_section,
    "service_areas": _service_areas,
    "faq": _faq,
    "hours": _hours,
    "contact": _contact_section,
    "gallery": _gallery,
}


def render_section(section_id: str, data: _RenderInput) -> str:
    renderer = SECTION_RENDERERS.get(section_id)
    return renderer(data) if renderer else ""


# ---------------------------------------------------------------------------
# Pages
# ---------------------------------------------------------------------------

def render_pages(
    profile: BusinessProfile,
    content: GeneratedContent,
    sections: Sequence[ProjectSection],
    images: Sequence[RenderableImage],
) -> RenderedPages:
    """Render the five page bodies.

    The home page is the enabled sections in list order; sections that
    render nothing (no FAQs, no images) are left out.
    """
    data = _RenderInput(profile, content, list(images))

    rendered = (render_section(section.id, data) for section in sections if section.enabled)
    home = "\n".join(markup for markup in rendered if markup)

    service_cards = _service_cards(content.services) or "<p>Services available upon request.</p>"
    services = f'<section class="panel"><h2>Our Services</h2><div class="card-grid">{service_cards}</div></section>'

    areas = ", ".join(content.contact.service_areas) or "Contact us to confirm service area coverage."
    contact = (
        f"{_contact_section(data)}"
        f'<section class="panel"><h2>Hours</h2>{_hours_table(content.contact.hours)}</section>'
        f'<section class="panel"><h2>Service Areas</h2><p>{escape(areas)}</p></section>'
    )

    privacy = render_privacy_policy(
        profile.name,
        content.contact,
        analytics_enabled=profile.privacy_tracker_opt_in,
        notes=profile.privacy_notes,
    )

    return RenderedPages(
        home=home,
        services=services,
        about=_about_section(data),
        contact=contact,
        privacy=privacy,
    )

"""Assemble the complete static site file set for a project.

:func:`build_site` is a pure function: it returns ``{relative path: text}``
and never touches the filesystem or the network.  Images are passed in
already materialized (see :mod:`sitebuilder.services.publisher`).
"""

import json
import logging
from html import escape
from typing import Dict, List, NamedTuple, Optional, Sequence

from sitebuilder.models.compliance import ComplianceSummary
from sitebuilder.models.content import GeneratedContent
from sitebuilder.models.profile import FAQ, BusinessProfile
from sitebuilder.models.project import ProjectRecord
from sitebuilder.models.site import SiteOptions
from sitebuilder.services.content import normalize_content
from sitebuilder.services.layouts import normalize_sections
from sitebuilder.services.normalizer import create_slug
from sitebuilder.services.renderer import PLACEHOLDER_IMAGE, RenderableImage, pick_hero, render_pages
from sitebuilder.services.themes import button_radius, resolve_theme, theme_vars_to_css

logger = logging.getLogger(__name__)

META_DESCRIPTION_LIMIT = 160
OG_DESCRIPTION_LIMIT = 200
LLMS_SUMMARY_LIMIT = 300

PLACEHOLDER_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 1200 700" role="img" aria-label="Placeholder">'
    '<defs><linearGradient id="g" x1="0" y1="0" x2="1" y2="1"><stop offset="0" stop-color="#dbeafe"/>'
    '<stop offset="1" stop-color="#ecfeff"/></linearGradient></defs>'
    '<rect width="1200" height="700" fill="url(#g)"/>'
    '<text x="50%" y="50%" text-anchor="middle" dominant-baseline="middle" '
    'font-family="Segoe UI, sans-serif" font-size="48" fill="#0f172a">Business Photo Placeholder</text></svg>'
)


class Page(NamedTuple):
    name: str
    file: str


PAGES: List[Page] = [
    Page("Home", "index.html"),
    Page("Products and Services", "services.html"),
    Page("About", "about.html"),
    Page("Contact", "contact.html"),
    Page("Privacy", "privacy.html"),
]


def truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return f"{text[: limit - 3].strip()}..."


def site_base_url(profile: BusinessProfile, content: GeneratedContent) -> str:
    """Absolute URL the site will be served from, without a trailing slash."""
    base = content.contact.website or profile.contact.website or f"https://example.com/{create_slug(profile.slug or profile.name)}"
    return base.rstrip("/")


# ---------------------------------------------------------------------------
# Page shell
# ---------------------------------------------------------------------------

def _json_ld(block: dict) -> str:
    # "</" inside a script element would close it early
    payload = json.dumps(block, ensure_ascii=False).replace("</", "<\\/")
    return f'<script type="application/ld+json">{payload}</script>'


def structured_data(
    profile: BusinessProfile,
    content: GeneratedContent,
    base_url: str,
    page: Page,
    faqs: Sequence[FAQ],
) -> List[dict]:
    """Schema.org blocks for one page: LocalBusiness, WebSite, BreadcrumbList and FAQPage."""
    contact = content.contact
    local_business = {
        "@context": "https://schema.org",
        "@type": "LocalBusiness",
        "name": profile.name,
        "description": content.meta_description,
        "url": base_url,
        "telephone": contact.phone or None,
        "email": contact.email or None,
        "address": contact.address or None,
        "areaServed": list(contact.service_areas),
    }
    blocks = [
        {key: value for key, value in local_business.items() if value is not None},
        {"@context": "https://schema.org", "@type": "WebSite", "name": profile.name, "url": base_url},
        {
            "@context": "https://schema.org",
            "@type": "BreadcrumbList",
            "itemListElement": [
                {"@type": "ListItem", "position": 1, "name": "Home", "item": f"{base_url}/index.html"},
                {"@type": "ListItem", "position": 2, "name": page.name, "item": f"{base_url}/{page.file}"},
            ],
        },
    ]
    if faqs:
        blocks.append(
            {
                "@context": "https://schema.org",
                "@type": "FAQPage",
                "mainEntity": [
                    {
                        "@type": "Question",
                        "name": faq.question,
                        "acceptedAnswer": {"@type": "Answer", "text": faq.answer},
                    }
                    for faq in faqs
                ],
            }
        )
    return blocks


def _nav() -> str:
    return "\n".join(f'<a href="{page.file}" class="nav-link">{escape(page.name)}</a>' for page in PAGES)


def render_layout(
    profile: BusinessProfile,
    content: GeneratedContent,
    page: Page,
    body: str,
    og_image: str,
    year: int,
    faqs: Sequence[FAQ] = (),
) -> str:
    """Wrap a page body in the shared document shell.

    *faqs* are the questions shown on this page; they become its FAQPage block.
    """
    base_url = site_base_url(profile, content)
    canonical = f"{base_url}/{page.file}"
    title = content.site_title if page.file == "index.html" else f"{profile.name} | {page.name}"
    description = content.meta_description
    schema = "\n".join(
        _json_ld(block) for block in structured_data(profile, content, base_url, page, faqs)
    )

    return f"""<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>{escape(title)}</title>
  <meta name="description" content="{escape(truncate(description, META_DESCRIPTION_LIMIT))}" />
  <link rel="canonical" href="{escape(canonical)}" />
  <meta property="og:type" content="website" />
  <meta property="og:title" content="{escape(title)}" />
  <meta property="og:description" content="{escape(truncate(description, OG_DESCRIPTION_LIMIT))}" />
  <meta property="og:url" content="{escape(canonical)}" />
  <meta property="og:image" content="{escape(og_image)}" />
  <meta name="twitter:card" content="summary_large_image" />
  <link rel="stylesheet" href="assets/styles.css" />
  {schema}
</head>
<body>
  <a href="#content" class="skip-link">Skip to content</a>
  <header class="site-header">
    <div class="container header-grid">
      <div>
        <p class="eyebrow">Privacy-first local website</p>
        <h1>{escape(profile.name)}</h1>
      </div>
      <nav aria-label="Primary" class="nav">{_nav()}</nav>
    </div>
  </header>

  <main id="content" class="container">{body}</main>

  <footer class="site-footer">
    <div class="container footer-grid">
      <p>{escape(profile.name)} {year}</p>
      <a href="privacy.html">Privacy Policy</a>
    </div>
  </footer>

  <section id="cookie-banner" class="cookie-banner" role="dialog" aria-live="polite" aria-label="Cookie settings">
    <p>We use essential cookies only by default. Optional analytics stays off until you opt in.</p>
    <div class="cookie-actions">
      <button id="accept-all-cookies" class="button">Accept all cookies</button>
      <button id="manage-cookies" class="button ghost">Manage cookies</button>
    </div>
  </section>
  <dialog id="cookie-dialog" class="cookie-dialog">
    <form method="dialog" class="dialog-body">
      <h2>Cookie Preferences</h2>
      <p>Essential cookies are always enabled. Analytics is optional and disabled by default.</p>
      <label class="toggle-row"><span>Essential cookies</span><input type="checkbox" checked disabled /></label>
      <label class="toggle-row"><span>Analytics cookies</span><input id="analytics-opt-in" type="checkbox" /></label>
      <menu class="dialog-actions"><button id="save-cookie-preferences" value="default" class="button">Save preferences</button></menu>
    </form>
  </dialog>
  <script src="assets/site.js"></script>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# Assets
# ---------------------------------------------------------------------------

def stylesheet(theme_css: str, radius: str) -> str:
    """Site stylesheet; each theme variable is declared once, in ``:root``."""
    root_vars = "\n".join(f"  {line}" for line in theme_css.splitlines())
    return f""":root {{
  color-scheme: light;
{root_vars}
  --button-radius: {radius};
}}
* {{ box-sizing: border-box; }}
html, body {{ margin: 0; padding: 0; font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, "Helvetica Neue", Arial, sans-serif; background: radial-gradient(circle at top right, color-mix(in srgb, var(--accent) 18%, var(--bg)), var(--bg) 55%); color: var(--text); line-height: 1.55; }}
a {{ color: var(--secondary); text-decoration-thickness: .08em; text-underline-offset: .12em; }}
.container {{ width: min(1080px, 92vw); margin: 0 auto; }}
.skip-link {{ position: absolute; left: -9999px; }}
.skip-link:focus {{ left: 1rem; top: 1rem; background: #fff; padding: .5rem .8rem; border: 2px solid var(--primary); }}
.site-header {{ padding: 2.2rem 0 1.3rem; border-bottom: 1px solid var(--border); }}
.header-grid {{ display: flex; gap: 1rem; justify-content: space-between; align-items: end; flex-wrap: wrap; }}
.eyebrow {{ margin: 0; text-transform: uppercase; letter-spacing: .08em; font-size: .76rem; color: var(--muted); }}
.nav {{ display: flex; gap: .9rem; flex-wrap: wrap; }}
.nav-link {{ color: var(--text); text-decoration: none; border-bottom: 2px solid transparent; padding-bottom: .2rem; }}
.nav-link:hover, .nav-link:focus {{ border-bottom-color: var(--primary); }}
main {{ padding: 1.4rem 0 2.5rem; display: grid; gap: 1.1rem; }}
.panel {{ background: var(--surface); border: 1px solid var(--border); border-radius: 18px; padding: 1.1rem; box-shadow: 0 10px 30px rgba(15, 23, 42, 0.05); }}
.hero {{ display: grid; grid-template-columns: 1.2fr .8fr; gap: 1rem; }}
.hero-image {{ width: 100%; height: 100%; min-height: 260px; object-fit: cover; border-radius: 14px; }}
.quick-grid, .faq-grid, .card-grid {{ display: grid; grid-template-columns: repeat(auto-fit, minmax(220px, 1fr)); gap: .8rem; }}
.card, .faq-item {{ border: 1px solid var(--border); border-radius: 12px; padding: .8rem; background: var(--surface); }}
.site-footer {{ border-top: 1px solid var(--border); padding: 1.3rem 0 2.2rem; }}
.footer-grid {{ display: flex; justify-content: space-between; align-items: center; flex-wrap: wrap; gap: .8rem; }}
.button {{ display: inline-flex; background: var(--primary); color: #fff; border: none; border-radius: var(--button-radius); padding: .55rem 1rem; cursor: pointer; font-weight: 600; text-decoration: none; }}
.button:hover {{ filter: brightness(1.05); }}
.button.ghost {{ background: transparent; color: var(--text); border: 1px solid var(--border); }}
.cookie-banner {{ position: fixed; right: 1rem; left: 1rem; bottom: 1rem; background: var(--surface); border: 1px solid var(--border); border-radius: 14px; padding: .9rem; box-shadow: 0 20px 35px rgba(15, 23, 42, .12); display: none; gap: .8rem; align-items: center; justify-content: space-between; flex-wrap: wrap; z-index: 40; }}
.cookie-banner.visible {{ display: flex; }}
.cookie-actions {{ display: flex; gap: .6rem; }}
.cookie-dialog {{ border: 1px solid var(--border); border-radius: 14px; width: min(520px, 94vw); }}
.dialog-body {{ margin: 0; padding: 1rem; }}
.toggle-row {{ display: flex; justify-content: space-between; align-items: center; margin: .75rem 0; }}
@media (max-width: 860px) {{ .hero {{ grid-template-columns: 1fr; }} }}
"""


def cookie_script(default_analytics_opt_in: bool) -> str:
    """Consent script: essential cookies always on, analytics only after opt-in."""
    default = "true" if default_analytics_opt_in else "false"
    return f"""(() => {{
  const STORAGE_KEY = "site_cookie_preferences";
  const banner = document.getElementById("cookie-banner");
  const acceptAll = document.getElementById("accept-all-cookies");
  const manage = document.getElementById("manage-cookies");
  const dialog = document.getElementById("cookie-dialog");
  const save = document.getElementById("save-cookie-preferences");
  const analyticsOptIn = document.getElementById("analytics-opt-in");
  const fallback = {{ essential: true, analytics: {default} }};
  const readPreference = () => {{ try {{ const raw = localStorage.getItem(STORAGE_KEY); return raw ? JSON.parse(raw) : null; }} catch {{ return null; }} }};
  const writePreference = (value) => {{ localStorage.setItem(STORAGE_KEY, JSON.stringify(value)); document.documentElement.dataset.analytics = value.analytics ? "enabled" : "disabled"; }};
  const current = readPreference();
  if (!current) {{ banner?.classList.add("visible"); writePreference(fallback); }} else {{ writePreference(current); }}
  acceptAll?.addEventListener("click", () => {{ banner?.classList.remove("visible"); writePreference({{ essential: true, analytics: true }}); }});
  manage?.addEventListener("click", () => {{ const value = readPreference() || fallback; if (analyticsOptIn) analyticsOptIn.checked = !!value.analytics; dialog?.showModal?.(); }});
  save?.addEventListener("click", (event) => {{ event.preventDefault(); writePreference({{ essential: true, analytics: !!analyticsOptIn?.checked }}); dialog?.close?.(); banner?.classList.remove("visible"); }});
}})();
"""


def sitemap_xml(base_url: str) -> str:
    urls = "\n".join(f"  <url><loc>{escape(base_url)}/{page.file}</loc></url>" for page in PAGES)
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">\n'
        f"{urls}\n"
        "</urlset>\n"
    )


def robots_txt(base_url: str) -> str:
    return f"User-agent: *\nAllow: /\nSitemap: {base_url}/sitemap.xml\n"


def llms_txt(profile: BusinessProfile, content: GeneratedContent) -> str:
    contact = content.contact.email or content.contact.phone or "contact page"
    return (
        f"Project: {profile.name}\n"
        f"Summary: {truncate(content.meta_description, LLMS_SUMMARY_LIMIT)}\n"
        f"Contact: {contact}\n"
    )


def humans_txt(profile: BusinessProfile) -> str:
    return f"/* TEAM */\nBusiness: {profile.name}\nSite generated by Profile Site Builder\n"


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def build_site(
    project: ProjectRecord,
    compliance: ComplianceSummary,
    images: Sequence[RenderableImage] = (),
    options: Optional[SiteOptions] = None,
) -> Dict[str, str]:
    """Render *project* into ``{relative path: file text}``.

    Content and sections are normalized first, so a project with no content
    or a partial section list still renders.  With no *images* the hero and
    ``og:image`` use the placeholder.
    """
    options = options or SiteOptions()
    profile = project.profile
    content = normalize_content(profile, project.content)
    sections = normalize_sections(project.layout, project.sections)
    theme = resolve_theme(project.theme)
    base_url = site_base_url(profile, content)

    images = list(images)
    og_image = pick_hero(images, profile.name).src if images else PLACEHOLDER_IMAGE
    rendered = render_pages(profile, content, sections, images)
    bodies = dict(zip([page.file for page in PAGES], rendered))
    faq_on_home = any(section.id == "faq" and section.enabled for section in sections)
    home_faqs = content.faqs if faq_on_home else []

    files: Dict[str, str] = {
        page.file: render_layout(
            profile,
            content,
            page,
            bodies[page.file],
            og_image,
            options.year,
            faqs=home_faqs if page.file == "index.html" else (),
        )
        for page in PAGES
    }
    files["sitemap.xml"] = sitemap_xml(base_url)
    files["robots.txt"] = robots_txt(base_url)
    files["compliance-report.json"] = json.dumps(compliance.to_json_dict(), indent=2, ensure_ascii=False)
    files["assets/styles.css"] = stylesheet(theme_vars_to_css(theme.vars), button_radius(theme.button_style))
    files["assets/site.js"] = cookie_script(profile.privacy_tracker_opt_in)
    files["assets/images/placeholder.svg"] = PLACEHOLDER_SVG

    if options.include_llms_txt:
        files["llms.txt"] = llms_txt(profile, content)
    if options.include_humans_txt:
        files["humans.txt"] = humans_txt(profile)

    logger.info("Built %d files for %s (%d images)", len(files), profile.slug, len(images))
    return files

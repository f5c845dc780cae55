"""Heuristic extraction of a :class:`BusinessProfile` from captured HTML.

Every field is filled by a list of strategies tried in priority order.  A
strategy is a pure ``(soup) -> value`` function returning something falsy
when it finds nothing; the first truthy result wins, otherwise the field's
fallback is used.  Extraction never raises on malformed or missing markup.
"""

import logging
import re
from typing import Callable, Dict, List, Optional, Sequence, TypeVar
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup, Comment, NavigableString, Tag

from sitebuilder.models.profile import FAQ, BusinessProfile, Contact, ExtractionMode, ImageAsset
from sitebuilder.services.tokens import normalize_tokens

logger = logging.getLogger(__name__)

T = TypeVar("T")
Strategy = Callable[[BeautifulSoup], Optional[T]]

MAX_LIST_ITEMS = 20
MAX_IMAGES = 12
MAX_FAQS = 6
MAX_QUICK_ANSWERS = 3
# List items and anchors longer than this are prose, not tokens
MAX_ITEM_LENGTH = 240
# Free text split on delimiters is held to a tighter limit
MAX_RESIDUAL_LENGTH = 80

FALLBACK_NAME = "Untitled Business"
FALLBACK_DESCRIPTION = "Business details imported from a business profile page."

CATEGORY_LABELS = ("Business Categories", "Business Category", "Categories")
PRODUCT_LABELS = ("Products and Services", "Products & Services", "Services Offered")
SERVICE_AREA_LABELS = ("Service Area", "Service Areas", "Areas Served")

_HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")
_INLINE_LABEL_TAGS = ("strong", "b", "dt")
_LABEL_TAGS = (*_HEADING_TAGS, *_INLINE_LABEL_TAGS, "span", "p", "div", "label")
_LIST_TAGS = ("ul", "ol")

_DAY_RE = re.compile(
    r"\b(?:monday|tuesday|wednesday|thursday|friday|saturday|sunday|mon|tue|wed|thu|fri|sat|sun)\b",
    re.IGNORECASE,
)
_RESIDUAL_SPLIT_RE = re.compile(r"[,;|•\n]+")
_ALLOWED_IMAGE_SCHEMES = {"http", "https"}


# ---------------------------------------------------------------------------
# Text helpers
# ---------------------------------------------------------------------------

def _collapse(text: str) -> str:
    return " ".join(text.split())


def _text(node: Tag) -> str:
    return _collapse(node.get_text())


def _label_key(text: str) -> str:
    return _collapse(text).rstrip(":").strip().lower()


_FIELD_LABEL_KEYS = {_label_key(label) for label in (*CATEGORY_LABELS, *PRODUCT_LABELS, *SERVICE_AREA_LABELS)}


def _split_residual(text: str) -> List[str]:
    parts = (_collapse(part) for part in _RESIDUAL_SPLIT_RE.split(text))
    return [part for part in parts if part and len(part) <= MAX_RESIDUAL_LENGTH]


def _item_texts(nodes: Sequence[Tag]) -> List[str]:
    texts = (_text(node) for node in nodes)
    return [text for text in texts if text and len(text) <= MAX_ITEM_LENGTH]


def _resolve_url(base_url: str, value: Optional[str]) -> Optional[str]:
    """Return *value* as an absolute http(s) URL, or ``None`` if it cannot be resolved."""
    value = (value or "").strip()
    if not value:
        return None
    try:
        resolved = urljoin(base_url, value)
        scheme = urlparse(resolved).scheme
    except ValueError:
        return None
    return resolved if scheme in _ALLOWED_IMAGE_SCHEMES else None


def _first(soup: BeautifulSoup, strategies: Sequence[Strategy], default: T) -> T:
    for strategy in strategies:
        value = strategy(soup)
        if value:
            return value
    return default


# ---------------------------------------------------------------------------
# Strategy factories
# ---------------------------------------------------------------------------

def _select_text(selector: str) -> Strategy:
    def strategy(soup: BeautifulSoup) -> Optional[str]:
        node = soup.select_one(selector)
        return _text(node) if node else None

    return strategy


def _select_attr(selector: str, attr: str) -> Strategy:
    def strategy(soup: BeautifulSoup) -> Optional[str]:
        node = soup.select_one(selector)
        if node and node.get(attr):
            return str(node[attr]).strip()
        return None

    return strategy


def _meta_content(**attrs: str) -> Strategy:
    def strategy(soup: BeautifulSoup) -> Optional[str]:
        meta = soup.find("meta", attrs=attrs)
        if meta and meta.get("content"):
            return str(meta["content"]).strip()
        return None

    return strategy


def _anchor_with_text(*labels: str) -> Strategy:
    wanted = {label.lower() for label in labels}

    def strategy(soup: BeautifulSoup) -> Optional[str]:
        for anchor in soup.find_all("a", href=True):
            if _label_key(anchor.get_text()) in wanted:
                return str(anchor["href"]).strip()
        return None

    return strategy


NAME_STRATEGIES: List[Strategy] = [
    _select_text("h1"),
    _select_text("[itemprop='name']"),
    _meta_content(property="og:title"),
    _select_text("title"),
]

DESCRIPTION_STRATEGIES: List[Strategy] = [
    _meta_content(name="description"),
    _select_text(".business-description"),
    _select_text("[itemprop='description']"),
    _select_text("main p"),
]

PHONE_STRATEGIES: List[Strategy] = [_select_attr("a[href^='tel:']", "href")]

EMAIL_STRATEGIES: List[Strategy] = [_select_attr("a[href^='mailto:']", "href")]

WEBSITE_STRATEGIES: List[Strategy] = [
    _select_attr("a[aria-label*='website' i]", "href"),
    _anchor_with_text("website", "visit website", "company website"),
    _select_attr("a[href^='http']", "href"),
]

ADDRESS_STRATEGIES: List[Strategy] = [
    _select_text("[itemprop='streetAddress']"),
    _select_text("[itemprop='address']"),
    _select_text(".address"),
    _select_text("address"),
]

LOGO_STRATEGIES: List[Strategy] = [
    _select_attr("img[alt*='logo' i]", "src"),
    _meta_content(property="og:image"),
]


# ---------------------------------------------------------------------------
# Heading-scoped list collector
# ---------------------------------------------------------------------------

def _scope_next_list(label: Tag) -> List[str]:
    """List items of the list directly after *label* (or ``dd`` items after a ``dt``)."""
    if label.name == "dt":
        items: List[str] = []
        for sibling in label.find_next_siblings():
            if sibling.name != "dd":
                break
            items.extend(_split_residual(sibling.get_text("\n")))
        return items

    following = label.find_next_sibling()
    if following is not None and following.name in _LIST_TAGS:
        return _item_texts(following.find_all("li"))
    return []


def _scope_sibling_run(label: Tag) -> List[str]:
    """Anchors, list items and delimited text after *label* up to the next heading."""
    items: List[str] = []
    for sibling in label.next_siblings:
        if isinstance(sibling, Comment):
            continue
        if isinstance(sibling, NavigableString):
            items.extend(_split_residual(str(sibling)))
            continue
        if not isinstance(sibling, Tag):
            continue
        if sibling.name in _HEADING_TAGS or sibling.name in _INLINE_LABEL_TAGS or sibling.name == "hr":
            break
        if sibling.name in _LIST_TAGS:
            items.extend(_item_texts(sibling.find_all("li")))
        elif sibling.name == "a":
            items.extend(_item_texts([sibling]))
        else:
            nested = sibling.find_all(["li", "a"])
            if nested:
                items.extend(_item_texts(nested))
            else:
                items.extend(_split_residual(sibling.get_text("\n")))
    return items


def _holds_other_section(block: Tag, label: Tag) -> bool:
    """True if *block* has a heading or field label other than *label* (or its own children)."""
    for node in block.find_all(list(_LABEL_TAGS)):
        if node is label or any(parent is label for parent in node.parents):
            continue
        if node.name in _HEADING_TAGS or _label_key(node.get_text()) in _FIELD_LABEL_KEYS:
            return True
    return False


def _scope_enclosing_block(label: Tag) -> List[str]:
    """Items of the block that contains *label*, or its text minus the label.

    A block that also holds another section is never read, so an empty
    section yields nothing rather than its neighbours' items.
    """
    block = label.parent
    if block is None or block.name in ("body", "html", "[document]"):
        return []
    if _holds_other_section(block, label):
        return []

    nested = [node for node in block.find_all(["li", "a"]) if node is not label]
    if nested:
        return _item_texts(nested)

    residual = block.get_text("\n").replace(label.get_text(), "", 1)
    return _split_residual(residual)


_LABEL_SCOPES = (_scope_next_list, _scope_sibling_run, _scope_enclosing_block)


def collect_labeled_tokens(soup: BeautifulSoup, labels: Sequence[str]) -> List[str]:
    """Collect the token list published under any of *labels*.

    Matching is on the element's whole text (case-insensitive, trailing colon
    ignored), so "Service Area" does not match "Our Service Area Policy".
    When no label matches the result is empty.
    """
    wanted = {_label_key(label) for label in labels}
    collected: List[str] = []
    for element in soup.find_all(list(_LABEL_TAGS)):
        if _label_key(element.get_text()) not in wanted:
            continue
        for scope in _LABEL_SCOPES:
            found = scope(element)
            if found:
                collected.extend(found)
                break

    tokens = [token for token in normalize_tokens(collected) if _label_key(token) not in wanted]
    return tokens[:MAX_LIST_ITEMS]


def _labeled(labels: Sequence[str]) -> Strategy:
    def strategy(soup: BeautifulSoup) -> List[str]:
        return collect_labeled_tokens(soup, labels)

    return strategy


TYPES_OF_BUSINESS_STRATEGIES: List[Strategy] = [_labeled(CATEGORY_LABELS)]
PRODUCTS_AND_SERVICES_STRATEGIES: List[Strategy] = [_labeled(PRODUCT_LABELS)]
SERVICE_AREA_STRATEGIES: List[Strategy] = [_labeled(SERVICE_AREA_LABELS)]


# ---------------------------------------------------------------------------
# Structured blocks
# ---------------------------------------------------------------------------

def extract_hours(soup: BeautifulSoup) -> Dict[str, str]:
    """Map day -> hours for every table row whose first cell names a weekday."""
    hours: Dict[str, str] = {}
    for row in soup.find_all("tr"):
        cells = [text for text in (_text(cell) for cell in row.find_all(["th", "td"])) if text]
        if len(cells) >= 2 and _DAY_RE.search(cells[0]):
            hours[cells[0]] = " ".join(cells[1:])
    return hours


def extract_images(soup: BeautifulSoup, source_url: str) -> List[ImageAsset]:
    candidates: List[tuple] = []

    og_image = _resolve_url(source_url, _meta_content(property="og:image")(soup))
    if og_image:
        candidates.append((og_image, "Business profile image"))

    for img in soup.find_all("img"):
        resolved = _resolve_url(source_url, img.get("src") or img.get("data-src"))
        if resolved:
            candidates.append((resolved, (img.get("alt") or "").strip() or "Business image"))

    seen: set = set()
    unique: List[tuple] = []
    for url, alt in candidates:
        if url not in seen:
            seen.add(url)
            unique.append((url, alt))

    return [
        ImageAsset(id=f"img-{i + 1}", url=url, source="extracted", alt=alt, selected_hero=i == 0)
        for i, (url, alt) in enumerate(unique[:MAX_IMAGES])
    ]


def extract_faqs(soup: BeautifulSoup) -> List[FAQ]:
    """Pair question headings with the paragraph or block right after them."""
    faqs: List[FAQ] = []
    for heading in soup.find_all(["h2", "h3", "h4"]):
        question = _text(heading)
        if not question.endswith("?"):
            continue
        answer_node = heading.find_next_sibling()
        if answer_node is None or answer_node.name not in ("p", "div"):
            continue
        answer = _text(answer_node)
        if answer:
            faqs.append(FAQ(question=question, answer=answer))
        if len(faqs) >= MAX_FAQS:
            break
    return faqs


def _strip_scheme(value: str, scheme: str) -> str:
    return re.sub(rf"^{scheme}:", "", value, flags=re.IGNORECASE).strip()


def extract_contact(soup: BeautifulSoup, source_url: str) -> Contact:
    website = _first(soup, WEBSITE_STRATEGIES, "")
    return Contact(
        phone=_strip_scheme(_first(soup, PHONE_STRATEGIES, ""), "tel"),
        email=_strip_scheme(_first(soup, EMAIL_STRATEGIES, ""), "mailto"),
        website=_resolve_url(source_url, website) or _resolve_url(source_url, source_url) or "",
        address=_first(soup, ADDRESS_STRATEGIES, ""),
    )


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------

def parse_profile(html: str, source_url: str, mode: ExtractionMode = "auto") -> BusinessProfile:
    """Extract a profile from *html*, resolving relative URLs against *source_url*.

    Args:
        html:       The captured page.
        source_url: Where the page came from; base for relative URLs and
                    the website fallback.
        mode:       ``"auto"`` for a live fetch, ``"upload_html"`` for an
                    uploaded capture.
    """
    soup = BeautifulSoup(html or "", "lxml")

    name = _first(soup, NAME_STRATEGIES, FALLBACK_NAME)
    description = _first(soup, DESCRIPTION_STRATEGIES, FALLBACK_DESCRIPTION)
    faqs = extract_faqs(soup)
    images = extract_images(soup, source_url)

    profile = BusinessProfile(
        mode=mode,
        source_url=source_url,
        name=name,
        types_of_business=_first(soup, TYPES_OF_BUSINESS_STRATEGIES, []),
        products_and_services=_first(soup, PRODUCTS_AND_SERVICES_STRATEGIES, []),
        description=description,
        about=description,
        contact=extract_contact(soup, source_url),
        hours=extract_hours(soup),
        service_areas=_first(soup, SERVICE_AREA_STRATEGIES, []),
        images=images,
        logo_url=_resolve_url(source_url, _first(soup, LOGO_STRATEGIES, "")),
        faqs=faqs,
        quick_answers=faqs[:MAX_QUICK_ANSWERS],
    )
    logger.info(
        "Extracted profile %r from %s (%d categories, %d offerings, %d areas, %d images, %d faqs)",
        profile.name,
        source_url,
        len(profile.types_of_business),
        len(profile.products_and_services),
        len(profile.service_areas),
        len(profile.images),
        len(profile.faqs),
    )
    return profile


def parse_uploaded_profile(html: str, source_url: str) -> BusinessProfile:
    return parse_profile(html, source_url, mode="upload_html")

"""Layout preset registry and home-page section list normalisation."""

from typing import Dict, List, Mapping, NamedTuple, Optional, Sequence

from sitebuilder.models.profile import BusinessProfile
from sitebuilder.models.theme import ProjectLayout, ProjectSection
from sitebuilder.services.content import ContentInput, normalize_content

# Canonical order of every section the renderer knows about
ALL_SECTION_IDS: List[str] = [
    "hero",
    "quick_answers",
    "services",
    "about",
    "service_areas",
    "faq",
    "hours",
    "contact",
    "gallery",
]


class LayoutPreset(NamedTuple):
    id: str
    label: str
    sections: List[str]  # enabled sections, in display order


class AppliedLayout(NamedTuple):
    layout: ProjectLayout
    sections: List[ProjectSection]


class LayoutSuggestion(NamedTuple):
    recommended_preset_id: str
    reasons: List[str]
    section_toggles: Dict[str, bool]


LAYOUT_PRESETS: List[LayoutPreset] = [
    LayoutPreset(
        "local-service-classic",
        "Local Service Classic",
        ["hero", "quick_answers", "services", "service_areas", "about", "faq", "hours", "contact", "gallery"],
    ),
    LayoutPreset(
        "product-retail",
        "Product and Retail",
        ["hero", "services", "about", "gallery", "faq", "contact"],
    ),
    LayoutPreset(
        "high-trust",
        "High Trust",
        ["hero", "about", "services", "quick_answers", "faq", "hours", "service_areas", "contact", "gallery"],
    ),
    LayoutPreset(
        "minimal-one-page",
        "Minimal One Page",
        ["hero", "about", "services", "contact"],
    ),
    LayoutPreset(
        "story-first",
        "Story First",
        ["hero", "about", "quick_answers", "services", "gallery", "faq", "service_areas", "contact"],
    ),
]

DEFAULT_LAYOUT_ID = "local-service-classic"

_PRESETS_BY_ID: Dict[str, LayoutPreset] = {preset.id: preset for preset in LAYOUT_PRESETS}


def _dedupe(ids: Sequence[str]) -> List[str]:
    return list(dict.fromkeys(ids))


def get_layout_preset(preset_id: Optional[str] = None) -> LayoutPreset:
    """Return the preset for *preset_id*, or the default preset when unknown."""
    return _PRESETS_BY_ID.get(preset_id or "", _PRESETS_BY_ID[DEFAULT_LAYOUT_ID])


def build_sections_from_layout_preset(preset_id: Optional[str] = None) -> List[ProjectSection]:
    """Preset sections first (enabled), then every other known section (disabled)."""
    preset = get_layout_preset(preset_id)
    enabled = set(preset.sections)
    return [
        ProjectSection(id=section_id, enabled=section_id in enabled)
        for section_id in _dedupe([*preset.sections, *ALL_SECTION_IDS])
    ]


def normalize_sections(
    layout: Optional[ProjectLayout],
    sections: Optional[Sequence[ProjectSection]] = None,
) -> List[ProjectSection]:
    """Return a complete, ordered section list for *layout*.

    Ids the caller supplied keep their order and enabled flag; missing known
    ids are appended in canonical order with the layout preset's default
    flag; unknown ids are dropped.  When an id repeats, its first occurrence
    decides both position and flag.  A full, well-formed list comes back
    unchanged.
    """
    defaults = build_sections_from_layout_preset(layout.preset_id if layout else None)
    if not sections:
        return defaults

    default_enabled = {section.id: section.enabled for section in defaults}
    known = [section for section in sections if section.id in default_enabled]
    enabled_by_id: Dict[str, bool] = {}
    for section in known:
        enabled_by_id.setdefault(section.id, section.enabled)

    ordered = _dedupe([*(section.id for section in known), *ALL_SECTION_IDS])
    return [
        ProjectSection(id=section_id, enabled=enabled_by_id.get(section_id, default_enabled[section_id]))
        for section_id in ordered
    ]


def apply_section_toggles(
    sections: Sequence[ProjectSection], toggles: Mapping[str, bool]
) -> List[ProjectSection]:
    return [
        ProjectSection(id=section.id, enabled=toggles.get(section.id, section.enabled))
        for section in sections
    ]


def apply_layout_preset(
    preset_id: Optional[str], section_toggles: Optional[Mapping[str, bool]] = None
) -> AppliedLayout:
    sections = build_sections_from_layout_preset(preset_id)
    if section_toggles:
        sections = apply_section_toggles(sections, section_toggles)
    return AppliedLayout(ProjectLayout(preset_id=get_layout_preset(preset_id).id), sections)


def suggest_layout(
    profile: BusinessProfile, content: ContentInput = None
) -> LayoutSuggestion:
    """Recommend a layout preset and section toggles from how much content exists."""
    source = normalize_content(profile, content)
    image_count = len(profile.images)

    reasons: List[str] = []
    toggles: Dict[str, bool] = {}
    recommended = DEFAULT_LAYOUT_ID

    if image_count < 2:
        recommended = "minimal-one-page"
        reasons.append("Fewer than two images detected, so a compact one-page layout is recommended.")
        toggles["gallery"] = False

    if len(source.services) >= 6:
        reasons.append("Six or more offerings were found, so the Products and Services section should stay prominent.")
        toggles["services"] = True

    if source.contact.service_areas:
        reasons.append("Service areas were detected, enabling a dedicated Service Areas block.")
        toggles["service_areas"] = True

    if len(source.faqs) >= 3:
        if image_count >= 2:
            recommended = "high-trust"
        reasons.append("Three or more FAQs were found, enabling FAQ and Quick Answers blocks.")
        toggles["faq"] = True
        toggles["quick_answers"] = True

    if source.contact.hours:
        reasons.append("Business hours were found, enabling an Hours block near contact content.")
        toggles["hours"] = True

    if not reasons:
        reasons.append("Local Service Classic is a good default for balanced local business content.")

    return LayoutSuggestion(recommended, reasons, toggles)

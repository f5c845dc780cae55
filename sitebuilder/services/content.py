"""Derive editable site copy from a profile and merge partial edits into it."""

from typing import List, Mapping, Optional, Union

from sitebuilder.models.content import (
    ContactPatch,
    ContentContact,
    ContentPatch,
    FAQPatch,
    GeneratedContent,
    GeneratedService,
)
from sitebuilder.models.profile import FAQ, BusinessProfile

_DEFAULT_BUSINESS_TYPE = "Local Business"
_DEFAULT_META = "Local business website generated from provided business details."
_DEFAULT_SUBHEADLINE = "Trusted local service for homes and businesses."
_DEFAULT_CTA = "Request Service"

ContentInput = Union[GeneratedContent, ContentPatch, Mapping, None]


def _service_description(name: str) -> str:
    return f"Professional {name.lower()} tailored to your needs."


def _default_quick_answers(profile: BusinessProfile, services: List[GeneratedService]) -> List[FAQ]:
    if profile.quick_answers:
        return list(profile.quick_answers)
    if profile.faqs:
        return list(profile.faqs[:3])

    offered = ", ".join(service.name for service in services[:4])
    areas = ", ".join(profile.service_areas)
    return [
        FAQ(
            question="What products and services do you offer?",
            answer=offered or "Contact us for product and service details.",
        ),
        FAQ(
            question="Which areas do you serve?",
            answer=areas or "Contact us to confirm service coverage for your location.",
        ),
    ]


def create_from_profile(profile: BusinessProfile) -> GeneratedContent:
    """Return the default content for *profile*; every field is populated."""
    business_type = profile.types_of_business[0] if profile.types_of_business else _DEFAULT_BUSINESS_TYPE
    services = [
        GeneratedService(name=name, description=_service_description(name))
        for name in profile.products_and_services
    ]

    return GeneratedContent(
        site_title=f"{profile.name} | {business_type}",
        meta_description=profile.description or profile.about or _DEFAULT_META,
        hero_headline=profile.name,
        hero_subheadline=profile.description or _DEFAULT_SUBHEADLINE,
        hero_cta_text=_DEFAULT_CTA,
        about_text=profile.about or profile.description,
        services=services,
        faqs=list(profile.faqs),
        quick_answers=_default_quick_answers(profile, services),
        contact=ContentContact(
            phone=profile.contact.phone,
            email=profile.contact.email,
            website=profile.contact.website,
            address=profile.contact.address,
            hours=dict(profile.hours),
            service_areas=list(profile.service_areas),
        ),
    )


def _as_patch(content: ContentInput) -> Optional[ContentPatch]:
    if content is None:
        return None
    if isinstance(content, ContentPatch):
        return content
    if isinstance(content, GeneratedContent):
        return ContentPatch.model_validate(content.model_dump())
    return ContentPatch.model_validate(dict(content))


def _merge_contact(defaults: ContentContact, patch: Optional[ContactPatch]) -> ContentContact:
    if patch is None:
        return defaults
    return ContentContact(
        phone=defaults.phone if patch.phone is None else patch.phone,
        email=defaults.email if patch.email is None else patch.email,
        website=defaults.website if patch.website is None else patch.website,
        address=defaults.address if patch.address is None else patch.address,
        # An empty map or list means "use the profile's", not "show nothing"
        hours=patch.hours or defaults.hours,
        service_areas=patch.service_areas or defaults.service_areas,
    )


def _answered(items: List[FAQPatch]) -> List[FAQ]:
    return [
        FAQ(question=item.question, answer=item.answer)
        for item in items
        if item.question.strip() and item.answer.strip()
    ]


def normalize_content(profile: BusinessProfile, content: ContentInput = None) -> GeneratedContent:
    """Merge *content* (full, partial, or absent) over the profile defaults.

    Text fields fall back to the default when empty.  ``services`` falls back
    to the whole default list when empty; it is never merged per item.
    ``faqs`` and ``quick_answers`` fall back only when not sent, so an editor
    can clear them. Services with a blank name are called "Service" and
    questions missing either half are dropped.
    """
    defaults = create_from_profile(profile)
    patch = _as_patch(content)
    if patch is None:
        return defaults

    services = (
        [
            GeneratedService(name=service.name.strip() or "Service", description=service.description)
            for service in patch.services
        ]
        if patch.services
        else defaults.services
    )

    return GeneratedContent(
        site_title=patch.site_title or defaults.site_title,
        meta_description=patch.meta_description or defaults.meta_description,
        hero_headline=patch.hero_headline or defaults.hero_headline,
        hero_subheadline=patch.hero_subheadline or defaults.hero_subheadline,
        hero_cta_text=patch.hero_cta_text or defaults.hero_cta_text,
        about_text=patch.about_text or defaults.about_text,
        services=services,
        faqs=defaults.faqs if patch.faqs is None else _answered(patch.faqs),
        quick_answers=defaults.quick_answers if patch.quick_answers is None else _answered(patch.quick_answers),
        contact=_merge_contact(defaults.contact, patch.contact),
    )

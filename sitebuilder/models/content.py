from typing import Dict, List, Optional

from pydantic import Field

from sitebuilder.models.base import RecordModel
from sitebuilder.models.profile import FAQ, Contact


class GeneratedService(RecordModel):
    name: str = Field(min_length=1)
    description: str = ""


class ContentContact(Contact):
    hours: Dict[str, str] = Field(default_factory=dict)
    service_areas: List[str] = Field(default_factory=list)


class GeneratedContent(RecordModel):
    """Editable presentational copy derived from a profile."""

    site_title: str = Field(min_length=1)
    meta_description: str = ""
    hero_headline: str = ""
    hero_subheadline: str = ""
    hero_cta_text: str = ""
    about_text: str = ""
    services: List[GeneratedService] = Field(default_factory=list)
    faqs: List[FAQ] = Field(default_factory=list)
    quick_answers: List[FAQ] = Field(default_factory=list)
    contact: ContentContact = Field(default_factory=ContentContact)


class ContactPatch(RecordModel):
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    address: Optional[str] = None
    hours: Optional[Dict[str, str]] = None
    service_areas: Optional[List[str]] = None


class ServicePatch(RecordModel):
    name: str = ""
    description: str = ""


class FAQPatch(RecordModel):
    question: str = ""
    answer: str = ""


class ContentPatch(RecordModel):
    """Partial edit of :class:`GeneratedContent`; ``None`` means "not sent"."""

    site_title: Optional[str] = None
    meta_description: Optional[str] = None
    hero_headline: Optional[str] = None
    hero_subheadline: Optional[str] = None
    hero_cta_text: Optional[str] = None
    about_text: Optional[str] = None
    services: Optional[List[ServicePatch]] = None
    faqs: Optional[List[FAQPatch]] = None
    quick_answers: Optional[List[FAQPatch]] = None
    contact: Optional[ContactPatch] = None

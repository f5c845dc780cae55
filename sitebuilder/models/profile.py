from typing import Dict, List, Literal, Optional

from pydantic import Field, field_validator, model_validator

from sitebuilder.models.base import RecordModel
from sitebuilder.services.normalizer import create_slug
from sitebuilder.services.tokens import normalize_tokens

ExtractionMode = Literal["auto", "upload_html", "manual"]

# Keys used by older saved records, mapped to their current names
_LEGACY_KEYS = {
    "categories": ("typesOfBusiness", "types_of_business"),
    "services": ("productsAndServices", "products_and_services"),
}


class Contact(RecordModel):
    phone: str = ""
    email: str = ""
    website: str = ""
    address: str = ""


class ImageAsset(RecordModel):
    id: str
    url: str = Field(min_length=1)
    source: Literal["extracted", "uploaded"] = "extracted"
    alt: str = ""
    selected_hero: bool = False


class FAQ(RecordModel):
    question: str = Field(min_length=1)
    answer: str = Field(min_length=1)


class Testimonial(RecordModel):
    author: str = Field(min_length=1)
    quote: str = Field(min_length=1)
    disclosure: str = ""


class BusinessProfile(RecordModel):
    """Canonical record of a business's public-facing facts."""

    mode: ExtractionMode = "manual"
    source_url: Optional[str] = None
    name: str = Field(min_length=1)
    slug: str = ""
    types_of_business: List[str] = Field(default_factory=list)
    products_and_services: List[str] = Field(default_factory=list)
    description: str = ""
    about: str = ""
    contact: Contact = Field(default_factory=Contact)
    hours: Dict[str, str] = Field(default_factory=dict)
    service_areas: List[str] = Field(default_factory=list)
    images: List[ImageAsset] = Field(default_factory=list)
    logo_url: Optional[str] = None
    faqs: List[FAQ] = Field(default_factory=list)
    quick_answers: List[FAQ] = Field(default_factory=list)
    testimonials: List[Testimonial] = Field(default_factory=list)
    privacy_tracker_opt_in: bool = False
    privacy_notes: str = ""

    @model_validator(mode="before")
    @classmethod
    def _migrate_legacy_fields(cls, data):
        if not isinstance(data, dict):
            return data
        migrated = dict(data)
        for legacy, (camel, snake) in _LEGACY_KEYS.items():
            if legacy not in migrated:
                continue
            value = migrated.pop(legacy)
            if camel not in migrated and snake not in migrated:
                migrated[camel] = value
        return migrated

    @field_validator("types_of_business", "products_and_services", "service_areas", mode="before")
    @classmethod
    def _tokenize(cls, value):
        return normalize_tokens(value)

    @field_validator("hours", mode="before")
    @classmethod
    def _hours_or_empty(cls, value):
        return value or {}

    @model_validator(mode="after")
    def _enforce_invariants(self):
        self.slug = create_slug(self.slug or self.name)

        if self.images:
            hero_index = next(
                (i for i, image in enumerate(self.images) if image.selected_hero), 0
            )
            for i, image in enumerate(self.images):
                image.selected_hero = i == hero_index
        return self

    @property
    def hero_image(self) -> Optional[ImageAsset]:
        return next((image for image in self.images if image.selected_hero), None)

    @classmethod
    def empty(cls, name: str = "") -> "BusinessProfile":
        """Return a blank manual-entry profile."""
        return cls(mode="manual", name=name or "New Business")

from typing import Literal, Optional

from pydantic import Field

from sitebuilder.models.base import RecordModel

ButtonStyle = Literal["rounded", "pill", "square"]

SectionId = Literal[
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


class ThemeVars(RecordModel):
    bg: str = Field(min_length=1)
    surface: str = Field(min_length=1)
    text: str = Field(min_length=1)
    muted: str = Field(min_length=1)
    primary: str = Field(min_length=1)
    secondary: str = Field(min_length=1)
    accent: str = Field(min_length=1)
    border: str = Field(min_length=1)


class ThemeOverrides(RecordModel):
    bg: Optional[str] = None
    surface: Optional[str] = None
    text: Optional[str] = None
    muted: Optional[str] = None
    primary: Optional[str] = None
    secondary: Optional[str] = None
    accent: Optional[str] = None
    border: Optional[str] = None


class ProjectTheme(RecordModel):
    preset_id: str = "minimal-light"
    overrides: ThemeOverrides = Field(default_factory=ThemeOverrides)
    button_style: Optional[ButtonStyle] = None


class ProjectLayout(RecordModel):
    preset_id: str = "local-service-classic"


class ProjectSection(RecordModel):
    # Unknown ids are accepted here and dropped by normalize_sections
    id: str
    enabled: bool = True

from typing import Dict, List, Literal, Optional, Union

from pydantic import Field

from sitebuilder.models.base import RecordModel
from sitebuilder.models.compliance import ComplianceSummary
from sitebuilder.models.content import ContentPatch, GeneratedContent
from sitebuilder.models.profile import BusinessProfile
from sitebuilder.models.theme import ProjectLayout, ProjectSection, ProjectTheme

ProjectStatus = Literal["draft", "generating", "generated", "edited", "saved", "error"]


class ProjectRecord(RecordModel):
    """The unit the editor and storage exchange with the pipeline."""

    id: str
    created_at: str
    updated_at: str
    generated_at: Optional[str] = None
    status: ProjectStatus = "draft"
    profile: BusinessProfile
    theme: ProjectTheme = Field(default_factory=ProjectTheme)
    layout: ProjectLayout = Field(default_factory=ProjectLayout)
    sections: List[ProjectSection] = Field(default_factory=list)
    # Editors may send a partial edit; it is merged over the profile defaults
    content: Optional[Union[GeneratedContent, ContentPatch]] = None
    substantiation_notes: Dict[str, str] = Field(default_factory=dict)
    compliance: Optional[ComplianceSummary] = None
    last_error: Optional[str] = None

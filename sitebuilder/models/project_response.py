from typing import Dict, List

from pydantic import Field

from sitebuilder.models.base import RecordModel
from sitebuilder.models.compliance import ComplianceSummary


class ReviewResponse(RecordModel):
    compliance: ComplianceSummary
    orphaned_note_ids: List[str] = Field(default_factory=list)


class LayoutSuggestionResponse(RecordModel):
    recommended_preset_id: str
    reasons: List[str]
    section_toggles: Dict[str, bool]


class RenderResponse(RecordModel):
    pages: List[str]
    files: Dict[str, str]

from typing import List, Optional

from pydantic import Field

from sitebuilder.models.base import RecordModel
from sitebuilder.models.profile import BusinessProfile

FALLBACK_SUGGESTIONS = [
    "Upload a saved HTML copy of the profile page instead.",
    "Enter the business details manually.",
    "Check that the URL is public and spelled correctly.",
]


class ExtractResponse(RecordModel):
    ok: bool
    data: Optional[BusinessProfile] = None
    error: Optional[str] = None
    fallback_suggestions: List[str] = Field(default_factory=list)

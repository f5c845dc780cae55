from typing import List, Literal

from sitebuilder.models.base import RecordModel

IssueType = Literal[
    "superlative",
    "comparative_savings",
    "lifetime_guarantee",
    "testimonial_atypical",
]
Severity = Literal["low", "medium", "high"]


class ComplianceIssue(RecordModel):
    id: str  # "<rule id>-<field path>-<match offset>"
    field: str
    phrase: str
    type: IssueType
    severity: Severity
    why_risky: str
    required_substantiation: str
    safer_rewrite: str


class ComplianceSummary(RecordModel):
    reviewed_at: str
    issues: List[ComplianceIssue]
    requires_user_review: bool

"""Advertising-claims screening for generated marketing copy.

The engine runs a fixed, ordered rule table over every text block of a
profile and reports each match as a :class:`ComplianceIssue`.  It is purely
advisory: ``requires_user_review`` only says whether anything matched, and
deciding which severities block publishing is left to the caller.

Issue ids combine the rule id, the field path and the character offset of
the match, e.g. ``lifetime-guarantee-description-18``.  Re-scanning
unchanged text reproduces the same ids, so substantiation notes keyed by id
survive a re-scan.  Editing earlier text in the same field shifts the
offset and orphans the note; :func:`split_substantiation_notes` reports
those.
"""

import logging
import re
from datetime import datetime, timezone
from typing import Dict, List, NamedTuple, Optional, Tuple

from sitebuilder.models.compliance import ComplianceIssue, ComplianceSummary, IssueType, Severity
from sitebuilder.models.content import GeneratedContent
from sitebuilder.models.profile import BusinessProfile

logger = logging.getLogger(__name__)


class Rule(NamedTuple):
    id: str
    type: IssueType
    pattern: re.Pattern
    severity: Severity
    why_risky: str
    required_substantiation: str
    safer_rewrite: str


class TextBlock(NamedTuple):
    field: str
    text: str


RULES: List[Rule] = [
    Rule(
        id="unqualified-best",
        type="superlative",
        pattern=re.compile(
            r"#1|\b(?:best|number\s*one|top\s*rated|guaranteed|guarantee|lowest\s*price|free|factory\s*direct)\b",
            re.IGNORECASE,
        ),
        severity="high",
        why_risky=(
            "Unqualified superlatives and absolute claims can mislead consumers if not fully "
            "supported and disclosed."
        ),
        required_substantiation=(
            "Provide objective third-party evidence, timeframe, market scope, and clear "
            "qualifying language."
        ),
        safer_rewrite=(
            "Use specific, verifiable language like 'trusted by local homeowners since 2010' "
            "with source notes."
        ),
    ),
    Rule(
        id="comparative-savings",
        type="comparative_savings",
        pattern=re.compile(
            r"\b(?:save\s+\d+%|save\s+up\s+to|cheaper\s+than|lowest\s+cost|guaranteed\s+savings|save\s+money)",
            re.IGNORECASE,
        ),
        severity="high",
        why_risky=(
            "Comparative pricing or savings statements require a clear basis, comparison set, "
            "and timing."
        ),
        required_substantiation=(
            "Document competitor set, measured dates, methodology, and any exclusions or "
            "assumptions."
        ),
        safer_rewrite=(
            "Replace with non-comparative value language, or attach the measurable basis "
            "directly in the copy."
        ),
    ),
    Rule(
        id="lifetime-guarantee",
        type="lifetime_guarantee",
        pattern=re.compile(r"\blifetime(?:\s+guarantee|\s+warranty)?\b", re.IGNORECASE),
        severity="high",
        why_risky=(
            "'Lifetime' is ambiguous unless the duration, owner transferability, and exclusions "
            "are defined."
        ),
        required_substantiation=(
            "Define whose lifetime, exact term conditions, transfer rules, and all exclusions in "
            "plain language."
        ),
        safer_rewrite=(
            "Specify a concrete term like '10-year workmanship warranty' and link full warranty "
            "details."
        ),
    ),
    Rule(
        id="testimonial-atypical",
        type="testimonial_atypical",
        pattern=re.compile(
            r"\b(?:results|outcome|saved\s+me|changed\s+my\s+life|never\s+had\s+a\s+problem)\b",
            re.IGNORECASE,
        ),
        severity="medium",
        why_risky="Testimonials can imply typical outcomes unless disclosures clarify representativeness.",
        required_substantiation=(
            "Add disclosure about typical results and keep source/permission records for each "
            "testimonial."
        ),
        safer_rewrite=(
            "Pair testimonials with 'Individual results vary' and factual context on typical "
            "customer outcomes."
        ),
    ),
]


def collect_text_blocks(profile: BusinessProfile) -> List[TextBlock]:
    """Return every scanned text block tagged with its field path."""
    blocks = [
        TextBlock("description", profile.description),
        TextBlock("about", profile.about),
        TextBlock("productsAndServices", " ".join(profile.products_and_services)),
    ]
    blocks.extend(
        TextBlock(f"faqs[{i}]", f"{faq.question} {faq.answer}") for i, faq in enumerate(profile.faqs)
    )
    blocks.extend(
        TextBlock(f"quickAnswers[{i}]", f"{qa.question} {qa.answer}")
        for i, qa in enumerate(profile.quick_answers)
    )
    blocks.extend(
        TextBlock(f"testimonials[{i}]", f"{item.author} {item.quote}")
        for i, item in enumerate(profile.testimonials)
    )
    return blocks


def _issue(rule: Rule, field: str, match: re.Match) -> ComplianceIssue:
    return ComplianceIssue(
        id=f"{rule.id}-{field}-{match.start()}",
        field=field,
        phrase=match.group(0),
        type=rule.type,
        severity=rule.severity,
        why_risky=rule.why_risky,
        required_substantiation=rule.required_substantiation,
        safer_rewrite=rule.safer_rewrite,
    )


def scan(profile: BusinessProfile, reviewed_at: Optional[str] = None) -> ComplianceSummary:
    """Screen *profile* against :data:`RULES`, reporting every match.

    Args:
        profile:     The profile (or compliance projection of edited content).
        reviewed_at: ISO timestamp to stamp on the summary; defaults to now.
    """
    issues: List[ComplianceIssue] = []
    for block in collect_text_blocks(profile):
        if not block.text:
            continue
        for rule in RULES:
            issues.extend(_issue(rule, block.field, match) for match in rule.pattern.finditer(block.text))

    logger.debug("Compliance scan of %s found %d issue(s)", profile.slug, len(issues))
    return ComplianceSummary(
        reviewed_at=reviewed_at or datetime.now(timezone.utc).isoformat(),
        issues=issues,
        requires_user_review=len(issues) > 0,
    )


def to_compliance_profile(profile: BusinessProfile, content: GeneratedContent) -> BusinessProfile:
    """Project edited *content* onto *profile* so the scan sees the copy that ships."""
    return profile.model_copy(
        update={
            "description": content.meta_description or content.hero_subheadline,
            "about": content.about_text,
            "products_and_services": [service.name for service in content.services],
            "faqs": list(content.faqs),
            "quick_answers": list(content.quick_answers),
            "hours": dict(content.contact.hours),
            "service_areas": list(content.contact.service_areas),
        }
    )


def split_substantiation_notes(
    notes: Dict[str, str], summary: ComplianceSummary
) -> Tuple[Dict[str, str], Dict[str, str]]:
    """Split *notes* into those still attached to an issue and orphaned ones."""
    live_ids = {issue.id for issue in summary.issues}
    attached = {key: value for key, value in notes.items() if key in live_ids}
    orphaned = {key: value for key, value in notes.items() if key not in live_ids}
    return attached, orphaned

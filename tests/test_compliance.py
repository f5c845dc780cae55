"""Tests for sitebuilder.services.compliance."""

from sitebuilder.models.profile import BusinessProfile
from sitebuilder.services.compliance import (
    RULES,
    collect_text_blocks,
    scan,
    split_substantiation_notes,
    to_compliance_profile,
)
from sitebuilder.services.content import create_from_profile

REVIEWED_AT = "2026-01-01T00:00:00+00:00"


def _profile(**fields):
    return BusinessProfile(name="Acme Roofing", **fields)


class TestRuleCategories:
    def test_each_category_detected(self):
        profile = _profile(
            description="We are the best roofers in town.",
            about="Save up to 40% versus big-box installers. Lifetime warranty included.",
            testimonials=[{"author": "Pat", "quote": "This roof changed my life."}],
        )
        summary = scan(profile, reviewed_at=REVIEWED_AT)
        types = {issue.type for issue in summary.issues}
        assert types == {"superlative", "comparative_savings", "lifetime_guarantee", "testimonial_atypical"}
        assert summary.requires_user_review is True
        assert summary.reviewed_at == REVIEWED_AT

    def test_neutral_copy_has_no_issues(self):
        profile = _profile(
            description="Residential roofing contractor serving Austin since 2010.",
            about="We inspect, repair and replace asphalt shingle roofs.",
            products_and_services=["Roof Repair", "Gutter Cleaning"],
        )
        summary = scan(profile, reviewed_at=REVIEWED_AT)
        assert summary.issues == []
        assert summary.requires_user_review is False

    def test_hash_one_detected(self):
        summary = scan(_profile(description="Voted #1 in Austin"))
        assert [issue.phrase for issue in summary.issues] == ["#1"]

    def test_word_boundaries_respected(self):
        summary = scan(_profile(description="Freestyle bestowed lifetimes"))
        assert summary.issues == []


class TestIssueIdentity:
    def test_every_match_reported_with_offset_id(self):
        profile = _profile(description="Best price, best service.")
        ids = [issue.id for issue in scan(profile).issues]
        assert ids == ["unqualified-best-description-0", "unqualified-best-description-12"]

    def test_ids_stable_across_rescans(self):
        profile = _profile(about="Lifetime guarantee on every job.", faqs=[{"question": "Is it free?", "answer": "Yes."}])
        first = [issue.id for issue in scan(profile).issues]
        second = [issue.id for issue in scan(profile).issues]
        assert first == second

    def test_field_paths(self):
        profile = _profile(
            faqs=[{"question": "Q", "answer": "A"}, {"question": "Are estimates free?", "answer": "Yes"}],
            quick_answers=[{"question": "Best time to call?", "answer": "Mornings"}],
        )
        fields = {issue.field for issue in scan(profile).issues}
        assert fields == {"faqs[1]", "quickAnswers[0]"}

    def test_issue_carries_guidance(self):
        issue = scan(_profile(description="lifetime")).issues[0]
        rule = next(rule for rule in RULES if rule.id == "lifetime-guarantee")
        assert issue.severity == "high"
        assert issue.why_risky == rule.why_risky
        assert issue.safer_rewrite == rule.safer_rewrite


class TestCollectTextBlocks:
    def test_products_joined_into_one_block(self):
        blocks = collect_text_blocks(_profile(products_and_services=["Repair", "Install"]))
        assert ("productsAndServices", "Repair Install") in blocks


class TestComplianceProjection:
    def test_edited_copy_is_scanned(self):
        profile = _profile(description="Roof repair in Austin.")
        content = create_from_profile(profile).model_copy(update={"about_text": "Lowest price guaranteed!"})
        summary = scan(to_compliance_profile(profile, content))
        assert {issue.field for issue in summary.issues} == {"about"}

    def test_projection_keeps_profile_identity(self):
        profile = _profile(description="Roof repair.")
        projected = to_compliance_profile(profile, create_from_profile(profile))
        assert projected.name == profile.name
        assert projected.slug == profile.slug


class TestSubstantiationNotes:
    def test_orphaned_notes_split_out(self):
        summary = scan(_profile(description="Lifetime warranty."))
        live_id = summary.issues[0].id
        attached, orphaned = split_substantiation_notes(
            {live_id: "Warranty terms on file.", "lifetime-guarantee-description-99": "stale"}, summary
        )
        assert attached == {live_id: "Warranty terms on file."}
        assert orphaned == {"lifetime-guarantee-description-99": "stale"}

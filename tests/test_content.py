"""Tests for sitebuilder.services.content."""

from sitebuilder.models.content import ContentPatch
from sitebuilder.models.profile import BusinessProfile
from sitebuilder.services.content import create_from_profile, normalize_content


def _profile(**fields):
    defaults = dict(
        name="Acme Roofing",
        types_of_business=["Roofing Contractors"],
        products_and_services=["Roof Repair", "Gutter Cleaning"],
        description="Roofing in Austin.",
        service_areas=["Austin", "Round Rock"],
        hours={"Monday": "9-5"},
        contact={"phone": "512-555-0100", "email": "hi@acme.example"},
    )
    defaults.update(fields)
    return BusinessProfile(**defaults)


class TestCreateFromProfile:
    def test_titles_and_hero(self):
        content = create_from_profile(_profile())
        assert content.site_title == "Acme Roofing | Roofing Contractors"
        assert content.hero_headline == "Acme Roofing"
        assert content.hero_subheadline == "Roofing in Austin."
        assert content.hero_cta_text == "Request Service"

    def test_title_without_type(self):
        assert create_from_profile(_profile(types_of_business=[])).site_title == "Acme Roofing | Local Business"

    def test_services_described(self):
        services = create_from_profile(_profile()).services
        assert [service.name for service in services] == ["Roof Repair", "Gutter Cleaning"]
        assert services[0].description == "Professional roof repair tailored to your needs."

    def test_contact_copied(self):
        contact = create_from_profile(_profile()).contact
        assert contact.phone == "512-555-0100"
        assert contact.hours == {"Monday": "9-5"}
        assert contact.service_areas == ["Austin", "Round Rock"]

    def test_quick_answers_synthesized(self):
        answers = create_from_profile(_profile()).quick_answers
        assert [qa.question for qa in answers] == [
            "What products and services do you offer?",
            "Which areas do you serve?",
        ]
        assert answers[0].answer == "Roof Repair, Gutter Cleaning"
        assert answers[1].answer == "Austin, Round Rock"

    def test_quick_answers_from_faqs(self):
        faqs = [{"question": f"Q{i}?", "answer": f"A{i}"} for i in range(5)]
        answers = create_from_profile(_profile(faqs=faqs)).quick_answers
        assert [qa.question for qa in answers] == ["Q0?", "Q1?", "Q2?"]

    def test_profile_quick_answers_win(self):
        profile = _profile(
            faqs=[{"question": "F?", "answer": "F"}],
            quick_answers=[{"question": "Q?", "answer": "A"}],
        )
        assert [qa.question for qa in create_from_profile(profile).quick_answers] == ["Q?"]


class TestNormalizeContent:
    def test_none_returns_defaults(self):
        profile = _profile()
        assert normalize_content(profile, None) == create_from_profile(profile)

    def test_edited_headline_kept(self):
        content = normalize_content(_profile(), {"heroHeadline": "Roofs done right"})
        assert content.hero_headline == "Roofs done right"
        assert content.site_title == "Acme Roofing | Roofing Contractors"

    def test_empty_text_falls_back(self):
        content = normalize_content(_profile(), ContentPatch(hero_headline="", about_text=""))
        assert content.hero_headline == "Acme Roofing"
        assert content.about_text == "Roofing in Austin."

    def test_empty_services_fall_back_to_defaults(self):
        content = normalize_content(_profile(), ContentPatch(services=[]))
        assert [service.name for service in content.services] == ["Roof Repair", "Gutter Cleaning"]

    def test_services_replaced_not_merged(self):
        content = normalize_content(_profile(), {"services": [{"name": "Skylights"}]})
        assert [service.name for service in content.services] == ["Skylights"]

    def test_blank_service_name_becomes_service(self):
        content = normalize_content(_profile(), {"services": [{"name": "", "description": "x"}, {"name": "Skylights"}]})
        assert [(service.name, service.description) for service in content.services] == [
            ("Service", "x"),
            ("Skylights", ""),
        ]

    def test_half_answered_faqs_dropped(self):
        content = normalize_content(
            _profile(),
            {
                "faqs": [{"question": "Free estimates?", "answer": ""}, {"question": "Insured?", "answer": "Yes"}],
                "quickAnswers": [{"question": "", "answer": "Orphan answer"}],
            },
        )
        assert [faq.question for faq in content.faqs] == ["Insured?"]
        assert content.quick_answers == []

    def test_faqs_can_be_cleared(self):
        profile = _profile(faqs=[{"question": "F?", "answer": "F"}])
        content = normalize_content(profile, ContentPatch(faqs=[], quick_answers=[]))
        assert content.faqs == []
        assert content.quick_answers == []

    def test_contact_partial_merge(self):
        content = normalize_content(
            _profile(), {"contact": {"phone": "", "email": "new@acme.example", "serviceAreas": [], "hours": {}}}
        )
        assert content.contact.phone == ""
        assert content.contact.email == "new@acme.example"
        assert content.contact.service_areas == ["Austin", "Round Rock"]
        assert content.contact.hours == {"Monday": "9-5"}

    def test_full_content_round_trips(self):
        profile = _profile()
        content = create_from_profile(profile).model_copy(update={"hero_cta_text": "Call now"})
        assert normalize_content(profile, content) == content

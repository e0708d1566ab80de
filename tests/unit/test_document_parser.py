"""
Unit tests for leadgen.generation.document_parser.
"""

import pytest

from leadgen.document import (
    ComparisonSection,
    FreeTextSection,
    PhasedChecklistSection,
    ScriptsSection,
)
from leadgen.errors import GenerationFailure
from leadgen.generation import (
    parse_concepts,
    parse_outline,
    parse_structured_document,
    parse_toolkit_section,
)


@pytest.fixture
def structured_content():
    """Document payload in the shape the document prompt asks for."""
    return {
        "structured_content": {
            "title_page": {"title": "Loyalty in 30 Days", "subtitle": "For small retailers"},
            "introduction_page": {"title": "Why this matters", "content": "First.\n\nSecond."},
            "toolkit_sections": [
                {
                    "title": "Choosing a program",
                    "type": "pros_and_cons_list",
                    "content": {"items": [
                        {"method_name": "Punch card", "pros": "Cheap", "cons": "Lost easily",
                         "case_study": "A cafe doubled visits."},
                    ]},
                },
                {
                    "title": "Launch plan",
                    "type": "checklist",
                    "content": {"phases": [{"phase_title": "Week 1", "items": ["List regulars"]}]},
                },
                {
                    "title": "What to say",
                    "type": "scripts",
                    "content": {"scenarios": [
                        {"trigger": "Too busy", "response": "Takes 10 seconds", "explanation": "Low effort"},
                    ]},
                },
                {"title": "Wrap-up", "type": "text", "content": "Keep it simple."},
            ],
            "cta_page": {"title": "Need help?", "content": "Book a call."},
        }
    }


class TestParseConcepts:

    def test_ids_follow_position_within_batch(self):
        concepts = parse_concepts({"concepts": [
            {"id": "model-id", "title": "One", "description": "a"},
            {"title": "Two", "description": "b"},
        ]})
        first, second = (c.id for c in concepts)
        assert first.startswith("concept-") and first.endswith("-1")
        assert second == first[:-1] + "2"
        assert concepts[1].title == "Two"

    def test_ids_differ_between_batches(self):
        payload = {"concepts": [{"title": "One", "description": "a"}]}
        assert parse_concepts(payload)[0].id != parse_concepts(payload)[0].id

    @pytest.mark.parametrize("payload", [
        [],
        {"concepts": []},
        {"concepts": "nope"},
        {"concepts": [{"description": "no title"}]},
        {"concepts": ["just a string"]},
    ])
    def test_malformed(self, payload):
        with pytest.raises(GenerationFailure) as exc_info:
            parse_concepts(payload)
        assert exc_info.value.stage == "concepts"


class TestParseOutline:

    def test_valid(self):
        outline = parse_outline({
            "title": " The Plan ",
            "introduction": "Why.",
            "core_points": ["One", "", "Two"],
        })
        assert outline.title == "The Plan"
        assert outline.core_points == ("One", "Two")

    def test_missing_points(self):
        with pytest.raises(GenerationFailure) as exc_info:
            parse_outline({"title": "T", "introduction": "I", "core_points": []})
        assert exc_info.value.stage == "outline"

    def test_nested_value_rejected(self):
        with pytest.raises(GenerationFailure):
            parse_outline({"title": {"text": "T"}, "introduction": "I", "core_points": ["a"]})


class TestParseToolkitSection:

    def test_unknown_type_with_text_is_free_text(self):
        section = parse_toolkit_section({"title": "Notes", "type": "essay", "content": "Body"})
        assert isinstance(section, FreeTextSection)
        assert section.body == "Body"

    def test_unknown_type_with_structure_fails(self):
        with pytest.raises(GenerationFailure, match="non-text content"):
            parse_toolkit_section({"title": "Grid", "type": "table", "content": {"rows": []}})

    def test_known_type_without_content_fails(self):
        with pytest.raises(GenerationFailure):
            parse_toolkit_section({"title": "List", "type": "checklist", "content": None})


class TestParseStructuredDocument:

    def test_full_payload(self, structured_content):
        doc = parse_structured_document(structured_content)

        assert doc.title_page.title == "Loyalty in 30 Days"
        assert doc.introduction == "First.\n\nSecond."
        kinds = [type(s) for s in doc.sections]
        assert kinds == [ComparisonSection, PhasedChecklistSection, ScriptsSection, FreeTextSection]
        assert doc.call_to_action.title == "Need help?"
        assert doc.call_to_action.body == "Book a call."

    def test_field_mapping(self, structured_content):
        doc = parse_structured_document(structured_content)
        item = doc.sections[0].items[0]
        assert item.label == "Punch card"
        assert item.note == "A cafe doubled visits."
        assert doc.sections[1].phases[0].phase_title == "Week 1"
        assert doc.sections[2].scenarios[0].rationale == "Low effort"

    def test_bare_payload(self, structured_content):
        doc = parse_structured_document(structured_content["structured_content"])
        assert len(doc.sections) == 4

    def test_list_introduction(self, structured_content):
        structured_content["structured_content"]["introduction_page"] = ["One", "Two"]
        doc = parse_structured_document(structured_content)
        assert doc.introduction == ("One", "Two")

    def test_missing_title(self, structured_content):
        structured_content["structured_content"]["title_page"] = {}
        with pytest.raises(GenerationFailure, match="no title"):
            parse_structured_document(structured_content)

    def test_sections_not_a_list(self, structured_content):
        structured_content["structured_content"]["toolkit_sections"] = {"title": "x"}
        with pytest.raises(GenerationFailure) as exc_info:
            parse_structured_document(structured_content)
        assert exc_info.value.stage == "document"

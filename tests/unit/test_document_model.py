"""
Unit tests for leadgen.document.model.
"""

import pytest
from dataclasses import FrozenInstanceError

from leadgen.document import (
    Branding,
    CallToAction,
    ChecklistPhase,
    ComparisonItem,
    ComparisonSection,
    FreeTextSection,
    PhasedChecklistSection,
    ScriptScenario,
    ScriptsSection,
    SECTION_TYPES,
    SectionKind,
    StructuredDocument,
    TitlePage,
    is_blank,
    section_from_dict,
    section_to_dict,
    split_paragraphs,
)


class TestIsBlank:

    @pytest.mark.parametrize("value", [None, "", "   ", "\n\t", [], ["", "  "], ("", None)])
    def test_blank_values(self, value):
        assert is_blank(value)

    @pytest.mark.parametrize("value", ["x", ["", "x"], 0, False])
    def test_non_blank_values(self, value):
        assert not is_blank(value)

    def test_dataclass_deep_scan(self):
        assert is_blank(ScriptScenario(" ", "", "\n"))
        assert not is_blank(ScriptScenario("", "", "why"))


class TestSections:

    def test_kind_per_variant(self):
        assert ComparisonSection("t").kind is SectionKind.COMPARISON
        assert PhasedChecklistSection("t").kind is SectionKind.PHASED_CHECKLIST
        assert ScriptsSection("t").kind is SectionKind.SCRIPTS
        assert FreeTextSection("t").kind is SectionKind.FREE_TEXT

    def test_every_kind_has_a_type(self):
        assert set(SECTION_TYPES) == set(SectionKind)

    def test_lists_become_tuples(self):
        section = PhasedChecklistSection("t", [ChecklistPhase("p", ["a", "b"])])
        assert isinstance(section.phases, tuple)
        assert section.phases[0].items == ("a", "b")

    def test_sections_are_frozen(self):
        section = FreeTextSection("t", "body")
        with pytest.raises(FrozenInstanceError):
            section.body = "changed"

    def test_comparison_empty_when_all_items_blank(self):
        section = ComparisonSection("t", (ComparisonItem(" ", "", ""),))
        assert section.is_empty()

    def test_checklist_prunes_blank_items_and_phases(self):
        section = PhasedChecklistSection("t", (
            ChecklistPhase("Week 1", ("do it", "  ")),
            ChecklistPhase("Week 2", ("", "")),
        ))
        pruned = section.pruned()
        assert len(pruned.phases) == 1
        assert pruned.phases[0].items == ("do it",)
        assert not section.is_empty()

    def test_checklist_empty_when_no_items(self):
        section = PhasedChecklistSection("t", (ChecklistPhase("Only a title", ()),))
        assert section.is_empty()

    def test_free_text_whitespace_is_empty(self):
        assert FreeTextSection("t", "  \n\n ").is_empty()

    def test_section_dict_is_tagged(self):
        data = section_to_dict(ScriptsSection("Scripts", (ScriptScenario("a", "b", "c"),)))
        assert data["kind"] == "scripts"
        assert data["scenarios"] == [{"trigger": "a", "response": "b", "rationale": "c"}]
        assert "items" not in data
        assert "phases" not in data

    def test_section_from_dict_dispatches_on_kind(self):
        section = section_from_dict({
            "kind": "phasedChecklist",
            "title": "Plan",
            "phases": [{"phaseTitle": "Start", "items": ["one"]}],
        })
        assert isinstance(section, PhasedChecklistSection)
        assert section.phases[0].phase_title == "Start"

    def test_section_from_dict_unknown_kind(self):
        with pytest.raises(ValueError, match="Unknown section kind"):
            section_from_dict({"kind": "table", "title": "x"})


class TestStructuredDocument:

    def test_without_empty_sections(self, sample_document):
        doc = StructuredDocument(
            title_page=TitlePage("T"),
            introduction="intro",
            sections=sample_document.sections + (
                FreeTextSection("Blank", "   "),
                ScriptsSection("No scenarios"),
            ),
        )
        cleaned = doc.without_empty_sections()
        assert len(cleaned.sections) == 4
        assert len(doc.sections) == 6  # source untouched

    def test_introduction_paragraphs_from_string(self, sample_document):
        assert sample_document.introduction_paragraphs() == [
            "Why loyalty matters.",
            "What this guide covers.",
        ]

    def test_introduction_paragraphs_from_list(self):
        doc = StructuredDocument(TitlePage("T"), ["First", " ", "Second "])
        assert doc.introduction == ("First", " ", "Second ")
        assert doc.introduction_paragraphs() == ["First", "Second"]

    def test_statistics(self, sample_document):
        stats = sample_document.get_statistics()
        assert stats["total"] == 4
        assert stats["comparison"] == 1
        assert stats["freeText"] == 1

    def test_json_round_trip(self, sample_document):
        doc = StructuredDocument(
            title_page=sample_document.title_page,
            introduction=sample_document.introduction,
            sections=sample_document.sections,
            call_to_action=CallToAction("Go", "Now", booking_url="https://cal.example.com"),
            branding=Branding("#111111", "#222222", "Inter"),
        )
        assert StructuredDocument.from_json(doc.to_json()) == doc

    def test_default_call_to_action(self):
        doc = StructuredDocument(TitlePage("T"), "intro")
        assert doc.call_to_action == CallToAction(title="", body="")


class TestSplitParagraphs:

    def test_blank_line_boundaries(self):
        assert split_paragraphs("one\ntwo\n\n\nthree") == ["one two", "three"]

    def test_empty(self):
        assert split_paragraphs("  \n \n") == []

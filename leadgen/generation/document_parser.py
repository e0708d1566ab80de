"""
Parse model JSON into pipeline values.

Concepts:   {"concepts": [{"title", "description"}, ...]}
Outline:    {"title", "introduction", "core_points": [...]}
Document:   {"structured_content": {
                 "title_page": {"title", "subtitle"},
                 "introduction_page": {"title", "content"},
                 "toolkit_sections": [{"title", "type", "content"}, ...],
                 "cta_page": {"title", "content"}}}

Toolkit section types map onto section kinds:

    pros_and_cons_list → ComparisonSection
    checklist          → PhasedChecklistSection
    scripts            → ScriptsSection
    anything else      → FreeTextSection (string content only)

Any structural problem raises GenerationFailure naming the stage.
"""

from typing import Any, Dict, List

from ..document.model import (
    CallToAction,
    ChecklistPhase,
    ComparisonItem,
    ComparisonSection,
    FreeTextSection,
    PhasedChecklistSection,
    ScriptScenario,
    ScriptsSection,
    Section,
    StructuredDocument,
    TitlePage,
)
from ..errors import GenerationFailure
from ..pipeline.inputs import Concept, Outline, new_concept_ids


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        raise TypeError(f"expected text, got {type(value).__name__}")
    return str(value).strip()


def _require_dict(value: Any, what: str, stage: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise GenerationFailure(stage, f"{what} must be an object")
    return value


def _require_list(value: Any, what: str, stage: str) -> List[Any]:
    if not isinstance(value, list):
        raise GenerationFailure(stage, f"{what} must be a list")
    return value


# ============================================================================
# Concepts / outline
# ============================================================================

def parse_concepts(data: Any) -> List[Concept]:
    """Concepts get fresh batch ids (see new_concept_ids); model-supplied ids are ignored."""
    stage = "concepts"
    data = _require_dict(data, "response", stage)
    raw = _require_list(data.get("concepts"), "concepts", stage)
    if not raw:
        raise GenerationFailure(stage, "no concepts returned")

    ids = new_concept_ids(len(raw))
    concepts = []
    for index, item in enumerate(raw, start=1):
        item = _require_dict(item, f"concept {index}", stage)
        title = _text(item.get("title"))
        if not title:
            raise GenerationFailure(stage, f"concept {index} has no title")
        concepts.append(Concept(
            id=ids[index - 1],
            title=title,
            description=_text(item.get("description")),
        ))
    return concepts


def parse_outline(data: Any) -> Outline:
    stage = "outline"
    data = _require_dict(data, "response", stage)
    points = _require_list(data.get("core_points"), "core_points", stage)
    try:
        outline = Outline(
            title=_text(data.get("title")),
            introduction=_text(data.get("introduction")),
            core_points=tuple(p for p in (_text(p) for p in points) if p),
        )
    except TypeError as e:
        raise GenerationFailure(stage, str(e)) from e

    problems = outline.validate()
    if problems:
        raise GenerationFailure(stage, "; ".join(f"{f} {m}" for f, m in problems))
    return outline


# ============================================================================
# Structured document
# ============================================================================

def _parse_comparison(title: str, content: Dict[str, Any], stage: str) -> ComparisonSection:
    items = _require_list(content.get("items"), f"'{title}' items", stage)
    return ComparisonSection(title=title, items=tuple(
        ComparisonItem(
            label=_text(item.get("method_name") or item.get("label")),
            pros=_text(item.get("pros")),
            cons=_text(item.get("cons")),
            note=_text(item.get("case_study") or item.get("note")) or None,
        )
        for item in (_require_dict(i, f"'{title}' item", stage) for i in items)
    ))


def _parse_checklist(title: str, content: Dict[str, Any], stage: str) -> PhasedChecklistSection:
    phases = _require_list(content.get("phases"), f"'{title}' phases", stage)
    return PhasedChecklistSection(title=title, phases=tuple(
        ChecklistPhase(
            phase_title=_text(phase.get("phase_title")),
            items=tuple(_text(i) for i in _require_list(phase.get("items", []), f"'{title}' phase items", stage)),
        )
        for phase in (_require_dict(p, f"'{title}' phase", stage) for p in phases)
    ))


def _parse_scripts(title: str, content: Dict[str, Any], stage: str) -> ScriptsSection:
    scenarios = _require_list(content.get("scenarios"), f"'{title}' scenarios", stage)
    return ScriptsSection(title=title, scenarios=tuple(
        ScriptScenario(
            trigger=_text(s.get("trigger")),
            response=_text(s.get("response")),
            rationale=_text(s.get("explanation") or s.get("rationale")),
        )
        for s in (_require_dict(s, f"'{title}' scenario", stage) for s in scenarios)
    ))


_TOOLKIT_PARSERS = {
    "pros_and_cons_list": _parse_comparison,
    "checklist": _parse_checklist,
    "scripts": _parse_scripts,
}


def parse_toolkit_section(raw: Any, stage: str = "document") -> Section:
    raw = _require_dict(raw, "toolkit section", stage)
    title = _text(raw.get("title"))
    section_type = raw.get("type")
    content = raw.get("content")

    parser = _TOOLKIT_PARSERS.get(section_type)
    if parser is not None:
        return parser(title, _require_dict(content, f"'{title}' content", stage), stage)
    if isinstance(content, str) or content is None:
        return FreeTextSection(title=title, body=_text(content))
    raise GenerationFailure(stage, f"section '{title}' of type {section_type!r} has non-text content")


def parse_structured_document(data: Any) -> StructuredDocument:
    """Map the structured_content payload onto a StructuredDocument."""
    stage = "document"
    data = _require_dict(data, "response", stage)
    content = _require_dict(data.get("structured_content", data), "structured_content", stage)

    title_page = _require_dict(content.get("title_page") or {}, "title_page", stage)
    intro_page = content.get("introduction_page") or {}
    cta_page = _require_dict(content.get("cta_page") or {}, "cta_page", stage)
    raw_sections = _require_list(content.get("toolkit_sections", []), "toolkit_sections", stage)

    try:
        if isinstance(intro_page, dict):
            introduction = _text(intro_page.get("content"))
        elif isinstance(intro_page, list):
            introduction = tuple(_text(p) for p in intro_page)
        else:
            introduction = _text(intro_page)

        document = StructuredDocument(
            title_page=TitlePage(
                title=_text(title_page.get("title")),
                subtitle=_text(title_page.get("subtitle")),
            ),
            introduction=introduction,
            sections=tuple(parse_toolkit_section(s, stage) for s in raw_sections),
            call_to_action=CallToAction(
                title=_text(cta_page.get("title")),
                body=_text(cta_page.get("content")),
            ),
        )
    except (TypeError, AttributeError) as e:
        raise GenerationFailure(stage, f"malformed document: {e}") from e

    if not document.title_page.title:
        raise GenerationFailure(stage, "document has no title")
    return document

"""
Structured Document Model

The typed value a generation run produces and the renderer consumes:

    StructuredDocument
        title_page       TitlePage(title, subtitle)
        introduction     str | tuple of paragraphs
        sections         tuple of Section (closed tagged variant)
        call_to_action   CallToAction(title, body, action label, links)
        branding         Branding | None (attached by the customization merge)

A Section is exactly one of:

    ComparisonSection        items:     ComparisonItem(label, pros, cons, note)
    PhasedChecklistSection   phases:    ChecklistPhase(phase_title, items)
    ScriptsSection           scenarios: ScriptScenario(trigger, response, rationale)
    FreeTextSection          body:      str

`kind` fully determines which content fields exist. Nothing downstream
inspects field presence to guess a shape.

All values are frozen. Lists passed to constructors are normalised to
tuples so documents can be compared and shared between calls safely.
"""

import json
from dataclasses import dataclass, field, fields, is_dataclass, replace
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Tuple, Type, Union


# ============================================================================
# Enums
# ============================================================================

class SectionKind(Enum):
    """Closed set of section variants."""
    COMPARISON = "comparison"
    PHASED_CHECKLIST = "phasedChecklist"
    SCRIPTS = "scripts"
    FREE_TEXT = "freeText"


# ============================================================================
# Helpers
# ============================================================================

def is_blank(value: Any) -> bool:
    """
    Deep blank check.

    None and whitespace-only strings are blank; sequences and dataclasses
    are blank when every nested value is blank.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple)):
        return all(is_blank(v) for v in value)
    if is_dataclass(value):
        return all(is_blank(getattr(value, f.name)) for f in fields(value))
    return False


def _freeze(obj: Any, name: str, converter=tuple) -> None:
    """Normalise a list attribute of a frozen dataclass to a tuple."""
    value = getattr(obj, name)
    if isinstance(value, list):
        object.__setattr__(obj, name, converter(value))


def _optional_text(value: Optional[str]) -> Optional[str]:
    if value is None or not str(value).strip():
        return None
    return str(value)


# ============================================================================
# Section content items
# ============================================================================

@dataclass(frozen=True)
class ComparisonItem:
    """One row of a comparison table."""
    label: str
    pros: str
    cons: str
    note: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {"label": self.label, "pros": self.pros, "cons": self.cons}
        if self.note is not None:
            data["note"] = self.note
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ComparisonItem':
        return cls(
            label=str(data.get("label", "")),
            pros=str(data.get("pros", "")),
            cons=str(data.get("cons", "")),
            note=_optional_text(data.get("note")),
        )


@dataclass(frozen=True)
class ChecklistPhase:
    """A titled group of checklist items."""
    phase_title: str
    items: Tuple[str, ...] = ()

    def __post_init__(self):
        _freeze(self, "items")

    def pruned(self) -> 'ChecklistPhase':
        return replace(self, items=tuple(i for i in self.items if not is_blank(i)))

    def to_dict(self) -> Dict[str, Any]:
        return {"phaseTitle": self.phase_title, "items": list(self.items)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ChecklistPhase':
        return cls(
            phase_title=str(data.get("phaseTitle", "")),
            items=tuple(str(i) for i in data.get("items", [])),
        )


@dataclass(frozen=True)
class ScriptScenario:
    """A dialogue script: what they say, what you say, why it works."""
    trigger: str
    response: str
    rationale: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "trigger": self.trigger,
            "response": self.response,
            "rationale": self.rationale,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ScriptScenario':
        return cls(
            trigger=str(data.get("trigger", "")),
            response=str(data.get("response", "")),
            rationale=str(data.get("rationale", "")),
        )


# ============================================================================
# Sections
# ============================================================================

@dataclass(frozen=True)
class ComparisonSection:
    """Pros/cons comparison of approaches."""
    kind: ClassVar[SectionKind] = SectionKind.COMPARISON

    title: str
    items: Tuple[ComparisonItem, ...] = ()

    def __post_init__(self):
        _freeze(self, "items")

    def pruned(self) -> 'ComparisonSection':
        return replace(self, items=tuple(i for i in self.items if not is_blank(i)))

    def is_empty(self) -> bool:
        return not self.pruned().items

    def content_dict(self) -> Dict[str, Any]:
        return {"items": [i.to_dict() for i in self.items]}

    @classmethod
    def from_content(cls, title: str, data: Dict[str, Any]) -> 'ComparisonSection':
        return cls(title=title, items=tuple(ComparisonItem.from_dict(i) for i in data.get("items", [])))


@dataclass(frozen=True)
class PhasedChecklistSection:
    """Checklist grouped into phases."""
    kind: ClassVar[SectionKind] = SectionKind.PHASED_CHECKLIST

    title: str
    phases: Tuple[ChecklistPhase, ...] = ()

    def __post_init__(self):
        _freeze(self, "phases")

    def pruned(self) -> 'PhasedChecklistSection':
        phases = (p.pruned() for p in self.phases)
        return replace(self, phases=tuple(p for p in phases if p.items))

    def is_empty(self) -> bool:
        return not self.pruned().phases

    def content_dict(self) -> Dict[str, Any]:
        return {"phases": [p.to_dict() for p in self.phases]}

    @classmethod
    def from_content(cls, title: str, data: Dict[str, Any]) -> 'PhasedChecklistSection':
        return cls(title=title, phases=tuple(ChecklistPhase.from_dict(p) for p in data.get("phases", [])))


@dataclass(frozen=True)
class ScriptsSection:
    """Word-for-word dialogue scripts."""
    kind: ClassVar[SectionKind] = SectionKind.SCRIPTS

    title: str
    scenarios: Tuple[ScriptScenario, ...] = ()

    def __post_init__(self):
        _freeze(self, "scenarios")

    def pruned(self) -> 'ScriptsSection':
        return replace(self, scenarios=tuple(s for s in self.scenarios if not is_blank(s)))

    def is_empty(self) -> bool:
        return not self.pruned().scenarios

    def content_dict(self) -> Dict[str, Any]:
        return {"scenarios": [s.to_dict() for s in self.scenarios]}

    @classmethod
    def from_content(cls, title: str, data: Dict[str, Any]) -> 'ScriptsSection':
        return cls(title=title, scenarios=tuple(ScriptScenario.from_dict(s) for s in data.get("scenarios", [])))


@dataclass(frozen=True)
class FreeTextSection:
    """Plain prose; paragraphs separated by blank lines."""
    kind: ClassVar[SectionKind] = SectionKind.FREE_TEXT

    title: str
    body: str = ""

    def pruned(self) -> 'FreeTextSection':
        return self

    def is_empty(self) -> bool:
        return is_blank(self.body)

    def content_dict(self) -> Dict[str, Any]:
        return {"body": self.body}

    @classmethod
    def from_content(cls, title: str, data: Dict[str, Any]) -> 'FreeTextSection':
        return cls(title=title, body=str(data.get("body", "")))


Section = Union[ComparisonSection, PhasedChecklistSection, ScriptsSection, FreeTextSection]

SECTION_TYPES: Dict[SectionKind, Type] = {
    SectionKind.COMPARISON: ComparisonSection,
    SectionKind.PHASED_CHECKLIST: PhasedChecklistSection,
    SectionKind.SCRIPTS: ScriptsSection,
    SectionKind.FREE_TEXT: FreeTextSection,
}


def section_to_dict(section: Section) -> Dict[str, Any]:
    """Serialize a section with its `kind` tag."""
    data = {"kind": section.kind.value, "title": section.title}
    data.update(section.content_dict())
    return data


def section_from_dict(data: Dict[str, Any]) -> Section:
    """
    Deserialize a tagged section.

    Raises:
        ValueError: missing or unknown `kind`
    """
    try:
        kind = SectionKind(data["kind"])
    except (KeyError, ValueError):
        raise ValueError(f"Unknown section kind: {data.get('kind')!r}")
    return SECTION_TYPES[kind].from_content(str(data.get("title", "")), data)


# ============================================================================
# Document-level Classes
# ============================================================================

@dataclass(frozen=True)
class TitlePage:
    title: str
    subtitle: str = ""


@dataclass(frozen=True)
class CallToAction:
    """Closing page. Links and action label are filled by the customization merge."""
    title: str
    body: str
    action_label: Optional[str] = None
    booking_url: Optional[str] = None
    website_url: Optional[str] = None
    support_email: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "body": self.body,
            "actionLabel": self.action_label,
            "bookingUrl": self.booking_url,
            "websiteUrl": self.website_url,
            "supportEmail": self.support_email,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CallToAction':
        return cls(
            title=str(data.get("title", "")),
            body=str(data.get("body", "")),
            action_label=_optional_text(data.get("actionLabel")),
            booking_url=_optional_text(data.get("bookingUrl")),
            website_url=_optional_text(data.get("websiteUrl")),
            support_email=_optional_text(data.get("supportEmail")),
        )


@dataclass(frozen=True)
class Branding:
    """Visual identity attached to a customized document."""
    primary_color: str
    secondary_color: str
    font_family: str
    logo_data_uri: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "primaryColor": self.primary_color,
            "secondaryColor": self.secondary_color,
            "fontFamily": self.font_family,
            "logoDataUri": self.logo_data_uri,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Branding':
        return cls(
            primary_color=str(data["primaryColor"]),
            secondary_color=str(data["secondaryColor"]),
            font_family=str(data["fontFamily"]),
            logo_data_uri=_optional_text(data.get("logoDataUri")),
        )


@dataclass(frozen=True)
class StructuredDocument:
    """
    A generated lead magnet.

    Usage:
        doc = StructuredDocument(
            title_page=TitlePage("The Retail Playbook", "Five moves for small stores"),
            introduction="Why this guide exists.\\n\\nWhat you will get.",
            sections=[FreeTextSection("Foot traffic", "...")],
            call_to_action=CallToAction("Ready?", "Book a call."),
        )
        blocks = render(doc.without_empty_sections(), theme)
    """
    title_page: TitlePage
    introduction: Union[str, Tuple[str, ...]]
    sections: Tuple[Section, ...] = ()
    call_to_action: CallToAction = field(default_factory=lambda: CallToAction(title="", body=""))
    branding: Optional[Branding] = None

    def __post_init__(self):
        _freeze(self, "introduction")
        _freeze(self, "sections")

    def introduction_paragraphs(self) -> List[str]:
        """Introduction as a list of non-blank paragraphs."""
        if isinstance(self.introduction, str):
            return split_paragraphs(self.introduction)
        return [p.strip() for p in self.introduction if not is_blank(p)]

    def without_empty_sections(self) -> 'StructuredDocument':
        """Copy with blank nested entries dropped and empty sections removed."""
        kept = tuple(s.pruned() for s in self.sections if not s.is_empty())
        return replace(self, sections=kept)

    def get_statistics(self) -> Dict[str, int]:
        """Count sections per kind."""
        stats = {kind.value: 0 for kind in SectionKind}
        for section in self.sections:
            stats[section.kind.value] += 1
        stats["total"] = len(self.sections)
        return stats

    def to_dict(self) -> Dict[str, Any]:
        introduction = self.introduction
        if isinstance(introduction, tuple):
            introduction = list(introduction)
        return {
            "titlePage": {"title": self.title_page.title, "subtitle": self.title_page.subtitle},
            "introduction": introduction,
            "sections": [section_to_dict(s) for s in self.sections],
            "callToAction": self.call_to_action.to_dict(),
            "branding": self.branding.to_dict() if self.branding else None,
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'StructuredDocument':
        title_page = data.get("titlePage") or {}
        introduction = data.get("introduction", "")
        if isinstance(introduction, list):
            introduction = tuple(str(p) for p in introduction)
        branding = data.get("branding")
        return cls(
            title_page=TitlePage(
                title=str(title_page.get("title", "")),
                subtitle=str(title_page.get("subtitle", "")),
            ),
            introduction=introduction,
            sections=tuple(section_from_dict(s) for s in data.get("sections", [])),
            call_to_action=CallToAction.from_dict(data.get("callToAction") or {}),
            branding=Branding.from_dict(branding) if branding else None,
        )

    @classmethod
    def from_json(cls, json_str: str) -> 'StructuredDocument':
        return cls.from_dict(json.loads(json_str))

    def __repr__(self) -> str:
        return (f"StructuredDocument(title={self.title_page.title!r}, "
                f"sections={len(self.sections)})")


def split_paragraphs(text: str) -> List[str]:
    """Split text on blank-line boundaries, dropping empty paragraphs."""
    paragraphs = []
    current: List[str] = []
    for line in text.splitlines():
        if line.strip():
            current.append(line.strip())
        elif current:
            paragraphs.append(" ".join(current))
            current = []
    if current:
        paragraphs.append(" ".join(current))
    return paragraphs

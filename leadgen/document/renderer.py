"""
Document Renderer

Turns a StructuredDocument into an ordered list of themed RenderBlocks:

    StructuredDocument
         ↓  layout()        one block per comparison item / checklist phase /
         ↓                  script scenario / free-text section, plus title,
         ↓                  introduction and call-to-action blocks
    [RenderBlock] (unstyled)
         ↓  apply_theme()   pure function of colors, font and icon set
    [RenderBlock] (styled)
         ↓  paginate()      optional grouping for preview/export
    [RenderPage]

Page layout:
    page 1          title
    page 2          introduction (omitted when blank)
    page 3..n-1     one page per non-empty section ("Step i of k")
    page n          call to action

Rendering never mutates the source document and is deterministic: the same
document and theme always produce the same blocks (and the same JSON bytes
from render_json()), since preview and final export render separately.
"""

import json
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

from config.constants import DEFAULT_CTA_TITLE, DEFAULT_PRIMARY_ACTION_LABEL
from config.logging_config import get_logger

from .model import (
    SECTION_TYPES,
    ComparisonSection,
    FreeTextSection,
    PhasedChecklistSection,
    ScriptsSection,
    Section,
    SectionKind,
    StructuredDocument,
    split_paragraphs,
)
from .theme import CALL_TO_ACTION_ICON, RenderTheme

logger = get_logger(__name__)


# ============================================================================
# Render types
# ============================================================================

class RenderBlockType(Enum):
    """Kinds of blocks the renderer emits."""
    TITLE = "title"
    INTRODUCTION = "introduction"
    COMPARISON_ITEM = "comparison_item"
    CHECKLIST_PHASE = "checklist_phase"
    SCRIPT_SCENARIO = "script_scenario"
    FREE_TEXT = "free_text"
    CALL_TO_ACTION = "call_to_action"


class LineRole(Enum):
    """Semantic role of a line inside a block (drives styling)."""
    LOGO = "logo"
    HEADING = "heading"
    SUBTITLE = "subtitle"
    PARAGRAPH = "paragraph"
    BULLET = "bullet"
    LABEL = "label"
    PROS = "pros"
    CONS = "cons"
    NOTE = "note"
    CHECKLIST_ITEM = "checklist_item"
    TRIGGER = "trigger"
    RESPONSE = "response"
    RATIONALE = "rationale"
    ACTION = "action"
    LINK = "link"
    EMAIL = "email"


@dataclass(frozen=True)
class RenderLine:
    role: LineRole
    text: str
    prefix: str = ""  # e.g. "Pros", "You say"
    target: Optional[str] = None  # URL / mailto target for actions and links

    def to_dict(self) -> Dict[str, Any]:
        return {
            "role": self.role.value,
            "text": self.text,
            "prefix": self.prefix,
            "target": self.target,
        }


@dataclass(frozen=True)
class BlockStyle:
    """Resolved theme values for one block."""
    font_family: str
    heading_color: str
    accent_color: str
    background_color: str = "#ffffff"
    icon: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fontFamily": self.font_family,
            "headingColor": self.heading_color,
            "accentColor": self.accent_color,
            "backgroundColor": self.background_color,
            "icon": self.icon,
        }


@dataclass(frozen=True)
class RenderBlock:
    """A renderable unit placed on a page."""
    block_type: RenderBlockType
    page: int
    lines: Tuple[RenderLine, ...]
    heading: Optional[str] = None  # section title, on the first block of a section
    page_label: Optional[str] = None
    section_index: Optional[int] = None
    section_kind: Optional[SectionKind] = None
    style: Optional[BlockStyle] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "blockType": self.block_type.value,
            "page": self.page,
            "pageLabel": self.page_label,
            "heading": self.heading,
            "sectionIndex": self.section_index,
            "sectionKind": self.section_kind.value if self.section_kind else None,
            "lines": [line.to_dict() for line in self.lines],
            "style": self.style.to_dict() if self.style else None,
        }


@dataclass(frozen=True)
class RenderPage:
    number: int
    label: Optional[str]
    blocks: Tuple[RenderBlock, ...]


# ============================================================================
# Section layouts
# ============================================================================

def _layout_comparison(section: ComparisonSection) -> List[Tuple[RenderBlockType, Tuple[RenderLine, ...]]]:
    out = []
    for item in section.items:
        # blank fields get no row; an all-blank item gets no block
        candidates = [
            (LineRole.LABEL, item.label, ""),
            (LineRole.PROS, item.pros, "Pros"),
            (LineRole.CONS, item.cons, "Cons"),
            (LineRole.NOTE, item.note, "Pro Tip"),
        ]
        lines = [
            RenderLine(role, text.strip(), prefix=prefix)
            for role, text, prefix in candidates
            if text and text.strip()
        ]
        if not lines:
            continue
        out.append((RenderBlockType.COMPARISON_ITEM, tuple(lines)))
    return out


def _layout_checklist(section: PhasedChecklistSection) -> List[Tuple[RenderBlockType, Tuple[RenderLine, ...]]]:
    out = []
    for phase in section.phases:
        lines = [RenderLine(LineRole.LABEL, phase.phase_title.strip())]
        lines.extend(RenderLine(LineRole.CHECKLIST_ITEM, item.strip()) for item in phase.items)
        out.append((RenderBlockType.CHECKLIST_PHASE, tuple(lines)))
    return out


def _layout_scripts(section: ScriptsSection) -> List[Tuple[RenderBlockType, Tuple[RenderLine, ...]]]:
    out = []
    for number, scenario in enumerate(section.scenarios, start=1):
        lines = (
            RenderLine(LineRole.TRIGGER, scenario.trigger.strip(), prefix=f"Scenario {number}"),
            RenderLine(LineRole.RESPONSE, scenario.response.strip(), prefix="You say"),
            RenderLine(LineRole.RATIONALE, scenario.rationale.strip(), prefix="Why it works"),
        )
        out.append((RenderBlockType.SCRIPT_SCENARIO, lines))
    return out


def _layout_free_text(section: FreeTextSection) -> List[Tuple[RenderBlockType, Tuple[RenderLine, ...]]]:
    lines = tuple(RenderLine(LineRole.PARAGRAPH, p) for p in split_paragraphs(section.body))
    return [(RenderBlockType.FREE_TEXT, lines)]


_SECTION_LAYOUTS: Dict[type, Callable[[Any], List[Tuple[RenderBlockType, Tuple[RenderLine, ...]]]]] = {
    ComparisonSection: _layout_comparison,
    PhasedChecklistSection: _layout_checklist,
    ScriptsSection: _layout_scripts,
    FreeTextSection: _layout_free_text,
}

# Every section variant must have a layout
_missing = set(SECTION_TYPES.values()) - set(_SECTION_LAYOUTS)
if _missing:
    raise RuntimeError(f"No layout for section types: {sorted(t.__name__ for t in _missing)}")


def _layout_section(section: Section) -> List[Tuple[RenderBlockType, Tuple[RenderLine, ...]]]:
    layout = _SECTION_LAYOUTS.get(type(section))
    if layout is None:
        raise TypeError(f"Unsupported section type: {type(section).__name__}")
    return layout(section)


# ============================================================================
# Renderer
# ============================================================================

class DocumentRenderer:
    """
    Stateless renderer for StructuredDocument values.

    Usage:
        renderer = DocumentRenderer()
        blocks = renderer.render(document, RenderTheme())
        pages = renderer.paginate(blocks)
    """

    def render(self, document: StructuredDocument, theme: RenderTheme) -> List[RenderBlock]:
        """Layout the document and apply the theme."""
        blocks = self.apply_theme(self.layout(document), theme)
        logger.debug(f"Rendered {len(blocks)} blocks for {document.title_page.title!r}")
        return blocks

    def render_json(self, document: StructuredDocument, theme: RenderTheme) -> str:
        """Canonical JSON for the rendered blocks (stable key order)."""
        blocks = self.render(document, theme)
        return json.dumps([b.to_dict() for b in blocks], sort_keys=True, ensure_ascii=False)

    def layout(self, document: StructuredDocument) -> List[RenderBlock]:
        """Unstyled blocks in reading order. Empty sections are skipped."""
        cleaned = document.without_empty_sections()
        blocks: List[RenderBlock] = []
        page = 1

        title_lines = []
        if cleaned.branding and cleaned.branding.logo_data_uri:
            title_lines.append(RenderLine(LineRole.LOGO, "", target=cleaned.branding.logo_data_uri))
        title_lines.append(RenderLine(LineRole.HEADING, cleaned.title_page.title.strip()))
        if cleaned.title_page.subtitle.strip():
            title_lines.append(RenderLine(LineRole.SUBTITLE, cleaned.title_page.subtitle.strip()))
        blocks.append(RenderBlock(RenderBlockType.TITLE, page=page, lines=tuple(title_lines)))

        intro = cleaned.introduction_paragraphs()
        if intro:
            page += 1
            role = LineRole.PARAGRAPH if isinstance(cleaned.introduction, str) else LineRole.BULLET
            blocks.append(RenderBlock(
                RenderBlockType.INTRODUCTION,
                page=page,
                lines=tuple(RenderLine(role, p) for p in intro),
            ))

        step_count = len(cleaned.sections)
        for index, section in enumerate(cleaned.sections):
            page += 1
            for position, (block_type, lines) in enumerate(_layout_section(section)):
                blocks.append(RenderBlock(
                    block_type,
                    page=page,
                    lines=lines,
                    heading=section.title.strip() if position == 0 else None,
                    page_label=f"Step {index + 1} of {step_count}",
                    section_index=index,
                    section_kind=section.kind,
                ))

        page += 1
        blocks.append(RenderBlock(
            RenderBlockType.CALL_TO_ACTION,
            page=page,
            lines=self._call_to_action_lines(cleaned),
        ))
        return blocks

    @staticmethod
    def _call_to_action_lines(document: StructuredDocument) -> Tuple[RenderLine, ...]:
        cta = document.call_to_action
        lines = [RenderLine(LineRole.HEADING, cta.title.strip() or DEFAULT_CTA_TITLE)]
        lines.extend(RenderLine(LineRole.PARAGRAPH, p) for p in split_paragraphs(cta.body))
        if cta.booking_url:
            label = cta.action_label or DEFAULT_PRIMARY_ACTION_LABEL
            lines.append(RenderLine(LineRole.ACTION, label, target=cta.booking_url))
        if cta.website_url:
            lines.append(RenderLine(LineRole.LINK, "Explore the tool", target=cta.website_url))
        if cta.support_email:
            lines.append(RenderLine(
                LineRole.EMAIL, "Questions?", target=f"mailto:{cta.support_email}",
            ))
        return tuple(lines)

    def apply_theme(self, blocks: List[RenderBlock], theme: RenderTheme) -> List[RenderBlock]:
        """Return new blocks with styles resolved from the theme."""
        return [replace(b, style=self._style_for(b, theme)) for b in blocks]

    @staticmethod
    def _style_for(block: RenderBlock, theme: RenderTheme) -> BlockStyle:
        if block.block_type is RenderBlockType.CALL_TO_ACTION:
            return BlockStyle(
                font_family=theme.font_family,
                heading_color="#ffffff",
                accent_color=theme.secondary_color,
                background_color=theme.primary_color,
                icon=CALL_TO_ACTION_ICON,
            )
        icon = theme.icon_for(block.section_kind) if block.section_kind else ""
        return BlockStyle(
            font_family=theme.font_family,
            heading_color=theme.primary_color,
            accent_color=theme.secondary_color,
            icon=icon,
        )

    @staticmethod
    def paginate(blocks: List[RenderBlock]) -> List[RenderPage]:
        """Group consecutive blocks by page number."""
        pages: List[RenderPage] = []
        current: List[RenderBlock] = []
        for block in blocks:
            if current and block.page != current[0].page:
                pages.append(RenderPage(current[0].page, current[0].page_label, tuple(current)))
                current = []
            current.append(block)
        if current:
            pages.append(RenderPage(current[0].page, current[0].page_label, tuple(current)))
        return pages


_default_renderer = DocumentRenderer()


def render(document: StructuredDocument, theme: Optional[RenderTheme] = None) -> List[RenderBlock]:
    """Module-level shortcut for DocumentRenderer().render()."""
    return _default_renderer.render(document, theme or RenderTheme.from_branding(document.branding))


def render_json(document: StructuredDocument, theme: Optional[RenderTheme] = None) -> str:
    """Module-level shortcut for DocumentRenderer().render_json()."""
    return _default_renderer.render_json(document, theme or RenderTheme.from_branding(document.branding))

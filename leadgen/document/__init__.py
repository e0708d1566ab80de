"""
Structured document model, theme and renderer.
"""

from .model import (
    SectionKind,
    ComparisonItem,
    ChecklistPhase,
    ScriptScenario,
    ComparisonSection,
    PhasedChecklistSection,
    ScriptsSection,
    FreeTextSection,
    Section,
    SECTION_TYPES,
    section_to_dict,
    section_from_dict,
    TitlePage,
    CallToAction,
    Branding,
    StructuredDocument,
    is_blank,
    split_paragraphs,
)
from .theme import RenderTheme, DEFAULT_ICONS, CALL_TO_ACTION_ICON
from .renderer import (
    RenderBlockType,
    LineRole,
    RenderLine,
    BlockStyle,
    RenderBlock,
    RenderPage,
    DocumentRenderer,
    render,
    render_json,
)
from .text_export import blocks_to_markdown

__all__ = [
    # Model
    'SectionKind',
    'ComparisonItem',
    'ChecklistPhase',
    'ScriptScenario',
    'ComparisonSection',
    'PhasedChecklistSection',
    'ScriptsSection',
    'FreeTextSection',
    'Section',
    'SECTION_TYPES',
    'section_to_dict',
    'section_from_dict',
    'TitlePage',
    'CallToAction',
    'Branding',
    'StructuredDocument',
    'is_blank',
    'split_paragraphs',
    # Theme
    'RenderTheme',
    'DEFAULT_ICONS',
    'CALL_TO_ACTION_ICON',
    # Renderer
    'RenderBlockType',
    'LineRole',
    'RenderLine',
    'BlockStyle',
    'RenderBlock',
    'RenderPage',
    'DocumentRenderer',
    'render',
    'render_json',
    'blocks_to_markdown',
]

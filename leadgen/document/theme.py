"""
Render theme: colors, font and the icon set used by the section renderer.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from config.constants import (
    DEFAULT_PRIMARY_COLOR,
    DEFAULT_SECONDARY_COLOR,
    DEFAULT_FONT_FAMILY,
)

from .model import Branding, SectionKind


DEFAULT_ICONS: Dict[SectionKind, str] = {
    SectionKind.COMPARISON: "🧠",
    SectionKind.PHASED_CHECKLIST: "✅",
    SectionKind.SCRIPTS: "💬",
    SectionKind.FREE_TEXT: "📄",
}

CALL_TO_ACTION_ICON = "🎯"
CHECKBOX_ICON = "🔲"


@dataclass(frozen=True)
class RenderTheme:
    """
    Everything the renderer needs to style blocks.

    Icons are stored as an ordered tuple of (kind, icon) pairs so the
    theme stays hashable and iteration order is fixed.
    """
    primary_color: str = DEFAULT_PRIMARY_COLOR
    secondary_color: str = DEFAULT_SECONDARY_COLOR
    font_family: str = DEFAULT_FONT_FAMILY
    icons: Tuple[Tuple[SectionKind, str], ...] = field(
        default_factory=lambda: tuple(DEFAULT_ICONS.items())
    )

    def icon_for(self, kind: SectionKind) -> str:
        for icon_kind, icon in self.icons:
            if icon_kind is kind:
                return icon
        return DEFAULT_ICONS[kind]

    @classmethod
    def from_branding(cls, branding: Optional[Branding]) -> 'RenderTheme':
        """Theme for a merged document; defaults when it carries no branding."""
        if branding is None:
            return cls()
        return cls(
            primary_color=branding.primary_color,
            secondary_color=branding.secondary_color,
            font_family=branding.font_family,
        )

"""
Markdown export of rendered blocks.

Walks the block list produced by DocumentRenderer and writes one markdown
fragment per block. Used by the preview endpoint and for plain-text downloads.
"""

from typing import List

from .renderer import LineRole, RenderBlock, RenderBlockType, RenderLine
from .theme import CHECKBOX_ICON


def _line_to_markdown(line: RenderLine) -> str:
    if line.role is LineRole.LOGO:
        return f"![logo]({line.target})"
    if line.role is LineRole.HEADING:
        return f"# {line.text}"
    if line.role is LineRole.SUBTITLE:
        return f"_{line.text}_"
    if line.role is LineRole.LABEL:
        return f"### {line.text}"
    if line.role is LineRole.BULLET:
        return f"- {line.text}"
    if line.role is LineRole.CHECKLIST_ITEM:
        return f"- {CHECKBOX_ICON} {line.text}"
    if line.role in (LineRole.ACTION, LineRole.LINK, LineRole.EMAIL):
        return f"[{line.text}]({line.target})"
    if line.prefix:
        return f"**{line.prefix}:** {line.text}"
    return line.text


def block_to_markdown(block: RenderBlock) -> str:
    parts = []
    if block.page_label and block.heading:
        parts.append(f"*{block.page_label}*")
    if block.heading:
        icon = block.style.icon if block.style else ""
        parts.append(f"## {icon} {block.heading}".replace("  ", " "))
    parts.extend(_line_to_markdown(line) for line in block.lines)
    return "\n\n".join(parts)


def blocks_to_markdown(blocks: List[RenderBlock]) -> str:
    """
    Render a block list as markdown.

    Pages are separated by a horizontal rule.
    """
    chunks: List[str] = []
    last_page = None
    for block in blocks:
        if last_page is not None and block.page != last_page:
            chunks.append("---")
        if block.block_type is RenderBlockType.CALL_TO_ACTION and block.style and block.style.icon:
            chunks.append(block.style.icon)
        chunks.append(block_to_markdown(block))
        last_page = block.page
    return "\n\n".join(chunks) + "\n"

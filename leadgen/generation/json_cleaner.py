"""
Cleanup for JSON returned by chat models.

Models wrap JSON in code fences, prepend commentary, use smart quotes, leave
trailing commas or put raw newlines inside strings. clean_json_response()
undoes those locally; anything still unparseable raises JSONCleanError so the
caller can decide whether to ask the model for a repair.
"""

import json
import re
from typing import Any, Optional, Tuple

from config.logging_config import get_logger

logger = get_logger(__name__)

_FENCE_START = re.compile(r"^\s*```(?:json)?\s*", re.IGNORECASE)
_FENCE_END = re.compile(r"\s*```\s*$")
_TRAILING_COMMA = re.compile(r",\s*([}\]])")
_SINGLE_QUOTES = re.compile("[‘’‚‛′]")
_DOUBLE_QUOTES = re.compile("[“”„‟″]")


class JSONCleanError(ValueError):
    """Response could not be turned into valid JSON."""

    def __init__(self, message: str, cleaned: str = ""):
        self.cleaned = cleaned
        super().__init__(message)


def strip_code_fences(text: str) -> str:
    text = _FENCE_START.sub("", text.strip())
    return _FENCE_END.sub("", text).strip()


def extract_balanced_block(text: str) -> Optional[str]:
    """
    First balanced {...} or [...] block, skipping brackets inside strings.

    Returns None when no opening bracket exists or the block never closes.
    """
    starts = [i for i in (text.find("{"), text.find("[")) if i != -1]
    if not starts:
        return None
    start = min(starts)
    opener = text[start]
    closer = "}" if opener == "{" else "]"

    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == opener:
            depth += 1
        elif ch == closer:
            depth -= 1
            if depth == 0:
                return text[start:i + 1]
    return None


def escape_newlines_in_strings(text: str) -> str:
    """Escape raw CR/LF inside string literals and drop NUL characters."""
    out = []
    in_string = False
    escaped = False
    i = 0
    while i < len(text):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            elif ch in "\r\n":
                if ch == "\r" and text[i + 1:i + 2] == "\n":
                    i += 1
                out.append("\\n")
                i += 1
                continue
            elif ch == "\x00":
                i += 1
                continue
        elif ch == '"':
            in_string = True
        out.append(ch)
        i += 1
    return "".join(out)


def clean_json_response(response: str) -> str:
    """
    Best-effort local repair of a model's JSON answer.

    Returns:
        A string that json.loads() accepts

    Raises:
        JSONCleanError: still invalid after every local fix
    """
    cleaned = strip_code_fences(response or "")
    cleaned = _SINGLE_QUOTES.sub("'", cleaned)
    cleaned = _DOUBLE_QUOTES.sub('"', cleaned)

    block = extract_balanced_block(cleaned)
    if block is not None:
        cleaned = block

    cleaned = _TRAILING_COMMA.sub(r"\1", cleaned)
    cleaned = escape_newlines_in_strings(cleaned).strip()

    try:
        json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.warning(f"Local JSON cleanup failed: {e}")
        raise JSONCleanError(f"Invalid JSON after cleanup: {e}", cleaned=cleaned) from e
    return cleaned


def parse_json_response(response: str) -> Tuple[Any, str]:
    """Clean and parse; returns (value, cleaned_text)."""
    cleaned = clean_json_response(response)
    return json.loads(cleaned), cleaned

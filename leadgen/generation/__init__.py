"""
Content generators: LLM-backed and offline template.
"""

from .json_cleaner import (
    JSONCleanError,
    clean_json_response,
    parse_json_response,
    strip_code_fences,
    extract_balanced_block,
)
from .document_parser import (
    parse_concepts,
    parse_outline,
    parse_structured_document,
    parse_toolkit_section,
)
from .llm_generator import LLMContentGenerator, build_provider_manager
from .template_generator import TemplateContentGenerator
from .factory import build_generator

__all__ = [
    'JSONCleanError',
    'clean_json_response',
    'parse_json_response',
    'strip_code_fences',
    'extract_balanced_block',
    'parse_concepts',
    'parse_outline',
    'parse_structured_document',
    'parse_toolkit_section',
    'LLMContentGenerator',
    'build_provider_manager',
    'TemplateContentGenerator',
    'build_generator',
]

"""
Pick the content generator for the current settings.
"""

from config.logging_config import get_logger
from config.settings import Settings

from ..pipeline.collaborators import ContentGenerator
from .llm_generator import LLMContentGenerator
from .template_generator import TemplateContentGenerator

logger = get_logger(__name__)


def build_generator(settings: Settings) -> ContentGenerator:
    """LLM generator when a key is configured, offline templates otherwise."""
    if settings.use_template_generator or not settings.has_api_key():
        logger.info("Using offline template generator")
        return TemplateContentGenerator(concept_count=settings.concept_count)
    logger.info(f"Using LLM generator ({settings.provider})")
    return LLMContentGenerator.from_settings(settings)

"""
LLM-backed content generator.

Implements the ContentGenerator contract on top of AIProviderManager:

    prompt → provider.complete() → clean_json_response()
                                     ↓ JSONCleanError
                                   one repair call at temperature 0 (optional)
                                     ↓
                                   document_parser → Concept / Outline / StructuredDocument

Every failure (provider error, empty answer, bad JSON, wrong shape) surfaces
as GenerationFailure naming the stage.
"""

import json
from typing import Any, List, Optional

from ai_providers import AIMessage, AIProviderManager, create_provider_manager
from config.constants import JSON_FIX_MAX_TOKENS, JSON_FIX_TEMPERATURE
from config.logging_config import get_logger
from config.settings import Settings, get_settings

from ..document.model import StructuredDocument
from ..errors import GenerationFailure
from ..pipeline.inputs import CampaignInput, Concept, Outline
from . import prompts
from .document_parser import parse_concepts, parse_outline, parse_structured_document
from .json_cleaner import JSONCleanError, clean_json_response, strip_code_fences

logger = get_logger(__name__)


def build_provider_manager(settings: Settings) -> AIProviderManager:
    """Provider manager for the configured provider, keys taken from settings."""
    return create_provider_manager(
        settings.provider,
        api_keys={
            "openai": settings.openai_api_key,
            "anthropic": settings.anthropic_api_key,
        },
        default_model=settings.model,
    )


class LLMContentGenerator:
    """
    Usage:
        generator = LLMContentGenerator.from_settings(get_settings())
        concepts = await generator.generate_concepts(campaign)
    """

    def __init__(self, manager: AIProviderManager, settings: Optional[Settings] = None):
        self.manager = manager
        self.settings = settings or get_settings()

    @classmethod
    def from_settings(cls, settings: Settings) -> 'LLMContentGenerator':
        return cls(build_provider_manager(settings), settings)

    # ------------------------------------------------------------------
    # ContentGenerator
    # ------------------------------------------------------------------

    async def generate_concepts(self, campaign: CampaignInput) -> List[Concept]:
        count = self.settings.concept_count
        data = await self._ask_json(
            stage="concepts",
            system_prompt=prompts.CONCEPTS_SYSTEM_PROMPT.format(count=count),
            prompt=prompts.build_concepts_prompt(campaign, count),
            max_tokens=self.settings.outline_max_tokens,
        )
        concepts = parse_concepts(data)
        logger.info(f"Generated {len(concepts)} concepts for {campaign.brand_name}")
        return concepts[:count]

    async def generate_outline(self, campaign: CampaignInput, concept: Concept) -> Outline:
        data = await self._ask_json(
            stage="outline",
            system_prompt=prompts.OUTLINE_SYSTEM_PROMPT,
            prompt=prompts.build_outline_prompt(campaign, concept),
            max_tokens=self.settings.outline_max_tokens,
        )
        return parse_outline(data)

    async def generate_final_document(self, campaign: CampaignInput, outline: Outline) -> StructuredDocument:
        data = await self._ask_json(
            stage="document",
            system_prompt=prompts.DOCUMENT_SYSTEM_PROMPT,
            prompt=prompts.build_document_prompt(campaign, outline),
            max_tokens=self.settings.generation_max_tokens,
        )
        document = parse_structured_document(data)
        logger.info(f"Generated document {document!r}")
        return document

    # ------------------------------------------------------------------
    # Model calls
    # ------------------------------------------------------------------

    async def _complete(self, stage: str, system_prompt: str, prompt: str, **kwargs) -> str:
        try:
            response = await self.manager.complete(
                [AIMessage(role="user", content=prompt)],
                system_prompt=system_prompt,
                **kwargs,
            )
        except Exception as e:
            logger.error(f"Provider call failed during {stage}: {e}")
            raise GenerationFailure(stage, f"provider error: {e}") from e

        if not response.content or not response.content.strip():
            raise GenerationFailure(stage, "empty response from model")
        return response.content

    async def _ask_json(self, stage: str, system_prompt: str, prompt: str, max_tokens: int) -> Any:
        content = await self._complete(
            stage,
            system_prompt,
            prompt,
            temperature=self.settings.generation_temperature,
            max_tokens=max_tokens,
        )
        try:
            return json.loads(clean_json_response(content))
        except JSONCleanError as e:
            if not self.settings.json_repair_enabled:
                raise GenerationFailure(stage, str(e)) from e
            logger.warning(f"Local JSON parse failed during {stage}, asking model to repair")
            return await self._repair_json(stage, content)

    async def _repair_json(self, stage: str, content: str) -> Any:
        fixed = await self._complete(
            stage,
            prompts.JSON_FIX_SYSTEM_PROMPT,
            prompts.JSON_FIX_PROMPT.format(content=content),
            temperature=JSON_FIX_TEMPERATURE,
            max_tokens=JSON_FIX_MAX_TOKENS,
        )
        try:
            return json.loads(strip_code_fences(fixed))
        except json.JSONDecodeError as e:
            logger.error(f"JSON repair failed during {stage}. Original response: {content[:500]}")
            raise GenerationFailure(stage, "response was not valid JSON and repair failed") from e

"""
OpenAI Provider - GPT-4o, GPT-4o mini, etc.
LeadGen Studio - Multi-Provider Support
"""

from typing import Optional, List, Dict, Any

from openai import AsyncOpenAI

from .base import (
    BaseAIProvider,
    AIProviderType,
    AIMessage,
    AIResponse,
)


class OpenAIProvider(BaseAIProvider):
    """
    OpenAI GPT Provider (chat completions).
    """

    MODELS = {
        "gpt-4o": "GPT-4o (Latest)",
        "gpt-4o-mini": "GPT-4o Mini (Fast)",
        "gpt-4-turbo": "GPT-4 Turbo",
        "gpt-3.5-turbo": "GPT-3.5 Turbo",
    }

    DEFAULT_MODEL = "gpt-4o-mini"

    @property
    def provider_type(self) -> AIProviderType:
        return AIProviderType.OPENAI

    @property
    def supported_models(self) -> List[str]:
        return list(self.MODELS.keys())

    async def initialize(self) -> None:
        """Initialize OpenAI client"""
        self._client = AsyncOpenAI(
            api_key=self.config.api_key,
            base_url=self.config.base_url
        )

    def _convert_messages(
        self,
        messages: List[AIMessage],
        system_prompt: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """Convert AIMessage to OpenAI format; the system prompt goes first"""
        converted = []
        if system_prompt:
            converted.append({"role": "system", "content": system_prompt})
        for msg in messages:
            converted.append({"role": msg.role, "content": msg.content})
        return converted

    async def complete(
        self,
        messages: List[AIMessage],
        system_prompt: Optional[str] = None,
        **kwargs
    ) -> AIResponse:
        """Generate completion using OpenAI"""
        if not self._client:
            await self.initialize()

        response = await self._client.chat.completions.create(
            model=kwargs.get("model", self.config.model),
            max_tokens=kwargs.get("max_tokens", self.config.max_tokens),
            temperature=kwargs.get("temperature", self.config.temperature),
            messages=self._convert_messages(messages, system_prompt)
        )

        choice = response.choices[0]

        return AIResponse(
            content=choice.message.content or "",
            model=response.model,
            provider=self.provider_type,
            usage={
                "input_tokens": response.usage.prompt_tokens,
                "output_tokens": response.usage.completion_tokens
            } if response.usage else None,
            finish_reason=choice.finish_reason,
            raw_response=response
        )

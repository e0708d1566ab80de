"""
Claude AI Provider - Anthropic
LeadGen Studio - Multi-Provider Support
"""

from typing import Optional, List, Dict, Any

import anthropic

from .base import (
    BaseAIProvider,
    AIProviderType,
    AIMessage,
    AIResponse,
)


class ClaudeProvider(BaseAIProvider):
    """
    Anthropic Claude Provider (messages API).
    """

    MODELS = {
        "claude-sonnet-4-20250514": "Claude Sonnet 4 (Latest)",
        "claude-3-5-sonnet-20241022": "Claude 3.5 Sonnet",
        "claude-3-5-haiku-20241022": "Claude 3.5 Haiku (Fast)",
    }

    DEFAULT_MODEL = "claude-sonnet-4-20250514"

    @property
    def provider_type(self) -> AIProviderType:
        return AIProviderType.CLAUDE

    @property
    def supported_models(self) -> List[str]:
        return list(self.MODELS.keys())

    async def initialize(self) -> None:
        """Initialize Anthropic client"""
        self._client = anthropic.AsyncAnthropic(
            api_key=self.config.api_key,
            base_url=self.config.base_url
        )

    def _convert_messages(self, messages: List[AIMessage]) -> List[Dict[str, Any]]:
        """Convert AIMessage to Anthropic format"""
        return [{"role": msg.role, "content": msg.content} for msg in messages]

    async def complete(
        self,
        messages: List[AIMessage],
        system_prompt: Optional[str] = None,
        **kwargs
    ) -> AIResponse:
        """Generate completion using Claude"""
        if not self._client:
            await self.initialize()

        response = await self._client.messages.create(
            model=kwargs.get("model", self.config.model),
            max_tokens=kwargs.get("max_tokens", self.config.max_tokens),
            temperature=kwargs.get("temperature", self.config.temperature),
            system=system_prompt or "",
            messages=self._convert_messages(messages)
        )

        text = "".join(
            block.text for block in response.content if getattr(block, "type", "text") == "text"
        )

        return AIResponse(
            content=text,
            model=response.model,
            provider=self.provider_type,
            usage={
                "input_tokens": response.usage.input_tokens,
                "output_tokens": response.usage.output_tokens
            },
            finish_reason=response.stop_reason,
            raw_response=response
        )

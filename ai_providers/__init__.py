"""
AI Providers Package
LeadGen Studio - Multi-Provider Support

Supports:
- OpenAI GPT (gpt-4o, gpt-4o-mini, etc.)
- Anthropic Claude (claude-sonnet-4, claude-3.5-haiku, etc.)

Usage:
    from ai_providers import create_provider_manager, AIMessage

    manager = create_provider_manager("openai")

    response = await manager.complete(
        [AIMessage(role="user", content="Three lead magnet ideas for dentists")],
        system_prompt="Return valid JSON.",
    )
    print(response.content)
"""

from .base import (
    BaseAIProvider,
    AIProviderType,
    AIMessage,
    AIResponse,
    AIConfig
)

from .claude_provider import ClaudeProvider
from .openai_provider import OpenAIProvider

from .manager import (
    AIProviderManager,
    ProviderInfo,
    PROVIDER_REGISTRY,
    PROVIDER_INFO,
    PROVIDER_ALIASES,
    create_provider_manager
)

__all__ = [
    # Base classes
    "BaseAIProvider",
    "AIProviderType",
    "AIMessage",
    "AIResponse",
    "AIConfig",

    # Providers
    "ClaudeProvider",
    "OpenAIProvider",

    # Manager
    "AIProviderManager",
    "ProviderInfo",
    "PROVIDER_REGISTRY",
    "PROVIDER_INFO",
    "PROVIDER_ALIASES",
    "create_provider_manager",
]

__version__ = "1.0.0"

"""
Wizard Service

Wires settings, the content generator, the subscription directory, the
session store and the campaign sink together for the HTTP layer.
"""

from typing import Dict, List, Optional

from ai_providers import AIProviderManager
from config.logging_config import get_logger
from config.settings import Settings, get_settings
from leadgen.customization import CustomizationOptions
from leadgen.entitlements import InMemorySubscriptionDirectory
from leadgen.generation import LLMContentGenerator, build_generator, build_provider_manager
from leadgen.pipeline import CompleteStage, ContentGenerator, GenerationPipeline

from .session_store import InMemoryCampaignSink, SessionStore, WizardSession

logger = get_logger(__name__)


class WizardService:
    """
    Usage:
        service = WizardService(settings)
        session = service.sessions.create("user-1")
        await session.pipeline.submit(campaign)
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        generator: Optional[ContentGenerator] = None,
        directory: Optional[InMemorySubscriptionDirectory] = None,
    ):
        self.settings = settings or get_settings()
        self.generator = generator or build_generator(self.settings)
        self.providers: AIProviderManager = (
            self.generator.manager
            if isinstance(self.generator, LLMContentGenerator)
            else build_provider_manager(self.settings)
        )
        self.directory = directory or InMemorySubscriptionDirectory()
        self.sink = InMemoryCampaignSink()
        self.sessions = SessionStore(self._new_pipeline)

    def _new_pipeline(self, user_id: str) -> GenerationPipeline:
        return GenerationPipeline(
            self.generator,
            self.directory.get_subscription_tier,
            user_id,
            concept_count=self.settings.concept_count,
        )

    def default_customization(self) -> CustomizationOptions:
        return CustomizationOptions(
            primary_color=self.settings.default_primary_color,
            secondary_color=self.settings.default_secondary_color,
            font_family=self.settings.default_font_family,
        )

    async def store_if_complete(self, session: WizardSession) -> None:
        """Persist the finished document once per completed run."""
        state = session.pipeline.state
        if isinstance(state, CompleteStage) and session.record_id is None:
            session.record_id = await self.sink.persist_document(
                state.input, state.document, user_id=session.user_id,
            )
            self.directory.record_campaign(session.user_id)

    @property
    def generator_name(self) -> str:
        return type(self.generator).__name__

    def available_providers(self) -> List[str]:
        """Providers with an API key configured."""
        return [info.type.value for info in self.providers.get_available_providers()]

    async def check_providers(self) -> Dict[str, bool]:
        """Live round trip to every configured provider."""
        return await self.providers.health_check()


_service: Optional[WizardService] = None


def get_wizard_service() -> WizardService:
    """Get or create service singleton."""
    global _service
    if _service is None:
        _service = WizardService()
    return _service

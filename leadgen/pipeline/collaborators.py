"""
Contracts for the services the pipeline calls out to.

The pipeline never does I/O itself; everything async goes through these.
"""

from typing import Awaitable, Callable, List, Protocol, runtime_checkable

from ..document.model import StructuredDocument
from ..entitlements.tiers import SubscriptionTier
from .inputs import CampaignInput, Concept, Outline


@runtime_checkable
class ContentGenerator(Protocol):
    """
    Produces concepts, outlines and final documents.

    Implementations raise GenerationFailure on any error or malformed result.
    """

    async def generate_concepts(self, campaign: CampaignInput) -> List[Concept]:
        ...

    async def generate_outline(self, campaign: CampaignInput, concept: Concept) -> Outline:
        ...

    async def generate_final_document(self, campaign: CampaignInput, outline: Outline) -> StructuredDocument:
        ...


# (user_id) -> tier; raises EntitlementLookupFailure
SubscriptionTierLookup = Callable[[str], Awaitable[SubscriptionTier]]


@runtime_checkable
class DocumentSink(Protocol):
    """Persists a completed document. Called by the application, not the pipeline."""

    async def persist_document(self, campaign: CampaignInput, document: StructuredDocument) -> str:
        ...

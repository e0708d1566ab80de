"""
Pipeline states.

PipelineState is a closed union of frozen stage values. Each stage carries
only the data that exists at that point of the wizard:

    InputStage          previous input (prefill) and last submit error
    ConceptsStage       input, concepts
    OutlineReviewStage  + selected concept, pending customization,
                          generated outline, editable draft
    GateBlockedStage    + approved outline, tier (if known), block reason
    GeneratingStage     + approved outline, tier
    CompleteStage       input, concept, outline, final document
    FailedStage         stage that failed + everything needed to retry it
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, Optional, Tuple, Union

from ..customization.options import CustomizationOptions
from ..document.model import StructuredDocument
from ..entitlements.tiers import SubscriptionTier
from ..errors import EntitlementLookupFailure, GenerationFailure
from .inputs import CampaignInput, Concept, Outline, OutlineDraft


class PipelineStage(Enum):
    INPUT = "input"
    CONCEPTS = "concepts"
    OUTLINE_REVIEW = "outline_review"
    GATE_BLOCKED = "gate_blocked"
    GENERATING = "generating"
    COMPLETE = "complete"
    FAILED = "failed"


class GateBlockReason(Enum):
    NOT_ENTITLED = "not_entitled"
    LOOKUP_FAILED = "lookup_failed"


def _customization_dict(customization: Optional[CustomizationOptions]) -> Optional[Dict[str, Any]]:
    return customization.to_dict() if customization is not None else None


@dataclass(frozen=True)
class InputStage:
    stage: ClassVar[PipelineStage] = PipelineStage.INPUT

    previous_input: Optional[CampaignInput] = None
    error: Optional[GenerationFailure] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "stage": self.stage.value,
            "previousInput": self.previous_input.to_dict() if self.previous_input else None,
            "error": str(self.error) if self.error else None,
        }


@dataclass(frozen=True)
class ConceptsStage:
    stage: ClassVar[PipelineStage] = PipelineStage.CONCEPTS

    input: CampaignInput
    concepts: Tuple[Concept, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "stage": self.stage.value,
            "input": self.input.to_dict(),
            "concepts": [c.to_dict() for c in self.concepts],
        }


@dataclass(frozen=True)
class OutlineReviewStage:
    stage: ClassVar[PipelineStage] = PipelineStage.OUTLINE_REVIEW

    input: CampaignInput
    concepts: Tuple[Concept, ...]
    concept: Concept
    customization: Optional[CustomizationOptions]
    generated_outline: Outline
    draft: OutlineDraft

    def to_dict(self) -> Dict[str, Any]:
        return {
            "stage": self.stage.value,
            "input": self.input.to_dict(),
            "concepts": [c.to_dict() for c in self.concepts],
            "concept": self.concept.to_dict(),
            "customization": _customization_dict(self.customization),
            "outline": {
                "title": self.draft.title,
                "introduction": self.draft.introduction,
                "corePoints": list(self.draft.core_points),
            },
            "reviewToken": self.draft.review_token,
        }


@dataclass(frozen=True)
class GateBlockedStage:
    stage: ClassVar[PipelineStage] = PipelineStage.GATE_BLOCKED

    input: CampaignInput
    concepts: Tuple[Concept, ...]
    concept: Concept
    customization: Optional[CustomizationOptions]
    outline: Outline
    reason: GateBlockReason
    tier: Optional[SubscriptionTier] = None
    error: Optional[EntitlementLookupFailure] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "stage": self.stage.value,
            "concept": self.concept.to_dict(),
            "outline": self.outline.to_dict(),
            "reason": self.reason.value,
            "tier": self.tier.value if self.tier else None,
            "error": str(self.error) if self.error else None,
        }


@dataclass(frozen=True)
class GeneratingStage:
    stage: ClassVar[PipelineStage] = PipelineStage.GENERATING

    input: CampaignInput
    concepts: Tuple[Concept, ...]
    concept: Concept
    customization: Optional[CustomizationOptions]
    outline: Outline
    tier: SubscriptionTier

    def to_dict(self) -> Dict[str, Any]:
        return {
            "stage": self.stage.value,
            "concept": self.concept.to_dict(),
            "outline": self.outline.to_dict(),
            "tier": self.tier.value,
        }


@dataclass(frozen=True)
class CompleteStage:
    stage: ClassVar[PipelineStage] = PipelineStage.COMPLETE

    input: CampaignInput
    concept: Concept
    outline: Outline
    document: StructuredDocument
    customization: Optional[CustomizationOptions] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "stage": self.stage.value,
            "input": self.input.to_dict(),
            "concept": self.concept.to_dict(),
            "outline": self.outline.to_dict(),
            "document": self.document.to_dict(),
        }


@dataclass(frozen=True)
class FailedStage:
    """
    A collaborator call failed.

    failed_stage is OUTLINE_REVIEW (outline generation after select) or
    GENERATING (final document); outline is set only for the latter.
    """
    stage: ClassVar[PipelineStage] = PipelineStage.FAILED

    failed_stage: PipelineStage
    input: CampaignInput
    concepts: Tuple[Concept, ...]
    concept: Concept
    customization: Optional[CustomizationOptions]
    error: GenerationFailure
    outline: Optional[Outline] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "stage": self.stage.value,
            "failedStage": self.failed_stage.value,
            "concept": self.concept.to_dict(),
            "outline": self.outline.to_dict() if self.outline else None,
            "error": str(self.error),
        }


PipelineState = Union[
    InputStage,
    ConceptsStage,
    OutlineReviewStage,
    GateBlockedStage,
    GeneratingStage,
    CompleteStage,
    FailedStage,
]

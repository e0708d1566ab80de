"""
Wizard state machine: input → concepts → outline → gate → document.
"""

from .inputs import Tone, CampaignInput, Concept, Outline, OutlineDraft, new_concept_ids
from .states import (
    PipelineStage,
    GateBlockReason,
    InputStage,
    ConceptsStage,
    OutlineReviewStage,
    GateBlockedStage,
    GeneratingStage,
    CompleteStage,
    FailedStage,
    PipelineState,
)
from .collaborators import ContentGenerator, SubscriptionTierLookup, DocumentSink
from .generation_pipeline import GenerationPipeline

__all__ = [
    'Tone',
    'CampaignInput',
    'Concept',
    'new_concept_ids',
    'Outline',
    'OutlineDraft',
    'PipelineStage',
    'GateBlockReason',
    'InputStage',
    'ConceptsStage',
    'OutlineReviewStage',
    'GateBlockedStage',
    'GeneratingStage',
    'CompleteStage',
    'FailedStage',
    'PipelineState',
    'ContentGenerator',
    'SubscriptionTierLookup',
    'DocumentSink',
    'GenerationPipeline',
]

"""
Generation Pipeline

State machine that walks one user session from campaign input to a finished
lead magnet document:

    Input ──submit──▶ Concepts ──select──▶ OutlineReview ──approve──▶ [gate]
    [gate] ──allowed──▶ Generating ──ok──▶ Complete
    [gate] ──blocked──▶ GateBlocked ──recheck_entitlement──▶ [gate]
    select (outline call fails)  ──▶ Failed(OUTLINE_REVIEW) ──retry──▶ OutlineReview
    Generating (call fails)      ──▶ Failed(GENERATING)     ──retry──▶ [gate]

go_back() re-enters the previous stage; reset() returns to an empty Input.

All I/O is delegated to the injected ContentGenerator and tier lookup. Only
one transition runs at a time: a call made while another is awaiting its
collaborator raises PipelineBusyError.
"""

from contextlib import contextmanager
from typing import Iterator, Optional, Sequence, Set, Union

from config.constants import CONCEPT_COUNT
from config.logging_config import get_logger

from ..customization.merger import merge
from ..customization.options import CustomizationOptions
from ..document.model import StructuredDocument
from ..entitlements.gate import EntitlementGate, GatedStage
from ..errors import (
    EntitlementLookupFailure,
    GenerationFailure,
    InvalidTransitionError,
    PipelineBusyError,
    StaleSelectionError,
)
from .collaborators import ContentGenerator, SubscriptionTierLookup
from .inputs import CampaignInput, Concept, Outline, OutlineDraft
from .states import (
    CompleteStage,
    ConceptsStage,
    FailedStage,
    GateBlockedStage,
    GateBlockReason,
    GeneratingStage,
    InputStage,
    OutlineReviewStage,
    PipelineStage,
    PipelineState,
)

logger = get_logger(__name__)


def _as_failure(stage: PipelineStage, exc: Exception) -> GenerationFailure:
    if isinstance(exc, GenerationFailure):
        return exc
    return GenerationFailure(stage.value, f"{type(exc).__name__}: {exc}")


class GenerationPipeline:
    """
    One wizard session.

    Usage:
        pipeline = GenerationPipeline(generator, directory.get_subscription_tier, "user-1")

        state = await pipeline.submit(campaign)
        state = await pipeline.select(state.concepts[1])
        state.draft.update_point(0, "Sharper first point")
        state = await pipeline.approve()

        if isinstance(state, CompleteStage):
            blocks = render(state.document, RenderTheme.from_branding(state.document.branding))
    """

    def __init__(
        self,
        generator: ContentGenerator,
        get_subscription_tier: SubscriptionTierLookup,
        user_id: str,
        *,
        gate: Optional[EntitlementGate] = None,
        concept_count: int = CONCEPT_COUNT,
    ):
        """
        Args:
            generator: concept/outline/document collaborator
            get_subscription_tier: async tier lookup, called once per gate check
            user_id: whose subscription gates the download stage
            gate: entitlement rules (default: download needs premium)
            concept_count: how many concepts submit must produce
        """
        self._generator = generator
        self._get_subscription_tier = get_subscription_tier
        self.user_id = user_id
        self._gate = gate or EntitlementGate()
        self.concept_count = concept_count

        self._state: PipelineState = InputStage()
        self._busy = False
        # ids offered by earlier submits; never valid again
        self._retired_concept_ids: Set[str] = set()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> PipelineState:
        return self._state

    @property
    def busy(self) -> bool:
        return self._busy

    def _set(self, new_state: PipelineState) -> PipelineState:
        old_state = self._state
        self._state = new_state
        logger.info(f"Pipeline {self.user_id}: {old_state.stage.value} → {new_state.stage.value}")
        return new_state

    @contextmanager
    def _exclusive(self, operation: str) -> Iterator[None]:
        if self._busy:
            logger.warning(f"Pipeline {self.user_id}: rejected {operation}, transition in progress")
            raise PipelineBusyError(f"Cannot {operation}: another step is still running")
        self._busy = True
        try:
            yield
        finally:
            self._busy = False

    def _require(self, operation: str, *stage_types: type):
        if not isinstance(self._state, stage_types):
            raise InvalidTransitionError(operation, self._state.stage.value)
        return self._state

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    async def submit(self, campaign: CampaignInput) -> PipelineState:
        """
        Input → Concepts.

        Raises:
            ValidationError: a required field is blank (no transition)

        A failing or malformed concept call leaves the pipeline in Input,
        carrying the error and the submitted values.
        Concept ids already offered by an earlier submit count as malformed,
        so an id held from a previous round can never select a new concept.
        """
        with self._exclusive("submit"):
            self._require("submit", InputStage)
            campaign.validate_or_raise()

            try:
                concepts = list(await self._generator.generate_concepts(campaign))
                self._check_concepts(concepts)
            except Exception as exc:
                failure = _as_failure(PipelineStage.CONCEPTS, exc)
                logger.error(f"Concept generation failed for {self.user_id}: {failure}")
                return self._set(InputStage(previous_input=campaign, error=failure))

            self._retired_concept_ids.update(c.id for c in concepts)
            return self._set(ConceptsStage(input=campaign, concepts=tuple(concepts)))

    def _check_concepts(self, concepts: Sequence[Concept]) -> None:
        if len(concepts) != self.concept_count:
            raise GenerationFailure(
                PipelineStage.CONCEPTS.value,
                f"expected {self.concept_count} concepts, got {len(concepts)}",
            )
        ids = [c.id for c in concepts]
        if len(set(ids)) != len(ids):
            raise GenerationFailure(PipelineStage.CONCEPTS.value, f"duplicate concept ids: {ids}")
        reused = [i for i in ids if i in self._retired_concept_ids]
        if reused:
            raise GenerationFailure(
                PipelineStage.CONCEPTS.value,
                f"concept ids reused from an earlier submit: {reused}",
            )

    async def select(
        self,
        concept: Union[Concept, str],
        customization: Optional[CustomizationOptions] = None,
    ) -> PipelineState:
        """
        Concepts → OutlineReview.

        `concept` is one of the concepts on offer (or its id). The
        customization is stored as given and validated on approve.

        Raises:
            StaleSelectionError: concept is not part of the current set
        """
        with self._exclusive("select"):
            state = self._require("select", ConceptsStage)
            chosen = self._resolve_concept(state.concepts, concept)
            return await self._generate_outline(state.input, state.concepts, chosen, customization)

    @staticmethod
    def _resolve_concept(concepts: Sequence[Concept], concept: Union[Concept, str]) -> Concept:
        if isinstance(concept, str):
            for candidate in concepts:
                if candidate.id == concept:
                    return candidate
        elif concept in concepts:
            return concept
        concept_id = concept if isinstance(concept, str) else concept.id
        raise StaleSelectionError(f"Concept {concept_id!r} is not one of the current concepts")

    async def _generate_outline(
        self,
        campaign: CampaignInput,
        concepts: Sequence[Concept],
        concept: Concept,
        customization: Optional[CustomizationOptions],
    ) -> PipelineState:
        try:
            outline = await self._generator.generate_outline(campaign, concept)
        except Exception as exc:
            failure = _as_failure(PipelineStage.OUTLINE_REVIEW, exc)
            logger.error(f"Outline generation failed for {self.user_id}: {failure}")
            return self._set(FailedStage(
                failed_stage=PipelineStage.OUTLINE_REVIEW,
                input=campaign,
                concepts=tuple(concepts),
                concept=concept,
                customization=customization,
                error=failure,
            ))

        return self._set(OutlineReviewStage(
            input=campaign,
            concepts=tuple(concepts),
            concept=concept,
            customization=customization,
            generated_outline=outline,
            draft=OutlineDraft.from_outline(outline),
        ))

    async def approve(self, outline: Optional[Union[Outline, OutlineDraft]] = None) -> PipelineState:
        """
        OutlineReview → gate → Generating → Complete (or GateBlocked / Failed).

        Args:
            outline: the stage's draft (default), a draft issued by this
                stage, or an explicit Outline value

        Raises:
            StaleSelectionError: draft belongs to an earlier review
            ValidationError: outline incomplete or customization invalid
        """
        with self._exclusive("approve"):
            state = self._require("approve", OutlineReviewStage)

            if outline is None:
                approved = state.draft.freeze()
            elif isinstance(outline, OutlineDraft):
                if outline.review_token != state.draft.review_token:
                    raise StaleSelectionError("Outline draft does not belong to the current review")
                approved = outline.freeze()
            else:
                approved = OutlineDraft.from_outline(outline).freeze()

            approved.validate_or_raise()
            if state.customization is not None:
                state.customization.validate_or_raise()

            return await self._gate_and_generate(
                state.input, state.concepts, state.concept, state.customization, approved,
            )

    async def recheck_entitlement(self) -> PipelineState:
        """GateBlocked → gate again (after an upgrade or a failed lookup)."""
        with self._exclusive("recheck entitlement"):
            state = self._require("recheck entitlement", GateBlockedStage)
            return await self._gate_and_generate(
                state.input, state.concepts, state.concept, state.customization, state.outline,
            )

    async def retry(self) -> PipelineState:
        """Re-run the stage recorded in Failed with the preserved data."""
        with self._exclusive("retry"):
            state = self._require("retry", FailedStage)
            logger.info(f"Pipeline {self.user_id}: retrying {state.failed_stage.value}")
            if state.failed_stage is PipelineStage.OUTLINE_REVIEW:
                return await self._generate_outline(
                    state.input, state.concepts, state.concept, state.customization,
                )
            return await self._gate_and_generate(
                state.input, state.concepts, state.concept, state.customization, state.outline,
            )

    async def _gate_and_generate(
        self,
        campaign: CampaignInput,
        concepts: Sequence[Concept],
        concept: Concept,
        customization: Optional[CustomizationOptions],
        outline: Outline,
    ) -> PipelineState:
        blocked = dict(
            input=campaign,
            concepts=tuple(concepts),
            concept=concept,
            customization=customization,
            outline=outline,
        )

        try:
            tier = await self._get_subscription_tier(self.user_id)
        except Exception as exc:
            failure = exc if isinstance(exc, EntitlementLookupFailure) else EntitlementLookupFailure(
                self.user_id, f"{type(exc).__name__}: {exc}",
            )
            logger.warning(f"Entitlement lookup failed, blocking: {failure}")
            return self._set(GateBlockedStage(reason=GateBlockReason.LOOKUP_FAILED, error=failure, **blocked))

        if not self._gate.can_proceed(tier, GatedStage.DOWNLOAD):
            logger.info(f"Pipeline {self.user_id}: tier '{tier.value}' not entitled to download")
            return self._set(GateBlockedStage(reason=GateBlockReason.NOT_ENTITLED, tier=tier, **blocked))

        self._set(GeneratingStage(tier=tier, **blocked))

        try:
            document = await self._generator.generate_final_document(campaign, outline)
            document = self._finish_document(document, customization)
        except Exception as exc:
            failure = _as_failure(PipelineStage.GENERATING, exc)
            logger.error(f"Document generation failed for {self.user_id}: {failure}")
            return self._set(FailedStage(
                failed_stage=PipelineStage.GENERATING,
                error=failure,
                **blocked,
            ))

        return self._set(CompleteStage(
            input=campaign,
            concept=concept,
            outline=outline,
            document=document,
            customization=customization,
        ))

    @staticmethod
    def _finish_document(
        document: StructuredDocument,
        customization: Optional[CustomizationOptions],
    ) -> StructuredDocument:
        merged = merge(document, customization or CustomizationOptions()).without_empty_sections()
        if not merged.sections:
            raise GenerationFailure(PipelineStage.GENERATING.value, "document has no content sections")
        return merged

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def go_back(self) -> PipelineState:
        """
        Re-enter the previous stage.

        Draft edits made downstream are discarded; the concept list is kept
        as generated. There is no going back from Input or Complete.
        """
        if self._busy:
            raise PipelineBusyError("Cannot go back: another step is still running")
        state = self._state

        if isinstance(state, ConceptsStage):
            return self._set(InputStage(previous_input=state.input))

        if isinstance(state, OutlineReviewStage):
            return self._set(ConceptsStage(input=state.input, concepts=state.concepts))

        if isinstance(state, FailedStage) and state.failed_stage is PipelineStage.OUTLINE_REVIEW:
            return self._set(ConceptsStage(input=state.input, concepts=state.concepts))

        if isinstance(state, (GateBlockedStage, FailedStage)) and state.outline is not None:
            return self._set(OutlineReviewStage(
                input=state.input,
                concepts=state.concepts,
                concept=state.concept,
                customization=state.customization,
                generated_outline=state.outline,
                draft=OutlineDraft.from_outline(state.outline),
            ))

        raise InvalidTransitionError("go back", state.stage.value)

    def reset(self) -> PipelineState:
        """Start over with an empty Input stage."""
        if self._busy:
            raise PipelineBusyError("Cannot start over: another step is still running")
        return self._set(InputStage())


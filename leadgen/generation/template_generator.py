"""
Offline template generator.

ContentGenerator that needs no API key. Concept, outline and section text
are fixed templates filled from the campaign input; concept ids are fresh
per batch. The final document has one section per core point, cycling
through the section kinds so every renderer path is exercised in demos.
"""

from typing import Callable, List

from config.constants import CONCEPT_COUNT
from config.logging_config import get_logger

from ..document.model import (
    CallToAction,
    ChecklistPhase,
    ComparisonItem,
    ComparisonSection,
    FreeTextSection,
    PhasedChecklistSection,
    ScriptScenario,
    ScriptsSection,
    Section,
    StructuredDocument,
    TitlePage,
)
from ..pipeline.inputs import CampaignInput, Concept, Outline, new_concept_ids

logger = get_logger(__name__)


def _point_heading(point: str) -> str:
    """'Core Point 1: Problem framing' -> 'Problem framing'"""
    _, sep, rest = point.partition(":")
    return rest.strip() if sep and rest.strip() else point.strip()


def _overview_section(title: str, campaign: CampaignInput) -> Section:
    return FreeTextSection(title=title, body=(
        f"Most {campaign.audience_description} run into the same wall: "
        f"{campaign.problem_statement}.\n\n"
        f"This step shows where that comes from and what changes once you aim for "
        f"{campaign.desired_outcome}."
    ))


def _checklist_section(title: str, campaign: CampaignInput) -> Section:
    return PhasedChecklistSection(title=title, phases=(
        ChecklistPhase("Phase 1: Prepare", (
            f"Write down the single biggest obstacle: {campaign.problem_statement}",
            f"Pick one measurable goal tied to {campaign.desired_outcome}",
        )),
        ChecklistPhase("Phase 2: Execute", (
            "Block 30 minutes a day for the next 7 days",
            "Track one number daily and review it on day 7",
        )),
    ))


def _scripts_section(title: str, campaign: CampaignInput) -> Section:
    return ScriptsSection(title=title, scenarios=(
        ScriptScenario(
            trigger="\"I don't have time for this right now.\"",
            response=(
                f"\"Totally fair. Most {campaign.audience_description} tell me the same. "
                f"Can I show you the 10-minute version?\""
            ),
            rationale="It agrees first, then shrinks the commitment.",
        ),
        ScriptScenario(
            trigger="\"We tried something like this before.\"",
            response="\"What happened? I'd like to know what to avoid for you.\"",
            rationale="It turns an objection into a diagnosis.",
        ),
    ))


def _comparison_section(title: str, campaign: CampaignInput) -> Section:
    return ComparisonSection(title=title, items=(
        ComparisonItem(
            label="Do it yourself",
            pros="Lowest cost, full control",
            cons="Slow, easy to stall",
        ),
        ComparisonItem(
            label=f"Work with {campaign.brand_name}",
            pros=f"Faster route to {campaign.desired_outcome}",
            cons="Requires a short onboarding call",
            note=f"{campaign.operator_name} reviews every plan personally.",
        ),
    ))


_SECTION_BUILDERS: List[Callable[[str, CampaignInput], Section]] = [
    _overview_section,
    _checklist_section,
    _scripts_section,
    _comparison_section,
]


class TemplateContentGenerator:
    """
    Usage:
        generator = TemplateContentGenerator()
        pipeline = GenerationPipeline(generator, directory.get_subscription_tier, user_id)
    """

    def __init__(self, concept_count: int = CONCEPT_COUNT):
        self.concept_count = concept_count

    async def generate_concepts(self, campaign: CampaignInput) -> List[Concept]:
        base = campaign.niche_label or "Your Niche"
        ids = new_concept_ids(self.concept_count)
        return [
            Concept(
                id=ids[i],
                title=f"Guide: {base} - Option {i + 1}",
                description=f"A high-value guide tailored for {campaign.audience_description}.",
            )
            for i in range(self.concept_count)
        ]

    async def generate_outline(self, campaign: CampaignInput, concept: Concept) -> Outline:
        return Outline(
            title=concept.title,
            introduction=(
                f"This guide is designed for {campaign.audience_description} "
                f"in {campaign.niche_label}."
            ),
            core_points=(
                "Core Point 1: Problem framing and key context",
                "Core Point 2: Tactical steps",
                "Core Point 3: Handling objections",
                "Case Study: Specific example with results",
            ),
        )

    async def generate_final_document(self, campaign: CampaignInput, outline: Outline) -> StructuredDocument:
        sections = tuple(
            _SECTION_BUILDERS[i % len(_SECTION_BUILDERS)](_point_heading(point), campaign)
            for i, point in enumerate(outline.core_points)
        )
        document = StructuredDocument(
            title_page=TitlePage(
                title=outline.title,
                subtitle=f"A {campaign.brand_name} guide for {campaign.audience_description}",
            ),
            introduction=(
                f"Hi, I'm {campaign.operator_name}, {campaign.operator_title} at {campaign.brand_name}.\n\n"
                f"{outline.introduction}"
            ),
            sections=sections,
            call_to_action=CallToAction(
                title=f"Ready to reach {campaign.desired_outcome}?",
                body=f"{campaign.brand_name} can build this with you, step by step.",
            ),
        )
        logger.debug(f"Template document built: {document!r}")
        return document

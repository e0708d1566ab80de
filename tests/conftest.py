"""
Pytest configuration and shared fixtures for LeadGen Studio tests.
"""
import sys
import pytest
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import Mock, AsyncMock

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from leadgen.document import (
    CallToAction,
    ChecklistPhase,
    ComparisonItem,
    ComparisonSection,
    FreeTextSection,
    PhasedChecklistSection,
    ScriptScenario,
    ScriptsSection,
    StructuredDocument,
    TitlePage,
)
from leadgen.entitlements import InMemorySubscriptionDirectory, SubscriptionStatus, SubscriptionTier
from leadgen.pipeline import CampaignInput, Concept, GenerationPipeline, Outline, Tone


FIXED_NOW = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


# ============================================================================
# Fixtures: Sample Data
# ============================================================================

@pytest.fixture
def campaign() -> CampaignInput:
    """Acme campaign used across pipeline tests."""
    return CampaignInput(
        operator_name="Dana Lee",
        brand_name="Acme",
        audience_description="small retailers",
        niche_label="retail marketing",
        problem_statement="foot traffic is down",
        desired_outcome="more repeat customers",
        operator_title="Founder",
        tone=Tone.FRIENDLY,
    )


@pytest.fixture
def concepts():
    return [
        Concept("concept-1", "The Foot Traffic Playbook", "Bring shoppers back"),
        Concept("concept-2", "Loyalty in 30 Days", "Turn first visits into habits"),
        Concept("concept-3", "Local Buzz Kit", "Get the neighborhood talking"),
    ]


@pytest.fixture
def outline() -> Outline:
    return Outline(
        title="Loyalty in 30 Days",
        introduction="Repeat customers are cheaper than new ones.",
        core_points=(
            "Map your regulars",
            "Design a reward they care about",
            "Follow up within a week",
        ),
    )


@pytest.fixture
def sample_document() -> StructuredDocument:
    """Document with one section of every kind."""
    return StructuredDocument(
        title_page=TitlePage("Loyalty in 30 Days", "An Acme guide"),
        introduction="Why loyalty matters.\n\nWhat this guide covers.",
        sections=(
            ComparisonSection("Pick a program", (
                ComparisonItem("Punch card", "Cheap", "Easy to lose", note="Works for cafes"),
                ComparisonItem("App points", "Trackable", "Setup cost"),
            )),
            PhasedChecklistSection("Launch checklist", (
                ChecklistPhase("Week 1", ("List regulars", "Choose reward")),
                ChecklistPhase("Week 2", ("Announce in store",)),
            )),
            ScriptsSection("At the till", (
                ScriptScenario("\"Do you have a loyalty card?\"", "\"Yes, and it's free.\"", "Removes friction."),
            )),
            FreeTextSection("Measure it", "Count repeat visits weekly.\n\nAdjust the reward monthly."),
        ),
        call_to_action=CallToAction("Want help?", "Book a call with Acme."),
    )


def document_for(outline: Outline) -> StructuredDocument:
    """One free-text section per core point."""
    return StructuredDocument(
        title_page=TitlePage(outline.title, "An Acme guide"),
        introduction=outline.introduction,
        sections=tuple(FreeTextSection(p, f"Details about {p.lower()}.") for p in outline.core_points),
        call_to_action=CallToAction("Ready?", "Let's talk."),
    )


# ============================================================================
# Fixtures: Collaborators
# ============================================================================

@pytest.fixture
def generator(concepts, outline):
    """ContentGenerator fake; document mirrors the approved outline."""
    fake = Mock()
    fake.generate_concepts = AsyncMock(return_value=concepts)
    fake.generate_outline = AsyncMock(return_value=outline)
    fake.generate_final_document = AsyncMock(side_effect=lambda campaign, approved: document_for(approved))
    return fake


@pytest.fixture
def directory() -> InMemorySubscriptionDirectory:
    """Subscription directory on a fixed clock with one premium and one free user."""
    directory = InMemorySubscriptionDirectory(clock=lambda: FIXED_NOW)
    directory.set_status("premium-user", SubscriptionStatus(
        plan=SubscriptionTier.PREMIUM,
        expires_at=datetime(2026, 2, 15, tzinfo=timezone.utc),
    ))
    return directory


@pytest.fixture
def make_pipeline(generator, directory):
    """Factory: make_pipeline(user_id="premium-user", **kwargs)."""
    def factory(user_id: str = "premium-user", **kwargs) -> GenerationPipeline:
        return GenerationPipeline(
            kwargs.pop("generator", generator),
            kwargs.pop("get_subscription_tier", directory.get_subscription_tier),
            user_id,
            **kwargs,
        )
    return factory

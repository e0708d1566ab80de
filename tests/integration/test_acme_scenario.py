"""
End-to-end wizard run for the Acme campaign with fake collaborators.

submit → 3 concepts → select #2 (no customization) → approve a 3-point
outline as a premium user → Complete → render.
"""

import pytest

from leadgen.customization import CustomizationOptions
from leadgen.document import DocumentRenderer, RenderBlockType, RenderTheme
from leadgen.entitlements import SubscriptionTier
from leadgen.pipeline import CompleteStage, ConceptsStage, OutlineReviewStage


@pytest.mark.asyncio
async def test_acme_premium_run(make_pipeline, campaign, generator):
    pipeline = make_pipeline("premium-user")

    state = await pipeline.submit(campaign)
    assert isinstance(state, ConceptsStage)
    assert len(state.concepts) == 3

    state = await pipeline.select(state.concepts[1])
    assert isinstance(state, OutlineReviewStage)
    assert len(state.draft.core_points) == 3

    state = await pipeline.approve()
    assert isinstance(state, CompleteStage)
    assert state.concept.id == "concept-2"
    assert all(not section.is_empty() for section in state.document.sections)

    blocks = DocumentRenderer().render(state.document, RenderTheme.from_branding(state.document.branding))
    section_blocks = [b for b in blocks if b.section_index is not None]
    cta_blocks = [b for b in blocks if b.block_type is RenderBlockType.CALL_TO_ACTION]

    assert len(section_blocks) == 3
    assert all(b.lines for b in section_blocks)
    assert len(cta_blocks) == 1
    assert blocks[-1] is cta_blocks[0]

    generator.generate_concepts.assert_awaited_once()
    generator.generate_outline.assert_awaited_once()
    generator.generate_final_document.assert_awaited_once()


@pytest.mark.asyncio
async def test_acme_free_user_upgrades_mid_flow(make_pipeline, campaign, directory):
    pipeline = make_pipeline("acme-owner")
    state = await pipeline.submit(campaign)
    await pipeline.select(state.concepts[1], CustomizationOptions(
        cta_text="Book your Acme audit",
        booking_url="https://cal.example.com/acme",
        primary_color="#b71c1c",
    ))

    blocked = await pipeline.approve()
    assert blocked.tier is SubscriptionTier.FREE

    directory.upgrade_to_premium("acme-owner")
    state = await pipeline.recheck_entitlement()

    assert isinstance(state, CompleteStage)
    blocks = DocumentRenderer().render(state.document, RenderTheme.from_branding(state.document.branding))
    cta = blocks[-1]
    assert cta.lines[0].text == "Book your Acme audit"
    assert cta.style.background_color == "#b71c1c"


@pytest.mark.asyncio
async def test_preview_and_export_identical(make_pipeline, campaign):
    pipeline = make_pipeline()
    state = await pipeline.submit(campaign)
    await pipeline.select(state.concepts[0])
    state = await pipeline.approve()

    renderer = DocumentRenderer()
    theme = RenderTheme.from_branding(state.document.branding)
    assert renderer.render_json(state.document, theme) == renderer.render_json(state.document, theme)

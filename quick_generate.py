#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Quick Generate Script - run the lead magnet wizard from the terminal
"""

import asyncio
import sys
from pathlib import Path

# Add project to path
sys.path.insert(0, str(Path(__file__).parent))

from dotenv import load_dotenv

from config.settings import get_settings
from leadgen.customization import CustomizationOptions
from leadgen.document import DocumentRenderer, RenderTheme, blocks_to_markdown
from leadgen.entitlements import InMemorySubscriptionDirectory
from leadgen.errors import ValidationError
from leadgen.generation import build_generator
from leadgen.pipeline import (
    CampaignInput,
    CompleteStage,
    FailedStage,
    GateBlockedStage,
    GenerationPipeline,
    InputStage,
    PipelineState,
    Tone,
)

# Load environment variables
load_dotenv()

CLI_USER = "local-cli"


def ask(prompt: str, default: str = "") -> str:
    suffix = f" [{default}]" if default else ""
    answer = input(f"{prompt}{suffix}: ").strip()
    return answer or default


def ask_campaign() -> CampaignInput:
    print("\n📝 Tell us about your business")
    tones = ", ".join(t.value for t in Tone)
    tone = ask(f"   Tone ({tones})", Tone.PROFESSIONAL.value).lower()
    try:
        tone_value = Tone(tone)
    except ValueError:
        print(f"⚠️  Unknown tone '{tone}', using professional")
        tone_value = Tone.PROFESSIONAL

    return CampaignInput(
        operator_name=ask("   Your name"),
        operator_title=ask("   Your title", "Founder"),
        brand_name=ask("   Brand name"),
        audience_description=ask("   Who is your audience"),
        niche_label=ask("   Niche"),
        problem_statement=ask("   Their main problem"),
        desired_outcome=ask("   The outcome they want"),
        tone=tone_value,
    )


# (error field name, option attribute, prompt)
CUSTOMIZATION_PROMPTS = [
    ("ctaText", "cta_text", "   CTA headline"),
    ("bookingUrl", "booking_url", "   Booking URL"),
    ("supportEmail", "support_email", "   Support email"),
    ("primaryColor", "primary_color", "   Primary color (#rrggbb)"),
]


def ask_customization() -> CustomizationOptions:
    """Ask for CTA overrides; an invalid answer is asked again, blank keeps the default."""
    print("\n🎨 Customize the call to action (Enter to skip)")
    answers = {}
    for _, attr, prompt in CUSTOMIZATION_PROMPTS:
        answers[attr] = ask(prompt)

    prompts = {name: (attr, prompt) for name, attr, prompt in CUSTOMIZATION_PROMPTS}
    while True:
        options = CustomizationOptions(**{k: v for k, v in answers.items() if v})
        problems = options.validate()
        if not problems:
            return options
        for name, message in problems:
            attr, prompt = prompts[name]
            print(f"⚠️  {message}")
            answers[attr] = ask(prompt)


OUTLINE_FIXES = {
    "title": ("   Outline title", lambda draft, text: draft.set_title(text)),
    "introduction": ("   Introduction", lambda draft, text: draft.set_introduction(text)),
    "corePoints": ("   Add a core point", lambda draft, text: draft.add_point(text)),
}


async def approve_with_fixes(pipeline: GenerationPipeline) -> PipelineState:
    """Approve; an incomplete outline is fixed at the prompt and approved again."""
    while True:
        try:
            print("\n⏳ Writing your lead magnet...")
            return await pipeline.approve()
        except ValidationError as e:
            if e.field not in OUTLINE_FIXES:
                raise
            print(f"⚠️  Outline {e.field} {e.message}")
            prompt, apply_fix = OUTLINE_FIXES[e.field]
            apply_fix(pipeline.state.draft, ask(prompt))


async def run_wizard(campaign: CampaignInput, output_path: Path) -> bool:
    settings = get_settings()
    generator = build_generator(settings)
    print(f"\n🤖 Generator: {type(generator).__name__}")

    # Local runs have no billing backend; grant premium up front.
    directory = InMemorySubscriptionDirectory()
    directory.upgrade_to_premium(CLI_USER)

    pipeline = GenerationPipeline(
        generator,
        directory.get_subscription_tier,
        CLI_USER,
        concept_count=settings.concept_count,
    )

    print("\n⏳ Generating concepts...")
    state = await pipeline.submit(campaign)
    if isinstance(state, InputStage):
        print(f"\n❌ Concept generation failed: {state.error.message}")
        return False

    print("\n💡 Concepts:")
    for index, concept in enumerate(state.concepts, 1):
        print(f"   {index}. {concept.title}")
        print(f"      {concept.description}")

    choice = ask("\n👉 Pick a concept", "1")
    try:
        concept = state.concepts[int(choice) - 1]
    except (ValueError, IndexError):
        print(f"⚠️  Invalid choice '{choice}', using concept 1")
        concept = state.concepts[0]

    customization = ask_customization()

    print("\n⏳ Drafting outline...")
    state = await pipeline.select(concept, customization)
    if isinstance(state, FailedStage):
        print(f"\n❌ Outline generation failed: {state.error.message}")
        return False

    print(f"\n📋 {state.draft.title}")
    for point in state.draft.core_points:
        print(f"   • {point}")

    if ask("\n✅ Approve this outline? (y/n)", "y").lower() not in ("y", "yes"):
        print("Cancelled.")
        return False

    state = await approve_with_fixes(pipeline)

    if isinstance(state, GateBlockedStage):
        print(f"\n🔒 Download blocked: {state.reason.value}")
        return False
    if isinstance(state, FailedStage):
        print(f"\n❌ Generation failed: {state.error.message}")
        return False
    if not isinstance(state, CompleteStage):
        print(f"\n❌ Unexpected stage: {state.stage.value}")
        return False

    document = state.document
    blocks = DocumentRenderer().render(document, RenderTheme.from_branding(document.branding))
    output_path.write_text(blocks_to_markdown(blocks), encoding="utf-8")

    stats = document.get_statistics()
    print(f"\n📊 {stats['total']} sections, {blocks[-1].page} pages")
    print(f"📁 Saved: {output_path}")
    return True


def main():
    print("=" * 60)
    print("🧲 LEADGEN STUDIO - Quick Generate")
    print("=" * 60)

    try:
        campaign = ask_campaign()
        errors = campaign.validate()
        if errors:
            print(f"\n❌ Missing fields: {', '.join(errors)}")
            sys.exit(1)

        slug = "".join(c if c.isalnum() else "_" for c in campaign.brand_name.lower()).strip("_")
        output_path = Path(ask("\n💾 Output file", f"{slug or 'lead_magnet'}_lead_magnet.md"))

        ok = asyncio.run(run_wizard(campaign, output_path))

        print("\n" + "=" * 60)
        print("✅ DONE" if ok else "⚠️  No document written")
        print("=" * 60)
        sys.exit(0 if ok else 1)

    except ValidationError as e:
        print(f"\n❌ {e.message}")
        sys.exit(1)
    except KeyboardInterrupt:
        print("\n\n⚠️  Cancelled by user")
        sys.exit(1)
    except Exception as e:
        print(f"\n❌ Error: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()

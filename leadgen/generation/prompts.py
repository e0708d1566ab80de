"""
Prompt templates for concept, outline and document generation.

Templates use str.format(); literal braces in the JSON examples are doubled.
"""

from ..pipeline.inputs import CampaignInput, Concept, Outline

# ==============================================================================
# SYSTEM PROMPTS
# ==============================================================================

CONCEPTS_SYSTEM_PROMPT = (
    "You are a lead magnet strategist. Generate {count} unique concepts. Each concept "
    "should be specific, actionable, and tailored to the user's niche and audience. "
    "Output strictly valid JSON."
)

OUTLINE_SYSTEM_PROMPT = "You are a content strategist. Output strictly valid JSON as defined."

DOCUMENT_SYSTEM_PROMPT = (
    "You are an expert content creator who creates high-quality, actionable lead magnet "
    "content. Always return valid JSON."
)

JSON_FIX_SYSTEM_PROMPT = (
    "You are a strict JSON fixer. Return only valid JSON that matches the structure in the "
    "user input. No explanation, no code fences."
)

# ==============================================================================
# USER PROMPTS
# ==============================================================================

CAMPAIGN_CONTEXT = """User Context:
- Creator: {operator_name} ({operator_title})
- Brand: {brand_name}
- Niche: {niche_label}
- Target Audience: {audience_description}
- Problem Statement: {problem_statement}
- Desired Outcome: {desired_outcome}
- Tone: {tone}"""

CONCEPTS_PROMPT = """{context}

Generate {count} PDF guide concepts that provide COMPREHENSIVE implementation systems.

Each guide MUST:
- Include step-by-step processes with checklists
- Provide templates, scripts, and tools
- Cover common mistakes and how to avoid them

Return JSON in this exact format with EXACTLY {count} concepts:
{{
  "concepts": [
    {{
      "title": "The Complete [Topic] System - [Specific Outcome] in [Timeframe]",
      "description": "A comprehensive guide with step-by-step processes and everything needed to [specific result]"
    }}
  ]
}}"""

OUTLINE_PROMPT = """{context}

Selected Concept: "{concept_title}"
Concept Description: "{concept_description}"

Create a comprehensive system outline with complete implementation tools.

Return JSON in this exact format:
{{
  "title": "{concept_title}",
  "introduction": "The complete system that eliminates guesswork and provides everything needed for [specific outcome]",
  "core_points": [
    "System Overview: [Complete process from start to finish]",
    "Phase 1 - Setup: [Exact steps with templates provided]",
    "Phase 2 - Implementation: [Step-by-step execution with tools]",
    "Phase 3 - Optimization: [Improvement strategies with metrics]"
  ]
}}"""

DOCUMENT_PROMPT = """{context}

Approved outline:
Title: {outline_title}
Introduction: {outline_introduction}
Core points:
{core_points}

PERSONALIZED FOUNDER INTRODUCTION:
Write the introduction in the creator's voice: explain WHY they created this guide and
what specific results the reader will get.

Write one toolkit section per core point, in the same order. Pick the section type
that fits the point best:
- "pros_and_cons_list": compare methods (items with method_name, pros, cons, case_study)
- "checklist": phased action steps (phases with phase_title and items)
- "scripts": word-for-word dialogue (scenarios with trigger, response, explanation)
- "text": plain prose (content is a string)

RETURN ONLY VALID JSON IN THIS EXACT FORMAT:
{{
  "structured_content": {{
    "title_page": {{ "title": "{outline_title}", "subtitle": "..." }},
    "introduction_page": {{ "title": "...", "content": "..." }},
    "toolkit_sections": [
      {{
        "title": "...",
        "type": "pros_and_cons_list",
        "content": {{ "items": [ {{ "method_name": "...", "pros": "...", "cons": "...", "case_study": "..." }} ] }}
      }},
      {{
        "title": "...",
        "type": "checklist",
        "content": {{ "phases": [ {{ "phase_title": "...", "items": ["...", "..."] }} ] }}
      }},
      {{
        "title": "...",
        "type": "scripts",
        "content": {{ "scenarios": [ {{ "trigger": "...", "response": "...", "explanation": "..." }} ] }}
      }}
    ],
    "cta_page": {{ "title": "...", "content": "..." }}
  }}
}}"""

JSON_FIX_PROMPT = """Fix this text into valid JSON only. Do not add or remove keys. Input:

{content}"""


# ==============================================================================
# BUILDERS
# ==============================================================================

def campaign_context(campaign: CampaignInput) -> str:
    return CAMPAIGN_CONTEXT.format(
        operator_name=campaign.operator_name,
        operator_title=campaign.operator_title,
        brand_name=campaign.brand_name,
        niche_label=campaign.niche_label,
        audience_description=campaign.audience_description,
        problem_statement=campaign.problem_statement,
        desired_outcome=campaign.desired_outcome,
        tone=campaign.tone.value,
    )


def build_concepts_prompt(campaign: CampaignInput, count: int) -> str:
    return CONCEPTS_PROMPT.format(context=campaign_context(campaign), count=count)


def build_outline_prompt(campaign: CampaignInput, concept: Concept) -> str:
    return OUTLINE_PROMPT.format(
        context=campaign_context(campaign),
        concept_title=concept.title,
        concept_description=concept.description,
    )


def build_document_prompt(campaign: CampaignInput, outline: Outline) -> str:
    return DOCUMENT_PROMPT.format(
        context=campaign_context(campaign),
        outline_title=outline.title,
        outline_introduction=outline.introduction,
        core_points="\n".join(f"{i}. {p}" for i, p in enumerate(outline.core_points, start=1)),
    )

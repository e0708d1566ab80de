"""
Unit tests for leadgen.generation.llm_generator.

The provider manager is an AsyncMock; responses are canned model answers.
"""

import json
import pytest
from unittest.mock import AsyncMock, Mock

from ai_providers import AIProviderType, AIResponse
from config.constants import JSON_FIX_MAX_TOKENS, JSON_FIX_TEMPERATURE
from config.settings import Settings
from leadgen.errors import GenerationFailure
from leadgen.generation import LLMContentGenerator
from leadgen.generation import prompts


def _response(content: str) -> AIResponse:
    return AIResponse(content=content, model="gpt-4o-mini", provider=AIProviderType.OPENAI)


@pytest.fixture
def settings():
    return Settings(openai_api_key="test_openai_key", concept_count=3, json_repair_enabled=True)


@pytest.fixture
def manager():
    manager = Mock()
    manager.complete = AsyncMock()
    return manager


@pytest.fixture
def llm(manager, settings):
    return LLMContentGenerator(manager, settings)


CONCEPTS_JSON = json.dumps({"concepts": [
    {"title": f"Concept {i}", "description": f"Description {i}"} for i in range(1, 5)
]})

DOCUMENT_JSON = json.dumps({"structured_content": {
    "title_page": {"title": "Loyalty in 30 Days", "subtitle": "Guide"},
    "introduction_page": {"title": "Intro", "content": "Hello."},
    "toolkit_sections": [{"title": "Do this", "type": "text", "content": "Step one."}],
    "cta_page": {"title": "Call us", "content": "Today."},
}})


class TestGenerateConcepts:

    @pytest.mark.asyncio
    async def test_truncates_to_count(self, llm, manager, campaign):
        manager.complete.return_value = _response(CONCEPTS_JSON)
        concepts = await llm.generate_concepts(campaign)

        assert len(concepts) == 3
        assert len({c.id for c in concepts}) == 3

    @pytest.mark.asyncio
    async def test_prompt_contains_campaign(self, llm, manager, campaign):
        manager.complete.return_value = _response(CONCEPTS_JSON)
        await llm.generate_concepts(campaign)

        messages = manager.complete.await_args.args[0]
        kwargs = manager.complete.await_args.kwargs
        assert "Brand: Acme" in messages[0].content
        assert "Target Audience: small retailers" in messages[0].content
        assert kwargs["system_prompt"] == prompts.CONCEPTS_SYSTEM_PROMPT.format(count=3)
        assert kwargs["max_tokens"] == llm.settings.outline_max_tokens

    @pytest.mark.asyncio
    async def test_fenced_answer(self, llm, manager, campaign):
        manager.complete.return_value = _response(f"```json\n{CONCEPTS_JSON}\n```")
        assert len(await llm.generate_concepts(campaign)) == 3


class TestGenerateOutline:

    @pytest.mark.asyncio
    async def test_outline(self, llm, manager, campaign, concepts):
        manager.complete.return_value = _response(json.dumps({
            "title": "Loyalty in 30 Days",
            "introduction": "Why it matters.",
            "core_points": ["One", "Two", "Three"],
        }))
        outline = await llm.generate_outline(campaign, concepts[1])

        assert outline.core_points == ("One", "Two", "Three")
        assert "Loyalty in 30 Days" in manager.complete.await_args.args[0][0].content


class TestGenerateDocument:

    @pytest.mark.asyncio
    async def test_document(self, llm, manager, campaign, outline):
        manager.complete.return_value = _response(DOCUMENT_JSON)
        document = await llm.generate_final_document(campaign, outline)

        assert document.title_page.title == "Loyalty in 30 Days"
        assert len(document.sections) == 1
        prompt = manager.complete.await_args.args[0][0].content
        assert "1. Map your regulars" in prompt
        assert manager.complete.await_args.kwargs["max_tokens"] == llm.settings.generation_max_tokens


class TestFailures:

    @pytest.mark.asyncio
    async def test_provider_error(self, llm, manager, campaign):
        manager.complete.side_effect = RuntimeError("401 unauthorized")
        with pytest.raises(GenerationFailure) as exc_info:
            await llm.generate_concepts(campaign)
        assert exc_info.value.stage == "concepts"
        assert "401" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_empty_response(self, llm, manager, campaign):
        manager.complete.return_value = _response("   ")
        with pytest.raises(GenerationFailure, match="empty response"):
            await llm.generate_concepts(campaign)

    @pytest.mark.asyncio
    async def test_repair_call_on_bad_json(self, llm, manager, campaign):
        manager.complete.side_effect = [
            _response('{"concepts": [{"title": Concept one}]}'),
            _response(CONCEPTS_JSON),
        ]
        concepts = await llm.generate_concepts(campaign)

        assert len(concepts) == 3
        repair = manager.complete.await_args_list[1]
        assert repair.kwargs["system_prompt"] == prompts.JSON_FIX_SYSTEM_PROMPT
        assert repair.kwargs["temperature"] == JSON_FIX_TEMPERATURE
        assert repair.kwargs["max_tokens"] == JSON_FIX_MAX_TOKENS

    @pytest.mark.asyncio
    async def test_repair_fails(self, llm, manager, campaign):
        manager.complete.side_effect = [
            _response("not json at all"),
            _response("still not json"),
        ]
        with pytest.raises(GenerationFailure, match="repair failed"):
            await llm.generate_concepts(campaign)

    @pytest.mark.asyncio
    async def test_repair_disabled(self, manager, settings, campaign):
        llm = LLMContentGenerator(manager, settings.model_copy(update={"json_repair_enabled": False}))
        manager.complete.return_value = _response("nope")

        with pytest.raises(GenerationFailure):
            await llm.generate_concepts(campaign)
        assert manager.complete.await_count == 1

    @pytest.mark.asyncio
    async def test_wrong_shape(self, llm, manager, campaign, outline):
        manager.complete.return_value = _response('{"unexpected": true}')
        with pytest.raises(GenerationFailure) as exc_info:
            await llm.generate_final_document(campaign, outline)
        assert exc_info.value.stage == "document"

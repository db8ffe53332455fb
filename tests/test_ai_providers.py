"""
Tests for AI Providers - Base classes and mocked LLM calls.

This module tests:
- TokenUsage dataclass
- AIResponse dataclass
- Provider selection
- OpenAI / Gemini JSON generation with mocked SDK clients

We mock LLM calls to ensure tests are:
- Fast (no network calls)
- Reliable (no API flakiness)
- Free (no token costs)
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from dam_butler.ai.providers import (
    GeminiProvider,
    OpenAIProvider,
    gemini_provider,
    get_intent_provider,
    openai_provider,
)
from dam_butler.ai.providers.base import AIResponse, ProviderType, TokenUsage


class TestTokenUsage:

    def test_auto_calculate_total(self):
        usage = TokenUsage(prompt_tokens=100, completion_tokens=50)
        assert usage.total_tokens == 150

    def test_explicit_total_preserved(self):
        usage = TokenUsage(prompt_tokens=100, completion_tokens=50, total_tokens=200)
        assert usage.total_tokens == 200


class TestAIResponse:

    def test_defaults(self):
        response = AIResponse(content="{}", provider=ProviderType.GEMINI, model="gemini-2.5-flash")
        assert response.success is True
        assert response.error is None
        assert response.usage.total_tokens == 0


class TestProviderSelection:

    def test_gemini_by_name(self):
        assert get_intent_provider("gemini") is gemini_provider
        assert get_intent_provider(" Gemini ") is gemini_provider

    def test_openai_default(self):
        assert get_intent_provider("openai") is openai_provider
        assert get_intent_provider("something-else") is openai_provider


# ---------------------------------------------------------------------------
# OPENAI
# ---------------------------------------------------------------------------

def _openai_completion(content='{"products": []}', prompt_tokens=120, completion_tokens=30):
    completion = MagicMock()
    completion.choices = [MagicMock(message=MagicMock(content=content))]
    completion.usage = MagicMock(prompt_tokens=prompt_tokens, completion_tokens=completion_tokens)
    return completion


class TestOpenAIProvider:

    @pytest.mark.asyncio
    async def test_not_configured(self):
        provider = OpenAIProvider(api_key="")

        response = await provider.generate_json("Parse this")

        assert provider.is_configured is False
        assert response.success is False
        assert response.error == "OpenAI API key not configured"

    @pytest.mark.asyncio
    async def test_generate_json(self):
        provider = OpenAIProvider(api_key="sk-test")
        provider._client = MagicMock()
        provider._client.chat.completions.create = AsyncMock(return_value=_openai_completion())

        response = await provider.generate_json("Parse this", system_prompt="You parse requests")

        assert response.success is True
        assert response.content == '{"products": []}'
        assert response.usage.total_tokens == 150
        kwargs = provider._client.chat.completions.create.call_args.kwargs
        assert kwargs["response_format"] == {"type": "json_object"}
        assert kwargs["messages"][0]["content"].startswith("You parse requests")
        assert kwargs["messages"][1] == {"role": "user", "content": "Parse this"}

    @pytest.mark.asyncio
    async def test_no_choices(self):
        provider = OpenAIProvider(api_key="sk-test")
        completion = _openai_completion()
        completion.choices = []
        provider._client = MagicMock()
        provider._client.chat.completions.create = AsyncMock(return_value=completion)

        response = await provider.generate_json("Parse this")

        assert response.success is False
        assert response.error == "OpenAI returned no choices"

    @pytest.mark.asyncio
    async def test_sdk_exception_is_captured(self):
        provider = OpenAIProvider(api_key="sk-test")
        provider._client = MagicMock()
        provider._client.chat.completions.create = AsyncMock(side_effect=RuntimeError("Rate limit exceeded"))

        response = await provider.generate_json("Parse this")

        assert response.success is False
        assert response.error == "Rate limit exceeded"
        assert response.provider == ProviderType.OPENAI


# ---------------------------------------------------------------------------
# GEMINI
# ---------------------------------------------------------------------------

class TestGeminiProvider:

    @pytest.mark.asyncio
    async def test_not_configured(self):
        provider = GeminiProvider(api_key="")
        response = await provider.generate_json("Parse this")

        assert response.success is False
        assert response.error == "Gemini API key not configured"

    @pytest.mark.asyncio
    async def test_generate_json(self):
        provider = GeminiProvider(api_key="test-key")
        gemini_response = MagicMock()
        gemini_response.text = ' {"useCase": "web"} '
        gemini_response.usage_metadata = MagicMock(prompt_token_count=70, candidates_token_count=30)
        provider._client = MagicMock()
        provider._client.aio.models.generate_content = AsyncMock(return_value=gemini_response)

        response = await provider.generate_json("Parse this", system_prompt="You parse requests")

        assert response.success is True
        assert response.content == '{"useCase": "web"}'
        assert response.usage.total_tokens == 100
        config = provider._client.aio.models.generate_content.call_args.kwargs["config"]
        assert config.response_mime_type == "application/json"
        assert config.temperature == 0.1

    @pytest.mark.asyncio
    async def test_missing_usage_metadata(self):
        provider = GeminiProvider(api_key="test-key")
        gemini_response = MagicMock()
        gemini_response.text = "{}"
        gemini_response.usage_metadata = None
        provider._client = MagicMock()
        provider._client.aio.models.generate_content = AsyncMock(return_value=gemini_response)

        response = await provider.generate_json("Parse this")

        assert response.success is True
        assert response.usage.total_tokens == 0

    @pytest.mark.asyncio
    async def test_sdk_exception_is_captured(self):
        provider = GeminiProvider(api_key="test-key")
        provider._client = MagicMock()
        provider._client.aio.models.generate_content = AsyncMock(side_effect=ValueError("quota"))

        response = await provider.generate_json("Parse this")

        assert response.success is False
        assert response.error == "quota"
        assert response.provider == ProviderType.GEMINI

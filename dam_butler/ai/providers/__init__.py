"""
AI Providers Module - Interchangeable LLM clients for intent resolution.

Both providers expose the same interface:
    response = await provider.generate_json(prompt, system_prompt=...)

Which one the resolver uses is decided by settings.LLM_PROVIDER.
"""

from typing import Optional

from dam_butler.ai.providers.base import AIProvider, AIResponse, ProviderType, TokenUsage
from dam_butler.ai.providers.gemini import GeminiProvider, gemini_provider
from dam_butler.ai.providers.openai_provider import OpenAIProvider, openai_provider
from dam_butler.core.config import settings


def get_intent_provider(name: Optional[str] = None) -> AIProvider:
    """
    Return the provider named by `name` (or settings.LLM_PROVIDER).

    Unknown names fall back to OpenAI.
    """
    choice = (name or settings.LLM_PROVIDER or "").strip().lower()
    if choice == ProviderType.GEMINI.value:
        return gemini_provider
    return openai_provider


__all__ = [
    "AIProvider",
    "AIResponse",
    "ProviderType",
    "TokenUsage",
    "GeminiProvider",
    "gemini_provider",
    "OpenAIProvider",
    "openai_provider",
    "get_intent_provider",
]

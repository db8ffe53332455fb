"""
OpenAI Provider - GPT client for model-assisted intent resolution.

Role in DAM Butler:
==================
When an OpenAI key is configured, every asset request is first sent to
GPT with the catalog-aware system prompt. The reply is a JSON object
describing products, sections, use case and region, which the resolver
validates before trusting.

API Documentation: https://platform.openai.com/docs/api-reference
"""

import logging
import time
from typing import Optional

from openai import AsyncOpenAI

from dam_butler.ai.providers.base import AIProvider, AIResponse, ProviderType, TokenUsage
from dam_butler.core.config import settings

logger = logging.getLogger("dam_butler.ai.openai")


class OpenAIProvider(AIProvider):
    """
    OpenAI GPT provider implementation.

    Usage:
        provider = OpenAIProvider()
        response = await provider.generate_json(
            prompt='Parse this asset request: "Oracle Jet logo"',
            system_prompt=build_intent_system_prompt(knowledge_base),
        )
    """

    provider_type = ProviderType.OPENAI

    def __init__(self, model: str = None, api_key: str = None, timeout: float = None):
        self.model = model or settings.OPENAI_MODEL
        self.api_key = api_key or settings.OPENAI_API_KEY
        self.timeout = timeout or settings.AI_REQUEST_TIMEOUT

        if self.api_key:
            self._client = AsyncOpenAI(api_key=self.api_key, timeout=self.timeout)
            logger.info(f"OpenAI provider initialized with model: {self.model}")
        else:
            self._client = None
            logger.warning("OpenAI API key not configured - provider unavailable")

    @property
    def is_configured(self) -> bool:
        return self._client is not None

    async def generate_json(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        temperature: float = 0.1,
        max_tokens: int = 1000,
        **kwargs
    ) -> AIResponse:
        """
        Generate a JSON response using OpenAI's JSON mode.

        The content is returned as-is; fence stripping and schema
        validation belong to the caller.
        """
        start_time = time.time()

        if not self._client:
            return self._create_error_response(
                error="OpenAI API key not configured",
                model=self.model,
                latency_ms=self._measure_latency(start_time)
            )

        try:
            messages = []
            system_content = system_prompt or ""
            system_content += "\n\nYou must respond with valid JSON only, no explanation."
            messages.append({"role": "system", "content": system_content})
            messages.append({"role": "user", "content": prompt})

            response = await self._client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens,
                response_format={"type": "json_object"},
            )

            latency_ms = self._measure_latency(start_time)

            if not response.choices:
                return self._create_error_response(
                    error="OpenAI returned no choices",
                    model=self.model,
                    latency_ms=latency_ms
                )

            content = response.choices[0].message.content or ""
            usage = TokenUsage(
                prompt_tokens=response.usage.prompt_tokens if response.usage else 0,
                completion_tokens=response.usage.completion_tokens if response.usage else 0,
            )

            logger.info(f"OpenAI JSON request completed in {latency_ms:.0f}ms, tokens: {usage.total_tokens}")

            return AIResponse(
                content=content,
                provider=self.provider_type,
                model=self.model,
                usage=usage,
                latency_ms=latency_ms,
                success=True,
            )

        except Exception as e:
            latency_ms = self._measure_latency(start_time)
            logger.error(f"OpenAI JSON generation failed: {e}")
            return self._create_error_response(
                error=str(e),
                model=self.model,
                latency_ms=latency_ms
            )


# ---------------------------------------------------------------------------
# SINGLETON INSTANCE
# ---------------------------------------------------------------------------
openai_provider = OpenAIProvider()

"""
Gemini Provider - Google's GenAI SDK.

Alternative backend for model-assisted intent resolution, selected with
LLM_PROVIDER=gemini. Uses the SDK's async surface (client.aio) and
native JSON mode.
"""

import logging
import time
from typing import Optional

from google import genai
from google.genai import types

from dam_butler.ai.providers.base import AIProvider, AIResponse, ProviderType, TokenUsage
from dam_butler.core.config import settings

logger = logging.getLogger("dam_butler.ai.gemini")


class GeminiProvider(AIProvider):
    provider_type = ProviderType.GEMINI

    def __init__(self, model: str = None, api_key: str = None):
        self.model = model or settings.GEMINI_MODEL
        self.api_key = api_key or settings.GEMINI_API_KEY

        if self.api_key:
            self._client = genai.Client(api_key=self.api_key)
            logger.info(f"Gemini provider initialized with model: {self.model}")
        else:
            self._client = None
            logger.warning("Gemini API key not configured")

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
        start_time = time.time()
        if not self._client:
            return self._error("Gemini API key not configured", start_time)

        try:
            config = types.GenerateContentConfig(
                temperature=temperature,
                max_output_tokens=max_tokens,
                response_mime_type="application/json",
                system_instruction=system_prompt,
            )

            response = await self._client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
                config=config,
            )

            content = (response.text or "").strip()
            latency_ms = self._measure_latency(start_time)
            usage = self._extract_usage(response)

            logger.info(f"Gemini JSON request completed in {latency_ms:.0f}ms, tokens: {usage.total_tokens}")

            return AIResponse(
                content=content,
                provider=self.provider_type,
                model=self.model,
                usage=usage,
                latency_ms=latency_ms,
                success=True,
            )

        except Exception as e:
            return self._error(str(e), start_time)

    def _extract_usage(self, response) -> TokenUsage:
        # usage_metadata is None when the API reports no usage
        metadata = response.usage_metadata
        prompt_t = (metadata.prompt_token_count or 0) if metadata else 0
        comp_t = (metadata.candidates_token_count or 0) if metadata else 0
        return TokenUsage(prompt_tokens=prompt_t, completion_tokens=comp_t)

    def _error(self, msg, start_time):
        return self._create_error_response(
            error=msg, model=self.model, latency_ms=self._measure_latency(start_time)
        )


# Singleton instance
gemini_provider = GeminiProvider()

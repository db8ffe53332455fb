"""
Base AI Provider - Abstract interface for the LLM backends.

The intent resolver only needs one capability from a model: turn a
request into a JSON object. Every provider implements that single
contract so the resolver never cares which vendor answered.

Design Pattern: Strategy Pattern
================================
The base class defines the interface, and each provider implements it.
The active provider is picked from settings.LLM_PROVIDER at startup.

Example:
    provider = OpenAIProvider()
    if provider.is_configured:
        response = await provider.generate_json(prompt, system_prompt=...)
        print(response.content)
"""

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

logger = logging.getLogger("dam_butler.ai")


class ProviderType(str, Enum):
    """Enum of supported AI providers."""
    OPENAI = "openai"
    GEMINI = "gemini"


@dataclass
class TokenUsage:
    """Token usage statistics for a model request (used for cost tracking)."""
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    def __post_init__(self):
        if self.total_tokens == 0:
            self.total_tokens = self.prompt_tokens + self.completion_tokens


@dataclass
class AIResponse:
    """
    Standardized response from any AI provider.

    Attributes:
        content: The generated text (a JSON document for generate_json)
        provider: Which provider generated this response
        model: The specific model used
        usage: Token usage statistics
        latency_ms: How long the request took
        success: Whether the request succeeded
        error: Error message if failed
    """
    content: str
    provider: ProviderType
    model: str
    usage: TokenUsage = field(default_factory=TokenUsage)
    latency_ms: float = 0.0
    success: bool = True
    error: Optional[str] = None


class AIProvider(ABC):
    """
    Abstract base class for AI providers.

    Responsibilities:
    - Produce a JSON answer for a prompt
    - Never raise: failures are returned as AIResponse(success=False)
    - Track token usage and latency
    """

    provider_type: ProviderType
    model: str

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        """True when a credential is present and the client is usable."""

    @abstractmethod
    async def generate_json(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        **kwargs
    ) -> AIResponse:
        """
        Generate a JSON response from the model.

        Args:
            prompt: The user's message
            system_prompt: System instructions describing the JSON shape

        Returns:
            AIResponse with the raw JSON content string

        Raises:
            This method should NOT raise exceptions.
            Errors are captured in AIResponse.error
        """

    def _measure_latency(self, start_time: float) -> float:
        """Calculate latency in milliseconds."""
        return (time.time() - start_time) * 1000

    def _create_error_response(
        self,
        error: str,
        model: str,
        latency_ms: float = 0.0
    ) -> AIResponse:
        logger.error(f"AI Provider Error [{self.provider_type.value}]: {error}")
        return AIResponse(
            content="",
            provider=self.provider_type,
            model=model,
            latency_ms=latency_ms,
            success=False,
            error=error,
        )

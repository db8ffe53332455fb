"""
Test configuration and fixtures for pytest.

This module provides shared fixtures used across all tests:
- Knowledge base and pattern-only resolver (no LLM involved)
- Fake LLM provider factory for the model-assisted path
- Test client (FastAPI TestClient)
- Monitor reset between tests
"""

import os

# Settings are read at import time; keep every external integration off
# so the singletons never reach a real API during tests.
os.environ["OPENAI_API_KEY"] = ""
os.environ["GEMINI_API_KEY"] = ""
os.environ["LLM_PROVIDER"] = "openai"
os.environ["BRANDFOLDER_CLIENT_ID"] = ""
os.environ["BRANDFOLDER_CLIENT_SECRET"] = ""
os.environ["BRANDFOLDER_ID"] = ""
os.environ["BRANDFOLDER_LIVE_SEARCH"] = "false"

from typing import Generator, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from dam_butler.ai.intent.resolver import IntentResolver
from dam_butler.ai.intent.schemas import Intent, ParsingMethod, ProductMatch, SectionMatch
from dam_butler.ai.monitoring import asset_monitor
from dam_butler.ai.providers.base import AIResponse, ProviderType
from dam_butler.knowledge.catalog import KnowledgeBase
from dam_butler.main import app


# ---------------------------------------------------------------------------
# KNOWLEDGE / RESOLVER FIXTURES
# ---------------------------------------------------------------------------

@pytest.fixture
def kb() -> KnowledgeBase:
    return KnowledgeBase()


@pytest.fixture
def resolver(kb: KnowledgeBase) -> IntentResolver:
    """Pattern-only resolver (no provider)."""
    return IntentResolver(kb, provider=None)


@pytest.fixture(autouse=True)
def reset_monitor():
    """Each test starts with empty aggregates."""
    asset_monitor.reset()
    yield
    asset_monitor.reset()


# ---------------------------------------------------------------------------
# FAKE PROVIDER
# ---------------------------------------------------------------------------

@pytest.fixture
def fake_provider():
    """
    Factory for a configured provider whose generate_json is an AsyncMock.

    Usage:
        provider = fake_provider('{"products": []}')
        provider.generate_json.side_effect = RuntimeError("boom")
    """
    def _make(content: str = "", success: bool = True, error: Optional[str] = None):
        provider = MagicMock()
        provider.is_configured = True
        provider.provider_type = ProviderType.OPENAI
        provider.model = "gpt-4o-mini"
        provider.generate_json = AsyncMock(return_value=AIResponse(
            content=content,
            provider=ProviderType.OPENAI,
            model="gpt-4o-mini",
            success=success,
            error=error,
        ))
        return provider

    return _make


# ---------------------------------------------------------------------------
# INTENT FACTORY
# ---------------------------------------------------------------------------

@pytest.fixture
def make_intent(kb: KnowledgeBase):
    """
    Build an Intent by hand.

    Usage:
        intent = make_intent(product="BES985", sections=["logos"], use_case="presentation")
    """
    def _make(
        request: str = "test request",
        product: Optional[str] = None,
        sections: Optional[List[str]] = None,
        use_case: str = "general",
        region: str = "global",
        formats: Optional[List[str]] = None,
        confidence: float = 0.85,
        section_confidence: float = 0.6,
    ) -> Intent:
        products = []
        if product:
            products.append(ProductMatch.from_product(kb.get_product(product)))

        section_matches = []
        for key in sections or []:
            section = kb.get_section(key)
            section_matches.append(SectionMatch(
                key=section.key,
                name=section.name,
                score=3,
                confidence=section_confidence,
                deliverables=list(section.deliverables[:2]),
            ))

        region_info = kb.get_region(region)
        return Intent(
            original_request=request,
            products=products,
            sections=section_matches,
            use_case=use_case,
            region=region,
            brand=region_info.brand if region_info else None,
            theater=region_info.theater if region_info else None,
            formats=formats or ["PNG"],
            confidence=confidence,
            parsing_method=ParsingMethod.PATTERN_MATCHING,
        )

    return _make


# ---------------------------------------------------------------------------
# CLIENT FIXTURE
# ---------------------------------------------------------------------------

@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    with TestClient(app) as test_client:
        yield test_client

"""
Asset Search Service - Business logic for natural-language asset requests.

Responsibilities:
=================
- Resolve the request into an Intent
- Produce candidate assets (live DAM when enabled, templated otherwise)
- Attach suggestions and recommendations
- Report the search to the monitor

NOT Responsible For:
====================
- HTTP request/response handling (router's job)
- Request length validation (router's pydantic models)

Architecture:
=============
```
┌─────────────┐
│   Router    │  ← HTTP / MCP only
└──────┬──────┘
       │
       ▼
┌─────────────┐
│   Service   │  ← This file
└──────┬──────┘
       │
   ┌───┼────────────┐
   ▼   ▼            ▼
Resolver  Synthesizer  Brandfolder
```
"""

import logging
import time
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from dam_butler.ai.intent.resolver import IntentResolver, intent_resolver
from dam_butler.ai.intent.schemas import Intent, IntentContext
from dam_butler.ai.monitoring import asset_monitor
from dam_butler.core.config import settings
from dam_butler.schemas.assets import AssetResult, Recommendations, Suggestion
from dam_butler.services.brandfolder_client import BrandfolderClient, DAMError, brandfolder_client
from dam_butler.services.recommendations import recommend
from dam_butler.services.result_synthesizer import ResultSynthesizer, result_synthesizer
from dam_butler.services.suggestion_engine import suggest

logger = logging.getLogger("dam_butler.services.search")


class ResultSource(str, Enum):
    """Where the results of a search came from."""
    TEMPLATED = "templated"
    LIVE_DAM = "live_dam"


@dataclass
class SearchResult:
    """
    Result of one asset search.

    Service-layer result that the routers convert to HTTP / MCP output.
    """
    request_id: str
    intent: Intent
    results: List[AssetResult]
    suggestions: List[Suggestion]
    recommendations: Recommendations
    source: ResultSource = ResultSource.TEMPLATED
    processing_time_ms: float = 0.0
    dam_error: Optional[str] = None


class AssetSearchService:
    """
    Orchestrates resolver → results → suggestions.

    Usage:
        result = await asset_search_service.search(
            "Oracle Jet logo for my presentation",
            context={"region": "AU"},
        )
    """

    def __init__(
        self,
        resolver: IntentResolver = intent_resolver,
        synthesizer: ResultSynthesizer = result_synthesizer,
        dam_client: Optional[BrandfolderClient] = brandfolder_client,
        live_search: Optional[bool] = None,
    ):
        self.resolver = resolver
        self.synthesizer = synthesizer
        self.dam_client = dam_client
        self.live_search = settings.BRANDFOLDER_LIVE_SEARCH if live_search is None else live_search

    @property
    def live_enabled(self) -> bool:
        return bool(self.live_search and self.dam_client is not None and self.dam_client.is_configured)

    async def search(
        self,
        request: str,
        context: Optional[Dict[str, Any]] = None,
        request_id: Optional[str] = None,
    ) -> SearchResult:
        """
        Run the full pipeline for one request.

        Args:
            request: Pre-validated request text
            context: Optional {"use_case": ..., "region": ...}
            request_id: Correlation id (generated when omitted)

        Returns:
            SearchResult with intent, results, suggestions and recommendations
        """
        start_time = time.time()
        request_id = request_id or str(uuid.uuid4())
        logger.info(f"[{request_id}] Searching assets: {request[:50]}")

        intent = await self.resolver.resolve(request, IntentContext.model_validate(context or {}), request_id)

        source = ResultSource.TEMPLATED
        dam_error = None
        results = None

        if self.live_enabled:
            try:
                response = await self.dam_client.search(intent)
                results = self.synthesizer.synthesize_live(response, intent)
                source = ResultSource.LIVE_DAM
            except DAMError as e:
                dam_error = str(e)
                logger.warning(f"[{request_id}] Live DAM search failed, using templated results: {e}")
                asset_monitor.track_fallback(request_id, stage="dam_search", reason=dam_error)

        if results is None:
            results = self.synthesizer.synthesize(intent)

        suggestions = suggest(intent, results)
        recommendations = recommend(intent, self.synthesizer.knowledge_base)

        processing_time = (time.time() - start_time) * 1000
        asset_monitor.track_search(request_id, source.value, len(results), processing_time)

        return SearchResult(
            request_id=request_id,
            intent=intent,
            results=results,
            suggestions=suggestions,
            recommendations=recommendations,
            source=source,
            processing_time_ms=processing_time,
            dam_error=dam_error,
        )


# ---------------------------------------------------------------------------
# SINGLETON INSTANCE
# ---------------------------------------------------------------------------
asset_search_service = AssetSearchService()

"""
Assets Router - API endpoint for natural-language asset requests.

HTTP handling only; all business logic lives in AssetSearchService.

Architecture:
=============
```
┌──────────────────────┐
│ "Oracle Jet logo for │
│  my presentation"    │
└──────────┬───────────┘
           │
           ▼
┌──────────────────────┐
│    Assets Router     │  ← this file
└──────────┬───────────┘
           │
           ▼
┌──────────────────────┐
│ AssetSearchService   │
└──────────────────────┘
```
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field

from dam_butler.ai.intent.schemas import Intent
from dam_butler.ai.monitoring import asset_monitor
from dam_butler.schemas.assets import AssetResult, Recommendations, Suggestion
from dam_butler.services.asset_search_service import SearchResult, asset_search_service


# ---------------------------------------------------------------------------
# LOGGER SETUP
# ---------------------------------------------------------------------------
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# ROUTER SETUP
# ---------------------------------------------------------------------------
router = APIRouter(prefix="/api/find-brand-assets", tags=["assets"])


# ---------------------------------------------------------------------------
# REQUEST/RESPONSE SCHEMAS
# ---------------------------------------------------------------------------

class FindAssetsContext(BaseModel):
    """Optional caller hints. Explicit values win over inferred ones."""
    use_case: Optional[str] = Field(
        default=None,
        max_length=50,
        description="How the asset will be used (presentation, web, social, ...)"
    )
    region: Optional[str] = Field(
        default=None,
        max_length=10,
        description="Region code (AU, US, GB, ...)"
    )


class FindAssetsRequest(BaseModel):
    """
    Request schema for POST /api/find-brand-assets.

    Example:
    {
        "request": "Oracle Jet logo for my presentation",
        "context": {"region": "AU"}
    }
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    request: str = Field(
        ...,
        min_length=3,
        max_length=500,
        description="What you need in plain English"
    )
    context: Optional[FindAssetsContext] = Field(
        default=None,
        description="Optional: use case / region overrides"
    )


class FindAssetsResponse(BaseModel):
    """
    Response schema for POST /api/find-brand-assets.

    Example:
    {
        "success": true,
        "intent": {"products": [...], "use_case": "presentation", ...},
        "results": [{"name": "Oracle Jet - Breville Logo (Presentation Ready)", ...}],
        "suggestions": [...],
        "source": "templated"
    }
    """
    success: bool = Field(default=True)
    request_id: str = Field(description="Request tracking ID")
    intent: Intent
    results: List[AssetResult]
    suggestions: List[Suggestion]
    recommendations: Recommendations
    source: str = Field(description="templated | live_dam")
    processing_time_ms: float = Field(description="Processing time")
    dam_error: Optional[str] = Field(default=None, description="Live DAM failure, if one was recovered")


class ResolutionStatsResponse(BaseModel):
    """Response schema for GET /api/find-brand-assets/stats."""
    model_requests: int
    model_successes: int
    model_failures: int
    success_rate: str
    total_tokens: int
    prompt_tokens: int
    completion_tokens: int
    avg_latency_ms: float
    estimated_total_cost: str
    requests_by_provider: Dict[str, int]
    tokens_by_provider: Dict[str, int]
    resolutions: int
    resolutions_by_method: Dict[str, int]
    fallbacks: int
    searches_by_source: Dict[str, int]
    errors: int


# ---------------------------------------------------------------------------
# HELPER FUNCTIONS
# ---------------------------------------------------------------------------

def _context_dict(request: FindAssetsRequest) -> Dict[str, Any]:
    if request.context is None:
        return {}
    return request.context.model_dump(exclude_none=True)


def _result_to_response(result: SearchResult) -> FindAssetsResponse:
    return FindAssetsResponse(
        request_id=result.request_id,
        intent=result.intent,
        results=result.results,
        suggestions=result.suggestions,
        recommendations=result.recommendations,
        source=result.source.value,
        processing_time_ms=round(result.processing_time_ms, 2),
        dam_error=result.dam_error,
    )


# ---------------------------------------------------------------------------
# ENDPOINTS
# ---------------------------------------------------------------------------

@router.post("", response_model=FindAssetsResponse)
async def find_brand_assets(request: FindAssetsRequest):
    """
    Find brand assets from a natural-language request.

    **Examples:**
    - "Oracle Jet logo for my presentation"
    - "Sage product photos for UK market"
    - "Barista Pro Amazon A+ content"
    """
    try:
        result = await asset_search_service.search(
            request=request.request,
            context=_context_dict(request),
        )
        return _result_to_response(result)

    except Exception as e:
        logger.error(f"Failed to find brand assets: {e}", exc_info=True)
        asset_monitor.track_error("unknown", str(e), stage="find_brand_assets")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "search_failed", "message": f"Failed to find brand assets: {e}"},
        )


@router.get("/stats", response_model=ResolutionStatsResponse)
async def get_resolution_stats():
    """
    Get intent resolution statistics.

    Includes model usage (tokens, latency, cost), resolutions per parsing
    method, fallback counts and searches per result source.
    """
    return ResolutionStatsResponse(**asset_monitor.get_stats().to_dict())

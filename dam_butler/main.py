"""
Main application entry point - FastAPI app instance and configuration.
Run with: uvicorn dam_butler.main:app --reload
"""

from fastapi import FastAPI  # The FastAPI framework
from fastapi.middleware.cors import CORSMiddleware  # Cross-Origin Resource Sharing

from dam_butler import __version__
from dam_butler.ai.intent.resolver import intent_resolver
from dam_butler.core.config import settings
from dam_butler.routers import assets, mcp
from dam_butler.services.asset_search_service import asset_search_service

# ---------------------------------------------------------------------------
# CREATE FASTAPI APPLICATION
# ---------------------------------------------------------------------------
# The OpenAPI document is served by FastAPI itself at /openapi.json,
# Swagger UI at /docs
app = FastAPI(
    title=settings.APP_NAME,
    version=__version__,
    debug=settings.DEBUG,
    docs_url="/docs",
    redoc_url="/redoc",
)

# ---------------------------------------------------------------------------
# CORS MIDDLEWARE
# ---------------------------------------------------------------------------
# Chat assistants call the MCP endpoint from their own origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# REGISTER ROUTERS
# ---------------------------------------------------------------------------
# assets.router: /api/find-brand-assets (+ /stats)
# mcp.router: /api/mcp tool capabilities and tool calls
app.include_router(assets.router)
app.include_router(mcp.router)


# ---------------------------------------------------------------------------
# HEALTH CHECK ENDPOINT
# ---------------------------------------------------------------------------
@app.get("/health", tags=["health"])
def health_check():
    """
    Simple health check endpoint.

    Reports which optional integrations are configured; does not call them.
    """
    return {
        "status": "ok",
        "version": __version__,
        "model_assisted": intent_resolver.model_enabled,
        "llm_provider": settings.LLM_PROVIDER,
        "live_dam": asset_search_service.live_enabled,
    }

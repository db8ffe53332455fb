"""
MCP Router - Tool endpoint for chat assistants.

GET  /api/mcp  → tool capabilities
POST /api/mcp  → {"tool": "find_brand_assets", "arguments": {...}}
                 answered as MCP text content

The tool call goes straight to AssetSearchService; it does not go
through the HTTP assets router.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, ValidationError

from dam_butler import __version__
from dam_butler.ai.intent.resolver import intent_resolver
from dam_butler.routers.assets import FindAssetsRequest
from dam_butler.services.asset_search_service import SearchResult, asset_search_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/mcp", tags=["mcp"])

TOOL_NAME = "find_brand_assets"

TOOL_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "request": {
            "type": "string",
            "description": "What you need in plain English (e.g., 'Oracle Jet logo for my presentation')",
        },
        "context": {
            "type": "object",
            "properties": {
                "region": {"type": "string", "description": "User's region (AU, US, GB, etc.)"},
                "use_case": {"type": "string", "description": "How the asset will be used"},
            },
        },
    },
    "required": ["request"],
}


class MCPToolCall(BaseModel):
    tool: str
    arguments: Dict[str, Any] = Field(default_factory=dict)


def _text_content(text: str, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"content": [{"type": "text", "text": text}]},
    )


def format_search_results(result: SearchResult) -> str:
    """Render a SearchResult as the plain-text answer an assistant shows."""
    intent = result.intent

    if not result.results:
        lines = [f'No assets found for "{intent.original_request}"', "", "Suggestions:"]
        lines.extend(f"- {s.message}" for s in result.suggestions)
        return "\n".join(lines)

    count = len(result.results)
    lines = [f'Found {count} asset{"s" if count > 1 else ""} for "{intent.original_request}"', ""]

    if intent.products:
        detected = " | ".join([
            ", ".join(p.name for p in intent.products),
            ", ".join(s.name for s in intent.sections) or "any section",
            intent.use_case,
        ])
        lines.extend([f"**Detected**: {detected}", ""])

    for index, asset in enumerate(result.results, start=1):
        lines.append(f"**{index}. {asset.name}**")
        lines.append(f"Format: {asset.format} | Size: {asset.dimensions or 'n/a'}")
        lines.append(f"Download: {asset.download_url}")
        lines.append(asset.summary)
        lines.extend(f"   {note}" for note in asset.usage_notes)
        lines.append("")

    if result.suggestions:
        lines.append("**Suggestions**:")
        for suggestion in result.suggestions:
            lines.append(f"- {suggestion.message}")
            lines.append(f"  {suggestion.recommended_action}")

    return "\n".join(lines)


# ---------------------------------------------------------------------------
# ENDPOINTS
# ---------------------------------------------------------------------------

@router.get("")
async def get_capabilities():
    """Describe the tools this endpoint offers."""
    return {
        "name": "dam-butler-mcp",
        "version": __version__,
        "description": "Breville DAM Butler - Intent-based brand asset search",
        "status": "ready",
        "dam_configured": asset_search_service.live_enabled,
        "model_configured": intent_resolver.model_enabled,
        "capabilities": {
            "tools": [
                {
                    "name": TOOL_NAME,
                    "description": (
                        "Find brand assets using natural language. Understands Breville "
                        "products, regions, and usage contexts automatically."
                    ),
                    "schema": TOOL_SCHEMA,
                }
            ]
        },
    }


@router.post("")
async def call_tool(call: MCPToolCall):
    """Run a tool call and answer with MCP text content."""
    if call.tool != TOOL_NAME:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Unknown tool", "available_tools": [TOOL_NAME]},
        )

    try:
        arguments = FindAssetsRequest.model_validate(call.arguments)
    except ValidationError as e:
        return _text_content(
            f"Invalid arguments for {TOOL_NAME}: {e.error_count()} error(s). "
            "Provide a 'request' between 3 and 500 characters.",
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        )

    try:
        context = arguments.context.model_dump(exclude_none=True) if arguments.context else {}
        result = await asset_search_service.search(request=arguments.request, context=context)
        return _text_content(format_search_results(result))

    except Exception as e:
        logger.error(f"MCP asset search failed: {e}", exc_info=True)
        return _text_content(
            f"Search failed: {e}\n\nTry being more specific about the product or asset type you need.",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

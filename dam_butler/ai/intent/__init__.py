"""
Intent Module - From free text to a structured asset query.

Example Flow:
============
Request: "Oracle Jet logo for my presentation"

IntentResolver produces:
{
    "products": [{"name": "Oracle Jet", "model_number": "BES985"}],
    "sections": [{"name": "Logos", "score": 2}],
    "use_case": "presentation",
    "formats": ["PNG", "SVG"],
    "confidence": 0.95,
    "parsing_method": "pattern_matching"
}
"""

from dam_butler.ai.intent.schemas import (
    Intent,
    IntentContext,
    ParsingMethod,
    ProductMatch,
    SectionMatch,
)
from dam_butler.ai.intent.resolver import IntentResolver, ModelResolutionError, intent_resolver

__all__ = [
    "Intent",
    "IntentContext",
    "ParsingMethod",
    "ProductMatch",
    "SectionMatch",
    "IntentResolver",
    "ModelResolutionError",
    "intent_resolver",
]

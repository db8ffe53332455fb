"""
Prompts Module - Centralized prompt templates for model-assisted parsing.
"""

from dam_butler.ai.prompts.intent_prompts import (
    INTENT_EXTRACTION_PROMPT,
    INTENT_SYSTEM_PROMPT_TEMPLATE,
    build_intent_system_prompt,
    build_intent_user_prompt,
)

__all__ = [
    "INTENT_EXTRACTION_PROMPT",
    "INTENT_SYSTEM_PROMPT_TEMPLATE",
    "build_intent_system_prompt",
    "build_intent_user_prompt",
]

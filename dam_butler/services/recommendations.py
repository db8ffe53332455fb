"""
Recommendations - Predictive extras attached to a search response.

Pure function of the intent: complementary assets, format advice,
other channels the same assets are likely to serve, and sections the
use case usually needs that were not targeted.
"""

from typing import Any, Dict, List

from dam_butler.ai.intent.schemas import Intent
from dam_butler.knowledge.catalog import KnowledgeBase, knowledge_base as default_knowledge_base
from dam_butler.schemas.assets import (
    ComplementaryAsset,
    FormatSuggestion,
    Recommendations,
    UseCaseExpansion,
)

FORMAT_CONFIDENCE = 0.90
EXPANSION_THRESHOLD = 0.6


# ---------------------------------------------------------------------------
# MATRICES
# ---------------------------------------------------------------------------

FORMAT_MATRIX: Dict[str, Dict[str, Any]] = {
    "presentation": {
        "primary": ["PNG", "SVG"],
        "reason": "Transparency support and scalability for presentations",
        "avoid": ["WEBP"],
        "avoid_reason": "Limited PowerPoint support",
    },
    "web": {
        "primary": ["WEBP", "SVG", "PNG"],
        "reason": "Optimized for web performance and quality",
        "consider": ["JPG"],
        "consider_reason": "For photographs without transparency needs",
    },
    "print": {
        "primary": ["PDF", "EPS", "TIFF"],
        "reason": "High resolution and CMYK support for print",
        "minimum_dpi": 300,
        "avoid": ["JPG", "PNG"],
        "avoid_reason": "RGB color space may not print accurately",
    },
    "social": {
        "primary": ["JPG", "PNG", "MP4"],
        "reason": "Platform-optimized formats with good compression",
    },
    "email": {
        "primary": ["PNG", "JPG"],
        "reason": "Email-safe formats with universal support",
        "max_file_size": "1MB",
        "avoid": ["SVG", "WEBP"],
        "avoid_reason": "Limited email client support",
    },
}

EXPANSION_MATRIX: Dict[str, List[Dict[str, Any]]] = {
    "presentation": [
        {"use_case": "web", "reason": "Present online or embed in websites", "confidence": 0.75},
        {"use_case": "email", "reason": "Email presentation summaries", "confidence": 0.65},
        {"use_case": "print", "reason": "Print handouts or reports", "confidence": 0.70},
    ],
    "social": [
        {"use_case": "web", "reason": "Drive traffic to website", "confidence": 0.80},
        {"use_case": "email", "reason": "Email marketing campaigns", "confidence": 0.75},
        {"use_case": "print", "reason": "Print advertising materials", "confidence": 0.60},
    ],
    "amazon": [
        {"use_case": "web", "reason": "Use on official website", "confidence": 0.85},
        {"use_case": "social", "reason": "Promote Amazon listings", "confidence": 0.80},
        {"use_case": "email", "reason": "Email product announcements", "confidence": 0.70},
    ],
}

ASSETS_FOR_USE_CASE: Dict[str, List[str]] = {
    "web": ["Hero images", "Product photography", "Logos"],
    "email": ["Compact logos", "Product highlights", "Call-to-action assets"],
    "print": ["High-resolution photos", "Vector logos", "Print-ready layouts"],
    "social": ["Square formats", "Story formats", "Video content"],
}


def _complementary_assets(intent: Intent) -> List[ComplementaryAsset]:
    complementary = []
    section_names = [section.name for section in intent.sections]

    if "Product Photography" in section_names:
        complementary.append(ComplementaryAsset(
            kind="lifestyle_photography",
            reason="Lifestyle shots complement product photography",
            suggested_section="Lifestyle Photography",
            confidence=0.85,
        ))

    if "Logos" in section_names:
        complementary.append(ComplementaryAsset(
            kind="brand_guidelines",
            reason="Brand guidelines ensure consistent logo usage",
            suggested_section="Brand Guidelines",
            confidence=0.90,
        ))

    if any("Social" in name for name in section_names):
        complementary.append(ComplementaryAsset(
            kind="multi_format_social",
            reason="Social campaigns benefit from multiple format variations",
            suggested_formats=["JPG", "PNG", "MP4", "GIF"],
            confidence=0.88,
        ))

    if intent.use_case == "amazon":
        complementary.append(ComplementaryAsset(
            kind="amazon_complete_package",
            reason="Amazon listings perform better with complete asset packages",
            suggested_assets=["A+ Content", "Main Image", "Lifestyle Images", "Infographics"],
            confidence=0.92,
        ))

    return complementary


def _format_suggestions(intent: Intent) -> List[FormatSuggestion]:
    entry = FORMAT_MATRIX.get(intent.use_case)
    if entry is None:
        return []
    return [FormatSuggestion(use_case=intent.use_case, confidence=FORMAT_CONFIDENCE, **entry)]


def _use_case_expansions(intent: Intent) -> List[UseCaseExpansion]:
    return [
        UseCaseExpansion(
            use_case=expansion["use_case"],
            original_use_case=intent.use_case,
            reason=expansion["reason"],
            suggested_assets=list(ASSETS_FOR_USE_CASE.get(expansion["use_case"], [])),
            confidence=expansion["confidence"],
        )
        for expansion in EXPANSION_MATRIX.get(intent.use_case, [])
        if expansion["confidence"] > EXPANSION_THRESHOLD
    ]


def _complementary_sections(intent: Intent, knowledge_base: KnowledgeBase) -> List[str]:
    profile = knowledge_base.get_use_case(intent.use_case)
    if profile is None:
        return []
    targeted = {section.key for section in intent.sections if section.key}
    targeted |= {section.name for section in intent.sections}

    names = []
    for key in profile.sections:
        section = knowledge_base.get_section(key)
        if section is not None and key not in targeted and section.name not in targeted:
            names.append(section.name)
    return names


def recommend(
    intent: Intent,
    knowledge_base: KnowledgeBase = default_knowledge_base,
) -> Recommendations:
    return Recommendations(
        complementary_assets=_complementary_assets(intent),
        format_suggestions=_format_suggestions(intent),
        use_case_expansions=_use_case_expansions(intent),
        complementary_sections=_complementary_sections(intent, knowledge_base),
    )

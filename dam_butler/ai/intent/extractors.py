"""
Signal Extractors - Pure functions that pull signals out of request text.

Each extractor scans the raw request for one kind of signal and
reconciles it against the knowledge base. None of them raise on
unknown input; a missing signal is represented by None / "general" /
"global" / an empty list.

Ordering:
=========
Use-case and region extraction walk an ordered list of
(pattern, label) pairs and stop at the first match. The order is a
priority: "presentation" cues are checked before "web" cues, and
"digital" lands on web even though it could also mean email. Product
and section matching iterate the knowledge base in declaration order.
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Pattern, Tuple

from dam_butler.knowledge.catalog import AssetSection, KnowledgeBase, Product, UseCaseProfile


# ---------------------------------------------------------------------------
# ORDERED PATTERN TABLES
# ---------------------------------------------------------------------------

USE_CASE_PATTERNS: Tuple[Tuple[Pattern, str], ...] = (
    (re.compile(r"presentation|slide|ppt|powerpoint|keynote", re.IGNORECASE), "presentation"),
    (re.compile(r"web|website|online|digital|homepage", re.IGNORECASE), "web"),
    (re.compile(r"social|instagram|facebook|twitter|linkedin|tiktok", re.IGNORECASE), "social"),
    (re.compile(r"amazon|marketplace|ecommerce|a\+|aplus", re.IGNORECASE), "amazon"),
    (re.compile(r"retail|store|pos|point.of.sale|in.?store", re.IGNORECASE), "retail"),
    (re.compile(r"print|brochure|flyer|poster|catalogue", re.IGNORECASE), "print"),
    (re.compile(r"email|edm|newsletter|mailchimp", re.IGNORECASE), "email"),
    (re.compile(r"video|youtube|tutorial|demo", re.IGNORECASE), "video"),
)

REGION_PATTERNS: Tuple[Tuple[Pattern, str], ...] = (
    (re.compile(r"australia|australian|\bau\b|aussie", re.IGNORECASE), "AU"),
    (re.compile(r"america|usa|\bus\b|united states|american", re.IGNORECASE), "US"),
    (re.compile(r"canada|canadian|\bca\b", re.IGNORECASE), "CA"),
    (re.compile(r"\buk\b|britain|british|united kingdom|england", re.IGNORECASE), "GB"),
    (re.compile(r"germany|german|\bde\b|deutschland", re.IGNORECASE), "DE"),
    (re.compile(r"europe|european|\beu\b|emea", re.IGNORECASE), "EU"),
    # The Sage brand only trades in EMEA, so naming it implies the UK market
    (re.compile(r"sage", re.IGNORECASE), "GB"),
)

KEYWORD_SCORE = 2
USE_CASE_BONUS = 3
MAX_DELIVERABLES = 3


@dataclass(frozen=True)
class SectionScore:
    """A section that matched the request, with its accumulated score."""
    section: AssetSection
    score: int


# ---------------------------------------------------------------------------
# EXTRACTORS
# ---------------------------------------------------------------------------

def extract_product(text: str, knowledge_base: KnowledgeBase) -> Optional[Product]:
    """
    Find the single product a request refers to.

    Model codes are checked before aliases. Within each pass the first
    product in catalog order wins, regardless of where in the text the
    match occurs.
    """
    lowered = text.lower()

    for product in knowledge_base.products:
        codes = (product.model_number, product.regional_model)
        if any(code and code.lower() in lowered for code in codes):
            return product

    for product in knowledge_base.products:
        if any(alias in lowered for alias in product.aliases):
            return product

    return None


def extract_sections(
    text: str,
    knowledge_base: KnowledgeBase,
    use_case: Optional[str] = None,
) -> List[SectionScore]:
    """
    Score every section against the request.

    +2 per keyword found in the text, +3 when the use case is one the
    section serves. Zero-score sections are dropped; the sort is stable
    so ties keep catalog order.
    """
    lowered = text.lower()
    scored = []

    for section in knowledge_base.sections:
        score = sum(KEYWORD_SCORE for keyword in section.keywords if keyword in lowered)
        if use_case and use_case in section.use_cases:
            score += USE_CASE_BONUS
        if score > 0:
            scored.append(SectionScore(section=section, score=score))

    return sorted(scored, key=lambda match: match.score, reverse=True)


def extract_use_case(text: str) -> str:
    for pattern, label in USE_CASE_PATTERNS:
        if pattern.search(text):
            return label
    return "general"


def extract_region(text: str) -> str:
    for pattern, code in REGION_PATTERNS:
        if pattern.search(text):
            return code
    return "global"


def select_deliverables(
    text: str,
    section: AssetSection,
    profile: Optional[UseCaseProfile] = None,
) -> List[str]:
    """
    Pick the deliverables of a section the request is most likely after.

    Deliverables named outright in the text come first, then the use
    case's own deliverables when the section carries them. With neither,
    a keyword-matched section contributes its first three deliverables.
    """
    lowered = text.lower()
    selected = [d for d in section.deliverables if d.lower() in lowered]

    if profile is not None:
        for deliverable in profile.specific_deliverables:
            if deliverable in section.deliverables and deliverable not in selected:
                selected.append(deliverable)

    if selected:
        return selected[:MAX_DELIVERABLES]

    if any(keyword in lowered for keyword in section.keywords):
        return list(section.deliverables[:MAX_DELIVERABLES])

    return []

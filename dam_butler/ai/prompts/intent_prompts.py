"""
Intent Prompts - Templates for turning asset requests into structured intents.

These prompts convert requests like:
  "Sage Oracle Dual Boiler social media assets for UK market"

Into JSON like:
  {
    "products": [{"name": "Oracle Dual Boiler", "modelNumber": "BES995", "sageModel": "SES995"}],
    "sections": [{"name": "Social (incl. Videos, Statics, Stories & Keynotes)"}],
    "useCase": "social",
    "region": "GB",
    "brand": "Sage",
    "confidence": 0.96
  }

Prompt Engineering Techniques:
=============================
1. Catalog grounding (products, sections and regions rendered from the
   knowledge base, so the prompt never drifts from the tables)
2. Schema enforcement (one exact JSON structure)
3. Calibrated confidence bands
4. Worked examples
"""

from typing import Optional

from dam_butler.knowledge.catalog import KnowledgeBase


# ---------------------------------------------------------------------------
# INTENT SYSTEM PROMPT
# ---------------------------------------------------------------------------

INTENT_SYSTEM_PROMPT_TEMPLATE = """You are an expert at parsing brand asset requests for Breville's Vault DAM system. Parse user requests into structured intent using the official Vault structure.

PRODUCT CATALOG (model numbers, Sage variant in brackets):
{products}

REGIONAL BRAND MAPPING:
{regions}

OFFICIAL VAULT SECTIONS ({section_count} sections):
{sections}

USE CASES AND PREFERRED FORMATS:
{use_cases}

RULES:
1. Use the exact section names listed above.
2. Only return products from the catalog. If no product is mentioned, return an empty list.
3. Derive brand from region: Breville for APAC/USCM markets, Sage for EMEA markets.
4. useCase must be one of the use cases above, or "general".
5. region is a region code from the mapping above, or "global".

CONFIDENCE SCORING GUIDELINES:
- 0.95+: Product match + specific section + clear use case + regional context
- 0.85-0.94: Product match + section + use case OR regional info
- 0.75-0.84: Product identified + general section OR use case detected
- 0.60-0.74: Some product/section hints but ambiguous
- <0.60: Unclear request, needs clarification

EXAMPLES:

Input: "Oracle Jet logo for my presentation"
Output: Product=Oracle Jet(BES985), Section=Logos, UseCase=presentation, Formats=[PNG,SVG], Confidence=0.95

Input: "Amazon listing photos for coffee machine"
Output: Product=none, Section=Digital Assets, UseCase=amazon, Deliverables=[Amazon A+], Confidence=0.70

PARSE INTO THIS EXACT JSON STRUCTURE:
{{
  "products": [{{"name": "Oracle Jet", "modelNumber": "BES985", "sageModel": "SES985", "confidence": 0.95}}],
  "sections": [{{"name": "Logos", "deliverables": ["Brands & Logos"], "confidence": 0.9}}],
  "useCase": "presentation",
  "region": "AU",
  "brand": "Breville",
  "theater": "APAC",
  "formats": ["PNG", "SVG"],
  "specificDeliverables": ["Brands & Logos"],
  "confidence": 0.95,
  "reasoning": "Oracle Jet detected, Logos section for a presentation, PNG/SVG for transparency"
}}

Respond ONLY with valid JSON. No markdown, no extra text."""


def build_intent_system_prompt(knowledge_base: KnowledgeBase) -> str:
    """Render the system prompt with the catalog tables of `knowledge_base`."""
    products = "\n".join(
        f"- {p.name}: {p.model_number} (Sage: {p.regional_model}) - {p.sub_category}"
        for p in knowledge_base.products
    )
    regions = "\n".join(
        f"- {code}: {info.brand} ({info.theater})"
        for code, info in knowledge_base.regions.items()
    )
    sections = "\n".join(
        f"{i}. {s.name} - {s.description}. Deliverables: {', '.join(s.deliverables)}"
        for i, s in enumerate(knowledge_base.sections, start=1)
    )
    use_cases = "\n".join(
        f"- {profile.name}: {', '.join(profile.preferred_formats)}"
        + (f" (deliverables: {', '.join(profile.specific_deliverables)})" if profile.specific_deliverables else "")
        for profile in knowledge_base.use_cases.values()
    )
    return INTENT_SYSTEM_PROMPT_TEMPLATE.format(
        products=products,
        regions=regions,
        section_count=len(knowledge_base.sections),
        sections=sections,
        use_cases=use_cases,
    )


# ---------------------------------------------------------------------------
# INTENT EXTRACTION PROMPT
# ---------------------------------------------------------------------------
# Per-request user message

INTENT_EXTRACTION_PROMPT = """Parse this asset request: "{request}"
{context}
JSON response only, no explanation."""


def build_intent_user_prompt(
    request: str,
    use_case: Optional[str] = None,
    region: Optional[str] = None,
) -> str:
    context_lines = []
    if use_case:
        context_lines.append(f"Use case (from caller): {use_case}")
    if region:
        context_lines.append(f"Region (from caller): {region}")
    context = "\n".join(context_lines)
    if context:
        context = f"\nCONTEXT:\n{context}\n"
    return INTENT_EXTRACTION_PROMPT.format(request=request, context=context)

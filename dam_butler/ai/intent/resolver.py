"""
Intent Resolver - Turns a free-text asset request into a structured Intent.

This is the core of the asset router. It:
1. Tries the configured LLM first (model-assisted strategy)
2. Falls back to deterministic pattern matching on ANY model failure
3. Drops to a keyword-only resolver when no knowledge base is available

Resolution Flow:
===============
    configured model? ──yes──> model-assisted ──ok──> Intent(model_assisted)
           │                          │
           no                       fails
           │                          │
           └──────> pattern matching <┘ ───> Intent(pattern_matching)

There is no retry: one failed model call triggers exactly one fallback.
The caller never sees an exception for non-empty text.
"""

import asyncio
import json
import logging
import re
import time
import uuid
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import ValidationError

from dam_butler.ai.intent.extractors import (
    extract_product,
    extract_region,
    extract_sections,
    extract_use_case,
    select_deliverables,
)
from dam_butler.ai.intent.schemas import (
    Intent,
    IntentContext,
    ModelIntentPayload,
    ParsingMethod,
    ProductMatch,
    SectionMatch,
    normalize_use_case,
)
from dam_butler.ai.monitoring import asset_monitor
from dam_butler.ai.prompts.intent_prompts import (
    build_intent_system_prompt,
    build_intent_user_prompt,
)
from dam_butler.ai.providers import AIProvider, AIResponse, get_intent_provider
from dam_butler.core.config import settings
from dam_butler.knowledge.catalog import KnowledgeBase, knowledge_base as default_knowledge_base

logger = logging.getLogger("dam_butler.ai.intent")


# ---------------------------------------------------------------------------
# SCORING CONSTANTS
# ---------------------------------------------------------------------------
BASE_CONFIDENCE = 0.70
PRODUCT_BONUS = 0.15
SECTION_BONUS = 0.10
MAX_SECTIONS = 2

MODEL_MIN_CONFIDENCE = 0.1
MODEL_MAX_CONFIDENCE = 1.0

MINIMAL_CONFIDENCE = 0.5

_FENCE_OPEN = re.compile(r"```json\n?")
_FENCE_ANY = re.compile(r"```\n?")


# ---------------------------------------------------------------------------
# MINIMAL (KEYWORD-ONLY) CUES
# ---------------------------------------------------------------------------
# Hard-coded so they work without a knowledge base.
_MINIMAL_PRODUCT_CUES = (
    (re.compile(r"oracle jet|bes985", re.IGNORECASE), ("Oracle Jet", "BES985")),
)
_MINIMAL_SECTION_CUES = (
    (re.compile(r"logo|brand", re.IGNORECASE), "Logos"),
    (re.compile(r"photo|image|shot", re.IGNORECASE), "Product Photography"),
    (re.compile(r"lifestyle", re.IGNORECASE), "Lifestyle Photography"),
)
_MINIMAL_USE_CASE_CUES = (
    (re.compile(r"presentation", re.IGNORECASE), "presentation", ["PNG", "SVG"]),
    (re.compile(r"web", re.IGNORECASE), "web", ["PNG", "WebP"]),
    (re.compile(r"social", re.IGNORECASE), "social", ["PNG", "JPG"]),
    (re.compile(r"print", re.IGNORECASE), "print", ["PDF", "EPS", "PNG"]),
)


class ModelResolutionError(Exception):
    """Raised internally when the model-assisted strategy cannot produce an Intent."""


def strip_code_fences(content: str) -> str:
    """Remove ```json / ``` fencing around a model answer."""
    return _FENCE_ANY.sub("", _FENCE_OPEN.sub("", content)).strip()


def parse_model_payload(content: Optional[str]) -> ModelIntentPayload:
    """
    Validate a raw model answer.

    Raises:
        ModelResolutionError: empty content, invalid JSON, a non-object
        payload or structurally wrong fields.
    """
    if not content or not content.strip():
        raise ModelResolutionError("Model returned empty content")

    cleaned = strip_code_fences(content)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ModelResolutionError(f"Model returned invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ModelResolutionError(f"Model returned {type(data).__name__}, expected a JSON object")

    try:
        return ModelIntentPayload.model_validate(data)
    except ValidationError as e:
        raise ModelResolutionError(f"Model response failed validation: {e.error_count()} error(s)") from e


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


class IntentResolver:
    """
    Resolves asset requests into Intents.

    Usage:
        resolver = IntentResolver(knowledge_base, provider=openai_provider)
        intent = await resolver.resolve("Oracle Jet logo for my presentation")

        # Deterministic path only, no model involved
        intent = resolver.resolve_with_patterns("Sage product photos for UK market")
    """

    def __init__(
        self,
        knowledge_base: Optional[KnowledgeBase] = default_knowledge_base,
        provider: Optional[AIProvider] = None,
        timeout: Optional[float] = None,
    ):
        self.knowledge_base = knowledge_base
        self.provider = provider
        self.timeout = timeout if timeout is not None else settings.AI_REQUEST_TIMEOUT
        self._system_prompt = (
            build_intent_system_prompt(knowledge_base) if knowledge_base is not None else None
        )

    @property
    def model_enabled(self) -> bool:
        return (
            self.provider is not None
            and self.provider.is_configured
            and self.knowledge_base is not None
        )

    # -----------------------------------------------------------------------
    # PUBLIC API
    # -----------------------------------------------------------------------

    async def resolve(
        self,
        text: str,
        context: Union[IntentContext, Dict[str, Any], None] = None,
        request_id: Optional[str] = None,
    ) -> Intent:
        """
        Resolve free text into an Intent, never raising for non-empty text.

        Args:
            text: The raw request (length is validated by the transport layer)
            context: Optional {"use_case": ..., "region": ...} overrides
            request_id: Correlation id for monitoring

        Returns:
            Intent tagged with the strategy that produced it
        """
        request_id = request_id or str(uuid.uuid4())
        ctx = self._coerce_context(context)
        start_time = time.time()

        if self.model_enabled:
            try:
                intent = await self._resolve_with_model(text, ctx, request_id)
            except ModelResolutionError as e:
                logger.warning(f"Model-assisted parsing failed, using patterns: {e}")
                asset_monitor.track_fallback(request_id, stage="intent", reason=str(e))
                intent = self._resolve_locally(text, ctx, fallback_reason=str(e))
        else:
            intent = self._resolve_locally(text, ctx)

        processing_time = (time.time() - start_time) * 1000
        asset_monitor.track_intent(request_id, intent, processing_time_ms=processing_time)
        return intent

    def resolve_with_patterns(
        self,
        text: str,
        context: Union[IntentContext, Dict[str, Any], None] = None,
        fallback_reason: Optional[str] = None,
    ) -> Intent:
        """
        Deterministic strategy: extractors + knowledge base + fixed scoring.

        Same (text, context) always yields an identical Intent.
        """
        kb = self.knowledge_base
        if kb is None:
            raise RuntimeError("Pattern matching requires a knowledge base")

        ctx = self._coerce_context(context)
        reasoning: List[str] = []
        confidence = BASE_CONFIDENCE

        use_case = ctx.normalized_use_case or extract_use_case(text)
        if ctx.normalized_use_case:
            reasoning.append(f"Use case provided by caller: {use_case}")

        region = ctx.normalized_region or extract_region(text)
        if ctx.normalized_region:
            reasoning.append(f"Region provided by caller: {region}")

        # Products
        products: List[ProductMatch] = []
        product = extract_product(text, kb)
        if product is not None:
            products.append(ProductMatch.from_product(product))
            reasoning.append(f"Detected product: {product.name} ({product.model_number})")
            confidence += PRODUCT_BONUS

        # Sections
        profile = kb.get_use_case(use_case)
        ranked = extract_sections(text, kb, use_case)
        sections: List[SectionMatch] = []
        if ranked:
            for match in ranked[:MAX_SECTIONS]:
                deliverables = select_deliverables(text, match.section, profile)
                sections.append(SectionMatch.from_section(match.section, match.score, deliverables))
            reasoning.append(f"Targeting sections: {', '.join(m.section.name for m in ranked)}")
            confidence += SECTION_BONUS

        # Region → brand
        brand, theater = None, None
        if region != "global":
            region_info = kb.get_region(region)
            if region_info is not None:
                brand, theater = region_info.brand, region_info.theater
                reasoning.append(f"Region: {region} → Brand: {brand} ({theater})")
                if product is not None and brand == "Sage":
                    reasoning.append(
                        f"Using Sage model: {product.regional_model} instead of {product.model_number}"
                    )
            else:
                reasoning.append(f"Region {region} has no brand mapping")

        # Formats
        formats = ["PNG"]
        usage_notes: List[str] = []
        if profile is not None:
            formats = list(profile.preferred_formats)
            usage_notes = list(profile.notes)
            reasoning.append(f"Use case: {use_case} → Formats: {', '.join(formats)}")

        specific_deliverables: List[str] = []
        for section in sections:
            for deliverable in section.deliverables:
                if deliverable not in specific_deliverables:
                    specific_deliverables.append(deliverable)

        return Intent(
            original_request=text,
            products=products,
            sections=sections,
            use_case=use_case,
            region=region,
            brand=brand,
            theater=theater,
            formats=formats,
            specific_deliverables=specific_deliverables,
            usage_notes=usage_notes,
            confidence=round(_clamp(confidence, 0.0, 1.0), 2),
            reasoning=reasoning,
            parsing_method=ParsingMethod.PATTERN_MATCHING,
            fallback_reason=fallback_reason,
        )

    # -----------------------------------------------------------------------
    # MODEL-ASSISTED STRATEGY
    # -----------------------------------------------------------------------

    async def _resolve_with_model(
        self,
        text: str,
        ctx: IntentContext,
        request_id: str,
    ) -> Intent:
        prompt = build_intent_user_prompt(text, ctx.normalized_use_case, ctx.normalized_region)
        provider_name = self.provider.provider_type.value

        asset_monitor.track_model_request(
            request_id=request_id,
            prompt=prompt,
            provider=provider_name,
            model=self.provider.model,
        )

        start_time = time.time()
        try:
            response = await asyncio.wait_for(
                self.provider.generate_json(prompt=prompt, system_prompt=self._system_prompt),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            error = f"Model call timed out after {self.timeout}s"
            self._track_failed_call(request_id, error, start_time)
            raise ModelResolutionError(error) from e
        except Exception as e:
            error = f"Model call raised: {e}"
            self._track_failed_call(request_id, error, start_time)
            raise ModelResolutionError(error) from e

        asset_monitor.track_model_response(request_id, response)

        if not response.success:
            raise ModelResolutionError(response.error or "Model call failed")

        payload = parse_model_payload(response.content)
        try:
            intent = self._intent_from_payload(text, ctx, payload)
        except ValidationError as e:
            raise ModelResolutionError(f"Model answer could not be reconciled: {e.error_count()} error(s)") from e
        intent.reasoning.append(f"Parsed by {provider_name} ({response.model})")
        logger.info(f"Model-assisted intent in {response.latency_ms:.0f}ms: confidence {intent.confidence}")
        return intent

    def _track_failed_call(self, request_id: str, error: str, start_time: float) -> None:
        # The provider never answered, so the monitor gets a synthetic failure
        asset_monitor.track_model_response(request_id, AIResponse(
            content="",
            provider=self.provider.provider_type,
            model=self.provider.model,
            latency_ms=(time.time() - start_time) * 1000,
            success=False,
            error=error,
        ))

    def _intent_from_payload(
        self,
        text: str,
        ctx: IntentContext,
        payload: ModelIntentPayload,
    ) -> Intent:
        """Reconcile a validated model answer with the knowledge base and context."""
        kb = self.knowledge_base
        reasoning = list(payload.reasoning)
        confidence = _clamp(payload.confidence, MODEL_MIN_CONFIDENCE, MODEL_MAX_CONFIDENCE)

        products: List[ProductMatch] = []
        for item in payload.products:
            product_confidence = (
                _clamp(item.confidence, 0.0, 1.0) if item.confidence is not None else None
            )
            known = (
                kb.get_product(item.model_number)
                or kb.get_product(item.regional_model)
                or kb.find_product_by_name(item.name)
            )
            if known is not None:
                products.append(ProductMatch.from_product(known, confidence=product_confidence))
            else:
                products.append(ProductMatch(
                    name=item.name,
                    model_number=item.model_number,
                    regional_model=item.regional_model,
                    confidence=product_confidence,
                ))

        sections: List[SectionMatch] = []
        for item in payload.sections:
            section_confidence = (
                _clamp(item.confidence, 0.0, 1.0) if item.confidence is not None else confidence
            )
            known_section = kb.find_section_by_name(item.name)
            sections.append(SectionMatch(
                key=known_section.key if known_section else None,
                name=known_section.name if known_section else item.name,
                confidence=section_confidence,
                deliverables=list(item.deliverables),
            ))

        use_case = ctx.normalized_use_case or normalize_use_case(payload.use_case) or "general"
        if ctx.normalized_use_case:
            reasoning.append(f"Use case provided by caller: {use_case}")

        region = ctx.normalized_region or self._normalize_region(payload.region)
        if ctx.normalized_region:
            reasoning.append(f"Region provided by caller: {region}")

        brand, theater = payload.brand, payload.theater
        region_info = kb.get_region(region) if region != "global" else None
        if region_info is not None:
            brand, theater = region_info.brand, region_info.theater

        profile = kb.get_use_case(use_case)
        usage_notes = list(profile.notes) if profile is not None else []

        specific_deliverables = list(payload.specific_deliverables)
        if not specific_deliverables:
            for section in sections:
                for deliverable in section.deliverables:
                    if deliverable not in specific_deliverables:
                        specific_deliverables.append(deliverable)

        return Intent(
            original_request=text,
            products=products,
            sections=sections,
            use_case=use_case,
            region=region,
            brand=brand,
            theater=theater,
            formats=list(payload.formats),
            specific_deliverables=specific_deliverables,
            usage_notes=usage_notes,
            confidence=confidence,
            reasoning=reasoning,
            parsing_method=ParsingMethod.MODEL_ASSISTED,
        )

    # -----------------------------------------------------------------------
    # LOCAL STRATEGIES
    # -----------------------------------------------------------------------

    def _resolve_locally(
        self,
        text: str,
        ctx: IntentContext,
        fallback_reason: Optional[str] = None,
    ) -> Intent:
        if self.knowledge_base is None:
            return self._resolve_minimal(text, ctx, fallback_reason)
        try:
            return self.resolve_with_patterns(text, ctx, fallback_reason=fallback_reason)
        except Exception as e:
            logger.error(f"Pattern matching failed, using keyword fallback: {e}", exc_info=True)
            return self._resolve_minimal(text, ctx, fallback_reason=f"Pattern matching failed: {e}")

    def _resolve_minimal(
        self,
        text: str,
        ctx: IntentContext,
        fallback_reason: Optional[str] = None,
    ) -> Intent:
        """Keyword-only resolution with hard-coded cues."""
        reasoning = ["Keyword-only fallback parsing"]

        products = []
        for pattern, (name, model_number) in _MINIMAL_PRODUCT_CUES:
            if pattern.search(text):
                products.append(ProductMatch(name=name, model_number=model_number))
                reasoning.append(f"Detected product: {name} ({model_number})")
                break

        sections = [
            SectionMatch(name=name, confidence=MINIMAL_CONFIDENCE)
            for pattern, name in _MINIMAL_SECTION_CUES
            if pattern.search(text)
        ]

        use_case, formats = self._minimal_use_case(text)
        if ctx.normalized_use_case:
            use_case = ctx.normalized_use_case

        return Intent(
            original_request=text,
            products=products,
            sections=sections,
            use_case=use_case,
            region=ctx.normalized_region or "global",
            formats=formats,
            confidence=MINIMAL_CONFIDENCE,
            reasoning=reasoning,
            parsing_method=ParsingMethod.MINIMAL_FALLBACK,
            fallback_reason=fallback_reason,
        )

    # -----------------------------------------------------------------------
    # HELPERS
    # -----------------------------------------------------------------------

    @staticmethod
    def _minimal_use_case(text: str) -> Tuple[str, List[str]]:
        for pattern, use_case, formats in _MINIMAL_USE_CASE_CUES:
            if pattern.search(text):
                return use_case, list(formats)
        return "general", ["PNG"]

    @staticmethod
    def _normalize_region(region: Optional[str]) -> str:
        if not region or not region.strip() or region.strip().lower() == "global":
            return "global"
        return region.strip().upper()

    @staticmethod
    def _coerce_context(context: Union[IntentContext, Dict[str, Any], None]) -> IntentContext:
        if isinstance(context, IntentContext):
            return context
        return IntentContext.model_validate(context or {})


# ---------------------------------------------------------------------------
# SINGLETON INSTANCE
# ---------------------------------------------------------------------------
intent_resolver = IntentResolver(default_knowledge_base, provider=get_intent_provider())

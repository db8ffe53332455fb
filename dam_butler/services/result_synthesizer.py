"""
Result Synthesizer - Turns a resolved Intent into candidate assets.

Two variants:
- synthesize(): templated results built from the intent alone (no DAM
  connection). One result per targeted section, in section order.
- synthesize_live(): maps a live DAM search response into results and
  ranks them by how well each asset matches the intent.

Both cap the list at MAX_RESULTS.
"""

import logging
import re
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from dam_butler.ai.intent.schemas import Intent, ProductMatch, SectionMatch
from dam_butler.core.config import settings
from dam_butler.knowledge.catalog import KnowledgeBase, knowledge_base as default_knowledge_base
from dam_butler.schemas.assets import AssetResult

logger = logging.getLogger("dam_butler.services.synthesizer")

MAX_RESULTS = 3
DEFAULT_BRAND = "Breville"
DEFAULT_DIMENSIONS = "2048x1024"
DEFAULT_SECTION_CONFIDENCE = 0.85
GENERIC_CONFIDENCE = 0.75
LARGE_FILE_BYTES = 5_000_000


# ---------------------------------------------------------------------------
# SIZE HEURISTICS
# ---------------------------------------------------------------------------
# First key contained in the section name wins; then the use case, then
# the key's default.
SIZE_MAP: Dict[str, Dict[str, str]] = {
    "Logos": {
        "presentation": "4096x2048",
        "web": "2048x1024",
        "social": "1080x1080",
        "print": "5000x2500",
        "default": "2048x1024",
    },
    "Product Photography": {
        "amazon": "2000x2000",
        "web": "1920x1920",
        "social": "1080x1080",
        "print": "4000x4000",
        "default": "3000x3000",
    },
    "Social": {
        "social": "1080x1080",
        "default": "1080x1080",
    },
    "Digital": {
        "amazon": "2000x2000",
        "web": "1920x1080",
        "default": "1920x1080",
    },
}

SUMMARY_CLAUSES: Dict[str, str] = {
    "presentation": "High-resolution with transparent background, perfect for slide presentations and corporate materials.",
    "social": "Social media optimized with engaging composition and platform-specific dimensions.",
    "amazon": "Amazon marketplace optimized meeting A+ content requirements and product listing guidelines.",
    "retail": "Print-ready with CMYK color profile for retail point-of-sale materials.",
    "web": "Web-optimized for fast loading and responsive design across devices.",
}

GENERIC_USAGE_NOTES: Dict[str, List[str]] = {
    "presentation": [
        "Presentation-optimized with high DPI for projectors",
        "Transparent background for flexible slide layouts",
    ],
    "web": [
        "Web-optimized with progressive loading",
        "Responsive design compatible",
    ],
    "social": [
        "Optimized for social media feeds",
        "Engaging visual composition for maximum reach",
    ],
    "amazon": [
        "Amazon A+ content guidelines compliant",
        "Optimized for marketplace conversion",
    ],
}


def optimal_size(section_name: str, use_case: str) -> str:
    lowered = section_name.lower()
    for key, sizes in SIZE_MAP.items():
        if key.lower() in lowered:
            return sizes.get(use_case, sizes["default"])
    return DEFAULT_DIMENSIONS


def _slug(value: str) -> str:
    return re.sub(r"[^a-z0-9]+", "_", value.lower()).strip("_")


class ResultSynthesizer:
    """
    Builds AssetResults from an Intent.

    Usage:
        results = result_synthesizer.synthesize(intent)
        results = result_synthesizer.synthesize_live(dam_response, intent)
    """

    def __init__(
        self,
        knowledge_base: KnowledgeBase = default_knowledge_base,
        base_url: Optional[str] = None,
    ):
        self.knowledge_base = knowledge_base
        self.base_url = (base_url or settings.VAULT_BASE_URL).rstrip("/")

    # -----------------------------------------------------------------------
    # TEMPLATED VARIANT
    # -----------------------------------------------------------------------

    def synthesize(self, intent: Intent) -> List[AssetResult]:
        """One templated result per section, or a single generic result."""
        product = intent.primary_product
        if product is None or not intent.sections:
            return [self._generic_result(intent)]

        model_code = product.model_for_brand(intent.brand)
        results = []
        for index, section in enumerate(intent.sections[:MAX_RESULTS]):
            slug = f"{model_code}_{_slug(section.name)}"
            results.append(AssetResult(
                id=f"asset_{slug.lower()}_{index}",
                name=self._asset_name(product, section.name, intent),
                download_url=f"{self.base_url}/download/{slug}",
                thumbnail_url=f"{self.base_url}/thumb/{slug}",
                format=intent.primary_format,
                dimensions=optimal_size(section.name, intent.use_case),
                section=section.name,
                deliverable_type=self._deliverable_type(intent, section, index),
                summary=self._summary(product, section.name, intent),
                usage_notes=self._usage_notes(section.name, intent),
                theater=intent.theater,
                confidence_score=section.confidence or DEFAULT_SECTION_CONFIDENCE,
            ))
        return results

    def _generic_result(self, intent: Intent) -> AssetResult:
        brand = intent.brand or DEFAULT_BRAND
        product = intent.primary_product
        if product is not None:
            name = f"{product.name} - {brand} Brand Asset"
        else:
            name = f"{brand} Logo - Primary"

        return AssetResult(
            id=f"asset_generic_{brand.lower()}_001",
            name=name,
            download_url=f"{self.base_url}/download/generic_brand_asset",
            thumbnail_url=f"{self.base_url}/thumb/generic_brand_asset",
            format=intent.primary_format,
            dimensions=DEFAULT_DIMENSIONS,
            section="Logos",
            deliverable_type="Brands & Logos",
            summary=f"{brand} brand asset in {intent.primary_format} format. Optimized for {intent.use_case} use.",
            usage_notes=list(GENERIC_USAGE_NOTES.get(intent.use_case, [])),
            theater=intent.theater,
            confidence_score=GENERIC_CONFIDENCE,
        )

    @staticmethod
    def _asset_name(product: ProductMatch, section_name: str, intent: Intent) -> str:
        brand = intent.brand or DEFAULT_BRAND
        use_case = intent.use_case

        if section_name == "Logos":
            suffix = " (Presentation Ready)" if use_case == "presentation" else ""
            return f"{product.name} - {brand} Logo{suffix}"
        if section_name == "Product Photography":
            suffix = " (Amazon Optimized)" if use_case == "amazon" else ""
            return f"{product.name} - Hero Photography{suffix}"
        if section_name == "Lifestyle Photography":
            suffix = " (Social Media Ready)" if use_case == "social" else ""
            return f"{product.name} - Lifestyle Shot{suffix}"
        if "Social" in section_name:
            return f"{product.name} - Social Media Asset ({brand} Branding)"
        if "Digital" in section_name:
            kind = "Amazon A+" if use_case == "amazon" else "Digital"
            return f"{product.name} - {kind} Asset"

        suffix = f" ({intent.theater})" if intent.theater else ""
        return f"{product.name} - {section_name}{suffix}"

    @staticmethod
    def _deliverable_type(intent: Intent, section: SectionMatch, index: int) -> str:
        if index < len(intent.specific_deliverables):
            return intent.specific_deliverables[index]
        if section.deliverables:
            return section.deliverables[0]
        return "Standard Asset"

    @staticmethod
    def _summary(product: ProductMatch, section_name: str, intent: Intent) -> str:
        summary = f"{product.name} asset from {section_name} section in {intent.primary_format} format."
        clause = SUMMARY_CLAUSES.get(intent.use_case)
        if clause:
            summary += f" {clause}"
        if intent.theater:
            brand = intent.brand or DEFAULT_BRAND
            summary += f" Features {brand} branding specifically for {intent.theater} market compliance."
        return summary

    def _usage_notes(self, section_name: str, intent: Intent) -> List[str]:
        notes = []

        if "PNG" in intent.formats:
            notes.append("PNG format with alpha channel transparency")
        if "SVG" in intent.formats:
            notes.append("Vector format - infinite scalability without quality loss")
        if "WebP" in intent.formats:
            notes.append("Next-gen WebP format for 30% smaller file sizes")

        profile = self.knowledge_base.get_use_case(intent.use_case)
        if profile is not None:
            notes.extend(profile.notes)

        if section_name == "Product Photography":
            notes.append("Professional studio photography with optimal lighting")
        elif section_name == "Lifestyle Photography":
            notes.append("Authentic kitchen environment showing product in real use")
        elif "Social" in section_name:
            notes.append("Optimized for social media feeds and engagement")
        elif "Digital" in section_name:
            notes.append("Optimized for digital platforms and e-commerce")

        if intent.theater:
            notes.append(f"{intent.brand or DEFAULT_BRAND} branding compliant with {intent.theater} market standards")

        return notes

    # -----------------------------------------------------------------------
    # LIVE DAM VARIANT
    # -----------------------------------------------------------------------

    def synthesize_live(self, search_response: Dict[str, Any], intent: Intent) -> List[AssetResult]:
        """
        Map a DAM search response into ranked AssetResults.

        Each asset is scored from 0.5: +0.30 product name/model in its name
        or tags, +0.15 file type in the intent's formats, +0.10 a tag naming
        the use case, +0.10 a tag naming the brand. Capped at 1.0, sorted
        best-first, top MAX_RESULTS kept.
        """
        assets = search_response.get("assets") or []
        results = []
        for asset in assets:
            if not isinstance(asset, dict) or asset.get("id") is None:
                logger.warning(f"Skipping malformed DAM asset entry: {asset!r:.80}")
                continue
            try:
                results.append(self._live_result(asset, intent))
            except ValidationError as e:
                logger.warning(f"Skipping DAM asset {asset['id']!r}: {e.error_count()} invalid field(s)")

        results.sort(key=lambda result: result.confidence_score, reverse=True)
        return results[:MAX_RESULTS]

    def _live_result(self, asset: Dict[str, Any], intent: Intent) -> AssetResult:
        tags = [str(tag) for tag in asset.get("tags") or []]
        file_type = str(asset.get("file_type") or "").upper()
        dimensions = asset.get("dimensions")
        if isinstance(dimensions, dict):
            dimensions = f"{dimensions.get('width')}x{dimensions.get('height')}"

        name = str(asset.get("name") or asset["id"])
        return AssetResult(
            id=str(asset["id"]),
            name=name,
            download_url=asset.get("download_url") or asset.get("url") or "",
            thumbnail_url=asset.get("thumbnail_url"),
            format=file_type or "UNKNOWN",
            dimensions=str(dimensions) if dimensions else None,
            section=asset.get("section"),
            summary=asset.get("description") or f"{name} from the Vault",
            usage_notes=self._live_usage_notes(asset, file_type, tags, intent),
            theater=intent.theater,
            tags=tags,
            file_size=asset.get("file_size"),
            confidence_score=self.live_confidence(asset, intent),
        )

    @staticmethod
    def live_confidence(asset: Dict[str, Any], intent: Intent) -> float:
        name = str(asset.get("name") or "").lower()
        tags = [str(tag).lower() for tag in asset.get("tags") or []]
        file_type = str(asset.get("file_type") or "").lower()
        confidence = 0.5

        terms = []
        for product in intent.products:
            terms.extend(t.lower() for t in (product.name, product.model_number, product.regional_model) if t)
        if any(term in name or any(term in tag for tag in tags) for term in terms):
            confidence += 0.3

        if file_type and any(file_type == fmt.lower() for fmt in intent.formats):
            confidence += 0.15

        if intent.use_case and any(intent.use_case.lower() in tag for tag in tags):
            confidence += 0.1

        if intent.brand and any(intent.brand.lower() in tag for tag in tags):
            confidence += 0.1

        return round(min(confidence, 1.0), 2)

    @staticmethod
    def _live_usage_notes(
        asset: Dict[str, Any],
        file_type: str,
        tags: List[str],
        intent: Intent,
    ) -> List[str]:
        notes = []
        if file_type == "PNG" and intent.use_case == "presentation":
            notes.append("PNG format perfect for presentations with transparency support")
        if file_type == "SVG" and intent.use_case == "web":
            notes.append("SVG format ideal for web use - infinite scalability")
        if asset.get("dimensions") and intent.use_case == "social":
            notes.append("Verify dimensions against platform requirements")

        file_size = asset.get("file_size")
        if isinstance(file_size, (int, float)) and file_size > LARGE_FILE_BYTES and intent.use_case == "web":
            notes.append("Large file size - consider optimizing for web use")

        if intent.region != "global" and intent.brand:
            if any(intent.brand.lower() in tag.lower() for tag in tags):
                notes.append(f"Appropriate {intent.brand} branding for {intent.region}")
            else:
                notes.append(f"May not have correct {intent.brand} branding for {intent.region}")

        return notes


# ---------------------------------------------------------------------------
# SINGLETON INSTANCE
# ---------------------------------------------------------------------------
result_synthesizer = ResultSynthesizer()

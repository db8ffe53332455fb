"""
Intent Schemas - Pydantic models for resolved asset requests.

An Intent is built once per request, flows through the result
synthesizer and suggestion engine, and is discarded afterwards.

Design Philosophy:
=================
- Validation at construction time (confidence is always within 0-1)
- Easy serialization to JSON/dict for the response payload
- No timestamps or random ids inside the Intent itself, so resolving
  the same text twice yields identical objects
- Model output is validated against a separate, lenient payload schema
  before anything is trusted
"""

from enum import Enum
from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from dam_butler.knowledge.catalog import AssetSection, Product


# Labels that name a use case by its section rather than its profile key
USE_CASE_ALIASES = {
    "social_media": "social",
    "social media": "social",
}


def normalize_use_case(value: Optional[str]) -> Optional[str]:
    """Lowercase a use-case label and fold known aliases onto profile keys."""
    if not value or not value.strip():
        return None
    label = value.strip().lower()
    return USE_CASE_ALIASES.get(label, label)


class ParsingMethod(str, Enum):
    """Which strategy produced an Intent."""
    MODEL_ASSISTED = "model_assisted"
    PATTERN_MATCHING = "pattern_matching"
    MINIMAL_FALLBACK = "minimal_fallback"


class IntentContext(BaseModel):
    """
    Caller-supplied hints. Explicit values override inferred ones.

    Example:
        {"use_case": "presentation", "region": "GB"}
    """
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    use_case: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("use_case", "useCase"),
    )
    region: Optional[str] = None

    @field_validator("use_case", "region", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def normalized_use_case(self) -> Optional[str]:
        return normalize_use_case(self.use_case)

    @property
    def normalized_region(self) -> Optional[str]:
        if not self.region:
            return None
        region = self.region.strip()
        return "global" if region.lower() == "global" else region.upper()


class ProductMatch(BaseModel):
    """A product referenced by an Intent."""
    name: str
    model_number: Optional[str] = None
    regional_model: Optional[str] = None
    category: Optional[str] = None
    sub_category: Optional[str] = None
    regions: List[str] = Field(default_factory=list)
    confidence: Optional[float] = Field(default=None, ge=0.0, le=1.0)

    @classmethod
    def from_product(cls, product: Product, confidence: Optional[float] = None) -> "ProductMatch":
        return cls(
            name=product.name,
            model_number=product.model_number,
            regional_model=product.regional_model,
            category=product.category,
            sub_category=product.sub_category,
            regions=list(product.regions),
            confidence=confidence,
        )

    def model_for_brand(self, brand: Optional[str]) -> str:
        """SES code under the Sage brand, BES code otherwise."""
        if brand == "Sage" and self.regional_model:
            return self.regional_model
        return self.model_number or self.name.replace(" ", "_").upper()


class SectionMatch(BaseModel):
    """A targeted asset section with its match score and selected deliverables."""
    key: Optional[str] = None
    name: str
    score: int = 0
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    deliverables: List[str] = Field(default_factory=list)

    @classmethod
    def from_section(
        cls,
        section: AssetSection,
        score: int,
        deliverables: List[str],
    ) -> "SectionMatch":
        return cls(
            key=section.key,
            name=section.name,
            score=score,
            confidence=min(score / 5, 1.0),
            deliverables=deliverables,
        )


class Intent(BaseModel):
    """
    The structured interpretation of a free-text asset request.

    Example:
        "Oracle Jet logo for my presentation" →
        products=[Oracle Jet], sections=[Logos], use_case="presentation",
        formats=["PNG", "SVG"], confidence=0.95
    """
    original_request: str = Field(description="The raw request text")
    products: List[ProductMatch] = Field(default_factory=list)
    sections: List[SectionMatch] = Field(default_factory=list)
    use_case: str = Field(default="general")
    region: str = Field(default="global")
    brand: Optional[str] = Field(default=None, description="Brand derived from region")
    theater: Optional[str] = Field(default=None)
    formats: List[str] = Field(default_factory=lambda: ["PNG"])
    specific_deliverables: List[str] = Field(default_factory=list)
    usage_notes: List[str] = Field(default_factory=list)
    confidence: float = Field(ge=0.0, le=1.0, description="Confidence score 0-1")
    reasoning: List[str] = Field(default_factory=list)
    parsing_method: ParsingMethod
    fallback_reason: Optional[str] = Field(
        default=None,
        description="Why model-assisted parsing was abandoned, if it was",
    )

    @property
    def primary_product(self) -> Optional[ProductMatch]:
        return self.products[0] if self.products else None

    @property
    def primary_format(self) -> str:
        return self.formats[0] if self.formats else "PNG"


# ---------------------------------------------------------------------------
# MODEL RESPONSE CONTRACT
# ---------------------------------------------------------------------------
# The LLM is asked for a single JSON object. Content fields may be absent
# (defaults apply), but structural fields with the wrong shape fail
# validation and trigger the pattern-matching fallback.

class ModelProduct(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    model_number: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("modelNumber", "model_number", "model"),
    )
    regional_model: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("sageModel", "regional_model"),
    )
    confidence: Optional[float] = Field(default=None, allow_inf_nan=False)


class ModelSection(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    deliverables: List[str] = Field(default_factory=list)
    confidence: Optional[float] = Field(default=None, allow_inf_nan=False)

    @field_validator("deliverables", mode="before")
    @classmethod
    def _none_to_list(cls, value: Any) -> Any:
        return [] if value is None else value


class ModelIntentPayload(BaseModel):
    """Validated shape of the model's JSON answer."""
    model_config = ConfigDict(extra="ignore")

    products: List[ModelProduct] = Field(default_factory=list)
    sections: List[ModelSection] = Field(default_factory=list)
    use_case: str = Field(
        default="general",
        validation_alias=AliasChoices("useCase", "use_case"),
    )
    region: Optional[str] = None
    brand: Optional[str] = None
    theater: Optional[str] = None
    formats: List[str] = Field(default_factory=lambda: ["PNG"])
    specific_deliverables: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("specificDeliverables", "specific_deliverables"),
    )
    confidence: float = Field(default=0.8, allow_inf_nan=False)
    reasoning: List[str] = Field(default_factory=list)

    @field_validator("products", "specific_deliverables", mode="before")
    @classmethod
    def _null_list(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("sections", mode="before")
    @classmethod
    def _sections_from_names(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, list):
            return [{"name": item} if isinstance(item, str) else item for item in value]
        return value

    @field_validator("use_case", mode="before")
    @classmethod
    def _default_use_case(cls, value: Any) -> Any:
        return value or "general"

    @field_validator("formats", mode="before")
    @classmethod
    def _default_formats(cls, value: Any) -> Any:
        return value or ["PNG"]

    @field_validator("confidence", mode="before")
    @classmethod
    def _default_confidence(cls, value: Any) -> Any:
        return 0.8 if value is None else value

    @field_validator("reasoning", mode="before")
    @classmethod
    def _reasoning_list(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return value

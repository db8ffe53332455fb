"""
Asset schemas - Pydantic models for what a search hands back to the caller.

These are response-side shapes: candidate assets, follow-up suggestions
and recommendations. All of them are built per request and never stored.
"""

from pydantic import BaseModel, Field


class AssetResult(BaseModel):
    """
    One candidate asset.

    Example:
    {
        "id": "asset_bes985_logos_0",
        "name": "Oracle Jet - Breville Logo (Presentation Ready)",
        "download_url": "https://vault.breville.com/download/BES985_logos",
        "format": "PNG",
        "dimensions": "4096x2048",
        "section": "Logos",
        "confidence_score": 0.4
    }
    """
    # id: Stable identifier. Templated ids are derived from the intent,
    # live ids come from the DAM.
    id: str
    name: str
    download_url: str
    thumbnail_url: str | None = None
    format: str
    dimensions: str | None = None
    section: str | None = None
    deliverable_type: str | None = None
    summary: str
    usage_notes: list[str] = Field(default_factory=list)

    # theater: Regional grouping the asset's branding targets (APAC/USCM/EMEA)
    theater: str | None = None

    # tags / file_size: only filled by live DAM results
    tags: list[str] = Field(default_factory=list)
    file_size: int | None = None

    confidence_score: float = Field(ge=0.0, le=1.0)


class Suggestion(BaseModel):
    """
    Follow-up guidance for the caller.

    Example:
    {
        "kind": "specify_use_case",
        "message": "Format and sizing can be optimized if you specify the intended use.",
        "recommended_action": "Add context: \"for my presentation\" ..."
    }
    """
    kind: str
    message: str
    recommended_action: str


# ---------------------------------------------------------------------------
# RECOMMENDATIONS
# ---------------------------------------------------------------------------

class ComplementaryAsset(BaseModel):
    """An asset kind that pairs well with what was asked for."""
    kind: str
    reason: str
    suggested_section: str | None = None
    suggested_formats: list[str] = Field(default_factory=list)
    suggested_assets: list[str] = Field(default_factory=list)
    confidence: float = Field(ge=0.0, le=1.0)


class FormatSuggestion(BaseModel):
    """Preferred formats for a use case, and the ones to stay away from."""
    use_case: str
    primary: list[str]
    reason: str
    avoid: list[str] = Field(default_factory=list)
    avoid_reason: str | None = None
    consider: list[str] = Field(default_factory=list)
    consider_reason: str | None = None
    minimum_dpi: int | None = None
    max_file_size: str | None = None
    confidence: float = Field(ge=0.0, le=1.0)


class UseCaseExpansion(BaseModel):
    """Another channel the same assets are likely to be reused in."""
    use_case: str
    original_use_case: str
    reason: str
    suggested_assets: list[str] = Field(default_factory=list)
    confidence: float = Field(ge=0.0, le=1.0)


class Recommendations(BaseModel):
    complementary_assets: list[ComplementaryAsset] = Field(default_factory=list)
    format_suggestions: list[FormatSuggestion] = Field(default_factory=list)
    use_case_expansions: list[UseCaseExpansion] = Field(default_factory=list)

    # complementary_sections: sections the use case usually needs that
    # the intent did not target
    complementary_sections: list[str] = Field(default_factory=list)

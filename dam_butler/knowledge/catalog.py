"""
Vault Catalog - Static knowledge about products, asset sections and regions.

This module is the single source of truth the intent pipeline reconciles
free text against. Everything here is immutable and built once at import.

Tables:
=======
- PRODUCTS: model numbers, regional (Sage) variants, aliases
- ASSET_SECTIONS: the 14 official Vault sections with keywords/deliverables
- REGIONAL_MAPPING: region code → brand + theater
- USE_CASE_PROFILES: use case → preferred formats, notes, sections

Declaration order matters: extractors iterate tables in this order and
the first match wins, so reordering entries changes which signal wins
on ambiguous text.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class Product:
    """A Breville product as catalogued in the Vault."""
    name: str
    model_number: str
    regional_model: str  # Model code used under the Sage brand
    category: str
    sub_category: str
    regions: Tuple[str, ...]
    aliases: Tuple[str, ...]


@dataclass(frozen=True)
class AssetSection:
    """One of the 14 official Vault sections."""
    key: str
    name: str
    description: str
    keywords: Tuple[str, ...]
    deliverables: Tuple[str, ...]
    use_cases: Tuple[str, ...]


@dataclass(frozen=True)
class RegionInfo:
    """Brand and theater for a region code."""
    brand: str
    theater: str


@dataclass(frozen=True)
class UseCaseProfile:
    """Format and section preferences for a use case."""
    name: str
    preferred_formats: Tuple[str, ...]
    notes: Tuple[str, ...]
    sections: Tuple[str, ...]
    specific_deliverables: Tuple[str, ...] = field(default_factory=tuple)


# ---------------------------------------------------------------------------
# PRODUCTS
# ---------------------------------------------------------------------------
_CORE_REGIONS = ("AU", "US", "CA", "GB", "DE")

PRODUCTS: Tuple[Product, ...] = (
    Product(
        name="Oracle Jet",
        model_number="BES985",
        regional_model="SES985",
        category="Coffee",
        sub_category="Automatic Espresso Machines",
        regions=_CORE_REGIONS,
        aliases=("oracle jet", "jet"),
    ),
    Product(
        name="Oracle Dual Boiler",
        model_number="BES995",
        regional_model="SES995",
        category="Coffee",
        sub_category="Espresso Machines",
        regions=_CORE_REGIONS,
        aliases=("oracle dual boiler", "dual boiler", "oracle dual"),
    ),
    Product(
        name="Oracle Touch",
        model_number="BES990",
        regional_model="SES990",
        category="Coffee",
        sub_category="Automatic Espresso Machines",
        regions=_CORE_REGIONS,
        aliases=("oracle touch", "touch"),
    ),
    Product(
        name="Barista Express",
        model_number="BES870",
        regional_model="SES875",
        category="Coffee",
        sub_category="Manual Espresso Machines",
        regions=_CORE_REGIONS,
        aliases=("barista express",),
    ),
    Product(
        name="Barista Pro",
        model_number="BES878",
        regional_model="SES878",
        category="Coffee",
        sub_category="Manual Espresso Machines",
        regions=_CORE_REGIONS,
        aliases=("barista pro",),
    ),
    Product(
        name="Bambino Plus",
        model_number="BES500",
        regional_model="SES500",
        category="Coffee",
        sub_category="Compact Espresso Machines",
        regions=_CORE_REGIONS,
        aliases=("bambino plus", "bambino"),
    ),
    Product(
        name="Smart Grinder Pro",
        model_number="BCG820",
        regional_model="SCG820",
        category="Coffee",
        sub_category="Grinders",
        regions=_CORE_REGIONS,
        aliases=("smart grinder pro", "smart grinder"),
    ),
    Product(
        name="Smart Oven Air Fryer",
        model_number="BOV860",
        regional_model="SOV860",
        category="Cooking",
        sub_category="Countertop Ovens",
        regions=_CORE_REGIONS,
        aliases=("smart oven air fryer", "air fryer"),
    ),
)


# ---------------------------------------------------------------------------
# ASSET SECTIONS (official Vault structure, 14 sections)
# ---------------------------------------------------------------------------
ASSET_SECTIONS: Tuple[AssetSection, ...] = (
    AssetSection(
        key="product_photography",
        name="Product Photography",
        description="Hero images for web product pages and detail pages",
        keywords=("product photo", "hero image", "product shot", "product image"),
        deliverables=("Low Res Product Photography", "Spare Parts Photography"),
        use_cases=("web", "ecommerce", "product pages"),
    ),
    AssetSection(
        key="lifestyle_photography",
        name="Lifestyle Photography",
        description="Products in kitchen environment with food and coffee",
        keywords=("lifestyle", "kitchen", "in use", "environment", "lifestyle photo"),
        deliverables=("Lifestyle Photography",),
        use_cases=("marketing", "social", "web", "advertising"),
    ),
    AssetSection(
        key="digital_assets",
        name="Digital Assets (incl. Websites, Programmatic & EDM)",
        description="Online assets including PDP, CLP, FLP, web banners, icons, 3D models",
        keywords=("web banner", "icon", "3d model", "programmatic", "edm", "digital"),
        deliverables=(
            "3D Model", "Amazon A+", "Amazon Infographics", "Colour Swatches",
            "EDM", "GIF", "Icon", "Key Visual", "PDP", "PLP",
            "Web Banners and Static Banners", "Website / App", "Programmatic Ads",
        ),
        use_cases=("web", "digital", "online", "ecommerce"),
    ),
    AssetSection(
        key="social_media",
        name="Social (incl. Videos, Statics, Stories & Keynotes)",
        description="Social media assets for paid and organic content",
        keywords=("social", "instagram", "facebook", "social media", "stories"),
        deliverables=(
            "Instagram / Facebook - Campaign", "Instagram / Facebook - NPD",
            "Organic Social Assets", "Paid Social Assets", "Social Advertising",
            "Social Photography", "Social Video cutdowns",
        ),
        use_cases=("social", "instagram", "facebook", "marketing"),
    ),
    AssetSection(
        key="point_of_sale",
        name="Point of Sales (POS)",
        description="In-store retail materials including banners, cards, displays",
        keywords=("pos", "retail", "in-store", "banner", "display", "counter card"),
        deliverables=(
            "T4 Horizontal", "T4 Vertical", "Hanging Banner", "Counter Card",
            "Banner POS", "Brochure", "Catalogue", "Display Fixture", "Posters",
        ),
        use_cases=("retail", "in-store", "pos", "display"),
    ),
    AssetSection(
        key="youtube_videos",
        name="YouTube Videos",
        description="Video content including tutorials, demos, and promotional videos",
        keywords=("video", "youtube", "tutorial", "demonstration", "how to"),
        deliverables=(
            "Product Demonstration Video", "Tutorial/How to videos",
            "Care and Maintenance Video", "Training Video", "TVC", "Youtube Thumbnails",
        ),
        use_cases=("youtube", "video", "training", "tutorial"),
    ),
    AssetSection(
        key="logos",
        name="Logos",
        description="Brand logos and partner logos",
        keywords=("logo", "brand", "breville logo", "sage logo"),
        deliverables=("Brands & Logos", "Partner Logos"),
        use_cases=("branding", "presentations", "web", "print"),
    ),
    AssetSection(
        key="packaging",
        name="Packaging",
        description="Box images, packaging layouts, labels and master cartons",
        keywords=("packaging", "box", "carton", "label"),
        deliverables=("Box Images", "Packaging Layouts", "Labels", "Master Carton"),
        use_cases=("packaging", "ecommerce"),
    ),
    AssetSection(
        key="toolkits",
        name="Toolkits (incl. Sell-In, Retail Kits)",
        description="Launch toolkits and retail presentation decks",
        keywords=("toolkit", "sell-in", "sell in", "retail kit", "launch kit"),
        deliverables=("Launch Toolkit", "Sell-In Deck", "Retail Kit"),
        use_cases=("sell-in", "launch"),
    ),
    AssetSection(
        key="instruction_booklets",
        name="Instruction Booklets",
        description="Quick start guides, safety guides and manuals",
        keywords=("instruction", "manual", "quick start", "safety guide", "booklet"),
        deliverables=("Instruction Booklet", "Quick Start Guide", "Safety Guide"),
        use_cases=("support", "customer care"),
    ),
    AssetSection(
        key="fact_sheets",
        name="Fact Sheets",
        description="Product specification sheets for retailers",
        keywords=("fact sheet", "spec sheet", "specification", "specs"),
        deliverables=("Product Fact Sheet", "Retailer Spec Sheet"),
        use_cases=("sell-in", "retailer"),
    ),
    AssetSection(
        key="recipes_food",
        name="Recipes & Food",
        description="Recipe photography, food videos and recipe cards",
        keywords=("recipe", "food", "cooking"),
        deliverables=("Recipe Photography", "Food Videos", "Recipe Cards"),
        use_cases=("content", "recipes"),
    ),
    AssetSection(
        key="brand_guidelines",
        name="Brand Guidelines",
        description="Brand style guides and presentation templates",
        keywords=("guideline", "style guide", "presentation template", "brand book"),
        deliverables=("Brand Style Guide", "Presentation Templates"),
        use_cases=("branding",),
    ),
    AssetSection(
        key="translation_files",
        name="Working Files for Translation",
        description="Multi-language asset sources",
        keywords=("translation", "working file", "source file", "localisation", "localization"),
        deliverables=("Translation Working Files", "Multi-language Source Files"),
        use_cases=("localization",),
    ),
)


# ---------------------------------------------------------------------------
# REGIONAL MAPPING
# ---------------------------------------------------------------------------
REGIONAL_MAPPING: Dict[str, RegionInfo] = {
    "AU": RegionInfo(brand="Breville", theater="APAC"),
    "US": RegionInfo(brand="Breville", theater="USCM"),
    "CA": RegionInfo(brand="Breville", theater="USCM"),
    "GB": RegionInfo(brand="Sage", theater="EMEA"),
    "UK": RegionInfo(brand="Sage", theater="EMEA"),
    "DE": RegionInfo(brand="Sage", theater="EMEA"),
    "EU": RegionInfo(brand="Sage", theater="EMEA"),
}


# ---------------------------------------------------------------------------
# USE CASE PROFILES
# ---------------------------------------------------------------------------
USE_CASE_PROFILES: Dict[str, UseCaseProfile] = {
    "presentation": UseCaseProfile(
        name="presentation",
        preferred_formats=("PNG", "SVG"),
        notes=("Transparent backgrounds ideal", "High resolution for projectors"),
        sections=("logos", "product_photography", "digital_assets"),
    ),
    "web": UseCaseProfile(
        name="web",
        preferred_formats=("PNG", "WebP", "SVG"),
        notes=("Optimized file sizes", "Responsive design ready"),
        sections=("digital_assets", "product_photography", "logos"),
    ),
    "social": UseCaseProfile(
        name="social",
        preferred_formats=("PNG", "JPG", "MP4"),
        notes=("Platform-specific dimensions", "Engaging compositions"),
        sections=("social_media", "lifestyle_photography"),
    ),
    "retail": UseCaseProfile(
        name="retail",
        preferred_formats=("PDF", "EPS", "PNG"),
        notes=("High resolution for print", "CMYK color space"),
        sections=("point_of_sale", "logos", "product_photography"),
    ),
    "amazon": UseCaseProfile(
        name="amazon",
        preferred_formats=("JPG", "PNG"),
        notes=("Amazon-specific requirements", "A+ content optimized"),
        sections=("digital_assets", "product_photography"),
        specific_deliverables=("Amazon A+", "Amazon Infographics"),
    ),
    "print": UseCaseProfile(
        name="print",
        preferred_formats=("PDF", "EPS", "TIFF"),
        notes=("Minimum 300 DPI", "CMYK color space"),
        sections=("point_of_sale", "logos", "fact_sheets"),
    ),
    "email": UseCaseProfile(
        name="email",
        preferred_formats=("PNG", "JPG"),
        notes=("Email-safe formats", "Keep files under 1MB"),
        sections=("digital_assets", "logos"),
    ),
    "video": UseCaseProfile(
        name="video",
        preferred_formats=("MP4",),
        notes=("Check platform aspect ratios",),
        sections=("youtube_videos", "social_media"),
    ),
}


# Shortest partial section name accepted as a prefix match
MIN_SECTION_PREFIX = 4


class KnowledgeBase:
    """
    Read-only accessors over the catalog tables.

    Every lookup returns None for unknown keys instead of raising, since
    callers use lookups as "is this known?" checks. Instances hold
    references to immutable tables and are safe to share across requests.

    Usage:
        kb = KnowledgeBase()
        kb.get_region("GB")          # RegionInfo(brand="Sage", theater="EMEA")
        kb.get_product("SES985")     # Oracle Jet
    """

    def __init__(
        self,
        products: Tuple[Product, ...] = PRODUCTS,
        sections: Tuple[AssetSection, ...] = ASSET_SECTIONS,
        regions: Optional[Dict[str, RegionInfo]] = None,
        use_cases: Optional[Dict[str, UseCaseProfile]] = None,
    ):
        self.products = tuple(products)
        self.sections = tuple(sections)
        self.regions = dict(regions if regions is not None else REGIONAL_MAPPING)
        self.use_cases = dict(use_cases if use_cases is not None else USE_CASE_PROFILES)

        self._sections_by_key = {s.key: s for s in self.sections}
        self._sections_by_name = {s.name.lower(): s for s in self.sections}

    # -----------------------------------------------------------------------
    # PRODUCTS
    # -----------------------------------------------------------------------

    def get_product(self, model_code: Optional[str]) -> Optional[Product]:
        """Look up a product by primary or regional model code."""
        if not model_code:
            return None
        code = model_code.strip().upper()
        for product in self.products:
            if code in (product.model_number, product.regional_model):
                return product
        return None

    def find_product_by_name(self, name: Optional[str]) -> Optional[Product]:
        """Look up a product by display name or alias (exact, case-insensitive)."""
        if not name:
            return None
        needle = name.strip().lower()
        for product in self.products:
            if needle == product.name.lower() or needle in product.aliases:
                return product
        return None

    # -----------------------------------------------------------------------
    # SECTIONS
    # -----------------------------------------------------------------------

    def get_section(self, key: Optional[str]) -> Optional[AssetSection]:
        if not key:
            return None
        return self._sections_by_key.get(key)

    def find_section_by_name(self, name: Optional[str]) -> Optional[AssetSection]:
        """
        Resolve a section from its display name.

        Accepts the full official name, the section key, or a short name
        that prefixes the official one ("Social" / "Point of Sale").
        """
        if not name:
            return None
        needle = name.strip().lower()
        if needle in self._sections_by_name:
            return self._sections_by_name[needle]
        if needle.replace(" ", "_") in self._sections_by_key:
            return self._sections_by_key[needle.replace(" ", "_")]
        for section in self.sections:
            short_name = section.name.split(" (")[0].lower()
            if needle == short_name or needle.startswith(short_name):
                return section
            if len(needle) >= MIN_SECTION_PREFIX and short_name.startswith(needle):
                return section
        return None

    # -----------------------------------------------------------------------
    # REGIONS & USE CASES
    # -----------------------------------------------------------------------

    def get_region(self, region_code: Optional[str]) -> Optional[RegionInfo]:
        if not region_code:
            return None
        return self.regions.get(region_code.strip().upper())

    def get_use_case(self, use_case: Optional[str]) -> Optional[UseCaseProfile]:
        if not use_case:
            return None
        return self.use_cases.get(use_case.strip().lower())


# ---------------------------------------------------------------------------
# SHARED INSTANCE
# ---------------------------------------------------------------------------
knowledge_base = KnowledgeBase()

"""
Knowledge Module - Static Vault catalog and lookups.

Example:
    from dam_butler.knowledge import knowledge_base

    kb_product = knowledge_base.get_product("BES985")   # Oracle Jet
    region = knowledge_base.get_region("GB")            # Sage / EMEA
"""

from dam_butler.knowledge.catalog import (
    ASSET_SECTIONS,
    PRODUCTS,
    REGIONAL_MAPPING,
    USE_CASE_PROFILES,
    AssetSection,
    KnowledgeBase,
    Product,
    RegionInfo,
    UseCaseProfile,
    knowledge_base,
)

__all__ = [
    "ASSET_SECTIONS",
    "PRODUCTS",
    "REGIONAL_MAPPING",
    "USE_CASE_PROFILES",
    "AssetSection",
    "KnowledgeBase",
    "Product",
    "RegionInfo",
    "UseCaseProfile",
    "knowledge_base",
]

"""
Suggestion Engine - Follow-up guidance for an asset search.

Every rule is evaluated independently, so several suggestions can fire
for the same request. The engine is a pure function of the intent and
the results it is given.
"""

import re
from typing import List

from dam_butler.ai.intent.schemas import Intent
from dam_butler.schemas.assets import AssetResult, Suggestion

LOW_CONFIDENCE_THRESHOLD = 0.8

_PRODUCT_PHOTO_WORDS = re.compile(r"product|photo", re.IGNORECASE)


def suggest(intent: Intent, results: List[AssetResult]) -> List[Suggestion]:
    suggestions = []
    product = intent.primary_product

    if not results:
        if product is not None:
            example = f'Try: "{product.name} photography" or "{product.name} in kitchen"'
        else:
            example = 'Try: "Oracle Jet coffee machine" or "Breville espresso machine logos"'
        suggestions.append(Suggestion(
            kind="broaden_search",
            message="No matching assets were found with the current parameters.",
            recommended_action=example,
        ))

    if not intent.products:
        suggestions.append(Suggestion(
            kind="specify_product",
            message="This looks like a generic request. Naming a Breville product gives much better results.",
            recommended_action='Try: "Oracle Jet social posts" or "Sage Oracle Dual Boiler Amazon listing"',
        ))

    if intent.confidence < LOW_CONFIDENCE_THRESHOLD:
        suggestions.append(Suggestion(
            kind="add_specificity",
            message="Confidence can be improved with more specific details.",
            recommended_action=(
                'Try: "Oracle Jet hero photography for Australian e-commerce site" '
                'or "Sage logo white background for UK presentation"'
            ),
        ))

    if intent.use_case == "general":
        suggestions.append(Suggestion(
            kind="specify_use_case",
            message="Format and sizing can be optimized if you specify the intended use.",
            recommended_action=(
                'Add context: "for my presentation", "for Instagram post", '
                '"for Amazon listing", or "for retail display"'
            ),
        ))

    if intent.region == "global" and product is not None:
        suggestions.append(Suggestion(
            kind="specify_region",
            message="Specify a market to get brand-correct assets (Breville vs Sage).",
            recommended_action=(
                'Specify market: "for UK customers" (Sage branding) '
                'or "for Australian market" (Breville branding)'
            ),
        ))

    if len(intent.sections) == 1:
        section_name = intent.sections[0].name
        if section_name == "Product Photography":
            rewritten = _PRODUCT_PHOTO_WORDS.sub("lifestyle scene", intent.original_request)
            suggestions.append(Suggestion(
                kind="cross_sell_lifestyle",
                message="Lifestyle photography often performs better for engagement.",
                recommended_action=f'Try: "{rewritten}"',
            ))
        elif "Social" in section_name:
            product_name = product.name if product is not None else "product"
            suggestions.append(Suggestion(
                kind="cross_sell_video",
                message="Video content generates more engagement on social platforms.",
                recommended_action=f'Try: "{product_name} demo video" or "how to use {product_name}"',
            ))

    return suggestions

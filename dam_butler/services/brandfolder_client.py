"""
Brandfolder Client - Live search against the Vault's DAM.

Implements the two calls the live variant needs:
1. Client-credentials token exchange
2. Authenticated asset search built from a resolved Intent

Tokens are requested per search and never persisted.

References:
===========
- Token endpoint: {BRANDFOLDER_API_URL}/oauth/token
- Search endpoint: {BRANDFOLDER_API_URL}/brandfolders/{id}/search
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from dam_butler.ai.intent.schemas import Intent
from dam_butler.core.config import settings

logger = logging.getLogger("dam_butler.services.brandfolder")

SEARCH_LIMIT = 20
REQUEST_TIMEOUT = 30.0

# Vault section key → Brandfolder section slugs
SECTION_MAPPING: Dict[str, List[str]] = {
    "product_photography": ["product_photos", "hero_images"],
    "lifestyle_photography": ["lifestyle", "in_use_photos"],
    "logos": ["brand_logos", "product_logos"],
    "digital_assets": ["digital_assets", "web_banners", "edm"],
    "social_media": ["social_media", "video_content"],
    "point_of_sale": ["pos_materials", "retail_displays"],
    "youtube_videos": ["video_content", "tutorials"],
    "packaging": ["packaging"],
    "toolkits": ["toolkits", "sell_in"],
    "instruction_booklets": ["instruction_booklets"],
    "fact_sheets": ["fact_sheets"],
    "recipes_food": ["recipes", "food_photography"],
    "brand_guidelines": ["brand_guidelines"],
    "translation_files": ["translation_files"],
}


class DAMError(Exception):
    """Raised when the live DAM cannot be reached or rejects a call."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def build_search_params(intent: Intent) -> Dict[str, Any]:
    """
    Translate an Intent into a Brandfolder search body.

    Example:
        Oracle Jet logos for the UK →
        {"query": "Oracle Jet OR BES985", "filters": {"tags": ["sage_gb", ...],
         "sections": ["brand_logos", "product_logos"], "file_types": ["png"]}, ...}
    """
    terms = []
    for product in intent.products:
        terms.extend(term for term in (product.name, product.model_number) if term)

    sections: List[str] = []
    for section in intent.sections:
        for slug in SECTION_MAPPING.get(section.key or "", []):
            if slug not in sections:
                sections.append(slug)

    tags = []
    if intent.region != "global" and intent.brand:
        tags.append(f"{intent.brand.lower()}_{intent.region.lower()}")
    if intent.use_case != "general":
        tags.append(f"use_case_{intent.use_case}")

    return {
        "query": " OR ".join(terms),
        "filters": {
            "tags": tags,
            "sections": sections,
            "file_types": [fmt.lower() for fmt in intent.formats],
        },
        "sort": "relevance",
        "limit": SEARCH_LIMIT,
    }


class BrandfolderClient:
    """
    Async Brandfolder API client.

    Usage:
        client = BrandfolderClient()
        if client.is_configured:
            response = await client.search(intent)
            results = result_synthesizer.synthesize_live(response, intent)
    """

    def __init__(
        self,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        brandfolder_id: Optional[str] = None,
        api_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.client_id = client_id or settings.BRANDFOLDER_CLIENT_ID
        self.client_secret = client_secret or settings.BRANDFOLDER_CLIENT_SECRET
        self.brandfolder_id = brandfolder_id or settings.BRANDFOLDER_ID
        self.api_url = (api_url or settings.BRANDFOLDER_API_URL).rstrip("/")
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return bool(self.client_id and self.client_secret and self.brandfolder_id)

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self._transport, timeout=REQUEST_TIMEOUT)

    # -------------------------------------------------------------------------
    # TOKEN EXCHANGE
    # -------------------------------------------------------------------------

    async def get_access_token(self) -> str:
        """
        Exchange client credentials for an access token.

        Raises:
            DAMError: missing credentials, non-2xx answer or network failure
        """
        if not (self.client_id and self.client_secret):
            raise DAMError("Brandfolder client credentials not configured")

        async with self._client() as client:
            try:
                response = await client.post(
                    f"{self.api_url}/oauth/token",
                    json={
                        "grant_type": "client_credentials",
                        "client_id": self.client_id,
                        "client_secret": self.client_secret,
                    },
                )
            except httpx.RequestError as e:
                logger.error(f"Network error during token exchange: {e}")
                raise DAMError(f"Network error: {e}")

        if response.status_code != 200:
            logger.error(f"Brandfolder token exchange failed: {response.status_code}")
            raise DAMError("Brandfolder token exchange failed", status_code=response.status_code)

        token = self._json(response).get("access_token")
        if not token:
            raise DAMError("Brandfolder token response had no access_token")
        return token

    # -------------------------------------------------------------------------
    # SEARCH
    # -------------------------------------------------------------------------

    async def search_assets(self, params: Dict[str, Any], access_token: str) -> Dict[str, Any]:
        """POST a search body and return the decoded response."""
        if not self.brandfolder_id:
            raise DAMError("Brandfolder id not configured")

        async with self._client() as client:
            try:
                response = await client.post(
                    f"{self.api_url}/brandfolders/{self.brandfolder_id}/search",
                    json=params,
                    headers={"Authorization": f"Bearer {access_token}"},
                )
            except httpx.RequestError as e:
                logger.error(f"Network error during Brandfolder search: {e}")
                raise DAMError(f"Network error: {e}")

        if response.status_code != 200:
            raise DAMError(f"Brandfolder API error: {response.status_code}", status_code=response.status_code)

        data = self._json(response)
        logger.info(f"Brandfolder search returned {len(data.get('assets') or [])} assets")
        return data

    async def search(self, intent: Intent) -> Dict[str, Any]:
        """Token exchange + search for an intent."""
        token = await self.get_access_token()
        return await self.search_assets(build_search_params(intent), token)

    @staticmethod
    def _json(response: httpx.Response) -> Dict[str, Any]:
        try:
            data = response.json()
        except ValueError as e:
            raise DAMError(f"Brandfolder returned invalid JSON: {e}")
        if not isinstance(data, dict):
            raise DAMError("Brandfolder returned an unexpected payload")
        return data


# ---------------------------------------------------------------------------
# SINGLETON INSTANCE
# ---------------------------------------------------------------------------
brandfolder_client = BrandfolderClient()

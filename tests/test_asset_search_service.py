"""
Tests for AssetSearchService orchestration.

The DAM client is mocked; the resolver runs in pattern-only mode.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from dam_butler.ai.monitoring import asset_monitor
from dam_butler.services.asset_search_service import AssetSearchService, ResultSource
from dam_butler.services.brandfolder_client import DAMError
from dam_butler.services.result_synthesizer import ResultSynthesizer

LIVE_RESPONSE = {
    "assets": [
        {"id": "bf-1", "name": "Oracle Jet Logo", "file_type": "png", "tags": ["presentation"]},
        {"id": "bf-2", "name": "Brand lockup", "file_type": "jpg", "tags": []},
    ],
    "total_count": 2,
}


@pytest.fixture
def dam_client():
    client = MagicMock()
    client.is_configured = True
    client.search = AsyncMock(return_value=LIVE_RESPONSE)
    return client


@pytest.fixture
def make_service(resolver, kb):
    def _make(dam_client=None, live_search=False):
        return AssetSearchService(
            resolver=resolver,
            synthesizer=ResultSynthesizer(kb, base_url="https://vault.example.com"),
            dam_client=dam_client,
            live_search=live_search,
        )
    return _make


class TestTemplatedSearch:

    @pytest.mark.asyncio
    async def test_search(self, make_service):
        result = await make_service().search("Oracle Jet logo for my presentation", request_id="req-1")

        assert result.request_id == "req-1"
        assert result.source == ResultSource.TEMPLATED
        assert result.intent.use_case == "presentation"
        assert [r.name for r in result.results] == ["Oracle Jet - Breville Logo (Presentation Ready)"]
        assert [s.kind for s in result.suggestions] == ["specify_region"]
        assert result.recommendations.format_suggestions[0].use_case == "presentation"
        assert result.dam_error is None

    @pytest.mark.asyncio
    async def test_context_is_applied(self, make_service):
        result = await make_service().search("Oracle Jet logo", context={"region": "GB", "use_case": "print"})

        assert result.intent.brand == "Sage"
        assert result.intent.use_case == "print"
        assert "SES985" in result.results[0].download_url

    @pytest.mark.asyncio
    async def test_request_id_generated(self, make_service):
        result = await make_service().search("xyz")
        assert result.request_id

    @pytest.mark.asyncio
    async def test_live_disabled_when_client_unconfigured(self, make_service, dam_client):
        dam_client.is_configured = False
        service = make_service(dam_client=dam_client, live_search=True)

        result = await service.search("Oracle Jet logo")

        assert service.live_enabled is False
        assert result.source == ResultSource.TEMPLATED
        dam_client.search.assert_not_awaited()


class TestLiveSearch:

    @pytest.mark.asyncio
    async def test_live_results(self, make_service, dam_client):
        result = await make_service(dam_client=dam_client, live_search=True).search(
            "Oracle Jet logo for my presentation"
        )

        assert result.source == ResultSource.LIVE_DAM
        assert [r.id for r in result.results] == ["bf-1", "bf-2"]
        assert result.results[0].confidence_score == 1.0
        assert asset_monitor.get_stats().searches_by_source == {"live_dam": 1}

    @pytest.mark.asyncio
    async def test_dam_error_falls_back_to_templated(self, make_service, dam_client):
        dam_client.search.side_effect = DAMError("Brandfolder API error: 503", status_code=503)

        result = await make_service(dam_client=dam_client, live_search=True).search("Oracle Jet logo")

        assert result.source == ResultSource.TEMPLATED
        assert result.dam_error == "Brandfolder API error: 503"
        assert result.results[0].id == "asset_bes985_logos_0"
        stats = asset_monitor.get_stats()
        assert stats.fallbacks == 1
        assert stats.searches_by_source == {"templated": 1}

    @pytest.mark.asyncio
    async def test_invalid_dam_fields_do_not_fail_the_search(self, make_service, dam_client):
        dam_client.search.return_value = {
            "assets": [
                {"id": "bf-1", "name": "Oracle Jet Logo", "file_type": "png", "file_size": "2.3 MB"},
                {"id": "bf-2", "name": "Brand lockup", "file_type": "jpg", "tags": []},
            ],
            "total_count": 2,
        }

        result = await make_service(dam_client=dam_client, live_search=True).search("Oracle Jet logo")

        assert result.source == ResultSource.LIVE_DAM
        assert result.dam_error is None
        assert [r.id for r in result.results] == ["bf-2"]

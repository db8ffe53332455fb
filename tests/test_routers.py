"""
Tests for the HTTP surface: asset search, stats, MCP and health.

The app's singletons run without credentials, so every request goes
through pattern matching and templated results.
"""

from unittest.mock import AsyncMock, patch

from dam_butler.services.asset_search_service import asset_search_service


class TestFindBrandAssets:

    def test_request_too_short(self, client):
        response = client.post("/api/find-brand-assets", json={"request": "hi"})
        assert response.status_code == 422

    def test_whitespace_does_not_count(self, client):
        response = client.post("/api/find-brand-assets", json={"request": "   ab   "})
        assert response.status_code == 422

    def test_request_too_long(self, client):
        response = client.post("/api/find-brand-assets", json={"request": "a" * 501})
        assert response.status_code == 422

    def test_find_assets(self, client):
        response = client.post(
            "/api/find-brand-assets",
            json={"request": "Oracle Jet logo for my presentation"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["source"] == "templated"
        assert data["intent"]["parsing_method"] == "pattern_matching"
        assert data["intent"]["use_case"] == "presentation"
        assert data["intent"]["confidence"] == 0.95
        assert data["results"][0]["name"] == "Oracle Jet - Breville Logo (Presentation Ready)"
        assert data["suggestions"][0]["kind"] == "specify_region"

    def test_find_assets_with_context(self, client):
        response = client.post(
            "/api/find-brand-assets",
            json={"request": "Oracle Jet logo", "context": {"region": "GB"}},
        )

        assert response.status_code == 200
        assert response.json()["intent"]["brand"] == "Sage"

    def test_unexpected_error(self, client):
        with patch.object(asset_search_service, "search", AsyncMock(side_effect=RuntimeError("boom"))):
            response = client.post("/api/find-brand-assets", json={"request": "Oracle Jet logo"})

        assert response.status_code == 500
        assert response.json()["detail"]["error"] == "search_failed"

    def test_stats(self, client):
        client.post("/api/find-brand-assets", json={"request": "Oracle Jet logo"})
        response = client.get("/api/find-brand-assets/stats")

        assert response.status_code == 200
        data = response.json()
        assert data["resolutions"] == 1
        assert data["resolutions_by_method"] == {"pattern_matching": 1}
        assert data["searches_by_source"] == {"templated": 1}
        assert data["model_requests"] == 0
        assert data["tokens_by_provider"] == {}


class TestMCP:

    def test_capabilities(self, client):
        data = client.get("/api/mcp").json()

        assert data["name"] == "dam-butler-mcp"
        assert data["status"] == "ready"
        tool = data["capabilities"]["tools"][0]
        assert tool["name"] == "find_brand_assets"
        assert tool["schema"]["required"] == ["request"]

    def test_tool_call(self, client):
        response = client.post(
            "/api/mcp",
            json={"tool": "find_brand_assets", "arguments": {"request": "Oracle Jet logo for my presentation"}},
        )

        assert response.status_code == 200
        content = response.json()["content"]
        assert content[0]["type"] == "text"
        text = content[0]["text"]
        assert text.startswith('Found 1 asset for "Oracle Jet logo for my presentation"')
        assert "**Detected**: Oracle Jet | Logos | presentation" in text
        assert "Download: https://vault.breville.com/download/BES985_logos" in text

    def test_unknown_tool(self, client):
        response = client.post("/api/mcp", json={"tool": "delete_everything", "arguments": {}})

        assert response.status_code == 400
        assert response.json() == {"error": "Unknown tool", "available_tools": ["find_brand_assets"]}

    def test_missing_request_argument(self, client):
        response = client.post("/api/mcp", json={"tool": "find_brand_assets", "arguments": {}})

        assert response.status_code == 422
        assert response.json()["content"][0]["type"] == "text"

    def test_search_failure(self, client):
        with patch.object(asset_search_service, "search", AsyncMock(side_effect=RuntimeError("boom"))):
            response = client.post(
                "/api/mcp",
                json={"tool": "find_brand_assets", "arguments": {"request": "Oracle Jet logo"}},
            )

        assert response.status_code == 500
        assert response.json()["content"][0]["text"].startswith("Search failed: boom")


class TestHealth:

    def test_health(self, client):
        data = client.get("/health").json()

        assert data["status"] == "ok"
        assert data["model_assisted"] is False
        assert data["live_dam"] is False

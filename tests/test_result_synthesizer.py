"""
Tests for the ResultSynthesizer (templated and live DAM variants).
"""

import pytest

from dam_butler.services.result_synthesizer import (
    MAX_RESULTS,
    ResultSynthesizer,
    optimal_size,
)

BASE_URL = "https://vault.example.com"


@pytest.fixture
def synthesizer(kb):
    return ResultSynthesizer(kb, base_url=BASE_URL + "/")


class TestOptimalSize:

    @pytest.mark.parametrize("section,use_case,expected", [
        ("Logos", "presentation", "4096x2048"),
        ("Logos", "social", "1080x1080"),
        ("Logos", "email", "2048x1024"),
        ("Product Photography", "amazon", "2000x2000"),
        ("Social (incl. Videos, Statics, Stories & Keynotes)", "presentation", "1080x1080"),
        ("Digital Assets (incl. Websites, Programmatic & EDM)", "amazon", "2000x2000"),
        ("Packaging", "web", "2048x1024"),
    ])
    def test_sizes(self, section, use_case, expected):
        assert optimal_size(section, use_case) == expected


class TestTemplatedResults:

    def test_oracle_jet_presentation(self, resolver, synthesizer):
        intent = resolver.resolve_with_patterns("Oracle Jet logo for my presentation")
        results = synthesizer.synthesize(intent)

        assert len(results) == 1
        result = results[0]
        assert result.id == "asset_bes985_logos_0"
        assert result.name == "Oracle Jet - Breville Logo (Presentation Ready)"
        assert result.download_url == f"{BASE_URL}/download/BES985_logos"
        assert result.format == "PNG"
        assert result.dimensions == "4096x2048"
        assert result.deliverable_type == "Brands & Logos"
        assert result.confidence_score == 0.4
        assert "Vector format - infinite scalability without quality loss" in result.usage_notes

    def test_sage_branding_uses_regional_code(self, make_intent, synthesizer):
        intent = make_intent(product="BES985", sections=["logos"], region="GB")
        result = synthesizer.synthesize(intent)[0]

        assert result.name == "Oracle Jet - Sage Logo"
        assert "SES985" in result.download_url
        assert result.theater == "EMEA"
        assert "Features Sage branding specifically for EMEA market compliance." in result.summary

    def test_capped_at_three(self, make_intent, synthesizer):
        intent = make_intent(
            product="BES878",
            sections=["logos", "product_photography", "lifestyle_photography", "packaging"],
            use_case="amazon",
        )
        results = synthesizer.synthesize(intent)

        assert len(results) == MAX_RESULTS
        assert [r.name for r in results] == [
            "Barista Pro - Breville Logo",
            "Barista Pro - Hero Photography (Amazon Optimized)",
            "Barista Pro - Lifestyle Shot",
        ]
        assert [r.id for r in results] == [
            "asset_bes878_logos_0",
            "asset_bes878_product_photography_1",
            "asset_bes878_lifestyle_photography_2",
        ]

    def test_ids_are_deterministic(self, resolver, synthesizer):
        intent = resolver.resolve_with_patterns("Oracle Jet logo for the website")
        assert [r.id for r in synthesizer.synthesize(intent)] == [r.id for r in synthesizer.synthesize(intent)]

    def test_generic_result_without_product(self, resolver, synthesizer):
        intent = resolver.resolve_with_patterns("xyz")
        results = synthesizer.synthesize(intent)

        assert len(results) == 1
        assert results[0].id == "asset_generic_breville_001"
        assert results[0].name == "Breville Logo - Primary"
        assert results[0].confidence_score == 0.75

    def test_generic_result_without_sections(self, make_intent, synthesizer):
        intent = make_intent(product="BES500", region="DE")
        result = synthesizer.synthesize(intent)[0]

        assert result.name == "Bambino Plus - Sage Brand Asset"
        assert result.id == "asset_generic_sage_001"

    def test_default_confidence_when_section_has_none(self, make_intent, synthesizer):
        intent = make_intent(product="BES985", sections=["logos"], section_confidence=0.0)
        assert synthesizer.synthesize(intent)[0].confidence_score == 0.85


class TestLiveResults:

    @pytest.fixture
    def dam_response(self):
        return {
            "assets": [
                {"id": "b", "name": "Generic banner", "file_type": "jpg", "tags": []},
                {"id": "a", "name": "Oracle Jet Logo", "file_type": "png", "tags": ["presentation"],
                 "download_url": "https://cdn.example.com/a.png", "dimensions": {"width": 400, "height": 200}},
                {"name": "entry without an id"},
                "not an asset",
                {"id": "c", "name": "BES985 hero", "file_type": "svg", "tags": []},
                {"id": "d", "name": "Other", "file_type": "png", "tags": []},
            ],
            "total_count": 6,
        }

    def test_scored_sorted_and_capped(self, resolver, synthesizer, dam_response):
        intent = resolver.resolve_with_patterns("Oracle Jet logo for my presentation")
        results = synthesizer.synthesize_live(dam_response, intent)

        assert [r.id for r in results] == ["a", "c", "d"]
        assert [r.confidence_score for r in results] == [1.0, 0.95, 0.65]
        assert results[0].dimensions == "400x200"
        assert results[0].format == "PNG"
        assert "PNG format perfect for presentations with transparency support" in results[0].usage_notes

    def test_empty_response(self, resolver, synthesizer):
        intent = resolver.resolve_with_patterns("Oracle Jet logo")
        assert synthesizer.synthesize_live({}, intent) == []

    def test_brand_tag_bonus_and_note(self, make_intent, synthesizer):
        intent = make_intent(product="BES985", sections=["logos"], region="GB", formats=["PNG"])
        asset = {"id": "x", "name": "Logo", "file_type": "eps", "tags": ["sage_gb"]}

        assert ResultSynthesizer.live_confidence(asset, intent) == 0.6
        result = synthesizer.synthesize_live({"assets": [asset]}, intent)[0]
        assert "Appropriate Sage branding for GB" in result.usage_notes

    def test_large_file_warning_for_web(self, make_intent, synthesizer):
        intent = make_intent(use_case="web")
        asset = {"id": "x", "name": "Big", "file_type": "png", "file_size": 8_000_000}
        result = synthesizer.synthesize_live({"assets": [asset]}, intent)[0]

        assert "Large file size - consider optimizing for web use" in result.usage_notes

    def test_entries_with_invalid_fields_are_skipped(self, make_intent, synthesizer):
        intent = make_intent(product="BES985", use_case="web")
        assets = [
            {"id": "bad-size", "name": "Oracle Jet hero", "file_type": "png", "file_size": "2.3 MB"},
            {"id": "bad-thumb", "name": "Oracle Jet logo", "file_type": "png", "thumbnail_url": 42},
            {"id": "ok", "name": "Oracle Jet banner", "file_type": "png", "file_size": 1200},
        ]

        results = synthesizer.synthesize_live({"assets": assets}, intent)

        assert [r.id for r in results] == ["ok"]
        assert results[0].file_size == 1200

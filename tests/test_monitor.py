"""
Tests for the AssetMonitor aggregates.
"""

import pytest

from dam_butler.ai.intent.schemas import Intent, ParsingMethod
from dam_butler.ai.monitoring import AssetMonitor
from dam_butler.ai.providers.base import AIResponse, ProviderType, TokenUsage


@pytest.fixture
def monitor():
    return AssetMonitor(max_history=3)


def _response(success=True, provider=ProviderType.OPENAI, prompt=1000, completion=500, latency=200.0):
    return AIResponse(
        content="{}" if success else "",
        provider=provider,
        model="gpt-4o-mini",
        usage=TokenUsage(prompt_tokens=prompt, completion_tokens=completion),
        latency_ms=latency,
        success=success,
        error=None if success else "boom",
    )


class TestModelMetrics:

    def test_success_and_failure_counts(self, monitor):
        monitor.track_model_request("r1", "Parse this", "openai", "gpt-4o-mini")
        monitor.track_model_response("r1", _response())
        monitor.track_model_response("r2", _response(success=False, prompt=0, completion=0, latency=100.0))

        stats = monitor.get_stats()
        assert stats.model_requests == 2
        assert stats.model_successes == 1
        assert stats.model_failures == 1
        assert stats.success_rate == 50.0
        assert stats.avg_latency_ms == 150.0
        assert stats.total_tokens == 1500
        assert stats.requests_by_provider == {"openai": 2}

    def test_cost_estimate(self, monitor):
        monitor.track_model_response("r1", _response())
        assert monitor.get_stats().estimated_total_cost == pytest.approx(0.00045)

    def test_gemini_costs_more_per_token(self, monitor):
        monitor.track_model_response("r1", _response(provider=ProviderType.GEMINI))
        assert monitor.get_stats().estimated_total_cost == pytest.approx(0.00155)

    def test_history_is_bounded(self, monitor):
        for i in range(5):
            monitor.track_model_response(f"r{i}", _response())

        recent = monitor.get_recent_model_calls(limit=10)
        assert [m.request_id for m in recent] == ["r4", "r3", "r2"]
        assert monitor.get_stats().model_requests == 5


class TestPipelineMetrics:

    def test_intents_fallbacks_searches_errors(self, monitor):
        intent = Intent(
            original_request="Oracle Jet logo",
            confidence=0.7,
            parsing_method=ParsingMethod.PATTERN_MATCHING,
            fallback_reason="Model returned empty content",
        )
        monitor.track_intent("r1", intent, processing_time_ms=3.2)
        monitor.track_fallback("r1", stage="intent", reason="Model returned empty content")
        monitor.track_search("r1", "templated", 1, 4.0)
        monitor.track_error("r1", "boom", stage="find_brand_assets", metadata={"attempt": 1})

        stats = monitor.get_stats()
        assert stats.resolutions == 1
        assert stats.resolutions_by_method == {"pattern_matching": 1}
        assert stats.fallbacks == 1
        assert stats.searches_by_source == {"templated": 1}
        assert stats.errors == 1

    def test_stats_are_a_snapshot(self, monitor):
        monitor.track_search("r1", "live_dam", 3, 10.0)
        snapshot = monitor.get_stats()
        snapshot.searches_by_source["live_dam"] = 99

        assert monitor.get_stats().searches_by_source == {"live_dam": 1}

    def test_reset(self, monitor):
        monitor.track_model_response("r1", _response())
        monitor.reset()

        assert monitor.get_stats().model_requests == 0
        assert monitor.get_recent_model_calls() == []

    def test_to_dict_formats(self, monitor):
        monitor.track_model_response("r1", _response())
        data = monitor.get_stats().to_dict()

        assert data["success_rate"] == "100.0%"
        assert data["estimated_total_cost"].startswith("$0.000")
        assert data["prompt_tokens"] == 1000

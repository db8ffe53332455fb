"""
Asset Monitor - Unified logging and metrics tracking.

One call per pipeline event does two things:
- Writes a structured JSON log line
- Updates in-memory aggregates (thread-safe)

Usage:
    from dam_butler.ai.monitoring import asset_monitor

    asset_monitor.track_model_request(
        request_id="abc123",
        prompt='Parse this asset request: "Oracle Jet logo"',
        provider="openai",
        model="gpt-4o-mini",
    )
    asset_monitor.track_model_response("abc123", response)
    asset_monitor.track_intent("abc123", intent, processing_time_ms=12.5)

    stats = asset_monitor.get_stats().to_dict()
"""

import copy
import json
import logging
import sys
from dataclasses import dataclass, field
from datetime import datetime, timezone
from threading import Lock
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from dam_butler.ai.providers.base import AIResponse
from dam_butler.core.config import settings

if TYPE_CHECKING:
    from dam_butler.ai.intent.schemas import Intent


# ---------------------------------------------------------------------------
# LOGGING SETUP
# ---------------------------------------------------------------------------
logger = logging.getLogger("dam_butler")
logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

if not logger.handlers:
    handler = logging.StreamHandler(sys.stdout)
    formatter = logging.Formatter(
        '[%(asctime)s] %(levelname)s [%(name)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

monitor_logger = logging.getLogger("dam_butler.monitor")


# ---------------------------------------------------------------------------
# METRICS DATA CLASSES
# ---------------------------------------------------------------------------
@dataclass
class ModelCallMetrics:
    """Metrics for a single model call."""
    request_id: str
    provider: str
    model: str
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int
    latency_ms: float
    success: bool
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    estimated_cost: float = 0.0


@dataclass
class AggregatedMetrics:
    """Aggregated metrics since start (or the last reset)."""
    model_requests: int = 0
    model_successes: int = 0
    model_failures: int = 0
    total_tokens: int = 0
    total_prompt_tokens: int = 0
    total_completion_tokens: int = 0
    total_latency_ms: float = 0.0
    estimated_total_cost: float = 0.0
    requests_by_provider: Dict[str, int] = field(default_factory=dict)
    tokens_by_provider: Dict[str, int] = field(default_factory=dict)
    resolutions: int = 0
    resolutions_by_method: Dict[str, int] = field(default_factory=dict)
    fallbacks: int = 0
    searches_by_source: Dict[str, int] = field(default_factory=dict)
    errors: int = 0

    @property
    def avg_latency_ms(self) -> float:
        if self.model_requests == 0:
            return 0.0
        return self.total_latency_ms / self.model_requests

    @property
    def success_rate(self) -> float:
        if self.model_requests == 0:
            return 0.0
        return (self.model_successes / self.model_requests) * 100

    def to_dict(self) -> Dict[str, Any]:
        return {
            "model_requests": self.model_requests,
            "model_successes": self.model_successes,
            "model_failures": self.model_failures,
            "success_rate": f"{self.success_rate:.1f}%",
            "total_tokens": self.total_tokens,
            "prompt_tokens": self.total_prompt_tokens,
            "completion_tokens": self.total_completion_tokens,
            "avg_latency_ms": round(self.avg_latency_ms, 2),
            "estimated_total_cost": f"${self.estimated_total_cost:.4f}",
            "requests_by_provider": self.requests_by_provider,
            "tokens_by_provider": self.tokens_by_provider,
            "resolutions": self.resolutions,
            "resolutions_by_method": self.resolutions_by_method,
            "fallbacks": self.fallbacks,
            "searches_by_source": self.searches_by_source,
            "errors": self.errors,
        }


# ---------------------------------------------------------------------------
# UNIFIED MONITOR
# ---------------------------------------------------------------------------
class AssetMonitor:
    """
    Logging + metrics for the asset request pipeline.

    Cost Model (per 1M tokens):
    - Gemini Flash: ~$0.30 input, ~$2.50 output
    - GPT-4o-mini: ~$0.15 input, ~$0.60 output
    """

    COST_PER_1M_TOKENS = {
        "gemini": {"input": 0.30, "output": 2.50},
        "openai": {"input": 0.15, "output": 0.60},
    }

    def __init__(self, max_history: int = 1000):
        self._logger = monitor_logger
        self._history: List[ModelCallMetrics] = []
        self._max_history = max_history
        self._lock = Lock()
        self._aggregated = AggregatedMetrics()

    # -----------------------------------------------------------------------
    # MODEL CALLS
    # -----------------------------------------------------------------------

    def track_model_request(
        self,
        request_id: str,
        prompt: str,
        provider: str,
        model: str,
    ) -> None:
        """Log an outbound model call."""
        log_data = {
            "event": "model_request",
            "request_id": request_id,
            "provider": provider,
            "model": model,
            "prompt_length": len(prompt),
            "prompt_preview": prompt[:100] + "..." if len(prompt) > 100 else prompt,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        self._logger.info(f"Model Request: {json.dumps(log_data)}")

    def track_model_response(self, request_id: str, response: AIResponse) -> None:
        """Log a model response and fold it into the aggregates."""
        provider = response.provider.value if hasattr(response.provider, "value") else str(response.provider)
        prompt_tokens = response.usage.prompt_tokens if response.usage else 0
        completion_tokens = response.usage.completion_tokens if response.usage else 0
        cost = self._estimate_cost(provider, prompt_tokens, completion_tokens)

        metrics = ModelCallMetrics(
            request_id=request_id,
            provider=provider,
            model=response.model,
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            total_tokens=prompt_tokens + completion_tokens,
            latency_ms=response.latency_ms,
            success=response.success,
            estimated_cost=cost,
        )

        with self._lock:
            self._history.append(metrics)
            if len(self._history) > self._max_history:
                self._history = self._history[-self._max_history:]
            self._update_model_aggregates(metrics)

        log_data = {
            "event": "model_response",
            "request_id": request_id,
            "provider": provider,
            "model": response.model,
            "success": response.success,
            "latency_ms": round(response.latency_ms, 2),
            "tokens": {
                "prompt": prompt_tokens,
                "completion": completion_tokens,
                "total": metrics.total_tokens,
            },
            "estimated_cost": f"${cost:.6f}",
            "response_length": len(response.content) if response.content else 0,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        if response.error:
            log_data["error"] = response.error

        level = logging.INFO if response.success else logging.WARNING
        self._logger.log(level, f"Model Response: {json.dumps(log_data)}")

    # -----------------------------------------------------------------------
    # PIPELINE EVENTS
    # -----------------------------------------------------------------------

    def track_intent(
        self,
        request_id: str,
        intent: "Intent",
        processing_time_ms: float = 0.0,
    ) -> None:
        """Track a resolved intent."""
        method = intent.parsing_method.value

        with self._lock:
            self._aggregated.resolutions += 1
            self._aggregated.resolutions_by_method[method] = \
                self._aggregated.resolutions_by_method.get(method, 0) + 1

        request = intent.original_request
        log_data = {
            "event": "intent_resolved",
            "request_id": request_id,
            "parsing_method": method,
            "products": [p.model_number or p.name for p in intent.products],
            "sections": [s.name for s in intent.sections],
            "use_case": intent.use_case,
            "region": intent.region,
            "confidence": round(intent.confidence, 3),
            "processing_time_ms": round(processing_time_ms, 2),
            "original_request": request[:50] + "..." if len(request) > 50 else request,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        if intent.fallback_reason:
            log_data["fallback_reason"] = intent.fallback_reason

        self._logger.info(f"Intent Resolved: {json.dumps(log_data)}")

    def track_fallback(self, request_id: str, stage: str, reason: str) -> None:
        """Track a recovered failure (model → patterns, live DAM → templated)."""
        with self._lock:
            self._aggregated.fallbacks += 1

        log_data = {
            "event": "fallback",
            "request_id": request_id,
            "stage": stage,
            "reason": reason,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        self._logger.warning(f"Fallback: {json.dumps(log_data)}")

    def track_search(
        self,
        request_id: str,
        source: str,
        result_count: int,
        processing_time_ms: float,
    ) -> None:
        """Track a completed asset search."""
        with self._lock:
            self._aggregated.searches_by_source[source] = \
                self._aggregated.searches_by_source.get(source, 0) + 1

        log_data = {
            "event": "search_completed",
            "request_id": request_id,
            "source": source,
            "result_count": result_count,
            "processing_time_ms": round(processing_time_ms, 2),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        self._logger.info(f"Search Completed: {json.dumps(log_data)}")

    def track_error(
        self,
        request_id: str,
        error: str,
        stage: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Track an error in the pipeline."""
        with self._lock:
            self._aggregated.errors += 1

        log_data = {
            "event": "pipeline_error",
            "request_id": request_id,
            "error": error,
            "stage": stage,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        if metadata:
            log_data["metadata"] = metadata

        self._logger.error(f"Pipeline Error: {json.dumps(log_data)}")

    # -----------------------------------------------------------------------
    # METRICS METHODS
    # -----------------------------------------------------------------------

    def get_stats(self) -> AggregatedMetrics:
        """Get a snapshot of the aggregated statistics."""
        with self._lock:
            return copy.deepcopy(self._aggregated)

    def get_recent_model_calls(self, limit: int = 10) -> List[ModelCallMetrics]:
        with self._lock:
            return list(reversed(self._history[-limit:]))

    def reset(self) -> None:
        """Reset all metrics (useful for testing)."""
        with self._lock:
            self._history = []
            self._aggregated = AggregatedMetrics()

    # -----------------------------------------------------------------------
    # PRIVATE METHODS
    # -----------------------------------------------------------------------

    def _estimate_cost(self, provider: str, prompt_tokens: int, completion_tokens: int) -> float:
        """Estimate cost in USD."""
        costs = self.COST_PER_1M_TOKENS.get(provider.lower(), {"input": 0, "output": 0})
        input_cost = (prompt_tokens / 1_000_000) * costs["input"]
        output_cost = (completion_tokens / 1_000_000) * costs["output"]
        return input_cost + output_cost

    def _update_model_aggregates(self, metrics: ModelCallMetrics) -> None:
        self._aggregated.model_requests += 1

        if metrics.success:
            self._aggregated.model_successes += 1
        else:
            self._aggregated.model_failures += 1

        self._aggregated.total_tokens += metrics.total_tokens
        self._aggregated.total_prompt_tokens += metrics.prompt_tokens
        self._aggregated.total_completion_tokens += metrics.completion_tokens
        self._aggregated.total_latency_ms += metrics.latency_ms
        self._aggregated.estimated_total_cost += metrics.estimated_cost

        provider = metrics.provider
        self._aggregated.requests_by_provider[provider] = \
            self._aggregated.requests_by_provider.get(provider, 0) + 1
        self._aggregated.tokens_by_provider[provider] = \
            self._aggregated.tokens_by_provider.get(provider, 0) + metrics.total_tokens


# ---------------------------------------------------------------------------
# SINGLETON INSTANCE
# ---------------------------------------------------------------------------
asset_monitor = AssetMonitor()

"""
Monitoring Module - Structured logging and in-memory metrics.

Usage:
    from dam_butler.ai.monitoring import asset_monitor
"""

from dam_butler.ai.monitoring.monitor import AggregatedMetrics, AssetMonitor, asset_monitor

__all__ = ["AggregatedMetrics", "AssetMonitor", "asset_monitor"]

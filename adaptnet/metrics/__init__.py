"""Metrics collection and before/after comparison."""

from .collector import ConnectionMetricsHistory, MetricSample, MetricsCollector, RunMode
from .results import (
    PerformanceImprovement,
    PerformanceMetrics,
    ProtocolUsageStats,
    ScenarioMetrics,
)

__all__ = [
    "ConnectionMetricsHistory",
    "MetricSample",
    "MetricsCollector",
    "PerformanceImprovement",
    "PerformanceMetrics",
    "ProtocolUsageStats",
    "RunMode",
    "ScenarioMetrics",
]

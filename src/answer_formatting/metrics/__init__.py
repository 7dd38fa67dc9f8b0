"""Compliance metrics over validation, auto-fix and detection events."""

from .aggregation import ChannelMetrics, FormatMetrics, MetricsTrend, PatternUsage, aggregate
from .collector import MetricsCollector
from .events import AutoFixEvent, PatternDetectionEvent, ValidationEvent

__all__ = [
    "MetricsCollector",
    "aggregate",
    # Events
    "ValidationEvent",
    "AutoFixEvent",
    "PatternDetectionEvent",
    # Aggregates
    "FormatMetrics",
    "PatternUsage",
    "MetricsTrend",
    "ChannelMetrics",
]

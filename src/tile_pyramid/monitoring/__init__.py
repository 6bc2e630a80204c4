"""
Monitoring Module

Prometheus-backed metrics for pyramid traversal.
"""

from .metrics import MetricsCollector, MetricValue

__all__ = [
    "MetricsCollector",
    "MetricValue"
]

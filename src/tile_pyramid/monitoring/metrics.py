"""
Metrics Collection

Prometheus counters and histograms for pyramid traversal. Each collector
owns its own registry, so independent traversals never share metric state.
"""

import json
import threading
import time
from collections import deque
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterator, List, Optional, Union

import structlog
from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest


@dataclass
class MetricValue:
    """Represents a single metric value with metadata."""
    name: str
    value: Union[int, float]
    timestamp: datetime
    labels: Dict[str, str] = field(default_factory=dict)


class MetricsCollector:
    """
    Metrics for batch enumeration and seeding.

    Values are forwarded to Prometheus metrics when enabled and always kept
    in a bounded in-memory buffer for JSON export.
    """

    COUNTERS = {
        'tile_pyramid_batches_total': ('Coordinate batches produced', ['mode']),
        'tile_pyramid_coords_total': ('Coordinates produced', ['mode']),
        'tile_pyramid_seed_failures_total': ('Seeding runs that failed', []),
    }

    HISTOGRAMS = {
        'tile_pyramid_seed_duration_seconds': ('Duration of seeding runs', []),
        'tile_pyramid_batch_size': ('Coordinates per produced batch', []),
    }

    def __init__(self, enable_prometheus: bool = True, buffer_size: int = 10000):
        """
        Initialize the metrics collector.

        Args:
            enable_prometheus: Forward values to Prometheus metrics
            buffer_size: Number of recent values kept for export
        """
        self.enable_prometheus = enable_prometheus
        self.logger = structlog.get_logger(collector_type="MetricsCollector")

        self.metrics_buffer = deque(maxlen=buffer_size)
        self.lock = threading.RLock()

        self.registry = CollectorRegistry()
        self.prometheus_counters: Dict[str, Counter] = {}
        self.prometheus_histograms: Dict[str, Histogram] = {}

        if self.enable_prometheus:
            self._init_prometheus()

        self.logger.debug("Metrics collector initialized", prometheus_enabled=enable_prometheus)

    def _init_prometheus(self) -> None:
        """Create the Prometheus metrics in this collector's registry."""
        for name, (description, labels) in self.COUNTERS.items():
            self.prometheus_counters[name] = Counter(
                name, description, labels, registry=self.registry
            )
        for name, (description, labels) in self.HISTOGRAMS.items():
            self.prometheus_histograms[name] = Histogram(
                name, description, labels, registry=self.registry
            )

    def _buffer(self, name: str, value: Union[int, float], labels: Dict[str, str]) -> None:
        self.metrics_buffer.append(MetricValue(
            name=name,
            value=value,
            timestamp=datetime.utcnow(),
            labels=labels
        ))

    def increment_counter(
        self,
        name: str,
        value: Union[int, float] = 1,
        labels: Optional[Dict[str, str]] = None
    ) -> None:
        """
        Increment a counter metric.

        Args:
            name: Metric name
            value: Value to increment by
            labels: Metric labels
        """
        labels = labels or {}
        with self.lock:
            self._buffer(name, value, labels)
            counter = self.prometheus_counters.get(name)
            if counter is not None:
                if labels:
                    counter.labels(**labels).inc(value)
                else:
                    counter.inc(value)

    def record_histogram(
        self,
        name: str,
        value: Union[int, float],
        labels: Optional[Dict[str, str]] = None
    ) -> None:
        """Record an observation in a histogram metric."""
        labels = labels or {}
        with self.lock:
            self._buffer(name, value, labels)
            histogram = self.prometheus_histograms.get(name)
            if histogram is not None:
                if labels:
                    histogram.labels(**labels).observe(value)
                else:
                    histogram.observe(value)

    @contextmanager
    def time_block(self, name: str) -> Iterator[None]:
        """Record the elapsed time of the enclosed block in a histogram."""
        start_time = time.time()
        try:
            yield
        finally:
            self.record_histogram(name, time.time() - start_time)

    def get_values(self, name: str) -> List[Union[int, float]]:
        """Buffered values recorded under a metric name."""
        with self.lock:
            return [m.value for m in self.metrics_buffer if m.name == name]

    def export_metrics(self, format: str = "json") -> str:
        """Export metrics as JSON or in the Prometheus text format."""
        if format.lower() == "prometheus":
            return generate_latest(self.registry).decode('utf-8')

        if format.lower() == "json":
            with self.lock:
                metrics = [
                    {
                        'name': m.name,
                        'value': m.value,
                        'timestamp': m.timestamp.isoformat(),
                        'labels': m.labels
                    }
                    for m in self.metrics_buffer
                ]
            return json.dumps({
                'export_timestamp': datetime.utcnow().isoformat(),
                'metrics_count': len(metrics),
                'metrics': metrics
            }, indent=2)

        raise ValueError(f"Unsupported export format: {format}")

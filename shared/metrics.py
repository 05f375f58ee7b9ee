"""
Shared metrics configuration for the Inventory Access Layer.
"""

from prometheus_client import Counter, Histogram, Info, CollectorRegistry
from typing import Dict, Any, Optional


class MetricsCollector:
    """Centralized metrics collector.

    Metrics are only registered when a ``registry`` is passed, so several
    collectors can coexist in one process (tests, CLI runs).
    """

    def __init__(self, service_name: str, registry: Optional[CollectorRegistry] = None):
        self.service_name = service_name
        self.registry = registry
        self._metrics: Dict[str, Any] = {}
        self._setup_metrics()

    def _setup_metrics(self):
        """Set up common metrics for the service."""

        self._metrics["service_info"] = Info(
            "service_info",
            "Service information",
            registry=self.registry
        )
        self._metrics["service_info"].info({
            "service": self.service_name,
            "version": "1.0.0"
        })

        # Backend request metrics
        self._metrics["backend_requests_total"] = Counter(
            "backend_requests_total",
            "Total backend requests",
            ["method", "action", "status"],
            registry=self.registry
        )

        self._metrics["backend_request_duration_seconds"] = Histogram(
            "backend_request_duration_seconds",
            "Backend request duration in seconds",
            ["method", "action"],
            registry=self.registry
        )

        # Cache metrics
        self._metrics["cache_hits_total"] = Counter(
            "cache_hits_total",
            "Total cache hits",
            ["key_family"],
            registry=self.registry
        )

        self._metrics["cache_misses_total"] = Counter(
            "cache_misses_total",
            "Total cache misses",
            ["key_family"],
            registry=self.registry
        )

        self._metrics["cache_invalidations_total"] = Counter(
            "cache_invalidations_total",
            "Total cache invalidations",
            ["key_family"],
            registry=self.registry
        )

        # Business metrics
        self._metrics["transactions_total"] = Counter(
            "transactions_total",
            "Total borrow/return transactions",
            ["action", "outcome"],
            registry=self.registry
        )

    def get_metric(self, name: str):
        """Get a metric by name."""
        return self._metrics.get(name)

    def record_backend_request(self, method: str, action: str, status: str, duration: float):
        """Record one backend round trip."""
        self._metrics["backend_requests_total"].labels(
            method=method,
            action=action,
            status=status
        ).inc()

        self._metrics["backend_request_duration_seconds"].labels(
            method=method,
            action=action
        ).observe(duration)

    def record_transaction(self, action: str, outcome: str):
        """Record a write outcome ("success" or "rejected")."""
        self._metrics["transactions_total"].labels(action=action, outcome=outcome).inc()

    def increment_counter(self, metric_name: str, **labels):
        """Increment a counter metric."""
        if metric_name in self._metrics:
            self._metrics[metric_name].labels(**labels).inc()


def get_metrics_collector(service_name: str, registry: Optional[CollectorRegistry] = None) -> MetricsCollector:
    """Get a metrics collector for a service."""
    return MetricsCollector(service_name, registry)

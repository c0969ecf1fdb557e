"""Prometheus metrics helpers for pricechart services."""

from __future__ import annotations

from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest


class MetricsCollector:
    """Collects and exposes core Prometheus metrics for chart data operations."""

    def __init__(self, *, registry: CollectorRegistry | None = None) -> None:
        self.registry = registry or CollectorRegistry()
        self.chart_requests_total = Counter(
            "pricechart_chart_requests_total",
            "Chart series requests grouped by timeframe and outcome.",
            ("timeframe", "outcome"),
            registry=self.registry,
        )
        self.upstream_latency_seconds = Histogram(
            "pricechart_upstream_latency_seconds",
            "Latency distribution for real-time upstream requests.",
            buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, float("inf")),
            registry=self.registry,
        )
        self.upstream_failures_total = Counter(
            "pricechart_upstream_failures_total",
            "Failed real-time upstream requests grouped by error code.",
            ("error_code",),
            registry=self.registry,
        )
        self.cache_loads_total = Counter(
            "pricechart_cache_loads_total",
            "Historical cache file loads grouped by status.",
            ("status",),
            registry=self.registry,
        )

    def record_request(self, timeframe: str, outcome: str) -> None:
        """Track a chart series request outcome (primary, fallback, failed)."""

        self.chart_requests_total.labels(timeframe=timeframe, outcome=outcome).inc()

    def observe_upstream(self, latency_seconds: float, *, error_code: str | None = None) -> None:
        """Record an upstream request, counting it as failed when ``error_code`` is set."""

        self.upstream_latency_seconds.observe(latency_seconds)
        if error_code is not None:
            self.upstream_failures_total.labels(error_code=error_code).inc()

    def record_cache_load(self, status: str) -> None:
        self.cache_loads_total.labels(status=status).inc()

    def render(self) -> bytes:
        """Render metrics in Prometheus exposition format."""

        return generate_latest(self.registry)


_DEFAULT_COLLECTOR: MetricsCollector | None = None


def get_metrics_collector() -> MetricsCollector:
    """Return the global metrics collector instance."""

    global _DEFAULT_COLLECTOR
    if _DEFAULT_COLLECTOR is None:
        _DEFAULT_COLLECTOR = MetricsCollector()
    return _DEFAULT_COLLECTOR


def configure_metrics_collector(collector: MetricsCollector | None) -> None:
    """Override the global metrics collector for application wiring or tests."""

    global _DEFAULT_COLLECTOR
    _DEFAULT_COLLECTOR = collector

"""Prometheus metrics for screening outcomes and provider health"""

from prometheus_client import Counter, Histogram

# Screening metrics
screening_counter = Counter(
    "zakat_screening_total",
    "Total wallet screenings completed",
    ["outcome"],  # liable | exempt
)

zakat_due_histogram = Histogram(
    "zakat_due_usd",
    "Zakat due per liable screening (USD)",
    buckets=[10, 50, 100, 500, 1_000, 5_000, 10_000, 50_000],
)

# Upstream providers
provider_failures_counter = Counter(
    "provider_failures_total",
    "Failed calls to upstream providers",
    ["provider"],  # indexer | metal_prices
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_screening(liable: bool, zakat_due: float) -> None:
    """Record screening outcome and the size of the amount due"""
    screening_counter.labels(outcome="liable" if liable else "exempt").inc()
    if liable:
        zakat_due_histogram.observe(zakat_due)


def record_provider_failure(provider: str) -> None:
    provider_failures_counter.labels(provider=provider).inc()

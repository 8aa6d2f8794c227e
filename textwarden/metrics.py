"""
Name: Prometheus Metrics

Responsibilities:
  - Define and expose Prometheus metrics
  - Provide /metrics payload
  - Record request latency/count, cache hits, detector outcomes

Collaborators:
  - middleware.py: Records request metrics
  - infrastructure.cache: Records cache hits/misses
  - application.use_cases.analyze_text: Records detector outcomes and latency

Constraints:
  - Low cardinality labels only (endpoint, method, status, detector, outcome)
  - Dedicated registry (no collisions when the app is created repeatedly)

Notes:
  - Metrics are module-level singletons (Prometheus requirement)
  - Histogram buckets chosen for typical model latencies
"""

import re

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

_registry = CollectorRegistry()

# R: Request counter with endpoint and status labels
_requests_total = Counter(
    "textwarden_requests_total",
    "Total HTTP requests",
    ["endpoint", "method", "status"],
    registry=_registry,
)

# R: Buckets: 10ms .. 30s (multi-chunk analyses are paced)
_request_latency = Histogram(
    "textwarden_request_latency_seconds",
    "HTTP request latency in seconds",
    ["endpoint", "method"],
    buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
    registry=_registry,
)

_cache_lookups_total = Counter(
    "textwarden_cache_lookups_total",
    "Response cache lookups",
    ["result"],
    registry=_registry,
)

_detections_total = Counter(
    "textwarden_detections_total",
    "Chunk detections by detector and outcome",
    ["detector", "outcome"],
    registry=_registry,
)

_chunk_failures_total = Counter(
    "textwarden_chunk_failures_total",
    "Chunks that raised during detection and contributed no issues",
    registry=_registry,
)

_analysis_latency = Histogram(
    "textwarden_analysis_latency_seconds",
    "Full document analysis latency (cache misses only)",
    buckets=(0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0),
    registry=_registry,
)

# R: Collapse numeric path segments to keep label cardinality bounded
_ID_SEGMENT_RE = re.compile(r"/\d+(?=/|$)")


def _normalize_endpoint(path: str) -> str:
    return _ID_SEGMENT_RE.sub("/{id}", path)


def record_request_metrics(
    endpoint: str, method: str, status_code: int, latency_seconds: float
) -> None:
    """R: Record a completed HTTP request."""
    endpoint = _normalize_endpoint(endpoint)
    _requests_total.labels(
        endpoint=endpoint, method=method, status=str(status_code)
    ).inc()
    _request_latency.labels(endpoint=endpoint, method=method).observe(
        latency_seconds
    )


def record_cache_hit() -> None:
    _cache_lookups_total.labels(result="hit").inc()


def record_cache_miss() -> None:
    _cache_lookups_total.labels(result="miss").inc()


def record_detection(detector: str, outcome: str) -> None:
    """R: outcome is 'detected' or 'unavailable'."""
    _detections_total.labels(detector=detector, outcome=outcome).inc()


def record_chunk_failure() -> None:
    _chunk_failures_total.inc()


def record_analysis_latency(latency_seconds: float) -> None:
    _analysis_latency.observe(latency_seconds)


def get_metrics_response() -> tuple[bytes, str]:
    """
    R: Generate Prometheus metrics response.

    Returns:
        Tuple of (body bytes, content type)
    """
    return generate_latest(_registry), CONTENT_TYPE_LATEST

"""Prometheus metrics instrumentation."""

from __future__ import annotations

from fastapi import Response
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)

REGISTRY = CollectorRegistry()

INGEST_COUNT = Counter(
    "docv_ingest_total",
    "Documents processed by the ingest pipeline",
    labelnames=("status",),
    registry=REGISTRY,
)

INGEST_DURATION = Histogram(
    "docv_ingest_duration_seconds",
    "Time spent analysing a single document",
    registry=REGISTRY,
)

INGEST_FAILURES = Counter(
    "docv_persist_failures_total",
    "Document saves rejected by the store",
    registry=REGISTRY,
)

SEARCH_COUNT = Counter(
    "docv_search_total",
    "Search requests",
    labelnames=("mode",),
    registry=REGISTRY,
)

SEARCH_LATENCY = Histogram(
    "docv_search_latency_seconds",
    "Latency of search requests",
    labelnames=("mode",),
    registry=REGISTRY,
)

EMBEDDING_CACHE = Counter(
    "docv_embedding_cache_total",
    "Vector index lookups for documents without a usable stored embedding",
    labelnames=("result",),
    registry=REGISTRY,
)

DOCUMENT_GAUGE = Gauge(
    "docv_documents",
    "Active documents in the store",
    registry=REGISTRY,
)


def metrics_response() -> Response:
    """Return Prometheus metrics as an HTTP response."""
    payload = generate_latest(REGISTRY)
    return Response(content=payload, media_type=CONTENT_TYPE_LATEST)


__all__ = [
    "REGISTRY",
    "INGEST_COUNT",
    "INGEST_DURATION",
    "INGEST_FAILURES",
    "SEARCH_COUNT",
    "SEARCH_LATENCY",
    "EMBEDDING_CACHE",
    "DOCUMENT_GAUGE",
    "metrics_response",
]

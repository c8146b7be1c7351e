"""Prometheus metrics for search latency, outcomes and index size."""

from __future__ import annotations

from contextlib import contextmanager
import time
from typing import TYPE_CHECKING

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, generate_latest


if TYPE_CHECKING:
    from collections.abc import Generator


SEARCH_LATENCY = Histogram(
    "site_search_latency_seconds",
    "Search query latency",
    ["source"],
    buckets=(0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1),
)

SEARCH_REQUESTS = Counter(
    "site_search_requests_total",
    "Search queries by outcome",
    ["status", "source"],
)

CORPUS_LOADS = Counter(
    "site_search_corpus_loads_total",
    "Corpus load attempts by outcome",
    ["status"],
)

INDEX_DOC_COUNT = Gauge(
    "site_search_index_document_count",
    "Documents in the loaded index",
)


@contextmanager
def track_latency(histogram: Histogram, **labels: str) -> Generator[None, None, None]:
    """Context manager to track operation latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        histogram.labels(**labels).observe(time.perf_counter() - start)


def get_metrics() -> bytes:
    """Generate Prometheus metrics output."""
    return generate_latest()


def get_metrics_content_type() -> str:
    """Get content type for metrics exposition."""
    return CONTENT_TYPE_LATEST

"""Observability module for structured logging, tracing and metrics."""

from site_search.observability.context import get_trace_context, set_trace_context, trace_context
from site_search.observability.logging import JsonFormatter, configure_logging
from site_search.observability.metrics import (
    CORPUS_LOADS,
    INDEX_DOC_COUNT,
    SEARCH_LATENCY,
    SEARCH_REQUESTS,
    get_metrics,
    get_metrics_content_type,
    track_latency,
)
from site_search.observability.tracing import create_span, get_tracer, init_tracing


__all__ = [
    "CORPUS_LOADS",
    "INDEX_DOC_COUNT",
    "SEARCH_LATENCY",
    "SEARCH_REQUESTS",
    "JsonFormatter",
    "configure_logging",
    "create_span",
    "get_metrics",
    "get_metrics_content_type",
    "get_trace_context",
    "get_tracer",
    "init_tracing",
    "set_trace_context",
    "trace_context",
    "track_latency",
]

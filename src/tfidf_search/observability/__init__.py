"""Observability module for structured logging, trace correlation, and metrics."""

from tfidf_search.observability.context import get_trace_context, operation_span, set_trace_context, trace_context
from tfidf_search.observability.logging import JsonFormatter, configure_logging
from tfidf_search.observability.metrics import (
    DOCUMENTS_INDEXED,
    INDEX_TERMS,
    SEARCH_COUNT,
    SEARCH_LATENCY,
    get_metrics,
    get_metrics_content_type,
    track_latency,
)


__all__ = [
    "DOCUMENTS_INDEXED",
    "INDEX_TERMS",
    "SEARCH_COUNT",
    "SEARCH_LATENCY",
    "JsonFormatter",
    "configure_logging",
    "get_metrics",
    "get_metrics_content_type",
    "get_trace_context",
    "operation_span",
    "set_trace_context",
    "trace_context",
    "track_latency",
]

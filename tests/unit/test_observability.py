"""Unit tests for observability module."""

import json
import logging
import sys

import pytest

from tfidf_search.observability import (
    SEARCH_LATENCY,
    JsonFormatter,
    configure_logging,
    get_metrics,
    get_metrics_content_type,
    get_trace_context,
    operation_span,
    set_trace_context,
    track_latency,
)


def _record(msg="test message", level=logging.INFO, name="tfidf_search.search.index_engine", exc_info=None):
    return logging.LogRecord(
        name=name,
        level=level,
        pathname="test.py",
        lineno=1,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )


class TestJsonFormatter:
    """Tests for structured JSON logging."""

    def test_format_includes_trace_context(self):
        set_trace_context("ab" * 16, "cd" * 8)

        data = json.loads(JsonFormatter().format(_record()))

        assert data["message"] == "test message"
        assert data["level"] == "INFO"
        assert data["trace_id"] == "ab" * 16
        assert data["span_id"] == "cd" * 8
        assert data["component"] == "index_engine"
        assert "timestamp" in data

    def test_format_includes_extra_fields(self):
        record = _record()
        record.index = "docs"

        data = json.loads(JsonFormatter().format(record))

        assert data["index"] == "docs"
        assert "pathname" not in data

    def test_format_truncates_and_redacts(self):
        record = _record(msg="x" * 5000)
        record.api_key = "secret"

        data = json.loads(JsonFormatter().format(record))

        assert data["message"].endswith("...")
        assert len(data["message"]) == JsonFormatter.MAX_MESSAGE_LEN + 3
        assert data["api_key"] == "[REDACTED]"

    def test_format_includes_exception(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = _record(level=logging.ERROR, exc_info=sys.exc_info())

        data = json.loads(JsonFormatter().format(record))

        assert "RuntimeError: boom" in data["exception"]

    def test_json_default_handles_set_and_bytes(self):
        formatter = JsonFormatter()
        assert formatter._json_default({3, 1, 2}) == [1, 2, 3]
        assert formatter._json_default(b"ok") == "ok"

    def test_json_default_handles_unorderable_set(self):
        value = JsonFormatter()._json_default({1, "a"})
        assert isinstance(value, list)
        assert len(value) == 2


class TestTraceContext:
    """Tests for trace context propagation."""

    def test_get_trace_context_generates_ids(self):
        ctx = get_trace_context()
        assert len(ctx["trace_id"]) == 32
        assert len(ctx["span_id"]) == 16

    def test_operation_span_restores_parent(self):
        set_trace_context("aa" * 16, "bb" * 8)

        with operation_span("search", index="docs") as span:
            assert span["trace_id"] == "aa" * 16
            assert span["span_id"] != "bb" * 8
            assert span["operation"] == "search"
            assert get_trace_context()["index"] == "docs"

        ctx = get_trace_context()
        assert ctx["span_id"] == "bb" * 8
        assert "operation" not in ctx


class TestConfigureLogging:
    """Root logger configuration."""

    @pytest.fixture(autouse=True)
    def restore_root(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_installs_single_json_handler(self):
        configure_logging("debug", json_output=True, logger_levels={"noisy": "error"})

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JsonFormatter)
        assert logging.getLogger("noisy").level == logging.ERROR

    def test_plain_text_output(self):
        configure_logging("warning", json_output=False)

        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert not isinstance(root.handlers[0].formatter, JsonFormatter)


class TestMetrics:
    """Prometheus exposition and latency tracking."""

    def test_track_latency_records_observation(self):
        with track_latency(SEARCH_LATENCY, index="latency-test"):
            pass

        assert b'tfidf_search_latency_seconds_count{index="latency-test"} 1.0' in get_metrics()

    def test_content_type(self):
        assert get_metrics_content_type().startswith("text/plain")

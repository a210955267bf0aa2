"""Tests for tracing helpers."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from registry_operator import tracing


class TestTraceSpan:
    """Test cases for trace_span."""

    def test_without_tracer_yields_none(self):
        with patch.object(tracing, "_tracer", None):
            with tracing.trace_span("reconcile_registry", kind="Registry") as span:
                assert span is None

    def test_without_tracer_propagates_errors(self):
        with patch.object(tracing, "_tracer", None):
            with pytest.raises(RuntimeError):
                with tracing.trace_span("reconcile_registry"):
                    raise RuntimeError("boom")

    def test_add_span_attribute_without_span(self):
        tracing.add_span_attribute("registry.phase", "Pending")


class TestInitializeTracing:
    """Test cases for initialize_tracing."""

    def test_disabled_by_env(self, monkeypatch):
        monkeypatch.setenv("OTEL_TRACES_ENABLED", "false")

        with patch.object(tracing, "_tracer", None):
            tracing.initialize_tracing()
            assert tracing.get_tracer() is None

"""Tests for base handler functionality."""

from __future__ import annotations

import json
import logging
import threading
from unittest.mock import MagicMock

import pytest

from registry_operator.state import BaseHandler, ReconcileCancelledError


@pytest.fixture
def handler():
    return BaseHandler(MagicMock())


@pytest.fixture
def meta():
    return {"name": "test-registry", "namespace": "default", "uid": "1234"}


class TestBaseHandler:
    """Test cases for BaseHandler class."""

    def test_init(self):
        """Test handler initialization."""
        operations = MagicMock()
        handler = BaseHandler(operations, kind="TestKind")

        assert handler.kind == "TestKind"
        assert handler.operations is operations
        assert handler.logger is not None

    def test_handle_not_implemented(self, handler, meta):
        with pytest.raises(NotImplementedError):
            handler.handle({"metadata": meta})

    def test_get_resource_context_defaults(self, handler):
        ctx = handler._get_resource_context({})

        assert ctx == {"name": "unknown", "namespace": "default", "uid": "unknown"}


class TestStructuredLogging:
    """Test structured log output."""

    def test_log_info(self, handler, meta, caplog):
        with caplog.at_level(logging.INFO):
            handler.log_info(meta, "Created Pod", event="create", reason="PodCreated")

        record = json.loads(caplog.records[-1].getMessage())
        assert record["controller"] == "registry-operator"
        assert record["resource"] == "Registry"
        assert record["name"] == "test-registry"
        assert record["reason"] == "PodCreated"
        assert caplog.records[-1].levelno == logging.INFO

    def test_log_warning_level(self, handler, meta, caplog):
        with caplog.at_level(logging.INFO):
            handler.log_warning(meta, "Slow")

        assert caplog.records[-1].levelno == logging.WARNING

    def test_log_error_sanitizes(self, handler, meta, caplog):
        """Test error details and extra fields are sanitized."""
        with caplog.at_level(logging.INFO):
            handler.log_error(meta, "Failed", error=ValueError("token: abc123"), password="hunter2")

        record = json.loads(caplog.records[-1].getMessage())
        assert caplog.records[-1].levelno == logging.ERROR
        assert record["error_type"] == "ValueError"
        assert "abc123" not in record["error"]
        assert record["password"] == "[REDACTED]"


class TestCheckCancelled:
    """Test cancellation checks between steps."""

    def test_no_event(self, handler, meta):
        handler.check_cancelled(meta, None)

    def test_event_not_set(self, handler, meta):
        handler.check_cancelled(meta, threading.Event())

    def test_event_set(self, handler, meta):
        cancel = threading.Event()
        cancel.set()

        with pytest.raises(ReconcileCancelledError):
            handler.check_cancelled(meta, cancel)

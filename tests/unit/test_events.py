"""Tests for Kubernetes event utilities."""

from __future__ import annotations

from unittest.mock import patch

import pytest

pytest.importorskip("kopf")

from registry_operator.utils.events import (  # noqa: E402
    emit_event,
    emit_phase_changed,
    emit_reconcile_failed,
    emit_storage_unsupported,
)


class TestEmitEvent:
    """Test cases for emit_event function."""

    @patch("registry_operator.utils.events.kopf.event")
    def test_emit_event_normal(self, mock_event):
        """Test emitting normal event."""
        body = {"metadata": {"name": "test-registry", "namespace": "default"}}

        emit_event(body, "TestReason", "Test message")

        mock_event.assert_called_once_with(
            body,
            reason="TestReason",
            message="Test message",
            type="Normal",
        )

    @patch("registry_operator.utils.events.kopf.event")
    def test_emit_event_warning(self, mock_event):
        """Test emitting warning event."""
        body = {"metadata": {"name": "test-registry", "namespace": "default"}}

        emit_event(body, "ErrorReason", "Error occurred", type_="Warning")

        assert mock_event.call_args[1]["type"] == "Warning"


class TestRegistryEvents:
    """Test cases for Registry lifecycle events."""

    @patch("registry_operator.utils.events.kopf.event")
    def test_emit_reconcile_failed(self, mock_event):
        body = {"metadata": {"name": "test-registry"}}

        emit_reconcile_failed(body, "connection refused")

        call_args = mock_event.call_args
        assert call_args[1]["reason"] == "ReconcileFailed"
        assert call_args[1]["message"] == "connection refused"
        assert call_args[1]["type"] == "Warning"

    @patch("registry_operator.utils.events.kopf.event")
    def test_emit_storage_unsupported(self, mock_event):
        body = {"metadata": {"name": "test-registry"}}

        emit_storage_unsupported(body, "storage type s3 not supported")

        call_args = mock_event.call_args
        assert call_args[1]["reason"] == "StorageTypeUnsupported"
        assert "s3" in call_args[1]["message"]
        assert call_args[1]["type"] == "Warning"

    @patch("registry_operator.utils.events.kopf.event")
    def test_emit_phase_changed(self, mock_event):
        body = {"metadata": {"name": "test-registry"}}

        emit_phase_changed(body, "Running")

        call_args = mock_event.call_args
        assert call_args[1]["reason"] == "PhaseChanged"
        assert "Running" in call_args[1]["message"]
        assert call_args[1]["type"] == "Normal"

"""Utilities for emitting Kubernetes events."""

from __future__ import annotations

from typing import Any

import kopf

from ..constants import (
    EVENT_REASON_PHASE_CHANGED,
    EVENT_REASON_RECONCILE_FAILED,
    EVENT_REASON_STORAGE_UNSUPPORTED,
)


def emit_event(
    body: dict[str, Any],
    reason: str,
    message: str,
    type_: str = "Normal",
) -> None:
    """Emit a Kubernetes event.

    Args:
        body: Resource body the event refers to
        reason: Event reason
        message: Event message
        type_: Event type (Normal or Warning)
    """
    kopf.event(
        body,
        reason=reason,
        message=message,
        type=type_,
    )


def emit_reconcile_failed(body: dict[str, Any], message: str) -> None:
    """Emit reconcile failed event."""
    emit_event(body, EVENT_REASON_RECONCILE_FAILED, message, type_="Warning")


def emit_storage_unsupported(body: dict[str, Any], message: str) -> None:
    """Emit unsupported storage type event."""
    emit_event(body, EVENT_REASON_STORAGE_UNSUPPORTED, message, type_="Warning")


def emit_phase_changed(body: dict[str, Any], phase: str) -> None:
    """Emit phase changed event."""
    emit_event(body, EVENT_REASON_PHASE_CHANGED, f"Registry moved to phase {phase}")

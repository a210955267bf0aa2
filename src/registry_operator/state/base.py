"""Base handler class with logging and cancellation shared by all phase handlers."""

from __future__ import annotations

import logging
import threading
from typing import Any

from ..constants import CONTROLLER_NAME, KIND_REGISTRY
from ..logging import log_resource_event
from ..models import ReconcileResult
from ..operations import RegistryOperations
from ..utils.errors import sanitize_dict, sanitize_exception


class ReconcileCancelledError(Exception):
    """Raised between steps when the caller asked the reconciliation to stop."""


class BaseHandler:
    """Base class for phase handlers."""

    def __init__(self, operations: RegistryOperations, kind: str = KIND_REGISTRY):
        """Initialize base handler.

        Args:
            operations: Resource operations facade
            kind: The Kubernetes resource kind handled
        """
        self.operations = operations
        self.kind = kind
        self.logger = logging.getLogger(__name__)

    def handle(self, registry: dict[str, Any], cancel: threading.Event | None = None) -> ReconcileResult:
        raise NotImplementedError

    def _get_resource_context(self, meta: dict[str, Any]) -> dict[str, Any]:
        return {
            "name": meta.get("name", "unknown"),
            "namespace": meta.get("namespace", "default"),
            "uid": meta.get("uid", "unknown"),
        }

    def _log(
        self,
        level: int,
        meta: dict[str, Any],
        message: str,
        event: str,
        reason: str,
        **kwargs: Any,
    ) -> None:
        ctx = self._get_resource_context(meta)
        log_resource_event(
            self.logger,
            controller=CONTROLLER_NAME,
            resource_kind=self.kind,
            resource_name=ctx["name"],
            namespace=ctx["namespace"],
            uid=ctx["uid"],
            event=event,
            reason=reason,
            message=message,
            level=level,
            **kwargs,
        )

    def log_info(
        self,
        meta: dict[str, Any],
        message: str,
        event: str = "info",
        reason: str = "Info",
        **kwargs: Any,
    ) -> None:
        """Log an info-level structured log message."""
        self._log(logging.INFO, meta, message, event, reason, **kwargs)

    def log_warning(
        self,
        meta: dict[str, Any],
        message: str,
        event: str = "warning",
        reason: str = "Warning",
        **kwargs: Any,
    ) -> None:
        """Log a warning-level structured log message."""
        self._log(logging.WARNING, meta, message, event, reason, **kwargs)

    def log_error(
        self,
        meta: dict[str, Any],
        message: str,
        error: Exception | None = None,
        event: str = "error",
        reason: str = "Error",
        **kwargs: Any,
    ) -> None:
        """Log an error-level structured log message.

        Args:
            meta: Kubernetes resource metadata
            message: Log message
            error: Optional exception to include sanitized error details
            event: Event type (default: "error")
            reason: Reason for the event (default: "Error")
            **kwargs: Additional fields to include in the log
        """
        log_data = sanitize_dict(kwargs)
        if error is not None:
            log_data["error"] = sanitize_exception(error)
            log_data["error_type"] = type(error).__name__
        self._log(logging.ERROR, meta, message, event, reason, **log_data)

    def check_cancelled(self, meta: dict[str, Any], cancel: threading.Event | None) -> None:
        """Stop before the next step if cancellation was requested.

        Raises:
            ReconcileCancelledError: If ``cancel`` is set
        """
        if cancel is not None and cancel.is_set():
            self.log_warning(meta, "Reconciliation cancelled", event="cancelled", reason="Cancelled")
            raise ReconcileCancelledError(f"reconciliation of {meta.get('name', 'unknown')} cancelled")

"""Reconciler dispatching a Registry to the handler of its recorded phase."""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable

from .. import metrics
from ..constants import KIND_REGISTRY
from ..models import ReconcileResult, RegistryIdentity, RegistryPhase, get_phase
from ..operations import RegistryOperations
from ..services.store.base import NotFoundError
from ..tracing import add_span_attribute, trace_span
from .phases import DeletingHandler, PendingHandler, RunningHandler

logger = logging.getLogger(__name__)

PhaseFn = Callable[[dict[str, Any], threading.Event | None], ReconcileResult]


class Reconciler:
    """Load a Registry by identity and run one pass of its phase handler.

    Holds no per-Registry state, so distinct identities can be reconciled
    concurrently with one instance.
    """

    def __init__(self, operations: RegistryOperations):
        self.operations = operations
        self.handlers: dict[RegistryPhase, PhaseFn] = {
            RegistryPhase.PENDING: PendingHandler(operations).handle,
            RegistryPhase.RUNNING: RunningHandler(operations).handle,
            RegistryPhase.DELETING: DeletingHandler(operations).handle,
        }

    def handle(self, identity: RegistryIdentity, cancel: threading.Event | None = None) -> ReconcileResult:
        """Reconcile one Registry.

        Args:
            identity: Registry name and namespace
            cancel: Optional event; when set, the pass stops before its next step

        Returns:
            The phase handler's result

        Raises:
            Exception: Store and builder errors propagate unchanged
        """
        with trace_span("reconcile_registry", kind=KIND_REGISTRY, attributes={"registry.name": str(identity)}):
            try:
                registry = self.operations.get_registry(identity)
            except NotFoundError:
                # Already reclaimed, typically a re-delivery after cleanup finished.
                logger.info(f"Registry {identity} not found, it might have been deleted")
                metrics.reconcile_total.labels(phase="none", result="not_found").inc()
                return ReconcileResult()

            phase = get_phase(registry)
            if phase is None:
                raw_phase = (registry.get("status") or {}).get("phase")
                # Requeueing cannot repair a corrupted status.
                logger.error(f"Registry {identity} has unrecognized phase {raw_phase!r}, dropping")
                metrics.reconcile_total.labels(phase="unknown", result="dropped").inc()
                return ReconcileResult()

            add_span_attribute("registry.phase", phase.value)
            handler = self.handlers[phase]

            start_time = time.time()
            try:
                result = handler(registry, cancel)
            except Exception as e:
                metrics.error_total.labels(error_type=type(e).__name__).inc()
                metrics.reconcile_total.labels(phase=phase.value, result="error").inc()
                raise
            finally:
                metrics.reconcile_duration_seconds.labels(phase=phase.value).observe(time.time() - start_time)

            outcome = "requeue" if result.requeue else "success"
            metrics.reconcile_total.labels(phase=phase.value, result=outcome).inc()
            return result

"""Phase handlers for the Registry state machine.

Pending ---children created---> Running ---deletion requested---> Deleting.
Each handler moves a Registry forward only. Every step checks before it acts,
so a handler that failed part way can be run again from the top.
"""

from __future__ import annotations

import threading
from typing import Any

from .. import metrics
from ..builders import UnsupportedStorageTypeError, build_pod
from ..models import (
    ReconcileResult,
    RegistryPhase,
    deletion_requested,
    get_storage_type,
    set_phase,
)
from .base import BaseHandler


class PhaseHandler(BaseHandler):
    """Handler bound to one phase."""

    phase: RegistryPhase

    def transition(self, registry: dict[str, Any], phase: RegistryPhase) -> ReconcileResult:
        """Persist a forward phase transition."""
        meta = registry.get("metadata", {})
        set_phase(registry, phase)
        self.operations.update_status(registry)
        metrics.phase_transitions_total.labels(from_phase=self.phase.value, to_phase=phase.value).inc()
        self.log_info(
            meta,
            f"Registry moved from {self.phase.value} to {phase.value}",
            event="transition",
            reason="PhaseChanged",
            phase=phase.value,
        )
        return ReconcileResult(transitioned_to=phase)


class PendingHandler(PhaseHandler):
    """Create the ConfigMap and Pod, add the finalizer, move to Running."""

    phase = RegistryPhase.PENDING

    def handle(self, registry: dict[str, Any], cancel: threading.Event | None = None) -> ReconcileResult:
        meta = registry.get("metadata", {})

        if not get_storage_type(registry):
            # Observed before defaults were applied; look again later.
            self.log_info(meta, "Storage type not set yet, requeueing", event="requeue", reason="DefaultsPending")
            return ReconcileResult(requeue=True)

        try:
            pod = build_pod(registry)
        except UnsupportedStorageTypeError as e:
            self.log_error(meta, str(e), error=e, reason="StorageTypeUnsupported", storage_type=e.storage_type)
            raise

        self.check_cancelled(meta, cancel)
        if not self.operations.config_map_exists(registry):
            self.operations.create_config_map(registry)
            self.log_info(meta, "Created ConfigMap", event="create", reason="ConfigMapCreated")

        self.check_cancelled(meta, cancel)
        if not self.operations.pod_exists(registry):
            self.operations.create_pod(registry, pod)
            self.log_info(meta, "Created Pod", event="create", reason="PodCreated")

        self.check_cancelled(meta, cancel)
        self.operations.add_finalizer(registry)

        self.check_cancelled(meta, cancel)
        return self.transition(registry, RegistryPhase.RUNNING)


class RunningHandler(PhaseHandler):
    """Move to Deleting once deletion has been requested."""

    phase = RegistryPhase.RUNNING

    def handle(self, registry: dict[str, Any], cancel: threading.Event | None = None) -> ReconcileResult:
        if not deletion_requested(registry):
            return ReconcileResult()

        self.check_cancelled(registry.get("metadata", {}), cancel)
        # Children are left alone here; Deleting removes them.
        return self.transition(registry, RegistryPhase.DELETING)


class DeletingHandler(PhaseHandler):
    """Delete the Pod and ConfigMap, then release the finalizer."""

    phase = RegistryPhase.DELETING

    def handle(self, registry: dict[str, Any], cancel: threading.Event | None = None) -> ReconcileResult:
        meta = registry.get("metadata", {})

        if not self.operations.has_finalizer(registry):
            # Cleanup already finished in an earlier pass.
            return ReconcileResult()

        self.check_cancelled(meta, cancel)
        if self.operations.pod_exists(registry) and self.operations.delete_pod(registry):
            self.log_info(meta, "Deleted Pod", event="delete", reason="PodDeleted")

        self.check_cancelled(meta, cancel)
        if self.operations.config_map_exists(registry) and self.operations.delete_config_map(registry):
            self.log_info(meta, "Deleted ConfigMap", event="delete", reason="ConfigMapDeleted")

        # Last step: both children are gone.
        self.check_cancelled(meta, cancel)
        self.operations.remove_finalizer(registry)
        self.log_info(meta, "Removed finalizer", event="finalize", reason="FinalizerRemoved")
        return ReconcileResult()

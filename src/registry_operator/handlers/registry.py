"""Kopf handlers delivering Registry changes to the reconciler."""

from __future__ import annotations

import logging
import os
import threading
from typing import Any

import kopf

from ..builders import UnsupportedStorageTypeError
from ..constants import API_GROUP_VERSION, KIND_REGISTRY
from ..models import ReconcileResult, RegistryIdentity, RegistryPhase
from ..operations import RegistryOperations
from ..services.store import KubernetesObjectStore
from ..state import ReconcileCancelledError, Reconciler
from ..utils.errors import sanitize_exception
from ..utils.events import emit_phase_changed, emit_reconcile_failed, emit_storage_unsupported

logger = logging.getLogger(__name__)

REQUEUE_DELAY_SECONDS = int(os.getenv("REQUEUE_DELAY_SECONDS", "5"))

# Set on operator shutdown; in-flight reconciliations stop before their next step
shutdown_requested = threading.Event()

_reconciler: Reconciler | None = None
_reconciler_lock = threading.Lock()


def get_reconciler() -> Reconciler:
    """Return the process-wide reconciler, creating it on first use."""
    global _reconciler
    with _reconciler_lock:
        if _reconciler is None:
            _reconciler = Reconciler(RegistryOperations(KubernetesObjectStore.from_environment()))
        return _reconciler


def reconcile(body: dict[str, Any], meta: dict[str, Any]) -> ReconcileResult:
    """Run one reconciliation pass and map its outcome to kopf semantics.

    Returns:
        The pass result when it neither failed nor asked for a requeue

    Raises:
        kopf.TemporaryError: On requeue requests, cancellation and store errors
        kopf.PermanentError: On an unsupported storage type
    """
    identity = RegistryIdentity.from_meta(meta)
    try:
        result = get_reconciler().handle(identity, cancel=shutdown_requested)
    except UnsupportedStorageTypeError as e:
        emit_storage_unsupported(body, str(e))
        raise kopf.PermanentError(str(e)) from e
    except ReconcileCancelledError as e:
        raise kopf.TemporaryError(str(e), delay=REQUEUE_DELAY_SECONDS) from e
    except Exception as e:
        message = f"Reconciliation failed: {sanitize_exception(e)}"
        emit_reconcile_failed(body, message)
        raise kopf.TemporaryError(message, delay=REQUEUE_DELAY_SECONDS) from e

    if result.transitioned_to is not None:
        emit_phase_changed(body, result.transitioned_to.value)
    if result.requeue:
        raise kopf.TemporaryError(f"Registry {identity} is not ready for reconciliation yet", delay=REQUEUE_DELAY_SECONDS)
    return result


@kopf.on.resume(API_GROUP_VERSION, KIND_REGISTRY)
@kopf.on.create(API_GROUP_VERSION, KIND_REGISTRY)
@kopf.on.update(API_GROUP_VERSION, KIND_REGISTRY)
def handle_registry(
    body: dict[str, Any],
    meta: dict[str, Any],
    **kwargs: Any,
) -> None:
    """Handle Registry creation, spec changes and operator restarts."""
    reconcile(body, meta)


@kopf.on.delete(API_GROUP_VERSION, KIND_REGISTRY, optional=True)
def handle_registry_delete(
    body: dict[str, Any],
    meta: dict[str, Any],
    **kwargs: Any,
) -> None:
    """Handle Registry deletion.

    The Registry's own finalizer keeps the object alive, so kopf needs none of
    its own (``optional=True``) and keeps retrying this handler on
    ``TemporaryError``. Passes run until one no longer changes the phase:
    Running -> Deleting, then children and finalizer removal.
    """
    logger.info(f"Cleaning up registry {RegistryIdentity.from_meta(meta)}")
    for _ in RegistryPhase:
        result = reconcile(body, meta)
        if result.transitioned_to is None:
            return

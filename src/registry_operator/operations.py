"""Idempotent operations on a Registry and its child resources.

This is the only module that talks to the object store. Every operation is
keyed by the Registry's (name, namespace); children carry the same identity,
so check-then-act is enough to make each step safe to repeat.
"""

from __future__ import annotations

import logging
from typing import Any

from . import metrics
from .builders import build_config_map, build_pod
from .builders.common import child_labels
from .constants import FINALIZER, KIND_CONFIG_MAP, KIND_POD, KIND_REGISTRY
from .models import RegistryIdentity, get_identity
from .services.store.base import NotFoundError, ObjectStore

logger = logging.getLogger(__name__)


class RegistryOperations:
    """Named operations over an ObjectStore for Registry resources."""

    def __init__(self, store: ObjectStore):
        self.store = store

    # Registry

    def get_registry(self, identity: RegistryIdentity) -> dict[str, Any]:
        """Load a Registry.

        Raises:
            NotFoundError: If the Registry does not exist
        """
        return self.store.get(KIND_REGISTRY, identity.name, identity.namespace)

    def update_status(self, registry: dict[str, Any]) -> None:
        """Persist the Registry status."""
        logger.debug(f"Updating status for registry {get_identity(registry)}")
        updated = self.store.update_status(registry)
        self._refresh(registry, updated)

    def has_finalizer(self, registry: dict[str, Any]) -> bool:
        finalizers = registry.get("metadata", {}).get("finalizers") or []
        return FINALIZER in finalizers

    def add_finalizer(self, registry: dict[str, Any]) -> None:
        """Add the finalizer; no store call if it is already present."""
        if self.has_finalizer(registry):
            return
        meta = registry.setdefault("metadata", {})
        meta["finalizers"] = list(meta.get("finalizers") or []) + [FINALIZER]
        logger.debug(f"Adding finalizer to registry {get_identity(registry)}")
        updated = self.store.update(registry)
        self._refresh(registry, updated)

    def remove_finalizer(self, registry: dict[str, Any]) -> None:
        """Remove the finalizer; no store call if it is already absent."""
        if not self.has_finalizer(registry):
            return
        meta = registry["metadata"]
        meta["finalizers"] = [f for f in meta["finalizers"] if f != FINALIZER]
        logger.debug(f"Removing finalizer from registry {get_identity(registry)}")
        updated = self.store.update(registry)
        self._refresh(registry, updated)

    @staticmethod
    def _refresh(registry: dict[str, Any], updated: dict[str, Any] | None) -> None:
        # Carry the new resourceVersion so a later write in the same pass does not conflict
        if updated and "metadata" in updated:
            registry["metadata"] = updated["metadata"]

    # Children

    def _child_exists(self, kind: str, registry: dict[str, Any]) -> bool:
        identity = get_identity(registry)
        try:
            self.store.get(kind, identity.name, identity.namespace)
        except NotFoundError:
            return False
        return True

    def _create_child(self, kind: str, manifest: dict[str, Any]) -> None:
        try:
            self.store.create(manifest)
        except Exception:
            metrics.child_operations_total.labels(kind=kind, operation="create", result="failed").inc()
            raise
        metrics.child_operations_total.labels(kind=kind, operation="create", result="success").inc()

    def _delete_child(self, kind: str, registry: dict[str, Any]) -> bool:
        """Delete a child if present. Returns False if it was already gone."""
        identity = get_identity(registry)
        ref = {
            "kind": kind,
            "metadata": {"name": identity.name, "namespace": identity.namespace},
        }
        try:
            self.store.delete(ref)
        except NotFoundError:
            metrics.child_operations_total.labels(kind=kind, operation="delete", result="absent").inc()
            return False
        except Exception:
            metrics.child_operations_total.labels(kind=kind, operation="delete", result="failed").inc()
            raise
        metrics.child_operations_total.labels(kind=kind, operation="delete", result="success").inc()
        return True

    def list_children(self, registry: dict[str, Any], kind: str) -> list[dict[str, Any]]:
        """List children of a kind by the Registry label convention."""
        identity = get_identity(registry)
        return self.store.list(kind, identity.namespace, child_labels(identity.name))

    def pod_exists(self, registry: dict[str, Any]) -> bool:
        return self._child_exists(KIND_POD, registry)

    def get_pod(self, registry: dict[str, Any]) -> dict[str, Any]:
        identity = get_identity(registry)
        return self.store.get(KIND_POD, identity.name, identity.namespace)

    def create_pod(self, registry: dict[str, Any], manifest: dict[str, Any] | None = None) -> None:
        """Create the Pod.

        Raises:
            UnsupportedStorageTypeError: If no manifest is given and the storage type has no builder
        """
        pod = manifest if manifest is not None else build_pod(registry)
        logger.debug(f"Creating pod for registry {get_identity(registry)}")
        self._create_child(KIND_POD, pod)

    def delete_pod(self, registry: dict[str, Any]) -> bool:
        logger.debug(f"Deleting pod for registry {get_identity(registry)}")
        return self._delete_child(KIND_POD, registry)

    def config_map_exists(self, registry: dict[str, Any]) -> bool:
        return self._child_exists(KIND_CONFIG_MAP, registry)

    def create_config_map(self, registry: dict[str, Any], manifest: dict[str, Any] | None = None) -> None:
        config_map = manifest if manifest is not None else build_config_map(registry)
        logger.debug(f"Creating ConfigMap for registry {get_identity(registry)}")
        self._create_child(KIND_CONFIG_MAP, config_map)

    def delete_config_map(self, registry: dict[str, Any]) -> bool:
        logger.debug(f"Deleting ConfigMap for registry {get_identity(registry)}")
        return self._delete_child(KIND_CONFIG_MAP, registry)

"""Builder for the Registry workload Pod."""

from __future__ import annotations

from typing import Any, Callable

from ..constants import (
    CONFIG_MOUNT_PATH,
    CONFIG_VOLUME_NAME,
    KIND_POD,
    REGISTRY_IMAGE,
)
from ..models import StorageType, get_storage_type
from .common import child_metadata


class UnsupportedStorageTypeError(ValueError):
    """Raised when ``spec.storage.type`` has no Pod builder."""

    def __init__(self, storage_type: str):
        self.storage_type = storage_type
        super().__init__(f"storage type {storage_type} not supported")


def _build_in_memory_pod(registry: dict[str, Any]) -> dict[str, Any]:
    metadata = child_metadata(registry)
    name = metadata["name"]
    return {
        "apiVersion": "v1",
        "kind": KIND_POD,
        "metadata": metadata,
        "spec": {
            "containers": [
                {
                    "name": name,
                    "image": REGISTRY_IMAGE,
                    "volumeMounts": [
                        {
                            "name": CONFIG_VOLUME_NAME,
                            "mountPath": CONFIG_MOUNT_PATH,
                        }
                    ],
                }
            ],
            "volumes": [
                {
                    "name": CONFIG_VOLUME_NAME,
                    "configMap": {"name": name},
                }
            ],
        },
    }


# Adding a storage variant means adding an entry here.
_POD_BUILDERS: dict[str, Callable[[dict[str, Any]], dict[str, Any]]] = {
    StorageType.IN_MEMORY.value: _build_in_memory_pod,
}


def build_pod(registry: dict[str, Any]) -> dict[str, Any]:
    """Create the Pod manifest for a Registry.

    Args:
        registry: Registry object

    Returns:
        Pod manifest

    Raises:
        UnsupportedStorageTypeError: If the storage type has no builder
    """
    storage_type = get_storage_type(registry)
    builder = _POD_BUILDERS.get(storage_type)
    if builder is None:
        raise UnsupportedStorageTypeError(storage_type)
    return builder(registry)

"""Metadata shared by all Registry child resources."""

from __future__ import annotations

from typing import Any

from ..constants import (
    API_GROUP_VERSION,
    KIND_REGISTRY,
    LABEL_APP,
    LABEL_APP_VALUE,
    LABEL_REGISTRY_NAME,
)


def child_labels(registry_name: str) -> dict[str, str]:
    """Labels carried by every child of the named Registry."""
    return {
        LABEL_APP: LABEL_APP_VALUE,
        LABEL_REGISTRY_NAME: registry_name,
    }


def child_metadata(registry: dict[str, Any]) -> dict[str, Any]:
    """Build child metadata keyed by the Registry identity.

    Children are named like the Registry and live in its namespace. When the
    Registry has a uid, an owner reference lets the garbage collector remove
    children the finalizer did not get to.
    """
    meta = registry.get("metadata", {})
    name = meta["name"]
    metadata: dict[str, Any] = {
        "name": name,
        "namespace": meta.get("namespace", "default"),
        "labels": child_labels(name),
    }

    uid = meta.get("uid")
    if uid:
        metadata["ownerReferences"] = [
            {
                "apiVersion": API_GROUP_VERSION,
                "kind": KIND_REGISTRY,
                "name": name,
                "uid": uid,
                "controller": True,
                "blockOwnerDeletion": True,
            }
        ]

    return metadata

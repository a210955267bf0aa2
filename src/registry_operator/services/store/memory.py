"""In-memory object store with Kubernetes-like semantics."""

from __future__ import annotations

import copy
import threading
import uuid
from datetime import datetime, timezone
from typing import Any

from ...constants import KIND_CONFIG_MAP
from .base import ConflictError, NotFoundError, object_key

# Kinds without a status subresource
_KINDS_WITHOUT_STATUS = {KIND_CONFIG_MAP}


def _now() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class InMemoryObjectStore:
    """Thread-safe ObjectStore keeping objects in a dict.

    Mirrors the API server behaviour the reconciler relies on:

    - resourceVersion is bumped on every write and checked on update
    - create and update ignore status; update_status ignores everything else
    - delete of an object with finalizers only sets deletionTimestamp; the
      object is removed once an update leaves its finalizer list empty
    """

    def __init__(self) -> None:
        self._objects: dict[tuple[str, str, str], dict[str, Any]] = {}
        self._lock = threading.Lock()
        self._version = 0

    def _next_version(self) -> str:
        self._version += 1
        return str(self._version)

    def _stored(self, key: tuple[str, str, str]) -> dict[str, Any]:
        stored = self._objects.get(key)
        if stored is None:
            kind, namespace, name = key
            raise NotFoundError(f"{kind} {namespace}/{name} not found")
        return stored

    @staticmethod
    def _check_version(stored: dict[str, Any], obj: dict[str, Any]) -> None:
        expected = obj.get("metadata", {}).get("resourceVersion")
        if expected is not None and expected != stored["metadata"]["resourceVersion"]:
            raise ConflictError(
                f"{stored['kind']} {stored['metadata']['name']} was modified, resourceVersion {expected} is stale"
            )

    def get(self, kind: str, name: str, namespace: str) -> dict[str, Any]:
        with self._lock:
            return copy.deepcopy(self._stored((kind, namespace, name)))

    def list(
        self,
        kind: str,
        namespace: str,
        label_selector: dict[str, str] | None = None,
    ) -> list[dict[str, Any]]:
        selector = label_selector or {}
        with self._lock:
            items = []
            for (obj_kind, obj_namespace, _), obj in sorted(self._objects.items()):
                if obj_kind != kind or obj_namespace != namespace:
                    continue
                labels = obj["metadata"].get("labels") or {}
                if all(labels.get(key) == value for key, value in selector.items()):
                    items.append(copy.deepcopy(obj))
            return items

    def create(self, obj: dict[str, Any]) -> dict[str, Any]:
        key = object_key(obj)
        with self._lock:
            if key in self._objects:
                raise ConflictError(f"{key[0]} {key[1]}/{key[2]} already exists")
            stored = copy.deepcopy(obj)
            meta = stored.setdefault("metadata", {})
            meta["namespace"] = key[1]
            meta["uid"] = meta.get("uid") or str(uuid.uuid4())
            meta["creationTimestamp"] = _now()
            meta["resourceVersion"] = self._next_version()
            meta.pop("deletionTimestamp", None)
            if key[0] not in _KINDS_WITHOUT_STATUS:
                stored.pop("status", None)
            self._objects[key] = stored
            return copy.deepcopy(stored)

    def update(self, obj: dict[str, Any]) -> dict[str, Any]:
        key = object_key(obj)
        with self._lock:
            stored = self._stored(key)
            self._check_version(stored, obj)

            updated = copy.deepcopy(obj)
            meta = updated.setdefault("metadata", {})
            for field in ("uid", "creationTimestamp", "deletionTimestamp"):
                if field in stored["metadata"]:
                    meta[field] = stored["metadata"][field]
                else:
                    meta.pop(field, None)
            meta["resourceVersion"] = self._next_version()
            if key[0] not in _KINDS_WITHOUT_STATUS:
                if "status" in stored:
                    updated["status"] = copy.deepcopy(stored["status"])
                else:
                    updated.pop("status", None)

            if meta.get("deletionTimestamp") and not meta.get("finalizers"):
                del self._objects[key]
            else:
                self._objects[key] = updated
            return copy.deepcopy(updated)

    def update_status(self, obj: dict[str, Any]) -> dict[str, Any]:
        key = object_key(obj)
        if key[0] in _KINDS_WITHOUT_STATUS:
            raise ValueError(f"{key[0]} has no status subresource")
        with self._lock:
            stored = self._stored(key)
            self._check_version(stored, obj)
            stored["status"] = copy.deepcopy(obj.get("status") or {})
            stored["metadata"]["resourceVersion"] = self._next_version()
            return copy.deepcopy(stored)

    def delete(self, obj: dict[str, Any]) -> None:
        key = object_key(obj)
        with self._lock:
            stored = self._stored(key)
            if stored["metadata"].get("finalizers"):
                if not stored["metadata"].get("deletionTimestamp"):
                    stored["metadata"]["deletionTimestamp"] = _now()
                    stored["metadata"]["resourceVersion"] = self._next_version()
                return
            del self._objects[key]

"""Object store interface consumed by the resource operations."""

from __future__ import annotations

from typing import Any, Protocol


class StoreError(Exception):
    """Error reported by an object store."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class NotFoundError(StoreError):
    """The requested object does not exist."""

    def __init__(self, message: str):
        super().__init__(message, status=404)


class ConflictError(StoreError):
    """The object already exists or was modified concurrently."""

    def __init__(self, message: str):
        super().__init__(message, status=409)


class ObjectStore(Protocol):
    """Protocol defining generic object store operations.

    Objects are plain dicts shaped like Kubernetes manifests; ``kind``,
    ``metadata.name`` and ``metadata.namespace`` address them.
    """

    def get(self, kind: str, name: str, namespace: str) -> dict[str, Any]:
        """Get an object.

        Raises:
            NotFoundError: If the object does not exist
        """
        ...

    def list(
        self,
        kind: str,
        namespace: str,
        label_selector: dict[str, str] | None = None,
    ) -> list[dict[str, Any]]:
        """List objects of a kind in a namespace matching all given labels."""
        ...

    def create(self, obj: dict[str, Any]) -> dict[str, Any]:
        """Create an object and return it as stored.

        Raises:
            ConflictError: If an object with the same identity exists
        """
        ...

    def update(self, obj: dict[str, Any]) -> dict[str, Any]:
        """Replace an object's metadata and spec; status is left untouched."""
        ...

    def update_status(self, obj: dict[str, Any]) -> dict[str, Any]:
        """Replace an object's status only."""
        ...

    def delete(self, obj: dict[str, Any]) -> None:
        """Request deletion of an object.

        Raises:
            NotFoundError: If the object does not exist
        """
        ...


def object_key(obj: dict[str, Any]) -> tuple[str, str, str]:
    """Return (kind, namespace, name) of a manifest dict."""
    meta = obj.get("metadata", {})
    return obj["kind"], meta.get("namespace", "default"), meta["name"]


def format_label_selector(label_selector: dict[str, str] | None) -> str | None:
    """Render a label dict as a Kubernetes label selector string."""
    if not label_selector:
        return None
    return ",".join(f"{key}={value}" for key, value in sorted(label_selector.items()))

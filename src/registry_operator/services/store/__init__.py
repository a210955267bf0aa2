"""Object stores for Registry and child resources."""

from .base import ConflictError, NotFoundError, ObjectStore, StoreError
from .kubernetes import KubernetesObjectStore
from .memory import InMemoryObjectStore

__all__ = [
    "ObjectStore",
    "StoreError",
    "NotFoundError",
    "ConflictError",
    "KubernetesObjectStore",
    "InMemoryObjectStore",
]

"""Shared fixtures for unit tests."""

from __future__ import annotations

from typing import Any, Callable

import pytest

from registry_operator.constants import API_GROUP_VERSION, KIND_REGISTRY
from registry_operator.models import RegistryIdentity
from registry_operator.operations import RegistryOperations
from registry_operator.services.store.memory import InMemoryObjectStore


class RecordingStore(InMemoryObjectStore):
    """In-memory store that records every write as (operation, kind, name).

    ``fail(operation, kind, error)`` makes every matching write raise
    ``error`` after it is recorded.
    """

    def __init__(self) -> None:
        super().__init__()
        self.calls: list[tuple[str, str, str]] = []
        self.failures: dict[tuple[str, str], Exception] = {}

    def fail(self, operation: str, kind: str, error: Exception) -> None:
        self.failures[(operation, kind)] = error

    def _record(self, operation: str, obj: dict[str, Any]) -> None:
        self.calls.append((operation, obj["kind"], obj["metadata"]["name"]))
        error = self.failures.get((operation, obj["kind"]))
        if error is not None:
            raise error

    def create(self, obj: dict[str, Any]) -> dict[str, Any]:
        self._record("create", obj)
        return super().create(obj)

    def update(self, obj: dict[str, Any]) -> dict[str, Any]:
        self._record("update", obj)
        return super().update(obj)

    def update_status(self, obj: dict[str, Any]) -> dict[str, Any]:
        self._record("update_status", obj)
        return super().update_status(obj)

    def delete(self, obj: dict[str, Any]) -> None:
        self._record("delete", obj)
        super().delete(obj)

    def writes(self, operation: str) -> list[tuple[str, str, str]]:
        return [call for call in self.calls if call[0] == operation]


def registry_manifest(
    name: str = "test-registry",
    namespace: str = "default",
    storage_type: str | None = "inmemory",
) -> dict[str, Any]:
    """Build a Registry manifest as a user would apply it."""
    storage: dict[str, Any] = {} if storage_type is None else {"type": storage_type}
    return {
        "apiVersion": API_GROUP_VERSION,
        "kind": KIND_REGISTRY,
        "metadata": {"name": name, "namespace": namespace},
        "spec": {"storage": storage},
    }


@pytest.fixture
def store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture
def operations(store: RecordingStore) -> RegistryOperations:
    return RegistryOperations(store)


@pytest.fixture
def create_registry(store: RecordingStore) -> Callable[..., dict[str, Any]]:
    """Create a Registry in the store, optionally seeding its phase, and return it."""

    def _create(
        name: str = "test-registry",
        namespace: str = "default",
        storage_type: str | None = "inmemory",
        phase: str | None = None,
    ) -> dict[str, Any]:
        registry = store.create(registry_manifest(name, namespace, storage_type))
        if phase is not None:
            registry["status"] = {"phase": phase}
            registry = store.update_status(registry)
        store.calls.clear()
        return store.get(KIND_REGISTRY, name, namespace)

    return _create


@pytest.fixture
def load(store: RecordingStore) -> Callable[[str, str, str], dict[str, Any]]:
    """Read an object back from the store."""

    def _load(kind: str, name: str = "test-registry", namespace: str = "default") -> dict[str, Any]:
        return store.get(kind, name, namespace)

    return _load


@pytest.fixture
def identity() -> RegistryIdentity:
    return RegistryIdentity(name="test-registry", namespace="default")


@pytest.fixture
def make_manifest() -> Callable[..., dict[str, Any]]:
    """Factory for Registry manifests that are not stored."""
    return registry_manifest

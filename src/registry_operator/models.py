"""Typed views over Registry objects."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, NamedTuple


class RegistryPhase(str, Enum):
    """Coarse lifecycle stage recorded in ``status.phase``."""

    PENDING = "Pending"
    RUNNING = "Running"
    DELETING = "Deleting"


class StorageType(str, Enum):
    """Supported values of ``spec.storage.type``."""

    IN_MEMORY = "inmemory"


class RegistryIdentity(NamedTuple):
    """Identity of a Registry; children share it."""

    name: str
    namespace: str

    @classmethod
    def from_meta(cls, meta: dict[str, Any]) -> RegistryIdentity:
        return cls(name=meta["name"], namespace=meta.get("namespace", "default"))

    def __str__(self) -> str:
        return f"{self.namespace}/{self.name}"


@dataclass
class ReconcileResult:
    """Outcome of one reconciliation pass.

    Attributes:
        requeue: Ask the dispatcher to run again without treating this pass as failed
        transitioned_to: Phase persisted by this pass, if it changed
    """

    requeue: bool = False
    transitioned_to: RegistryPhase | None = None


def get_identity(registry: dict[str, Any]) -> RegistryIdentity:
    return RegistryIdentity.from_meta(registry.get("metadata", {}))


def get_storage_type(registry: dict[str, Any]) -> str:
    """Return ``spec.storage.type`` or an empty string when defaults were not applied yet."""
    spec = registry.get("spec") or {}
    storage = spec.get("storage") or {}
    return storage.get("type") or ""


def get_phase(registry: dict[str, Any]) -> RegistryPhase | None:
    """Return the recorded phase.

    An absent phase reads as Pending. An unrecognized value returns None.
    """
    status = registry.get("status") or {}
    raw = status.get("phase") or RegistryPhase.PENDING.value
    try:
        return RegistryPhase(raw)
    except ValueError:
        return None


def set_phase(registry: dict[str, Any], phase: RegistryPhase) -> None:
    status = registry.get("status") or {}
    status["phase"] = phase.value
    registry["status"] = status


def deletion_requested(registry: dict[str, Any]) -> bool:
    meta = registry.get("metadata") or {}
    return bool(meta.get("deletionTimestamp"))

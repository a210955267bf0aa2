"""Tests for Registry model helpers."""

from __future__ import annotations

from registry_operator.models import (
    RegistryIdentity,
    RegistryPhase,
    StorageType,
    deletion_requested,
    get_identity,
    get_phase,
    get_storage_type,
    set_phase,
)


class TestIdentity:
    """Test Registry identity helpers."""

    def test_from_meta(self):
        identity = RegistryIdentity.from_meta({"name": "r", "namespace": "ns"})

        assert identity == RegistryIdentity("r", "ns")
        assert str(identity) == "ns/r"

    def test_default_namespace(self):
        assert get_identity({"metadata": {"name": "r"}}).namespace == "default"


class TestPhase:
    """Test phase reading and writing."""

    def test_missing_status_is_pending(self):
        assert get_phase({}) == RegistryPhase.PENDING
        assert get_phase({"status": {}}) == RegistryPhase.PENDING
        assert get_phase({"status": {"phase": ""}}) == RegistryPhase.PENDING

    def test_known_phases(self):
        for phase in RegistryPhase:
            assert get_phase({"status": {"phase": phase.value}}) == phase

    def test_unknown_phase(self):
        assert get_phase({"status": {"phase": "Exploded"}}) is None

    def test_set_phase_keeps_other_status(self):
        registry = {"status": {"observedGeneration": 2}}

        set_phase(registry, RegistryPhase.RUNNING)

        assert registry["status"] == {"observedGeneration": 2, "phase": "Running"}

    def test_set_phase_without_status(self):
        registry = {"status": None}

        set_phase(registry, RegistryPhase.DELETING)

        assert registry["status"] == {"phase": "Deleting"}


class TestSpecHelpers:
    """Test spec and metadata accessors."""

    def test_storage_type(self):
        registry = {"spec": {"storage": {"type": StorageType.IN_MEMORY.value}}}

        assert get_storage_type(registry) == "inmemory"

    def test_storage_type_unset(self):
        assert get_storage_type({}) == ""
        assert get_storage_type({"spec": {"storage": {}}}) == ""
        assert get_storage_type({"spec": {"storage": None}}) == ""

    def test_deletion_requested(self):
        assert deletion_requested({"metadata": {"deletionTimestamp": "2024-01-01T00:00:00Z"}})
        assert not deletion_requested({"metadata": {}})

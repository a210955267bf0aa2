"""Builder for the Registry configuration ConfigMap."""

from __future__ import annotations

from typing import Any

from ..constants import CONFIG_FILE_NAME, KIND_CONFIG_MAP
from ..models import get_storage_type
from .common import child_metadata


def render_config(storage_type: str) -> str:
    """Render the distribution configuration file for a storage type."""
    return f"version: 0.1\nstorage:\n  {storage_type}:\n"


def build_config_map(registry: dict[str, Any]) -> dict[str, Any]:
    """Create the ConfigMap manifest for a Registry.

    Args:
        registry: Registry object

    Returns:
        ConfigMap manifest with a single config.yml entry
    """
    return {
        "apiVersion": "v1",
        "kind": KIND_CONFIG_MAP,
        "metadata": child_metadata(registry),
        "data": {
            CONFIG_FILE_NAME: render_config(get_storage_type(registry)),
        },
    }

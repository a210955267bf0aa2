"""Builders for Registry child resources."""

from .configmap import build_config_map, render_config
from .pod import UnsupportedStorageTypeError, build_pod

__all__ = [
    "build_config_map",
    "render_config",
    "build_pod",
    "UnsupportedStorageTypeError",
]

"""Kubernetes operator managing container image Registry resources."""

__version__ = "0.1.0"

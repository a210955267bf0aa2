"""Utility functions for the Registry Operator."""

from .errors import sanitize_dict, sanitize_error_message, sanitize_exception
from .rate_limit import is_rate_limit_error, rate_limit_k8s

__all__ = [
    "sanitize_dict",
    "sanitize_error_message",
    "sanitize_exception",
    "is_rate_limit_error",
    "rate_limit_k8s",
]

"""Error sanitization utilities to keep API responses and credentials out of logs."""

import re
from typing import Any

from kubernetes.client.exceptions import ApiException

# Patterns that might expose credentials
SENSITIVE_PATTERNS = [
    r"(authorization)[:\s]+(bearer\s+)?[^\s,;\)]+",
    r"(bearer)\s+[A-Za-z0-9\-_\.=]+",
    r"(client[_\-]?key[_\-]?data)[:\s]+[^\s,;\)]+",
    r"(client[_\-]?certificate[_\-]?data)[:\s]+[^\s,;\)]+",
]

# Fields to redact completely
SENSITIVE_FIELDS = {
    "password",
    "secret",
    "token",
    "credentials",
}


def sanitize_error_message(message: str) -> str:
    """Sanitize error message to remove sensitive information.

    Args:
        message: Original error message

    Returns:
        Sanitized error message with sensitive data redacted
    """
    sanitized = message

    for pattern in SENSITIVE_PATTERNS:
        sanitized = re.sub(pattern, r"\1 [REDACTED]", sanitized, flags=re.IGNORECASE)

    for field in SENSITIVE_FIELDS:
        sanitized = re.sub(
            rf"{field}[:=\s]+([^\s,;\)]+)",
            rf"{field}: [REDACTED]",
            sanitized,
            flags=re.IGNORECASE,
        )

    return sanitized


def sanitize_exception(error: Exception) -> str:
    """Sanitize exception message.

    ApiException renders its response headers and body; only status and
    reason are kept for those.

    Args:
        error: Exception object

    Returns:
        Sanitized error message
    """
    if isinstance(error, ApiException):
        return sanitize_error_message(f"({error.status}) {error.reason}")
    return sanitize_error_message(str(error))


def sanitize_dict(data: dict[str, Any], sensitive_keys: set[str] | None = None) -> dict[str, Any]:
    """Sanitize dictionary by redacting sensitive fields.

    Args:
        data: Dictionary to sanitize
        sensitive_keys: Additional keys to redact (merged with SENSITIVE_FIELDS)

    Returns:
        Sanitized dictionary with sensitive values redacted
    """
    all_sensitive = SENSITIVE_FIELDS | (sensitive_keys or set())
    sanitized: dict[str, Any] = {}

    for key, value in data.items():
        key_lower = key.lower()
        if any(sensitive in key_lower for sensitive in all_sensitive):
            sanitized[key] = "[REDACTED]"
        elif isinstance(value, dict):
            sanitized[key] = sanitize_dict(value, sensitive_keys)
        elif isinstance(value, str):
            sanitized[key] = sanitize_error_message(value)
        else:
            sanitized[key] = value

    return sanitized

"""Redaction helpers for safe logging.

Guest names and notes are personal data: names are reduced to initials,
notes to their length, and phone numbers or e-mails anywhere in a string
are masked.
"""

import re
from typing import Any

# Patterns that should never appear in logs
_PHONE_PATTERN = re.compile(r"\+?\d[\d\s\-()]{8,}\d")
_EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")

_REDACTED = "[REDACTED]"

# Keys whose values are guest-identifying and logged only in reduced form
_NAME_KEYS = frozenset({"name", "guest", "guest_name"})
_FREE_TEXT_KEYS = frozenset({"notes"})


def redact_string(value: str) -> str:
    """Redact PII patterns from a string."""
    result = _PHONE_PATTERN.sub(_REDACTED, value)
    result = _EMAIL_PATTERN.sub(_REDACTED, result)
    return result


def initials(name: str) -> str:
    """'Hartman Family' -> 'H.F.'"""
    parts = [p for p in name.split() if p]
    return "".join(f"{p[0].upper()}." for p in parts) or _REDACTED


def redact_value(value: Any) -> str:
    """Redact any value for safe logging. Returns string representation."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return redact_string(value)
    if isinstance(value, dict):
        # For dicts, only log keys (structure), never values
        return f"dict(keys={list(value.keys())})"
    if isinstance(value, (list, tuple, set, frozenset)):
        return f"list(len={len(value)})"
    # For any other type, only log type name
    return f"<{type(value).__name__}>"


def safe_log_context(**kwargs: Any) -> dict[str, str]:
    """Build a context dict safe for logging. All values are redacted."""
    context: dict[str, str] = {}
    for key, value in kwargs.items():
        if key in _NAME_KEYS and isinstance(value, str):
            context[key] = initials(value)
        elif key in _FREE_TEXT_KEYS and isinstance(value, str):
            context[key] = f"text(len={len(value)})"
        else:
            context[key] = redact_value(value)
    return context

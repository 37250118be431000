"""Helpers for safe debug logging.

User records carry personal data (email, phone, street address). This
module masks those fields before request/response bodies reach DEBUG logs.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

_SENSITIVE_VALUE_KEYS: frozenset[str] = frozenset(
    {
        "email",
        "phone",
        "street",
        "suite",
        "zipcode",
        "lat",
        "lng",
    }
)


def _mask(value: Any) -> str:
    text = str(value)
    if len(text) <= 2:
        return "<redacted>"
    return f"{text[0]}…{text[-1]}"


def redact_for_log(value: Any, *, max_string: int = 256, _depth: int = 0) -> Any:
    """Return a redacted copy of *value* suitable for debug logs."""
    if _depth > 20:
        return "<max-depth>"

    if value is None or isinstance(value, (int, float, bool)):
        return value

    if isinstance(value, str):
        if len(value) > max_string:
            return f"{value[:max_string]}…<truncated>"
        return value

    if isinstance(value, Mapping):
        redacted: dict[str, Any] = {}
        for k, v in value.items():
            key = str(k)
            if key.lower() in _SENSITIVE_VALUE_KEYS and v not in (None, ""):
                redacted[key] = _mask(v)
            else:
                redacted[key] = redact_for_log(v, max_string=max_string, _depth=_depth + 1)
        return redacted

    if isinstance(value, Sequence):
        return [redact_for_log(v, max_string=max_string, _depth=_depth + 1) for v in value]

    return f"<{type(value).__name__}>"

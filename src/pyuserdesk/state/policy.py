"""Pure form and notification rules.

No state lives here: the form session and the notification channel call
these functions with their current values.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

_WHITESPACE = re.compile(r"\s+")
_EMAIL_SHAPE = re.compile(r"^[^@\s]+@[^@\s]+$")

#: Fields that must be non-empty, as (group, field) pairs; group None is top level.
REQUIRED_FIELDS: tuple[tuple[str | None, str], ...] = (
    (None, "name"),
    (None, "email"),
    (None, "phone"),
    (None, "username"),
    ("address", "street"),
    ("address", "city"),
)

#: Fields with a minimum length when non-empty.
MIN_LENGTH_FIELDS: tuple[tuple[str | None, str], ...] = (
    (None, "name"),
    (None, "username"),
    ("company", "name"),
)


@dataclass(frozen=True)
class FieldIssue:
    """One failed validation rule."""

    field: str
    rule: str
    message: str


def field_path(group: str | None, name: str) -> str:
    return name if group is None else f"{group}.{name}"


def derive_username(name: str, prefix: str) -> str:
    """Username shown while none was given: *prefix* + lower-cased name without whitespace."""
    return f"{prefix}{_WHITESPACE.sub('', name.lower())}"


def _value(values: Mapping[str, Any], group: str | None, name: str) -> str:
    container: Any = values if group is None else values.get(group)
    if not isinstance(container, Mapping):
        return ""
    value = container.get(name)
    return "" if value is None else str(value)


def validate_fields(values: Mapping[str, Any], *, min_length: int) -> list[FieldIssue]:
    """Check a record-shaped mapping; an empty list means it may be submitted.

    Whitespace-only values count as empty.
    """
    issues: list[FieldIssue] = []
    for group, name in REQUIRED_FIELDS:
        if not _value(values, group, name).strip():
            path = field_path(group, name)
            issues.append(FieldIssue(path, "required", f"{path} is required"))

    for group, name in MIN_LENGTH_FIELDS:
        value = _value(values, group, name)
        if value.strip() and len(value) < min_length:
            path = field_path(group, name)
            issues.append(
                FieldIssue(path, "min_length", f"{path} must be at least {min_length} characters"),
            )

    email = _value(values, None, "email")
    if email.strip() and not _EMAIL_SHAPE.match(email.strip()):
        issues.append(FieldIssue("email", "format", "email must look like name@domain"))

    return issues


def is_expired(now: float, visible_until: float) -> bool:
    return now >= visible_until

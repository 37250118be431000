"""Notification model."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class Severity(StrEnum):
    """Outcome class of a notification; affects presentation only."""

    SUCCESS = "success"
    FAILURE = "failure"


class Notification(BaseModel):
    """A transient status message for the outcome of one operation."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    message: str
    severity: Severity
    emitted_at: float
    """Clock reading when the notification was emitted."""
    visible_until: float
    """Clock reading after which the notification is hidden."""
    detail: str | None = None
    """Human-readable failure cause, when there is one."""

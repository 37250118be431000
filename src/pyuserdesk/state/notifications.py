"""Single-slot, auto-expiring notification channel."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from pyuserdesk._constants import DEFAULT_NOTIFICATION_DURATION
from pyuserdesk.models.notification import Notification, Severity
from pyuserdesk.state.policy import is_expired

_logger = logging.getLogger(__name__)


class NotificationChannel:
    """Holds at most one visible notification.

    A new notification replaces the current one and restarts the timer.
    Expiry is evaluated against *clock* whenever the current notification
    is read, so the channel needs no background task.
    """

    def __init__(
        self,
        *,
        duration: float = DEFAULT_NOTIFICATION_DURATION,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._duration = duration
        self._clock = clock
        self._current: Notification | None = None

    @property
    def duration(self) -> float:
        return self._duration

    def emit(self, message: str, severity: Severity, *, detail: str | None = None) -> Notification:
        now = self._clock()
        notification = Notification(
            message=message,
            severity=Severity(severity),
            emitted_at=now,
            visible_until=now + self._duration,
            detail=detail,
        )
        self._current = notification
        _logger.debug("Notification (%s): %s", notification.severity, message)
        return notification

    def success(self, message: str) -> Notification:
        return self.emit(message, Severity.SUCCESS)

    def failure(self, message: str, *, detail: str | None = None) -> Notification:
        return self.emit(message, Severity.FAILURE, detail=detail)

    def dismiss(self) -> None:
        self._current = None

    @property
    def current(self) -> Notification | None:
        """The visible notification, or ``None`` once dismissed or expired."""
        notification = self._current
        if notification is None:
            return None
        if is_expired(self._clock(), notification.visible_until):
            self._current = None
            return None
        return notification

    def remaining(self) -> float:
        """Seconds until the current notification hides itself (0 when none is visible)."""
        notification = self.current
        if notification is None:
            return 0.0
        return max(0.0, notification.visible_until - self._clock())

from __future__ import annotations

import pytest

from pyuserdesk.models.notification import Severity
from pyuserdesk.state.notifications import NotificationChannel


class _Clock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


def test_second_emission_replaces_first_and_both_expire() -> None:
    clock = _Clock()
    channel = NotificationChannel(duration=6.0, clock=clock)

    channel.emit("User created successfully", Severity.SUCCESS)
    clock.now += 0.5
    second = channel.emit("Failed to delete user", Severity.FAILURE)

    assert channel.current == second

    clock.now += 5.9
    assert channel.current == second

    clock.now += 0.2
    assert channel.current is None


def test_new_emission_restarts_timeout() -> None:
    clock = _Clock()
    channel = NotificationChannel(duration=6.0, clock=clock)

    channel.success("first")
    clock.now += 5.0
    channel.success("second")
    clock.now += 5.0

    current = channel.current
    assert current is not None
    assert current.message == "second"
    assert channel.remaining() == pytest.approx(1.0)


def test_dismiss_hides_immediately() -> None:
    clock = _Clock()
    channel = NotificationChannel(clock=clock)
    channel.failure("Failed to fetch users", detail="HTTP 503")

    channel.dismiss()

    assert channel.current is None
    assert channel.remaining() == 0.0


def test_failure_carries_detail_and_severity() -> None:
    channel = NotificationChannel(clock=_Clock())

    notification = channel.failure("Failed to update user", detail="HTTP 500 from PUT /users/1")

    assert notification.severity == Severity.FAILURE
    assert notification.detail == "HTTP 500 from PUT /users/1"
    assert notification.visible_until - notification.emitted_at == pytest.approx(6.0)


def test_severity_is_closed_set() -> None:
    channel = NotificationChannel(clock=_Clock())
    with pytest.raises(ValueError):
        channel.emit("hm", "warning")  # type: ignore[arg-type]

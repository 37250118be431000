from __future__ import annotations

import pytest

from pyuserdesk.config import UsersConfig
from pyuserdesk.exceptions import UsersConfigError


def test_defaults_match_reference_screen() -> None:
    config = UsersConfig()
    assert config.base_url == "https://jsonplaceholder.typicode.com"
    assert config.notification_duration == 6.0
    assert config.username_prefix == "USER-"
    assert config.min_length == 3


def test_from_env_reads_variables_and_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("USERS_BASE_URL", "http://localhost:8080/")
    monkeypatch.setenv("USERS_NOTIFICATION_DURATION", "2.5")
    monkeypatch.setenv("USERS_USERNAME_PREFIX", "U_")
    monkeypatch.setenv("USERS_MIN_LENGTH", "4")

    config = UsersConfig.from_env(username_prefix="ACME-")

    assert config.base_url == "http://localhost:8080"
    assert config.notification_duration == 2.5
    assert config.min_length == 4
    assert config.username_prefix == "ACME-"


def test_from_env_rejects_bad_numbers(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("USERS_NOTIFICATION_DURATION", "soon")
    with pytest.raises(UsersConfigError, match="USERS_NOTIFICATION_DURATION"):
        UsersConfig.from_env()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"base_url": ""},
        {"notification_duration": 0},
        {"min_length": -1},
    ],
)
def test_invalid_values_rejected(kwargs: dict[str, object]) -> None:
    with pytest.raises(UsersConfigError):
        UsersConfig(**kwargs)  # type: ignore[arg-type]

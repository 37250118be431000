"""Client configuration for pyuserdesk."""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Mapping
from typing import Any

from pyuserdesk._constants import (
    DEFAULT_BASE_URL,
    DEFAULT_MIN_LENGTH,
    DEFAULT_NOTIFICATION_DURATION,
    DEFAULT_USERNAME_PREFIX,
    USER_AGENT,
)
from pyuserdesk.exceptions import UsersConfigError


def _env_number(env: Mapping[str, str], key: str, kind: type) -> Any:
    raw = env.get(key)
    if raw is None:
        return None
    try:
        return kind(raw.strip())
    except ValueError as exc:
        raise UsersConfigError(f"{key} must be a {kind.__name__}, got {raw!r}") from exc


@dataclasses.dataclass(frozen=True)
class UsersConfig:
    """Client configuration.

    Parameters
    ----------
    base_url : str
        Root URL of the user service; ``/users`` is appended.
    notification_duration : float
        Seconds a notification stays visible unless dismissed earlier.
    username_prefix : str
        Prefix of the username derived from the display name.
    min_length : int
        Minimum length for name, username and company name.
    user_agent : str
        ``User-Agent`` header sent with every request.
    """

    base_url: str = DEFAULT_BASE_URL
    notification_duration: float = DEFAULT_NOTIFICATION_DURATION
    username_prefix: str = DEFAULT_USERNAME_PREFIX
    min_length: int = DEFAULT_MIN_LENGTH
    user_agent: str = USER_AGENT

    def __post_init__(self) -> None:
        if not self.base_url:
            raise UsersConfigError("base_url must be non-empty")
        if self.notification_duration <= 0:
            raise UsersConfigError("notification_duration must be positive")
        if self.min_length < 0:
            raise UsersConfigError("min_length must not be negative")
        # Endpoints are joined as base_url + "/users".
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @classmethod
    def from_env(cls, **overrides: Any) -> UsersConfig:
        """Create configuration from ``USERS_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        for env_key, field_name in {
            "USERS_BASE_URL": "base_url",
            "USERS_USERNAME_PREFIX": "username_prefix",
            "USERS_USER_AGENT": "user_agent",
        }.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        duration = _env_number(env, "USERS_NOTIFICATION_DURATION", float)
        if duration is not None:
            config_kwargs["notification_duration"] = duration

        min_length = _env_number(env, "USERS_MIN_LENGTH", int)
        if min_length is not None:
            config_kwargs["min_length"] = min_length

        config_kwargs.update(overrides)
        return cls(**config_kwargs)

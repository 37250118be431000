"""High-level async client for the remote user service."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from pyuserdesk._api import users as _users_api
from pyuserdesk._transport import JsonTransport, Transport
from pyuserdesk.config import UsersConfig
from pyuserdesk.exceptions import UsersError
from pyuserdesk.models.user import User

_logger = logging.getLogger(__name__)


class UserService(Protocol):
    """The create/read/update/delete surface the screen core depends on."""

    async def get_users(self) -> list[User]:
        ...

    async def create_user(self, payload: Mapping[str, Any]) -> User:
        ...

    async def update_user(self, user_id: int, payload: Mapping[str, Any]) -> User:
        ...

    async def delete_user(self, user_id: int) -> None:
        ...


class UsersClient:
    """Async client for the ``/users`` REST collection.

    Usage::

        async with UsersClient(UsersConfig()) as client:
            users = await client.get_users()
    """

    def __init__(
        self,
        config: UsersConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config or UsersConfig()
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = transport

    @property
    def config(self) -> UsersConfig:
        return self._config

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> UsersClient:
        if self._transport is not None:
            return self
        if self._http_session is None:
            # Calls are never timed out; only notifications expire.
            self._http_session = aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=None))
        self._transport = JsonTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
            self._transport = None

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise UsersError("Client not initialized. Use 'async with UsersClient(...) as client:'")
        return self._transport

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------

    async def get_users(self) -> list[User]:
        """Fetch the whole remote collection."""
        users = await _users_api.fetch_users(self._require_transport())
        _logger.debug("Fetched %d users", len(users))
        return users

    async def create_user(self, payload: Mapping[str, Any]) -> User:
        """Create a user; the returned record carries the service-assigned id."""
        return await _users_api.create_user(self._require_transport(), payload)

    async def update_user(self, user_id: int, payload: Mapping[str, Any]) -> User:
        """Replace user *user_id* with *payload*."""
        return await _users_api.update_user(self._require_transport(), user_id, payload)

    async def delete_user(self, user_id: int) -> None:
        """Delete user *user_id*."""
        await _users_api.delete_user(self._require_transport(), user_id)

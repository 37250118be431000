"""User collection endpoints.

Each function performs one request and turns the body into models. A
body the models cannot represent raises :class:`UsersApiError`; HTTP and
network failures surface from the transport as :class:`UsersTransportError`.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from pyuserdesk._constants import USERS_ENDPOINT
from pyuserdesk._transport import Transport
from pyuserdesk.exceptions import UsersApiError
from pyuserdesk.models.user import User


def _user_endpoint(user_id: int) -> str:
    return f"{USERS_ENDPOINT}/{user_id}"


def _parse_user(endpoint: str, item: Any, *, require_id: bool) -> User:
    if not isinstance(item, dict):
        raise UsersApiError(
            f"{endpoint} returned {type(item).__name__}, expected an object",
            endpoint=endpoint,
        )
    try:
        user = User.model_validate(item)
    except ValidationError as exc:
        raise UsersApiError(f"{endpoint} returned an invalid user: {exc}", endpoint=endpoint) from exc
    if require_id and user.id is None:
        raise UsersApiError(f"{endpoint} returned a user without id", endpoint=endpoint)
    return user


async def fetch_users(transport: Transport) -> list[User]:
    """``GET /users``: the full remote collection, in server order."""
    decoded = await transport.request("GET", USERS_ENDPOINT)
    if not isinstance(decoded, list):
        raise UsersApiError(
            f"{USERS_ENDPOINT} returned {type(decoded).__name__}, expected a list",
            endpoint=USERS_ENDPOINT,
        )
    return [_parse_user(USERS_ENDPOINT, item, require_id=True) for item in decoded]


async def create_user(transport: Transport, payload: Mapping[str, Any]) -> User:
    """``POST /users``: the created user with its server-assigned id."""
    body = {k: v for k, v in payload.items() if k != "id"}
    decoded = await transport.request("POST", USERS_ENDPOINT, body)
    return _parse_user(USERS_ENDPOINT, decoded, require_id=True)


async def update_user(transport: Transport, user_id: int, payload: Mapping[str, Any]) -> User:
    """``PUT /users/{id}``: the updated user as the service now holds it."""
    endpoint = _user_endpoint(user_id)
    body = {**payload, "id": user_id}
    decoded = await transport.request("PUT", endpoint, body)
    return _parse_user(endpoint, decoded, require_id=True)


async def delete_user(transport: Transport, user_id: int) -> None:
    """``DELETE /users/{id}``; any response body is ignored."""
    await transport.request("DELETE", _user_endpoint(user_id))

"""JSON-over-HTTP transport for the user service."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from pyuserdesk._constants import JSON_CONTENT_TYPE
from pyuserdesk._redact import redact_for_log
from pyuserdesk.config import UsersConfig
from pyuserdesk.exceptions import UsersTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """What the `_api` functions need: one JSON request, one decoded answer.

    Implementations raise `UsersTransportError` for anything that is not a
    usable 2xx response.
    """

    async def request(
        self,
        method: str,
        endpoint: str,
        payload: Mapping[str, Any] | None = None,
    ) -> Any:
        ...


class JsonTransport:
    """HTTP transport that sends and receives JSON bodies."""

    def __init__(
        self,
        config: UsersConfig,
        http_session: aiohttp.ClientSession,
    ) -> None:
        self._config = config
        self._http = http_session

    async def request(
        self,
        method: str,
        endpoint: str,
        payload: Mapping[str, Any] | None = None,
    ) -> Any:
        """Send *payload* as JSON and return the decoded response body.

        Returns ``None`` for an empty body (``DELETE`` answers may have none).
        """
        headers: dict[str, str] = {
            "accept": "application/json",
            "user-agent": self._config.user_agent,
        }
        body: str | None = None
        if payload is not None:
            headers["content-type"] = JSON_CONTENT_TYPE
            body = json.dumps(payload)

        url = f"{self._config.base_url}{endpoint}"
        _logger.debug("%s %s %s", method, url, redact_for_log(payload))

        try:
            async with self._http.request(method, url, data=body, headers=headers) as resp:
                raw = await resp.read()
                if not 200 <= resp.status < 300:
                    snippet = raw[:200].decode("utf-8", errors="replace")
                    raise UsersTransportError(
                        f"HTTP {resp.status} from {method} {endpoint}: {snippet}",
                        status_code=resp.status,
                        endpoint=endpoint,
                    )
        except UsersTransportError:
            raise
        except aiohttp.ClientError as exc:
            raise UsersTransportError(
                f"{method} {endpoint} failed: {exc}",
                endpoint=endpoint,
            ) from exc

        if not raw.strip():
            return None

        try:
            result = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            snippet = raw[:200].decode("utf-8", errors="replace")
            raise UsersTransportError(
                f"Invalid JSON from {method} {endpoint}: {snippet}",
                endpoint=endpoint,
            ) from exc

        _logger.debug("%s %s -> %s", method, url, redact_for_log(result))
        return result

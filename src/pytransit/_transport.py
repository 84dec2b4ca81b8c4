"""JSON-over-HTTP transport for the transit-data provider."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from pytransit._constants import USER_AGENT
from pytransit.exceptions import TransitTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by the client.

    Having a protocol here makes it easy to pass test doubles while keeping
    the production implementation (`HttpTransport`) concrete.
    """

    async def get_json(self, url: str) -> Any: ...

    async def post_json(self, url: str, payload: Mapping[str, Any]) -> Any: ...


class HttpTransport:
    """aiohttp transport returning decoded JSON bodies."""

    def __init__(self, http_session: aiohttp.ClientSession, *, timeout: float = 30.0) -> None:
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    async def get_json(self, url: str) -> Any:
        return await self._request("GET", url)

    async def post_json(self, url: str, payload: Mapping[str, Any]) -> Any:
        return await self._request("POST", url, payload)

    async def _request(self, method: str, url: str, payload: Mapping[str, Any] | None = None) -> Any:
        headers = {
            "accept": "application/json",
            "user-agent": USER_AGENT,
        }
        _logger.debug("%s %s", method, url)

        try:
            async with self._http.request(
                method,
                url,
                json=dict(payload) if payload is not None else None,
                headers=headers,
                timeout=self._timeout,
            ) as resp:
                text = await resp.text()
                if resp.status != 200:
                    raise TransitTransportError(
                        f"HTTP {resp.status} from {url}: {text[:200]}",
                        status_code=resp.status,
                        endpoint=url,
                    )
        except TransitTransportError:
            raise
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise TransitTransportError(
                f"Request to {url} failed: {exc}",
                endpoint=url,
            ) from exc

        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise TransitTransportError(
                f"Invalid JSON from {url}: {text[:200]}",
                endpoint=url,
            ) from exc

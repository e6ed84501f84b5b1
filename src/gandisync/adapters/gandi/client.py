"""HTTP client for the Gandi v5 API."""

from __future__ import annotations

import asyncio
import json
from logging import getLogger
from typing import TYPE_CHECKING
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from gandisync.adapters.http_resilience import ResilientClient
from gandisync.domain.ports.gateway import GatewayError, GatewayPayloadError

from .schema import ErrorResponse

if TYPE_CHECKING:
    from collections.abc import Callable

    from gandisync.config.gandi import GandiConfig
    from gandisync.config.http_resilience import ResilienceConfig

log = getLogger(__name__)

JsonPayload = dict[str, object] | list[object]


def path_segment(value: str) -> str:
    """Quote one URL path segment, keeping the characters DNS names use."""

    return quote(value, safe="@*_-.")


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return response.text or response.reason_phrase
    if not isinstance(payload, dict):
        return response.reason_phrase
    try:
        return ErrorResponse.model_validate(payload).describe()
    except ValidationError:
        return response.reason_phrase


class GandiClient:
    """Low-level client: one blocking call per remote operation.

    Non-2xx responses become ``GatewayError`` carrying the status code; transport
    failures become ``GatewayError`` without one.
    """

    def __init__(
        self,
        *,
        config: GandiConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient

    def call(
        self,
        method: str,
        path: str,
        *,
        body: JsonPayload | None = None,
        params: dict[str, str] | None = None,
    ) -> JsonPayload | None:
        """Perform one request and return its decoded JSON body, if any."""

        return asyncio.run(self._call_async(method, path, body=body, params=params))

    async def _call_async(
        self,
        method: str,
        path: str,
        *,
        body: JsonPayload | None,
        params: dict[str, str] | None,
    ) -> JsonPayload | None:
        query = dict(params or {})
        if self._config.sharing_id:
            query["sharing_id"] = self._config.sharing_id
        headers = {"Authorization": self._config.authorization}
        if self._config.dry_run:
            headers["Dry-Run"] = "1"

        url = f"{self._config.base_url}{path}"
        log.debug("%s %s", method, url)
        async with self._client_factory(self._resilience) as client:
            try:
                response = await client.request(
                    method,
                    url,
                    json=body,
                    params=query or None,
                    headers=headers,
                )
            except httpx.HTTPError as exc:
                raise GatewayError(f"{method} {path} failed: {exc}") from exc

        return self._decode(method, path, response)

    def _decode(self, method: str, path: str, response: httpx.Response) -> JsonPayload | None:
        if not response.is_success:
            message = _error_message(response)
            log.debug("%s %s -> %s: %s", method, path, response.status_code, message)
            raise GatewayError(message, status_code=response.status_code)

        if not response.content:
            return None
        try:
            payload = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise GatewayPayloadError(
                f"{method} {path} returned a non-JSON body", status_code=response.status_code
            ) from exc
        if not isinstance(payload, (dict, list)):
            raise GatewayPayloadError(
                f"{method} {path} returned an unexpected payload",
                status_code=response.status_code,
            )
        return payload

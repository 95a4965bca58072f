"""HTTP transport for the Discord REST API."""

from __future__ import annotations

from typing import Any

import httpx

from discord_adapter.config import DiscordConfig
from discord_adapter.errors import DiscordAPIError, DiscordConnectionError
from discord_adapter.utils.logging import get_logger

log = get_logger(__name__)


class HTTPClient:
    """Thin wrapper over ``httpx.AsyncClient``: one call, one decoded body."""

    def __init__(
        self,
        config: DiscordConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        headers = {"User-Agent": config.user_agent}
        if config.token:
            headers["Authorization"] = f"Bot {config.token}"
        self._client = httpx.AsyncClient(
            base_url=config.base_url,
            headers=headers,
            timeout=config.timeout,
            transport=transport,
        )

    async def __aenter__(self) -> HTTPClient:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
        route: str = "",
        expect_json: bool = False,
    ) -> Any:
        """Send a request and return the decoded JSON body (``None`` if empty).

        ``route`` is the unfilled path template; it is what gets logged so
        webhook tokens never reach the logs. With ``expect_json`` a non-empty
        2xx body that is not a JSON object or array raises DiscordAPIError.
        """
        route = route or path
        log.debug("http_request", method=method, route=route, params=params)
        try:
            resp = await self._client.request(method, path, json=json, params=params)
        except httpx.TransportError as e:
            log.error("http_transport_error", method=method, route=route, error=str(e))
            raise DiscordConnectionError(f"{method} {route}: {e}") from e

        body = _decode_body(resp)
        if resp.is_success:
            if expect_json and body is not None and not isinstance(body, (dict, list)):
                log.warning(
                    "http_unexpected_body",
                    method=method,
                    route=route,
                    status=resp.status_code,
                    content_type=resp.headers.get("content-type", ""),
                )
                raise DiscordAPIError(resp.status_code, "unexpected non-JSON response")
            return body

        log.warning(
            "http_api_error",
            method=method,
            route=route,
            status=resp.status_code,
        )
        raise DiscordAPIError.from_response(
            resp.status_code, body, resp.reason_phrase, headers=resp.headers
        )


def _decode_body(resp: httpx.Response) -> Any:
    if resp.status_code == 204 or not resp.content:
        return None
    if "application/json" not in resp.headers.get("content-type", ""):
        return resp.text
    return resp.json()

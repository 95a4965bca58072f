"""Test fixtures for discord-adapter."""

from __future__ import annotations

import json
from typing import Any, AsyncIterator

import httpx
import pytest

from discord_adapter.config import DiscordConfig
from discord_adapter.core.http import HTTPClient
from discord_adapter.core.internal import Internal
import discord_adapter.types  # noqa: F401  (registers webhook routes)


class MockDiscord:
    """Records outgoing requests and replays queued responses."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._responses: list[httpx.Response] = []

    def queue(self, status: int = 200, json: Any = None, headers: dict[str, str] | None = None) -> None:
        if json is None:
            self._responses.append(httpx.Response(status, headers=headers))
        else:
            self._responses.append(httpx.Response(status, json=json, headers=headers))

    def queue_raw(self, status: int, text: str, headers: dict[str, str]) -> None:
        self._responses.append(httpx.Response(status, text=text, headers=headers))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self._responses:
            return self._responses.pop(0)
        return httpx.Response(204)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


@pytest.fixture
def discord() -> MockDiscord:
    return MockDiscord()


@pytest.fixture
def config() -> DiscordConfig:
    return DiscordConfig(token="bot-token-123")


@pytest.fixture
async def http(discord: MockDiscord, config: DiscordConfig) -> AsyncIterator[HTTPClient]:
    client = HTTPClient(config, transport=discord.transport)
    yield client
    await client.close()


@pytest.fixture
def api(http: HTTPClient) -> Internal:
    return Internal(http)

"""Exceptions raised by the HTTP layer."""

from __future__ import annotations

from typing import Any, Mapping


class DiscordError(Exception):
    """Base class for every error raised by discord-adapter."""


class DiscordConnectionError(DiscordError):
    """The request never produced an HTTP response."""


class DiscordAPIError(DiscordError):
    """Discord answered with a non-2xx status.

    ``code`` is Discord's JSON error code (0 when the body had none), and
    ``errors`` holds the nested per-field validation errors when present.
    ``retry_after`` is only set on 429 responses.
    """

    def __init__(
        self,
        status: int,
        message: str,
        *,
        code: int = 0,
        errors: dict[str, Any] | None = None,
        retry_after: float | None = None,
    ) -> None:
        self.status = status
        self.code = code
        self.message = message
        self.errors = errors or {}
        self.retry_after = retry_after
        super().__init__(f"{status} (code {code}): {message}")

    @classmethod
    def from_response(
        cls,
        status: int,
        body: Any,
        reason: str = "",
        headers: Mapping[str, str] | None = None,
    ) -> DiscordAPIError:
        retry_after = _retry_after(body, headers or {})
        if not isinstance(body, dict):
            return cls(status, reason or "Unknown error", retry_after=retry_after)
        return cls(
            status,
            body.get("message", reason or "Unknown error"),
            code=body.get("code", 0),
            errors=body.get("errors"),
            retry_after=retry_after,
        )

    @property
    def is_rate_limited(self) -> bool:
        return self.status == 429


def _retry_after(body: Any, headers: Mapping[str, str]) -> float | None:
    # Cloudflare-level limits only send the header, with an HTML body
    value = body.get("retry_after") if isinstance(body, dict) else None
    if value is None:
        value = headers.get("Retry-After")
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None

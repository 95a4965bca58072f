"""Shared primitives for API data shapes."""

from __future__ import annotations

import base64
from dataclasses import fields
from typing import Any, Final

# 64-bit ids travel as decimal strings in JSON
Snowflake = str


class _Unset:
    """Marks a request field the caller did not supply.

    ``None`` is a real value for Discord (it serializes to ``null`` and
    clears the field); ``UNSET`` fields are left out of the body.
    """

    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Final[Any] = _Unset()


def prune(data: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in data.items() if value is not UNSET}


def known_fields(cls: type, data: dict[str, Any]) -> dict[str, Any]:
    """Keep only the keys of ``data`` that ``cls`` declares as fields."""
    names = {f.name for f in fields(cls)}
    return {key: value for key, value in data.items() if key in names}


def compact(obj: Any) -> dict[str, Any]:
    """Shallow field dict of a response dataclass, without None values."""
    return {f.name: getattr(obj, f.name) for f in fields(obj) if getattr(obj, f.name) is not None}


_IMAGE_SIGNATURES: list[tuple[bytes, str]] = [
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
]


def make_image_data(raw: bytes) -> str:
    """Encode image bytes as the ``data:`` URI Discord expects for avatars."""
    mime = None
    for signature, candidate in _IMAGE_SIGNATURES:
        if raw.startswith(signature):
            mime = candidate
            break
    if mime is None and raw[:4] == b"RIFF" and raw[8:12] == b"WEBP":
        mime = "image/webp"
    if mime is None:
        raise ValueError("unsupported image format (expected PNG, JPEG, GIF or WEBP)")
    return f"data:{mime};base64,{base64.b64encode(raw).decode('ascii')}"

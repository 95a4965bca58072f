"""User object."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from discord_adapter.types.base import Snowflake, compact, known_fields


@dataclass
class User:
    id: Snowflake
    username: str = ""
    discriminator: str = "0"
    global_name: str | None = None
    avatar: str | None = None
    bot: bool | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> User:
        return cls(**known_fields(cls, data))

    def to_dict(self) -> dict[str, Any]:
        return compact(self)

    @property
    def display_name(self) -> str:
        return self.global_name or self.username

"""Partial guild snapshot, as embedded in other objects."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from discord_adapter.types.base import Snowflake, compact, known_fields


@dataclass
class Guild:
    # Every field is optional: follower webhooks only carry id, name and icon
    id: Snowflake | None = None
    name: str | None = None
    icon: str | None = None
    owner_id: Snowflake | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Guild:
        return cls(**known_fields(cls, data))

    def to_dict(self) -> dict[str, Any]:
        return compact(self)

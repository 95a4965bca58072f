"""Partial channel snapshot, as embedded in other objects."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any

from discord_adapter.types.base import Snowflake, compact, known_fields


class ChannelType(IntEnum):
    GUILD_TEXT = 0
    DM = 1
    GUILD_VOICE = 2
    GROUP_DM = 3
    GUILD_CATEGORY = 4
    GUILD_ANNOUNCEMENT = 5
    ANNOUNCEMENT_THREAD = 10
    PUBLIC_THREAD = 11
    PRIVATE_THREAD = 12
    GUILD_STAGE_VOICE = 13
    GUILD_DIRECTORY = 14
    GUILD_FORUM = 15
    GUILD_MEDIA = 16


@dataclass
class Channel:
    id: Snowflake | None = None
    type: int | None = None
    guild_id: Snowflake | None = None
    name: str | None = None
    parent_id: Snowflake | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Channel:
        return cls(**known_fields(cls, data))

    def to_dict(self) -> dict[str, Any]:
        return compact(self)

    @property
    def channel_type(self) -> ChannelType | None:
        if self.type is None:
            return None
        try:
            return ChannelType(self.type)
        except ValueError:
            return None

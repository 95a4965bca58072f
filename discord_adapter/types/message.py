"""Message object, as returned by webhook message operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from discord_adapter.types.base import Snowflake, compact, known_fields
from discord_adapter.types.user import User


@dataclass
class Message:
    id: Snowflake
    channel_id: Snowflake
    content: str = ""
    timestamp: str | None = None
    edited_timestamp: str | None = None
    author: User | None = None
    webhook_id: Snowflake | None = None
    tts: bool = False
    embeds: list[dict[str, Any]] = field(default_factory=list)
    attachments: list[dict[str, Any]] = field(default_factory=list)
    flags: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Message:
        kwargs = known_fields(cls, data)
        if kwargs.get("author") is not None:
            kwargs["author"] = User.from_dict(kwargs["author"])
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        data = compact(self)
        if self.author is not None:
            data["author"] = self.author.to_dict()
        return data

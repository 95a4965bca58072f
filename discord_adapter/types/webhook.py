"""Webhook resource: data shapes, gateway event and REST route bindings.

https://discord.com/developers/docs/resources/webhook
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any

from discord_adapter.core.bus import register_gateway_event
from discord_adapter.core.internal import Internal
from discord_adapter.types.base import UNSET, Snowflake, compact, known_fields, prune
from discord_adapter.types.channel import Channel
from discord_adapter.types.guild import Guild
from discord_adapter.types.message import Message
from discord_adapter.types.user import User


class WebhookType(IntEnum):
    # Post messages to channels with a generated token
    INCOMING = 1
    # Internal webhooks used by Channel Following to crosspost into channels
    CHANNEL_FOLLOWER = 2
    # Used with Interactions
    APPLICATION = 3


@dataclass
class Webhook:
    """A webhook as returned by the API.

    ``token`` is only returned for incoming webhooks, ``url`` only by the
    OAuth2 ``webhook.incoming`` flow, and ``user`` is omitted when the
    webhook was fetched with its token. ``source_guild`` and
    ``source_channel`` are partial snapshots set on channel follower
    webhooks.
    """

    id: Snowflake
    type: int
    guild_id: Snowflake | None = None
    channel_id: Snowflake | None = None
    user: User | None = None
    name: str | None = None
    avatar: str | None = None
    token: str | None = None
    application_id: Snowflake | None = None
    source_guild: Guild | None = None
    source_channel: Channel | None = None
    url: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Webhook:
        kwargs = known_fields(cls, data)
        if kwargs.get("user") is not None:
            kwargs["user"] = User.from_dict(kwargs["user"])
        if kwargs.get("source_guild") is not None:
            kwargs["source_guild"] = Guild.from_dict(kwargs["source_guild"])
        if kwargs.get("source_channel") is not None:
            kwargs["source_channel"] = Channel.from_dict(kwargs["source_channel"])
        return cls(**kwargs)

    @classmethod
    def from_list(cls, data: list[dict[str, Any]]) -> list[Webhook]:
        return [cls.from_dict(item) for item in data]

    def to_dict(self) -> dict[str, Any]:
        data = compact(self)
        for key in ("user", "source_guild", "source_channel"):
            if key in data:
                data[key] = data[key].to_dict()
        return data

    @property
    def webhook_type(self) -> WebhookType | None:
        """The typed category, or None for a value outside the known set."""
        try:
            return WebhookType(self.type)
        except ValueError:
            return None

    @property
    def is_incoming(self) -> bool:
        return self.type == WebhookType.INCOMING


# ---------------------------------------------------------------------------
# Gateway event
# ---------------------------------------------------------------------------

@dataclass
class WebhooksUpdateEvent:
    """Sent when a guild channel's webhook is created, updated, or deleted."""

    guild_id: Snowflake
    channel_id: Snowflake

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WebhooksUpdateEvent:
        return cls(**known_fields(cls, data))


register_gateway_event("WEBHOOKS_UPDATE", WebhooksUpdateEvent)


# ---------------------------------------------------------------------------
# Request parameters
# ---------------------------------------------------------------------------

@dataclass
class CreateWebhookParams:
    name: str
    # image data URI, see make_image_data()
    avatar: str | None = UNSET

    def to_dict(self) -> dict[str, Any]:
        return prune({"name": self.name, "avatar": self.avatar})


@dataclass
class ModifyWebhookParams:
    name: str = UNSET
    # image data URI; None removes the avatar
    avatar: str | None = UNSET
    channel_id: Snowflake = UNSET

    def to_dict(self) -> dict[str, Any]:
        return prune({
            "name": self.name,
            "avatar": self.avatar,
            "channel_id": self.channel_id,
        })


@dataclass
class ExecuteWebhookParams:
    content: str = UNSET
    username: str = UNSET
    avatar_url: str = UNSET
    tts: bool = UNSET
    embeds: list[dict[str, Any]] = UNSET
    allowed_mentions: dict[str, Any] = UNSET
    flags: int = UNSET
    thread_name: str = UNSET

    def to_dict(self) -> dict[str, Any]:
        data = prune({
            "content": self.content,
            "username": self.username,
            "avatar_url": self.avatar_url,
            "tts": self.tts,
            "embeds": self.embeds,
            "allowed_mentions": self.allowed_mentions,
            "flags": self.flags,
            "thread_name": self.thread_name,
        })
        if not any(data.get(key) for key in ("content", "embeds")):
            raise ValueError("webhook message needs content or embeds")
        return data


@dataclass
class ExecuteWebhookQuery:
    # Without wait=True Discord answers 204 and no message is returned
    wait: bool | None = None
    thread_id: Snowflake | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"wait": self.wait, "thread_id": self.thread_id}


@dataclass
class EditWebhookMessageParams:
    content: str | None = UNSET
    embeds: list[dict[str, Any]] | None = UNSET
    allowed_mentions: dict[str, Any] | None = UNSET

    def to_dict(self) -> dict[str, Any]:
        return prune({
            "content": self.content,
            "embeds": self.embeds,
            "allowed_mentions": self.allowed_mentions,
        })


@dataclass
class WebhookMessageQuery:
    thread_id: Snowflake | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"thread_id": self.thread_id}


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

WEBHOOK_ROUTES: dict[str, dict[str, str]] = {
    "/channels/{channel.id}/webhooks": {
        "POST": "create_webhook",
        "GET": "get_channel_webhooks",
    },
    "/guilds/{guild.id}/webhooks": {
        "GET": "get_guild_webhooks",
    },
    "/webhooks/{webhook.id}": {
        "GET": "get_webhook",
        "PATCH": "modify_webhook",
        "DELETE": "delete_webhook",
    },
    "/webhooks/{webhook.id}/{webhook.token}": {
        "GET": "get_webhook_with_token",
        "PATCH": "modify_webhook_with_token",
        "DELETE": "delete_webhook_with_token",
        "POST": "execute_webhook",
    },
    "/webhooks/{webhook.id}/{webhook.token}/slack": {
        "POST": "execute_slack_compatible_webhook",
    },
    "/webhooks/{webhook.id}/{webhook.token}/github": {
        "POST": "execute_github_compatible_webhook",
    },
    "/webhooks/{webhook.id}/{webhook.token}/messages/{message.id}": {
        "GET": "get_webhook_message",
        "PATCH": "edit_webhook_message",
        "DELETE": "delete_webhook_message",
    },
}

WEBHOOK_RESULTS = {
    "create_webhook": Webhook.from_dict,
    "get_channel_webhooks": Webhook.from_list,
    "get_guild_webhooks": Webhook.from_list,
    "get_webhook": Webhook.from_dict,
    "modify_webhook": Webhook.from_dict,
    "get_webhook_with_token": Webhook.from_dict,
    "modify_webhook_with_token": Webhook.from_dict,
    "execute_webhook": Message.from_dict,
    "get_webhook_message": Message.from_dict,
    "edit_webhook_message": Message.from_dict,
}

Internal.define(WEBHOOK_ROUTES, results=WEBHOOK_RESULTS)

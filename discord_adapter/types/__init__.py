"""API data shapes. Importing a resource module registers its routes."""

from discord_adapter.types.base import UNSET, Snowflake, make_image_data
from discord_adapter.types.channel import Channel, ChannelType
from discord_adapter.types.guild import Guild
from discord_adapter.types.message import Message
from discord_adapter.types.user import User
from discord_adapter.types.webhook import (
    CreateWebhookParams,
    EditWebhookMessageParams,
    ExecuteWebhookParams,
    ExecuteWebhookQuery,
    ModifyWebhookParams,
    Webhook,
    WebhookMessageQuery,
    WebhooksUpdateEvent,
    WebhookType,
)

__all__ = [
    "UNSET",
    "Snowflake",
    "make_image_data",
    "Channel",
    "ChannelType",
    "Guild",
    "Message",
    "User",
    "CreateWebhookParams",
    "EditWebhookMessageParams",
    "ExecuteWebhookParams",
    "ExecuteWebhookQuery",
    "ModifyWebhookParams",
    "Webhook",
    "WebhookMessageQuery",
    "WebhooksUpdateEvent",
    "WebhookType",
]

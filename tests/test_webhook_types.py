"""Tests for webhook data shapes and request parameters."""

import base64

import pytest

from discord_adapter.core.bus import gateway_event_type, parse_dispatch
from discord_adapter.types import (
    UNSET,
    Channel,
    CreateWebhookParams,
    EditWebhookMessageParams,
    ExecuteWebhookParams,
    ExecuteWebhookQuery,
    Guild,
    Message,
    ModifyWebhookParams,
    User,
    Webhook,
    WebhooksUpdateEvent,
    WebhookType,
    make_image_data,
)
from tests.payloads import FOLLOWER_PAYLOAD, MESSAGE_PAYLOAD, WEBHOOK_PAYLOAD


# ---------------------------------------------------------------------------
# WebhookType
# ---------------------------------------------------------------------------

class TestWebhookType:
    def test_values(self):
        assert WebhookType.INCOMING == 1
        assert WebhookType.CHANNEL_FOLLOWER == 2
        assert WebhookType.APPLICATION == 3

    def test_closed_set(self):
        assert len(WebhookType) == 3
        with pytest.raises(ValueError):
            WebhookType(4)


# ---------------------------------------------------------------------------
# Webhook
# ---------------------------------------------------------------------------

class TestWebhook:
    def test_incoming_from_dict(self):
        webhook = Webhook.from_dict(WEBHOOK_PAYLOAD)
        assert webhook.id == "223704706495545344"
        assert webhook.webhook_type is WebhookType.INCOMING
        assert webhook.is_incoming
        assert webhook.token == WEBHOOK_PAYLOAD["token"]
        assert isinstance(webhook.user, User)
        assert webhook.user.display_name == "Mason"
        assert webhook.url is None
        assert webhook.source_guild is None

    def test_follower_snapshots_are_partial(self):
        webhook = Webhook.from_dict(FOLLOWER_PAYLOAD)
        assert webhook.webhook_type is WebhookType.CHANNEL_FOLLOWER
        assert not webhook.is_incoming
        assert webhook.token is None
        assert webhook.source_guild == Guild(id="5678", name="Source guild", icon="a_1234")
        assert isinstance(webhook.source_channel, Channel)
        assert webhook.source_channel.name == "announcements"
        assert webhook.source_channel.type is None
        assert webhook.source_channel.channel_type is None

    def test_minimal_payload(self):
        webhook = Webhook.from_dict({"id": "1", "type": 3})
        assert webhook.webhook_type is WebhookType.APPLICATION
        assert webhook.guild_id is None
        assert webhook.user is None
        assert webhook.to_dict() == {"id": "1", "type": 3}

    def test_unknown_keys_ignored(self):
        webhook = Webhook.from_dict({"id": "1", "type": 1, "brand_new_field": True})
        assert not hasattr(webhook, "brand_new_field")

    def test_unknown_type_value(self):
        webhook = Webhook.from_dict({"id": "1", "type": 9})
        assert webhook.type == 9
        assert webhook.webhook_type is None

    def test_oauth2_url(self):
        url = "https://discord.com/api/webhooks/1/abc"
        webhook = Webhook.from_dict({"id": "1", "type": 1, "token": "abc", "url": url})
        assert webhook.url == url

    def test_to_dict_nests_sub_objects(self):
        data = Webhook.from_dict(FOLLOWER_PAYLOAD).to_dict()
        assert data["source_guild"] == {"id": "5678", "name": "Source guild", "icon": "a_1234"}
        assert data["source_channel"] == {"id": "1234", "name": "announcements"}
        assert data["user"]["username"] == "mason"
        assert "token" not in data

    def test_from_list(self):
        webhooks = Webhook.from_list([WEBHOOK_PAYLOAD, FOLLOWER_PAYLOAD])
        assert [w.type for w in webhooks] == [1, 2]


class TestMessage:
    def test_from_dict(self):
        message = Message.from_dict(MESSAGE_PAYLOAD)
        assert message.id == "334385199974967042"
        assert message.webhook_id == "223704706495545344"
        assert message.author.username == "test webhook"
        assert message.embeds == []

    def test_to_dict_skips_none(self):
        data = Message.from_dict(MESSAGE_PAYLOAD).to_dict()
        assert "edited_timestamp" not in data
        assert data["author"]["id"] == "223704706495545344"


# ---------------------------------------------------------------------------
# Gateway event
# ---------------------------------------------------------------------------

class TestWebhooksUpdateEvent:
    def test_registered(self):
        assert gateway_event_type("WEBHOOKS_UPDATE") is WebhooksUpdateEvent

    def test_parse_dispatch(self):
        event = parse_dispatch({
            "op": 0,
            "t": "WEBHOOKS_UPDATE",
            "s": 42,
            "d": {"guild_id": "10", "channel_id": "20"},
        })
        assert event.name == "WEBHOOKS_UPDATE"
        assert event.sequence == 42
        assert event.payload == WebhooksUpdateEvent(guild_id="10", channel_id="20")


# ---------------------------------------------------------------------------
# Params
# ---------------------------------------------------------------------------

class TestModifyWebhookParams:
    def test_empty(self):
        assert ModifyWebhookParams().to_dict() == {}

    def test_subset(self):
        params = ModifyWebhookParams(name="renamed", channel_id="99")
        assert params.to_dict() == {"name": "renamed", "channel_id": "99"}

    def test_none_avatar_is_sent_as_null(self):
        assert ModifyWebhookParams(avatar=None).to_dict() == {"avatar": None}


class TestCreateWebhookParams:
    def test_name_only(self):
        assert CreateWebhookParams(name="hook").to_dict() == {"name": "hook"}


class TestExecuteWebhookParams:
    def test_content(self):
        params = ExecuteWebhookParams(content="hi", username="bot")
        assert params.to_dict() == {"content": "hi", "username": "bot"}

    def test_embeds_only(self):
        params = ExecuteWebhookParams(embeds=[{"title": "t"}])
        assert params.to_dict() == {"embeds": [{"title": "t"}]}

    def test_requires_content_or_embeds(self):
        with pytest.raises(ValueError):
            ExecuteWebhookParams(username="bot").to_dict()

    def test_query_defaults(self):
        assert ExecuteWebhookQuery().to_dict() == {"wait": None, "thread_id": None}


class TestEditWebhookMessageParams:
    def test_clear_embeds(self):
        params = EditWebhookMessageParams(embeds=None)
        assert params.to_dict() == {"embeds": None}


class TestUnset:
    def test_falsy_singleton(self):
        assert not UNSET
        assert repr(UNSET) == "UNSET"
        assert type(UNSET)() is UNSET


class TestMakeImageData:
    def test_png(self):
        raw = b"\x89PNG\r\n\x1a\n" + b"\x00" * 8
        uri = make_image_data(raw)
        assert uri.startswith("data:image/png;base64,")
        assert base64.b64decode(uri.split(",", 1)[1]) == raw

    def test_jpeg(self):
        assert make_image_data(b"\xff\xd8\xff\xe0rest").startswith("data:image/jpeg;")

    def test_gif(self):
        assert make_image_data(b"GIF89a....").startswith("data:image/gif;")

    def test_webp(self):
        raw = b"RIFF\x00\x00\x00\x00WEBPVP8 "
        assert make_image_data(raw).startswith("data:image/webp;")

    def test_unknown_format(self):
        with pytest.raises(ValueError):
            make_image_data(b"not an image")

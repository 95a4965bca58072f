"""Command line entry point for the webhook bindings."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any, Awaitable, Callable

import click

from discord_adapter.config import Settings, load_settings
from discord_adapter.core.http import HTTPClient
from discord_adapter.core.internal import Internal
from discord_adapter.errors import DiscordError
from discord_adapter.types import (
    UNSET,
    CreateWebhookParams,
    EditWebhookMessageParams,
    ExecuteWebhookParams,
    ExecuteWebhookQuery,
    ModifyWebhookParams,
    WebhookMessageQuery,
    make_image_data,
)
from discord_adapter.utils.logging import get_logger, setup_logging

log = get_logger(__name__)

Operation = Callable[[Internal], Awaitable[Any]]


def create_client(settings: Settings) -> HTTPClient:
    return HTTPClient(settings.discord)


def _run(settings: Settings, operation: Operation) -> None:
    async def runner() -> Any:
        async with create_client(settings) as http:
            return await operation(Internal(http))

    try:
        result = asyncio.run(runner())
    except DiscordError as e:
        log.error("command_failed", error=str(e))
        raise click.ClickException(str(e)) from e

    if result is None:
        return
    if isinstance(result, list):
        data: Any = [_plain(item) for item in result]
    else:
        data = _plain(result)
    click.echo(json.dumps(data, indent=2))


def _plain(value: Any) -> Any:
    return value.to_dict() if hasattr(value, "to_dict") else value


def _read_avatar(path: str | None) -> Any:
    if path is None:
        return UNSET
    try:
        return make_image_data(Path(path).read_bytes())
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--avatar") from e


@click.group()
@click.option("--config", "config_path", default=None, help="Path to config YAML file")
@click.option("--log-level", default=None, help="Log level (DEBUG, INFO, WARNING, ERROR)")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, log_level: str | None) -> None:
    """Talk to the Discord HTTP API."""
    settings = load_settings(config_path)
    if log_level:
        settings.log_level = log_level
    setup_logging(level=settings.log_level, json_output=settings.log_json)
    ctx.obj = settings


@cli.group()
def webhook() -> None:
    """Create, inspect and execute webhooks."""


@webhook.command("list")
@click.option("--channel", "channel_id", default=None, help="List webhooks of a channel")
@click.option("--guild", "guild_id", default=None, help="List webhooks of a guild")
@click.pass_obj
def list_webhooks(settings: Settings, channel_id: str | None, guild_id: str | None) -> None:
    """List the webhooks of a channel or a guild."""
    if (channel_id is None) == (guild_id is None):
        raise click.UsageError("pass exactly one of --channel or --guild")
    if channel_id is not None:
        _run(settings, lambda api: api.get_channel_webhooks(channel_id))
    else:
        _run(settings, lambda api: api.get_guild_webhooks(guild_id))


@webhook.command("get")
@click.argument("webhook_id")
@click.option("--token", default=None, help="Webhook token (skips bot authentication)")
@click.pass_obj
def get_webhook(settings: Settings, webhook_id: str, token: str | None) -> None:
    """Show a single webhook."""
    if token:
        _run(settings, lambda api: api.get_webhook_with_token(webhook_id, token))
    else:
        _run(settings, lambda api: api.get_webhook(webhook_id))


@webhook.command("create")
@click.argument("channel_id")
@click.argument("name")
@click.option("--avatar", type=click.Path(exists=True, dir_okay=False), default=None)
@click.pass_obj
def create_webhook(settings: Settings, channel_id: str, name: str, avatar: str | None) -> None:
    """Create an incoming webhook in a channel."""
    params = CreateWebhookParams(name=name, avatar=_read_avatar(avatar))
    _run(settings, lambda api: api.create_webhook(channel_id, params))


@webhook.command("modify")
@click.argument("webhook_id")
@click.option("--token", default=None, help="Webhook token (skips bot authentication)")
@click.option("--name", default=None)
@click.option("--avatar", type=click.Path(exists=True, dir_okay=False), default=None)
@click.option("--remove-avatar", is_flag=True, help="Reset to the default avatar")
@click.option("--channel", "channel_id", default=None, help="Move the webhook to this channel")
@click.pass_obj
def modify_webhook(
    settings: Settings,
    webhook_id: str,
    token: str | None,
    name: str | None,
    avatar: str | None,
    remove_avatar: bool,
    channel_id: str | None,
) -> None:
    """Rename, re-avatar or move a webhook."""
    if avatar and remove_avatar:
        raise click.UsageError("--avatar and --remove-avatar are mutually exclusive")
    if token and channel_id:
        raise click.UsageError("moving a webhook requires bot authentication, drop --token")

    params = ModifyWebhookParams(
        name=name if name is not None else UNSET,
        avatar=None if remove_avatar else _read_avatar(avatar),
        channel_id=channel_id if channel_id is not None else UNSET,
    )
    if not params.to_dict():
        raise click.UsageError("nothing to modify")

    if token:
        _run(settings, lambda api: api.modify_webhook_with_token(webhook_id, token, params))
    else:
        _run(settings, lambda api: api.modify_webhook(webhook_id, params))


@webhook.command("delete")
@click.argument("webhook_id")
@click.option("--token", default=None, help="Webhook token (skips bot authentication)")
@click.pass_obj
def delete_webhook(settings: Settings, webhook_id: str, token: str | None) -> None:
    """Delete a webhook permanently."""
    if token:
        _run(settings, lambda api: api.delete_webhook_with_token(webhook_id, token))
    else:
        _run(settings, lambda api: api.delete_webhook(webhook_id))
    click.echo(f"Deleted webhook {webhook_id}")


@webhook.command("execute")
@click.argument("webhook_id")
@click.argument("token")
@click.option("--content", required=True)
@click.option("--username", default=None, help="Override the default username")
@click.option("--avatar-url", default=None, help="Override the default avatar")
@click.option("--thread", "thread_id", default=None, help="Post into this thread")
@click.option("--wait", is_flag=True, help="Wait for the created message and print it")
@click.pass_obj
def execute_webhook(
    settings: Settings,
    webhook_id: str,
    token: str,
    content: str,
    username: str | None,
    avatar_url: str | None,
    thread_id: str | None,
    wait: bool,
) -> None:
    """Post a message through a webhook."""
    if not content:
        raise click.UsageError("--content must not be empty")
    params = ExecuteWebhookParams(
        content=content,
        username=username if username is not None else UNSET,
        avatar_url=avatar_url if avatar_url is not None else UNSET,
    )
    query = ExecuteWebhookQuery(wait=wait or None, thread_id=thread_id)
    _run(settings, lambda api: api.execute_webhook(webhook_id, token, params, query))


@webhook.group()
def message() -> None:
    """Manage messages sent by a webhook."""


@message.command("get")
@click.argument("webhook_id")
@click.argument("token")
@click.argument("message_id")
@click.option("--thread", "thread_id", default=None)
@click.pass_obj
def get_message(
    settings: Settings, webhook_id: str, token: str, message_id: str, thread_id: str | None
) -> None:
    """Show a message previously sent by the webhook."""
    query = WebhookMessageQuery(thread_id=thread_id)
    _run(settings, lambda api: api.get_webhook_message(webhook_id, token, message_id, query))


@message.command("edit")
@click.argument("webhook_id")
@click.argument("token")
@click.argument("message_id")
@click.option("--content", required=True)
@click.option("--thread", "thread_id", default=None)
@click.pass_obj
def edit_message(
    settings: Settings,
    webhook_id: str,
    token: str,
    message_id: str,
    content: str,
    thread_id: str | None,
) -> None:
    """Replace the content of a webhook message."""
    params = EditWebhookMessageParams(content=content)
    query = WebhookMessageQuery(thread_id=thread_id)
    _run(
        settings,
        lambda api: api.edit_webhook_message(webhook_id, token, message_id, params, query),
    )


@message.command("delete")
@click.argument("webhook_id")
@click.argument("token")
@click.argument("message_id")
@click.option("--thread", "thread_id", default=None)
@click.pass_obj
def delete_message(
    settings: Settings, webhook_id: str, token: str, message_id: str, thread_id: str | None
) -> None:
    """Delete a webhook message."""
    query = WebhookMessageQuery(thread_id=thread_id)
    _run(settings, lambda api: api.delete_webhook_message(webhook_id, token, message_id, query))
    click.echo(f"Deleted message {message_id}")


if __name__ == "__main__":
    cli()

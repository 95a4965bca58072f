"""discord-adapter - async Discord HTTP API bindings."""

from discord_adapter.core.http import HTTPClient
from discord_adapter.core.internal import Internal, Route
from discord_adapter.errors import DiscordAPIError, DiscordConnectionError, DiscordError

# Importing the resource modules installs their routes on Internal
from discord_adapter import types  # noqa: E402,F401

__version__ = "0.1.0"

__all__ = [
    "HTTPClient",
    "Internal",
    "Route",
    "DiscordError",
    "DiscordAPIError",
    "DiscordConnectionError",
]

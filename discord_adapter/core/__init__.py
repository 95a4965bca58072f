"""Core HTTP and gateway plumbing."""

from discord_adapter.core.bus import EventBus, GatewayEvent, parse_dispatch, register_gateway_event
from discord_adapter.core.http import HTTPClient
from discord_adapter.core.internal import Internal, Route

__all__ = [
    "EventBus",
    "GatewayEvent",
    "HTTPClient",
    "Internal",
    "Route",
    "parse_dispatch",
    "register_gateway_event",
]

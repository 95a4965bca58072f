"""Utility modules for discord-adapter."""

from discord_adapter.utils.logging import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]

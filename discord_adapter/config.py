"""Configuration management with Pydantic Settings + optional YAML."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict


def default_config_dir() -> Path:
    """Where config.yaml is looked up when no path is given."""
    override = os.environ.get("DISCORD_ADAPTER_CONFIG_DIR")
    if override:
        return Path(override)
    if sys.platform == "win32":
        root = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
    elif sys.platform == "darwin":
        root = Path.home() / "Library" / "Application Support"
    else:
        root = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return root / "discord-adapter"


class DiscordConfig(BaseModel):
    token: str = ""
    api_url: str = "https://discord.com/api"
    api_version: int = 10
    timeout: float = 30.0
    user_agent: str = "DiscordBot (https://github.com/discord-adapter, 0.1.0)"

    @property
    def base_url(self) -> str:
        return f"{self.api_url.rstrip('/')}/v{self.api_version}"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="DISCORD_ADAPTER_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    discord: DiscordConfig = Field(default_factory=DiscordConfig)
    log_level: str = "INFO"
    log_json: bool = False

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Env vars win over values passed in (the YAML overlay)
        return env_settings, init_settings, dotenv_settings, file_secret_settings


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Load settings from env vars, optionally overlaying a YAML config."""
    yaml_data: dict[str, Any] = {}

    # Determine config file path
    if config_path is None:
        config_path = os.environ.get("DISCORD_ADAPTER_CONFIG")
    if config_path is None:
        default = default_config_dir() / "config.yaml"
        if default.exists():
            config_path = default

    # Load YAML if found
    if config_path is not None:
        path = Path(config_path)
        if path.exists():
            with open(path) as f:
                yaml_data = yaml.safe_load(f) or {}

    # Build settings: YAML values as defaults, env vars override
    return Settings(**yaml_data)

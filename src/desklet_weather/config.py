"""
Application settings.

Values come from environment variables prefixed with ``DESKLET_WEATHER_``
(or a local ``.env`` file), e.g.::

    DESKLET_WEATHER_PROVIDER=nws
    DESKLET_WEATHER_STATION=40.71,-74.01
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from desklet_weather.services.http import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT


class Settings(BaseSettings):
    """Runtime configuration for the CLI and the refresh flow."""

    model_config = SettingsConfigDict(
        env_prefix="DESKLET_WEATHER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "desklet-weather"
    app_env: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Driver selection
    provider: str = "openmeteo"
    station: str = "51.5074,-0.1278"
    api_key: str = ""
    language: str = Field(default="", description="Locale such as 'en_GB' or 'pt_BR.UTF-8'")

    # Storage and HTTP
    data_dir: Path = Path("data")
    user_agent: str = DEFAULT_USER_AGENT
    http_timeout: float = DEFAULT_TIMEOUT


@lru_cache
def get_settings() -> Settings:
    """Return the cached settings instance."""
    return Settings()

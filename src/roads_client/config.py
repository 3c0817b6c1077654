"""
Application settings.

Values come from environment variables prefixed with ``ROADS_`` (or a local
``.env`` file), e.g. ``ROADS_API_KEY=...``.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://roads.googleapis.com/"


class Settings(BaseSettings):
    """Runtime configuration for the Roads client."""

    model_config = SettingsConfigDict(
        env_prefix="ROADS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "roads-client"
    app_env: str = "development"
    debug: bool = False
    log_level: str = "WARNING"

    api_key: SecretStr | None = None
    client_id: str | None = None
    client_secret: SecretStr | None = Field(
        default=None, description="URL-safe base64 signing secret for client_id"
    )
    channel: str | None = None

    base_url: str = DEFAULT_BASE_URL
    timeout: float = Field(default=30.0, gt=0, description="HTTP timeout in seconds")


@lru_cache
def get_settings() -> Settings:
    """Load settings once per process."""
    return Settings()

"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        description="Secret key for signing JWT access tokens", min_length=1
    )
    access_token_expire_minutes: int = Field(
        description="Number of minutes before access tokens expire",
        gt=0,
    )
    attendance_token_secret: str = Field(
        description="HMAC key used to sign attendance QR tokens",
        min_length=16,
    )
    app_timezone: str | None = Field(
        default=None,
        description="IANA timezone name or UTC offset used for timestamps",
    )
    notification_batch_size: int = Field(
        default=100,
        description="Maximum number of notifications inserted per bulk statement",
        gt=0,
    )
    rate_limit_enabled: bool = Field(default=True)
    rate_limit_requests: int = Field(
        default=30,
        description="Requests allowed per client and route inside one window",
        gt=0,
    )
    rate_limit_window_seconds: int = Field(default=60, gt=0)
    rate_limit_sweep_seconds: int = Field(
        default=300,
        description="Interval between sweeps of expired rate limit entries",
        gt=0,
    )
    cors_allow_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        description="Origins allowed by the CORS middleware, as a JSON list",
    )
    session_reminder_window_hours: int = Field(
        default=24,
        description="Look-ahead used by the session reminder sweep",
        ge=1,
        le=72,
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]

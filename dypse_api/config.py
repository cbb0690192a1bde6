"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, model_validator
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
        description="Secret key for signing JWT tokens", min_length=1
    )
    access_token_expire_minutes: int = Field(
        default=60,
        description="Number of minutes before access tokens expire",
        gt=0,
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173"],
        description="Origins allowed to call the API from a browser (JSON list)",
    )
    app_timezone: str | None = Field(
        default=None,
        description="IANA timezone name (or UTC offset) used for timestamps",
    )
    upload_dir: Path = Field(
        default=Path("uploads"),
        description="Directory where profile pictures and CVs are written",
    )
    max_upload_size_bytes: int = Field(
        default=5 * 1024 * 1024,
        description="Largest accepted upload, in bytes",
        gt=0,
    )
    activity_default_limit: int = Field(
        default=10,
        description="Number of activities returned when the caller sends no limit",
        gt=0,
    )
    activity_max_limit: int = Field(
        default=100,
        description="Upper bound applied to the requested number of activities",
        gt=0,
    )
    activity_stats_default_days: int = Field(
        default=30,
        description="Trailing window, in days, used by activity statistics",
        gt=0,
    )
    activity_metadata_max_bytes: int = Field(
        default=4096,
        description="Largest serialized metadata bag stored with an activity",
        gt=0,
    )
    activity_retention_days: int | None = Field(
        default=None,
        description="Age in days after which the purge script deletes activities; unset keeps everything",
        gt=0,
    )

    @model_validator(mode="after")
    def _validate_activity_limits(self) -> "Settings":
        if self.activity_default_limit > self.activity_max_limit:
            raise ValueError(
                "ACTIVITY_DEFAULT_LIMIT cannot be greater than ACTIVITY_MAX_LIMIT"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]

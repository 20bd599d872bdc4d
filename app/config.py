"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

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
        default=60 * 24,
        description="Number of minutes before access tokens expire",
        gt=0,
    )
    app_timezone: str | None = Field(
        default=None,
        description="IANA timezone (or UTC+HH:MM offset) used for reminder times",
    )
    log_level: str = Field(default="INFO", description="Root logging level")
    frontend_url: str = Field(
        default="http://localhost:3000",
        description="Base URL of the client app used in call-to-action links",
    )
    sendgrid_api_key: str | None = Field(
        default=None,
        description="SendGrid API key used for sending notification emails via the REST API",
    )
    sendgrid_sender: str | None = Field(
        default=None,
        description="Email address that will appear as the sender of notification emails",
        min_length=3,
    )
    sendgrid_sender_name: str = Field(
        default="Flashcards App",
        description="Display name attached to the sender address",
    )
    fcm_project_id: str | None = Field(
        default=None, description="Firebase project id used by the FCM HTTP v1 API"
    )
    fcm_service_account_json: str | None = Field(
        default=None, description="Inline JSON service account for FCM"
    )
    fcm_service_account_path: str | None = Field(
        default=None, description="Path to a JSON service account file for FCM"
    )
    scheduler_enabled: bool = Field(
        default=True, description="Start the notification triggers with the API"
    )
    motivation_hour: int = Field(
        default=10, ge=0, le=23, description="Hour of the daily motivation tick"
    )
    motivation_minute: int = Field(
        default=0, ge=0, le=59, description="Minute of the daily motivation tick"
    )
    notification_send_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Upper bound for a single email or push send attempt",
    )

    @model_validator(mode="after")
    def _validate_sendgrid_pair(self) -> "Settings":
        if bool(self.sendgrid_api_key) ^ bool(self.sendgrid_sender):
            raise ValueError(
                "SENDGRID_API_KEY and SENDGRID_SENDER must both be provided to enable email"
            )
        if self.sendgrid_sender and "@" not in self.sendgrid_sender:
            raise ValueError("SENDGRID_SENDER must be a valid email address")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]

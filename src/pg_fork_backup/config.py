"""Application settings."""

from typing import Annotated

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings loaded from environment variables."""

    heroku_api_key: str
    fork_from_app: str
    app: str
    recipient_emails: Annotated[list[str], NoDecode] = Field(default_factory=list)
    sendgrid_username: str | None = None
    sendgrid_password: str | None = None
    addon_plan: str = "heroku-postgresql:standard-0"
    http_timeout_seconds: float = 30.0
    probe_connect_timeout_seconds: float = 10.0
    stop_on_transfer_error: bool = False
    log_level: str = "INFO"

    @field_validator("recipient_emails", mode="before")
    @classmethod
    def parse_csv_list(cls, value: object) -> object:
        """Support comma-separated env var values."""

        if not isinstance(value, str):
            return value
        return [item.strip() for item in value.split(",") if item.strip()]

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.strip().upper()

    @model_validator(mode="after")
    def validate_workflow_settings(self) -> "Settings":
        """Ensure the apps and alerting settings are usable."""

        if not self.heroku_api_key.strip():
            raise ValueError("HEROKU_API_KEY cannot be empty.")
        if not self.fork_from_app.strip() or not self.app.strip():
            raise ValueError("FORK_FROM_APP and APP cannot be empty.")
        if self.fork_from_app == self.app:
            raise ValueError("FORK_FROM_APP and APP must name different apps.")
        if self.recipient_emails and not (self.sendgrid_username and self.sendgrid_password):
            raise ValueError(
                "SENDGRID_USERNAME and SENDGRID_PASSWORD are required when "
                "RECIPIENT_EMAILS is set."
            )
        if self.http_timeout_seconds <= 0:
            raise ValueError("HTTP_TIMEOUT_SECONDS must be > 0.")
        if self.probe_connect_timeout_seconds <= 0:
            raise ValueError("PROBE_CONNECT_TIMEOUT_SECONDS must be > 0.")
        return self

    model_config = SettingsConfigDict(extra="ignore")


__all__ = ["Settings"]

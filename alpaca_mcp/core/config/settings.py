"""
Configuration management for alpaca-mcp.

Settings are read from environment variables and an optional ``.env`` file.
A fresh ``AlpacaSettings`` is built for every tool invocation, so credential
changes in the environment are picked up without restarting the server.
"""

from __future__ import annotations

from collections.abc import Callable

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from alpaca_mcp.core.exceptions import (
    MISSING_CREDENTIALS_MESSAGE,
    ConfigurationError,
    format_missing_endpoint,
)


class AlpacaSettings(BaseSettings):
    """Alpaca credentials, endpoints and server options."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    api_key: str | None = Field(
        None, validation_alias="ALPACA_API_KEY", description="Alpaca key id"
    )
    secret_key: str | None = Field(
        None, validation_alias="ALPACA_SECRET_KEY", description="Alpaca secret key"
    )
    endpoint: str | None = Field(
        None, validation_alias="ALPACA_ENDPOINT", description="Market data API base URL"
    )
    broker_endpoint: str | None = Field(
        None,
        validation_alias="ALPACA_BROKER_ENDPOINT",
        description="Broker API base URL",
    )
    log_level: str = Field(
        "INFO", validation_alias="ALPACA_MCP_LOG_LEVEL", description="Log level"
    )
    log_file: str | None = Field(
        None,
        validation_alias="ALPACA_MCP_LOG_FILE",
        description="Also append JSON log lines to this file",
    )
    http_timeout: float | None = Field(
        None,
        validation_alias="ALPACA_MCP_HTTP_TIMEOUT",
        description="Upstream request timeout in seconds, unset for no timeout",
    )

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()

    @field_validator("http_timeout")
    @classmethod
    def _positive_timeout(cls, value: float | None) -> float | None:
        if value is not None and value <= 0:
            raise ValueError("http_timeout must be positive")
        return value

    def has_credentials(self) -> bool:
        return bool(self.api_key) and bool(self.secret_key)

    def require_credentials(self) -> tuple[str, str]:
        """Return ``(key_id, secret_key)`` or raise ``ConfigurationError``."""
        if not self.has_credentials():
            missing = [
                name
                for name, value in (
                    ("ALPACA_API_KEY", self.api_key),
                    ("ALPACA_SECRET_KEY", self.secret_key),
                )
                if not value
            ]
            raise ConfigurationError(MISSING_CREDENTIALS_MESSAGE, missing=missing)
        return self.api_key, self.secret_key  # type: ignore[return-value]

    def require_endpoint(self) -> str:
        if not self.endpoint:
            raise ConfigurationError(
                format_missing_endpoint("ALPACA_ENDPOINT"), missing=["ALPACA_ENDPOINT"]
            )
        return self.endpoint

    def require_broker_endpoint(self) -> str:
        if not self.broker_endpoint:
            raise ConfigurationError(
                format_missing_endpoint("ALPACA_BROKER_ENDPOINT"),
                missing=["ALPACA_BROKER_ENDPOINT"],
            )
        return self.broker_endpoint


SettingsProvider = Callable[[], AlpacaSettings]


def load_settings() -> AlpacaSettings:
    """Build settings from the current process environment."""
    return AlpacaSettings()

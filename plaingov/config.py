"""Application configuration via pydantic-settings.

Values are loaded from environment variables (.env file).
Settings are organized into logical groups and composed into a single Settings object.
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RetrievalSettings(BaseSettings):
    """Live document retrieval from official sources."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    fetch_timeout: float = Field(
        default=15.0,
        description="Total wall-clock budget for a single fetch, in seconds",
    )
    fetch_connect_timeout: float = Field(default=5.0, description="TCP connect timeout in seconds")
    fetch_max_retries: int = Field(
        default=0,
        ge=0,
        le=5,
        description="Extra attempts for transient failures (network, timeout, HTTP 5xx)",
    )
    fetch_backoff_base: float = Field(
        default=0.5,
        ge=0,
        description="First retry delay in seconds; doubles on every further attempt",
    )
    user_agent: str = Field(default="plaingov/0.1 (+https://www.canada.ca)")
    allowed_source_hosts: str = Field(
        default="www.canada.ca,www.alberta.ca",
        description="Comma-separated hosts that program sources may live on",
    )

    @property
    def allowed_hosts(self) -> frozenset[str]:
        """Parse the comma-separated host allow-list."""
        return frozenset(
            host.strip().lower() for host in self.allowed_source_hosts.split(",") if host.strip()
        )


class ServerSettings(BaseSettings):
    """HTTP tool boundary."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8000)


class Settings(BaseSettings):
    """Root settings composing all sub-settings.

    Usage:
        settings = Settings()
        settings.retrieval.fetch_timeout
        settings.server.port
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")

    retrieval: RetrievalSettings = Field(default_factory=RetrievalSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid:
            msg = f"Invalid log level: {v}. Must be one of {valid}"
            raise ValueError(msg)
        return upper


# Module-level singleton — import this wherever settings are needed.
settings = Settings()

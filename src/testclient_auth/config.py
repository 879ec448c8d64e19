"""Centralized configuration management using Pydantic Settings.

Only ambient behaviour is configurable here: how the in-process test clients
are built and how the package logs. Header names and the test-scheme marker
are fixed by the header contract in ``headers`` and are not read from the
environment.

Every variable carries the ``TESTCLIENT_`` prefix, since the pytest plugin
loads in host test sessions whose environment belongs to the host project.
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class FactoryConfig(BaseSettings):
    """Settings for clients handed out by ``AppFactory``."""

    # Starlette's TestClient uses http://testserver; keep it so apps that
    # check the Host header behave the same as under a bare TestClient.
    base_url: str = Field(
        default="http://testserver",
        description="Base URL for clients bound to the in-process app"
    )
    raise_server_exceptions: bool = Field(
        default=True,
        description="Re-raise exceptions from the app in the sync test client"
    )
    follow_redirects: bool = Field(
        default=True,
        description="Follow redirects issued by the app under test"
    )

    model_config = SettingsConfigDict(env_prefix="TESTCLIENT_")


class LoggingConfig(BaseSettings):
    """Logging configuration with structured logging support."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Package log level"
    )
    json_format: bool = Field(
        default=False,
        description="Enable JSON formatted logs (useful when CI collects logs)"
    )
    file: str | None = Field(
        default=None,
        description="Path to log file (None = stderr)"
    )
    rotation_size: int = Field(
        default=10 * 1024 * 1024,  # 10MB
        ge=1024 * 1024,  # Min 1MB
        description="Log file size before rotation (bytes)"
    )
    rotation_count: int = Field(
        default=5,
        ge=1,
        le=100,
        description="Number of rotated log files to keep"
    )

    model_config = SettingsConfigDict(env_prefix="TESTCLIENT_LOG_")

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v):
        """Accept level names in any case (e.g. "info")."""
        if isinstance(v, str):
            return v.strip().upper()
        return v


class Settings(BaseSettings):
    """Main settings combining all configuration sections."""

    factory: FactoryConfig = Field(default_factory=FactoryConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance (singleton pattern)."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """Reload settings from environment (useful for testing)."""
    global _settings
    _settings = Settings()
    return _settings

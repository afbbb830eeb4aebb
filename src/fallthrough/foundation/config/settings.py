"""Environment-based configuration using pydantic-settings.

Example:
    >>> from fallthrough.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.logging.level
    'INFO'

    # Or with environment variables:
    # FALLTHROUGH_LOG_LEVEL=DEBUG
    # FALLTHROUGH_LOG_TRACE_BRANCHES=true
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="FALLTHROUGH_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["console", "json", "none"] = "console"
    colors: bool | None = Field(default=None, description="Force console colors on/off (None = auto-detect)")
    trace_branches: bool = Field(
        default=False,
        description="Emit a debug event naming the branch each combinator takes",
    )

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v

    @field_validator("format", mode="before")
    @classmethod
    def _normalize_format(cls, v: str) -> str:
        return v.lower() if isinstance(v, str) else v


class FallthroughSettings(BaseSettings):
    """Root settings, loaded from FALLTHROUGH_-prefixed environment variables.

    Example environment variables:
        FALLTHROUGH_DEBUG=true
        FALLTHROUGH_LOG_LEVEL=DEBUG
        FALLTHROUGH_LOG_FORMAT=json
    """

    model_config = SettingsConfigDict(
        env_prefix="FALLTHROUGH_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    debug: bool = Field(default=False, description="Enable debug mode (implies DEBUG log level)")
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug else self.logging.level


@lru_cache(maxsize=1)
def get_settings() -> FallthroughSettings:
    """Get the global settings instance (cached)."""
    return FallthroughSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache so the next get_settings() re-reads the environment."""
    get_settings.cache_clear()

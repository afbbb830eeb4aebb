"""Configuration management using pydantic-settings."""

from .settings import FallthroughSettings, LoggingSettings, clear_settings_cache, get_settings

__all__ = ["FallthroughSettings", "LoggingSettings", "clear_settings_cache", "get_settings"]

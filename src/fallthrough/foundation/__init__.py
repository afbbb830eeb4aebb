"""Foundation - configuration and error types shared by the rest of fallthrough."""

from __future__ import annotations

from .config import FallthroughSettings, LoggingSettings, clear_settings_cache, get_settings
from .errors import EffectTypeError, ErrorCode, ExitError, FallthroughError, UnwrapError

__all__ = [
    # Errors
    "ErrorCode", "FallthroughError", "UnwrapError", "EffectTypeError", "ExitError",
    # Config
    "FallthroughSettings", "LoggingSettings", "get_settings", "clear_settings_cache",
]

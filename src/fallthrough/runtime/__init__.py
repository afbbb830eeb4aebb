"""Runtime - observability for effect execution."""

from __future__ import annotations

from .observability import (
    BoundLogger,
    CollectingRenderer,
    ConsoleRenderer,
    JsonRenderer,
    NoOpRenderer,
    configure_logging,
    configure_logging_from_settings,
    get_logger,
)

__all__ = [
    "BoundLogger", "ConsoleRenderer", "JsonRenderer", "NoOpRenderer", "CollectingRenderer",
    "configure_logging", "configure_logging_from_settings", "get_logger",
]

"""Observability - structured logging and branch tracing toggle."""

from .logging import (
    BoundLogger,
    CollectingRenderer,
    ConsoleRenderer,
    JsonRenderer,
    LogEntry,
    LogRenderer,
    NoOpRenderer,
    branch_tracing_enabled,
    configure_logging,
    configure_logging_from_settings,
    get_logger,
)

__all__ = [
    "BoundLogger", "LogEntry",
    "LogRenderer", "ConsoleRenderer", "JsonRenderer", "NoOpRenderer", "CollectingRenderer",
    "configure_logging", "configure_logging_from_settings", "get_logger", "branch_tracing_enabled",
]

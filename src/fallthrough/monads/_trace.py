"""Branch tracing, switched on through configure_logging(trace_branches=True)
or FALLTHROUGH_LOG_TRACE_BRANCHES with configure_logging_from_settings().

Only branch names and block names are logged, never payloads.
"""

from __future__ import annotations

from fallthrough.runtime.observability import branch_tracing_enabled, get_logger

_log = get_logger("fallthrough")


def trace(event: str, **kw: str) -> None:
    if branch_tracing_enabled():
        _log.debug(event, **kw)

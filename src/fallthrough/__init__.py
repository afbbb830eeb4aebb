"""fallthrough - short-circuiting combinators for fallible values inside effects.

React to an absent or failed value with a fallback effect, and continue
otherwise, without nested conditional dispatch.

Quick Start:
    >>> from fallthrough import Effect, Failure, Present, Absent, either_map, maybe_map
    >>>
    >>> either_map(Failure("bad"), lambda e: Effect.pure(len(e))).run()
    3
    >>> maybe_map(Absent(), Effect.pure(42)).run()
    42

Early exit from an imperative-looking block:
    >>> from fallthrough import Exit, block, either_bind
    >>>
    >>> @block
    ... def greet(exit: Exit[str], fetch):
    ...     name = yield either_bind(fetch(), exit.adapt(Effect.pure("who are you?")))
    ...     return f"hello {name}"

Async contexts work the same way with AsyncEffect and @async_block.

Configuration (environment, applied by configure_logging_from_settings()):
    FALLTHROUGH_LOG_LEVEL=DEBUG
    FALLTHROUGH_LOG_FORMAT=json
    FALLTHROUGH_LOG_TRACE_BRANCHES=true
"""

from __future__ import annotations

__version__ = "0.1.0"

from .foundation import (
    EffectTypeError,
    ErrorCode,
    ExitError,
    FallthroughError,
    FallthroughSettings,
    UnwrapError,
    clear_settings_cache,
    get_settings,
)
from .monads import (
    Absent,
    AsyncEffect,
    Effect,
    Exit,
    Failure,
    Maybe,
    Monad,
    Present,
    Result,
    Success,
    async_block,
    async_effect,
    block,
    effect,
    either_bind,
    either_map,
    exit_adapter,
    maybe_bind,
    maybe_map,
)
from .runtime import configure_logging, configure_logging_from_settings, get_logger

__all__ = [
    "__version__",
    # Containers
    "Maybe", "Present", "Absent", "Result", "Success", "Failure",
    # Effect contexts
    "Monad", "Effect", "AsyncEffect", "effect", "async_effect",
    # Combinators
    "either_map", "maybe_map", "either_bind", "maybe_bind", "exit_adapter",
    # Blocks
    "Exit", "block", "async_block",
    # Errors
    "ErrorCode", "FallthroughError", "UnwrapError", "EffectTypeError", "ExitError",
    # Config & logging
    "FallthroughSettings", "get_settings", "clear_settings_cache",
    "configure_logging", "configure_logging_from_settings", "get_logger",
]

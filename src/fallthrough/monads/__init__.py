"""Fallible containers, effect contexts and the combinators that join them.

Example:
    >>> from fallthrough.monads import Effect, Failure, Success, either_bind
    >>>
    >>> def charge(amount: int) -> Effect[Result[str, str]]:
    ...     return Effect(lambda: Success("rcpt-1") if amount > 0 else Failure("empty cart"))
    >>>
    >>> either_bind(charge(0), lambda reason: Effect.pure(f"skipped: {reason}")).run()
    'skipped: empty cart'
"""

from .block import Exit, async_block, block
from .effect import AsyncEffect, Effect, async_effect, effect
from .fallible import either_bind, either_map, exit_adapter, maybe_bind, maybe_map
from .maybe import Absent, Maybe, Present
from .result import Failure, Result, Success, sequence, traverse, try_fn
from .types import Fallback, Handler, Monad, Terminate

__all__ = [
    # Containers
    "Maybe", "Present", "Absent",
    "Result", "Success", "Failure", "sequence", "traverse", "try_fn",
    # Effect contexts
    "Monad", "Effect", "AsyncEffect", "effect", "async_effect",
    # Combinators
    "either_map", "maybe_map", "either_bind", "maybe_bind", "exit_adapter",
    # Short-circuiting blocks
    "Exit", "block", "async_block",
    # Type aliases
    "Handler", "Fallback", "Terminate",
]

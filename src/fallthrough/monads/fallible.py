"""Fallible combinators: route a failed or absent value to a fallback effect.

Four dispatchers and one adapter:

    either_map(value, handler)    Result[T, E]     → M[T]
    maybe_map(value, fallback)    Maybe[T]         → M[T]
    either_bind(action, handler)  M[Result[T, E]]  → M[T]
    maybe_bind(action, fallback)  M[Maybe[T]]      → M[T]
    exit_adapter(terminate, eff)  handler that runs eff, then exits the enclosing block

On the success path the handler/fallback is never called and never run. On
the failure path it receives control entirely; nothing here inspects, wraps
or suppresses the failure payload.

Example:
    >>> lookup = maybe_bind(find_user(42), Effect.pure(GUEST))
    >>> user = lookup.run()   # find_user runs here, GUEST only if absent
    >>>
    >>> either_map(Failure("bad"), lambda e: Effect.pure(len(e))).run()
    3
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar

from fallthrough.foundation.errors import EffectTypeError

from ._trace import trace
from .effect import Effect
from .maybe import Absent, Maybe, Present
from .result import Failure, Result, Success
from .types import Fallback, Handler, Monad, Terminate

T = TypeVar("T")
E = TypeVar("E")
M = TypeVar("M", bound=Monad[Any])


def _require_effect(value: object, what: str) -> Monad[Any]:
    if not isinstance(value, Monad):
        raise EffectTypeError.expected(what, value)
    return value


def _force(fallback: Fallback) -> Monad[Any]:
    """An effect is returned as-is; a thunk is called now."""
    if isinstance(fallback, Monad):
        return fallback
    if callable(fallback):
        return _require_effect(fallback(), "an effect from the fallback thunk")
    raise EffectTypeError.expected("an effect or a zero-argument callable", fallback)


def _context_of(fallback: Fallback, context: type[Monad[Any]] | None) -> type[Monad[Any]]:
    if context is not None:
        return context
    return type(fallback) if isinstance(fallback, Monad) else Effect


# ═══════════════════════════════════════════════════════════════════════════════
# Pure-value dispatchers
# ═══════════════════════════════════════════════════════════════════════════════


def either_map(
    value: Result[T, E],
    handler: Callable[[E], Monad[T]],
    *,
    context: type[Monad[Any]] = Effect,
) -> Monad[T]:
    """Dispatch an already-computed Result.

    Success(t) → context.pure(t); handler is not called.
    Failure(e) → handler(e), returned unchanged.

    Args:
        value: The Result to dispatch
        handler: Maps the failure payload to a replacement effect
        context: Effect type to lift a success into (Effect or AsyncEffect)

    Raises:
        EffectTypeError: value is not a Result, or handler returned a non-effect
    """
    match value:
        case Success(t):
            trace("branch taken", op="either_map", branch="success")
            return context.pure(t)
        case Failure(e):
            trace("branch taken", op="either_map", branch="failure")
            return _require_effect(handler(e), "an effect from the either handler")
        case _:
            raise EffectTypeError.expected("Result", value)


def maybe_map(
    value: Maybe[T],
    fallback: Fallback,
    *,
    context: type[Monad[Any]] | None = None,
) -> Monad[T]:
    """Dispatch an already-computed Maybe.

    Present(t) → t lifted into context; fallback is neither run nor called.
    Absent()   → fallback unchanged, or fallback() when it is a thunk.

    When context is omitted it is the fallback's own effect type, or Effect
    for a thunk.
    """
    match value:
        case Present(t):
            trace("branch taken", op="maybe_map", branch="present")
            return _context_of(fallback, context).pure(t)
        case Absent():
            trace("branch taken", op="maybe_map", branch="absent")
            return _force(fallback)
        case _:
            raise EffectTypeError.expected("Maybe", value)


# ═══════════════════════════════════════════════════════════════════════════════
# Effectful dispatchers
# ═══════════════════════════════════════════════════════════════════════════════


def either_bind(action: M, handler: Handler) -> M:
    """Run action, then dispatch its Result through either_map.

    The composite is deferred: neither action nor handler runs until the
    returned effect does.
    """
    context = type(_require_effect(action, "an effect producing a Result"))
    return action.bind(lambda result: either_map(result, handler, context=context))  # type: ignore[return-value]


def maybe_bind(action: M, fallback: Fallback) -> M:
    """Run action, then dispatch its Maybe through maybe_map."""
    context = type(_require_effect(action, "an effect producing a Maybe"))
    return action.bind(lambda maybe: maybe_map(maybe, fallback, context=context))  # type: ignore[return-value]


# ═══════════════════════════════════════════════════════════════════════════════
# Early exit
# ═══════════════════════════════════════════════════════════════════════════════


def exit_adapter(terminate: Terminate, effect: M) -> Callable[..., M]:
    """Build a handler that runs effect and then exits the enclosing block with its result.

    The returned function ignores its (optional) argument, so it fits both the
    handler slot of either_* and the thunk slot of maybe_*. Running what it
    returns runs effect once and passes the result to terminate once; nothing
    after that point in the block executes.

    Args:
        terminate: Exit capability of the enclosing block (Exit.terminate)
        effect: Effect whose result becomes the block's result
    """
    _require_effect(effect, "an effect to run before exiting")

    def exit_with_effect(_ignored: object = None) -> M:
        return effect.bind(terminate)  # type: ignore[return-value]

    return exit_with_effect

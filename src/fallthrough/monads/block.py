"""Short-circuiting blocks: imperative-looking sequences that can exit early.

A block body receives an Exit capability as its first argument.
`exit.terminate(value)` is an effect that, when run, abandons the rest of the
body and makes `value` the block's result. Pair it with exit_adapter (or
`exit.adapt`) to turn "log and stop" into a combinator handler.

Synchronous bodies use generator do-notation: `x = yield some_effect` runs the
effect and binds its value.

    >>> @block
    ... def checkout(exit: Exit[str], cart_id: int):
    ...     cart = yield maybe_bind(load_cart(cart_id), exit.adapt(Effect.pure("empty")))
    ...     receipt = yield charge(cart)
    ...     return receipt
    >>>
    >>> checkout(7).run()

Asynchronous bodies are plain coroutines that await effects:

    >>> @async_block
    ... async def checkout(exit: Exit[str], cart_id: int) -> str:
    ...     cart = await maybe_bind(load_cart(cart_id), exit.adapt(AsyncEffect.pure("empty")))
    ...     return await charge(cart)
"""

from __future__ import annotations

import inspect
from functools import wraps
from typing import TYPE_CHECKING, Any, Callable, Generic, NoReturn, TypeVar

from fallthrough.foundation.errors import EffectTypeError, ExitError

from ._trace import trace
from .effect import AsyncEffect, Effect
from .fallible import exit_adapter
from .types import Monad

if TYPE_CHECKING:
    from collections.abc import Generator

R = TypeVar("R")
M = TypeVar("M", bound=Monad[Any])


class _Escape(BaseException):
    """Carries an early exit up to the block owning `exit`.

    Derives from BaseException so `except Exception` in a body does not stop it.
    """

    def __init__(self, exit: Exit[Any], value: Any) -> None:
        super().__init__(exit.name)
        self.exit = exit
        self.value = value


class Exit(Generic[R]):
    """Early-exit capability scoped to one run of one block.

    Attributes:
        name: Block name, used in error messages and branch tracing
        context: Effect type terminate() produces (Effect or AsyncEffect)
    """

    __slots__ = ("name", "context", "_active")

    def __init__(self, context: type[Monad[Any]] = Effect, *, name: str = "block") -> None:
        self.name = name
        self.context = context
        self._active = True

    @property
    def active(self) -> bool:
        """True while the owning block is still running."""
        return self._active

    def terminate(self, value: R) -> Monad[NoReturn]:
        """Effect that stops the block with value as its result.

        Raises:
            ExitError: when run after the block has finished
        """
        def escape(_: object) -> NoReturn:
            if not self._active:
                raise ExitError(f"terminate() of {self.name!r} ran after the block finished")
            raise _Escape(self, value)
        return self.context.pure(None).bind(escape)

    def adapt(self, effect: M) -> Callable[..., M]:
        """Shorthand for exit_adapter(self.terminate, effect)."""
        return exit_adapter(self.terminate, effect)

    def close(self) -> None:
        self._active = False

    def __repr__(self) -> str:
        state = "active" if self._active else "closed"
        return f"Exit({self.name!r}, {self.context.__name__}, {state})"


def _drive(body: Generator[Any, Any, R]) -> R:
    """Run a do-notation generator: each yielded Effect is run and its value sent back.

    Exceptions from an effect, early exits included, are thrown into the
    generator at the yield. While an exit unwinds the body, effects yielded from
    its finally clauses still run. The exit always leaves this function, even if
    the body swallows it.
    """
    send: Any = None
    throw: BaseException | None = None
    escaping: _Escape | None = None
    while True:
        try:
            step = body.throw(throw) if throw is not None else body.send(send)
        except StopIteration as stop:
            if escaping is not None:
                raise escaping from None
            return stop.value
        send, throw = None, None
        if not isinstance(step, Effect):
            throw = EffectTypeError.expected("an Effect to be yielded", step)
            continue
        try:
            send = step.run()
        except _Escape as escape:
            throw = escaping = escape
        except Exception as exc:
            throw = exc


def block(body: Callable[..., Any]) -> Callable[..., Effect[Any]]:
    """Decorate `body(exit, *args, **kwargs)` into a factory of deferred blocks.

    The body may be a generator function (do-notation), or a plain function
    returning an Effect (which is run) or a value.
    """
    name = getattr(body, "__qualname__", repr(body))

    @wraps(body)
    def factory(*args: Any, **kwargs: Any) -> Effect[Any]:
        def run() -> Any:
            exit: Exit[Any] = Exit(Effect, name=name)
            try:
                outcome = body(exit, *args, **kwargs)
                if inspect.isgenerator(outcome):
                    return _drive(outcome)
                if isinstance(outcome, Effect):
                    return outcome.run()
                return outcome
            except _Escape as escape:
                if escape.exit is not exit:
                    raise
                trace("block exited early", block=name)
                return escape.value
            finally:
                exit.close()
        return Effect(run)

    return factory


def async_block(body: Callable[..., Any]) -> Callable[..., AsyncEffect[Any]]:
    """Decorate `async def body(exit, *args, **kwargs)` into a factory of deferred async blocks.

    A plain function returning an AsyncEffect is accepted too.
    """
    name = getattr(body, "__qualname__", repr(body))

    @wraps(body)
    def factory(*args: Any, **kwargs: Any) -> AsyncEffect[Any]:
        async def run() -> Any:
            exit: Exit[Any] = Exit(AsyncEffect, name=name)
            try:
                outcome = body(exit, *args, **kwargs)
                if inspect.iscoroutine(outcome):
                    outcome = await outcome
                if isinstance(outcome, AsyncEffect):
                    outcome = await outcome.run()
                return outcome
            except _Escape as escape:
                if escape.exit is not exit:
                    raise
                trace("block exited early", block=name)
                return escape.value
            finally:
                exit.close()
        return AsyncEffect(run)

    return factory

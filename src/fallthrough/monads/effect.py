"""Deferred computations used as the ambient effect context.

- Effect[T]: synchronous, wraps a zero-argument callable
- AsyncEffect[T]: asynchronous, wraps a zero-argument callable returning an awaitable

Constructing an effect never runs it. Running it twice runs its side effects
twice. Both satisfy the Monad protocol (pure + bind), which is all the
combinators require.

Example:
    >>> @effect
    ... def read_config(path: str) -> str:
    ...     return open(path).read()
    >>>
    >>> load = read_config("app.toml").map(str.strip)  # nothing read yet
    >>> text = load.run()
"""

from __future__ import annotations

from functools import wraps
from typing import TYPE_CHECKING, Any, Callable, Generic, ParamSpec, TypeVar

from fallthrough.foundation.errors import EffectTypeError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Generator

T = TypeVar("T")
U = TypeVar("U")
P = ParamSpec("P")


class Effect(Generic[T]):
    """Deferred synchronous computation.

    Type signature: () -> T, run on demand.
    """

    __slots__ = ("_thunk",)

    def __init__(self, thunk: Callable[[], T]) -> None:
        if not callable(thunk):
            raise EffectTypeError.expected("a zero-argument callable", thunk)
        self._thunk = thunk

    @classmethod
    def pure(cls, value: U) -> Effect[U]:
        """Lift a plain value into a no-op effect."""
        return cls(lambda: value)

    def bind(self, f: Callable[[T], Effect[U]]) -> Effect[U]:
        """Sequence a dependent effect (>>=). f runs only when the result runs."""
        def run() -> U:
            nxt = f(self._thunk())
            if not isinstance(nxt, Effect):
                raise EffectTypeError.expected("Effect from bind continuation", nxt)
            return nxt.run()
        return type(self)(run)

    def map(self, f: Callable[[T], U]) -> Effect[U]:
        return type(self)(lambda: f(self._thunk()))

    def then(self, other: Effect[U]) -> Effect[U]:
        """Run self, discard its value, then run other (>>)."""
        return self.bind(lambda _: other)

    def run(self) -> T:
        return self._thunk()

    def __await__(self) -> Generator[Any, None, T]:
        raise EffectTypeError(
            "Effect is synchronous and cannot be awaited; run() it, lift it with "
            "AsyncEffect.from_effect, or pass context=AsyncEffect to either_map/maybe_map"
        )

    def __repr__(self) -> str:
        return f"Effect({getattr(self._thunk, '__qualname__', self._thunk)!s})"


class AsyncEffect(Generic[T]):
    """Deferred asynchronous computation. Awaiting it runs it.

    Type signature: () -> Awaitable[T], run on demand.
    """

    __slots__ = ("_factory",)

    def __init__(self, factory: Callable[[], Awaitable[T]]) -> None:
        if not callable(factory):
            raise EffectTypeError.expected("a zero-argument callable returning an awaitable", factory)
        self._factory = factory

    @classmethod
    def pure(cls, value: U) -> AsyncEffect[U]:
        """Lift a plain value into a no-op effect."""
        async def _pure() -> U:
            return value
        return cls(_pure)

    @classmethod
    def from_effect(cls, eff: Effect[U]) -> AsyncEffect[U]:
        """Lift a synchronous effect. It still runs only when awaited."""
        async def _run() -> U:
            return eff.run()
        return cls(_run)

    def bind(self, f: Callable[[T], AsyncEffect[U]]) -> AsyncEffect[U]:
        """Sequence a dependent effect (>>=). f runs only when the result is awaited."""
        async def run() -> U:
            nxt = f(await self._factory())
            if not isinstance(nxt, AsyncEffect):
                raise EffectTypeError.expected("AsyncEffect from bind continuation", nxt)
            return await nxt.run()
        return type(self)(run)

    def map(self, f: Callable[[T], U]) -> AsyncEffect[U]:
        async def run() -> U:
            return f(await self._factory())
        return type(self)(run)

    def then(self, other: AsyncEffect[U]) -> AsyncEffect[U]:
        return self.bind(lambda _: other)

    async def run(self) -> T:
        return await self._factory()

    def __await__(self) -> Generator[Any, None, T]:
        return self.run().__await__()

    def __repr__(self) -> str:
        return f"AsyncEffect({getattr(self._factory, '__qualname__', self._factory)!s})"


# ═══════════════════════════════════════════════════════════════════════════════
# Decorators
# ═══════════════════════════════════════════════════════════════════════════════


def effect(fn: Callable[P, T]) -> Callable[P, Effect[T]]:
    """Turn a function into a factory of deferred effects.

    Calling the decorated function captures its arguments and returns an
    Effect; the body runs when the effect does.
    """
    @wraps(fn)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> Effect[T]:
        return Effect(lambda: fn(*args, **kwargs))
    return wrapper


def async_effect(fn: Callable[P, Awaitable[T]]) -> Callable[P, AsyncEffect[T]]:
    """Turn an `async def` function into a factory of deferred async effects."""
    @wraps(fn)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> AsyncEffect[T]:
        return AsyncEffect(lambda: fn(*args, **kwargs))
    return wrapper

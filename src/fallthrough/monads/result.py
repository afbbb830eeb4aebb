"""Result/Either type for values that may be an error.

Discriminated union of two immutable variants:
- Success(value)
- Failure(error)

Functor, Monad and Bifunctor operations for railway-oriented composition:

    >>> Success(5).map(lambda x: x * 2)
    Success(10)
    >>> Failure("bad").map(lambda x: x * 2)
    Failure('bad')
    >>> match parse("42"):
    ...     case Success(n): use(n)
    ...     case Failure(reason): report(reason)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Generic, TypeVar

from fallthrough.foundation.errors import UnwrapError

from .maybe import Absent, Maybe, Present

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type
U = TypeVar("U")  # Mapped success type
F = TypeVar("F")  # Mapped error type


class Result(Generic[T, E]):
    """Base of Success and Failure. Exactly one variant holds.

    Notes:
        - Uses __slots__; variants refuse attribute assignment
        - All operations return new values
        - Pattern match with `case Success(v)` / `case Failure(e)`
    """

    __slots__ = ()

    # ─── Type Checking ───────────────────────────────────────────────

    def is_success(self) -> bool:
        return isinstance(self, Success)

    def is_failure(self) -> bool:
        return isinstance(self, Failure)

    # ─── Value Extraction ──────────────────────────────────────────────

    def unwrap(self) -> T:
        """Extract Success value. Raises UnwrapError on Failure."""
        if isinstance(self, Success):
            return self.value
        raise UnwrapError.wrong_variant("unwrap", repr(self))

    def unwrap_err(self) -> E:
        """Extract Failure error. Raises UnwrapError on Success."""
        if isinstance(self, Failure):
            return self.error
        raise UnwrapError.wrong_variant("unwrap_err", repr(self))

    def unwrap_or(self, default: T) -> T:
        return self.value if isinstance(self, Success) else default

    def unwrap_or_else(self, f: Callable[[E], T]) -> T:
        """Extract Success value or compute from the error via f."""
        return self.value if isinstance(self, Success) else f(self.error)  # type: ignore[attr-defined]

    def expect(self, msg: str) -> T:
        """Extract Success value with a custom error message."""
        if isinstance(self, Success):
            return self.value
        raise UnwrapError(f"{msg}: {self.error!r}")  # type: ignore[attr-defined]

    # ─── Functor Operations ────────────────────────────────────────────

    def map(self, f: Callable[[T], U]) -> Result[U, E]:
        """Apply f to Success value. Signature: Result[T,E] → (T→U) → Result[U,E]"""
        return Success(f(self.value)) if isinstance(self, Success) else self  # type: ignore[return-value]

    def map_err(self, f: Callable[[E], F]) -> Result[T, F]:
        """Apply f to Failure error. Signature: Result[T,E] → (E→F) → Result[T,F]"""
        return Failure(f(self.error)) if isinstance(self, Failure) else self  # type: ignore[return-value]

    def bimap(self, ok_fn: Callable[[T], U], err_fn: Callable[[E], F]) -> Result[U, F]:
        """Apply ok_fn on Success, err_fn on Failure."""
        if isinstance(self, Success):
            return Success(ok_fn(self.value))
        return Failure(err_fn(self.error))  # type: ignore[attr-defined]

    # ─── Monad Operations ──────────────────────────────────────────────

    def flat_map(self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Chain an operation that can fail. Failure short-circuits."""
        return f(self.value) if isinstance(self, Success) else self  # type: ignore[return-value]

    and_then = flat_map

    def or_else(self, f: Callable[[E], Result[T, F]]) -> Result[T, F]:
        """On Failure, apply f to recover. On Success, pass through."""
        return f(self.error) if isinstance(self, Failure) else self  # type: ignore[return-value]

    # ─── Inspection & Conversion ──────────────────────────────────────────

    def ok(self) -> T | None:
        return self.value if isinstance(self, Success) else None

    def err(self) -> E | None:
        return self.error if isinstance(self, Failure) else None

    def to_maybe(self) -> Maybe[T]:
        """Success(v) → Present(v), Failure → Absent()."""
        return Present(self.value) if isinstance(self, Success) else Absent()

    def inspect(self, f: Callable[[T], None]) -> Result[T, E]:
        """Call f with the Success value for side effects, return self."""
        if isinstance(self, Success):
            f(self.value)
        return self

    def inspect_err(self, f: Callable[[E], None]) -> Result[T, E]:
        """Call f with the Failure error for side effects, return self."""
        if isinstance(self, Failure):
            f(self.error)
        return self

    def match(self, *, ok: Callable[[T], U], err: Callable[[E], U]) -> U:
        """Exhaustive pattern match. Forces handling both variants."""
        return ok(self.value) if isinstance(self, Success) else err(self.error)  # type: ignore[attr-defined]

    def __iter__(self) -> Iterator[T]:
        """Yields the value if Success, nothing if Failure."""
        if isinstance(self, Success):
            yield self.value


class Success(Result[T, Any]):
    """Success variant."""

    __slots__ = ("value",)
    __match_args__ = ("value",)

    value: T

    def __init__(self, value: T) -> None:
        object.__setattr__(self, "value", value)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __bool__(self) -> bool:
        return True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Result):
            return NotImplemented
        return isinstance(other, Success) and self.value == other.value

    def __hash__(self) -> int:
        return hash((True, self.value))

    def __repr__(self) -> str:
        return f"Success({self.value!r})"


class Failure(Result[Any, E]):
    """Failure variant."""

    __slots__ = ("error",)
    __match_args__ = ("error",)

    error: E

    def __init__(self, error: E) -> None:
        object.__setattr__(self, "error", error)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __bool__(self) -> bool:
        return False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Result):
            return NotImplemented
        return isinstance(other, Failure) and self.error == other.error

    def __hash__(self) -> int:
        return hash((False, self.error))

    def __repr__(self) -> str:
        return f"Failure({self.error!r})"


# ═══════════════════════════════════════════════════════════════════════════════
# Collection Operations
# ═══════════════════════════════════════════════════════════════════════════════


def sequence(results: Iterable[Result[T, E]]) -> Result[list[T], E]:
    """Iterable[Result[T,E]] → Result[list[T], E]. Fail-fast on first Failure."""
    values: list[T] = []
    for r in results:
        if isinstance(r, Failure):
            return r
        values.append(r.value)  # type: ignore[attr-defined]
    return Success(values)


def traverse(items: Iterable[T], f: Callable[[T], Result[U, E]]) -> Result[list[U], E]:
    """Map f over items and sequence. Stops calling f after the first Failure."""
    values: list[U] = []
    for item in items:
        r = f(item)
        if isinstance(r, Failure):
            return r
        values.append(r.value)  # type: ignore[attr-defined]
    return Success(values)


def try_fn(f: Callable[[], T], *catch: type[Exception]) -> Result[T, Exception]:
    """Run f, capturing the listed exceptions (default: Exception) as Failure."""
    try:
        return Success(f())
    except (catch or (Exception,)) as exc:
        return Failure(exc)

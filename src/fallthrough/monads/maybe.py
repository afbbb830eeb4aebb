"""Maybe/Option type: a value that may be absent.

Two variants:
- Present(value): holds a value (which may itself be None)
- Absent(): holds nothing; a singleton

Both are immutable and support structural pattern matching:

    >>> match Maybe.from_optional(lookup()):
    ...     case Present(user): greet(user)
    ...     case Absent(): sign_up()
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Generic, TypeVar

from fallthrough.foundation.errors import UnwrapError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from .result import Result

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")


class Maybe(Generic[T]):
    """Base of Present and Absent. Do not instantiate directly."""

    __slots__ = ()

    @staticmethod
    def from_optional(value: U | None) -> Maybe[U]:
        """Lift a plain optional: None becomes Absent(), anything else Present."""
        return Absent() if value is None else Present(value)

    def is_present(self) -> bool:
        return isinstance(self, Present)

    def is_absent(self) -> bool:
        return isinstance(self, Absent)

    # ─── Value Extraction ──────────────────────────────────────────────

    def unwrap(self) -> T:
        """Extract the value. Raises UnwrapError on Absent."""
        if isinstance(self, Present):
            return self.value
        raise UnwrapError.wrong_variant("unwrap", "Absent")

    def unwrap_or(self, default: T) -> T:
        return self.value if isinstance(self, Present) else default

    def unwrap_or_else(self, f: Callable[[], T]) -> T:
        """Extract the value or compute one. f runs only on Absent."""
        return self.value if isinstance(self, Present) else f()

    def to_optional(self) -> T | None:
        return self.value if isinstance(self, Present) else None

    # ─── Functor / Monad ───────────────────────────────────────────────

    def map(self, f: Callable[[T], U]) -> Maybe[U]:
        return Present(f(self.value)) if isinstance(self, Present) else Absent()

    def flat_map(self, f: Callable[[T], Maybe[U]]) -> Maybe[U]:
        return f(self.value) if isinstance(self, Present) else Absent()

    def filter(self, predicate: Callable[[T], bool]) -> Maybe[T]:
        """Keep the value only if predicate holds."""
        if isinstance(self, Present) and predicate(self.value):
            return self
        return Absent()

    def or_else(self, f: Callable[[], Maybe[T]]) -> Maybe[T]:
        """On Absent, compute an alternative. On Present, pass through."""
        return self if isinstance(self, Present) else f()

    def ok_or(self, error: E) -> Result[T, E]:
        """Present(v) -> Success(v), Absent() -> Failure(error)."""
        from .result import Failure, Success
        return Success(self.value) if isinstance(self, Present) else Failure(error)

    def match(self, *, present: Callable[[T], U], absent: Callable[[], U]) -> U:
        """Exhaustive case analysis."""
        return present(self.value) if isinstance(self, Present) else absent()

    def __iter__(self) -> Iterator[T]:
        """Yields the value if Present, nothing if Absent."""
        if isinstance(self, Present):
            yield self.value


class Present(Maybe[T]):
    """Variant holding a value."""

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
        if not isinstance(other, Present):
            return NotImplemented
        return self.value == other.value

    def __hash__(self) -> int:
        return hash((Present, self.value))

    def __repr__(self) -> str:
        return f"Present({self.value!r})"


class Absent(Maybe[Any]):
    """Variant holding nothing. Every Absent() is the same object."""

    __slots__ = ()
    __match_args__ = ()

    _instance: Absent | None = None

    def __new__(cls) -> Absent:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "Absent()"

    def __reduce__(self) -> tuple[type[Absent], tuple[()]]:
        return (Absent, ())

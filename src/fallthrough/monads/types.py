"""Capability protocol and type aliases shared by the combinators."""

from __future__ import annotations

from typing import Any, Callable, Protocol, TypeAlias, TypeVar, runtime_checkable

T_co = TypeVar("T_co", covariant=True)


@runtime_checkable
class Monad(Protocol[T_co]):
    """Minimal capability of an ambient effect context.

    - pure: lift a plain value into a no-op effect
    - bind: sequence a dependent effect after this one

    Effect and AsyncEffect both satisfy it. Result and Maybe deliberately do not:
    they are values routed by the combinators, never effects.
    """

    @classmethod
    def pure(cls, value: Any) -> Monad[Any]: ...

    def bind(self, f: Callable[[Any], Monad[Any]]) -> Monad[Any]: ...


# Failure-branch inputs. Handlers receive the failure payload; fallbacks are an
# effect or a zero-argument callable producing one.
Handler: TypeAlias = Callable[[Any], Monad[Any]]
Fallback: TypeAlias = "Monad[Any] | Callable[[], Monad[Any]]"
Terminate: TypeAlias = Callable[[Any], Monad[Any]]

"""Error codes and exceptions raised on misuse of fallthrough primitives.

The combinators never classify or wrap the failure payloads they route.
These exceptions only signal programming errors: unwrapping the wrong
variant, handing a combinator something that is not an effect, or running
an early exit after its block has finished.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Self


class ErrorCode(StrEnum):
    """Machine-readable codes carried by every FallthroughError."""
    UNWRAP_FAILED = "UNWRAP_FAILED"
    NOT_AN_EFFECT = "NOT_AN_EFFECT"
    EXIT_OUTSIDE_BLOCK = "EXIT_OUTSIDE_BLOCK"
    UNKNOWN = "UNKNOWN"


class FallthroughError(Exception):
    """Base exception for fallthrough misuse errors.

    Attributes:
        message: Human-readable description
        code: Machine-readable classification
    """

    code: ErrorCode = ErrorCode.UNKNOWN

    def __init__(self, message: str, *, code: ErrorCode | None = None) -> None:
        self.message = message
        if code is not None:
            self.code = code
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, code={self.code.value})"

    def render(self) -> str:
        """Format as `[CODE] message`."""
        return f"[{self.code.value}] {self.message}"


class UnwrapError(FallthroughError, RuntimeError):
    """Value extracted from the wrong variant of a Result or Maybe."""

    code = ErrorCode.UNWRAP_FAILED

    @classmethod
    def wrong_variant(cls, operation: str, variant: str) -> Self:
        return cls(f"{operation}() on {variant}")


class EffectTypeError(FallthroughError, TypeError):
    """A value was used where an effect (or a container) was required."""

    code = ErrorCode.NOT_AN_EFFECT

    @classmethod
    def expected(cls, what: str, got: object) -> Self:
        """Build from the expected kind and the offending value."""
        return cls(f"Expected {what}, got {type(got).__name__}: {got!r}")


class ExitError(FallthroughError, RuntimeError):
    """An early exit was run after the block that issued it had finished."""

    code = ErrorCode.EXIT_OUTSIDE_BLOCK

"""Error handling for fallthrough.

- ErrorCode: Codes attached to misuse errors
- FallthroughError: Base exception
- UnwrapError/EffectTypeError/ExitError: Concrete misuse errors
"""

from .errors import EffectTypeError, ErrorCode, ExitError, FallthroughError, UnwrapError

__all__ = ["ErrorCode", "FallthroughError", "UnwrapError", "EffectTypeError", "ExitError"]

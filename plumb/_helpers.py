"""Internal helpers for plumb.

Common functions used across the engine modules.
These are not part of the public API."""

from __future__ import annotations

import inspect
import typing
from collections.abc import Callable

class _Missing:
    """Marker for an argument that was not supplied (distinct from None)."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

MISSING: typing.Final = _Missing()

def or_default[T](value: typing.Any, default: T) -> typing.Any | T:
    """Replace MISSING with default."""
    return default if value is MISSING else value

def positional_count(fn: Callable[..., typing.Any], limit: int, fallback: int = 1) -> int:
    """
    How many positional arguments fn accepts, capped at limit.

    Builtins without an introspectable signature get `fallback`.
    """
    try:
        parameters = inspect.signature(fn).parameters.values()
    except (TypeError, ValueError):
        return min(fallback, limit)

    count = 0
    for parameter in parameters:
        match parameter.kind:
            case inspect.Parameter.VAR_POSITIONAL:
                return limit
            case inspect.Parameter.POSITIONAL_ONLY | inspect.Parameter.POSITIONAL_OR_KEYWORD:
                count += 1
            case _:
                pass
    return min(count, limit)

def adapt[R](fn: Callable[..., R], limit: int, fallback: int = 1) -> Callable[..., R]:
    """
    Wrap a callback so it can always be called with `limit` positional arguments.

    Extra arguments (index, key) are dropped when fn does not take them:
        adapt(lambda x: x + 1, 2)(1, 0)  # 2
    """
    count = positional_count(fn, limit, fallback)
    if count >= limit:
        return fn

    def call(*args: typing.Any) -> R:
        return fn(*args[:count])

    return call

__all__ = (
    "MISSING",
    "adapt",
    "or_default",
    "positional_count",
)

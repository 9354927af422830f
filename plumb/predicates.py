"""
Type and value checks
=====================

Pure boolean classifiers over arbitrary values and the running environment.
Used by every other module, imports nothing from the engine.
"""

from __future__ import annotations

import asyncio
import inspect
import typing
from collections.abc import Awaitable, Callable, Iterable, Mapping, Sized

from kungfu import LazyCoroResult

from ._helpers import MISSING
from .define import RGX_EMAIL, RGX_WHITESPACE

# ============================================================================
# Containers
# ============================================================================


def is_array(value: typing.Any) -> typing.TypeGuard[list[typing.Any] | tuple[typing.Any, ...]]:
    """Ordered sequence container: list or tuple (str is not an array)."""
    return isinstance(value, (list, tuple))


def is_object(value: typing.Any) -> typing.TypeGuard[Mapping[typing.Any, typing.Any]]:
    """Key-value container: any Mapping."""
    return isinstance(value, Mapping)


def is_collect(value: typing.Any) -> bool:
    """Either container shape."""
    return is_array(value) or is_object(value)


def is_array_like(value: typing.Any) -> bool:
    """Sized and indexable, but not a mapping: lists, tuples, strings, ranges."""
    return isinstance(value, Sized) and hasattr(value, "__getitem__") and not is_object(value)


def is_iterable(value: typing.Any) -> typing.TypeGuard[Iterable[typing.Any]]:
    return isinstance(value, Iterable)


def is_empty(value: typing.Any) -> bool:
    """
    None, or a string/sequence/mapping without items.

    Numbers and booleans are never empty: is_empty(0) is False.
    """
    if value is None or value is MISSING:
        return True
    if isinstance(value, (str, bytes)) or is_collect(value):
        return len(value) == 0
    return False


def is_equal(left: typing.Any, right: typing.Any) -> bool:
    """
    Deep equality that tells booleans from numbers.

    Sequences compare item by item, mappings key by key:
        is_equal([1, {"a": 0}], [1, {"a": 0}])    # True
        is_equal(1, True)                         # False
        is_equal(1, 1.0)                          # True
    """
    if is_boolean(left) or is_boolean(right):
        return type(left) is type(right) and left == right
    if is_array(left) and is_array(right):
        return len(left) == len(right) and all(map(is_equal, left, right))
    if is_object(left) and is_object(right):
        return left.keys() == right.keys() and all(is_equal(left[key], right[key]) for key in left)
    return left == right


# ============================================================================
# Scalars
# ============================================================================


def is_undefined(value: typing.Any) -> bool:
    """Argument that was not supplied at all."""
    return value is MISSING


def is_null(value: typing.Any) -> bool:
    return value is None


def is_nil(value: typing.Any) -> bool:
    """Either undefined or None."""
    return value is None or value is MISSING


def is_boolean(value: typing.Any) -> typing.TypeGuard[bool]:
    return isinstance(value, bool)


def is_number(value: typing.Any) -> typing.TypeGuard[int | float]:
    """int or float. bool is excluded even though it subclasses int."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_integer(value: typing.Any) -> typing.TypeGuard[int]:
    return isinstance(value, int) and not isinstance(value, bool)


def is_float(value: typing.Any) -> typing.TypeGuard[float]:
    return isinstance(value, float)


def is_string(value: typing.Any) -> typing.TypeGuard[str]:
    return isinstance(value, str)


def is_primitive(value: typing.Any) -> bool:
    return value is None or isinstance(value, (str, bytes, int, float, complex))


def is_divisible(value: typing.Any, number: typing.Any) -> bool:
    """value % number == 0, False for non-numbers and zero divisors."""
    if not (is_number(value) and is_number(number)) or number == 0:
        return False
    return value % number == 0


def is_email(value: typing.Any) -> bool:
    return is_string(value) and RGX_EMAIL.match(value) is not None


def is_whitespace(value: typing.Any) -> bool:
    """Empty string or whitespace only."""
    return is_string(value) and RGX_WHITESPACE.match(value) is not None


# ============================================================================
# Callables and deferred values
# ============================================================================


def is_function(value: typing.Any) -> typing.TypeGuard[Callable[..., typing.Any]]:
    return callable(value)


def is_async_function(value: typing.Any) -> bool:
    return inspect.iscoroutinefunction(value)


def is_class(value: typing.Any) -> typing.TypeGuard[type]:
    return inspect.isclass(value)


def is_promise(value: typing.Any) -> typing.TypeGuard[Awaitable[typing.Any]]:
    """
    Pending deferred value: coroutine, Future, Deferred, LazyCoroResult...

    Anything implementing __await__ counts, and so does a kungfu
    LazyCoroResult (its Ok value is what gets settled).
    """
    return inspect.isawaitable(value) or isinstance(value, LazyCoroResult)


# ============================================================================
# Environment
# ============================================================================


def is_event_loop_running() -> bool:
    """True when called from code running inside an asyncio event loop."""
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True


__all__ = (
    "is_array",
    "is_array_like",
    "is_async_function",
    "is_boolean",
    "is_class",
    "is_collect",
    "is_divisible",
    "is_email",
    "is_empty",
    "is_equal",
    "is_event_loop_running",
    "is_float",
    "is_function",
    "is_integer",
    "is_iterable",
    "is_nil",
    "is_null",
    "is_number",
    "is_object",
    "is_primitive",
    "is_promise",
    "is_string",
    "is_undefined",
    "is_whitespace",
)

"""
Math helpers
============

Numeric operations built on the collection engine:

    sum([0.1, 0.2])                 # 0.3
    sum("price", products)          # plucks "price" first
    avg(lambda p: p["qty"], items)  # maps first
    divisible([2, 3], range_list)   # keeps multiples of 6
"""

from __future__ import annotations

import functools
import math
import operator
import typing
from collections.abc import Callable, Sized

from ._errors import TypeKindError
from ._helpers import MISSING
from ._types import Container, Eventual, Path, Sequence
from .collection import filter, map, pluck
from .define import PRECISION
from .dispatch import Variant, operation
from .predicates import is_array, is_divisible, is_function, is_integer, is_number, is_object, is_string

CONTAINERS = (Variant.SEQUENCE, Variant.MAPPING)


def precise(number: int | float) -> int | float:
    """Round floats to PRECISION significant digits, leave ints alone."""
    if is_integer(number) or not math.isfinite(number):
        return number
    return float(f"{number:.{PRECISION}g}")


# ============================================================================
# add
# ============================================================================


@operation(arity=2)
def add(a: typing.Any, b: Eventual[typing.Any]) -> typing.Any:
    """
    a + b for two numbers or two strings; over a container, adds a to every value.

        add(1, 2)          # 3
        add(10, [1, 2])    # [11, 12]
    """


@add.number
def _add_number(a: int | float, b: int | float) -> int | float:
    if not is_number(a):
        raise TypeKindError("add", f"{type(a).__name__} plus a number")
    return a + b


@add.text
def _add_text(a: str, b: str) -> str:
    if not is_string(a):
        raise TypeKindError("add", f"{type(a).__name__} plus a string")
    return a + b


@add.register(*CONTAINERS)
def _add_container(a: typing.Any, container: Container[typing.Any]) -> typing.Any:
    return map(add(a), container)


# ============================================================================
# size / length
# ============================================================================


@operation(arity=1)
def size(value: Eventual[typing.Any]) -> typing.Any:
    """
    Number of items: len() for anything sized (sequences, text, sets), key
    count for mappings, an integer `size` attribute when present, 0 otherwise.
    """


@size.otherwise
def _size(value: typing.Any) -> int:
    if isinstance(value, Sized):
        return len(value)
    attribute = getattr(value, "size", None)
    if is_integer(attribute):
        return attribute
    return 0


def length(value: typing.Any) -> int:
    return len(value)


# ============================================================================
# sum / avg
# ============================================================================


def _numbers(key: Path | Callable[..., typing.Any], container: Container[typing.Any]) -> list[typing.Any]:
    values = list(container.values()) if is_object(container) else list(container)
    if key is MISSING or key is None:
        return values
    if is_string(key):
        return pluck(key, values)
    if is_function(key):
        return map(key, values)
    raise TypeError(f"key must be a path or a callable, not {type(key).__name__}")


def _total(numbers: list[typing.Any]) -> int | float:
    return functools.reduce(operator.add, numbers, 0)


@operation(arity=2, required=1)
def sum(key: Path | Callable[..., typing.Any], container: Eventual[Container[typing.Any]]) -> typing.Any:
    """Total of the values (or of the values at key). 0 for an empty container."""


@sum.register(*CONTAINERS)
def _sum(key: typing.Any, container: Container[typing.Any]) -> int | float:
    return precise(_total(_numbers(key, container)))


@operation(arity=2, required=1)
def avg(key: Path | Callable[..., typing.Any], container: Eventual[Container[typing.Any]]) -> typing.Any:
    """Mean of the values (or of the values at key). math.nan for an empty container."""


@avg.register(*CONTAINERS)
def _avg(key: typing.Any, container: Container[typing.Any]) -> float:
    if not container:
        return math.nan
    return precise(_total(_numbers(key, container)) / len(container))


# ============================================================================
# divisible
# ============================================================================


@operation(arity=2)
def divisible(number: int | Sequence[int], container: Eventual[Container[typing.Any]]) -> typing.Any:
    """Keep values divisible by number, or by every number of a list."""


@divisible.register(*CONTAINERS)
def _divisible(number: typing.Any, container: Container[typing.Any]) -> typing.Any:
    divisors = list(number) if is_array(number) else [number]

    def keep(value: typing.Any) -> bool:
        return all(is_divisible(value, divisor) for divisor in divisors)

    return filter(keep, container)


__all__ = (
    "add",
    "avg",
    "divisible",
    "length",
    "precise",
    "size",
    "sum",
)

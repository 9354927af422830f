"""
Transform operations
====================

Shape-preserving traversals and combinators over sequences and mappings.
All of them are pure except each(), which exists for its side effects.
"""

from __future__ import annotations

import math
import typing
from collections.abc import Awaitable, Callable

from .._errors import EmptyCollectionError, TypeKindError
from .._helpers import MISSING, adapt, or_default
from .._types import Callback, Container, Eventual, Mapping, Predicate, Sequence
from ..deferred import Deferred, settle_value
from ..dispatch import Variant, operation
from ..path import items_of
from ..predicates import is_array, is_empty, is_equal, is_integer, is_number, is_object, is_promise

CONTAINERS = (Variant.SEQUENCE, Variant.MAPPING)


def _kept_by_default(value: typing.Any, key: typing.Any = None) -> bool:
    """Default filter rule: drop None and empty strings/containers, keep 0 and False."""
    _ = key
    return not is_empty(value)


def _keeper(fn: typing.Any) -> Callable[..., typing.Any]:
    if fn is MISSING or fn is None:
        return _kept_by_default
    return adapt(fn, 2)


# ============================================================================
# map / filter / reduce
# ============================================================================


@operation(arity=2)
def map(fn: Callback[typing.Any, typing.Any], container: Eventual[Container[typing.Any]]) -> typing.Any:
    """
    Apply fn to every value, keeping the container's shape.

    Sequences call fn(item, index), mappings call fn(value, key):
        map(lambda x: x + 10, [1, 2])          # [11, 12]
        map(lambda x: x + 10, {"apple": 5})    # {"apple": 15}
    """


@map.sequence
def _map_sequence[T, R](fn: Callback[T, R], items: Sequence[T]) -> list[R]:
    call = adapt(fn, 2)
    return [call(item, index) for index, item in enumerate(items)]


@map.mapping
def _map_mapping[K, T, R](fn: Callback[T, R], mapping: Mapping[K, T]) -> dict[K, R]:
    call = adapt(fn, 2)
    return {key: call(value, key) for key, value in mapping.items()}


@operation(arity=2, required=1)
def filter(fn: Predicate[typing.Any], container: Eventual[Container[typing.Any]]) -> typing.Any:
    """
    Keep entries for which fn(value, key) is truthy.

    Without fn, keeps every "useful" value: 0, False and non-empty values
    stay; None, "", [] and {} are dropped.
    """


@filter.sequence
def _filter_sequence[T](fn: Predicate[T], items: Sequence[T]) -> list[T]:
    keep = _keeper(fn)
    return [item for index, item in enumerate(items) if keep(item, index)]


@filter.mapping
def _filter_mapping[K, T](fn: Predicate[T], mapping: Mapping[K, T]) -> dict[K, T]:
    keep = _keeper(fn)
    return {key: value for key, value in mapping.items() if keep(value, key)}


@operation(arity=3, required=2)
def reduce(
    fn: Callable[..., typing.Any],
    seed: typing.Any,
    container: Eventual[Container[typing.Any]],
) -> typing.Any:
    """
    Left fold: fn(accumulator, value, key).

    Without a seed the first value seeds the fold; an empty container
    without a seed raises EmptyCollectionError.
    """


@reduce.register(*CONTAINERS)
def _reduce[T, A](fn: Callable[..., A], seed: A, container: Container[T]) -> A:
    call = adapt(fn, 3, fallback=2)
    pairs = items_of(container)
    if seed is MISSING:
        try:
            _, accumulator = next(pairs)
        except StopIteration:
            raise EmptyCollectionError("reduce") from None
    else:
        accumulator = seed
    for key, value in pairs:
        accumulator = call(accumulator, value, key)
    return accumulator


# ============================================================================
# each
# ============================================================================


async def _each_async(
    call: Callable[..., typing.Any],
    pending: Awaitable[typing.Any],
    remaining: list[tuple[typing.Any, typing.Any]],
    container: typing.Any,
) -> typing.Any:
    await settle_value(pending)
    for first, second in remaining:
        await settle_value(call(first, second))
    return container


@operation(arity=2)
def each(fn: Callable[..., typing.Any], container: Eventual[Container[typing.Any]]) -> typing.Any:
    """
    Call fn for every entry in order and return the container.

    Sequences call fn(item, index); mappings call fn(key, value).
    When fn returns an awaitable, the rest of the traversal waits for it
    item by item and each() returns a Deferred of the container.
    """


@each.register(*CONTAINERS)
def _each[C](fn: Callable[..., typing.Any], container: C) -> C | Deferred[C]:
    call = adapt(fn, 2)
    if is_object(container):
        arguments = list(container.items())
    else:
        arguments = [(item, index) for index, item in enumerate(container)]

    for position, (first, second) in enumerate(arguments):
        outcome = call(first, second)
        if is_promise(outcome):
            return Deferred.attempt(
                _each_async, call, outcome, arguments[position + 1 :], container
            )
    return container


# ============================================================================
# Shape-changing
# ============================================================================


def _flatten(items: typing.Iterable[typing.Any], depth: float) -> list[typing.Any]:
    flattened: list[typing.Any] = []
    for item in items:
        if depth >= 1 and is_array(item):
            flattened.extend(_flatten(item, depth - 1))
        else:
            flattened.append(item)
    return flattened


def _depth(depth: typing.Any) -> float:
    depth = or_default(depth, 1)
    if not is_number(depth) or depth < 0:
        raise ValueError("flat depth must be a number >= 0")
    return depth


@operation(arity=2, required=1)
def flat(depth: float, container: Eventual[Container[typing.Any]]) -> typing.Any:
    """
    Flatten nested sequences up to depth levels (default 1, math.inf = all).

    Mappings flatten their values into one list, keys are discarded.
    """


@flat.sequence
def _flat_sequence(depth: float, items: Sequence[typing.Any]) -> list[typing.Any]:
    return _flatten(items, _depth(depth))


@flat.mapping
def _flat_mapping(depth: float, mapping: Mapping[typing.Any, typing.Any]) -> list[typing.Any]:
    return _flatten(mapping.values(), _depth(depth))


def _chunk_size(size: typing.Any) -> int:
    if not is_integer(size) or size < 1:
        raise ValueError("chunk size must be an integer >= 1")
    return size


@operation(arity=2)
def chunk(size: int, container: Eventual[Container[typing.Any]]) -> typing.Any:
    """
    Split into consecutive groups of at most size entries.

        chunk(2, [1, 2, 3])                  # [[1, 2], [3]]
        chunk(2, {"a": 1, "b": 2, "c": 3})   # [{"a": 1, "b": 2}, {"c": 3}]
    """


@chunk.sequence
def _chunk_sequence[T](size: int, items: Sequence[T]) -> list[list[T]]:
    size = _chunk_size(size)
    return [list(items[start : start + size]) for start in range(0, len(items), size)]


@chunk.mapping
def _chunk_mapping[K, T](size: int, mapping: Mapping[K, T]) -> list[dict[K, T]]:
    size = _chunk_size(size)
    pairs = list(mapping.items())
    return [dict(pairs[start : start + size]) for start in range(0, len(pairs), size)]


@operation(arity=2)
def split(separator: str | int, container: Eventual[str | Sequence[typing.Any]]) -> typing.Any:
    """
    Split text on a separator, or a sequence into that many near-equal parts.

        split("&", "id=1&book=5")   # ["id=1", "book=5"]
        split(3, [1, 2, 3, 4, 5])   # [[1, 2], [3, 4], [5]]
    """


@split.text
def _split_text(separator: str, text: str) -> list[str]:
    return text.split(separator)


@split.sequence
def _split_sequence[T](parts: int, items: Sequence[T]) -> list[list[T]]:
    parts = _chunk_size(parts)
    if not items:
        return []
    return _chunk_sequence(math.ceil(len(items) / parts), items)


# ============================================================================
# Combining
# ============================================================================


@operation(arity=2)
def merge(seed: typing.Any, container: Eventual[Container[typing.Any]]) -> typing.Any:
    """
    Combine seed into the container, returning a new one.

    Sequences: container items first, then seed items.
    Mappings: container keys first, seed overlaid on top (seed wins on conflict).
    """


@merge.sequence
def _merge_sequence[T](seed: Sequence[T], items: Sequence[T]) -> list[T]:
    if not is_array(seed):
        raise TypeKindError("merge", f"{type(seed).__name__} seed for a sequence")
    return [*items, *seed]


@merge.mapping
def _merge_mapping[K, T](seed: Mapping[K, T], mapping: Mapping[K, T]) -> dict[K, T]:
    if not is_object(seed):
        raise TypeKindError("merge", f"{type(seed).__name__} seed for a mapping")
    return {**mapping, **seed}


@operation(arity=2)
def diff(base: typing.Any, container: Eventual[Container[typing.Any]]) -> typing.Any:
    """
    Entries of container that base does not have.

    Sequences keep container order and duplicates; mappings keep entries
    whose key is missing from base or whose value differs. Values compare
    with is_equal, so True and 1 differ.
    """


@diff.sequence
def _diff_sequence[T](base: Sequence[T], items: Sequence[T]) -> list[T]:
    if not is_array(base):
        raise TypeKindError("diff", f"{type(base).__name__} base for a sequence")
    return [item for item in items if not any(is_equal(item, other) for other in base)]


@diff.mapping
def _diff_mapping[K, T](base: Mapping[K, T], mapping: Mapping[K, T]) -> dict[K, T]:
    if not is_object(base):
        raise TypeKindError("diff", f"{type(base).__name__} base for a mapping")
    return {
        key: value
        for key, value in mapping.items()
        if key not in base or not is_equal(base[key], value)
    }


@operation(arity=2)
def apply(fn: Callable[..., typing.Any], container: Eventual[Container[typing.Any]]) -> typing.Any:
    """Call fn with the values as positional arguments."""


@apply.sequence
def _apply_sequence[R](fn: Callable[..., R], items: Sequence[typing.Any]) -> R:
    return fn(*items)


@apply.mapping
def _apply_mapping[R](fn: Callable[..., R], mapping: Mapping[typing.Any, typing.Any]) -> R:
    return fn(*mapping.values())


@operation(arity=1)
def reverse(container: Eventual[Container[typing.Any] | str]) -> typing.Any:
    """New container with the order reversed."""


@reverse.sequence
def _reverse_sequence[T](items: Sequence[T]) -> list[T]:
    return list(items[::-1])


@reverse.mapping
def _reverse_mapping[K, T](mapping: Mapping[K, T]) -> dict[K, T]:
    return dict(list(mapping.items())[::-1])


@reverse.text
def _reverse_text(text: str) -> str:
    return text[::-1]


__all__ = (
    "apply",
    "chunk",
    "diff",
    "each",
    "filter",
    "flat",
    "map",
    "merge",
    "reduce",
    "reverse",
    "split",
)

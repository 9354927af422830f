"""
Mutating operations
===================

push, pop, shift, splice and remove change the container they are given
(tuples and read-only mappings are rejected). slice, prepend and loop are
grouped here because they share the index handling, but they are pure.
"""

from __future__ import annotations

import typing
from collections.abc import Callable, MutableMapping

from .._errors import TypeKindError
from .._helpers import MISSING, adapt
from .._types import Container, Eventual, Mapping, Sequence
from ..dispatch import operation
from ..predicates import is_array, is_integer


def _mutable_list[T](operation_name: str, items: Sequence[T]) -> list[T]:
    if not isinstance(items, list):
        raise TypeKindError(operation_name, type(items).__name__)
    return items


def _mutable_mapping[K, T](operation_name: str, mapping: Mapping[K, T]) -> MutableMapping[K, T]:
    if not isinstance(mapping, MutableMapping):
        raise TypeKindError(operation_name, type(mapping).__name__)
    return mapping


def _count(count: typing.Any) -> int | None:
    if count is MISSING:
        return None
    if not is_integer(count) or count < 0:
        raise ValueError("count must be an integer >= 0")
    return count


# ============================================================================
# Adding
# ============================================================================


@operation(arity=3, required=2)
def push(item: typing.Any, spread: typing.Any, container: Eventual[Container[typing.Any]]) -> typing.Any:
    """
    Append in place and return the container.

        push(4, items)              # items.append(4)
        push([4, 5], True, items)   # items.extend([4, 5])
        push("birth", 384, person)  # person["birth"] = 384
    """


@push.sequence
def _push_sequence[T](item: typing.Any, spread: typing.Any, items: Sequence[T]) -> list[T]:
    items = _mutable_list("push", items)
    if spread is not MISSING and spread and is_array(item):
        items.extend(item)
    else:
        items.append(item)
    return items


@push.mapping
def _push_mapping[K, T](key: K, value: T, mapping: Mapping[K, T]) -> MutableMapping[K, T]:
    if value is MISSING:
        raise TypeError("push() needs a key and a value for mappings")
    mapping = _mutable_mapping("push", mapping)
    mapping[key] = value
    return mapping


@operation(arity=3, required=2)
def prepend(item: typing.Any, value: typing.Any, container: Eventual[Container[typing.Any] | str]) -> typing.Any:
    """
    New container with item first (a sequence item is spread).

        prepend([0, 14], [1, 2])                        # [0, 14, 1, 2]
        prepend("brand", "Google", {"product": "OS"})   # {"brand": "Google", "product": "OS"}
        prepend("?", "id=1")                            # "?id=1"
    """


@prepend.sequence
def _prepend_sequence[T](item: typing.Any, value: typing.Any, items: Sequence[T]) -> list[T]:
    _ = value
    head = list(item) if is_array(item) else [item]
    return [*head, *items]


@prepend.mapping
def _prepend_mapping[K, T](key: K, value: T, mapping: Mapping[K, T]) -> dict[K, T]:
    if value is MISSING:
        raise TypeError("prepend() needs a key and a value for mappings")
    return {key: value, **{k: v for k, v in mapping.items() if k != key}}


@prepend.text
def _prepend_text(prefix: typing.Any, value: typing.Any, text: str) -> str:
    _ = value
    return f"{prefix}{text}"


# ============================================================================
# Removing
# ============================================================================


@operation(arity=2, required=1)
def pop(count: int, container: Eventual[Container[typing.Any]]) -> typing.Any:
    """
    Remove from the end in place.

    Without count returns the removed value (None when empty); with count
    returns the removed entries as a list or dict.
    """


@pop.sequence
def _pop_sequence(count: typing.Any, items: Sequence[typing.Any]) -> typing.Any:
    items = _mutable_list("pop", items)
    count = _count(count)
    if count is None:
        return items.pop() if items else None
    cut = max(len(items) - count, 0)
    removed = items[cut:]
    del items[cut:]
    return removed


@pop.mapping
def _pop_mapping(count: typing.Any, mapping: Mapping[typing.Any, typing.Any]) -> typing.Any:
    mapping = _mutable_mapping("pop", mapping)
    count = _count(count)
    names = list(mapping)
    if count is None:
        return mapping.pop(names[-1]) if names else None
    return {name: mapping.pop(name) for name in names[max(len(names) - count, 0) :]}


@operation(arity=2, required=1)
def shift(count: int, container: Eventual[Container[typing.Any]]) -> typing.Any:
    """Remove from the front in place. Same return rules as pop()."""


@shift.sequence
def _shift_sequence(count: typing.Any, items: Sequence[typing.Any]) -> typing.Any:
    items = _mutable_list("shift", items)
    count = _count(count)
    if count is None:
        return items.pop(0) if items else None
    removed = items[:count]
    del items[:count]
    return removed


@shift.mapping
def _shift_mapping(count: typing.Any, mapping: Mapping[typing.Any, typing.Any]) -> typing.Any:
    mapping = _mutable_mapping("shift", mapping)
    count = _count(count)
    names = list(mapping)
    if count is None:
        return mapping.pop(names[0]) if names else None
    return {name: mapping.pop(name) for name in names[:count]}


@operation(arity=2)
def remove(keys: typing.Any, container: Eventual[Container[typing.Any]]) -> typing.Any:
    """
    Remove keys in place and return the container.

    Sequence positions are blanked with None (indices stay stable);
    mapping keys are deleted.
    """


def _key_list(keys: typing.Any) -> list[typing.Any]:
    return list(keys) if is_array(keys) else [keys]


@remove.sequence
def _remove_sequence[T](keys: typing.Any, items: Sequence[T]) -> list[T | None]:
    blanked: list[T | None] = _mutable_list("remove", items)
    for index in _key_list(keys):
        if is_integer(index) and -len(blanked) <= index < len(blanked):
            blanked[index] = None
    return blanked


@remove.mapping
def _remove_mapping[K, T](keys: typing.Any, mapping: Mapping[K, T]) -> MutableMapping[K, T]:
    mapping = _mutable_mapping("remove", mapping)
    for key in _key_list(keys):
        mapping.pop(key, None)
    return mapping


# ============================================================================
# Index ranges
# ============================================================================


def _start(start: typing.Any, size: int) -> int:
    if not is_integer(start):
        raise TypeError(f"start index must be an integer, not {type(start).__name__}")
    if start < 0:
        return max(size + start, 0)
    return min(start, size)


@operation(arity=2)
def splice(spec: typing.Any, container: Eventual[Sequence[typing.Any]]) -> typing.Any:
    """
    Remove (and optionally replace) a range in place, returning what was removed.

        splice(2, items)                  # remove from index 2 to the end
        splice([2, 1], items)             # remove one item at index 2
        splice([2, 1, [10, 11]], items)   # ...and insert 10, 11 in its place
    """


@splice.sequence
def _splice[T](spec: typing.Any, items: Sequence[T]) -> list[T]:
    items = _mutable_list("splice", items)
    start, count, insert = (list(spec) + [MISSING, MISSING])[:3] if is_array(spec) else (spec, MISSING, MISSING)
    start = _start(start, len(items))
    end = len(items) if count is MISSING else start + max(count, 0)
    removed = items[start:end]
    items[start:end] = [] if insert is MISSING else _key_list(insert)
    return removed


@operation(arity=2)
def slice(spec: typing.Any, container: Eventual[Container[typing.Any] | str]) -> typing.Any:
    """
    Copy a range without touching the input.

        slice(4, items)           # items[4:]
        slice([4, 2], items)      # two items from index 4
        slice([0, 3, 2], items)   # three items from index 0, every second one
    """


def _range(spec: typing.Any, size: int) -> tuple[int, int | None, int]:
    start, length, step = (list(spec) + [MISSING, MISSING])[:3] if is_array(spec) else (spec, MISSING, MISSING)
    step = 1 if step is MISSING else step
    if not is_integer(step) or step < 1:
        raise ValueError("slice step must be an integer >= 1")
    start = _start(start, size)
    stop = None if length is MISSING else start + max(length, 0) * step
    return start, stop, step


@slice.sequence
def _slice_sequence[T](spec: typing.Any, items: Sequence[T]) -> list[T]:
    start, stop, step = _range(spec, len(items))
    return list(items[start:stop:step])


@slice.mapping
def _slice_mapping[K, T](spec: typing.Any, mapping: Mapping[K, T]) -> dict[K, T]:
    return dict(_slice_sequence(spec, list(mapping.items())))


@slice.text
def _slice_text(spec: typing.Any, text: str) -> str:
    start, stop, step = _range(spec, len(text))
    return text[start:stop:step]


# ============================================================================
# Counting
# ============================================================================


@operation(arity=2)
def loop(fn: Callable[..., typing.Any], count: Eventual[int]) -> typing.Any:
    """Call fn(index) for index in range(count)."""


@loop.number
def _loop(fn: Callable[..., typing.Any], count: int) -> None:
    call = adapt(fn, 1)
    for index in range(int(count)):
        call(index)


__all__ = (
    "loop",
    "pop",
    "prepend",
    "push",
    "remove",
    "shift",
    "slice",
    "splice",
)

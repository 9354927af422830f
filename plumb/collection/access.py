"""
Access operations
=================

Reading values out of containers: path plucking, key/value views,
membership and search. Nothing here mutates its input.
"""

from __future__ import annotations

import typing
from collections.abc import Callable

from .._helpers import MISSING, adapt, or_default
from .._types import Container, Eventual, Mapping, Path, Sequence
from ..define import RAW_COMMA, RAW_EMPTY
from ..dispatch import Variant, operation
from ..path import items_of, lookup, resolve, walk
from ..predicates import is_function, is_object
from .transform import CONTAINERS


def _matcher(needle: typing.Any) -> Callable[..., typing.Any]:
    """Callable needles are called with (value, key), anything else is compared."""
    if is_function(needle):
        return adapt(needle, 2)

    def equals(value: typing.Any, key: typing.Any) -> bool:
        _ = key
        return value == needle

    return equals


# ============================================================================
# Paths
# ============================================================================


@operation(arity=None, required=2)
def pluck(*paths_and_container: typing.Any) -> typing.Any:
    """
    Pull values out of every element by dotted path.

    A mapping is treated as a one-element sequence. Missing values are
    omitted; a "*" segment yields one nested list per element:
        pluck("roles.*.name", users)   # [["Editor", "Admin"], ...]

    With two paths the result is a mapping keyed by the second:
        pluck("name", "subs.id", users)  # {17: "Thomas", 18: "Edison"}
    """


@pluck.register(*CONTAINERS)
def _pluck(*args: typing.Any) -> list[typing.Any] | dict[typing.Any, typing.Any]:
    *paths, container = args
    elements = [container] if is_object(container) else container
    match paths:
        case [path]:
            values = (lookup(path, element) for element in elements)
            return [value for value in values if value is not MISSING]
        case [value_path, key_path]:
            return {
                resolve(key_path, element): resolve(value_path, element)
                for element in elements
            }
        case _:
            raise TypeError(f"pluck() takes one or two paths ({len(paths)} given)")


@operation(arity=2)
def value(path: Path, container: Eventual[Container[typing.Any]]) -> typing.Any:
    """
    Resolve a path in a mapping, or in every element of a sequence.

        value("roles.1.name", user)   # "Admin"
        value("type", nodes)          # ["element", "text"]
    """


@value.mapping
def _value_mapping(path: Path, mapping: Mapping[typing.Any, typing.Any]) -> typing.Any:
    return resolve(path, mapping)


@value.sequence
def _value_sequence(path: Path, items: Sequence[typing.Any]) -> list[typing.Any]:
    return [resolve(path, item) for item in items]


@operation(arity=1)
def key_map(container: Eventual[Container[typing.Any]]) -> typing.Any:
    """
    Index every dotted path of a nested container, ancestors included.

        key_map([{"roles": [{"name": "Editor"}]}])
        # {"0": {...}, "0.roles": [...], "0.roles.0": {...}, "0.roles.0.name": "Editor"}
    """


@key_map.register(*CONTAINERS)
def _key_map(container: Container[typing.Any]) -> dict[str, typing.Any]:
    return dict(walk(container))


# ============================================================================
# Views
# ============================================================================


@operation(arity=1)
def keys(container: Eventual[Container[typing.Any]]) -> typing.Any:
    """Keys of a mapping, indices of a sequence."""


@keys.register(*CONTAINERS)
def _keys(container: Container[typing.Any]) -> list[typing.Any]:
    return [key for key, _ in items_of(container)]


@operation(arity=1)
def values(container: Eventual[Container[typing.Any]]) -> typing.Any:
    """Values as a list."""


@values.register(*CONTAINERS)
def _values(container: Container[typing.Any]) -> list[typing.Any]:
    return [item for _, item in items_of(container)]


@operation(arity=1)
def entries(container: Eventual[Container[typing.Any]]) -> typing.Any:
    """(key, value) pairs as a list."""


@entries.register(*CONTAINERS)
def _entries(container: Container[typing.Any]) -> list[tuple[typing.Any, typing.Any]]:
    return list(items_of(container))


# ============================================================================
# Membership and search
# ============================================================================


@operation(arity=2)
def has(needle: typing.Any, container: Eventual[Container[typing.Any] | str]) -> typing.Any:
    """Substring of text, item of a sequence, key of a mapping."""


@has.register(Variant.TEXT, Variant.SEQUENCE, Variant.MAPPING)
def _has(needle: typing.Any, container: typing.Any) -> bool:
    return needle in container


@operation(arity=2)
def every(fn: Callable[..., typing.Any], container: Eventual[Container[typing.Any]]) -> typing.Any:
    """True when fn(value, key) is truthy for every entry (and for empty containers)."""


@every.register(*CONTAINERS)
def _every(fn: Callable[..., typing.Any], container: Container[typing.Any]) -> bool:
    call = adapt(fn, 2)
    return all(call(item, key) for key, item in items_of(container))


@operation(arity=3, required=2)
def some(needle: typing.Any, expected: typing.Any, container: Eventual[Container[typing.Any]]) -> typing.Any:
    """
    True when any entry matches.

    some(fn, c)            - fn(value, key) truthy for some entry
    some(x, sequence)      - x is an item
    some(x, mapping)       - x is a key or a value
    some(path, v, c)       - the value at path equals v
    """


@some.register(*CONTAINERS)
def _some(needle: typing.Any, expected: typing.Any, container: Container[typing.Any]) -> bool:
    if expected is not MISSING:
        return lookup(needle, container) == expected
    if is_function(needle):
        call = adapt(needle, 2)
        return any(call(item, key) for key, item in items_of(container))
    if is_object(container):
        return needle in container or needle in container.values()
    return needle in container


@operation(arity=2, required=1)
def last(fn: Callable[..., typing.Any], container: Eventual[Container[typing.Any]]) -> typing.Any:
    """Last value (the last one satisfying fn, when given), None when there is none."""


@last.register(*CONTAINERS)
def _last(fn: typing.Any, container: Container[typing.Any]) -> typing.Any:
    pairs = list(items_of(container))
    if fn is MISSING:
        return pairs[-1][1] if pairs else None
    call = adapt(fn, 2)
    for key, item in reversed(pairs):
        if call(item, key):
            return item
    return None


@operation(arity=2)
def take(count: int, container: Eventual[Container[typing.Any]]) -> typing.Any:
    """First count entries, or the last -count entries for negative counts."""


@take.sequence
def _take_sequence[T](count: int, items: Sequence[T]) -> list[T]:
    return list(items[:count] if count >= 0 else items[count:])


@take.mapping
def _take_mapping[K, T](count: int, mapping: Mapping[K, T]) -> dict[K, T]:
    return dict(_take_sequence(count, list(mapping.items())))


@operation(arity=2)
def take_until(needle: typing.Any, container: Eventual[Container[typing.Any]]) -> typing.Any:
    """Entries before the first one equal to needle (or satisfying it, when callable)."""


@take_until.sequence
def _take_until_sequence[T](needle: typing.Any, items: Sequence[T]) -> list[T]:
    stop = _matcher(needle)
    taken: list[T] = []
    for index, item in enumerate(items):
        if stop(item, index):
            break
        taken.append(item)
    return taken


@take_until.mapping
def _take_until_mapping[K, T](needle: typing.Any, mapping: Mapping[K, T]) -> dict[K, T]:
    stop = _matcher(needle)
    taken: dict[K, T] = {}
    for key, item in mapping.items():
        if stop(item, key):
            break
        taken[key] = item
    return taken


# ============================================================================
# Joining
# ============================================================================


def _text(item: typing.Any) -> str:
    return RAW_EMPTY if item is None else str(item)


@operation(arity=3, required=1)
def join(separator: str, final: str, container: Eventual[Container[typing.Any]]) -> typing.Any:
    """
    Join values into text (default separator ",").

        join(", ", ", and ", ["a", "b", "c"])   # "a, b, and c"
    """


@join.register(*CONTAINERS)
def _join(separator: typing.Any, final: typing.Any, container: Container[typing.Any]) -> str:
    separator = or_default(separator, RAW_COMMA)
    texts = [_text(item) for _, item in items_of(container)]
    if final is MISSING or len(texts) < 2:
        return separator.join(texts)
    return separator.join(texts[:-1]) + final + texts[-1]


@operation(arity=3, required=2)
def implode(path: Path, separator: str, container: Eventual[Container[typing.Any]]) -> typing.Any:
    """
    Join values, or the values plucked at path, with separator.

        implode("-", [1, 2, 3])                   # "1-2-3"
        implode("product", ", ", products)        # "ChromeOS, ChatGPT"
    """


@implode.register(*CONTAINERS)
def _implode(path: typing.Any, separator: typing.Any, container: Container[typing.Any]) -> str:
    if separator is MISSING:
        # implode(separator, container)
        return _join(path, MISSING, container)
    return _join(separator, MISSING, _pluck(path, container))


__all__ = (
    "entries",
    "every",
    "has",
    "implode",
    "join",
    "key_map",
    "keys",
    "last",
    "pluck",
    "some",
    "take",
    "take_until",
    "value",
    "values",
)

"""
Path resolver
=============

Read-only addressing of nested containers with dotted paths:

    resolve("roles.0.name", user)        # "Editor"
    resolve("roles.*.name", user)        # ["Editor", "Admin"]
    resolve("roles.9.name", user)        # None

A "*" segment broadcasts the rest of the path over every element at that
position. Missing steps never raise.
"""

from __future__ import annotations

import typing
from collections.abc import Iterator

from ._helpers import MISSING
from ._types import Container, Path
from .define import PATH_SEPARATOR, WILDCARD
from .predicates import is_array, is_collect, is_object


def split_path(path: Path | int) -> list[str]:
    """Segments of a path. Integers address a single index."""
    return str(path).split(PATH_SEPARATOR)


def items_of(container: Container[typing.Any]) -> Iterator[tuple[typing.Any, typing.Any]]:
    """(key, value) pairs: indices for sequences, keys for mappings."""
    if is_array(container):
        return enumerate(container)
    if is_object(container):
        return iter(container.items())
    return iter(())


def _step(node: typing.Any, segment: str) -> typing.Any:
    if is_array(node):
        if not segment.isdecimal():
            return MISSING
        index = int(segment)
        return node[index] if index < len(node) else MISSING
    if is_object(node):
        if segment in node:
            return node[segment]
        # dict keys may be integers, paths are always text
        if segment.lstrip("-").isdecimal() and int(segment) in node:
            return node[int(segment)]
    return MISSING


def _lookup(segments: list[str], node: typing.Any) -> typing.Any:
    for position, segment in enumerate(segments):
        if segment == WILDCARD:
            if not is_collect(node):
                return MISSING
            rest = segments[position + 1 :]
            elements = [value for _, value in items_of(node)]
            if not rest:
                return elements
            return [resolve_segments(rest, element) for element in elements]
        node = _step(node, segment)
        if node is MISSING:
            return MISSING
    return node


def resolve_segments(segments: list[str], container: typing.Any, default: typing.Any = None) -> typing.Any:
    value = _lookup(segments, container)
    return default if value is MISSING else value


def lookup(path: Path | int, container: typing.Any) -> typing.Any:
    """Value at path, or the MISSING sentinel (distinguishes absent from None)."""
    if path == "":
        return container
    return _lookup(split_path(path), container)


def resolve(path: Path | int, container: typing.Any, default: typing.Any = None) -> typing.Any:
    """Value at path, or default when any step is missing."""
    value = lookup(path, container)
    return default if value is MISSING else value


def walk(container: typing.Any, prefix: str = "") -> Iterator[tuple[str, typing.Any]]:
    """
    Every (dotted path, value) pair in a nested container, depth first.

    Ancestors come before their descendants:
        list(walk({"a": {"b": 1}}))  # [("a", {"b": 1}), ("a.b", 1)]
    """
    for key, value in items_of(container):
        path = f"{prefix}{PATH_SEPARATOR}{key}" if prefix else str(key)
        yield path, value
        if is_collect(value):
            yield from walk(value, path)


__all__ = (
    "items_of",
    "lookup",
    "resolve",
    "resolve_segments",
    "split_path",
    "walk",
)

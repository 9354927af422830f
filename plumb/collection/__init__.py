from .access import (
    entries,
    every,
    has,
    implode,
    join,
    key_map,
    keys,
    last,
    pluck,
    some,
    take,
    take_until,
    value,
    values,
)
from .mutate import loop, pop, prepend, push, remove, shift, slice, splice
from .transform import apply, chunk, diff, each, filter, flat, map, merge, reduce, reverse, split

__all__ = (
    # Transform
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
    # Access
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
    # Mutate
    "loop",
    "pop",
    "prepend",
    "push",
    "remove",
    "shift",
    "slice",
    "splice",
)

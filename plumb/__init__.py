"""
Curried, deferred-aware helpers for plain Python data.

Predicates, collection operations over lists/tuples and mappings, numeric
and string helpers, all sharing one calling convention:
- the container comes last
- fewer arguments give a reusable Partial
- an awaitable container gives a Deferred of the result

Architecture:
- dispatch.Operation: arity -> deferred -> variant resolution
- deferred.Deferred: single-resolution value on kungfu.Result
- compose.pipe: point-free composition of the above
"""

# Core types
from ._types import Callback, Container, Eventual, Path, Predicate

# Errors
from ._errors import EmptyCollectionError, TypeKindError

# Internal helpers (for custom operations)
from . import _helpers
from ._helpers import MISSING

# Constants
from . import define

# Predicates
from . import predicates
from .predicates import (
    is_array,
    is_array_like,
    is_async_function,
    is_boolean,
    is_class,
    is_collect,
    is_divisible,
    is_email,
    is_empty,
    is_equal,
    is_event_loop_running,
    is_float,
    is_function,
    is_integer,
    is_iterable,
    is_nil,
    is_null,
    is_number,
    is_object,
    is_primitive,
    is_promise,
    is_string,
    is_undefined,
    is_whitespace,
)

# Deferred values
from .deferred import Deferred, Outcome

# Dispatch
from .dispatch import Operation, Partial, Variant, operation, variant_of

# Path resolver
from .path import lookup, resolve, walk

# Collection engine
from . import collection
from .collection import (
    apply,
    chunk,
    diff,
    each,
    entries,
    every,
    filter,
    flat,
    has,
    implode,
    join,
    key_map,
    keys,
    last,
    loop,
    map,
    merge,
    pluck,
    pop,
    prepend,
    push,
    reduce,
    remove,
    reverse,
    shift,
    slice,
    some,
    splice,
    split,
    take,
    take_until,
    value,
    values,
)

# Math
from . import math
from .math import add, avg, divisible, length, size, sum

# Strings
from . import string
from .string import lower, remove_punct, sub, supplant, ucfirst, ucwords, upper, validate, words

# Composition
from .compose import pipe, pipe_traced
from .trace import Stage, Trace

__all__ = (
    # Types
    "Callback",
    "Container",
    "Eventual",
    "Path",
    "Predicate",
    # Errors
    "EmptyCollectionError",
    "TypeKindError",
    # Helpers
    "MISSING",
    "_helpers",
    # Namespaces
    "collection",
    "define",
    "math",
    "predicates",
    "string",
    # Predicates
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
    # Deferred
    "Deferred",
    "Outcome",
    # Dispatch
    "Operation",
    "Partial",
    "Variant",
    "operation",
    "variant_of",
    # Path
    "lookup",
    "resolve",
    "walk",
    # Collection
    "apply",
    "chunk",
    "diff",
    "each",
    "entries",
    "every",
    "filter",
    "flat",
    "has",
    "implode",
    "join",
    "key_map",
    "keys",
    "last",
    "loop",
    "map",
    "merge",
    "pluck",
    "pop",
    "prepend",
    "push",
    "reduce",
    "remove",
    "reverse",
    "shift",
    "slice",
    "some",
    "splice",
    "split",
    "take",
    "take_until",
    "value",
    "values",
    # Math
    "add",
    "avg",
    "divisible",
    "length",
    "size",
    "sum",
    # Strings
    "lower",
    "remove_punct",
    "sub",
    "supplant",
    "ucfirst",
    "ucwords",
    "upper",
    "validate",
    "words",
    # Composition
    "Stage",
    "Trace",
    "pipe",
    "pipe_traced",
)

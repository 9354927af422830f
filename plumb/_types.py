"""
Core type definitions for plumb.

Aliases for the container shapes, eventual values and callbacks
that operations accept.
"""

from __future__ import annotations

import typing
from collections.abc import Awaitable, Callable, Hashable
from collections.abc import Mapping as AbstractMapping

# ============================================================================
# Type aliases
# ============================================================================

# Ordered sequence container (results are always list)
type Sequence[T] = list[T] | tuple[T, ...]

# Key-value container (results are always dict)
type Mapping[K, T] = AbstractMapping[K, T]

# Container = the two shapes every engine operation handles
type Container[T] = Sequence[T] | Mapping[Hashable, T]

# Maybe-deferred container: anything awaitable that settles into a container
type Eventual[T] = T | Awaitable[T]

# Callback = per-item function, called with (value, key_or_index)
type Callback[T, R] = Callable[..., R]

# Predicate = callback whose result is used for its truthiness
type Predicate[T] = Callable[..., typing.Any]

# Path = dot-separated address, "*" broadcasts over sequences
type Path = str

__all__ = (
    "Callback",
    "Container",
    "Eventual",
    "Mapping",
    "Path",
    "Predicate",
    "Sequence",
)

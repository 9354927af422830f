"""
Trace - stage log for traced pipes
==================================
"""

from __future__ import annotations

import typing
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Stage:
    """One pipe step: the callable's name and what it returned (settled)."""

    name: str
    result: typing.Any


class Trace(list[Stage]):
    """
    Ordered log of pipe stages.

    Monoidal list, every operation returns a new Trace:
    - empty: Trace()
    - combine: concatenation
    - tell: append one stage

    Laws:
    - Left identity: Trace().combine(x) == x
    - Right identity: x.combine(Trace()) == x
    - Associativity: (x.combine(y)).combine(z) == x.combine(y.combine(z))
    """

    @staticmethod
    def of(*stages: Stage) -> Trace:
        """Create a trace with stages."""
        return Trace(stages)

    def combine(self, other: Trace, /) -> Trace:
        """
        Concatenate two traces.

        Example:
            Trace.of(a, b).combine(Trace.of(c))  # Trace([a, b, c])
        """
        result = Trace(self)
        result.extend(other)
        return result

    def tell(self, stage: Stage, /) -> Trace:
        """Append a single stage."""
        result = Trace(self)
        result.append(stage)
        return result

    @property
    def names(self) -> list[str]:
        return [stage.name for stage in self]


__all__ = ("Stage", "Trace")

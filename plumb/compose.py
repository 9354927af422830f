"""
Composition
===========

pipe threads a value through unary callables, left to right:

    pipe([1, 2, 3], map(add(1)), filter(lambda x: x > 2), sum)   # 7

Once the value (or any stage's result) is awaitable, the remaining stages
run after it settles and pipe returns a Deferred instead.

pipe_traced does the same and also returns a Trace of every stage.
"""

from __future__ import annotations

import logging
import typing
from collections.abc import Callable

from .deferred import Deferred, settle_value
from .predicates import is_promise
from .trace import Stage, Trace

logger = logging.getLogger(__name__)

type Stages = tuple[Callable[[typing.Any], typing.Any], ...]


def stage_name(fn: Callable[..., typing.Any]) -> str:
    """__name__ for functions and operations, repr for partials."""
    return getattr(fn, "__name__", None) or repr(fn)


def _record(trace: Trace | None, name: str, result: typing.Any) -> Trace | None:
    logger.debug("pipe stage %s -> %r", name, result)
    return None if trace is None else trace.tell(Stage(name, result))


async def _thread_async(
    pending: typing.Any,
    pending_name: str | None,
    fns: Stages,
    trace: Trace | None,
) -> tuple[typing.Any, Trace | None]:
    value = await settle_value(pending)
    if pending_name is not None:
        trace = _record(trace, pending_name, value)
    for fn in fns:
        value = await settle_value(fn(value))
        trace = _record(trace, stage_name(fn), value)
    return value, trace


def _thread(
    value: typing.Any, fns: Stages, trace: Trace | None
) -> tuple[typing.Any, Trace | None] | Deferred[tuple[typing.Any, Trace | None]]:
    if is_promise(value):
        return Deferred.attempt(_thread_async, value, None, fns, trace)
    for position, fn in enumerate(fns):
        value = fn(value)
        if is_promise(value):
            return Deferred.attempt(
                _thread_async, value, stage_name(fn), fns[position + 1 :], trace
            )
        trace = _record(trace, stage_name(fn), value)
    return value, trace


def _first[T](pair: tuple[T, typing.Any]) -> T:
    return pair[0]


def pipe(value: typing.Any, *fns: Callable[[typing.Any], typing.Any]) -> typing.Any:
    """Thread value through fns. Returns a Deferred once anything is awaitable."""
    match _thread(value, fns, None):
        case Deferred() as deferred:
            return deferred.map(_first)
        case (result, _):
            return result


def pipe_traced(
    value: typing.Any, *fns: Callable[[typing.Any], typing.Any]
) -> tuple[typing.Any, Trace] | Deferred[tuple[typing.Any, Trace]]:
    """
    pipe() that also returns the Trace of stages.

        result, trace = pipe_traced(" a ", str.strip, str.upper)
        trace.names  # ["strip", "upper"]
    """
    return _thread(value, fns, Trace())  # type: ignore[return-value]


__all__ = ("pipe", "pipe_traced", "stage_name")

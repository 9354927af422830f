"""Deferred value

Single-resolution eventual value used wherever a container may arrive later:
- Starts at once inside a running event loop, lazy outside one
  (runs when awaited, like kungfu.LazyCoroResult)
- Settles exactly once (the outcome is memoised as Result[T, Exception])
- Awaitable (await yields the value or raises the original exception)

Built on top of kungfu library patterns."""

from __future__ import annotations

import asyncio
import logging
import typing
from collections.abc import Awaitable, Callable, Coroutine

from kungfu import Error, LazyCoroResult, Ok, Result

from .predicates import is_event_loop_running, is_promise

logger = logging.getLogger(__name__)

type Outcome[T] = Result[T, Exception]


async def settle_value(value: typing.Any) -> typing.Any:
    """Await value until it is no longer awaitable (promise flattening)."""
    while is_promise(value):
        if isinstance(value, LazyCoroResult):
            value = await Deferred.from_awaitable(value)
        else:
            value = await value
    return value


async def _attempt[T](fn: Callable[..., T | Awaitable[T]], *args: typing.Any) -> Outcome[T]:
    try:
        return Ok(await settle_value(fn(*args)))
    except Exception as exc:
        return Error(exc)


class Deferred[T]:
    """Single-resolution eventual value.

    Monadic laws (map flattens awaitables, like a promise's then):
    - Left identity: Deferred.of(a).map(f) ≡ Deferred.attempt(f, a)
    - Right identity: d.map(identity) ≡ d
    - Failures short-circuit every subsequent map
    """

    __slots__ = ("_thunk", "_outcome", "_pending")

    def __init__(
        self,
        thunk: Callable[[], Coroutine[typing.Any, typing.Any, Outcome[T]]],
        /,
    ) -> None:
        """Create Deferred from a fn returning a coroutine of Result."""
        self._thunk = thunk
        self._outcome: Outcome[T] | None = None
        self._pending: asyncio.Future[Outcome[T]] | None = None

    # Constructors

    @staticmethod
    def of[V](value: V) -> Deferred[V]:
        """Already-fulfilled deferred value."""

        async def wrapper() -> Outcome[V]:
            return Ok(value)

        return Deferred(wrapper)

    @staticmethod
    def failed(error: Exception) -> Deferred[typing.Never]:
        """Already-failed deferred value."""

        async def wrapper() -> Outcome[typing.Never]:
            return Error(error)

        return Deferred(wrapper)

    @staticmethod
    def from_result[V](result: Result[V, Exception]) -> Deferred[V]:
        """Lift an already computed Result."""

        async def wrapper() -> Outcome[V]:
            return result

        return Deferred(wrapper)

    @staticmethod
    def attempt[V](fn: Callable[..., V | Awaitable[V]], *args: typing.Any) -> Deferred[V]:
        """
        Call fn(*args), awaiting whatever it returns.

        Exceptions become the failure of the deferred value. Inside a running
        event loop the call is scheduled right away, so its side effects happen
        even if nobody awaits the result.
        """

        async def wrapper() -> Outcome[V]:
            return await _attempt(fn, *args)

        return Deferred(wrapper).schedule()

    @staticmethod
    def from_awaitable[V](awaitable: Awaitable[V]) -> Deferred[V]:
        """
        Wrap any awaitable.

        A kungfu LazyCoroResult is unwrapped: Ok(v) fulfils, Error(e) fails.
        """
        if isinstance(awaitable, Deferred):
            return awaitable
        if isinstance(awaitable, LazyCoroResult):
            lazy = awaitable

            async def from_lazy() -> Outcome[V]:
                return await lazy()

            return Deferred(from_lazy)

        async def wrapper() -> V:
            return await awaitable

        return Deferred.attempt(wrapper)

    # Settling

    def schedule(self) -> Deferred[T]:
        """Start settling now if an event loop is running; otherwise stay lazy."""
        if self._outcome is None and is_event_loop_running():
            self._start()
        return self

    async def settle(self) -> Outcome[T]:
        """Run the computation once and return its Result."""
        if self._outcome is not None:
            return self._outcome
        outcome = await asyncio.shield(self._start())
        self._outcome = outcome
        return outcome

    def _start(self) -> asyncio.Future[Outcome[T]]:
        if self._pending is None or self._pending.get_loop().is_closed():
            self._pending = asyncio.ensure_future(self._run())
            self._pending.add_done_callback(self._store)
        return self._pending

    def _store(self, pending: asyncio.Future[Outcome[T]]) -> None:
        if not pending.cancelled() and pending.exception() is None:
            self._outcome = pending.result()

    async def _run(self) -> Outcome[T]:
        try:
            outcome = await self._thunk()
        except Exception as exc:
            outcome = Error(exc)
        if isinstance(outcome, Error):
            logger.debug("deferred value failed: %r", outcome)
        return outcome

    @property
    def settled(self) -> bool:
        return self._outcome is not None

    # Functor operations

    def map[U](self, f: Callable[[T], U | Awaitable[U]], /) -> Deferred[U]:
        """Apply f to the fulfilled value. Awaitable results are flattened."""

        async def wrapper() -> Outcome[U]:
            match await self.settle():
                case Ok(value):
                    return await _attempt(f, value)
                case Error(err):
                    return Error(err)

        return Deferred(wrapper)

    def map_err(self, f: Callable[[Exception], Exception], /) -> Deferred[T]:
        """Replace the failure with f(failure)."""

        async def wrapper() -> Outcome[T]:
            match await self.settle():
                case Ok(value):
                    return Ok(value)
                case Error(err):
                    return Error(f(err))

        return Deferred(wrapper)

    def then[U](
        self,
        on_ok: Callable[[T], U | Awaitable[U]],
        on_error: Callable[[Exception], U | Awaitable[U]] | None = None,
        /,
    ) -> Deferred[U]:
        """
        Continue with on_ok, or with on_error when the source failed.

        Without on_error the failure propagates unchanged.
        """

        async def wrapper() -> Outcome[U]:
            match await self.settle():
                case Ok(value):
                    return await _attempt(on_ok, value)
                case Error(err):
                    if on_error is None:
                        return Error(err)
                    return await _attempt(on_error, err)

        return Deferred(wrapper)

    def recover(self, f: Callable[[Exception], T | Awaitable[T]], /) -> Deferred[T]:
        """Turn a failure into a value."""

        async def wrapper() -> Outcome[T]:
            match await self.settle():
                case Ok(value):
                    return Ok(value)
                case Error(err):
                    return await _attempt(f, err)

        return Deferred(wrapper)

    # Conversions

    def to_lazy_coro_result(self) -> LazyCoroResult[T, Exception]:
        """Convert to kungfu LazyCoroResult."""
        return LazyCoroResult(self.settle)

    async def unwrap(self) -> T:
        """The fulfilled value, raising the original failure."""
        match await self.settle():
            case Ok(value):
                return value
            case Error(err):
                raise err

    # Protocol methods

    def __call__(self) -> Coroutine[typing.Any, typing.Any, Outcome[T]]:
        """Execute the lazy computation, returning coroutine of Result."""
        return self.settle()

    def __await__(self) -> typing.Generator[typing.Any, None, T]:
        """Allow direct await on the deferred value."""
        return self.unwrap().__await__()

    def __repr__(self) -> str:
        if self._outcome is None:
            return "Deferred(<pending>)"
        return f"Deferred({self._outcome!r})"


__all__ = ("Deferred", "Outcome", "settle_value")

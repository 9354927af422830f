"""Shared fixtures: driving deferred values without an async test plugin."""

from __future__ import annotations

import asyncio
import typing
from collections.abc import Awaitable, Callable

import pytest


async def _later[T](value: T) -> T:
    await asyncio.sleep(0)
    return value


@pytest.fixture
def run() -> Callable[[Awaitable[typing.Any]], typing.Any]:
    """Await one value on a fresh event loop and return the result."""

    def runner(awaitable: Awaitable[typing.Any]) -> typing.Any:
        async def main() -> typing.Any:
            return await awaitable

        return asyncio.run(main())

    return runner


@pytest.fixture
def later() -> Callable[[typing.Any], Awaitable[typing.Any]]:
    """Coroutine resolving to value after one loop iteration (single use)."""
    return _later

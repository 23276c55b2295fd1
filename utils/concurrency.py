"""Fan-out helpers for the asyncio pipeline."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Iterable
from typing import Any, TypeVar

T = TypeVar("T")

__all__ = ["bounded_gather", "try_join"]


async def try_join(*aws: Awaitable[T]) -> list[T]:
    """
    Await every awaitable concurrently and return results in input order.

    The first failure is re-raised and the remaining tasks are cancelled.
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


async def bounded_gather(limit: int | None, aws: Iterable[Awaitable[T]]) -> list[T]:
    """Like ``try_join`` but with at most ``limit`` awaitables running at once."""
    if limit is None:
        return await try_join(*aws)
    if limit < 1:
        raise ValueError(f"limit must be positive, got {limit}")
    semaphore = asyncio.Semaphore(limit)

    async def run(aw: Awaitable[Any]) -> Any:
        async with semaphore:
            return await aw

    return await try_join(*(run(aw) for aw in aws))

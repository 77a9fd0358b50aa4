"""Async batch utilities for parallel feed lookups."""
from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Sequence, TypeVar

T = TypeVar('T')
R = TypeVar('R')

log = logging.getLogger("alpharadar.batch")


async def batch_gather(
    items: Sequence[T],
    async_fn: Callable[[T], Awaitable[R | None]],
    max_concurrent: int = 5,
    timeout: float | None = None,
    continue_on_error: bool = True,
) -> list[R | None]:
    """Execute async function on items with a concurrency limit.

    Scatter-gather: every item gets its own task, the join waits for all of
    them, and one item's failure never cancels its siblings.

    Args:
        items: Items to process
        async_fn: Async function to call on each item
        max_concurrent: Max concurrent operations
        timeout: Per-item timeout in seconds (None = transport default)
        continue_on_error: If True, errors and timeouts return None; if False, propagate

    Returns:
        Results in input order (None for failed items if continue_on_error=True)
    """
    semaphore = asyncio.Semaphore(max(1, max_concurrent))

    async def bounded_call(item: T) -> R | None:
        async with semaphore:
            try:
                if timeout is not None:
                    return await asyncio.wait_for(async_fn(item), timeout)
                return await async_fn(item)
            except asyncio.TimeoutError:
                if not continue_on_error:
                    raise
                log.info("batch item %r timed out after %.1fs", item, timeout)
                return None
            except Exception as e:
                if not continue_on_error:
                    raise
                log.info("batch item %r failed: %s", item, e)
                return None

    return await asyncio.gather(*[bounded_call(item) for item in items])

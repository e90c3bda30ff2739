"""Fail-fast fan-out helper for image requests.

Launches one task per item, waits for all of them, and preserves input
order in the results. The first failure cancels the tasks still running
and is re-raised; results that already succeeded are discarded.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, TypeVar

from photoforge.observability.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

log = get_logger(__name__)

T = TypeVar("T")
Item = TypeVar("Item")


async def gather_fail_fast(
    items: Sequence[Item],
    call_fn: Callable[[Item], Awaitable[T]],
    max_concurrency: int | None = None,
) -> list[T]:
    """Run ``call_fn`` for every item concurrently.

    Args:
        items: Inputs, one task each.
        call_fn: Async function taking one item.
        max_concurrency: Optional cap on in-flight calls. None launches
            every item at once.

    Returns:
        Results in input order.

    Raises:
        Exception: The first exception raised by any call.
    """
    if not items:
        return []

    semaphore = asyncio.Semaphore(max(1, max_concurrency or len(items)))

    async def _run_one(idx: int, item: Item) -> T:
        async with semaphore:
            try:
                return await call_fn(item)
            except Exception as e:
                log.warning(
                    "batch_item_failed",
                    index=idx,
                    total=len(items),
                    error=str(e),
                )
                raise

    tasks = [asyncio.create_task(_run_one(i, item)) for i, item in enumerate(items)]

    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for t in tasks:
            if not t.done():
                t.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise

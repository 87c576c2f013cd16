"""
Async Utilities for Batched Backend Calls.

Provides:
- Parallel execution with TaskGroup, optionally collecting exceptions
- Fixed-size batching for bulk ingestion
- Bounded-concurrency batch processing
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterator, Sequence
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


async def gather_with_errors(
    *coros: Awaitable[T],
    return_exceptions: bool = False,
) -> list[T | Exception]:
    """
    Execute coroutines in parallel using TaskGroup.

    Results keep the order of ``coros``. With ``return_exceptions`` a failing
    coroutine contributes its exception instead of cancelling its siblings.

    Example:
        results = await gather_with_errors(
            backend.bulk_index(batch_a),
            backend.bulk_index(batch_b),
            return_exceptions=True,
        )
    """
    if return_exceptions:
        results: list[T | Exception | None] = [None] * len(coros)

        async def safe_run(coro: Awaitable[T], index: int) -> None:
            try:
                results[index] = await coro
            except Exception as e:
                results[index] = e

        async with asyncio.TaskGroup() as tg:
            for i, coro in enumerate(coros):
                tg.create_task(safe_run(coro, i))
        return results  # type: ignore[return-value]

    async with asyncio.TaskGroup() as tg:
        tasks = [tg.create_task(coro) for coro in coros]  # type: ignore[arg-type]
    return [task.result() for task in tasks]


def chunked(items: Sequence[T], size: int) -> Iterator[Sequence[T]]:
    """Yield consecutive slices of ``items`` holding at most ``size`` elements."""
    if size < 1:
        raise ValueError(f"chunk size must be positive, got {size}")
    for start in range(0, len(items), size):
        yield items[start : start + size]


async def batch_process(
    batches: Sequence[T],
    processor: Callable[[T], Awaitable[R]],
    max_concurrency: int = 1,
) -> list[R | Exception]:
    """
    Run ``processor`` over ``batches`` with bounded concurrency.

    A failing batch is reported as an exception in its slot; the remaining
    batches still run.

    Example:
        results = await batch_process(batches, write_batch, max_concurrency=2)
    """
    all_results: list[R | Exception] = []
    window = max(1, max_concurrency)

    for i in range(0, len(batches), window):
        group = batches[i : i + window]
        group_results = await gather_with_errors(
            *[processor(batch) for batch in group],
            return_exceptions=True,
        )
        all_results.extend(group_results)
        logger.debug(f"Processed batches {i + 1}-{i + len(group)} of {len(batches)}")

    return all_results

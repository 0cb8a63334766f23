"""Cooperative batch rate limiting for remote lookups.

Lookups run in fixed-size concurrent batches with a pause between two
consecutive batches. Concurrent `map` calls on one limiter share its
slots, so at most `batch_size` calls are in flight per limiter. The
sleeper is injectable so tests run without real delays.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

Sleeper = Callable[[float], Awaitable[None]]


class BatchRateLimiter:
    """Runs async work in paced batches.

    Attributes:
        batch_size: Maximum concurrent calls per batch.
        interval: Pause between two batches (seconds).
        pauses: Number of pauses taken so far.
    """

    def __init__(
        self,
        batch_size: int,
        interval: float,
        sleep: Sleeper = asyncio.sleep,
    ) -> None:
        """Initialize limiter.

        Args:
            batch_size: Maximum concurrent calls per batch (>= 1).
            interval: Pause between batches in seconds (>= 0).
            sleep: Awaitable sleeper, replaced by a fake in tests.
        """
        if batch_size < 1:
            raise ValueError("batch_size must be >= 1")
        if interval < 0:
            raise ValueError("interval must be >= 0")
        self.batch_size = batch_size
        self.interval = interval
        self.pauses = 0
        self._sleep = sleep
        self._slots = asyncio.Semaphore(batch_size)

    def batches(self, items: Sequence[T]) -> list[list[T]]:
        """Partition items into consecutive batches.

        Args:
            items: Items to partition.

        Returns:
            List of batches, each at most batch_size long.
        """
        return [
            list(items[i : i + self.batch_size]) for i in range(0, len(items), self.batch_size)
        ]

    async def pause(self) -> None:
        """Wait the configured interval before the next batch."""
        self.pauses += 1
        if self.interval > 0:
            logger.debug("Batch pause: %.2fs", self.interval)
            await self._sleep(self.interval)

    async def map(
        self,
        items: Sequence[T],
        func: Callable[[T], Awaitable[R]],
        default: R | None = None,
    ) -> list[R | None]:
        """Apply an async function to every item, batch by batch.

        Results keep the input order. A call that raises yields `default`.

        Args:
            items: Items to process.
            func: Async function called once per item.
            default: Value used for calls that raised.

        Returns:
            One result per item, in input order.
        """
        results: list[R | None] = []

        for index, batch in enumerate(self.batches(items)):
            if index > 0:
                await self.pause()
            outcomes = await asyncio.gather(
                *(self._bounded(func, item) for item in batch), return_exceptions=True
            )
            for item, outcome in zip(batch, outcomes, strict=True):
                if isinstance(outcome, asyncio.CancelledError):
                    raise outcome
                if isinstance(outcome, Exception):
                    logger.error("Batch error for %r: %s", item, outcome)
                    results.append(default)
                else:
                    results.append(outcome)

        return results

    async def _bounded(self, func: Callable[[T], Awaitable[R]], item: T) -> R:
        async with self._slots:
            return await func(item)

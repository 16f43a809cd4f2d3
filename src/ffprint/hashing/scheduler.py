"""Run stream hashing tasks under a concurrency ceiling."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence

from ffprint.errors import ConfigError
from ffprint.models import StreamHashRecord

logger = logging.getLogger(__name__)

StreamHashTask = Callable[[], Awaitable[StreamHashRecord]]


class ConcurrentHashScheduler:
    """Execute stream hashing tasks, at most ``limit`` at a time.

    The batch is all-or-nothing: if any task fails, every task that already
    started is still awaited to completion, tasks that had not started yet
    are skipped, and the first failure is raised without partial results.
    """

    def __init__(self, limit: int) -> None:
        if limit < 1:
            raise ConfigError(f"Concurrency limit must be at least 1, got {limit}")
        self.limit = limit

    async def run(self, tasks: Sequence[StreamHashTask]) -> list[StreamHashRecord]:
        """Run all tasks and return their records in no particular order."""
        if not tasks:
            return []

        semaphore = asyncio.Semaphore(self.limit)
        failures: list[Exception] = []

        async def run_one(position: int, task: StreamHashTask) -> StreamHashRecord | None:
            async with semaphore:
                if failures:
                    logger.debug("Skipping task %d after an earlier failure", position)
                    return None
                try:
                    return await task()
                except Exception as e:
                    failures.append(e)
                    raise

        outcomes = await asyncio.gather(
            *(run_one(position, task) for position, task in enumerate(tasks)),
            return_exceptions=True,
        )

        if failures:
            logger.debug("Batch failed, discarding %d outcome(s)", len(outcomes))
            raise failures[0]
        for outcome in outcomes:
            if isinstance(outcome, BaseException):
                raise outcome

        return [outcome for outcome in outcomes if outcome is not None]

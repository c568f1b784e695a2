# wcag_scout/crawler/scheduler.py
"""
Bounded task scheduler: a fixed pool of workers draining a shared queue of
zero-argument coroutine functions.

Tasks may submit more tasks while running. :meth:`TaskScheduler.run` returns
once the queue's unfinished counter drops to zero, i.e. nothing is queued and
nothing is in flight on any worker.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Iterable, List, Optional

from wcag_scout.errors import CrawlTimeout, TaskError

__all__ = ("Task", "TaskScheduler")

Task = Callable[[], Awaitable[object]]

logger = logging.getLogger(__name__)


class TaskScheduler:
    """Runs queued tasks on exactly ``concurrency`` workers with failure isolation."""

    def __init__(self, concurrency: int = 3) -> None:
        if concurrency < 1:
            raise ValueError("concurrency must be >= 1")
        self.concurrency = concurrency
        self.failures: List[TaskError] = []
        self.completed = 0
        self.in_flight = 0
        self.peak_in_flight = 0
        self._queue: Optional[asyncio.Queue[Task]] = None

    @property
    def pending(self) -> int:
        """Queued plus in-flight tasks; zero means the fixed point was reached."""
        queued = self._queue.qsize() if self._queue is not None else 0
        return queued + self.in_flight

    def submit(self, task: Task) -> None:
        """Push *task* onto the shared queue. Safe to call from a running task."""
        if self._queue is None:
            self._queue = asyncio.Queue()
        self._queue.put_nowait(task)

    async def run(self, initial_tasks: Iterable[Task] = (), timeout: Optional[float] = None) -> None:
        """
        Execute *initial_tasks* and everything they submit.

        Raises :class:`CrawlTimeout` if *timeout* seconds pass first; workers
        are cancelled either way before returning.
        """
        for task in initial_tasks:
            self.submit(task)
        if self._queue is None:
            return
        queue = self._queue
        workers = [
            asyncio.create_task(self._worker(queue), name=f"wcag-worker-{i}")
            for i in range(self.concurrency)
        ]
        try:
            if timeout is None:
                await queue.join()
            else:
                try:
                    await asyncio.wait_for(queue.join(), timeout=timeout)
                except asyncio.TimeoutError:
                    raise CrawlTimeout(timeout) from None
        finally:
            for w in workers:
                w.cancel()
            await asyncio.gather(*workers, return_exceptions=True)
        logger.debug(
            "Scheduler drained: %d completed, %d failed, peak %d in flight",
            self.completed, len(self.failures), self.peak_in_flight,
        )

    async def _worker(self, queue: asyncio.Queue[Task]) -> None:
        while True:
            task = await queue.get()
            self.in_flight += 1
            self.peak_in_flight = max(self.peak_in_flight, self.in_flight)
            try:
                await task()
            except Exception as exc:
                error = TaskError(exc, getattr(task, "__name__", None))
                self.failures.append(error)
                logger.error("Task failed: %s", error)
            else:
                self.completed += 1
            finally:
                self.in_flight -= 1
                queue.task_done()

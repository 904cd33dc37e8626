"""Bounded-concurrency worker pool over a queue of page tasks."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Generic, Iterable, List, Optional, TypeVar

from .models import TaskFailure

logger = logging.getLogger("sitesnap")

T = TypeVar("T")
R = TypeVar("R")


class WorkerPool(Generic[T, R]):
    """Run ``handler`` over items with at most ``concurrency`` in flight.

    ``concurrency`` workers pull from a shared queue. With ``keep_going``
    off, the first failure stops workers from taking new items, lets the
    in-flight ones settle and is re-raised from :meth:`run`. With it on,
    failures are collected in :attr:`failures` and the batch continues.
    """

    def __init__(
        self,
        handler: Callable[[T], Awaitable[R]],
        concurrency: int,
        *,
        keep_going: bool = False,
        on_result: Optional[Callable[[R], None]] = None,
    ) -> None:
        if concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        self.handler = handler
        self.concurrency = concurrency
        self.keep_going = keep_going
        self.on_result = on_result
        self.in_flight = 0
        self.peak_in_flight = 0
        self.results: List[R] = []
        self.failures: List[TaskFailure] = []
        self._queue: "asyncio.Queue[T]" = asyncio.Queue()
        self._stopped = False

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    async def _worker(self, worker_id: int) -> None:
        while not self._stopped:
            try:
                item = self._queue.get_nowait()
            except asyncio.QueueEmpty:
                return
            self.in_flight += 1
            self.peak_in_flight = max(self.peak_in_flight, self.in_flight)
            try:
                result = await self.handler(item)
            except Exception as exc:  # pylint: disable=broad-except
                self.failures.append(TaskFailure(item, exc))
                if self.keep_going:
                    logger.error("Worker %d: %s", worker_id, exc)
                else:
                    self._stopped = True
                continue
            finally:
                self.in_flight -= 1
                self._queue.task_done()
            if self._stopped:
                continue
            self.results.append(result)
            if self.on_result is not None:
                self.on_result(result)

    async def run(self, items: Iterable[T]) -> List[R]:
        for item in items:
            self._queue.put_nowait(item)
        workers = min(self.concurrency, self._queue.qsize())
        await asyncio.gather(*(self._worker(i) for i in range(workers)))
        if self.failures and not self.keep_going:
            raise self.failures[0].error
        return self.results

# text_scout/crawler/frontier.py
"""
Depth-bounded FIFO work queue with quiescence detection.

Built on :class:`asyncio.Queue`: its unfinished-task counter goes up on every
push and down on :meth:`Frontier.done`. Workers push the children of an item
before marking the item done, so the counter never reads zero while more work
can still appear and :meth:`Frontier.join` returns only at true quiescence.
"""
from __future__ import annotations

import asyncio
from typing import Optional

from text_scout.crawler.models import CrawlState, WorkItem


class Frontier:
    """Shared BFS queue of :class:`WorkItem` objects."""

    def __init__(self, max_depth: int) -> None:
        if max_depth < 0:
            raise ValueError("max_depth must be >= 0")
        self.max_depth = max_depth
        self._queue: asyncio.Queue[WorkItem] = asyncio.Queue()
        self._in_flight = 0
        self._terminated = False

    def admits(self, depth: int) -> bool:
        return depth <= self.max_depth

    def push(self, item: WorkItem) -> bool:
        """Enqueue *item*; items deeper than ``max_depth`` are dropped (returns False)."""
        if self._terminated:
            raise RuntimeError("push on a terminated frontier")
        if not self.admits(item.depth):
            return False
        self._queue.put_nowait(item)
        return True

    async def pop(self) -> WorkItem:
        """Wait for the next item in FIFO order and mark it in flight."""
        item = await self._queue.get()
        self._in_flight += 1
        return item

    def pop_nowait(self) -> Optional[WorkItem]:
        try:
            item = self._queue.get_nowait()
        except asyncio.QueueEmpty:
            return None
        self._in_flight += 1
        return item

    def done(self, item: WorkItem) -> None:
        """Mark a popped *item* finished. Push its children before calling this."""
        if self._in_flight <= 0:
            raise ValueError(f"done() called for {item.url} with nothing in flight")
        self._in_flight -= 1
        self._queue.task_done()
        if self.is_drained():
            self._terminated = True

    def is_drained(self) -> bool:
        return self._queue.empty() and self._in_flight == 0

    async def join(self) -> None:
        """Block until every pushed item has been popped and marked done."""
        await self._queue.join()
        self._terminated = True

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    @property
    def state(self) -> CrawlState:
        if self._terminated:
            return CrawlState.TERMINATED
        if self._queue.empty() and self._in_flight > 0:
            return CrawlState.DRAINING
        return CrawlState.RUNNING

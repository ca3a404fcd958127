"""
Fire-and-forget store writes

History, activity and cache-back writes must never delay or change a reply.
They run as tasks; failures are logged.
"""

import asyncio
from typing import Awaitable, Set

from config import get_logger

logger = get_logger(__name__)


class BackgroundWrites:
    """Tracks outstanding write tasks so they can be drained on shutdown"""

    def __init__(self):
        self._tasks: Set[asyncio.Task] = set()

    def submit(self, coro: Awaitable, description: str) -> asyncio.Task:
        """
        Schedule a write without awaiting it

        Args:
            coro: Store coroutine
            description: Shown in the log if the write fails
        """
        task = asyncio.ensure_future(coro)
        self._tasks.add(task)
        task.add_done_callback(lambda t: self._finished(t, description))
        return task

    def _finished(self, task: asyncio.Task, description: str):
        self._tasks.discard(task)
        if task.cancelled():
            logger.warning("Background write cancelled: %s", description)
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Background write failed: %s", description, exc_info=exc)

    async def drain(self):
        """Wait for every outstanding write to finish"""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def __len__(self):
        return len(self._tasks)

"""
Notification Queue
Background consumer for fire-and-forget notifications
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional, Set

logger = logging.getLogger(__name__)

Job = Callable[[], Awaitable[None]]


class NotificationQueue:
    """Runs queued notification jobs on one worker task; failures are logged only."""

    def __init__(self):
        self._queue: Optional[asyncio.Queue] = None
        self._task: Optional[asyncio.Task] = None
        self._detached: Set[asyncio.Task] = set()

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        if self.running:
            return
        self._queue = asyncio.Queue()
        self._task = asyncio.create_task(self._run())
        logger.info("Notification worker started")

    async def stop(self) -> None:
        """Drain pending jobs, then stop the worker"""
        if not self.running:
            return
        await self._queue.put(None)
        await self._task
        self._task = None
        self._queue = None
        logger.info("Notification worker stopped")

    def enqueue(self, job: Job, description: str = "notification") -> None:
        if not self.running:
            # No worker (scripts, early startup): run detached instead
            logger.debug("Notification worker not running; dispatching %s directly", description)
            task = asyncio.get_running_loop().create_task(self._execute(job, description))
            self._detached.add(task)
            task.add_done_callback(self._detached.discard)
            return
        self._queue.put_nowait((job, description))

    async def join(self) -> None:
        """Wait until every queued job has been processed"""
        if self._detached:
            await asyncio.gather(*self._detached)
        if self._queue is not None:
            await self._queue.join()

    async def _run(self) -> None:
        while True:
            item = await self._queue.get()
            try:
                if item is None:
                    return
                job, description = item
                await self._execute(job, description)
            finally:
                self._queue.task_done()

    @staticmethod
    async def _execute(job: Job, description: str) -> None:
        try:
            await job()
        except Exception:
            logger.exception("Failed to deliver %s", description)


notification_queue = NotificationQueue()

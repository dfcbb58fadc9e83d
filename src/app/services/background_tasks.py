"""
Fire-and-forget task execution for work that must not delay a response.
"""

import asyncio
import logging
from typing import Coroutine, Optional, Set

logger = logging.getLogger(__name__)


class BackgroundTaskRunner:
    """
    Detached asyncio tasks with failure logging.

    Tasks are referenced until they finish so they are not garbage
    collected mid-flight. A failing task is logged and never re-raised
    into the request that submitted it.
    """

    def __init__(self):
        self._tasks: Set[asyncio.Task] = set()

    def submit(self, coro: Coroutine, name: Optional[str] = None) -> asyncio.Task:
        task = asyncio.create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        return task

    def _on_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            logger.warning("Background task %s was cancelled", task.get_name())
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                "Background task %s failed", task.get_name(), exc_info=exc
            )

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def drain(self, timeout: Optional[float] = None) -> None:
        """Wait for in-flight tasks; cancel whatever is left after timeout."""
        if not self._tasks:
            return
        tasks = list(self._tasks)
        done, still_running = await asyncio.wait(tasks, timeout=timeout)
        for task in still_running:
            task.cancel()
        if still_running:
            await asyncio.gather(*still_running, return_exceptions=True)

"""Asyncio-driven periodic trigger for the countdown."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)


class AsyncioTicker:
    """Calls a callback once per interval on the running event loop.

    Ticks are scheduled against the loop clock so they do not drift.
    ``start`` while running and ``stop`` while stopped are no-ops.
    """

    def __init__(self, interval: float = 1.0) -> None:
        self._interval = interval
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self, callback: Callable[[], None]) -> None:
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run(callback))
        self._task.add_done_callback(_log_exception)

    def stop(self) -> None:
        task, self._task = self._task, None
        if task is not None and not task.done() and task is not asyncio.current_task():
            task.cancel()

    async def _run(self, callback: Callable[[], None]) -> None:
        loop = asyncio.get_running_loop()
        deadline = loop.time()
        me = asyncio.current_task()
        while self._task is me:
            deadline += self._interval
            await asyncio.sleep(max(0.0, deadline - loop.time()))
            if self._task is not me:
                break
            callback()


def _log_exception(task: asyncio.Task[None]) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.exception("Countdown tick failed", exc_info=exc)

"""Cancellable asyncio debounce timer.

Only the timer is cancellable.  Once it fires, the callback runs as a task
that is tracked until completion but never cancelled.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable

Callback = Callable[[], Awaitable[None]]


class Debouncer:
    """Run the most recently scheduled callback after *delay* seconds of quiet."""

    def __init__(self, delay: float) -> None:
        self._delay = delay
        self._handle: asyncio.TimerHandle | None = None
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def pending(self) -> bool:
        """True while a timer is armed and has not fired yet."""
        return self._handle is not None

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    def schedule(self, callback: Callback) -> None:
        """Arm the timer for *callback*, discarding any timer still pending."""
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self._delay, self._fire, callback)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self, callback: Callback) -> None:
        self._handle = None
        task: asyncio.Task[None] = asyncio.ensure_future(callback())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def drain(self) -> None:
        """Wait until no timer is armed and every fired callback has finished."""
        while self._handle is not None or self._tasks:
            if self._tasks:
                await asyncio.gather(*list(self._tasks), return_exceptions=True)
            else:
                await asyncio.sleep(self._delay / 2)

"""
Delayed callback scheduling for the Live Voice Relay.

Retry timers and the inactivity watchdog are ScheduledTask objects created
through a scheduler, so they can be cancelled explicitly and driven by a
manual clock in tests.
"""

import asyncio
import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class ScheduledTask:
    """A callback that runs at most once after a delay, unless cancelled."""

    def __init__(self, name: str, delay: float, callback: Callable[[], None]):
        self.name = name
        self.delay = delay
        self.callback = callback
        self._handle: Optional[asyncio.TimerHandle] = None
        self._cancelled = False
        self._fired = False

    @property
    def active(self) -> bool:
        """True until the task has run or been cancelled."""
        return not (self._cancelled or self._fired)

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def run(self) -> None:
        """Run the callback if the task is still active."""
        if not self.active:
            return
        self._fired = True
        self._handle = None
        try:
            self.callback()
        except Exception as e:
            logger.error(f"Scheduled task {self.name} failed: {e}", exc_info=True)

    def attach(self, handle: asyncio.TimerHandle) -> None:
        """Bind the loop timer that will run this task."""
        self._handle = handle

    def cancel(self) -> None:
        if not self.active:
            return
        self._cancelled = True
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def __repr__(self) -> str:
        return f"<ScheduledTask {self.name} delay={self.delay} active={self.active}>"


class LoopScheduler:
    """Schedules ScheduledTasks on the running asyncio event loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        return self._loop or asyncio.get_running_loop()

    def call_later(
        self, name: str, delay: float, callback: Callable[[], None]
    ) -> ScheduledTask:
        """Run ``callback`` once after ``delay`` seconds."""
        task = ScheduledTask(name, delay, callback)
        task.attach(self._get_loop().call_later(delay, task.run))
        return task

"""Inactivity watchdog for the transcoder output."""

import logging
from typing import Callable, Optional

from live_voice_relay.core.scheduler import ScheduledTask

logger = logging.getLogger(__name__)


class InactivityWatchdog:
    """
    Fires ``on_stall`` once when no output has been seen for ``timeout`` seconds.

    Every feed() pushes the deadline back by a full timeout. The watchdog is
    inert until start() is called and after it fires or is cancelled.
    """

    def __init__(self, scheduler, timeout: float, on_stall: Callable[[], None]):
        """
        Initialize the watchdog.

        Args:
            scheduler: Object providing call_later(name, delay, callback)
            timeout: Seconds of silence that count as a stall
            on_stall: Called once when the watchdog fires
        """
        self.scheduler = scheduler
        self.timeout = timeout
        self.on_stall = on_stall
        self._task: Optional[ScheduledTask] = None

    @property
    def armed(self) -> bool:
        return self._task is not None and self._task.active

    def start(self) -> None:
        """Arm the watchdog, replacing any previous countdown."""
        self.cancel()
        self._task = self.scheduler.call_later("watchdog", self.timeout, self._fire)

    def feed(self) -> None:
        """Record output activity and restart the countdown."""
        if self.armed:
            self.start()

    def cancel(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None

    def _fire(self) -> None:
        self._task = None
        logger.warning(f"No audio output for {self.timeout:g}s")
        self.on_stall()

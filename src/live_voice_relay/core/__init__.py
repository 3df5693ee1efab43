"""
Core components for the Live Voice Relay system.

This package contains the stream session state machine and the timing
primitives (scheduled tasks, inactivity watchdog) it is built on.
"""

from .scheduler import LoopScheduler, ScheduledTask
from .session_controller import SessionController
from .types import EventType, Session, SessionEvent, SessionState
from .watchdog import InactivityWatchdog

__all__ = [
    "LoopScheduler",
    "ScheduledTask",
    "SessionController",
    "EventType",
    "Session",
    "SessionEvent",
    "SessionState",
    "InactivityWatchdog",
]

"""
Common types and constants for the Live Voice Relay system.

This module centralizes the session record, lifecycle states and controller
events.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Final, Optional

# Scheduled task names
TASK_RETRY: Final[str] = "retry"
TASK_RESOLVE_RETRY: Final[str] = "resolve-retry"


class SessionState(Enum):
    """Lifecycle states of the stream session."""

    IDLE = "idle"
    RESOLVING = "resolving"
    PLAYING = "playing"
    STOPPED_EARLY_RETRY = "stopped_early_retry"
    STOPPED_EXPIRED_RETRY = "stopped_expired_retry"
    WATCHDOG_RESTART = "watchdog_restart"


class EventType(Enum):
    """Events handled by the session controller."""

    PLAY_REQUESTED = "play_requested"
    RESOLVE_REQUESTED = "resolve_requested"
    RESOLVE_FINISHED = "resolve_finished"
    TRANSCODER_EXITED = "transcoder_exited"
    WATCHDOG_FIRED = "watchdog_fired"
    RETRY_DUE = "retry_due"


@dataclass
class SessionEvent:
    """A single event delivered to the session controller."""

    type: EventType
    source_url: Optional[str] = None
    stream_url: Optional[str] = None
    voice_channel: Any = None
    handle: Any = None
    returncode: Optional[int] = None


@dataclass
class Session:
    """The single stream session owned by the controller."""

    source_url: Optional[str] = None
    resolved_url: str = ""
    resolved_expiry: int = 0
    transcode_handle: Any = None
    restarting: bool = False
    voice_channel: Any = None
    state: SessionState = SessionState.IDLE

    def clear_resolved(self) -> None:
        """Forget the resolved media URL and its expiry."""
        self.resolved_url = ""
        self.resolved_expiry = 0

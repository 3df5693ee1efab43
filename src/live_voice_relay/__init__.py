"""
Live Voice Relay - plays the audio of a live video stream into a Discord voice channel.

A user points the bot at a live-stream page with ``!playlive <url>``. The
relay resolves the page into a direct media URL, decodes it to PCM with an
external transcoder and plays it into the user's voice channel, restarting
the pipeline whenever the upstream stream ends, errors, or stalls.

Architecture:
- Core: session state machine, retry scheduling, inactivity watchdog
- Streams: resolver and transcoder process wrappers, URL expiry parsing
- Audio: PCM buffering, discord.py audio source, voice connection adapter
- Bots: Discord bot, command and event handlers
- API: HTTP liveness and status endpoints
- Config: Configuration management
- Infrastructure: Logging, exceptions
"""

__version__ = "1.0.0"

# Core components
from .core.session_controller import SessionController
from .core.types import Session, SessionState
from .core.watchdog import InactivityWatchdog

# Stream pipeline
from .streams.expiry import get_expiry_from_url
from .streams.resolver import StreamResolver
from .streams.transcoder import Transcoder, TranscodeProcess

# Audio components
from .audio.voice import VoiceTransport

# Configuration
from .config.settings import RelayConfig, RelayConfigManager

# Infrastructure
from .infrastructure.logging import setup_logging, get_logger
from .infrastructure.exceptions import (
    RelayError,
    ConfigurationError,
    StreamError,
    VoiceConnectionError,
)

# Bot implementation
from .bots.relay_bot import LiveRelayBot

__all__ = [
    # Version info
    "__version__",
    # Core components
    "SessionController",
    "Session",
    "SessionState",
    "InactivityWatchdog",
    # Stream pipeline
    "get_expiry_from_url",
    "StreamResolver",
    "Transcoder",
    "TranscodeProcess",
    # Audio components
    "VoiceTransport",
    # Configuration
    "RelayConfig",
    "RelayConfigManager",
    # Infrastructure
    "setup_logging",
    "get_logger",
    "RelayError",
    "ConfigurationError",
    "StreamError",
    "VoiceConnectionError",
    # Bot implementation
    "LiveRelayBot",
]

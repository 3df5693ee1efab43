"""
Discord bot implementation for the Live Voice Relay system.

This package contains the relay bot, its command handlers, event handlers
and embed helpers.
"""

from .relay_bot import LiveRelayBot

__all__ = [
    "LiveRelayBot",
]

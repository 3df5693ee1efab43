"""
Command handlers for the relay bot.

This package contains all command handlers organized by functionality:
- stream_commands: Commands for starting a live stream relay
- base: Base class for command handlers
"""

from .base import BaseCommandHandler
from .stream_commands import StreamCommands

__all__ = ["BaseCommandHandler", "StreamCommands"]

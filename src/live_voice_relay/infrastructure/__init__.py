"""
Infrastructure components for the Live Voice Relay system.

This package contains infrastructure concerns including:
- Logging configuration and utilities with production controls
- Custom exception definitions
"""

from .logging import setup_logging, get_logger
from .logging_manager import (
    LoggingManager,
    Environment,
)
from .exceptions import (
    RelayError,
    ConfigurationError,
    TokenError,
    StreamError,
    StreamResolutionError,
    TranscoderError,
    VoiceConnectionError,
)

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    "LoggingManager",
    "Environment",
    # Exceptions
    "RelayError",
    "ConfigurationError",
    "TokenError",
    "StreamError",
    "StreamResolutionError",
    "TranscoderError",
    "VoiceConnectionError",
]

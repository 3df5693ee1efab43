"""
Custom exceptions for the Live Voice Relay system.

This module defines all custom exceptions used throughout the system,
providing clear error categorization and handling.
"""


class RelayError(Exception):
    """Base exception for all Live Voice Relay related errors."""

    pass


class ConfigurationError(RelayError):
    """Raised when there are configuration-related errors."""

    pass


class TokenError(ConfigurationError):
    """Raised when the bot token configuration is invalid."""

    pass


class StreamError(RelayError):
    """Raised when there are stream pipeline errors."""

    pass


class StreamResolutionError(StreamError):
    """Raised when the stream resolver cannot be executed."""

    pass


class TranscoderError(StreamError):
    """Raised when the transcoder process cannot be started."""

    pass


class VoiceConnectionError(RelayError):
    """Raised when there are voice channel connection errors."""

    pass

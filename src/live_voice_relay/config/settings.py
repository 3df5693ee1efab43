"""
Configuration management for the Live Voice Relay bot.

This module provides a clean, simple configuration system that reads the
bot token, HTTP binding and pipeline timings from a .env file and the
process environment.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from live_voice_relay.infrastructure.exceptions import ConfigurationError, TokenError

logger = logging.getLogger(__name__)


@dataclass
class RelayConfig:
    """Configuration for the live voice relay."""

    # Required configuration
    discord_token: str

    # HTTP status server
    port: int = 10000
    host: str = "0.0.0.0"

    # Bot behaviour
    command_prefix: str = "!"
    log_level: str = "INFO"
    bot_start_delay: float = 2.0

    # External tools
    resolver_path: str = "streamlink"
    stream_quality: str = "best"
    transcoder_path: str = "ffmpeg"

    # Pipeline timings (seconds)
    expiry_margin: float = 10.0
    early_retry_delay: float = 10.0
    expired_retry_delay: float = 1.0
    resolve_retry_delay: float = 10.0
    watchdog_timeout: float = 30.0


class RelayConfigManager:
    """Simple configuration manager."""

    def __init__(self, env_file_path: str = ".env"):
        """
        Initialize configuration manager.

        Args:
            env_file_path: Path to environment file
        """
        self.env_file_path = env_file_path
        self._load_environment()

    def _load_environment(self):
        """Load environment variables from file."""
        if os.path.exists(self.env_file_path):
            load_dotenv(dotenv_path=self.env_file_path)
            logger.info(f"Loaded environment from {self.env_file_path}")
        else:
            logger.debug(f"Environment file {self.env_file_path} not found")

    def _get_required_env(self, key: str) -> str:
        """
        Get required environment variable.

        Raises:
            TokenError: If the environment variable is not set
        """
        value = os.getenv(key)
        if not value:
            raise TokenError(f"Required environment variable {key} is not set")
        return value

    def _get_optional_env(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Get optional environment variable."""
        return os.getenv(key, default)

    def _get_int_env(self, key: str, default: int) -> int:
        """Get an integer environment variable."""
        raw = self._get_optional_env(key)
        if raw is None or raw == "":
            return default
        try:
            return int(raw)
        except ValueError:
            raise ConfigurationError(f"{key} must be an integer, got {raw!r}")

    def _get_float_env(self, key: str, default: float) -> float:
        """Get a non-negative float environment variable."""
        raw = self._get_optional_env(key)
        if raw is None or raw == "":
            return default
        try:
            value = float(raw)
        except ValueError:
            raise ConfigurationError(f"{key} must be a number, got {raw!r}")
        if value < 0:
            raise ConfigurationError(f"{key} must not be negative, got {value}")
        return value

    def get_config(self) -> RelayConfig:
        """
        Get the relay configuration.

        Returns:
            RelayConfig: Relay configuration

        Raises:
            TokenError: If DISCORD_TOKEN is missing
            ConfigurationError: If a numeric setting is malformed
        """
        try:
            config = RelayConfig(
                discord_token=self._get_required_env("DISCORD_TOKEN"),
                port=self._get_int_env("PORT", 10000),
                host=self._get_optional_env("BASE_URL") or "0.0.0.0",
                command_prefix=self._get_optional_env("BOT_PREFIX", "!"),
                log_level=self._get_optional_env("LOG_LEVEL", "INFO"),
                bot_start_delay=self._get_float_env("BOT_START_DELAY", 2.0),
                resolver_path=self._get_optional_env("RESOLVER_PATH", "streamlink"),
                stream_quality=self._get_optional_env("STREAM_QUALITY", "best"),
                transcoder_path=self._get_optional_env("TRANSCODER_PATH", "ffmpeg"),
                expiry_margin=self._get_float_env("EXPIRY_MARGIN", 10.0),
                early_retry_delay=self._get_float_env("EARLY_RETRY_DELAY", 10.0),
                expired_retry_delay=self._get_float_env("EXPIRED_RETRY_DELAY", 1.0),
                resolve_retry_delay=self._get_float_env("RESOLVE_RETRY_DELAY", 10.0),
                watchdog_timeout=self._get_float_env("WATCHDOG_TIMEOUT", 30.0),
            )

            logger.info("Configuration loaded successfully")
            return config

        except ConfigurationError as e:
            logger.error(f"Failed to load configuration: {e}")
            raise

"""
Logging management for the Live Voice Relay.

Logging is configured once per process from the packaged ``logging.yaml``.
The ``ENVIRONMENT`` variable decides how chatty the relay's own loggers are:

- development: DEBUG and above
- staging: INFO and above
- production: WARNING and above

discord.py and uvicorn loggers stay pinned at WARNING in every environment.
"""

import logging
import logging.config
import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "logging.yaml"

NOISY_LOGGERS = [
    "discord.voice_state",
    "discord.gateway",
    "discord.client",
    "discord.player",
    "uvicorn.access",
]

_CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_FILE_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"
)


class Environment(Enum):
    """Deployment environment, read from ``ENVIRONMENT``."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"

    @classmethod
    def from_env(cls) -> "Environment":
        value = os.getenv("ENVIRONMENT", "development").strip().lower()
        if value in ("prod", "production"):
            return cls.PRODUCTION
        if value in ("stage", "staging"):
            return cls.STAGING
        return cls.DEVELOPMENT

    @property
    def log_level(self) -> str:
        return {
            Environment.DEVELOPMENT: "DEBUG",
            Environment.STAGING: "INFO",
            Environment.PRODUCTION: "WARNING",
        }[self]


class LoggingManager:
    """Applies the relay's logging configuration and hands out loggers."""

    def __init__(self, config_path: Optional[Path] = None, log_dir: Optional[str] = None):
        """
        Initialize the logging manager.

        Args:
            config_path: YAML dictConfig file, defaults to the packaged logging.yaml
            log_dir: Directory that file handlers write into, defaults to LOG_DIR or logs
        """
        self.config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self._log_dir = log_dir
        self.environment = Environment.from_env()
        self._configured = False

    @property
    def log_dir(self) -> str:
        # LOG_DIR may come from a .env file loaded after import
        return self._log_dir or os.getenv("LOG_DIR", "logs")

    def is_production(self) -> bool:
        return self.environment == Environment.PRODUCTION

    def _read_config(self) -> Optional[Dict[str, Any]]:
        if not self.config_path.exists():
            return None
        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                return yaml.safe_load(f)
        except (yaml.YAMLError, OSError) as e:
            print(f"Warning: could not read logging config {self.config_path}: {e}")
            return None

    def _prepare(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Point file handlers at log_dir and apply production levels."""
        for handler in config.get("handlers", {}).values():
            filename = handler.get("filename")
            if filename:
                handler["filename"] = os.path.join(
                    self.log_dir, os.path.basename(filename)
                )

        if self.is_production():
            level = self.environment.log_level
            config.setdefault("root", {})["level"] = level
            for name, logger_config in config.get("loggers", {}).items():
                if name not in NOISY_LOGGERS:
                    logger_config["level"] = level

        return config

    def _configure(self) -> None:
        if self._configured:
            return

        self.environment = Environment.from_env()
        config = self._read_config()
        if config:
            os.makedirs(self.log_dir, exist_ok=True)
            logging.config.dictConfig(self._prepare(config))
        else:
            logging.basicConfig(
                level=self.environment.log_level,
                format=_CONSOLE_FORMAT,
                datefmt="%Y-%m-%d %H:%M:%S",
            )

        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
        self._configured = True

    def setup_logging(
        self,
        component_name: str,
        log_level: Optional[str] = None,
        log_file: Optional[str] = None,
    ) -> logging.Logger:
        """
        Configure logging (once) and return the component's logger.

        Args:
            component_name: Logger name, e.g. ``relay_bot``
            log_level: Level for this logger; defaults to the environment's level
            log_file: Extra file to copy this component's records into

        Returns:
            The configured logger
        """
        self._configure()

        logger = logging.getLogger(component_name)
        logger.setLevel(
            getattr(logging, (log_level or self.environment.log_level).upper())
        )

        if log_file and not any(
            getattr(h, "baseFilename", None) == os.path.abspath(log_file)
            for h in logger.handlers
        ):
            os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
            handler = logging.FileHandler(log_file, encoding="utf-8")
            handler.setFormatter(
                logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
            )
            logger.addHandler(handler)

        return logger


_logging_manager = LoggingManager()


def setup_logging(
    component_name: str,
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """Set up logging for a component (convenience function)."""
    return _logging_manager.setup_logging(component_name, log_level, log_file)

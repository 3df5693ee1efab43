"""
Logging entry points for the Live Voice Relay components.

Components call ``setup_logging`` with their own name (``relay_bot``,
``live_voice_relay``); library modules just use ``logging.getLogger(__name__)``
and inherit the ``live_voice_relay`` logger's handlers.
"""

import logging
from typing import Optional

from .logging_manager import setup_logging as _setup_logging


def setup_logging(
    component_name: str,
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Set up logging for a relay component.

    Args:
        component_name: Name of the component (e.g., 'relay_bot', 'live_voice_relay')
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL. If None, the
                  environment decides: development=DEBUG, staging=INFO,
                  production=WARNING
        log_file: Optional extra file for this component's records

    Returns:
        logging.Logger: Configured logger instance
    """
    return _setup_logging(component_name, log_level, log_file)


def get_logger(component_name: str) -> logging.Logger:
    """Get a component logger without touching the configuration."""
    return logging.getLogger(component_name)

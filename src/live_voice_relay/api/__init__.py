"""
REST API module for the Live Voice Relay.

This module provides the liveness and status HTTP endpoints.
"""

from .app import create_app
from .server import build_api_server

__all__ = ["create_app", "build_api_server"]

"""
Configuration management for the Live Voice Relay system.

This package provides configuration management including:
- Configuration data structures
- Environment variable and .env handling
- Default value management
"""

from .settings import RelayConfig, RelayConfigManager

__all__ = [
    "RelayConfig",
    "RelayConfigManager",
]

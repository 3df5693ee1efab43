"""
Test suite for the Live Voice Relay system.

This package contains tests organized by type:
- Unit tests for individual components
- Architecture tests for package wiring
- Test fakes shared across test modules
"""

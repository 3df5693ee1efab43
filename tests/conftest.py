"""
Pytest configuration and shared fixtures for the Live Voice Relay test suite.

This module provides common fixtures and configuration for all tests.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

import discord
from discord.ext import commands

from live_voice_relay.config.settings import RelayConfig
from live_voice_relay.core.session_controller import SessionController

from tests.fakes import START_TIME, FakeScheduler, FakeTranscoder

SOURCE_URL = "https://www.tiktok.com/@user/live"


def stream_url(expires=None) -> str:
    """Build a resolved media URL, optionally carrying an expiry."""
    if expires is None:
        return "https://cdn.example/x"
    return f"https://cdn.example/x?expires={int(expires)}"


@pytest.fixture
def mock_config():
    """Create a configuration with the default timings."""
    return RelayConfig(
        discord_token="mock_token",
        command_prefix="!",
        log_level="DEBUG",
    )


@pytest.fixture
def scheduler():
    """Manual scheduler whose clock also serves as the wall clock."""
    return FakeScheduler()


@pytest.fixture
def resolver():
    """Resolver that returns a URL valid for 5000 seconds."""
    resolver = MagicMock()
    resolver.resolve = AsyncMock(return_value=stream_url(START_TIME + 5000))
    return resolver


@pytest.fixture
def transcoder():
    return FakeTranscoder()


@pytest.fixture
def mock_voice():
    """Create a mock voice transport."""
    voice = MagicMock()
    voice.connect = AsyncMock()
    voice.disconnect = AsyncMock()
    voice.is_playing.return_value = False
    return voice


@pytest.fixture
def mock_voice_channel():
    """Create a mock Discord voice channel."""
    channel = MagicMock(spec=discord.VoiceChannel)
    channel.id = 987654321
    channel.name = "Test Voice"
    return channel


@pytest.fixture
def controller(mock_config, resolver, transcoder, mock_voice, scheduler):
    """Session controller wired to fakes and the manual clock."""
    return SessionController(
        config=mock_config,
        resolver=resolver,
        transcoder=transcoder,
        voice=mock_voice,
        scheduler=scheduler,
        clock=scheduler.time,
    )


@pytest.fixture
def mock_member(mock_voice_channel):
    """Create a mock Discord member sitting in a voice channel."""
    member = MagicMock(spec=discord.Member)
    member.id = 111222333
    member.display_name = "Test User"
    member.bot = False
    member.voice = MagicMock()
    member.voice.channel = mock_voice_channel
    return member


@pytest.fixture
def mock_context(mock_member):
    """Create a mock Discord command context."""
    context = MagicMock(spec=commands.Context)
    context.author = mock_member
    context.reply = AsyncMock()
    context.send = AsyncMock()
    return context


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )

"""
Architecture tests for the Live Voice Relay.

Verifies that the package and its subpackages import cleanly and expose the
components the entry point wires together.
"""

import pytest


class TestArchitectureImports:
    """Test that all modules can be imported correctly."""

    @pytest.mark.unit
    def test_main_package_import(self):
        import live_voice_relay

        assert live_voice_relay.__version__ == "1.0.0"

    @pytest.mark.unit
    def test_core_imports(self):
        from live_voice_relay.core import SessionController
        from live_voice_relay.core.session_controller import (
            SessionController as SessionControllerClass,
        )

        assert SessionController is SessionControllerClass

    @pytest.mark.unit
    def test_stream_imports(self):
        from live_voice_relay.streams import (
            StreamResolver,
            Transcoder,
            get_expiry_from_url,
        )

        assert callable(get_expiry_from_url)
        assert StreamResolver and Transcoder

    @pytest.mark.unit
    def test_audio_imports(self):
        import discord

        from live_voice_relay.audio import PCMStreamSource, VoiceTransport

        assert issubclass(PCMStreamSource, discord.AudioSource)
        assert VoiceTransport

    @pytest.mark.unit
    def test_infrastructure_imports(self):
        from live_voice_relay.infrastructure import (
            ConfigurationError,
            RelayError,
            get_logger,
            setup_logging,
        )

        assert issubclass(ConfigurationError, RelayError)
        assert callable(setup_logging) and callable(get_logger)


class TestComponentWiring:
    """Test that the entry point builds its components."""

    @pytest.mark.unit
    def test_build_controller(self, mock_config):
        from live_voice_relay.audio import VoiceTransport
        from live_voice_relay.main import build_controller
        from live_voice_relay.streams import StreamResolver, Transcoder

        controller = build_controller(mock_config)

        assert isinstance(controller.resolver, StreamResolver)
        assert isinstance(controller.transcoder, Transcoder)
        assert isinstance(controller.voice, VoiceTransport)
        assert controller.resolver.executable == "streamlink"
        assert controller.transcoder.executable == "ffmpeg"

    @pytest.mark.unit
    def test_exception_hierarchy(self):
        from live_voice_relay.infrastructure.exceptions import (
            StreamError,
            StreamResolutionError,
            TokenError,
            ConfigurationError,
            TranscoderError,
        )

        assert issubclass(StreamResolutionError, StreamError)
        assert issubclass(TranscoderError, StreamError)
        assert issubclass(TokenError, ConfigurationError)

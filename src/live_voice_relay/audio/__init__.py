"""
Audio components for the Live Voice Relay system.

This package contains all audio-related functionality including:
- PCM frame buffering between the transcoder and the voice player
- The discord.py audio source fed from that buffer
- The voice connection adapter
"""

from .buffers import FRAME_SIZE, PCMFrameBuffer
from .sources import PCMStreamSource
from .voice import VoiceTransport

__all__ = [
    "FRAME_SIZE",
    "PCMFrameBuffer",
    "PCMStreamSource",
    "VoiceTransport",
]

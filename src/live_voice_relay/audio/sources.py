"""
Audio source implementations for the Live Voice Relay.

This module provides the discord.py audio source that plays transcoded PCM
frames into a voice channel.
"""

import logging

import discord

from live_voice_relay.audio.buffers import PCMFrameBuffer

logger = logging.getLogger(__name__)


class PCMStreamSource(discord.AudioSource):
    """
    Plays raw 48kHz stereo s16le frames from a PCMFrameBuffer.

    Buffer underruns are filled with silence so that a slow upstream does not
    end playback; only stop() does.
    """

    def __init__(self, frame_buffer: PCMFrameBuffer):
        """
        Initialize the audio source.

        Args:
            frame_buffer: Buffer the transcoder writes PCM frames into
        """
        self.frame_buffer = frame_buffer
        self._is_playing = True
        self._read_count = 0

    def is_opus(self) -> bool:
        """Return False, discord.py encodes the PCM for us."""
        return False

    def stop(self) -> None:
        """Stop playing and drop buffered audio; the next read() ends the player."""
        self._is_playing = False
        self.frame_buffer.clear()

    @property
    def is_playing(self) -> bool:
        return self._is_playing

    def read(self) -> bytes:
        """
        Called by discord.py to retrieve the next 20ms frame.

        Returns:
            bytes: PCM frame, a silence frame on underrun, or b"" once stopped
        """
        if not self._is_playing:
            return b""

        self._read_count += 1
        frame = self.frame_buffer.get_sync()
        return frame if frame else self.frame_buffer.get_silence_frame()

    def cleanup(self) -> None:
        self._is_playing = False
        logger.debug(f"PCM source cleaned up after {self._read_count} reads")

    def get_stats(self) -> dict:
        """Get performance statistics."""
        return {
            "read_count": self._read_count,
            "is_playing": self._is_playing,
            "buffer_stats": self.frame_buffer.get_stats(),
        }

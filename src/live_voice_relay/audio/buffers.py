# buffers.py
"""
Audio buffering components for the Live Voice Relay.

This module provides a thread-safe PCM frame buffer that sits between the
transcoder reader (event loop thread) and discord.py's audio player thread.
"""

import logging
import queue
import time
from typing import Optional

logger = logging.getLogger(__name__)

# 20ms of 48kHz, 16-bit, stereo PCM (what discord.py reads per frame)
FRAME_SIZE = 3840


class PCMFrameBuffer:
    """Thread-safe buffer of fixed-size PCM frames with drop-oldest overflow."""

    def __init__(self, max_frames: int = 250):
        """
        Initialize the frame buffer.

        Args:
            max_frames: Maximum number of frames to buffer (250 frames = 5 seconds)
        """
        self._queue: queue.Queue[bytes] = queue.Queue(maxsize=max_frames)
        self.max_frames = max_frames

        # Performance tracking
        self._total_frames = 0
        self._dropped_frames = 0
        self._underruns = 0
        self._last_activity = time.time()

        # Pre-allocate silence frame for consistent performance
        self._silence_frame = b"\x00" * FRAME_SIZE

    def put_nowait(self, frame: bytes) -> None:
        """Add a PCM frame, dropping the oldest one if the buffer is full."""
        if len(frame) < FRAME_SIZE:
            frame = frame + b"\x00" * (FRAME_SIZE - len(frame))

        self._total_frames += 1
        self._last_activity = time.time()

        try:
            self._queue.put_nowait(frame)
        except queue.Full:
            try:
                self._queue.get_nowait()
                self._dropped_frames += 1
                logger.debug("PCM buffer full, dropped oldest frame")
            except queue.Empty:
                pass
            try:
                self._queue.put_nowait(frame)
            except queue.Full:
                self._dropped_frames += 1

    def get_sync(self, timeout: float = 0.005) -> Optional[bytes]:
        """Retrieve the oldest PCM frame synchronously (for discord.py)."""
        try:
            return self._queue.get(timeout=timeout)
        except queue.Empty:
            self._underruns += 1
            return None

    def get_silence_frame(self) -> bytes:
        """Get pre-allocated silence frame."""
        return self._silence_frame

    def clear(self) -> None:
        """Drop all buffered frames."""
        while True:
            try:
                self._queue.get_nowait()
            except queue.Empty:
                break

    def size(self) -> int:
        """Get the current number of buffered frames."""
        return self._queue.qsize()

    def get_stats(self) -> dict:
        """Get performance statistics."""
        return {
            "total_frames": self._total_frames,
            "dropped_frames": self._dropped_frames,
            "underruns": self._underruns,
            "current_size": self.size(),
            "max_frames": self.max_frames,
            "last_activity": self._last_activity,
        }

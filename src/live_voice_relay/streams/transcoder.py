"""
Transcode pipeline for the Live Voice Relay.

Runs the external transcoder (ffmpeg) against a resolved media URL, reads
the raw PCM it writes to stdout in 20ms frames and feeds them to a
PCMStreamSource that discord.py can play.
"""

import asyncio
import logging
from typing import Callable, List, Optional

from live_voice_relay.audio.buffers import FRAME_SIZE, PCMFrameBuffer
from live_voice_relay.audio.sources import PCMStreamSource
from live_voice_relay.infrastructure.exceptions import TranscoderError

logger = logging.getLogger(__name__)

ChunkCallback = Callable[["TranscodeProcess", int], None]
ExitCallback = Callable[["TranscodeProcess", Optional[int]], None]


class TranscodeProcess:
    """A running transcoder instance and the audio source it feeds."""

    def __init__(
        self,
        process: asyncio.subprocess.Process,
        stream_url: str,
        on_chunk: ChunkCallback,
        on_exit: ExitCallback,
        frame_buffer: Optional[PCMFrameBuffer] = None,
    ):
        """
        Initialize a transcoder handle.

        Args:
            process: Spawned transcoder process with a stdout pipe
            stream_url: Media URL the transcoder is decoding
            on_chunk: Called with (handle, size) for every PCM chunk read
            on_exit: Called once with (handle, returncode) when the process ends
            frame_buffer: Buffer to fill; a fresh one is created if omitted
        """
        self.process = process
        self.stream_url = stream_url
        self.on_chunk = on_chunk
        self.on_exit = on_exit
        self.frame_buffer = frame_buffer or PCMFrameBuffer()
        self.source = PCMStreamSource(self.frame_buffer)
        self.pid = process.pid
        self.bytes_read = 0
        self._terminated = False
        self._pump_task: Optional[asyncio.Task] = None

    def start_pump(self) -> None:
        """Start reading the transcoder's stdout on the running event loop."""
        if self._pump_task is None:
            self._pump_task = asyncio.create_task(self._pump())

    async def _pump(self) -> None:
        """Read PCM frames until EOF, then report the process exit."""
        stdout = self.process.stdout
        while True:
            try:
                chunk = await stdout.readexactly(FRAME_SIZE)
            except asyncio.IncompleteReadError as e:
                if e.partial:
                    self._deliver(e.partial)
                break
            self._deliver(chunk)

        returncode = await self.process.wait()
        self.source.stop()
        logger.debug(
            f"Transcoder {self.pid} exited with code {returncode} "
            f"after {self.bytes_read} bytes"
        )

        try:
            self.on_exit(self, returncode)
        except Exception as e:
            logger.error(f"Transcoder exit callback failed: {e}", exc_info=True)

    def _deliver(self, chunk: bytes) -> None:
        self.bytes_read += len(chunk)
        self.frame_buffer.put_nowait(chunk)
        try:
            self.on_chunk(self, len(chunk))
        except Exception as e:
            logger.error(f"Transcoder chunk callback failed: {e}", exc_info=True)

    @property
    def is_running(self) -> bool:
        return self.process.returncode is None

    def terminate(self) -> None:
        """Kill the transcoder. Best effort; the caller does not wait for it."""
        if self._terminated:
            return
        self._terminated = True
        self.source.stop()

        if self.is_running:
            try:
                self.process.kill()
                logger.info(f"Killed transcoder process {self.pid}")
            except ProcessLookupError:
                pass


class Transcoder:
    """Spawns transcoder processes that emit 48kHz stereo s16le PCM."""

    def __init__(self, executable: str = "ffmpeg"):
        """
        Initialize the transcoder launcher.

        Args:
            executable: Transcoder executable name or path
        """
        self.executable = executable

    def build_command(self, stream_url: str) -> List[str]:
        """Build the transcoder argument list for a media URL."""
        return [
            self.executable,
            "-re",
            "-i", stream_url,
            "-analyzeduration", "0",
            "-loglevel", "0",
            "-f", "s16le",
            "-ar", "48000",
            "-ac", "2",
            "pipe:1",
        ]

    async def start(
        self,
        stream_url: str,
        on_chunk: ChunkCallback,
        on_exit: ExitCallback,
    ) -> TranscodeProcess:
        """
        Start transcoding ``stream_url``.

        Raises:
            TranscoderError: If the transcoder process cannot be started
        """
        try:
            process = await asyncio.create_subprocess_exec(
                *self.build_command(stream_url),
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.DEVNULL,
            )
        except OSError as e:
            raise TranscoderError(
                f"Could not run transcoder {self.executable!r}: {e}"
            ) from e

        handle = TranscodeProcess(process, stream_url, on_chunk, on_exit)
        handle.start_pump()
        logger.info(f"Started transcoder process (PID: {handle.pid})")
        return handle

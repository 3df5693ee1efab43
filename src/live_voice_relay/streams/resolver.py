"""
Stream resolver for the Live Voice Relay.

Turns a live-stream page URL into a direct, time-limited media URL by
running the external resolver CLI (streamlink).
"""

import asyncio
import logging
from typing import List, Optional

from live_voice_relay.infrastructure.exceptions import StreamResolutionError

logger = logging.getLogger(__name__)


class StreamResolver:
    """Runs the resolver CLI and returns the direct media URL it prints."""

    def __init__(self, executable: str = "streamlink", quality: str = "best"):
        """
        Initialize the resolver.

        Args:
            executable: Resolver executable name or path
            quality: Stream quality selector passed to the resolver
        """
        self.executable = executable
        self.quality = quality

    def build_command(self, source_url: str) -> List[str]:
        """Build the resolver argument list for a source page URL."""
        return [self.executable, "--stream-url", source_url, self.quality]

    async def resolve(self, source_url: str) -> Optional[str]:
        """
        Resolve a source page URL into a direct media URL.

        Args:
            source_url: Live-stream page URL supplied by the user

        Returns:
            The trimmed resolver output if it starts with ``http``, otherwise None

        Raises:
            StreamResolutionError: If the resolver process cannot be started
        """
        logger.info(f"Extracting live stream: {source_url}")
        try:
            process = await asyncio.create_subprocess_exec(
                *self.build_command(source_url),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise StreamResolutionError(
                f"Could not run resolver {self.executable!r}: {e}"
            ) from e

        try:
            stdout, stderr = await process.communicate()
        except asyncio.CancelledError:
            # A cancelled resolve must not leave the resolver running
            try:
                process.kill()
            except ProcessLookupError:
                pass
            await process.wait()
            logger.debug(f"Killed resolver for {source_url}")
            raise

        error_output = stderr.decode("utf-8", errors="ignore").strip()
        if error_output:
            logger.warning(f"Resolver error: {error_output}")

        stream_url = stdout.decode("utf-8", errors="ignore").strip()
        if not stream_url.startswith("http"):
            logger.debug(
                f"Resolver exited with code {process.returncode} and no stream URL"
            )
            return None

        return stream_url

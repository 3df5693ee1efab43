"""
Voice transport adapter for the Live Voice Relay.

Wraps the discord.py voice client: joining a channel, playing an audio
source into it, stopping playback and dropping the connection.
"""

import asyncio
import logging
from typing import Optional

import discord

from live_voice_relay.infrastructure.exceptions import VoiceConnectionError

logger = logging.getLogger(__name__)


class VoiceTransport:
    """Holds the single voice connection the relay plays into."""

    def __init__(self, connect_timeout: float = 20.0):
        """
        Initialize the voice transport.

        Args:
            connect_timeout: Seconds to wait for the voice handshake
        """
        self.connect_timeout = connect_timeout
        self.voice_client: Optional[discord.VoiceClient] = None

    def is_connected(self) -> bool:
        """Check whether the voice connection is up."""
        return self.voice_client is not None and self.voice_client.is_connected()

    def is_playing(self) -> bool:
        return self.is_connected() and self.voice_client.is_playing()

    async def connect(self, channel: discord.VoiceChannel) -> discord.VoiceClient:
        """
        Join ``channel``, moving an existing connection if needed.

        Raises:
            VoiceConnectionError: If the voice connection cannot be established
        """
        if self.is_connected():
            if self.voice_client.channel.id != channel.id:
                logger.info(f"Moving voice connection to {channel.name}")
                await self.voice_client.move_to(channel)
            return self.voice_client

        existing = channel.guild.voice_client
        if existing is not None and existing.is_connected():
            self.voice_client = existing
            if existing.channel.id != channel.id:
                await existing.move_to(channel)
            return existing

        try:
            self.voice_client = await channel.connect(
                timeout=self.connect_timeout,
                reconnect=True,
                self_deaf=True,
            )
        except asyncio.TimeoutError as e:
            raise VoiceConnectionError(
                f"Voice connection to {channel.name} timed out"
            ) from e
        except discord.ClientException as e:
            raise VoiceConnectionError(
                f"Could not join voice channel {channel.name}: {e}"
            ) from e

        logger.info(f"Joined voice channel {channel.name}")
        return self.voice_client

    def play(self, source: discord.AudioSource) -> None:
        """
        Play ``source``, replacing whatever is currently playing.

        Raises:
            VoiceConnectionError: If there is no voice connection
        """
        if not self.is_connected():
            raise VoiceConnectionError("Not connected to a voice channel")

        if self.voice_client.is_playing():
            self.voice_client.stop()
        self.voice_client.play(source)

    async def disconnect(self) -> None:
        """Stop playback and drop the voice connection."""
        if self.voice_client is None:
            return

        voice_client, self.voice_client = self.voice_client, None
        try:
            if voice_client.is_playing():
                voice_client.stop()
            await voice_client.disconnect(force=True)
            logger.info("Voice connection dropped")
        except discord.DiscordException as e:
            logger.warning(f"Error while dropping voice connection: {e}")

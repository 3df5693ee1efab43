"""
Stream command handlers for the relay bot.

This module contains the ``playlive`` command that points the relay at a
live stream and joins the caller's voice channel.
"""

from typing import Optional

from discord.ext import commands

from live_voice_relay.bots.commands.base import BaseCommandHandler
from live_voice_relay.bots.utils.embed_builder import EmbedBuilder


class StreamCommands(BaseCommandHandler):
    """Handles the live stream commands."""

    async def playlive_command(
        self, ctx: commands.Context, url: Optional[str] = None
    ) -> None:
        """Relay the audio of a live stream into your voice channel."""
        voice_state = getattr(ctx.author, "voice", None)
        voice_channel = voice_state.channel if voice_state else None
        if voice_channel is None:
            await ctx.reply(embed=EmbedBuilder.join_voice_first())
            return

        if not url or not url.startswith("http"):
            await ctx.reply(embed=EmbedBuilder.invalid_link(self.command_prefix))
            return

        try:
            self.controller.request_play(url, voice_channel)
            self.logger.info(
                f"{ctx.author} requested {url} in voice channel {voice_channel.name}"
            )
            await ctx.reply(embed=EmbedBuilder.now_streaming(url))
        except Exception as e:
            await self._handle_command_error(ctx, e, "playlive")

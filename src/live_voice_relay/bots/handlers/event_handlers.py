"""
Event handlers for the relay bot.

This module contains all Discord event handlers separated from the bot core
for better organization and maintainability.
"""

import logging
from typing import Any

import discord
from discord.ext import commands

from live_voice_relay.bots.utils.embed_builder import EmbedBuilder


class EventHandlers:
    """Handles all Discord bot events."""

    def __init__(self, bot: Any, logger: logging.Logger):
        """Initialize event handlers."""
        self.bot_instance = bot  # This is the LiveRelayBot instance
        self.bot = bot.bot  # This is the actual Discord bot
        self.logger = logger

    async def on_ready(self) -> None:
        """Bot ready event."""
        self.logger.info(f"Logged in as {self.bot.user}")

    async def on_message(self, message: discord.Message) -> None:
        """Message event handler."""
        if not message.author.bot:
            await self.bot.process_commands(message)

    async def on_command_error(self, ctx: commands.Context, error: Exception) -> None:
        """Command error handler."""
        if isinstance(error, commands.CommandNotFound):
            return

        self.logger.error(f"Command error in {getattr(ctx, 'command', None)}: {error}")
        try:
            await ctx.send(embed=EmbedBuilder.command_error(str(error)))
        except discord.DiscordException as send_error:
            self.logger.error(f"Failed to send error message: {send_error}")

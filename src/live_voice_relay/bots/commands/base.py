"""
Base command handler class for Discord bot commands.

This module provides a base class that all command handlers can inherit from,
providing common functionality and utilities.
"""

import logging
from typing import Optional

import discord
from discord.ext import commands

from live_voice_relay.bots.utils.embed_builder import EmbedBuilder
from live_voice_relay.config.settings import RelayConfig
from live_voice_relay.core import SessionController


class BaseCommandHandler:
    """Base class for command handlers with common functionality."""

    def __init__(
        self,
        controller: Optional[SessionController] = None,
        logger: Optional[logging.Logger] = None,
        config: Optional[RelayConfig] = None,
    ):
        """Initialize the base command handler."""
        self.controller = controller
        self.logger = logger or logging.getLogger(__name__)
        self.config = config

    @property
    def command_prefix(self) -> str:
        return self.config.command_prefix if self.config else "!"

    async def _handle_command_error(
        self, ctx: commands.Context, error: Exception, command_name: str
    ) -> None:
        """Handle command errors with appropriate logging and user feedback."""
        self.logger.error(f"Error in {command_name} command: {error}", exc_info=True)
        embed = EmbedBuilder.command_error(str(error))
        try:
            await ctx.reply(embed=embed)
        except discord.DiscordException as send_error:
            self.logger.warning(
                f"Could not send error message for {command_name}: {send_error}"
            )

"""
Core bot class for the Live Voice Relay.

This module provides a centralized way to manage the Discord bot instance,
command registration, and event handling.
"""

from typing import Optional

import discord
from discord.ext import commands

from live_voice_relay.bots.commands import StreamCommands
from live_voice_relay.bots.handlers import EventHandlers
from live_voice_relay.config.settings import RelayConfig
from live_voice_relay.core import SessionController
from live_voice_relay.infrastructure import setup_logging


class LiveRelayBot:
    """Bot class that wires the Discord client to the session controller."""

    def __init__(self, config: RelayConfig, controller: SessionController):
        """
        Initialize the bot with all necessary components.

        Args:
            config: Relay configuration
            controller: Session controller that plays requested streams
        """
        self.logger = setup_logging(
            component_name="relay_bot",
            log_level=config.log_level,
        )
        self.config = config
        self.controller = controller

        intents = discord.Intents.default()
        intents.guilds = True
        intents.guild_messages = True
        intents.voice_states = True
        intents.message_content = True

        self.bot = commands.Bot(
            command_prefix=config.command_prefix,
            intents=intents,
            help_command=None,
        )

        self.event_handlers = EventHandlers(bot=self, logger=self.logger)
        self.command_handlers = {
            "stream": StreamCommands(
                controller=controller,
                logger=self.logger,
                config=config,
            ),
        }

        self._setup_event_handlers()
        self._register_commands()

    def _setup_event_handlers(self) -> None:
        """Register event handlers for the bot."""
        self.bot.event(self.event_handlers.on_ready)
        self.bot.event(self.event_handlers.on_message)
        self.bot.event(self.event_handlers.on_command_error)

    def _register_commands(self) -> None:
        """Register all bot commands."""
        stream_commands = self.command_handlers["stream"]

        @self.bot.command(name="playlive")
        async def playlive(ctx: commands.Context, url: Optional[str] = None):
            """Relay the audio of a live stream into your voice channel."""
            await stream_commands.playlive_command(ctx, url)

    async def start(self) -> None:
        """Log in and run the bot until it is closed."""
        try:
            self.logger.info("Starting live relay bot...")
            await self.bot.start(self.config.discord_token)
        except Exception as e:
            self.logger.critical(f"Failed to start live relay bot: {e}")
            raise

    async def close(self) -> None:
        """Close the bot."""
        if not self.bot.is_closed():
            await self.bot.close()

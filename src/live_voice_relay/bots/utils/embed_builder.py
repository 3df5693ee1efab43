"""
Utility class for building Discord embeds consistently.

This module provides a centralized way to create Discord embeds with
consistent styling and formatting across the bot.
"""

import discord

USAGE = "`{prefix}playlive https://www.tiktok.com/@user/live`"


class EmbedBuilder:
    """Utility class for building Discord embeds with consistent styling."""

    @staticmethod
    def success(title: str, description: str, **kwargs) -> discord.Embed:
        """Create a success embed (green)."""
        return discord.Embed(
            title=title, description=description, color=discord.Color.green(), **kwargs
        )

    @staticmethod
    def error(title: str, description: str, **kwargs) -> discord.Embed:
        """Create an error embed (red)."""
        return discord.Embed(
            title=title, description=description, color=discord.Color.red(), **kwargs
        )

    @staticmethod
    def join_voice_first() -> discord.Embed:
        """Rejection for a command issued outside a voice channel."""
        return EmbedBuilder.error(
            "❌ Join a voice channel first.",
            "You need to be connected to a voice channel so I know where to play the stream.",
        )

    @staticmethod
    def invalid_link(prefix: str = "!") -> discord.Embed:
        """Rejection for a missing or non-http stream link."""
        return EmbedBuilder.error(
            "❌ Invalid link.",
            f"Usage: {USAGE.format(prefix=prefix)}",
        )

    @staticmethod
    def now_streaming(source_url: str) -> discord.Embed:
        """Confirmation that the relay accepted a stream."""
        return EmbedBuilder.success(
            "🔊 Now streaming",
            f"Now streaming from: {source_url}",
        )

    @staticmethod
    def command_error(error_message: str) -> discord.Embed:
        """Create a command error embed."""
        return discord.Embed(
            description=f"❌ Error: {error_message}",
            color=discord.Color.red(),
        )

"""Utilities shared by the relay bot's command and event handlers."""

from .embed_builder import EmbedBuilder

__all__ = ["EmbedBuilder"]

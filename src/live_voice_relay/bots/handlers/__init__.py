"""Event handlers for the relay bot."""

from .event_handlers import EventHandlers

__all__ = ["EventHandlers"]

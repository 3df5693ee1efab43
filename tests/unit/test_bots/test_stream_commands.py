"""
Unit tests for the playlive command and the relay bot wiring.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from discord.ext import commands

from live_voice_relay.bots.commands.stream_commands import StreamCommands
from live_voice_relay.bots.handlers.event_handlers import EventHandlers
from live_voice_relay.bots.relay_bot import LiveRelayBot
from live_voice_relay.core.types import EventType, SessionState

from tests.conftest import SOURCE_URL


def replied_embed(ctx):
    return ctx.reply.call_args.kwargs["embed"]


class TestPlayliveCommand:
    """Test cases for the playlive command."""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_rejects_caller_outside_voice(self, controller, mock_config, mock_context):
        mock_context.author.voice = None
        handler = StreamCommands(controller=controller, config=mock_config)

        await handler.playlive_command(mock_context, SOURCE_URL)

        assert replied_embed(mock_context).title == "❌ Join a voice channel first."
        assert controller._events.empty()
        assert controller.session.source_url is None

    @pytest.mark.unit
    @pytest.mark.asyncio
    @pytest.mark.parametrize("url", [None, "", "www.tiktok.com/@user/live", "ftp://x"])
    async def test_rejects_invalid_link(self, controller, mock_config, mock_context, url):
        handler = StreamCommands(controller=controller, config=mock_config)

        await handler.playlive_command(mock_context, url)

        embed = replied_embed(mock_context)
        assert embed.title == "❌ Invalid link."
        assert "!playlive https://www.tiktok.com/@user/live" in embed.description
        assert controller._events.empty()
        assert controller.session.state == SessionState.IDLE

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_voice_check_comes_first(self, controller, mock_config, mock_context):
        mock_context.author.voice = None
        handler = StreamCommands(controller=controller, config=mock_config)

        await handler.playlive_command(mock_context, None)

        assert replied_embed(mock_context).title == "❌ Join a voice channel first."

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_accepts_stream(
        self, controller, mock_config, mock_context, mock_voice_channel
    ):
        handler = StreamCommands(controller=controller, config=mock_config)

        await handler.playlive_command(mock_context, SOURCE_URL)

        embed = replied_embed(mock_context)
        assert embed.description == f"Now streaming from: {SOURCE_URL}"
        event = controller._events.get_nowait()
        assert event.type == EventType.PLAY_REQUESTED
        assert event.source_url == SOURCE_URL
        assert event.voice_channel is mock_voice_channel

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_controller_failure_is_reported(self, mock_config, mock_context):
        controller = MagicMock()
        controller.request_play.side_effect = RuntimeError("queue closed")
        handler = StreamCommands(controller=controller, config=mock_config)

        await handler.playlive_command(mock_context, SOURCE_URL)

        assert "queue closed" in replied_embed(mock_context).description


class TestLiveRelayBot:
    """Test cases for LiveRelayBot wiring."""

    @pytest.mark.unit
    def test_registers_playlive(self, mock_config, controller):
        relay_bot = LiveRelayBot(mock_config, controller)

        command = relay_bot.bot.get_command("playlive")

        assert command is not None
        assert list(command.clean_params) == ["url"]
        assert relay_bot.bot.command_prefix == "!"

    @pytest.mark.unit
    def test_intents(self, mock_config, controller):
        relay_bot = LiveRelayBot(mock_config, controller)

        intents = relay_bot.bot.intents
        assert intents.message_content is True
        assert intents.voice_states is True


class TestEventHandlers:
    """Test cases for EventHandlers."""

    def make_handlers(self):
        owner = MagicMock()
        owner.bot.process_commands = AsyncMock()
        return EventHandlers(bot=owner, logger=MagicMock()), owner.bot

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_bot_messages_are_ignored(self):
        handlers, bot = self.make_handlers()
        message = MagicMock()
        message.author.bot = True

        await handlers.on_message(message)

        bot.process_commands.assert_not_awaited()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_user_messages_are_processed(self):
        handlers, bot = self.make_handlers()
        message = MagicMock()
        message.author.bot = False

        await handlers.on_message(message)

        bot.process_commands.assert_awaited_once_with(message)

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_unknown_command_is_silent(self, mock_context):
        handlers, _ = self.make_handlers()

        await handlers.on_command_error(
            mock_context, commands.CommandNotFound('Command "help" is not found')
        )

        mock_context.send.assert_not_awaited()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_other_errors_are_reported(self, mock_context):
        handlers, _ = self.make_handlers()

        await handlers.on_command_error(mock_context, commands.CommandError("boom"))

        embed = mock_context.send.call_args.kwargs["embed"]
        assert "boom" in embed.description

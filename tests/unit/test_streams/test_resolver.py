"""
Unit tests for the StreamResolver.
"""

import asyncio

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from live_voice_relay.infrastructure.exceptions import StreamResolutionError
from live_voice_relay.streams.resolver import StreamResolver

SOURCE_URL = "https://www.tiktok.com/@user/live"


def make_process(stdout: bytes, stderr: bytes = b"", returncode: int = 0):
    process = MagicMock()
    process.communicate = AsyncMock(return_value=(stdout, stderr))
    process.returncode = returncode
    return process


class TestStreamResolver:
    """Test cases for StreamResolver."""

    @pytest.mark.unit
    def test_build_command(self):
        resolver = StreamResolver()

        assert resolver.build_command(SOURCE_URL) == [
            "streamlink",
            "--stream-url",
            SOURCE_URL,
            "best",
        ]

    @pytest.mark.unit
    def test_build_command_custom(self):
        resolver = StreamResolver(executable="/opt/bin/streamlink", quality="worst")

        command = resolver.build_command(SOURCE_URL)

        assert command[0] == "/opt/bin/streamlink"
        assert command[-1] == "worst"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_resolve_returns_trimmed_url(self):
        resolver = StreamResolver()
        process = make_process(b"  https://cdn.example/x?expires=1700000000\n")

        with patch.object(
            asyncio, "create_subprocess_exec", AsyncMock(return_value=process)
        ) as spawn:
            result = await resolver.resolve(SOURCE_URL)

        assert result == "https://cdn.example/x?expires=1700000000"
        args, kwargs = spawn.call_args
        assert list(args) == resolver.build_command(SOURCE_URL)
        assert kwargs["stdout"] == asyncio.subprocess.PIPE
        assert kwargs["stderr"] == asyncio.subprocess.PIPE

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_resolve_without_url_returns_none(self):
        resolver = StreamResolver()
        process = make_process(
            b"",
            b"error: No playable streams found on this URL",
            returncode=1,
        )

        with patch.object(
            asyncio, "create_subprocess_exec", AsyncMock(return_value=process)
        ):
            result = await resolver.resolve(SOURCE_URL)

        assert result is None

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_resolve_ignores_non_url_output(self):
        resolver = StreamResolver()
        process = make_process(b"[cli][info] Found matching plugin\n")

        with patch.object(
            asyncio, "create_subprocess_exec", AsyncMock(return_value=process)
        ):
            result = await resolver.resolve(SOURCE_URL)

        assert result is None

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_missing_executable_raises(self):
        resolver = StreamResolver(executable="no-such-resolver")

        with patch.object(
            asyncio,
            "create_subprocess_exec",
            AsyncMock(side_effect=FileNotFoundError("no-such-resolver")),
        ):
            with pytest.raises(StreamResolutionError, match="no-such-resolver"):
                await resolver.resolve(SOURCE_URL)

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_cancelled_resolve_kills_process(self):
        resolver = StreamResolver()
        never = asyncio.Event()

        async def hang():
            await never.wait()

        process = MagicMock()
        process.communicate = hang
        process.wait = AsyncMock(return_value=-9)

        with patch.object(
            asyncio, "create_subprocess_exec", AsyncMock(return_value=process)
        ):
            task = asyncio.create_task(resolver.resolve(SOURCE_URL))
            for _ in range(3):
                await asyncio.sleep(0)
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

        process.kill.assert_called_once()
        process.wait.assert_awaited_once()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_cancelled_resolve_tolerates_exited_process(self):
        resolver = StreamResolver()
        never = asyncio.Event()

        async def hang():
            await never.wait()

        process = MagicMock()
        process.communicate = hang
        process.kill.side_effect = ProcessLookupError()
        process.wait = AsyncMock(return_value=0)

        with patch.object(
            asyncio, "create_subprocess_exec", AsyncMock(return_value=process)
        ):
            task = asyncio.create_task(resolver.resolve(SOURCE_URL))
            for _ in range(3):
                await asyncio.sleep(0)
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

        process.wait.assert_awaited_once()

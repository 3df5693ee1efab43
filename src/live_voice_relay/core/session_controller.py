"""
Session lifecycle and retry controller for the Live Voice Relay.

The controller owns the single stream session and moves it through
idle -> resolving -> playing -> stopped/restarting. Every input (chat
command, resolver result, transcoder exit, watchdog, retry timer) arrives as
a SessionEvent on one asyncio.Queue and is handled to completion before the
next one, so the session record needs no locking.

Retry policy:
- resolver produced no URL: resolve again after resolve_retry_delay
- transcoder exited with the URL still valid: retry after early_retry_delay
- transcoder exited with the URL expired or expiring: retry after expired_retry_delay
- no audio for watchdog_timeout: tear everything down and resolve again now
Retries never give up and never back off.
"""

import asyncio
import logging
import time
from typing import Any, Callable, Dict, Optional

from live_voice_relay.config.settings import RelayConfig
from live_voice_relay.core.scheduler import LoopScheduler, ScheduledTask
from live_voice_relay.core.types import (
    TASK_RESOLVE_RETRY,
    TASK_RETRY,
    EventType,
    Session,
    SessionEvent,
    SessionState,
)
from live_voice_relay.core.watchdog import InactivityWatchdog
from live_voice_relay.infrastructure.exceptions import (
    StreamResolutionError,
    TranscoderError,
    VoiceConnectionError,
)
from live_voice_relay.streams.expiry import get_expiry_from_url, is_url_fresh

logger = logging.getLogger(__name__)


class SessionController:
    """Event-driven state machine for the relay's stream session."""

    def __init__(
        self,
        config: RelayConfig,
        resolver,
        transcoder,
        voice,
        scheduler=None,
        clock: Optional[Callable[[], float]] = None,
    ):
        """
        Initialize the controller.

        Args:
            config: Relay configuration (timings)
            resolver: StreamResolver-like object with ``async resolve(url)``
            transcoder: Transcoder-like object with ``async start(url, on_chunk, on_exit)``
            voice: VoiceTransport-like object
            scheduler: Object providing ``call_later(name, delay, callback)``
            clock: Wall clock returning Unix seconds, used for URL expiry
        """
        self.config = config
        self.resolver = resolver
        self.transcoder = transcoder
        self.voice = voice
        self.scheduler = scheduler or LoopScheduler()
        self._clock = clock or time.time

        self.session = Session()
        self._events: asyncio.Queue = asyncio.Queue()
        self._resolve_task: Optional[asyncio.Task] = None
        self._resolving_source: Optional[str] = None
        self._retry_task: Optional[ScheduledTask] = None
        self._consumer_task: Optional[asyncio.Task] = None
        self._watchdog = InactivityWatchdog(
            self.scheduler, config.watchdog_timeout, self._on_watchdog_stall
        )

        self._handlers = {
            EventType.PLAY_REQUESTED: self._handle_play_requested,
            EventType.RESOLVE_REQUESTED: self._handle_resolve_requested,
            EventType.RESOLVE_FINISHED: self._handle_resolve_finished,
            EventType.TRANSCODER_EXITED: self._handle_transcoder_exited,
            EventType.WATCHDOG_FIRED: self._handle_watchdog_fired,
            EventType.RETRY_DUE: self._handle_retry_due,
        }

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def request_play(self, source_url: str, voice_channel: Any) -> None:
        """Queue a request to relay ``source_url`` into ``voice_channel``."""
        self.post(
            SessionEvent(
                EventType.PLAY_REQUESTED,
                source_url=source_url,
                voice_channel=voice_channel,
            )
        )

    def post(self, event: SessionEvent) -> None:
        """Queue an event for the controller."""
        self._events.put_nowait(event)

    def start(self) -> asyncio.Task:
        """Start consuming events on the running loop."""
        if self._consumer_task is None or self._consumer_task.done():
            self._consumer_task = asyncio.create_task(self.run())
        return self._consumer_task

    async def run(self) -> None:
        """Handle events forever, one at a time."""
        while True:
            event = await self._events.get()
            await self._dispatch(event)

    async def drain(self) -> None:
        """
        Handle queued events until nothing is pending.

        Waits for an in-flight resolve as well. Meant for callers that do not
        run the consumer task, such as tests.
        """
        while True:
            if self._resolve_task is not None and not self._resolve_task.done():
                await asyncio.wait({self._resolve_task})
                continue
            try:
                event = self._events.get_nowait()
            except asyncio.QueueEmpty:
                return
            await self._dispatch(event)

    async def shutdown(self) -> None:
        """Stop the pipeline, drop voice and stop consuming events."""
        logger.info("Shutting down session controller")
        resolve_task = self._resolve_task
        self._cancel_retry()
        self._cancel_resolve()
        self._stop_transcoder()
        if resolve_task is not None:
            # Lets the resolver reap its child before the loop goes away
            await asyncio.gather(resolve_task, return_exceptions=True)
        await self.voice.disconnect()
        self.session.state = SessionState.IDLE

        if self._consumer_task is not None and not self._consumer_task.done():
            self._consumer_task.cancel()
            try:
                await self._consumer_task
            except asyncio.CancelledError:
                pass
        self._consumer_task = None

    def get_status(self) -> Dict[str, Any]:
        """Snapshot of the session for the status endpoint."""
        session = self.session
        handle = session.transcode_handle
        return {
            "streaming": bool(session.resolved_url),
            "state": session.state.value,
            "source_url": session.source_url or "",
            "resolved_url": session.resolved_url,
            "resolved_expiry": session.resolved_expiry,
            "transcoder_pid": getattr(handle, "pid", None) if handle else None,
            "audio": handle.source.get_stats() if handle else None,
            "now": int(self._clock()),
        }

    # ------------------------------------------------------------------
    # Event handling
    # ------------------------------------------------------------------

    async def _dispatch(self, event: SessionEvent) -> None:
        handler = self._handlers.get(event.type)
        if handler is None:
            logger.warning(f"No handler for event {event.type}")
            return
        try:
            await handler(event)
        except Exception as e:
            logger.error(f"Error handling {event.type.value}: {e}", exc_info=True)

    async def _handle_play_requested(self, event: SessionEvent) -> None:
        session = self.session
        if session.source_url and session.source_url != event.source_url:
            logger.info(
                f"Switching source from {session.source_url} to {event.source_url}"
            )
            self._abandon_current_source()

        session.source_url = event.source_url
        session.voice_channel = event.voice_channel
        await self._ensure_voice()
        await self._start_stream()

    async def _handle_resolve_requested(self, event: SessionEvent) -> None:
        await self._start_stream()

    async def _handle_retry_due(self, event: SessionEvent) -> None:
        self.session.restarting = False
        await self._start_stream()

    async def _handle_resolve_finished(self, event: SessionEvent) -> None:
        session = self.session
        if event.source_url != session.source_url:
            logger.debug(f"Ignoring resolve result for old source {event.source_url}")
            return

        if not event.stream_url:
            logger.warning(
                f"Stream URL not found. Retrying in {self.config.resolve_retry_delay:g}s..."
            )
            session.state = SessionState.RESOLVING
            self._schedule_event(
                TASK_RESOLVE_RETRY,
                self.config.resolve_retry_delay,
                EventType.RESOLVE_REQUESTED,
            )
            return

        session.resolved_url = event.stream_url
        session.resolved_expiry = get_expiry_from_url(event.stream_url)
        logger.info(f"Stream URL expires at Unix timestamp: {session.resolved_expiry}")
        await self._play()

    async def _handle_transcoder_exited(self, event: SessionEvent) -> None:
        session = self.session
        if event.handle is None or event.handle is not session.transcode_handle:
            logger.debug("Ignoring exit of a transcoder that was already replaced")
            return

        logger.warning(f"Stream stopped (transcoder exit code {event.returncode}).")
        session.transcode_handle = None
        self._watchdog.cancel()
        self._schedule_restart()

    async def _handle_watchdog_fired(self, event: SessionEvent) -> None:
        session = self.session
        if event.handle is None or event.handle is not session.transcode_handle:
            return

        logger.warning("Stream stalled, restarting the whole pipeline")
        session.state = SessionState.WATCHDOG_RESTART
        self._cancel_retry()
        self._stop_transcoder()
        session.clear_resolved()
        await self.voice.disconnect()

        if session.source_url:
            await self._start_stream()
        else:
            session.state = SessionState.IDLE

    # ------------------------------------------------------------------
    # Pipeline steps
    # ------------------------------------------------------------------

    async def _start_stream(self) -> None:
        """Reuse the current URL while it is fresh, otherwise resolve a new one."""
        session = self.session
        if not session.source_url:
            session.state = SessionState.IDLE
            return

        now = self._clock()
        if session.resolved_url and is_url_fresh(
            session.resolved_expiry, now, self.config.expiry_margin
        ):
            logger.info("Current stream URL still valid, no need to refresh.")
            if session.transcode_handle is None:
                await self._play()
            elif not self._attach_source(session.transcode_handle):
                self._stop_transcoder()
                self._schedule_restart()
            return

        self._begin_resolve(session.source_url)

    def _begin_resolve(self, source_url: str) -> None:
        if self._resolve_task is not None and not self._resolve_task.done():
            if self._resolving_source == source_url:
                logger.debug(f"Already resolving {source_url}")
                return
            self._resolve_task.cancel()

        self.session.state = SessionState.RESOLVING
        self._resolving_source = source_url
        self._resolve_task = asyncio.create_task(self._resolve(source_url))

    async def _resolve(self, source_url: str) -> None:
        try:
            stream_url = await self.resolver.resolve(source_url)
        except StreamResolutionError as e:
            logger.error(str(e))
            stream_url = None
        except Exception as e:
            logger.error(f"Unexpected resolver failure: {e}", exc_info=True)
            stream_url = None

        self.post(
            SessionEvent(
                EventType.RESOLVE_FINISHED,
                source_url=source_url,
                stream_url=stream_url,
            )
        )

    async def _play(self) -> None:
        """Start a transcoder for the resolved URL and play it into voice."""
        session = self.session
        self._stop_transcoder()
        if not await self._ensure_voice():
            self._schedule_restart()
            return

        logger.info(f"Playing stream from: {session.resolved_url}")
        try:
            handle = await self.transcoder.start(
                session.resolved_url,
                on_chunk=self._on_transcoder_chunk,
                on_exit=self._on_transcoder_exit,
            )
        except TranscoderError as e:
            logger.error(str(e))
            self._schedule_restart()
            return

        session.transcode_handle = handle
        if not self._attach_source(handle, replace=True):
            self._stop_transcoder()
            self._schedule_restart()
            return

        # Playback is live again, any pending retry is moot
        self._cancel_retry()
        session.state = SessionState.PLAYING
        self._watchdog.start()

    def _attach_source(self, handle, replace: bool = False) -> bool:
        """Play the transcoder's source into voice. False if voice is gone."""
        if not replace and self.voice.is_playing():
            return True
        try:
            self.voice.play(handle.source)
        except VoiceConnectionError as e:
            logger.warning(f"Cannot play into voice channel: {e}")
            return False
        return True

    async def _ensure_voice(self) -> bool:
        """Join the session's voice channel. False if that failed."""
        channel = self.session.voice_channel
        if channel is None:
            return self.voice.is_connected()
        try:
            await self.voice.connect(channel)
        except VoiceConnectionError as e:
            logger.error(f"Voice connection failed: {e}")
            return False
        return True

    def _schedule_restart(self) -> None:
        """Schedule exactly one retry after the pipeline stopped."""
        session = self.session
        if session.restarting:
            logger.debug("Restart already scheduled")
            return

        if is_url_fresh(session.resolved_expiry, self._clock(), self.config.expiry_margin):
            session.state = SessionState.STOPPED_EARLY_RETRY
            delay = self.config.early_retry_delay
            logger.info(f"Stream ended early, refreshing stream URL in {delay:g}s...")
        else:
            session.state = SessionState.STOPPED_EXPIRED_RETRY
            delay = self.config.expired_retry_delay
            logger.info("Stream URL expired, refreshing stream URL...")

        # Set after scheduling, since scheduling cancels and clears the old retry
        self._schedule_event(TASK_RETRY, delay, EventType.RETRY_DUE)
        session.restarting = True

    def _schedule_event(self, name: str, delay: float, event_type: EventType) -> None:
        self._cancel_retry()
        self._retry_task = self.scheduler.call_later(
            name, delay, lambda: self.post(SessionEvent(event_type))
        )

    # ------------------------------------------------------------------
    # Teardown helpers
    # ------------------------------------------------------------------

    def _abandon_current_source(self) -> None:
        self._cancel_retry()
        self._cancel_resolve()
        self._stop_transcoder()
        self.session.clear_resolved()

    def _stop_transcoder(self) -> None:
        handle = self.session.transcode_handle
        if handle is None:
            return
        # Cleared first so the exit this kill causes is ignored
        self.session.transcode_handle = None
        self._watchdog.cancel()
        handle.terminate()

    def _cancel_retry(self) -> None:
        """Drop the pending timer. ``restarting`` never outlives its retry."""
        if self._retry_task is not None:
            self._retry_task.cancel()
            self._retry_task = None
        self.session.restarting = False

    def _cancel_resolve(self) -> None:
        if self._resolve_task is not None and not self._resolve_task.done():
            self._resolve_task.cancel()
        self._resolve_task = None
        self._resolving_source = None

    # ------------------------------------------------------------------
    # Callbacks from the transcoder and watchdog
    # ------------------------------------------------------------------

    def _on_transcoder_chunk(self, handle, size: int) -> None:
        if handle is self.session.transcode_handle:
            self._watchdog.feed()

    def _on_transcoder_exit(self, handle, returncode: Optional[int]) -> None:
        self.post(
            SessionEvent(
                EventType.TRANSCODER_EXITED, handle=handle, returncode=returncode
            )
        )

    def _on_watchdog_stall(self) -> None:
        self.post(
            SessionEvent(EventType.WATCHDOG_FIRED, handle=self.session.transcode_handle)
        )

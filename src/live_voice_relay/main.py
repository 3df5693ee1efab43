"""
Process entry point for the Live Voice Relay.

Starts the HTTP status server first and logs the bot in a little later, so
hosting platforms that check the port see it open quickly.
"""

import asyncio
import logging
import sys

from live_voice_relay.api import build_api_server, create_app
from live_voice_relay.audio import VoiceTransport
from live_voice_relay.bots import LiveRelayBot
from live_voice_relay.config import RelayConfig, RelayConfigManager
from live_voice_relay.core import SessionController
from live_voice_relay.infrastructure import ConfigurationError, setup_logging
from live_voice_relay.streams import StreamResolver, Transcoder


def build_controller(config: RelayConfig) -> SessionController:
    """Build the session controller and the tools it drives."""
    return SessionController(
        config=config,
        resolver=StreamResolver(config.resolver_path, config.stream_quality),
        transcoder=Transcoder(config.transcoder_path),
        voice=VoiceTransport(),
    )


async def _start_bot_later(relay_bot: LiveRelayBot, delay: float) -> None:
    await asyncio.sleep(delay)
    await relay_bot.start()


async def run_relay(config: RelayConfig) -> None:
    """Run the status server, the session controller and the bot together."""
    logger = setup_logging("live_voice_relay", log_level=config.log_level)

    controller = build_controller(config)
    relay_bot = LiveRelayBot(config, controller)
    server = build_api_server(create_app(controller), config.host, config.port)

    controller.start()
    server_task = asyncio.create_task(server.serve())
    logger.info(f"Web server running on port {config.port}")
    bot_task = asyncio.create_task(_start_bot_later(relay_bot, config.bot_start_delay))

    try:
        done, _ = await asyncio.wait(
            {server_task, bot_task}, return_when=asyncio.FIRST_COMPLETED
        )
        for task in done:
            if not task.cancelled() and task.exception() is not None:
                raise task.exception()
    finally:
        logger.info("Shutting down live voice relay")
        await controller.shutdown()
        await relay_bot.close()
        bot_task.cancel()
        server.should_exit = True
        await asyncio.gather(server_task, bot_task, return_exceptions=True)


def main() -> None:
    """Main function to run the relay."""
    try:
        config = RelayConfigManager().get_config()
    except ConfigurationError as e:
        logging.critical(f"Invalid configuration: {e}")
        sys.exit(1)

    try:
        asyncio.run(run_relay(config))
    except KeyboardInterrupt:
        logging.info("Live voice relay shutdown requested")
    except Exception as e:
        logging.critical(f"Live voice relay crashed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()

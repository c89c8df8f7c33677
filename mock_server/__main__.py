"""Run the mock Bot API server standalone: ``python -m mock_server``."""

import asyncio
import logging

from aiohttp import web

from mock_server.config import get_settings
from mock_server.logger import setup_logging
from mock_server.server import FakeTelegramServer

logger = logging.getLogger("mock_server")


async def main() -> None:
    """Serve until interrupted."""
    settings = get_settings()
    setup_logging(settings.log_level)

    server = FakeTelegramServer(settings)
    runner = web.AppRunner(server.app)
    await runner.setup()
    site = web.TCPSite(runner, settings.host, settings.port)

    try:
        await site.start()
        logger.info(
            "🚀 Mock Bot API on http://%s:%d (bot @%s)",
            settings.host,
            settings.port,
            settings.bot_username,
        )
        await asyncio.Event().wait()
    finally:
        logger.info("🛑 Mock Bot API stopped")
        await runner.cleanup()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass

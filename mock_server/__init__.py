"""
Mock Telegram Bot API server for integration testing.

Provides a fake Bot API server that accepts requests locally and keeps the
messages it hands out, so bots can be tested end-to-end without network
calls: replies, edits, deletes, forwards and bans behave like the real thing.

Usage:
    from mock_server import MockTelegramBot, MockBot
    from mock_server.dataset import MockMessageText

    @pytest.mark.asyncio
    async def test_bot_greets():
        dp = Dispatcher(storage=MemoryStorage())
        dp.include_router(some_router)

        async with MockTelegramBot(dp, MockMessageText(text="/start")) as mock_bot:
            await mock_bot.dispatch()
            assert "Welcome" in mock_bot.get_last_text()

    @pytest.mark.asyncio
    async def test_service_sends():
        async with MockBot() as mock:
            await mock.bot.send_message(chat_id=123, text="Hi")
            assert mock.responses.last("sendMessage").message.text == "Hi"
"""
from mock_server.client import MockBot, MockTelegramBot
from mock_server.config import Settings, get_settings
from mock_server.exceptions import (
    ButtonNotFoundError,
    MessageNotFound,
    MockServerError,
    NoMessagesError,
    StoreCorrupted,
)
from mock_server.server import FakeTelegramServer
from mock_server.state import ServerState
from mock_server.store import MessageStore
from mock_server.tracker import LoggedResponse, RequestTracker, ResponseLog, TrackedRequest

__all__ = [
    # Main clients
    "MockTelegramBot",
    "MockBot",
    # State
    "MessageStore",
    "ResponseLog",
    "LoggedResponse",
    "ServerState",
    # Exceptions
    "MockServerError",
    "MessageNotFound",
    "StoreCorrupted",
    "ButtonNotFoundError",
    "NoMessagesError",
    # Configuration
    "Settings",
    "get_settings",
    # Server internals (for advanced use)
    "FakeTelegramServer",
    "RequestTracker",
    "TrackedRequest",
]

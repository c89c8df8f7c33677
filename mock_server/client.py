"""
High-level test client for integration tests.

Runs ``FakeTelegramServer`` on a local port, points a real aiogram ``Bot``
at it and feeds updates built with ``mock_server.dataset`` into a
dispatcher, so the whole bot runs exactly as it would against Telegram.
"""
import itertools
import logging
from typing import Any

from aiogram import Bot, Dispatcher
from aiogram.client.session.aiohttp import AiohttpSession
from aiogram.client.telegram import TelegramAPIServer
from aiogram.fsm.context import FSMContext
from aiogram.fsm.state import State
from aiogram.types import CallbackQuery, Chat, InlineKeyboardMarkup, Message, Update, User
from aiohttp.test_utils import TestServer

from mock_server.config import Settings
from mock_server.dataset.base import MockBuilder
from mock_server.dataset.entities import MockPrivateChat, MockUser
from mock_server.dataset.message_common import MockMessageText
from mock_server.dataset.queries import MockCallbackQuery
from mock_server.exceptions import ButtonNotFoundError, NoMessagesError
from mock_server.server import FakeTelegramServer
from mock_server.store import MessageStore
from mock_server.tracker import RequestTracker, ResponseLog

logger = logging.getLogger("mock_server.client")

UpdateSource = MockBuilder | Message | CallbackQuery | Update


class MockBot:
    """
    Lightweight mock Bot for service/worker tests.

    Provides a real Bot instance pointing to the mock server.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._server = FakeTelegramServer(settings)
        self._test_server: TestServer | None = None
        self._bot: Bot | None = None

    async def __aenter__(self) -> "MockBot":
        """Start the mock server and create bot."""
        self._test_server = TestServer(self._server.app)
        await self._test_server.start_server()

        server_url = f"http://{self._test_server.host}:{self._test_server.port}"

        local_api = TelegramAPIServer.from_base(server_url)
        session = AiohttpSession(api=local_api)
        self._bot = Bot(token=self._server.state.settings.bot_token, session=session)

        logger.debug("%s started at %s", type(self).__name__, server_url)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        """Stop the mock server and close bot session."""
        if self._bot is not None:
            await self._bot.session.close()
        if self._test_server is not None:
            await self._test_server.close()
        logger.debug("%s stopped", type(self).__name__)

    @property
    def bot(self) -> Bot:
        """Get the bot instance."""
        if self._bot is None:
            raise RuntimeError(f"{type(self).__name__} not started. Use 'async with' context.")
        return self._bot

    @property
    def me(self) -> User:
        return self._server.state.me

    @property
    def server(self) -> FakeTelegramServer:
        return self._server

    @property
    def store(self) -> MessageStore:
        """Messages currently alive on the server."""
        return self._server.messages

    @property
    def responses(self) -> ResponseLog:
        return self._server.responses

    @property
    def tracker(self) -> RequestTracker:
        """Raw requests, failed calls included."""
        return self._server.tracker

    def get_sent_messages(self) -> list[Message]:
        """Every message the bot created, in order."""
        return self.responses.sent_messages

    def get_deleted_messages(self) -> list[Message]:
        return self.responses.deleted_messages

    def clear(self) -> None:
        """Clear messages, logs and uploads."""
        self._server.clear()


class MockTelegramBot(MockBot):
    """
    Test client for integration tests.

    Simulates a user talking to the bot in one chat and captures bot
    responses. Updates passed to the constructor are fed by ``dispatch()``:

        async with MockTelegramBot(dp, MockMessageText(text="/start")) as mock:
            await mock.dispatch()
            assert mock.get_last_text() == "Hello!"
    """

    def __init__(
        self,
        dispatcher: Dispatcher,
        *updates: UpdateSource,
        user: User | None = None,
        chat: Chat | None = None,
        settings: Settings | None = None,
    ) -> None:
        super().__init__(settings)
        self.dispatcher = dispatcher
        self.user = user or MockUser().build()
        self.chat = chat or MockPrivateChat().id(self.user.id).build()
        self._pending: list[UpdateSource] = list(updates)
        self._update_ids = itertools.count(1)
        self._callback_ids = itertools.count(1)

    @property
    def chat_id(self) -> int:
        return self.chat.id

    # =========================================================================
    # Feeding updates
    # =========================================================================

    def add_update(self, *updates: UpdateSource) -> None:
        """Queue more updates for the next ``dispatch()``."""
        self._pending.extend(updates)

    async def dispatch(self) -> None:
        """Feed every queued update to the dispatcher, in order."""
        pending, self._pending = self._pending, []
        for source in pending:
            await self.feed(source)

    async def feed(self, source: UpdateSource) -> Update:
        """
        Feed a single update right away.

        Incoming messages are stored first, which assigns them a fresh id, so
        the bot can reply to, forward or delete them.
        """
        update = self._to_update(source)
        if update.message is not None:
            stored = self.store.add(update.message)
            update = update.model_copy(update={"message": stored})

        await self.dispatcher.feed_update(self.bot, update)
        logger.debug("Fed update %d (%s)", update.update_id, update.event_type)
        return update

    def _to_update(self, source: UpdateSource) -> Update:
        if isinstance(source, MockBuilder):
            source = source.build()
        if isinstance(source, Update):
            return source
        if isinstance(source, Message):
            return Update(update_id=next(self._update_ids), message=source)
        if isinstance(source, CallbackQuery):
            return Update(update_id=next(self._update_ids), callback_query=source)
        raise TypeError(f"Cannot turn {type(source).__name__} into an update")

    # =========================================================================
    # User Actions
    # =========================================================================

    async def send_message(self, text: str) -> Message:
        """Simulate user sending a text message."""
        update = await self.feed(
            MockMessageText().text(text).chat(self.chat).from_user(self.user)
        )
        logger.debug("User sent message: %s", text[:50] if text else "(empty)")
        return update.message

    async def click_button(self, callback_data: str, message_id: int | None = None) -> None:
        """Simulate user clicking inline button by callback_data."""
        if message_id is None:
            message = self.get_last_bot_message()
            if message is None:
                raise NoMessagesError("No bot messages in chat to click button on")
        else:
            message = self.store.get(message_id)

        query = (
            MockCallbackQuery()
            .id(str(next(self._callback_ids)))
            .from_user(self.user)
            .message(message)
            .data(callback_data)
        )
        await self.feed(query)
        logger.debug("User clicked button: %s on message %d", callback_data, message.message_id)

    async def click_button_by_text(self, button_text: str) -> None:
        """Simulate user clicking inline button by visible text (newest message first)."""
        for message in reversed(self.get_conversation()):
            markup = message.reply_markup
            if not isinstance(markup, InlineKeyboardMarkup):
                continue
            for row in markup.inline_keyboard:
                for button in row:
                    if button_text not in button.text:
                        continue
                    if button.callback_data is None:
                        raise ButtonNotFoundError(
                            f"Button '{button_text}' found but has no callback_data"
                        )
                    await self.click_button(button.callback_data, message.message_id)
                    return

        raise ButtonNotFoundError(f"No button with text '{button_text}' found in chat")

    # =========================================================================
    # Dialogue state
    # =========================================================================

    def _fsm_context(self) -> FSMContext:
        return self.dispatcher.fsm.get_context(
            bot=self.bot,
            chat_id=self.chat_id,
            user_id=self.user.id,
        )

    async def get_state(self) -> str | None:
        """Current FSM state of the simulated user."""
        return await self._fsm_context().get_state()

    async def set_state(self, state: State | str | None) -> None:
        await self._fsm_context().set_state(state)

    async def get_data(self) -> dict[str, Any]:
        return await self._fsm_context().get_data()

    # =========================================================================
    # Stateful Chat Access
    # =========================================================================

    def get_conversation(self) -> list[Message]:
        """Live messages of the chat, oldest first."""
        return self.store.get_conversation(self.chat_id)

    def get_bot_messages(self) -> list[Message]:
        return self.store.messages_from(self.chat_id, self.me.id)

    def get_user_messages(self) -> list[Message]:
        return self.store.messages_from(self.chat_id, self.user.id)

    def get_last_bot_message(self) -> Message | None:
        messages = self.get_bot_messages()
        return messages[-1] if messages else None

    def get_last_message(self) -> Message | None:
        """The last message the bot created anywhere."""
        messages = self.get_sent_messages()
        return messages[-1] if messages else None

    def get_last_text(self) -> str | None:
        """Text (or caption) of the last message the bot created."""
        last = self.get_last_message()
        if last is None:
            return None
        return last.text if last.text is not None else last.caption

    # =========================================================================
    # Assertions
    # =========================================================================

    def assert_message_sent(self) -> None:
        """Assert that at least one message was sent."""
        assert self.get_sent_messages(), "No messages were sent"

    def assert_message_contains(self, text: str) -> None:
        """Assert that the last message contains specific text."""
        last_text = self.get_last_text()
        assert last_text is not None, "No message was sent"
        assert text in last_text, f"Text '{text}' not found in message: {last_text}"

    def assert_keyboard_has_button(self, button_text: str) -> None:
        """Assert that the last message has an inline button with specific text."""
        last = self.get_last_message()
        assert last is not None, "No message was sent"
        assert isinstance(last.reply_markup, InlineKeyboardMarkup), "No keyboard in last message"

        for row in last.reply_markup.inline_keyboard:
            for button in row:
                if button_text in button.text:
                    return
        raise AssertionError(f"Button '{button_text}' not found in inline keyboard")

    def assert_callback_answered(self) -> None:
        """Assert that callback query was answered."""
        assert self.responses.get("answerCallbackQuery"), "Callback query was not answered"

    def assert_message_deleted(self, message_id: int) -> None:
        """Assert that a specific message was deleted."""
        assert message_id not in self.store, f"Message {message_id} is still in the chat"
        deleted_ids = [m.message_id for m in self.get_deleted_messages()]
        assert message_id in deleted_ids, f"Message {message_id} was never deleted"

    def assert_message_edited(self, message_id: int) -> None:
        """Assert that a specific message was edited."""
        message = self.store.get(message_id)
        assert message.edit_date is not None, f"Message {message_id} was not edited"

    def assert_conversation_length(self, expected: int) -> None:
        """Assert the conversation has expected number of messages."""
        actual = len(self.get_conversation())
        assert actual == expected, f"Expected {expected} messages, got {actual}"

"""
In-memory message storage for the mock server.

Keeps every live message the server knows about, both the ones the bot
sent and the incoming ones the harness injected. Ids are assigned here and
are never reused, even after the message is deleted.
"""
from __future__ import annotations

import logging
import threading
from collections.abc import Iterator

from aiogram.types import Chat, Message

from mock_server.exceptions import MessageNotFound, StoreCorrupted

logger = logging.getLogger("mock_server.store")


class MessageStore:
    """
    Message storage keyed by message id.

    All methods take the lock they were given, so the server can share one
    lock between the store and the response log.
    """

    def __init__(self, lock: threading.RLock | None = None) -> None:
        self._lock = lock if lock is not None else threading.RLock()
        self._messages: dict[int, Message] = {}
        self._last_id = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._messages)

    def __contains__(self, message_id: int) -> bool:
        with self._lock:
            return message_id in self._messages

    def __iter__(self) -> Iterator[Message]:
        with self._lock:
            return iter(sorted(self._messages.values(), key=lambda m: m.message_id))

    def max_id(self) -> int:
        """Highest id ever assigned, 0 before the first message."""
        with self._lock:
            return self._last_id

    def add(self, message: Message) -> Message:
        """Store a copy of ``message`` under the next free id and return it."""
        with self._lock:
            message_id = self._last_id + 1
            if message_id in self._messages:
                raise StoreCorrupted(f"message id {message_id} is already taken")

            stored = message.model_copy(update={"message_id": message_id})
            self._messages[message_id] = stored
            self._last_id = message_id

        logger.debug("Stored message %d in chat %d", message_id, stored.chat.id)
        return stored

    def get(self, message_id: int) -> Message:
        with self._lock:
            try:
                return self._messages[message_id]
            except KeyError:
                raise MessageNotFound(message_id) from None

    def update(self, message: Message) -> Message:
        """Replace the stored message that has the same id."""
        with self._lock:
            if message.message_id not in self._messages:
                raise MessageNotFound(message.message_id)
            self._messages[message.message_id] = message

        logger.debug("Updated message %d", message.message_id)
        return message

    def delete(self, message_id: int) -> Message:
        with self._lock:
            try:
                message = self._messages.pop(message_id)
            except KeyError:
                raise MessageNotFound(message_id) from None

        logger.debug("Deleted message %d", message_id)
        return message

    def get_conversation(self, chat_id: int) -> list[Message]:
        """Live messages of one chat, oldest first."""
        return [m for m in self if m.chat.id == chat_id]

    def messages_from(self, chat_id: int, user_id: int) -> list[Message]:
        """Live messages sent by ``user_id`` in ``chat_id``."""
        return [
            m
            for m in self.get_conversation(chat_id)
            if m.from_user is not None and m.from_user.id == user_id
        ]

    def find_chat(self, chat_id: int) -> Chat | None:
        """Chat object of any stored message in ``chat_id``."""
        for message in self.get_conversation(chat_id):
            return message.chat
        return None

    def clear(self) -> None:
        with self._lock:
            self._messages.clear()
            self._last_id = 0
        logger.debug("Cleared message store")

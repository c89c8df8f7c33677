"""
Bookkeeping of what the bot asked the mock server to do.

``ResponseLog`` records the outcome of every successful state-changing call
(the resulting messages plus the request that produced them).
``RequestTracker`` keeps the raw payload of every call, failed ones included.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any

from aiogram.types import Message

logger = logging.getLogger("mock_server.tracker")

SENT_MESSAGE_METHODS = frozenset({
    "sendMessage",
    "sendPhoto",
    "sendVideo",
    "sendAudio",
    "sendVoice",
    "sendVideoNote",
    "sendDocument",
    "sendAnimation",
    "sendSticker",
    "sendContact",
    "sendLocation",
    "sendVenue",
    "sendPoll",
    "sendDice",
    "sendMediaGroup",
    "forwardMessage",
    "copyMessage",
})


@dataclass
class TrackedRequest:
    """Single tracked API request."""

    method: str
    data: dict[str, Any]


@dataclass
class RequestTracker:
    """Raw ``(method, data)`` list of every call made to the server."""

    requests: list[TrackedRequest] = field(default_factory=list)

    def add_request(self, method: str, data: dict[str, Any]) -> None:
        self.requests.append(TrackedRequest(method=method, data=data))
        logger.debug("Tracked request: %s", method)

    def get_requests_by_method(self, method: str) -> list[TrackedRequest]:
        return [r for r in self.requests if r.method == method]

    def clear(self) -> None:
        self.requests.clear()


@dataclass
class LoggedResponse:
    """Outcome of one successful call."""

    method: str
    request: dict[str, Any]
    message: Message | None = None
    messages: list[Message] = field(default_factory=list)

    @property
    def created(self) -> list[Message]:
        """Messages this call produced or touched."""
        if self.messages:
            return list(self.messages)
        return [self.message] if self.message is not None else []


class ResponseLog:
    """
    Append-only log of handled calls, grouped by API method.

        log.last("sendMessage").message.text
        log["deleteMessage"][0].request["message_id"]
        [m.text for m in log.sent_messages]
    """

    def __init__(self, lock: threading.RLock | None = None) -> None:
        self._lock = lock if lock is not None else threading.RLock()
        self._entries: list[LoggedResponse] = []

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __getitem__(self, method: str) -> list[LoggedResponse]:
        return self.get(method)

    def append(
        self,
        method: str,
        request: dict[str, Any],
        message: Message | None = None,
        messages: list[Message] | None = None,
    ) -> LoggedResponse:
        entry = LoggedResponse(
            method=method,
            request=request,
            message=message,
            messages=list(messages or []),
        )
        with self._lock:
            self._entries.append(entry)
        return entry

    def get(self, method: str) -> list[LoggedResponse]:
        """All entries for ``method`` in call order."""
        with self._lock:
            return [e for e in self._entries if e.method == method]

    def last(self, method: str) -> LoggedResponse | None:
        entries = self.get(method)
        return entries[-1] if entries else None

    @property
    def sent_messages(self) -> list[Message]:
        """Every message the bot created, across methods, in call order."""
        with self._lock:
            return [
                message
                for entry in self._entries
                if entry.method in SENT_MESSAGE_METHODS
                for message in entry.created
            ]

    @property
    def deleted_messages(self) -> list[Message]:
        with self._lock:
            return [
                entry.message
                for entry in self._entries
                if entry.method in ("deleteMessage", "deleteMessages")
                and entry.message is not None
            ]

    @property
    def edited_messages(self) -> list[Message]:
        with self._lock:
            return [
                entry.message
                for entry in self._entries
                if entry.method.startswith("editMessage") and entry.message is not None
            ]

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
        logger.debug("Cleared response log")

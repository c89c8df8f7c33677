"""Mutable state of one mock server instance."""
import logging
import threading
import uuid
from dataclasses import dataclass, field

from aiogram.types import Chat, User

from mock_server.config import Settings, get_settings
from mock_server.dataset.entities import chat_for_id
from mock_server.store import MessageStore
from mock_server.tracker import RequestTracker, ResponseLog

logger = logging.getLogger("mock_server.state")


@dataclass
class UploadedFile:
    """File the bot uploaded (or referenced by id) in a request."""

    file_id: str
    file_unique_id: str
    filename: str | None = None
    content_type: str | None = None
    data: bytes = b""

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass
class ChatMemberState:
    """Ban and restriction flags the bot set for one member."""

    banned: bool = False
    until_date: int | None = None
    permissions: dict = field(default_factory=dict)


class ServerState:
    """
    Store, logs and uploaded files of one server.

    ``lock`` is shared by the store and the response log; handlers hold it
    around a whole read-modify-write sequence.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()
        self.lock = threading.RLock()
        self.messages = MessageStore(self.lock)
        self.responses = ResponseLog(self.lock)
        self.requests = RequestTracker()
        self.files: dict[str, UploadedFile] = {}
        self.members: dict[tuple[int, int], ChatMemberState] = {}

    @property
    def me(self) -> User:
        """The bot's own user."""
        return User(
            id=self.settings.bot_id,
            is_bot=True,
            first_name=self.settings.bot_first_name,
            username=self.settings.bot_username,
            can_join_groups=True,
            can_read_all_group_messages=False,
            supports_inline_queries=False,
        )

    def resolve_chat(self, chat_id: int) -> Chat:
        """Chat seen earlier under this id, else a default chat for the id."""
        chat = self.messages.find_chat(chat_id)
        return chat if chat is not None else chat_for_id(chat_id)

    def register_file(
        self,
        data: bytes = b"",
        filename: str | None = None,
        content_type: str | None = None,
    ) -> UploadedFile:
        token = uuid.uuid4().hex
        uploaded = UploadedFile(
            file_id=f"file_{token}",
            file_unique_id=f"unique_{token[:16]}",
            filename=filename,
            content_type=content_type,
            data=data,
        )
        with self.lock:
            self.files[uploaded.file_id] = uploaded
        logger.debug("Registered file %s (%d bytes)", uploaded.file_id, uploaded.size)
        return uploaded

    def file_path(self, file_id: str) -> str:
        return f"{self.settings.file_path_prefix}/{file_id}"

    def member(self, chat_id: int, user_id: int) -> ChatMemberState:
        with self.lock:
            return self.members.setdefault((chat_id, user_id), ChatMemberState())

    def clear(self) -> None:
        """Reset everything for reuse between tests."""
        with self.lock:
            self.messages.clear()
            self.responses.clear()
            self.requests.clear()
            self.files.clear()
            self.members.clear()

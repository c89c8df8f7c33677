"""
Message builder layers.

Every message builder embeds a ``MessageScaffold`` (fields every message
has). Builders of "common" messages additionally embed a ``MessageCommon``
(sender, forwarding, reply and flag fields). A kind builder only declares
its payload fields and maps them in ``build()``:

    class MockMessageText(MockMessageCommon):
        text = Changeable("text")

        def build(self) -> Message:
            return self.build_message_common(text=self._text)

Setters for layered fields are declared once here and write into the
embedded layer, so new payload kinds never touch the outer layers.
"""
from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from typing import Any

from aiogram.types import Chat, InlineKeyboardMarkup, Message, Update, User

from mock_server.dataset.base import Changeable, MockBuilder
from mock_server.dataset.entities import MockPrivateChat, MockUser

DEFAULT_MESSAGE_ID = 1
DEFAULT_IS_TOPIC_MESSAGE = False
DEFAULT_IS_AUTOMATIC_FORWARD = False
DEFAULT_HAS_PROTECTED_CONTENT = False


def _layer_fields(layer: Any) -> dict[str, Any]:
    return {f.name: getattr(layer, f.name) for f in fields(layer)}


@dataclass
class MessageScaffold:
    message_id: int = DEFAULT_MESSAGE_ID
    message_thread_id: int | None = None
    date: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc).replace(microsecond=0)
    )
    chat: Chat = field(default_factory=lambda: MockPrivateChat().build())
    via_bot: User | None = None


@dataclass
class MessageCommon:
    from_user: User | None = field(default_factory=lambda: MockUser().build())
    sender_chat: Chat | None = None
    author_signature: str | None = None
    forward_origin: Any = None
    reply_to_message: Message | None = None
    edit_date: int | None = None
    reply_markup: InlineKeyboardMarkup | None = None
    is_topic_message: bool = DEFAULT_IS_TOPIC_MESSAGE
    is_automatic_forward: bool = DEFAULT_IS_AUTOMATIC_FORWARD
    has_protected_content: bool = DEFAULT_HAS_PROTECTED_CONTENT


class MockMessage(MockBuilder):
    """Builder with only the scaffold layer."""

    message_id = Changeable(layer="_scaffold")
    message_thread_id = Changeable(layer="_scaffold")
    date = Changeable(layer="_scaffold")
    chat = Changeable(layer="_scaffold")
    via_bot = Changeable(layer="_scaffold")

    def __init__(self, **overrides: Any) -> None:
        self._scaffold = MessageScaffold()
        super().__init__(**overrides)

    def build_message(self, **payload: Any) -> Message:
        return Message(**_layer_fields(self._scaffold), **payload)

    def to_update(self, update_id: int = 1) -> Update:
        return Update(update_id=update_id, message=self.build())


class MockMessageCommon(MockMessage):
    """Builder with scaffold and common layers."""

    from_user = Changeable(layer="_common")
    sender_chat = Changeable(layer="_common")
    author_signature = Changeable(layer="_common")
    forward_origin = Changeable(layer="_common")
    reply_to_message = Changeable(layer="_common")
    edit_date = Changeable(layer="_common")
    reply_markup = Changeable(layer="_common")
    is_topic_message = Changeable(layer="_common")
    is_automatic_forward = Changeable(layer="_common")
    has_protected_content = Changeable(layer="_common")

    def __init__(self, **overrides: Any) -> None:
        self._common = MessageCommon()
        super().__init__(**overrides)

    def build_message_common(self, **payload: Any) -> Message:
        common = _layer_fields(self._common)
        # Only inline keyboards are ever attached to a message
        if not isinstance(common["reply_markup"], InlineKeyboardMarkup):
            common["reply_markup"] = None
        return self.build_message(**common, **payload)


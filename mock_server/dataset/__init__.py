"""
Fixture builders for Bot API entities.

    from mock_server.dataset import MockMessageText, MockUser

    message = MockMessageText(text="/start").from_user(MockUser().id(42).build()).build()
"""
from mock_server.dataset.base import Changeable, MockBuilder
from mock_server.dataset.entities import (
    MockChannelChat,
    MockGroupChat,
    MockInlineKeyboard,
    MockLocation,
    MockPhotoSize,
    MockPrivateChat,
    MockSupergroupChat,
    MockUser,
    MockVideo,
    chat_for_id,
)
from mock_server.dataset.message import (
    MessageCommon,
    MessageScaffold,
    MockMessage,
    MockMessageCommon,
)
from mock_server.dataset.message_common import (
    MockMessageAnimation,
    MockMessageAudio,
    MockMessageContact,
    MockMessageDice,
    MockMessageDocument,
    MockMessageGame,
    MockMessageLocation,
    MockMessageMigrationFromChat,
    MockMessageMigrationToChat,
    MockMessagePhoto,
    MockMessagePoll,
    MockMessageSticker,
    MockMessageText,
    MockMessageVenue,
    MockMessageVideo,
    MockMessageVideoNote,
    MockMessageVoice,
)
from mock_server.dataset.queries import MockCallbackQuery

__all__ = [
    # Framework
    "Changeable",
    "MockBuilder",
    "MessageScaffold",
    "MessageCommon",
    "MockMessage",
    "MockMessageCommon",
    # Entities
    "MockUser",
    "MockPrivateChat",
    "MockGroupChat",
    "MockSupergroupChat",
    "MockChannelChat",
    "MockPhotoSize",
    "MockVideo",
    "MockLocation",
    "MockInlineKeyboard",
    "MockCallbackQuery",
    "chat_for_id",
    # Messages
    "MockMessageText",
    "MockMessagePhoto",
    "MockMessageVideo",
    "MockMessageAudio",
    "MockMessageVoice",
    "MockMessageDocument",
    "MockMessageAnimation",
    "MockMessageSticker",
    "MockMessageContact",
    "MockMessageLocation",
    "MockMessageVenue",
    "MockMessagePoll",
    "MockMessageDice",
    "MockMessageGame",
    "MockMessageVideoNote",
    "MockMessageMigrationFromChat",
    "MockMessageMigrationToChat",
]

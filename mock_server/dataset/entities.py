"""Builders for users, chats and the small entities messages are made of."""
from aiogram.types import (
    Chat,
    InlineKeyboardButton,
    InlineKeyboardMarkup,
    Location,
    PhotoSize,
    User,
    Video,
)

from mock_server.dataset.base import Changeable, MockBuilder


class MockUser(MockBuilder):
    ID = 12345678
    IS_BOT = False
    FIRST_NAME = "First"
    LAST_NAME = "Last"
    USERNAME = "username"
    LANGUAGE_CODE = "en"

    id = Changeable(ID)
    is_bot = Changeable(IS_BOT)
    first_name = Changeable(FIRST_NAME)
    last_name = Changeable(LAST_NAME)
    username = Changeable(USERNAME)
    language_code = Changeable(LANGUAGE_CODE)
    is_premium = Changeable()

    def build(self) -> User:
        return User(
            id=self._id,
            is_bot=self._is_bot,
            first_name=self._first_name,
            last_name=self._last_name,
            username=self._username,
            language_code=self._language_code,
            is_premium=self._is_premium,
        )


class MockPrivateChat(MockBuilder):
    """Private chat with the default ``MockUser``."""

    ID = MockUser.ID
    FIRST_NAME = MockUser.FIRST_NAME
    LAST_NAME = MockUser.LAST_NAME
    USERNAME = MockUser.USERNAME

    id = Changeable(ID)
    first_name = Changeable(FIRST_NAME)
    last_name = Changeable(LAST_NAME)
    username = Changeable(USERNAME)

    def build(self) -> Chat:
        return Chat(
            id=self._id,
            type="private",
            first_name=self._first_name,
            last_name=self._last_name,
            username=self._username,
        )


class MockGroupChat(MockBuilder):
    ID = -12345678
    TITLE = "Test Group"

    id = Changeable(ID)
    title = Changeable(TITLE)

    def build(self) -> Chat:
        return Chat(id=self._id, type="group", title=self._title)


class MockSupergroupChat(MockBuilder):
    ID = -1001234567890
    TITLE = "Test Supergroup"
    USERNAME = "test_supergroup"

    id = Changeable(ID)
    title = Changeable(TITLE)
    username = Changeable(USERNAME)
    is_forum = Changeable(False)

    def build(self) -> Chat:
        return Chat(
            id=self._id,
            type="supergroup",
            title=self._title,
            username=self._username,
            is_forum=self._is_forum or None,
        )


class MockChannelChat(MockBuilder):
    ID = -1009876543210
    TITLE = "Test Channel"
    USERNAME = "test_channel"

    id = Changeable(ID)
    title = Changeable(TITLE)
    username = Changeable(USERNAME)

    def build(self) -> Chat:
        return Chat(
            id=self._id,
            type="channel",
            title=self._title,
            username=self._username,
        )


def chat_for_id(chat_id: int) -> Chat:
    """Default chat for a bare id: positive ids are private chats,
    ``-100…`` ids are supergroups, other negative ids are basic groups."""
    if chat_id > 0:
        return MockPrivateChat().id(chat_id).build()
    if chat_id <= -1000000000000:
        return MockSupergroupChat().id(chat_id).build()
    return MockGroupChat().id(chat_id).build()


class MockPhotoSize(MockBuilder):
    WIDTH = 90
    HEIGHT = 51
    FILE_ID = "AgADBAADFak0G88YZAf8OAug7bHyS9x2ZxkABHVfpJywcloRAAGAAQABAg"
    FILE_UNIQUE_ID = "file_unique_id"
    FILE_SIZE = 1101

    width = Changeable(WIDTH)
    height = Changeable(HEIGHT)
    file_id = Changeable(FILE_ID)
    file_unique_id = Changeable(FILE_UNIQUE_ID)
    file_size = Changeable(FILE_SIZE)

    def build(self) -> PhotoSize:
        return PhotoSize(
            file_id=self._file_id,
            file_unique_id=self._file_unique_id,
            width=self._width,
            height=self._height,
            file_size=self._file_size,
        )


class MockVideo(MockBuilder):
    WIDTH = 640
    HEIGHT = 480
    DURATION = 60
    FILE_ID = "BAADAgADZwADkg-4SQI5WM0SPNHrAg"
    FILE_UNIQUE_ID = "file_unique_id"
    FILE_SIZE = 5000

    width = Changeable(WIDTH)
    height = Changeable(HEIGHT)
    duration = Changeable(DURATION)
    thumbnail = Changeable()
    file_name = Changeable()
    mime_type = Changeable()
    file_id = Changeable(FILE_ID)
    file_unique_id = Changeable(FILE_UNIQUE_ID)
    file_size = Changeable(FILE_SIZE)

    def build(self) -> Video:
        return Video(
            file_id=self._file_id,
            file_unique_id=self._file_unique_id,
            width=self._width,
            height=self._height,
            duration=self._duration,
            thumbnail=self._thumbnail,
            file_name=self._file_name,
            mime_type=self._mime_type,
            file_size=self._file_size,
        )


class MockLocation(MockBuilder):
    LATITUDE = 50.0
    LONGITUDE = 30.0

    latitude = Changeable(LATITUDE)
    longitude = Changeable(LONGITUDE)
    horizontal_accuracy = Changeable()
    live_period = Changeable()
    heading = Changeable()
    proximity_alert_radius = Changeable()

    def build(self) -> Location:
        return Location(
            latitude=self._latitude,
            longitude=self._longitude,
            horizontal_accuracy=self._horizontal_accuracy,
            live_period=self._live_period,
            heading=self._heading,
            proximity_alert_radius=self._proximity_alert_radius,
        )


class MockInlineKeyboard(MockBuilder):
    """Inline keyboard assembled row by row.

        markup = MockInlineKeyboard().row(("Yes", "yes"), ("No", "no")).build()
    """

    rows = Changeable(factory=list)

    def row(self, *buttons: tuple[str, str]) -> "MockInlineKeyboard":
        """Append a row of ``(text, callback_data)`` buttons."""
        self._rows.append(list(buttons))
        return self

    def build(self) -> InlineKeyboardMarkup:
        return InlineKeyboardMarkup(
            inline_keyboard=[
                [InlineKeyboardButton(text=text, callback_data=data) for text, data in row]
                for row in self._rows
            ]
        )

"""
Builders for every "common" message kind.

Each builder only declares its payload fields (defaults are the class
constants) and maps them into the payload in ``build()``.

    message = MockMessageAudio().duration(10).caption("song").build()
    assert message.audio.duration == 10
"""
from aiogram.types import (
    Animation,
    Audio,
    Contact,
    Dice,
    Document,
    Game,
    Message,
    Poll,
    Sticker,
    Venue,
    VideoNote,
    Voice,
)

from mock_server.dataset.base import Changeable
from mock_server.dataset.entities import MockLocation, MockPhotoSize, MockVideo
from mock_server.dataset.message import MockMessageCommon


class MockMessageText(MockMessageCommon):
    TEXT = "text"

    text = Changeable(TEXT)
    entities = Changeable()

    def build(self) -> Message:
        return self.build_message_common(text=self._text, entities=self._entities)


class MockMessagePhoto(MockMessageCommon):
    HAS_MEDIA_SPOILER = False

    caption = Changeable()
    caption_entities = Changeable()
    media_group_id = Changeable()
    has_media_spoiler = Changeable(HAS_MEDIA_SPOILER)
    photo = Changeable(factory=lambda: [MockPhotoSize().build()])

    def build(self) -> Message:
        return self.build_message_common(
            caption=self._caption,
            caption_entities=self._caption_entities,
            media_group_id=self._media_group_id,
            has_media_spoiler=self._has_media_spoiler,
            photo=self._photo,
        )


class MockMessageVideo(MockMessageCommon):
    HAS_MEDIA_SPOILER = False

    caption = Changeable()
    caption_entities = Changeable()
    media_group_id = Changeable()
    has_media_spoiler = Changeable(HAS_MEDIA_SPOILER)
    video = Changeable(factory=lambda: MockVideo().build())

    def build(self) -> Message:
        return self.build_message_common(
            caption=self._caption,
            caption_entities=self._caption_entities,
            media_group_id=self._media_group_id,
            has_media_spoiler=self._has_media_spoiler,
            video=self._video,
        )


class MockMessageAudio(MockMessageCommon):
    DURATION = 236
    FILE_ID = "CQADAgADbQEAAsnrIUpNoRRNsH7_hAI"
    FILE_UNIQUE_ID = "file_unique_id"
    FILE_SIZE = 9507774

    caption = Changeable()
    caption_entities = Changeable()
    media_group_id = Changeable()
    duration = Changeable(DURATION)
    performer = Changeable()
    title = Changeable()
    thumbnail = Changeable()
    file_name = Changeable()
    mime_type = Changeable()
    file_id = Changeable(FILE_ID)
    file_unique_id = Changeable(FILE_UNIQUE_ID)
    file_size = Changeable(FILE_SIZE)

    def build(self) -> Message:
        return self.build_message_common(
            caption=self._caption,
            caption_entities=self._caption_entities,
            media_group_id=self._media_group_id,
            audio=Audio(
                file_id=self._file_id,
                file_unique_id=self._file_unique_id,
                file_size=self._file_size,
                duration=self._duration,
                performer=self._performer,
                title=self._title,
                thumbnail=self._thumbnail,
                file_name=self._file_name,
                mime_type=self._mime_type,
            ),
        )


class MockMessageVoice(MockMessageCommon):
    DURATION = 1
    FILE_ID = "AwADawAgADADy_JxS2gopIVIIxlhAg"
    FILE_UNIQUE_ID = "file_unique_id"
    FILE_SIZE = 4321

    caption = Changeable()
    caption_entities = Changeable()
    duration = Changeable(DURATION)
    mime_type = Changeable()
    file_id = Changeable(FILE_ID)
    file_unique_id = Changeable(FILE_UNIQUE_ID)
    file_size = Changeable(FILE_SIZE)

    def build(self) -> Message:
        return self.build_message_common(
            caption=self._caption,
            caption_entities=self._caption_entities,
            voice=Voice(
                file_id=self._file_id,
                file_unique_id=self._file_unique_id,
                file_size=self._file_size,
                duration=self._duration,
                mime_type=self._mime_type,
            ),
        )


class MockMessageDocument(MockMessageCommon):
    FILE_ID = "BQADAgADpgADy_JxS66XQTBRHFleAg"
    FILE_UNIQUE_ID = "file_unique_id"
    FILE_SIZE = 21331

    caption = Changeable()
    caption_entities = Changeable()
    media_group_id = Changeable()
    thumbnail = Changeable()
    file_name = Changeable()
    mime_type = Changeable()
    file_id = Changeable(FILE_ID)
    file_unique_id = Changeable(FILE_UNIQUE_ID)
    file_size = Changeable(FILE_SIZE)

    def build(self) -> Message:
        return self.build_message_common(
            caption=self._caption,
            caption_entities=self._caption_entities,
            media_group_id=self._media_group_id,
            document=Document(
                file_id=self._file_id,
                file_unique_id=self._file_unique_id,
                file_size=self._file_size,
                thumbnail=self._thumbnail,
                file_name=self._file_name,
                mime_type=self._mime_type,
            ),
        )


class MockMessageAnimation(MockMessageCommon):
    HAS_MEDIA_SPOILER = False
    WIDTH = 50
    HEIGHT = 50
    DURATION = 50
    FILE_ID = "file_id"
    FILE_UNIQUE_ID = "file_unique_id"
    FILE_SIZE = 50

    caption = Changeable()
    caption_entities = Changeable()
    has_media_spoiler = Changeable(HAS_MEDIA_SPOILER)
    width = Changeable(WIDTH)
    height = Changeable(HEIGHT)
    duration = Changeable(DURATION)
    thumbnail = Changeable()
    file_name = Changeable()
    mime_type = Changeable()
    file_id = Changeable(FILE_ID)
    file_unique_id = Changeable(FILE_UNIQUE_ID)
    file_size = Changeable(FILE_SIZE)

    def build(self) -> Message:
        return self.build_message_common(
            caption=self._caption,
            caption_entities=self._caption_entities,
            has_media_spoiler=self._has_media_spoiler,
            animation=Animation(
                file_id=self._file_id,
                file_unique_id=self._file_unique_id,
                file_size=self._file_size,
                width=self._width,
                height=self._height,
                duration=self._duration,
                thumbnail=self._thumbnail,
                file_name=self._file_name,
                mime_type=self._mime_type,
            ),
        )


class MockMessageSticker(MockMessageCommon):
    WIDTH = 512
    HEIGHT = 512
    TYPE = "regular"
    FILE_ID = "AAbbCCddEEffGGhh1234567890"
    FILE_UNIQUE_ID = "file_unique_id"
    FILE_SIZE = 12345

    width = Changeable(WIDTH)
    height = Changeable(HEIGHT)
    type = Changeable(TYPE)
    is_animated = Changeable(False)
    is_video = Changeable(False)
    thumbnail = Changeable()
    emoji = Changeable()
    set_name = Changeable()
    file_id = Changeable(FILE_ID)
    file_unique_id = Changeable(FILE_UNIQUE_ID)
    file_size = Changeable(FILE_SIZE)

    def build(self) -> Message:
        return self.build_message_common(
            sticker=Sticker(
                file_id=self._file_id,
                file_unique_id=self._file_unique_id,
                file_size=self._file_size,
                type=self._type,
                width=self._width,
                height=self._height,
                is_animated=self._is_animated,
                is_video=self._is_video,
                thumbnail=self._thumbnail,
                emoji=self._emoji,
                set_name=self._set_name,
            ),
        )


class MockMessageContact(MockMessageCommon):
    PHONE_NUMBER = "+123456789"
    FIRST_NAME = "First"

    phone_number = Changeable(PHONE_NUMBER)
    first_name = Changeable(FIRST_NAME)
    last_name = Changeable()
    user_id = Changeable()
    vcard = Changeable()

    def build(self) -> Message:
        return self.build_message_common(
            contact=Contact(
                phone_number=self._phone_number,
                first_name=self._first_name,
                last_name=self._last_name,
                user_id=self._user_id,
                vcard=self._vcard,
            ),
        )


class MockMessageLocation(MockMessageCommon):
    LATITUDE = MockLocation.LATITUDE
    LONGITUDE = MockLocation.LONGITUDE

    latitude = Changeable(LATITUDE)
    longitude = Changeable(LONGITUDE)
    horizontal_accuracy = Changeable()
    live_period = Changeable()
    heading = Changeable()
    proximity_alert_radius = Changeable()

    def build(self) -> Message:
        location = (
            MockLocation()
            .latitude(self._latitude)
            .longitude(self._longitude)
            .horizontal_accuracy(self._horizontal_accuracy)
            .live_period(self._live_period)
            .heading(self._heading)
            .proximity_alert_radius(self._proximity_alert_radius)
            .build()
        )
        return self.build_message_common(location=location)


class MockMessageVenue(MockMessageCommon):
    TITLE = "Title"
    ADDRESS = "Address"

    location = Changeable(factory=lambda: MockLocation().build())
    title = Changeable(TITLE)
    address = Changeable(ADDRESS)
    foursquare_id = Changeable()
    foursquare_type = Changeable()
    google_place_id = Changeable()
    google_place_type = Changeable()

    def build(self) -> Message:
        return self.build_message_common(
            venue=Venue(
                location=self._location,
                title=self._title,
                address=self._address,
                foursquare_id=self._foursquare_id,
                foursquare_type=self._foursquare_type,
                google_place_id=self._google_place_id,
                google_place_type=self._google_place_type,
            ),
        )


class MockMessagePoll(MockMessageCommon):
    POLL_ID = "12345"
    QUESTION = "Question"
    IS_CLOSED = True
    IS_ANONYMOUS = True
    TOTAL_VOTER_COUNT = 50
    POLL_TYPE = "regular"
    ALLOWS_MULTIPLE_ANSWERS = True
    ALLOWS_REVOTING = False
    MEMBERS_ONLY = False

    poll_id = Changeable(POLL_ID)
    question = Changeable(QUESTION)
    options = Changeable(factory=list)
    is_closed = Changeable(IS_CLOSED)
    total_voter_count = Changeable(TOTAL_VOTER_COUNT)
    is_anonymous = Changeable(IS_ANONYMOUS)
    poll_type = Changeable(POLL_TYPE)
    allows_multiple_answers = Changeable(ALLOWS_MULTIPLE_ANSWERS)
    allows_revoting = Changeable(ALLOWS_REVOTING)
    members_only = Changeable(MEMBERS_ONLY)
    correct_option_id = Changeable()
    explanation = Changeable()
    explanation_entities = Changeable()
    open_period = Changeable()
    close_date = Changeable()

    def build(self) -> Message:
        return self.build_message_common(
            poll=Poll(
                id=self._poll_id,
                question=self._question,
                options=self._options,
                is_closed=self._is_closed,
                total_voter_count=self._total_voter_count,
                is_anonymous=self._is_anonymous,
                type=self._poll_type,
                allows_multiple_answers=self._allows_multiple_answers,
                allows_revoting=self._allows_revoting,
                members_only=self._members_only,
                correct_option_id=self._correct_option_id,
                explanation=self._explanation,
                explanation_entities=self._explanation_entities,
                open_period=self._open_period,
                close_date=self._close_date,
            ),
        )


class MockMessageGame(MockMessageCommon):
    TITLE = "Title"
    DESCRIPTION = "Description"

    title = Changeable(TITLE)
    description = Changeable(DESCRIPTION)
    photo = Changeable(factory=lambda: [MockPhotoSize().build()])
    text = Changeable()
    text_entities = Changeable()
    animation = Changeable()

    def build(self) -> Message:
        return self.build_message_common(
            game=Game(
                title=self._title,
                description=self._description,
                photo=self._photo,
                text=self._text,
                text_entities=self._text_entities,
                animation=self._animation,
            ),
        )


class MockMessageVideoNote(MockMessageCommon):
    LENGTH = 50
    DURATION = 50
    FILE_ID = "file_id"
    FILE_UNIQUE_ID = "file_unique_id"
    FILE_SIZE = 50

    length = Changeable(LENGTH)
    duration = Changeable(DURATION)
    thumbnail = Changeable()
    file_id = Changeable(FILE_ID)
    file_unique_id = Changeable(FILE_UNIQUE_ID)
    file_size = Changeable(FILE_SIZE)

    def build(self) -> Message:
        return self.build_message_common(
            video_note=VideoNote(
                file_id=self._file_id,
                file_unique_id=self._file_unique_id,
                file_size=self._file_size,
                length=self._length,
                duration=self._duration,
                thumbnail=self._thumbnail,
            ),
        )


class MockMessageMigrationFromChat(MockMessageCommon):
    MIGRATE_FROM_CHAT_ID = 1

    migrate_from_chat_id = Changeable(MIGRATE_FROM_CHAT_ID)

    def build(self) -> Message:
        return self.build_message_common(migrate_from_chat_id=self._migrate_from_chat_id)


class MockMessageMigrationToChat(MockMessageCommon):
    MIGRATE_TO_CHAT_ID = 1

    migrate_to_chat_id = Changeable(MIGRATE_TO_CHAT_ID)

    def build(self) -> Message:
        return self.build_message_common(migrate_to_chat_id=self._migrate_to_chat_id)


class MockMessageDice(MockMessageCommon):
    VALUE = 1
    EMOJI = "🎲"

    value = Changeable(VALUE)
    emoji = Changeable(EMOJI)

    def build(self) -> Message:
        return self.build_message_common(dice=Dice(emoji=self._emoji, value=self._value))

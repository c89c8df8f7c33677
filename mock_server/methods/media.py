"""
Media-related API method handlers.

Handles: sendPhoto, sendVideo, sendAudio, sendVoice, sendVideoNote,
         sendDocument, sendAnimation, sendSticker, sendMediaGroup
"""
import logging
import uuid
from collections.abc import Callable
from typing import Any

from mock_server.dataset.entities import MockPhotoSize, MockVideo
from mock_server.dataset.message import MockMessageCommon
from mock_server.dataset.message_common import (
    MockMessageAnimation,
    MockMessageAudio,
    MockMessageDocument,
    MockMessagePhoto,
    MockMessageSticker,
    MockMessageVideo,
    MockMessageVideoNote,
    MockMessageVoice,
)
from mock_server.exceptions import MessageNotFound
from mock_server.methods.common import (
    apply_bot_fields,
    parse_entities,
    resolve_input_file,
    resolve_reply,
    safe_bool,
    safe_int,
    send_built_message,
)
from mock_server.responses import (
    make_error_response,
    make_messages_response,
    make_not_found_response,
)
from mock_server.state import ServerState, UploadedFile

logger = logging.getLogger("mock_server.methods.media")

MEDIA_GROUP_MIN = 2
MEDIA_GROUP_MAX = 10


def _with_caption(builder: Any, source: dict[str, Any]) -> Any:
    return builder.caption(source.get("caption") or None).caption_entities(
        parse_entities(source.get("caption_entities"))
    )


def _size(file: UploadedFile, default: int) -> int:
    return file.size or default


def _photo(file: UploadedFile, source: dict[str, Any]) -> MockMessageCommon:
    size = (
        MockPhotoSize()
        .file_id(file.file_id)
        .file_unique_id(file.file_unique_id)
        .file_size(_size(file, MockPhotoSize.FILE_SIZE))
        .build()
    )
    builder = MockMessagePhoto().photo([size]).has_media_spoiler(safe_bool(source.get("has_spoiler")))
    return _with_caption(builder, source)


def _video(file: UploadedFile, source: dict[str, Any]) -> MockMessageCommon:
    video = (
        MockVideo()
        .file_id(file.file_id)
        .file_unique_id(file.file_unique_id)
        .file_size(_size(file, MockVideo.FILE_SIZE))
        .width(safe_int(source.get("width")) or MockVideo.WIDTH)
        .height(safe_int(source.get("height")) or MockVideo.HEIGHT)
        .duration(safe_int(source.get("duration")) or MockVideo.DURATION)
        .file_name(file.filename)
        .mime_type(file.content_type)
        .build()
    )
    builder = MockMessageVideo().video(video).has_media_spoiler(safe_bool(source.get("has_spoiler")))
    return _with_caption(builder, source)


def _audio(file: UploadedFile, source: dict[str, Any]) -> MockMessageCommon:
    builder = (
        MockMessageAudio()
        .file_id(file.file_id)
        .file_unique_id(file.file_unique_id)
        .file_size(_size(file, MockMessageAudio.FILE_SIZE))
        .duration(safe_int(source.get("duration")) or MockMessageAudio.DURATION)
        .performer(source.get("performer"))
        .title(source.get("title"))
        .file_name(file.filename)
        .mime_type(file.content_type)
    )
    return _with_caption(builder, source)


def _voice(file: UploadedFile, source: dict[str, Any]) -> MockMessageCommon:
    builder = (
        MockMessageVoice()
        .file_id(file.file_id)
        .file_unique_id(file.file_unique_id)
        .file_size(_size(file, MockMessageVoice.FILE_SIZE))
        .duration(safe_int(source.get("duration")) or MockMessageVoice.DURATION)
        .mime_type(file.content_type)
    )
    return _with_caption(builder, source)


def _video_note(file: UploadedFile, source: dict[str, Any]) -> MockMessageCommon:
    return (
        MockMessageVideoNote()
        .file_id(file.file_id)
        .file_unique_id(file.file_unique_id)
        .file_size(_size(file, MockMessageVideoNote.FILE_SIZE))
        .length(safe_int(source.get("length")) or MockMessageVideoNote.LENGTH)
        .duration(safe_int(source.get("duration")) or MockMessageVideoNote.DURATION)
    )


def _document(file: UploadedFile, source: dict[str, Any]) -> MockMessageCommon:
    builder = (
        MockMessageDocument()
        .file_id(file.file_id)
        .file_unique_id(file.file_unique_id)
        .file_size(_size(file, MockMessageDocument.FILE_SIZE))
        .file_name(file.filename)
        .mime_type(file.content_type)
    )
    return _with_caption(builder, source)


def _animation(file: UploadedFile, source: dict[str, Any]) -> MockMessageCommon:
    builder = (
        MockMessageAnimation()
        .file_id(file.file_id)
        .file_unique_id(file.file_unique_id)
        .file_size(_size(file, MockMessageAnimation.FILE_SIZE))
        .width(safe_int(source.get("width")) or MockMessageAnimation.WIDTH)
        .height(safe_int(source.get("height")) or MockMessageAnimation.HEIGHT)
        .duration(safe_int(source.get("duration")) or MockMessageAnimation.DURATION)
        .file_name(file.filename)
        .mime_type(file.content_type)
        .has_media_spoiler(safe_bool(source.get("has_spoiler")))
    )
    return _with_caption(builder, source)


def _sticker(file: UploadedFile, source: dict[str, Any]) -> MockMessageCommon:
    return (
        MockMessageSticker()
        .file_id(file.file_id)
        .file_unique_id(file.file_unique_id)
        .file_size(_size(file, MockMessageSticker.FILE_SIZE))
        .emoji(source.get("emoji"))
    )


def _send_media(
    state: ServerState,
    method: str,
    field: str,
    data: dict[str, Any],
    make_builder: Callable[[UploadedFile, dict[str, Any]], MockMessageCommon],
) -> dict[str, Any]:
    file = resolve_input_file(state, data, data.get(field))
    if file is None:
        return make_error_response(f"Bad Request: there is no {field} in the request")
    return send_built_message(state, method, data, make_builder(file, data))


def handle_send_photo(data: dict[str, Any], state: ServerState) -> dict[str, Any]:
    """Handle sendPhoto API call."""
    return _send_media(state, "sendPhoto", "photo", data, _photo)


def handle_send_video(data: dict[str, Any], state: ServerState) -> dict[str, Any]:
    """Handle sendVideo API call."""
    return _send_media(state, "sendVideo", "video", data, _video)


def handle_send_audio(data: dict[str, Any], state: ServerState) -> dict[str, Any]:
    """Handle sendAudio API call."""
    return _send_media(state, "sendAudio", "audio", data, _audio)


def handle_send_voice(data: dict[str, Any], state: ServerState) -> dict[str, Any]:
    """Handle sendVoice API call."""
    return _send_media(state, "sendVoice", "voice", data, _voice)


def handle_send_video_note(data: dict[str, Any], state: ServerState) -> dict[str, Any]:
    """Handle sendVideoNote API call."""
    return _send_media(state, "sendVideoNote", "video_note", data, _video_note)


def handle_send_document(data: dict[str, Any], state: ServerState) -> dict[str, Any]:
    """Handle sendDocument API call."""
    return _send_media(state, "sendDocument", "document", data, _document)


def handle_send_animation(data: dict[str, Any], state: ServerState) -> dict[str, Any]:
    """Handle sendAnimation API call."""
    return _send_media(state, "sendAnimation", "animation", data, _animation)


def handle_send_sticker(data: dict[str, Any], state: ServerState) -> dict[str, Any]:
    """Handle sendSticker API call."""
    return _send_media(state, "sendSticker", "sticker", data, _sticker)


MEDIA_GROUP_BUILDERS: dict[str, Callable[[UploadedFile, dict[str, Any]], MockMessageCommon]] = {
    "photo": _photo,
    "video": _video,
    "audio": _audio,
    "document": _document,
}


def handle_send_media_group(data: dict[str, Any], state: ServerState) -> dict[str, Any]:
    """Handle sendMediaGroup API call.

    Every item becomes its own message sharing one ``media_group_id``. Items
    keep their own caption, so usually only the first one carries text.
    """
    chat_id = safe_int(data.get("chat_id"))
    media = data.get("media")

    if chat_id is None:
        return make_error_response("Bad Request: chat_id is required")
    if not isinstance(media, list) or not MEDIA_GROUP_MIN <= len(media) <= MEDIA_GROUP_MAX:
        return make_error_response(
            f"Bad Request: media group must contain {MEDIA_GROUP_MIN}-{MEDIA_GROUP_MAX} items"
        )

    builders: list[MockMessageCommon] = []
    for item in media:
        make_builder = MEDIA_GROUP_BUILDERS.get(item.get("type")) if isinstance(item, dict) else None
        if make_builder is None:
            return make_error_response("Bad Request: unsupported media type in the group")
        file = resolve_input_file(state, data, item.get("media"))
        if file is None:
            return make_error_response("Bad Request: there is no media in the request")
        builders.append(make_builder(file, item))

    media_group_id = uuid.uuid4().hex
    with state.lock:
        try:
            reply_to = resolve_reply(state, data)
        except MessageNotFound:
            return make_not_found_response("message to be replied")

        messages = []
        for builder in builders:
            apply_bot_fields(state, builder, data, chat_id, reply_to)
            builder.media_group_id(media_group_id)
            messages.append(state.messages.add(builder.build()))
        state.responses.append("sendMediaGroup", data, messages=messages)

    logger.debug(
        "sendMediaGroup to chat %d: %d messages, group=%s",
        chat_id,
        len(messages),
        media_group_id,
    )
    return make_messages_response(messages)

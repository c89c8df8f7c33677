"""
Helpers shared by the API method handlers.

aiogram posts every call as multipart form data, so scalars arrive as
strings and nested objects as JSON already decoded by the server.
"""
import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from aiogram.types import InlineKeyboardMarkup, Message, MessageEntity
from pydantic import ValidationError

from mock_server.dataset.message import MockMessageCommon
from mock_server.exceptions import MessageNotFound
from mock_server.responses import (
    make_error_response,
    make_message_response,
    make_not_found_response,
)
from mock_server.state import ServerState, UploadedFile

logger = logging.getLogger("mock_server.methods.common")

ATTACH_PREFIX = "attach://"


@dataclass
class FileUpload:
    """Multipart file part as received from the client."""

    filename: str | None
    content_type: str | None
    data: bytes


def safe_int(value: Any) -> int | None:
    """Safely convert value to int, return None on failure."""
    if value is None:
        return None
    try:
        return int(value)
    except (ValueError, TypeError):
        return None


def safe_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1")
    return bool(value)


def _decoded(value: Any) -> Any:
    if isinstance(value, str) and value[:1] in ("{", "["):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            return value
    return value


def parse_entities(value: Any) -> list[MessageEntity] | None:
    value = _decoded(value)
    if not value:
        return None
    try:
        return [MessageEntity.model_validate(entity) for entity in value]
    except (ValidationError, TypeError):
        logger.debug("Ignoring malformed entities: %r", value)
        return None


def inline_markup(value: Any) -> InlineKeyboardMarkup | None:
    """Inline keyboard from the request; any other markup kind is dropped."""
    value = _decoded(value)
    if not isinstance(value, dict) or "inline_keyboard" not in value:
        return None
    try:
        return InlineKeyboardMarkup.model_validate(value)
    except ValidationError:
        logger.debug("Ignoring malformed inline keyboard: %r", value)
        return None


def now() -> datetime:
    # The wire format carries whole seconds only
    return datetime.now(timezone.utc).replace(microsecond=0)


def timestamp() -> int:
    return int(now().timestamp())


def rebuild(message: Message, **fields: Any) -> Message:
    """Copy of ``message`` with ``fields`` replaced, validated like a fresh API object."""
    return Message.model_validate({**message.model_dump(), **fields})


def reply_target_id(data: dict[str, Any]) -> int | None:
    parameters = _decoded(data.get("reply_parameters"))
    if isinstance(parameters, dict) and parameters.get("message_id") is not None:
        return safe_int(parameters["message_id"])
    return safe_int(data.get("reply_to_message_id"))


def resolve_reply(state: ServerState, data: dict[str, Any]) -> Message | None:
    """Message the request replies to; raises ``MessageNotFound``."""
    message_id = reply_target_id(data)
    if message_id is None:
        return None
    target = state.messages.get(message_id)
    # Replies are never nested more than one level deep
    return target.model_copy(update={"reply_to_message": None})


def resolve_input_file(
    state: ServerState,
    data: dict[str, Any],
    value: Any,
) -> UploadedFile | None:
    """
    Turn an InputFile value into a registered file.

    The value is either ``attach://<part>`` naming a multipart part of
    ``data``, an inline part, or a plain file id / URL of an earlier upload.
    """
    if value is None:
        return None

    if isinstance(value, str) and value.startswith(ATTACH_PREFIX):
        value = data.get(value[len(ATTACH_PREFIX):])

    if isinstance(value, FileUpload):
        return state.register_file(value.data, value.filename, value.content_type)

    if isinstance(value, str):
        with state.lock:
            known = state.files.get(value)
        if known is not None:
            return known
        return UploadedFile(file_id=value, file_unique_id=f"unique_{value[:16]}")

    return None


def apply_bot_fields(
    state: ServerState,
    builder: MockMessageCommon,
    data: dict[str, Any],
    chat_id: int,
    reply_to: Message | None,
) -> MockMessageCommon:
    return (
        builder
        .chat(state.resolve_chat(chat_id))
        .date(now())
        .from_user(state.me)
        .message_thread_id(safe_int(data.get("message_thread_id")))
        .reply_to_message(reply_to)
        .reply_markup(inline_markup(data.get("reply_markup")))
        .has_protected_content(safe_bool(data.get("protect_content")))
    )


def send_built_message(
    state: ServerState,
    method: str,
    data: dict[str, Any],
    builder: MockMessageCommon,
) -> dict[str, Any]:
    """
    Finish a bot-authored message and store it.

    Fills the parts every send method shares (chat, sender, reply target,
    inline keyboard, thread and protection flags) on top of the payload the
    caller already put into ``builder``.
    """
    chat_id = safe_int(data.get("chat_id"))
    if chat_id is None:
        return make_error_response("Bad Request: chat_id is required")

    with state.lock:
        try:
            reply_to = resolve_reply(state, data)
        except MessageNotFound:
            return make_not_found_response("message to be replied")

        apply_bot_fields(state, builder, data, chat_id, reply_to)
        message = state.messages.add(builder.build())
        state.responses.append(method, data, message=message)

    logger.debug("%s to chat %d: message_id=%d", method, chat_id, message.message_id)
    return make_message_response(message)


def get_chat_message(state: ServerState, chat_id: int, message_id: int) -> Message:
    """Stored message ``message_id`` that belongs to ``chat_id``."""
    message = state.messages.get(message_id)
    if message.chat.id != chat_id:
        raise MessageNotFound(message_id)
    return message


def require_chat_and_message(data: dict[str, Any]) -> tuple[int, int] | None:
    chat_id = safe_int(data.get("chat_id"))
    message_id = safe_int(data.get("message_id"))
    if chat_id is None or message_id is None:
        return None
    return chat_id, message_id

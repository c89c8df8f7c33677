"""
Message-related API method handlers.

Handles: sendMessage, deleteMessage, deleteMessages, editMessageText,
         editMessageCaption, editMessageReplyMarkup
"""
import logging
from collections.abc import Callable
from typing import Any

from aiogram.types import Message

from mock_server.dataset.message_common import MockMessageText
from mock_server.exceptions import MessageNotFound
from mock_server.methods.common import (
    get_chat_message,
    inline_markup,
    parse_entities,
    rebuild,
    require_chat_and_message,
    safe_int,
    send_built_message,
    timestamp,
)
from mock_server.responses import (
    make_error_response,
    make_message_response,
    make_not_found_response,
    make_true_response,
)
from mock_server.state import ServerState

logger = logging.getLogger("mock_server.methods.messages")

CHAT_AND_MESSAGE_REQUIRED = "Bad Request: chat_id and message_id are required"

# Payloads that can carry a caption
CAPTIONED_PAYLOADS = ("photo", "video", "audio", "voice", "document", "animation")


def handle_send_message(data: dict[str, Any], state: ServerState) -> dict[str, Any]:
    """Handle sendMessage API call."""
    text = data.get("text")
    if not text:
        return make_error_response("Bad Request: message text is empty")

    builder = MockMessageText().text(text).entities(parse_entities(data.get("entities")))
    return send_built_message(state, "sendMessage", data, builder)


def handle_delete_message(data: dict[str, Any], state: ServerState) -> dict[str, Any]:
    """Handle deleteMessage API call."""
    ids = require_chat_and_message(data)
    if ids is None:
        return make_error_response(CHAT_AND_MESSAGE_REQUIRED)
    chat_id, message_id = ids

    with state.lock:
        try:
            get_chat_message(state, chat_id, message_id)
        except MessageNotFound:
            return make_not_found_response("message to delete")
        deleted = state.messages.delete(message_id)
        state.responses.append("deleteMessage", data, message=deleted)

    logger.debug("deleteMessage: chat=%d, message=%d", chat_id, message_id)
    return make_true_response()


def handle_delete_messages(data: dict[str, Any], state: ServerState) -> dict[str, Any]:
    """Handle deleteMessages API call (batch delete, unknown ids are skipped)."""
    chat_id = safe_int(data.get("chat_id"))
    message_ids = data.get("message_ids") or []

    if chat_id is None:
        return make_error_response("Bad Request: chat_id is required")
    if not isinstance(message_ids, list) or not message_ids:
        return make_error_response("Bad Request: message_ids is required")

    with state.lock:
        for raw_id in message_ids:
            message_id = safe_int(raw_id)
            if message_id is None:
                continue
            try:
                get_chat_message(state, chat_id, message_id)
            except MessageNotFound:
                continue
            deleted = state.messages.delete(message_id)
            state.responses.append("deleteMessages", data, message=deleted)

    logger.debug("deleteMessages: chat=%d, messages=%s", chat_id, message_ids)
    return make_true_response()


def _edit_message(
    state: ServerState,
    method: str,
    data: dict[str, Any],
    change: Callable[[Message], dict[str, Any] | str],
) -> dict[str, Any]:
    """Look the message up, apply ``change`` and stamp ``edit_date``.

    ``change`` returns the fields to update, or an error description.
    """
    ids = require_chat_and_message(data)
    if ids is None:
        return make_error_response(CHAT_AND_MESSAGE_REQUIRED)
    chat_id, message_id = ids

    with state.lock:
        try:
            message = get_chat_message(state, chat_id, message_id)
        except MessageNotFound:
            return make_not_found_response("message to edit")

        fields = change(message)
        if isinstance(fields, str):
            return make_error_response(f"Bad Request: {fields}")

        edited = rebuild(message, **fields, edit_date=timestamp())
        state.messages.update(edited)
        state.responses.append(method, data, message=edited)

    logger.debug("%s: chat=%d, message=%d", method, chat_id, message_id)
    return make_message_response(edited)


def handle_edit_message_text(data: dict[str, Any], state: ServerState) -> dict[str, Any]:
    """Handle editMessageText API call."""
    text = data.get("text")
    if not text:
        return make_error_response("Bad Request: text is required")

    def change(message: Message) -> dict[str, Any] | str:
        if message.text is None:
            return "there is no text in the message to edit"
        fields: dict[str, Any] = {
            "text": text,
            "entities": parse_entities(data.get("entities")),
        }
        markup = inline_markup(data.get("reply_markup"))
        if markup is not None:
            fields["reply_markup"] = markup
        return fields

    return _edit_message(state, "editMessageText", data, change)


def handle_edit_message_caption(data: dict[str, Any], state: ServerState) -> dict[str, Any]:
    """Handle editMessageCaption API call."""

    def change(message: Message) -> dict[str, Any] | str:
        if not any(getattr(message, payload) for payload in CAPTIONED_PAYLOADS):
            return "there is no caption in the message to edit"
        fields: dict[str, Any] = {
            "caption": data.get("caption"),
            "caption_entities": parse_entities(data.get("caption_entities")),
        }
        markup = inline_markup(data.get("reply_markup"))
        if markup is not None:
            fields["reply_markup"] = markup
        return fields

    return _edit_message(state, "editMessageCaption", data, change)


def handle_edit_message_reply_markup(
    data: dict[str, Any],
    state: ServerState,
) -> dict[str, Any]:
    """Handle editMessageReplyMarkup API call (no markup removes the keyboard)."""
    return _edit_message(
        state,
        "editMessageReplyMarkup",
        data,
        lambda message: {"reply_markup": inline_markup(data.get("reply_markup"))},
    )

"""
Handlers that duplicate an existing message.

Handles: forwardMessage, copyMessage
"""
import logging
from typing import Any

from aiogram.types import (
    Message,
    MessageOriginChannel,
    MessageOriginChat,
    MessageOriginHiddenUser,
    MessageOriginUser,
)

from mock_server.exceptions import MessageNotFound
from mock_server.methods.common import (
    get_chat_message,
    inline_markup,
    now,
    parse_entities,
    rebuild,
    resolve_reply,
    safe_bool,
    safe_int,
)
from mock_server.responses import (
    make_error_response,
    make_message_response,
    make_not_found_response,
    make_ok_response,
)
from mock_server.state import ServerState

logger = logging.getLogger("mock_server.methods.forward")

PROTECTED_CONTENT = "Bad Request: message has protected content"
IDS_REQUIRED = "Bad Request: chat_id, from_chat_id and message_id are required"


def forward_origin(source: Message, hidden_user_name: str) -> Any:
    """Origin a forward of ``source`` carries, derived from its chat kind."""
    # Forwarding a forward keeps the first origin
    if source.forward_origin is not None:
        return source.forward_origin

    chat = source.chat
    if chat.type == "private":
        if source.from_user is not None:
            return MessageOriginUser(date=source.date, sender_user=source.from_user)
        return MessageOriginHiddenUser(
            date=source.date,
            sender_user_name=chat.username or hidden_user_name,
        )
    if chat.type == "channel":
        return MessageOriginChannel(date=source.date, chat=chat, message_id=source.message_id)
    return MessageOriginChat(date=source.date, sender_chat=chat)


def _source_ids(data: dict[str, Any]) -> tuple[int, int, int] | None:
    chat_id = safe_int(data.get("chat_id"))
    from_chat_id = safe_int(data.get("from_chat_id"))
    message_id = safe_int(data.get("message_id"))
    if chat_id is None or from_chat_id is None or message_id is None:
        return None
    return chat_id, from_chat_id, message_id


def handle_forward_message(data: dict[str, Any], state: ServerState) -> dict[str, Any]:
    """Handle forwardMessage API call."""
    ids = _source_ids(data)
    if ids is None:
        return make_error_response(IDS_REQUIRED)
    chat_id, from_chat_id, message_id = ids

    with state.lock:
        try:
            source = get_chat_message(state, from_chat_id, message_id)
        except MessageNotFound:
            return make_not_found_response("message to forward")
        if source.has_protected_content:
            return make_error_response(PROTECTED_CONTENT)

        fields: dict[str, Any] = {
            "chat": state.resolve_chat(chat_id),
            "date": now(),
            "from_user": state.me,
            "sender_chat": None,
            "author_signature": None,
            "forward_origin": forward_origin(source, state.settings.hidden_user_name),
            "reply_to_message": None,
            "edit_date": None,
            "message_thread_id": safe_int(data.get("message_thread_id")),
            "has_protected_content": safe_bool(data.get("protect_content")),
        }
        message = state.messages.add(rebuild(source, **fields))
        state.responses.append("forwardMessage", data, message=message)

    logger.debug(
        "forwardMessage: %d from chat %d to chat %d as %d",
        message_id,
        from_chat_id,
        chat_id,
        message.message_id,
    )
    return make_message_response(message)


def handle_copy_message(data: dict[str, Any], state: ServerState) -> dict[str, Any]:
    """Handle copyMessage API call.

    The copy looks like a fresh bot message: no forward origin, optional
    caption and keyboard overrides. Only the new id is returned.
    """
    ids = _source_ids(data)
    if ids is None:
        return make_error_response(IDS_REQUIRED)
    chat_id, from_chat_id, message_id = ids

    with state.lock:
        try:
            source = get_chat_message(state, from_chat_id, message_id)
        except MessageNotFound:
            return make_not_found_response("message to copy")
        if source.has_protected_content:
            return make_error_response(PROTECTED_CONTENT)
        try:
            reply_to = resolve_reply(state, data)
        except MessageNotFound:
            return make_not_found_response("message to be replied")

        fields: dict[str, Any] = {
            "chat": state.resolve_chat(chat_id),
            "date": now(),
            "from_user": state.me,
            "sender_chat": None,
            "author_signature": None,
            "forward_origin": None,
            "reply_to_message": reply_to,
            "edit_date": None,
            "reply_markup": inline_markup(data.get("reply_markup")),
            "message_thread_id": safe_int(data.get("message_thread_id")),
            "has_protected_content": safe_bool(data.get("protect_content")),
        }
        if "caption" in data and source.text is None:
            fields["caption"] = data.get("caption") or None
            fields["caption_entities"] = parse_entities(data.get("caption_entities"))

        message = state.messages.add(rebuild(source, **fields))
        state.responses.append("copyMessage", data, message=message)

    logger.debug(
        "copyMessage: %d from chat %d to chat %d as %d",
        message_id,
        from_chat_id,
        chat_id,
        message.message_id,
    )
    return make_ok_response({"message_id": message.message_id})

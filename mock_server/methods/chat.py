"""
Chat administration API method handlers.

Handles: pinChatMessage, unpinChatMessage, unpinAllChatMessages,
         banChatMember, unbanChatMember, restrictChatMember
"""
import logging
from typing import Any

from mock_server.exceptions import MessageNotFound
from mock_server.methods.common import (
    get_chat_message,
    require_chat_and_message,
    safe_bool,
    safe_int,
)
from mock_server.responses import (
    make_error_response,
    make_not_found_response,
    make_true_response,
)
from mock_server.state import ServerState

logger = logging.getLogger("mock_server.methods.chat")

# Chats where a ban always wipes the member's messages
REVOKING_CHAT_TYPES = frozenset({"supergroup", "channel"})


def handle_pin_chat_message(data: dict[str, Any], state: ServerState) -> dict[str, Any]:
    """Handle pinChatMessage API call."""
    ids = require_chat_and_message(data)
    if ids is None:
        return make_error_response("Bad Request: chat_id and message_id are required")
    chat_id, message_id = ids

    with state.lock:
        try:
            message = get_chat_message(state, chat_id, message_id)
        except MessageNotFound:
            return make_not_found_response("message to pin")
        state.responses.append("pinChatMessage", data, message=message)

    logger.debug("pinChatMessage: chat=%d, message=%d", chat_id, message_id)
    return make_true_response()


def handle_unpin_chat_message(data: dict[str, Any], state: ServerState) -> dict[str, Any]:
    """Handle unpinChatMessage API call (no message_id unpins the latest pin)."""
    chat_id = safe_int(data.get("chat_id"))
    message_id = safe_int(data.get("message_id"))
    if chat_id is None:
        return make_error_response("Bad Request: chat_id is required")

    with state.lock:
        message = None
        if message_id is not None:
            try:
                message = get_chat_message(state, chat_id, message_id)
            except MessageNotFound:
                return make_not_found_response("message to unpin")
        state.responses.append("unpinChatMessage", data, message=message)

    logger.debug("unpinChatMessage: chat=%d, message=%s", chat_id, message_id)
    return make_true_response()


def handle_unpin_all_chat_messages(data: dict[str, Any], state: ServerState) -> dict[str, Any]:
    """Handle unpinAllChatMessages API call."""
    chat_id = safe_int(data.get("chat_id"))
    if chat_id is None:
        return make_error_response("Bad Request: chat_id is required")

    state.responses.append("unpinAllChatMessages", data)
    logger.debug("unpinAllChatMessages: chat=%d", chat_id)
    return make_true_response()


def _chat_and_user(data: dict[str, Any]) -> tuple[int, int] | None:
    chat_id = safe_int(data.get("chat_id"))
    user_id = safe_int(data.get("user_id"))
    if chat_id is None or user_id is None:
        return None
    return chat_id, user_id


def handle_ban_chat_member(data: dict[str, Any], state: ServerState) -> dict[str, Any]:
    """Handle banChatMember API call.

    With ``revoke_messages`` (implied in supergroups and channels) every
    message the member sent in the chat is removed from the store.
    """
    ids = _chat_and_user(data)
    if ids is None:
        return make_error_response("Bad Request: chat_id and user_id are required")
    chat_id, user_id = ids

    with state.lock:
        chat = state.resolve_chat(chat_id)
        revoke = safe_bool(data.get("revoke_messages")) or chat.type in REVOKING_CHAT_TYPES

        revoked = []
        if revoke:
            revoked = [
                state.messages.delete(message.message_id)
                for message in state.messages.messages_from(chat_id, user_id)
            ]

        member = state.member(chat_id, user_id)
        member.banned = True
        member.until_date = safe_int(data.get("until_date"))
        state.responses.append("banChatMember", data, messages=revoked)

    logger.debug(
        "banChatMember: chat=%d, user=%d, revoked=%d messages",
        chat_id,
        user_id,
        len(revoked),
    )
    return make_true_response()


def handle_unban_chat_member(data: dict[str, Any], state: ServerState) -> dict[str, Any]:
    """Handle unbanChatMember API call."""
    ids = _chat_and_user(data)
    if ids is None:
        return make_error_response("Bad Request: chat_id and user_id are required")
    chat_id, user_id = ids

    with state.lock:
        member = state.member(chat_id, user_id)
        member.banned = False
        member.until_date = None
        state.responses.append("unbanChatMember", data)

    logger.debug("unbanChatMember: chat=%d, user=%d", chat_id, user_id)
    return make_true_response()


def handle_restrict_chat_member(data: dict[str, Any], state: ServerState) -> dict[str, Any]:
    """Handle restrictChatMember API call."""
    ids = _chat_and_user(data)
    if ids is None:
        return make_error_response("Bad Request: chat_id and user_id are required")
    chat_id, user_id = ids

    permissions = data.get("permissions")
    if not isinstance(permissions, dict):
        return make_error_response("Bad Request: permissions are required")

    with state.lock:
        member = state.member(chat_id, user_id)
        member.permissions = dict(permissions)
        member.until_date = safe_int(data.get("until_date"))
        state.responses.append("restrictChatMember", data)

    logger.debug("restrictChatMember: chat=%d, user=%d, %s", chat_id, user_id, permissions)
    return make_true_response()

"""
Telegram API method handlers.

Each module handles a group of related API methods. Every handler has the
signature ``handle_x(data, state) -> response dict``.
"""
from mock_server.methods.callbacks import handle_answer_callback_query, handle_get_file
from mock_server.methods.chat import (
    handle_ban_chat_member,
    handle_pin_chat_message,
    handle_restrict_chat_member,
    handle_unban_chat_member,
    handle_unpin_all_chat_messages,
    handle_unpin_chat_message,
)
from mock_server.methods.forward import handle_copy_message, handle_forward_message
from mock_server.methods.media import (
    handle_send_animation,
    handle_send_audio,
    handle_send_document,
    handle_send_media_group,
    handle_send_photo,
    handle_send_sticker,
    handle_send_video,
    handle_send_video_note,
    handle_send_voice,
)
from mock_server.methods.messages import (
    handle_delete_message,
    handle_delete_messages,
    handle_edit_message_caption,
    handle_edit_message_reply_markup,
    handle_edit_message_text,
    handle_send_message,
)
from mock_server.methods.payloads import (
    handle_send_contact,
    handle_send_dice,
    handle_send_location,
    handle_send_poll,
    handle_send_venue,
)

__all__ = [
    # Messages
    "handle_send_message",
    "handle_delete_message",
    "handle_delete_messages",
    "handle_edit_message_text",
    "handle_edit_message_caption",
    "handle_edit_message_reply_markup",
    # Media
    "handle_send_photo",
    "handle_send_video",
    "handle_send_audio",
    "handle_send_voice",
    "handle_send_video_note",
    "handle_send_document",
    "handle_send_animation",
    "handle_send_sticker",
    "handle_send_media_group",
    # Payloads
    "handle_send_contact",
    "handle_send_location",
    "handle_send_venue",
    "handle_send_poll",
    "handle_send_dice",
    # Forwarding
    "handle_forward_message",
    "handle_copy_message",
    # Chat administration
    "handle_pin_chat_message",
    "handle_unpin_chat_message",
    "handle_unpin_all_chat_messages",
    "handle_ban_chat_member",
    "handle_unban_chat_member",
    "handle_restrict_chat_member",
    # Callbacks and files
    "handle_answer_callback_query",
    "handle_get_file",
]

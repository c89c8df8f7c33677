"""
Fake Telegram Bot API HTTP server.

Accepts requests in the same format as api.telegram.org and returns
realistic responses, keeping every message it hands out in a
``MessageStore`` so later edits, deletes and forwards behave like the real
API.
"""
import json
import logging
from collections.abc import Callable
from typing import Any

from aiohttp import web

from mock_server.config import Settings
from mock_server.exceptions import StoreCorrupted
from mock_server.logger import log_api_call
from mock_server.methods import (
    handle_answer_callback_query,
    handle_ban_chat_member,
    handle_copy_message,
    handle_delete_message,
    handle_delete_messages,
    handle_edit_message_caption,
    handle_edit_message_reply_markup,
    handle_edit_message_text,
    handle_forward_message,
    handle_get_file,
    handle_pin_chat_message,
    handle_restrict_chat_member,
    handle_send_animation,
    handle_send_audio,
    handle_send_contact,
    handle_send_dice,
    handle_send_document,
    handle_send_location,
    handle_send_media_group,
    handle_send_message,
    handle_send_photo,
    handle_send_poll,
    handle_send_sticker,
    handle_send_venue,
    handle_send_video,
    handle_send_video_note,
    handle_send_voice,
    handle_unban_chat_member,
    handle_unpin_all_chat_messages,
    handle_unpin_chat_message,
)
from mock_server.methods.common import FileUpload
from mock_server.responses import dump, make_error_response, make_ok_response, make_true_response
from mock_server.state import ServerState
from mock_server.store import MessageStore
from mock_server.tracker import RequestTracker, ResponseLog

logger = logging.getLogger("mock_server.server")

Handler = Callable[[dict[str, Any], ServerState], dict[str, Any]]

# Served for files nobody uploaded
PLACEHOLDER_FILE = b"\x00\x00\x00\x1cftypisom" + b"\x00" * 100

HANDLERS: dict[str, Handler] = {
    "sendMessage": handle_send_message,
    "deleteMessage": handle_delete_message,
    "deleteMessages": handle_delete_messages,
    "editMessageText": handle_edit_message_text,
    "editMessageCaption": handle_edit_message_caption,
    "editMessageReplyMarkup": handle_edit_message_reply_markup,
    "sendPhoto": handle_send_photo,
    "sendVideo": handle_send_video,
    "sendAudio": handle_send_audio,
    "sendVoice": handle_send_voice,
    "sendVideoNote": handle_send_video_note,
    "sendDocument": handle_send_document,
    "sendAnimation": handle_send_animation,
    "sendSticker": handle_send_sticker,
    "sendMediaGroup": handle_send_media_group,
    "sendContact": handle_send_contact,
    "sendLocation": handle_send_location,
    "sendVenue": handle_send_venue,
    "sendPoll": handle_send_poll,
    "sendDice": handle_send_dice,
    "forwardMessage": handle_forward_message,
    "copyMessage": handle_copy_message,
    # Chat operations
    "pinChatMessage": handle_pin_chat_message,
    "unpinChatMessage": handle_unpin_chat_message,
    "unpinAllChatMessages": handle_unpin_all_chat_messages,
    "banChatMember": handle_ban_chat_member,
    "unbanChatMember": handle_unban_chat_member,
    "restrictChatMember": handle_restrict_chat_member,
    # Callbacks and files
    "answerCallbackQuery": handle_answer_callback_query,
    "getFile": handle_get_file,
}


class FakeTelegramServer:
    """
    Fake Telegram Bot API server.

    Routes requests to the method handlers and tracks all API calls.
    Maintains messages, responses and uploads in one ``ServerState``.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self.state = ServerState(settings)
        self.app = web.Application()
        self._setup_routes()

    def _setup_routes(self) -> None:
        """Setup URL routes for Telegram API methods."""
        self.app.router.add_post("/bot{token}/{method}", self._handle_request)
        self.app.router.add_get("/bot{token}/{method}", self._handle_request)
        # File download route (for bot.download)
        self.app.router.add_get("/file/bot{token}/{path:.*}", self._handle_file_download)

    async def _handle_request(self, request: web.Request) -> web.Response:
        """Handle incoming API request."""
        method = request.match_info["method"]

        data = await self._parse_request_data(request)

        self.state.requests.add_request(method, data)

        try:
            response_data = self._route_method(method, data)
        except StoreCorrupted as e:
            logger.exception("Store invariant broken while handling %s", method)
            response_data = make_error_response(f"Internal Server Error: {e}", error_code=500)

        ok = bool(response_data.get("ok"))
        logger.debug("API %s -> %s", method, "ok" if ok else "error")
        if self.state.settings.echo_requests:
            log_api_call(method, ok, response_data.get("description"))

        status = 200
        if not ok and "error_code" in response_data:
            status = response_data["error_code"]

        return web.json_response(response_data, status=status)

    async def _handle_file_download(self, request: web.Request) -> web.Response:
        """Handle file download requests (for bot.download)."""
        path = request.match_info["path"]
        file_id = path.rsplit("/", 1)[-1]

        with self.state.lock:
            uploaded = self.state.files.get(file_id)

        if uploaded is None or not uploaded.data:
            return web.Response(body=PLACEHOLDER_FILE, content_type="video/mp4")

        return web.Response(
            body=uploaded.data,
            content_type=uploaded.content_type or "application/octet-stream",
        )

    @staticmethod
    async def _parse_request_data(request: web.Request) -> dict[str, Any]:
        """Parse request body based on content type."""
        content_type = request.content_type

        if content_type == "application/json":
            try:
                return await request.json()
            except json.JSONDecodeError:
                return {}

        result: dict[str, Any] = dict(request.query)
        try:
            post_data = await request.post()
        except ValueError:
            return result

        for key, value in post_data.items():
            if isinstance(value, web.FileField):
                result[key] = FileUpload(
                    filename=value.filename,
                    content_type=value.content_type,
                    data=value.file.read(),
                )
            elif isinstance(value, str) and value and value[0] in "{[":
                try:
                    result[key] = json.loads(value)
                except json.JSONDecodeError:
                    result[key] = value
            else:
                result[key] = value
        return result

    def _route_method(self, method: str, data: dict[str, Any]) -> dict[str, Any]:
        """Route API method to appropriate handler."""
        handler = HANDLERS.get(method)
        if handler is not None:
            return handler(data, self.state)

        # Methods without state
        stateless_handlers: dict[str, Callable[[], dict[str, Any]]] = {
            "getMe": self._handle_get_me,
            "setMyCommands": make_true_response,
            "deleteMyCommands": make_true_response,
            "deleteWebhook": make_true_response,
            "getUpdates": self._handle_get_updates,
        }
        stateless = stateless_handlers.get(method)
        if stateless is not None:
            return stateless()

        return self._handle_unknown_method(method)

    def _handle_get_me(self) -> dict[str, Any]:
        """Handle getMe API call."""
        return make_ok_response(dump(self.state.me))

    @staticmethod
    def _handle_get_updates() -> dict[str, Any]:
        """Handle getUpdates API call (returns empty list)."""
        return make_ok_response([])

    @staticmethod
    def _handle_unknown_method(method: str) -> dict[str, Any]:
        """Handle unknown API method."""
        logger.warning("Unknown API method: %s", method)
        return make_error_response(
            f"Method '{method}' not implemented in mock server",
            error_code=404,
        )

    @property
    def messages(self) -> MessageStore:
        return self.state.messages

    @property
    def responses(self) -> ResponseLog:
        return self.state.responses

    @property
    def tracker(self) -> RequestTracker:
        return self.state.requests

    def clear(self) -> None:
        """Reset server state for reuse between tests."""
        self.state.clear()

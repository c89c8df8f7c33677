"""
Callback query and file API method handlers.

Handles: answerCallbackQuery, getFile
"""
import logging
from typing import Any

from mock_server.responses import make_error_response, make_ok_response, make_true_response
from mock_server.state import ServerState

logger = logging.getLogger("mock_server.methods.callbacks")


def handle_answer_callback_query(data: dict[str, Any], state: ServerState) -> dict[str, Any]:
    """Handle answerCallbackQuery API call."""
    callback_query_id = data.get("callback_query_id")

    if callback_query_id is None:
        return make_error_response("Bad Request: callback_query_id is required")

    state.responses.append("answerCallbackQuery", data)
    logger.debug(
        "answerCallbackQuery: id=%s, text=%s",
        callback_query_id,
        data.get("text"),
    )

    return make_true_response()


def handle_get_file(data: dict[str, Any], state: ServerState) -> dict[str, Any]:
    """Handle getFile API call.

    Returns File object whose ``file_path`` is served by the download route.
    Unknown ids still resolve so bots can download files they got from
    fixtures.
    """
    file_id = data.get("file_id")

    if not file_id:
        return make_error_response("Bad Request: file_id is required")

    with state.lock:
        uploaded = state.files.get(file_id)

    result: dict[str, Any] = {
        "file_id": file_id,
        "file_unique_id": uploaded.file_unique_id if uploaded else f"unique_{file_id[:16]}",
        "file_path": state.file_path(file_id),
    }
    if uploaded is not None and uploaded.size:
        result["file_size"] = uploaded.size

    logger.debug("getFile: file_id=%s, known=%s", file_id, uploaded is not None)
    return make_ok_response(result)

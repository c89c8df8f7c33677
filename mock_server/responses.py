"""
Build Bot API response envelopes.

Entities are dumped with aiogram's own schema, so whatever the server returns
parses back into the same types on the bot side.
"""
from typing import Any

from aiogram.types import Message
from pydantic import BaseModel


def dump(entity: BaseModel) -> dict[str, Any]:
    """Wire form of an aiogram entity (``from`` alias, unix dates, no nulls)."""
    return entity.model_dump(mode="json", exclude_none=True, by_alias=True)


def make_ok_response(result: Any) -> dict[str, Any]:
    """Create successful Telegram API response."""
    return {"ok": True, "result": result}


def make_error_response(description: str, error_code: int = 400) -> dict[str, Any]:
    """Create error Telegram API response."""
    return {
        "ok": False,
        "error_code": error_code,
        "description": description,
    }


def make_not_found_response(what: str) -> dict[str, Any]:
    return make_error_response(f"Bad Request: {what} not found")


def make_message_response(message: Message) -> dict[str, Any]:
    return make_ok_response(dump(message))


def make_messages_response(messages: list[Message]) -> dict[str, Any]:
    return make_ok_response([dump(m) for m in messages])


def make_true_response() -> dict[str, Any]:
    """Create response with result=True (for deleteMessage, answerCallbackQuery)."""
    return make_ok_response(True)

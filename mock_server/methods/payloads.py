"""
Handlers for messages without a file payload.

Handles: sendContact, sendLocation, sendVenue, sendPoll, sendDice
"""
import logging
import random
import uuid
from typing import Any

from aiogram.types import PollOption

from mock_server.dataset.entities import MockLocation
from mock_server.dataset.message_common import (
    MockMessageContact,
    MockMessageDice,
    MockMessageLocation,
    MockMessagePoll,
    MockMessageVenue,
)
from mock_server.methods.common import safe_bool, safe_int, send_built_message
from mock_server.responses import make_error_response
from mock_server.state import ServerState

logger = logging.getLogger("mock_server.methods.payloads")

# Number of faces per dice emoji
DICE_FACES: dict[str, int] = {
    "🎲": 6,
    "🎯": 6,
    "🎳": 6,
    "🏀": 5,
    "⚽": 5,
    "🎰": 64,
}

POLL_MIN_OPTIONS = 2
POLL_MAX_OPTIONS = 10


def _safe_float(value: Any) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except (ValueError, TypeError):
        return None


def _coordinates(data: dict[str, Any]) -> tuple[float, float] | None:
    latitude = _safe_float(data.get("latitude"))
    longitude = _safe_float(data.get("longitude"))
    if latitude is None or longitude is None:
        return None
    return latitude, longitude


def handle_send_contact(data: dict[str, Any], state: ServerState) -> dict[str, Any]:
    """Handle sendContact API call."""
    phone_number = data.get("phone_number")
    first_name = data.get("first_name")
    if not phone_number or not first_name:
        return make_error_response("Bad Request: phone_number and first_name are required")

    builder = (
        MockMessageContact()
        .phone_number(phone_number)
        .first_name(first_name)
        .last_name(data.get("last_name"))
        .vcard(data.get("vcard"))
    )
    return send_built_message(state, "sendContact", data, builder)


def handle_send_location(data: dict[str, Any], state: ServerState) -> dict[str, Any]:
    """Handle sendLocation API call."""
    coordinates = _coordinates(data)
    if coordinates is None:
        return make_error_response("Bad Request: latitude and longitude are required")

    latitude, longitude = coordinates
    builder = (
        MockMessageLocation()
        .latitude(latitude)
        .longitude(longitude)
        .horizontal_accuracy(_safe_float(data.get("horizontal_accuracy")))
        .live_period(safe_int(data.get("live_period")))
        .heading(safe_int(data.get("heading")))
        .proximity_alert_radius(safe_int(data.get("proximity_alert_radius")))
    )
    return send_built_message(state, "sendLocation", data, builder)


def handle_send_venue(data: dict[str, Any], state: ServerState) -> dict[str, Any]:
    """Handle sendVenue API call."""
    coordinates = _coordinates(data)
    title = data.get("title")
    address = data.get("address")
    if coordinates is None or not title or not address:
        return make_error_response(
            "Bad Request: latitude, longitude, title and address are required"
        )

    latitude, longitude = coordinates
    builder = (
        MockMessageVenue()
        .location(MockLocation().latitude(latitude).longitude(longitude).build())
        .title(title)
        .address(address)
        .foursquare_id(data.get("foursquare_id"))
        .foursquare_type(data.get("foursquare_type"))
        .google_place_id(data.get("google_place_id"))
        .google_place_type(data.get("google_place_type"))
    )
    return send_built_message(state, "sendVenue", data, builder)


def _poll_option_text(option: Any) -> str | None:
    if isinstance(option, dict):
        return option.get("text")
    if isinstance(option, str):
        return option
    return None


def handle_send_poll(data: dict[str, Any], state: ServerState) -> dict[str, Any]:
    """Handle sendPoll API call. The poll starts open with no votes."""
    question = data.get("question")
    options = data.get("options")

    if not question:
        return make_error_response("Bad Request: poll question is required")
    if not isinstance(options, list) or not POLL_MIN_OPTIONS <= len(options) <= POLL_MAX_OPTIONS:
        return make_error_response(
            f"Bad Request: poll must have {POLL_MIN_OPTIONS}-{POLL_MAX_OPTIONS} options"
        )

    texts = [_poll_option_text(option) for option in options]
    if not all(texts):
        return make_error_response("Bad Request: poll options must be non-empty")

    is_anonymous = data.get("is_anonymous")
    builder = (
        MockMessagePoll()
        .poll_id(uuid.uuid4().hex)
        .question(question)
        .options([PollOption(text=text, voter_count=0) for text in texts])
        .is_closed(safe_bool(data.get("is_closed")))
        .total_voter_count(0)
        .is_anonymous(True if is_anonymous is None else safe_bool(is_anonymous))
        .poll_type(data.get("type") or MockMessagePoll.POLL_TYPE)
        .allows_multiple_answers(safe_bool(data.get("allows_multiple_answers")))
        .allows_revoting(safe_bool(data.get("allows_revoting")))
        .members_only(safe_bool(data.get("members_only")))
        .correct_option_id(safe_int(data.get("correct_option_id")))
        .explanation(data.get("explanation"))
        .open_period(safe_int(data.get("open_period")))
    )
    return send_built_message(state, "sendPoll", data, builder)


def handle_send_dice(data: dict[str, Any], state: ServerState) -> dict[str, Any]:
    """Handle sendDice API call. The value is always rolled here."""
    emoji = data.get("emoji") or MockMessageDice.EMOJI
    faces = DICE_FACES.get(emoji)
    if faces is None:
        return make_error_response(f"Bad Request: unsupported dice emoji {emoji!r}")

    builder = MockMessageDice().emoji(emoji).value(random.randint(1, faces))
    return send_built_message(state, "sendDice", data, builder)

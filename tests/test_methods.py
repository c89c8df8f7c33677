"""
Tests for the API method handlers, called directly with form-style data.
"""
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone

from freezegun import freeze_time

from mock_server.config import Settings
from mock_server.dataset import (
    MockChannelChat,
    MockGroupChat,
    MockInlineKeyboard,
    MockMessageContact,
    MockMessagePhoto,
    MockMessageText,
    MockPrivateChat,
    MockSupergroupChat,
    MockUser,
)
from mock_server.methods import (
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
    handle_send_dice,
    handle_send_media_group,
    handle_send_message,
    handle_send_photo,
    handle_send_poll,
    handle_unban_chat_member,
    handle_unpin_chat_message,
)
from mock_server.methods.common import FileUpload
from mock_server.state import ServerState

CHAT_ID = MockPrivateChat.ID
EDIT_TIME = datetime(2025, 1, 20, 10, 0, tzinfo=timezone.utc)


def _send(state: ServerState, text: str = "hello", **extra) -> dict:
    response = handle_send_message({"chat_id": str(CHAT_ID), "text": text, **extra}, state)
    assert response["ok"], response
    return response["result"]


class TestSendMessage:
    """sendMessage."""

    def test_first_message_gets_id_one(self, state: ServerState) -> None:
        result = _send(state)

        assert result["message_id"] == 1
        assert result["text"] == "hello"
        assert result["chat"]["id"] == CHAT_ID

    def test_sender_is_the_bot(self, state: ServerState) -> None:
        result = _send(state)

        assert result["from"]["id"] == state.settings.bot_id
        assert result["from"]["is_bot"] is True

    def test_ids_increase(self, state: ServerState) -> None:
        ids = [_send(state)["message_id"] for _ in range(3)]

        assert ids == [1, 2, 3]

    def test_empty_text(self, state: ServerState) -> None:
        response = handle_send_message({"chat_id": "1", "text": ""}, state)

        assert not response["ok"]
        assert response["error_code"] == 400

    def test_missing_chat(self, state: ServerState) -> None:
        response = handle_send_message({"text": "hi"}, state)

        assert response["description"] == "Bad Request: chat_id is required"

    def test_entities_kept(self, state: ServerState) -> None:
        result = _send(state, entities=[{"type": "bold", "offset": 0, "length": 5}])

        assert result["entities"] == [{"type": "bold", "offset": 0, "length": 5}]

    def test_reply_parameters(self, state: ServerState) -> None:
        original = _send(state, "question")
        result = _send(state, "answer", reply_parameters={"message_id": original["message_id"]})

        assert result["reply_to_message"]["text"] == "question"

    def test_reply_to_message_id(self, state: ServerState) -> None:
        original = _send(state, "question")
        result = _send(state, "answer", reply_to_message_id=str(original["message_id"]))

        assert result["reply_to_message"]["message_id"] == original["message_id"]

    def test_reply_to_missing_message(self, state: ServerState) -> None:
        response = handle_send_message(
            {"chat_id": str(CHAT_ID), "text": "hi", "reply_parameters": {"message_id": 42}},
            state,
        )

        assert response["description"] == "Bad Request: message to be replied not found"
        assert len(state.messages) == 0

    def test_inline_keyboard_kept(self, state: ServerState) -> None:
        markup = {"inline_keyboard": [[{"text": "Go", "callback_data": "go"}]]}
        result = _send(state, reply_markup=markup)

        assert result["reply_markup"]["inline_keyboard"][0][0]["callback_data"] == "go"

    def test_reply_keyboard_dropped(self, state: ServerState) -> None:
        result = _send(state, reply_markup={"keyboard": [[{"text": "Hi"}]]})

        assert "reply_markup" not in result

    def test_chat_reused_from_store(self, state: ServerState) -> None:
        """A chat seen in an earlier message keeps its details."""
        group = MockGroupChat().title("Friends").build()
        state.messages.add(MockMessageText().chat(group).build())

        result = handle_send_message({"chat_id": str(group.id), "text": "hi"}, state)["result"]

        assert result["chat"]["title"] == "Friends"

    def test_logged(self, state: ServerState) -> None:
        _send(state, "logged")

        entry = state.responses.last("sendMessage")
        assert entry.message.text == "logged"
        assert entry.request["text"] == "logged"


class TestEditMessages:
    """editMessageText, editMessageCaption, editMessageReplyMarkup."""

    def test_edit_text_only_touches_text(self, state: ServerState) -> None:
        markup = {"inline_keyboard": [[{"text": "Go", "callback_data": "go"}]]}
        sent = _send(state, "before", reply_markup=markup)

        with freeze_time(EDIT_TIME):
            response = handle_edit_message_text(
                {"chat_id": str(CHAT_ID), "message_id": str(sent["message_id"]), "text": "after"},
                state,
            )

        stored = state.messages.get(sent["message_id"])
        assert response["ok"]
        assert stored.text == "after"
        assert stored.edit_date == int(EDIT_TIME.timestamp())
        assert response["result"]["edit_date"] == int(EDIT_TIME.timestamp())
        assert stored.reply_markup.inline_keyboard[0][0].text == "Go"
        assert stored.date != EDIT_TIME

    def test_edit_missing_message(self, state: ServerState) -> None:
        response = handle_edit_message_text(
            {"chat_id": str(CHAT_ID), "message_id": "9", "text": "x"}, state
        )

        assert response["description"] == "Bad Request: message to edit not found"

    def test_edit_message_in_other_chat(self, state: ServerState) -> None:
        sent = _send(state)

        response = handle_edit_message_text(
            {"chat_id": "-5", "message_id": str(sent["message_id"]), "text": "x"}, state
        )

        assert not response["ok"]

    def test_caption_edit_on_text_fails(self, state: ServerState) -> None:
        sent = _send(state)

        response = handle_edit_message_caption(
            {"chat_id": str(CHAT_ID), "message_id": str(sent["message_id"]), "caption": "x"},
            state,
        )

        assert response["description"] == "Bad Request: there is no caption in the message to edit"

    def test_caption_edit_without_media_fails(self, state: ServerState) -> None:
        """Dice, contacts and other payloads have no caption to edit."""
        dice = handle_send_dice({"chat_id": str(CHAT_ID)}, state)["result"]
        contact = state.messages.add(MockMessageContact().build())

        for message_id in (dice["message_id"], contact.message_id):
            response = handle_edit_message_caption(
                {"chat_id": str(CHAT_ID), "message_id": str(message_id), "caption": "hi"},
                state,
            )

            assert response["description"] == "Bad Request: there is no caption in the message to edit"
            assert state.messages.get(message_id).caption is None

    def test_edited_message_goes_through_validation(self, state: ServerState) -> None:
        """The stored edit carries an integer timestamp, as aiogram expects on the wire."""
        sent = _send(state)

        result = handle_edit_message_reply_markup(
            {"chat_id": str(CHAT_ID), "message_id": str(sent["message_id"])}, state
        )["result"]

        assert isinstance(result["edit_date"], int)
        assert isinstance(result["date"], int)
        assert result["edit_date"] >= result["date"]

    def test_caption_edit(self, state: ServerState) -> None:
        photo = state.messages.add(MockMessagePhoto().caption("old").build())

        response = handle_edit_message_caption(
            {"chat_id": str(CHAT_ID), "message_id": str(photo.message_id), "caption": "new"},
            state,
        )

        stored = state.messages.get(photo.message_id)
        assert response["result"]["caption"] == "new"
        assert stored.photo == photo.photo
        assert stored.edit_date is not None

    def test_reply_markup_edit(self, state: ServerState) -> None:
        sent = _send(state, "keep me")
        markup = MockInlineKeyboard().row(("New", "new")).build().model_dump()

        handle_edit_message_reply_markup(
            {"chat_id": str(CHAT_ID), "message_id": str(sent["message_id"]), "reply_markup": markup},
            state,
        )

        stored = state.messages.get(sent["message_id"])
        assert stored.text == "keep me"
        assert stored.reply_markup.inline_keyboard[0][0].callback_data == "new"


class TestDeleteMessages:
    """deleteMessage and deleteMessages."""

    def test_delete(self, state: ServerState) -> None:
        sent = _send(state)

        response = handle_delete_message(
            {"chat_id": str(CHAT_ID), "message_id": str(sent["message_id"])}, state
        )

        assert response == {"ok": True, "result": True}
        assert sent["message_id"] not in state.messages
        assert state.responses.deleted_messages[0].message_id == sent["message_id"]

    def test_delete_twice(self, state: ServerState) -> None:
        sent = _send(state)
        data = {"chat_id": str(CHAT_ID), "message_id": str(sent["message_id"])}
        handle_delete_message(data, state)

        response = handle_delete_message(data, state)

        assert response["description"] == "Bad Request: message to delete not found"

    def test_delete_keeps_id_counter(self, state: ServerState) -> None:
        sent = _send(state)
        handle_delete_message({"chat_id": str(CHAT_ID), "message_id": str(sent["message_id"])}, state)

        assert _send(state)["message_id"] == 2

    def test_batch_skips_unknown(self, state: ServerState) -> None:
        first = _send(state)
        second = _send(state)

        response = handle_delete_messages(
            {"chat_id": str(CHAT_ID), "message_ids": [first["message_id"], 77, second["message_id"]]},
            state,
        )

        assert response["ok"]
        assert len(state.messages) == 0
        assert len(state.responses.get("deleteMessages")) == 2


class TestForwardMessage:
    """forwardMessage origins and protection."""

    @staticmethod
    def _forward(state: ServerState, source_chat_id: int, message_id: int, **extra) -> dict:
        return handle_forward_message(
            {
                "chat_id": "777",
                "from_chat_id": str(source_chat_id),
                "message_id": str(message_id),
                **extra,
            },
            state,
        )

    def test_private_sender_gives_user_origin(self, state: ServerState) -> None:
        source = state.messages.add(MockMessageText().build())

        result = self._forward(state, source.chat.id, source.message_id)["result"]

        assert result["forward_origin"]["type"] == "user"
        assert result["forward_origin"]["sender_user"]["id"] == MockUser.ID
        assert result["forward_origin"]["date"] == int(source.date.timestamp())

    def test_new_id_chat_and_sender(self, state: ServerState) -> None:
        source = state.messages.add(MockMessageText().text("fwd me").build())

        result = self._forward(state, source.chat.id, source.message_id)["result"]

        assert result["message_id"] == 2
        assert result["chat"]["id"] == 777
        assert result["from"]["id"] == state.settings.bot_id
        assert result["text"] == "fwd me"

    def test_private_without_sender_uses_chat_username(self, state: ServerState) -> None:
        source = state.messages.add(MockMessageText().from_user(None).build())

        result = self._forward(state, source.chat.id, source.message_id)["result"]

        assert result["forward_origin"]["type"] == "hidden_user"
        assert result["forward_origin"]["sender_user_name"] == MockPrivateChat.USERNAME

    def test_hidden_user_fallback_name(self) -> None:
        state = ServerState(Settings(hidden_user_name="anonymous"))
        chat = MockPrivateChat().username(None).build()
        source = state.messages.add(MockMessageText().chat(chat).from_user(None).build())

        result = self._forward(state, chat.id, source.message_id)["result"]

        assert result["forward_origin"]["sender_user_name"] == "anonymous"

    def test_group_gives_chat_origin(self, state: ServerState) -> None:
        for chat in (MockGroupChat().build(), MockSupergroupChat().build()):
            source = state.messages.add(MockMessageText().chat(chat).build())

            result = self._forward(state, chat.id, source.message_id)["result"]

            assert result["forward_origin"]["type"] == "chat"
            assert result["forward_origin"]["sender_chat"]["id"] == chat.id
            assert "author_signature" not in result["forward_origin"]

    def test_channel_gives_channel_origin(self, state: ServerState) -> None:
        channel = MockChannelChat().build()
        source = state.messages.add(MockMessageText().chat(channel).build())

        result = self._forward(state, channel.id, source.message_id)["result"]

        assert result["forward_origin"]["type"] == "channel"
        assert result["forward_origin"]["message_id"] == source.message_id

    def test_protected_source(self, state: ServerState) -> None:
        source = state.messages.add(MockMessageText().has_protected_content(True).build())

        response = self._forward(state, source.chat.id, source.message_id)

        assert response["description"] == "Bad Request: message has protected content"
        assert len(state.messages) == 1

    def test_protect_content_flag(self, state: ServerState) -> None:
        source = state.messages.add(MockMessageText().build())

        result = self._forward(state, source.chat.id, source.message_id, protect_content="true")["result"]

        assert result["has_protected_content"] is True

    def test_missing_source(self, state: ServerState) -> None:
        response = self._forward(state, CHAT_ID, 5)

        assert response["description"] == "Bad Request: message to forward not found"


class TestCopyMessage:
    def test_copy_returns_id_only(self, state: ServerState) -> None:
        source = state.messages.add(MockMessagePhoto().caption("orig").build())
        markup = {"inline_keyboard": [[{"text": "Open", "callback_data": "open"}]]}

        response = handle_copy_message(
            {
                "chat_id": "777",
                "from_chat_id": str(source.chat.id),
                "message_id": str(source.message_id),
                "caption": "copied",
                "reply_markup": markup,
            },
            state,
        )

        copy = state.messages.get(response["result"]["message_id"])
        assert response["result"] == {"message_id": 2}
        assert copy.caption == "copied"
        assert copy.forward_origin is None
        assert copy.reply_markup.inline_keyboard[0][0].text == "Open"
        assert copy.chat.id == 777

    def test_copy_protected(self, state: ServerState) -> None:
        source = state.messages.add(MockMessageText().has_protected_content(True).build())

        response = handle_copy_message(
            {"chat_id": "1", "from_chat_id": str(source.chat.id), "message_id": str(source.message_id)},
            state,
        )

        assert not response["ok"]


class TestChatAdministration:
    """pin / unpin / ban / unban / restrict."""

    def test_pin_existing(self, state: ServerState) -> None:
        sent = _send(state)

        response = handle_pin_chat_message(
            {"chat_id": str(CHAT_ID), "message_id": str(sent["message_id"])}, state
        )

        assert response["ok"]
        assert state.responses.last("pinChatMessage").message.message_id == sent["message_id"]

    def test_pin_missing(self, state: ServerState) -> None:
        response = handle_pin_chat_message({"chat_id": str(CHAT_ID), "message_id": "3"}, state)

        assert response["description"] == "Bad Request: message to pin not found"

    def test_unpin_without_message(self, state: ServerState) -> None:
        assert handle_unpin_chat_message({"chat_id": str(CHAT_ID)}, state)["ok"]

    def test_ban_with_revoke(self, state: ServerState) -> None:
        group = MockGroupChat().build()
        state.messages.add(MockMessageText().chat(group).build())
        state.messages.add(MockMessageText().chat(group).from_user(MockUser().id(5).build()).build())

        handle_ban_chat_member(
            {"chat_id": str(group.id), "user_id": str(MockUser.ID), "revoke_messages": "true"},
            state,
        )

        remaining = state.messages.get_conversation(group.id)
        assert [m.from_user.id for m in remaining] == [5]
        assert state.member(group.id, MockUser.ID).banned

    def test_ban_in_group_without_revoke(self, state: ServerState) -> None:
        group = MockGroupChat().build()
        state.messages.add(MockMessageText().chat(group).build())

        handle_ban_chat_member({"chat_id": str(group.id), "user_id": str(MockUser.ID)}, state)

        assert len(state.messages.get_conversation(group.id)) == 1

    def test_ban_in_supergroup_always_revokes(self, state: ServerState) -> None:
        supergroup = MockSupergroupChat().build()
        state.messages.add(MockMessageText().chat(supergroup).build())

        handle_ban_chat_member({"chat_id": str(supergroup.id), "user_id": str(MockUser.ID)}, state)

        assert state.messages.get_conversation(supergroup.id) == []

    def test_unban(self, state: ServerState) -> None:
        data = {"chat_id": "-1", "user_id": "5"}
        handle_ban_chat_member(data, state)

        handle_unban_chat_member(data, state)

        assert not state.member(-1, 5).banned

    def test_restrict(self, state: ServerState) -> None:
        response = handle_restrict_chat_member(
            {"chat_id": "-1", "user_id": "5", "permissions": {"can_send_messages": False}},
            state,
        )

        assert response["ok"]
        assert state.member(-1, 5).permissions == {"can_send_messages": False}

    def test_restrict_requires_ids(self, state: ServerState) -> None:
        response = handle_restrict_chat_member({"chat_id": "-1"}, state)

        assert response["description"] == "Bad Request: chat_id and user_id are required"


class TestDiceAndMedia:
    def test_dice_value_in_range(self, state: ServerState) -> None:
        for emoji, faces in (("🎲", 6), ("🏀", 5), ("🎰", 64)):
            for _ in range(30):
                result = handle_send_dice({"chat_id": "1", "emoji": emoji}, state)["result"]
                assert 1 <= result["dice"]["value"] <= faces
                assert result["dice"]["emoji"] == emoji

    def test_dice_default_emoji(self, state: ServerState) -> None:
        result = handle_send_dice({"chat_id": "1"}, state)["result"]

        assert result["dice"]["emoji"] == "🎲"

    def test_dice_unknown_emoji(self, state: ServerState) -> None:
        assert not handle_send_dice({"chat_id": "1", "emoji": "🍕"}, state)["ok"]

    def test_photo_upload_registered(self, state: ServerState) -> None:
        data = {
            "chat_id": "1",
            "photo": "attach://part1",
            "part1": FileUpload(filename="cat.jpg", content_type="image/jpeg", data=b"meow"),
            "caption": "cat",
        }

        result = handle_send_photo(data, state)["result"]

        file_id = result["photo"][0]["file_id"]
        assert state.files[file_id].data == b"meow"
        assert result["photo"][0]["file_size"] == 4
        assert result["caption"] == "cat"

        file = handle_get_file({"file_id": file_id}, state)["result"]
        assert file["file_path"].endswith(file_id)
        assert file["file_size"] == 4

    def test_media_group(self, state: ServerState) -> None:
        media = [
            {"type": "photo", "media": "one", "caption": "album"},
            {"type": "photo", "media": "two"},
            {"type": "video", "media": "three"},
        ]

        result = handle_send_media_group({"chat_id": "1", "media": media}, state)["result"]

        assert [m["message_id"] for m in result] == [1, 2, 3]
        assert len({m["media_group_id"] for m in result}) == 1
        assert result[0]["caption"] == "album"
        assert "caption" not in result[1]
        assert "video" in result[2]
        assert len(state.responses.last("sendMediaGroup").messages) == 3

    def test_media_group_shares_reply_target(self, state: ServerState) -> None:
        question = _send(state, "send pics")
        media = [{"type": "photo", "media": "a"}, {"type": "document", "media": "b"}]

        for reply in (
            {"reply_to_message_id": str(question["message_id"])},
            {"reply_parameters": {"message_id": question["message_id"]}},
        ):
            response = handle_send_media_group({"chat_id": str(CHAT_ID), "media": media, **reply}, state)

            stored = [state.messages.get(m["message_id"]) for m in response["result"]]
            assert len(stored) == 2
            assert [m.reply_to_message.message_id for m in stored] == [question["message_id"]] * 2

    def test_media_group_size_limits(self, state: ServerState) -> None:
        one = [{"type": "photo", "media": "x"}]
        eleven = one * 11

        assert not handle_send_media_group({"chat_id": "1", "media": one}, state)["ok"]
        assert not handle_send_media_group({"chat_id": "1", "media": eleven}, state)["ok"]
        assert len(state.messages) == 0

    def test_poll(self, state: ServerState) -> None:
        result = handle_send_poll(
            {"chat_id": "1", "question": "Tea?", "options": ["Yes", {"text": "No"}]},
            state,
        )["result"]

        assert [o["text"] for o in result["poll"]["options"]] == ["Yes", "No"]
        assert result["poll"]["is_closed"] is False
        assert result["poll"]["is_anonymous"] is True
        assert result["poll"]["total_voter_count"] == 0
        assert result["poll"]["allows_revoting"] is False


class TestConcurrentCalls:
    """Handlers called from many threads share one lock."""

    def test_ids_stay_dense_under_parallel_sends(self, state: ServerState) -> None:
        total = 500

        def send(index: int) -> int:
            return _send(state, f"message {index}")["message_id"]

        with ThreadPoolExecutor(max_workers=16) as pool:
            ids = list(pool.map(send, range(total)))

        assert sorted(ids) == list(range(1, total + 1))
        assert state.messages.max_id() == total
        assert len(state.responses.get("sendMessage")) == total

    def test_parallel_sends_and_deletes(self, state: ServerState) -> None:
        """Deletes interleaved with sends never free an id for reuse."""
        first = [_send(state)["message_id"] for _ in range(50)]

        def delete(message_id: int) -> bool:
            return handle_delete_message(
                {"chat_id": str(CHAT_ID), "message_id": str(message_id)}, state
            )["ok"]

        with ThreadPoolExecutor(max_workers=8) as pool:
            deletes = pool.map(delete, first)
            sends = pool.map(lambda _: _send(state)["message_id"], range(50))
            deleted, later = list(deletes), list(sends)

        assert all(deleted)
        assert sorted(later) == list(range(51, 101))

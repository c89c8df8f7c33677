"""
Tests for MessageStore: id assignment, lookup and chat queries.
"""
import pytest

from mock_server.dataset import MockGroupChat, MockMessageText, MockUser
from mock_server.exceptions import MessageNotFound, StoreCorrupted
from mock_server.store import MessageStore


class TestMessageStoreIds:
    """Id assignment."""

    def test_empty_store(self) -> None:
        store = MessageStore()

        assert store.max_id() == 0
        assert len(store) == 0

    def test_ids_are_sequential(self) -> None:
        """N adds produce ids 1..N regardless of the builder's id."""
        store = MessageStore()
        ids = [store.add(MockMessageText().message_id(500).build()).message_id for _ in range(5)]

        assert ids == [1, 2, 3, 4, 5]
        assert store.max_id() == 5

    def test_ids_not_reused_after_delete(self) -> None:
        store = MessageStore()
        store.add(MockMessageText().build())
        second = store.add(MockMessageText().build())

        store.delete(second.message_id)
        third = store.add(MockMessageText().build())

        assert third.message_id == 3
        assert store.max_id() == 3

    def test_duplicate_id_is_corruption(self) -> None:
        """A taken next id means the store lost track of its counter."""
        store = MessageStore()
        first = store.add(MockMessageText().build())
        store._messages[2] = first.model_copy(update={"message_id": 2})

        with pytest.raises(StoreCorrupted):
            store.add(MockMessageText().build())

    def test_clear_resets_ids(self) -> None:
        store = MessageStore()
        store.add(MockMessageText().build())
        store.clear()

        assert store.max_id() == 0
        assert store.add(MockMessageText().build()).message_id == 1


class TestMessageStoreLookup:
    """Get, update and delete."""

    def test_get(self) -> None:
        store = MessageStore()
        stored = store.add(MockMessageText().text("hello").build())

        assert store.get(stored.message_id).text == "hello"
        assert stored.message_id in store

    def test_get_missing(self) -> None:
        store = MessageStore()

        with pytest.raises(MessageNotFound) as exc_info:
            store.get(7)
        assert exc_info.value.message_id == 7

    def test_not_found_is_lookup_error(self) -> None:
        with pytest.raises(LookupError):
            MessageStore().delete(1)

    def test_delete(self) -> None:
        store = MessageStore()
        stored = store.add(MockMessageText().build())

        deleted = store.delete(stored.message_id)

        assert deleted.message_id == stored.message_id
        assert stored.message_id not in store
        with pytest.raises(MessageNotFound):
            store.delete(stored.message_id)

    def test_update_replaces_message(self) -> None:
        store = MessageStore()
        stored = store.add(MockMessageText().text("before").build())

        store.update(stored.model_copy(update={"text": "after"}))

        assert store.get(stored.message_id).text == "after"

    def test_update_missing(self) -> None:
        store = MessageStore()
        message = MockMessageText().message_id(3).build()

        with pytest.raises(MessageNotFound):
            store.update(message)


class TestMessageStoreQueries:
    """Per-chat views."""

    def test_conversation_is_per_chat(self) -> None:
        store = MessageStore()
        group = MockGroupChat().build()
        store.add(MockMessageText().text("private").build())
        store.add(MockMessageText().text("group").chat(group).build())

        conversation = store.get_conversation(group.id)

        assert [m.text for m in conversation] == ["group"]

    def test_messages_from_user(self) -> None:
        store = MessageStore()
        group = MockGroupChat().build()
        other = MockUser().id(2).build()
        store.add(MockMessageText().chat(group).text("mine").build())
        store.add(MockMessageText().chat(group).from_user(other).text("theirs").build())

        messages = store.messages_from(group.id, MockUser.ID)

        assert [m.text for m in messages] == ["mine"]

    def test_find_chat(self) -> None:
        store = MessageStore()
        group = MockGroupChat().title("Friends").build()
        store.add(MockMessageText().chat(group).build())

        assert store.find_chat(group.id).title == "Friends"
        assert store.find_chat(999) is None

    def test_iteration_in_id_order(self) -> None:
        store = MessageStore()
        for text in ("a", "b", "c"):
            store.add(MockMessageText().text(text).build())

        assert [m.text for m in store] == ["a", "b", "c"]

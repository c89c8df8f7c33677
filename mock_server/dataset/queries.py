from aiogram.types import CallbackQuery, Update

from mock_server.dataset.base import Changeable, MockBuilder
from mock_server.dataset.entities import MockUser
from mock_server.dataset.message_common import MockMessageText


class MockCallbackQuery(MockBuilder):
    """Callback query pressed on a message (a text message by default)."""

    ID = "4382bfdwdsb323b2d9"
    CHAT_INSTANCE = "-8234758237492"
    DATA = "data"

    id = Changeable(ID)
    from_user = Changeable(factory=lambda: MockUser().build())
    message = Changeable(factory=lambda: MockMessageText().build())
    inline_message_id = Changeable()
    chat_instance = Changeable(CHAT_INSTANCE)
    data = Changeable(DATA)
    game_short_name = Changeable()

    def build(self) -> CallbackQuery:
        return CallbackQuery(
            id=self._id,
            from_user=self._from_user,
            message=self._message,
            inline_message_id=self._inline_message_id,
            chat_instance=self._chat_instance,
            data=self._data,
            game_short_name=self._game_short_name,
        )

    def to_update(self, update_id: int = 1) -> Update:
        return Update(update_id=update_id, callback_query=self.build())

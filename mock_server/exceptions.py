"""Errors raised inside the mock server and its test harness."""


class MockServerError(Exception):
    """Base class for mock server errors."""


class MessageNotFound(MockServerError, LookupError):
    """Raised when a message id is not present in the store."""

    def __init__(self, message_id: int) -> None:
        super().__init__(f"message {message_id} not found")
        self.message_id = message_id


class StoreCorrupted(MockServerError):
    """Raised when the store breaks its own id invariants."""


class ButtonNotFoundError(MockServerError):
    """Raised when a button cannot be found in the chat."""


class NoMessagesError(MockServerError):
    """Raised when trying to access messages in an empty chat."""

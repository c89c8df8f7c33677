"""Tests for the public surface of the mock_server package."""
import importlib

import mock_server
from mock_server.state import ServerState
from mock_server.store import MessageStore
from mock_server.tracker import ResponseLog


class TestPackageImports:
    """Every public module imports cleanly."""

    def test_public_names_resolve(self):
        for name in mock_server.__all__:
            assert getattr(mock_server, name) is not None

    def test_submodules_import(self):
        for module in (
            "mock_server.client",
            "mock_server.dataset",
            "mock_server.methods",
            "mock_server.server",
            "mock_server.store",
            "mock_server.tracker",
            "mock_server.__main__",
        ):
            assert importlib.import_module(module) is not None


class TestSharedLock:
    """Store and log accept a lock and fall back to their own."""

    def test_server_state_shares_one_lock(self, state: ServerState):
        assert state.messages._lock is state.lock
        assert state.responses._lock is state.lock

    def test_default_locks_are_separate(self):
        assert MessageStore()._lock is not ResponseLog()._lock

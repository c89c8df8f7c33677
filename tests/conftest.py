"""
Test configuration and shared fixtures for the mock server.

Provides fixtures for:
- Settings from .env.test
- A fresh server state
- An empty dispatcher
"""
from pathlib import Path

import pytest
from aiogram import Dispatcher
from aiogram.fsm.storage.memory import MemoryStorage
from dotenv import load_dotenv

# =============================================================================
# LOAD TEST ENVIRONMENT (.env.test)
# =============================================================================

env_test_path = Path(__file__).parent.parent / ".env.test"
if env_test_path.exists():
    load_dotenv(env_test_path, override=True)

from mock_server.config import Settings  # noqa: E402
from mock_server.state import ServerState  # noqa: E402


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def state(settings: Settings) -> ServerState:
    """Server state with an empty store."""
    return ServerState(settings)


@pytest.fixture
def simple_dispatcher() -> Dispatcher:
    """Create a simple dispatcher for testing."""
    return Dispatcher(storage=MemoryStorage())

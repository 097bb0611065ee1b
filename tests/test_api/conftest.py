"""Pytest configuration for API tests."""

import pytest

from ohhell.api.game_handler import game_handler
from ohhell.api.websocket import websocket_manager


@pytest.fixture
def anyio_backend():
    """Configure anyio to use asyncio backend."""
    return "asyncio"


@pytest.fixture(autouse=True)
def reset_global_handler():
    """Drop games, bots and connections held by the global handler between tests."""
    game_handler.clear()
    websocket_manager.active_connections.clear()

    yield

    game_handler.clear()
    websocket_manager.active_connections.clear()

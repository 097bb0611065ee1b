"""WebSocket connection manager."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from starlette.websockets import WebSocketState

from ohhell.api.responses import Command, ServerMessage
from ohhell.services.game_serializer import snapshot

if TYPE_CHECKING:
    from fastapi import WebSocket

    from ohhell.models.game import Game

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Manages WebSocket connections for multiplayer games.

    Handles:
    - Player connections per game
    - Per-player game state pushes
    - Connection lifecycle
    """

    def __init__(self) -> None:
        """Initialize the connection manager."""
        # game_id -> player_id -> WebSocket
        self.active_connections: dict[str, dict[str, WebSocket]] = {}

    async def connect(self, websocket: WebSocket, game_id: str, player_id: str) -> None:
        """Accept a new WebSocket connection for a player."""
        await websocket.accept()
        self.active_connections.setdefault(game_id, {})[player_id] = websocket
        logger.info("Player %s connected to game %s", player_id, game_id)

    def disconnect(self, game_id: str, player_id: str) -> None:
        """Remove a player WebSocket connection."""
        connections = self.active_connections.get(game_id, {})
        connections.pop(player_id, None)
        if not connections:
            self.active_connections.pop(game_id, None)
        logger.info("Player %s disconnected from game %s", player_id, game_id)

    async def send_personal_message(
        self, message: ServerMessage, game_id: str, player_id: str
    ) -> None:
        """Send a message to one player, dropping the connection if it is gone."""
        websocket = self.active_connections.get(game_id, {}).get(player_id)
        if websocket is None:
            return
        if websocket.client_state != WebSocketState.CONNECTED:
            self.disconnect(game_id, player_id)
            return
        try:
            await websocket.send_json(message.to_dict())
        except (RuntimeError, ConnectionError):
            logger.warning("Failed to send %s to %s", message.command.value, player_id)
            self.disconnect(game_id, player_id)

    async def send_game_state(self, game: Game, player_id: str) -> None:
        """Send a player their own view of the game."""
        await self.send_personal_message(
            ServerMessage(
                command=Command.GAME_STATE,
                game_id=game.id,
                content=snapshot(game, player_id),
                receiver_id=player_id,
            ),
            game.id,
            player_id,
        )

    async def broadcast_game_state(self, game: Game) -> None:
        """Send every connected player their own view of the game."""
        for player_id in list(self.active_connections.get(game.id, {})):
            await self.send_game_state(game, player_id)


# Global connection manager
websocket_manager = ConnectionManager()

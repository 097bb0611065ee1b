"""Game logic handler for client commands."""

import json
import logging
import uuid
from typing import TYPE_CHECKING, Any

from ohhell.api.responses import Command, ErrorCode, ServerMessage, parse_card
from ohhell.api.websocket import websocket_manager
from ohhell.bots import BaseBot, RandomBot
from ohhell.config import settings
from ohhell.models.actions import Action, PlaceBid, PlayCard, StartGame
from ohhell.models.errors import GameError
from ohhell.models.game import Game
from ohhell.models.rules import GameRules
from ohhell.services.game_registry import GameRegistry

if TYPE_CHECKING:
    from ohhell.api.websocket import ConnectionManager

logger = logging.getLogger(__name__)


class GameHandler:
    """Turns client commands into game actions.

    Every action goes through the registry, so it runs under the game's
    lock. After each accepted action bot seats are played (when enabled)
    and every connected player receives their own view of the game.
    """

    def __init__(
        self,
        registry: GameRegistry,
        manager: "ConnectionManager",
        *,
        auto_play_bots: bool = True,
        enable_bots: bool = True,
    ) -> None:
        """Initialize handler with a registry and a connection manager."""
        self.registry = registry
        self.manager = manager
        self.auto_play_bots = auto_play_bots
        self.enable_bots = enable_bots
        self.bots: dict[str, dict[str, BaseBot]] = {}  # game_id -> player_id -> bot

    async def handle_message(self, game_id: str, player_id: str, raw: str) -> None:
        """Parse one WebSocket frame and route it as a command.

        Frames must be JSON objects ``{"command": ..., "content": {...}}``;
        anything else is reported back to the sender.
        """
        try:
            message = json.loads(raw)
        except json.JSONDecodeError as e:
            await self._send_error(game_id, player_id, ErrorCode.INVALID_MESSAGE, str(e))
            return
        if not isinstance(message, dict):
            await self._send_error(
                game_id, player_id, ErrorCode.INVALID_MESSAGE, "Message must be a JSON object"
            )
            return

        command = str(message.get("command", ""))
        content = message.get("content")
        if not isinstance(content, dict):
            content = {}
        logger.debug("Received %s from player %s in game %s", command, player_id, game_id)
        await self.handle_command(game_id, player_id, command, content)

    async def handle_command(
        self, game_id: str, player_id: str, command: str, content: dict[str, Any]
    ) -> None:
        """Route an incoming command to its handler.

        Rejected commands are reported to the sender only.

        Args:
            game_id: Game identifier
            player_id: ID of player who sent command
            command: Command type
            content: Command payload

        """
        handlers = {
            Command.START_GAME.value: self._handle_start_game,
            Command.BID.value: self._handle_bid,
            Command.PICK.value: self._handle_pick,
            Command.SYNC_STATE.value: self._handle_sync_state,
            Command.ADD_BOT.value: self._handle_add_bot,
        }

        handler = handlers.get(command)
        if handler is None:
            logger.warning("Unknown command: %s", command)
            await self._send_error(game_id, player_id, ErrorCode.UNKNOWN_COMMAND, command)
            return

        try:
            await handler(game_id, player_id, content)
        except GameError as e:
            await self._send_error(game_id, player_id, e.code, e.message)

    async def apply_action(self, game_id: str, action: Action) -> Game:
        """Apply one action, play any bot turns that follow, and push new views.

        Raises:
            GameError: If the action is rejected

        """
        game = await self.registry.apply(game_id, action)
        await self._process_bot_actions(game_id)
        await self.manager.broadcast_game_state(game)
        return game

    async def force_default_action(self, game_id: str, player_id: str) -> Game | None:
        """Play a random legal move for ``player_id`` (e.g. after a turn timeout).

        Returns None if it is not that player's turn.
        """
        game = self.registry.get(game_id).game
        action = RandomBot(player_id).choose_action(game)
        if action is None:
            return None
        logger.info("Forcing default action for %s in game %s", player_id, game_id)
        return await self.apply_action(game_id, action)

    async def add_bot(self, game_id: str, bot_id: str | None = None) -> str:
        """Seat a random bot in the lobby and return its player id."""
        bot_id = bot_id or f"bot-{uuid.uuid4().hex[:6]}"
        await self.registry.join(game_id, bot_id, display_name=f"Bot {bot_id[-6:]}", is_bot=True)
        self.bots.setdefault(game_id, {})[bot_id] = RandomBot(bot_id)
        logger.info("Added random bot %s to game %s", bot_id, game_id)
        return bot_id

    def remove_game(self, game_id: str) -> bool:
        """Discard a game together with its bots."""
        self.bots.pop(game_id, None)
        return self.registry.remove(game_id)

    def clear(self) -> None:
        """Discard every game and bot."""
        self.bots.clear()
        self.registry.sessions.clear()

    async def _handle_start_game(
        self, game_id: str, player_id: str, _content: dict[str, Any]
    ) -> None:
        """Handle START_GAME command - host starts the game."""
        await self.apply_action(game_id, StartGame(player_id=player_id))

    async def _handle_bid(self, game_id: str, player_id: str, content: dict[str, Any]) -> None:
        """Handle BID command from a player.

        Args:
            game_id: Game identifier
            player_id: ID of bidding player
            content: Must contain 'bid' key with bid amount

        """
        if "bid" not in content:
            await self._send_error(game_id, player_id, ErrorCode.MISSING_BID_VALUE)
            return

        bid_amount = content["bid"]
        if isinstance(bid_amount, bool) or not isinstance(bid_amount, int):
            await self._send_error(game_id, player_id, ErrorCode.BID_MUST_BE_NUMBER)
            return

        await self.apply_action(game_id, PlaceBid(player_id, bid_amount))

    async def _handle_pick(self, game_id: str, player_id: str, content: dict[str, Any]) -> None:
        """Handle PICK command - play a card given as ``{"card": "QH"}``."""
        try:
            card = parse_card(content.get("card"))
        except ValueError as e:
            await self._send_error(game_id, player_id, ErrorCode.INVALID_CARD, str(e))
            return

        await self.apply_action(game_id, PlayCard(player_id, card))

    async def _handle_sync_state(
        self, game_id: str, player_id: str, _content: dict[str, Any]
    ) -> None:
        """Handle SYNC_STATE command - resend the player's view."""
        game = self.registry.get(game_id).game
        await self.manager.send_game_state(game, player_id)

    async def _handle_add_bot(self, game_id: str, player_id: str, content: dict[str, Any]) -> None:
        """Handle ADD_BOT command - host seats a bot in the lobby."""
        if not self.enable_bots:
            await self._send_error(game_id, player_id, ErrorCode.BOTS_DISABLED)
            return

        session = self.registry.require_host(game_id, player_id)
        bot_id = content.get("bot_id")
        if bot_id is not None and (not isinstance(bot_id, str) or not bot_id):
            await self._send_error(game_id, player_id, ErrorCode.INVALID_BOT_ID)
            return

        await self.add_bot(game_id, bot_id)
        await self.manager.broadcast_game_state(session.game)

    async def _process_bot_actions(self, game_id: str) -> None:
        """Play bot turns until a human is to act or the game ends."""
        if not self.auto_play_bots:
            return

        bots = self.bots.get(game_id, {})
        game = self.registry.get(game_id).game
        while (current := game.current_player) is not None and current.id in bots:
            action = bots[current.id].choose_action(game)
            if action is None:
                break
            try:
                await self.registry.apply(game_id, action)
            except GameError:
                logger.exception("Bot %s made an illegal move in game %s", current.id, game_id)
                break

    async def _send_error(
        self, game_id: str, player_id: str, code: str, detail: str | None = None
    ) -> None:
        """Send an error message to a player."""
        await self.manager.send_personal_message(
            ServerMessage(
                command=Command.REPORT_ERROR,
                game_id=game_id,
                content={"error": str(code), "detail": detail},
                receiver_id=player_id,
            ),
            game_id,
            player_id,
        )


# Global registry and handler
game_handler = GameHandler(
    GameRegistry(GameRules.from_settings(settings)),
    websocket_manager,
    auto_play_bots=settings.auto_play_bots,
    enable_bots=settings.enable_bots,
)

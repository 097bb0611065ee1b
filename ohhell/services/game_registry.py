"""In-process registry of running games.

The registry is the lobby: it creates games, seats players, checks host
privileges and owns one ``Game`` per game id. Every action for a game runs
under that game's lock, so reading, validating and mutating the state is
never interleaved between two callers.
"""

import asyncio
import logging
import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from ohhell.models.actions import Action, StartGame, describe
from ohhell.models.enums import GamePhase
from ohhell.models.errors import GameError, WrongPhaseError
from ohhell.models.game import Game
from ohhell.models.player import Player
from ohhell.models.rules import GameRules

logger = logging.getLogger(__name__)


class GameNotFoundError(GameError):
    """No game with this id."""

    code = "error.gameNotFound"


class GameAlreadyExistsError(GameError):
    """A game with this id already exists."""

    code = "error.gameExists"


class NotHostError(GameError):
    """Only the host may do this."""

    code = "error.notHost"


class GameAlreadyStartedError(WrongPhaseError):
    """Game already started."""

    code = "error.gameAlreadyStarted"


class GameFullError(GameError):
    """Game is full."""

    code = "error.gameIsFull"


class PlayerAlreadyJoinedError(GameError):
    """Player already joined this game."""

    code = "error.alreadyJoined"


@dataclass
class GameSession:
    """A game together with its host and its action lock.

    Attributes:
        game: The authoritative game state
        host_id: Player allowed to start the game
        created_at: ISO timestamp of creation
        lock: Serializes every action applied to ``game``

    """

    game: Game
    host_id: str
    created_at: str = field(default_factory=lambda: datetime.now(UTC).isoformat())
    lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False)

    @property
    def id(self) -> str:
        """Game identifier."""
        return self.game.id

    def summary(self) -> dict[str, Any]:
        """Public listing entry for this game."""
        return {
            "game_id": self.game.id,
            "host_id": self.host_id,
            "phase": self.game.phase.value,
            "player_count": len(self.game.players),
            "max_players": self.game.rules.max_players,
            "created_at": self.created_at,
        }


class GameRegistry:
    """Holds one session per game id."""

    def __init__(self, rules: GameRules | None = None) -> None:
        """Initialize an empty registry.

        Args:
            rules: Variant parameters for every game created here

        """
        self.rules = rules or GameRules()
        self.sessions: dict[str, GameSession] = {}

    def create_game(
        self,
        host_id: str,
        display_name: str = "",
        game_id: str | None = None,
        seed: int | None = None,
    ) -> GameSession:
        """Create a game in the lobby with the host seated first."""
        game_id = game_id or str(uuid.uuid4())
        if game_id in self.sessions:
            msg = f"Game {game_id} already exists"
            raise GameAlreadyExistsError(msg)

        game = Game(id=game_id, rules=self.rules, seed=seed)
        game.add_player(Player(id=host_id, display_name=display_name))
        session = GameSession(game=game, host_id=host_id)
        self.sessions[game_id] = session
        logger.info("Game %s created by %s", game_id, host_id)
        return session

    def find(self, game_id: str) -> GameSession | None:
        """Get a session, or None if unknown."""
        return self.sessions.get(game_id)

    def get(self, game_id: str) -> GameSession:
        """Get a session.

        Raises:
            GameNotFoundError: If no game has this id

        """
        session = self.sessions.get(game_id)
        if session is None:
            msg = f"Game {game_id} not found"
            raise GameNotFoundError(msg)
        return session

    def require_host(self, game_id: str, player_id: str) -> GameSession:
        """Get a session, checking that ``player_id`` is its host.

        Raises:
            GameNotFoundError: If no game has this id
            NotHostError: If ``player_id`` is not the host

        """
        session = self.get(game_id)
        if session.host_id != player_id:
            msg = f"Only the host ({session.host_id}) can do this"
            raise NotHostError(msg)
        return session

    def list_games(self) -> list[dict[str, Any]]:
        """Summaries of every game, newest first."""
        sessions = sorted(self.sessions.values(), key=lambda s: s.created_at, reverse=True)
        return [session.summary() for session in sessions]

    def remove(self, game_id: str) -> bool:
        """Discard a game."""
        removed = self.sessions.pop(game_id, None) is not None
        if removed:
            logger.info("Game %s removed", game_id)
        return removed

    async def join(
        self, game_id: str, player_id: str, display_name: str = "", *, is_bot: bool = False
    ) -> Player:
        """Seat a player while the game is in the lobby.

        Raises:
            GameNotFoundError: Unknown game
            GameAlreadyStartedError: The game left the lobby
            PlayerAlreadyJoinedError: Player is already seated
            GameFullError: No seat left

        """
        session = self.get(game_id)
        async with session.lock:
            game = session.game
            if game.phase != GamePhase.LOBBY:
                raise GameAlreadyStartedError
            if game.get_player(player_id):
                raise PlayerAlreadyJoinedError
            if len(game.players) >= game.rules.max_players:
                raise GameFullError

            player = Player(id=player_id, display_name=display_name, is_bot=is_bot)
            game.add_player(player)
            logger.info("Player %s joined game %s", player_id, game_id)
            return player

    async def start(self, game_id: str, requester_id: str) -> Game:
        """Start a game on behalf of ``requester_id`` (must be the host)."""
        return await self.apply(game_id, StartGame(player_id=requester_id))

    async def apply(self, game_id: str, action: Action) -> Game:
        """Apply one action under the game's lock.

        Raises:
            GameNotFoundError: Unknown game
            NotHostError: A non-host tried to start the game
            GameError: The engine rejected the action

        """
        session = self.get(game_id)
        async with session.lock:
            if isinstance(action, StartGame) and action.player_id != session.host_id:
                msg = f"Only the host ({session.host_id}) can start the game"
                raise NotHostError(msg)
            try:
                session.game.apply(action)
            except GameError as e:
                logger.info("Rejected %s in game %s: %s", describe(action), game_id, e)
                raise
            except RuntimeError:
                logger.exception("Game %s is inconsistent after %s", game_id, describe(action))
                raise
            logger.debug("Applied %s in game %s", describe(action), game_id)
            return session.game

"""Tests for WebSocket game handler."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from ohhell.api.game_handler import GameHandler
from ohhell.api.responses import Command, ErrorCode
from ohhell.models.actions import StartGame
from ohhell.models.enums import GamePhase
from ohhell.services.game_registry import GameRegistry, NotHostError

pytestmark = pytest.mark.anyio


@pytest.fixture
def mock_manager():
    """Create a mock connection manager."""
    manager = MagicMock()
    manager.broadcast_game_state = AsyncMock()
    manager.send_game_state = AsyncMock()
    manager.send_personal_message = AsyncMock()
    return manager


@pytest.fixture
def handler(mock_manager):
    """Create a game handler with its own registry and a mock manager."""
    return GameHandler(GameRegistry(), mock_manager)


@pytest.fixture
async def lobby(handler):
    """Game ``g1`` with a host and two human players."""
    handler.registry.create_game("host", game_id="g1", seed=2)
    await handler.registry.join("g1", "p1")
    await handler.registry.join("g1", "p2")
    return handler.registry.get("g1").game


def last_error(manager) -> dict:
    """Content of the last error sent to a player."""
    message = manager.send_personal_message.call_args.args[0]
    assert message.command == Command.REPORT_ERROR
    return message.content


class TestStartGame:
    """Tests for START_GAME command."""

    async def test_start_game_success(self, handler, lobby, mock_manager):
        """The host starts the game and everyone gets a view."""
        await handler.handle_command("g1", "host", "START_GAME", {})

        assert lobby.phase == GamePhase.BIDDING
        mock_manager.broadcast_game_state.assert_awaited_once_with(lobby)

    async def test_start_game_not_host(self, handler, lobby, mock_manager):
        """Non-hosts get an error and the game stays in the lobby."""
        await handler.handle_command("g1", "p1", "START_GAME", {})

        assert lobby.phase == GamePhase.LOBBY
        assert last_error(mock_manager)["error"] == NotHostError.code
        mock_manager.broadcast_game_state.assert_not_awaited()


class TestBid:
    """Tests for BID command."""

    async def test_bid_success(self, handler, lobby):
        """A valid bid is recorded and the turn moves on."""
        await handler.handle_command("g1", "host", "START_GAME", {})
        await handler.handle_command("g1", "host", "BID", {"bid": 1})

        assert lobby.current_round.bids == {"host": 1}
        assert lobby.current_player.id == "p1"

    async def test_bid_missing_value(self, handler, lobby, mock_manager):
        """A BID without a value is rejected."""
        await handler.handle_command("g1", "host", "START_GAME", {})
        await handler.handle_command("g1", "host", "BID", {})
        assert last_error(mock_manager)["error"] == ErrorCode.MISSING_BID_VALUE

    @pytest.mark.parametrize("value", ["2", 1.0, True, None])
    async def test_bid_not_a_number(self, handler, lobby, mock_manager, value):
        """Only integer bids are accepted."""
        await handler.handle_command("g1", "host", "START_GAME", {})
        await handler.handle_command("g1", "host", "BID", {"bid": value})
        assert last_error(mock_manager)["error"] == ErrorCode.BID_MUST_BE_NUMBER
        assert lobby.current_round.bids == {}

    async def test_bid_out_of_turn(self, handler, lobby, mock_manager):
        """Out-of-turn bids are reported to the sender only."""
        await handler.handle_command("g1", "host", "START_GAME", {})
        mock_manager.broadcast_game_state.reset_mock()

        await handler.handle_command("g1", "p2", "BID", {"bid": 0})

        assert last_error(mock_manager)["error"] == "error.notYourTurn"
        assert mock_manager.send_personal_message.call_args.args[2] == "p2"
        mock_manager.broadcast_game_state.assert_not_awaited()


class TestPick:
    """Tests for PICK command."""

    async def test_pick_success(self, handler, lobby):
        """A card given by code is played."""
        await handler.handle_command("g1", "host", "START_GAME", {})
        for player_id, bid in (("host", 0), ("p1", 0)):
            await handler.handle_command("g1", player_id, "BID", {"bid": bid})
        await handler.handle_command("g1", "p2", "BID", {"bid": lobby.legal_bids("p2")[0]})

        card = lobby.get_player("host").hand[0]
        await handler.handle_command("g1", "host", "PICK", {"card": card.code})

        assert lobby.current_round.current_trick.plays[0].card == card
        assert lobby.get_player("host").hand == []

    async def test_pick_invalid_card(self, handler, lobby, mock_manager):
        """Garbage card codes are reported."""
        await handler.handle_command("g1", "host", "START_GAME", {})
        await handler.handle_command("g1", "host", "PICK", {"card": "nope"})
        assert last_error(mock_manager)["error"] == ErrorCode.INVALID_CARD

    async def test_pick_during_bidding(self, handler, lobby, mock_manager):
        """Cards cannot be played while bidding."""
        await handler.handle_command("g1", "host", "START_GAME", {})
        card = lobby.get_player("host").hand[0]
        await handler.handle_command("g1", "host", "PICK", {"card": card.to_dict()})
        assert last_error(mock_manager)["error"] == "error.wrongPhase"


class TestOtherCommands:
    """SYNC_STATE, ADD_BOT and unknown commands."""

    async def test_sync_state(self, handler, lobby, mock_manager):
        """SYNC_STATE resends the player's own view."""
        await handler.handle_command("g1", "p1", "SYNC_STATE", {})
        mock_manager.send_game_state.assert_awaited_once_with(lobby, "p1")

    async def test_unknown_command(self, handler, lobby, mock_manager):
        """Unknown commands are reported."""
        await handler.handle_command("g1", "host", "CHEAT", {})
        assert last_error(mock_manager)["error"] == ErrorCode.UNKNOWN_COMMAND

    async def test_unknown_game(self, handler, mock_manager):
        """Commands for a missing game are reported as not found."""
        await handler.handle_command("missing", "host", "SYNC_STATE", {})
        assert last_error(mock_manager)["error"] == "error.gameNotFound"

    async def test_add_bot_host_only(self, handler, lobby, mock_manager):
        """Only the host may seat bots."""
        await handler.handle_command("g1", "p1", "ADD_BOT", {})
        assert last_error(mock_manager)["error"] == NotHostError.code
        assert len(lobby.players) == 3

    async def test_add_bot(self, handler, lobby):
        """The host seats a bot with a chosen id."""
        await handler.handle_command("g1", "host", "ADD_BOT", {"bot_id": "robo"})
        assert lobby.get_player("robo").is_bot
        assert "robo" in handler.bots["g1"]

    async def test_add_bot_disabled(self, mock_manager):
        """Bots can be switched off."""
        handler = GameHandler(GameRegistry(), mock_manager, enable_bots=False)
        handler.registry.create_game("host", game_id="g1")
        await handler.handle_command("g1", "host", "ADD_BOT", {})
        assert last_error(mock_manager)["error"] == ErrorCode.BOTS_DISABLED

    @pytest.mark.parametrize("bot_id", [5, "", ["robo"]])
    async def test_add_bot_bad_id(self, handler, lobby, mock_manager, bot_id):
        """A bot id that is not a non-empty string is refused."""
        await handler.handle_command("g1", "host", "ADD_BOT", {"bot_id": bot_id})
        assert last_error(mock_manager)["error"] == ErrorCode.INVALID_BOT_ID
        assert len(lobby.players) == 3
        assert "g1" not in handler.bots


class TestHandleMessage:
    """Raw WebSocket frames."""

    async def test_valid_frame_dispatches(self, handler, lobby, mock_manager):
        """A well-formed frame is routed to its command."""
        await handler.handle_message("g1", "p1", '{"command": "SYNC_STATE", "content": {}}')
        mock_manager.send_game_state.assert_awaited_once_with(lobby, "p1")

    @pytest.mark.parametrize("raw", ["{not json", "[1, 2]", "42", '"SYNC_STATE"'])
    async def test_bad_frame_reported(self, handler, lobby, mock_manager, raw):
        """Frames that are not JSON objects are answered with an error."""
        await handler.handle_message("g1", "p1", raw)
        assert last_error(mock_manager)["error"] == ErrorCode.INVALID_MESSAGE
        mock_manager.send_game_state.assert_not_awaited()

    async def test_missing_content(self, handler, lobby, mock_manager):
        """A frame without content still runs the command."""
        await handler.handle_message("g1", "p1", '{"command": "SYNC_STATE", "content": 3}')
        mock_manager.send_game_state.assert_awaited_once_with(lobby, "p1")


class TestRemoveGame:
    """Discarding games."""

    async def test_remove_game_drops_bots(self, handler, lobby):
        """Removing a game forgets its bots and its session."""
        await handler.add_bot("g1", "robo")
        assert "g1" in handler.bots

        assert handler.remove_game("g1") is True
        assert "g1" not in handler.bots
        assert handler.registry.find("g1") is None
        assert handler.remove_game("g1") is False

    async def test_clear(self, handler, lobby):
        """Clearing drops every game and bot."""
        await handler.add_bot("g1", "robo")
        handler.clear()
        assert handler.bots == {}
        assert handler.registry.sessions == {}


class TestBotTurns:
    """Automatic bot play."""

    async def test_bots_play_until_human_turn(self, mock_manager):
        """After each human action the bot seats act on their own."""
        handler = GameHandler(GameRegistry(), mock_manager)
        handler.registry.create_game("human", game_id="g1", seed=4)
        await handler.add_bot("g1", "bot-a")
        await handler.add_bot("g1", "bot-b")
        game = await handler.apply_action("g1", StartGame(player_id="human"))

        assert game.current_player.id == "human"
        await handler.handle_command("g1", "human", "BID", {"bid": game.legal_bids("human")[0]})
        assert game.phase == GamePhase.PLAYING
        assert game.current_player.id == "human"

    async def test_bots_wait_when_auto_play_off(self, mock_manager):
        """With auto-play off bots need a nudge."""
        handler = GameHandler(GameRegistry(), mock_manager, auto_play_bots=False)
        handler.registry.create_game("human", game_id="g1", seed=4)
        await handler.add_bot("g1", "bot-a")
        game = await handler.apply_action("g1", StartGame(player_id="human"))
        await handler.handle_command("g1", "human", "BID", {"bid": 0})

        assert game.current_player.id == "bot-a"
        await handler.force_default_action("g1", "bot-a")
        assert game.phase == GamePhase.PLAYING

    async def test_force_default_action_off_turn(self, handler, lobby):
        """Forcing a move for a waiting player does nothing."""
        await handler.handle_command("g1", "host", "START_GAME", {})
        assert await handler.force_default_action("g1", "p2") is None
        assert lobby.current_round.bids == {}

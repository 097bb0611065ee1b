"""API routes."""

import logging
from typing import Any

from fastapi import APIRouter, HTTPException, Query, Request, WebSocket, WebSocketDisconnect
from fastapi.responses import JSONResponse

from ohhell.api.game_handler import game_handler
from ohhell.api.responses import (
    AddBotRequest,
    BidRequest,
    CreateGameRequest,
    CreateGameResponse,
    ErrorResponse,
    GameSummary,
    JoinGameRequest,
    LegalMovesResponse,
    PlayCardRequest,
    StartGameRequest,
    status_for_error,
)
from ohhell.api.websocket import websocket_manager
from ohhell.models.actions import PlaceBid, PlayCard, StartGame
from ohhell.models.card import get_all_cards
from ohhell.models.errors import GameError
from ohhell.services.game_serializer import snapshot

logger = logging.getLogger(__name__)

router = APIRouter()


async def game_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    """Render a GameError as ``{"error": code, "detail": message}``."""
    assert isinstance(exc, GameError)
    return JSONResponse(
        status_code=status_for_error(exc),
        content=ErrorResponse(error=exc.code, detail=exc.message).model_dump(),
    )


@router.get("/games")
async def list_games() -> list[GameSummary]:
    """List every game held by this server."""
    return [GameSummary(**summary) for summary in game_handler.registry.list_games()]


@router.post("/games", status_code=201)
async def create_game(request: CreateGameRequest) -> CreateGameResponse:
    """Create a new game in the lobby with the requester as host."""
    session = game_handler.registry.create_game(
        host_id=request.host_id,
        display_name=request.display_name,
        game_id=request.game_id,
    )
    return CreateGameResponse(game_id=session.id, host_id=session.host_id)


@router.get("/games/cards")
async def get_cards() -> dict[str, list[dict[str, Any]]]:
    """List all 52 cards with their codes."""
    return {"cards": [card.to_dict() for card in get_all_cards()]}


@router.post("/games/{game_id}/join", status_code=201)
async def join_game(game_id: str, request: JoinGameRequest) -> dict[str, Any]:
    """Seat a player in a game that has not started yet."""
    player = await game_handler.registry.join(game_id, request.player_id, request.display_name)
    game = game_handler.registry.get(game_id).game
    await game_handler.manager.broadcast_game_state(game)
    return {"game_id": game_id, "player_id": player.id, "index": player.index}


@router.post("/games/{game_id}/bots", status_code=201)
async def add_bot(game_id: str, request: AddBotRequest) -> dict[str, str]:
    """Seat a random bot in a game that has not started yet (host only)."""
    if not game_handler.enable_bots:
        raise HTTPException(status_code=403, detail="Bots are disabled on this server")
    session = game_handler.registry.require_host(game_id, request.player_id)
    bot_id = await game_handler.add_bot(game_id, request.bot_id)
    await game_handler.manager.broadcast_game_state(session.game)
    return {"game_id": game_id, "player_id": bot_id}


@router.post("/games/{game_id}/start")
async def start_game(game_id: str, request: StartGameRequest) -> dict[str, Any]:
    """Start the game (host only) and return the host's view."""
    game = await game_handler.apply_action(game_id, StartGame(player_id=request.player_id))
    return snapshot(game, request.player_id)


@router.post("/games/{game_id}/bid")
async def place_bid(game_id: str, request: BidRequest) -> dict[str, Any]:
    """Place a bid and return the bidder's view."""
    game = await game_handler.apply_action(game_id, PlaceBid(request.player_id, request.amount))
    return snapshot(game, request.player_id)


@router.post("/games/{game_id}/play")
async def play_card(game_id: str, request: PlayCardRequest) -> dict[str, Any]:
    """Play a card and return the player's view."""
    game = await game_handler.apply_action(
        game_id, PlayCard(request.player_id, request.to_card())
    )
    return snapshot(game, request.player_id)


@router.get("/games/{game_id}")
async def get_game(
    game_id: str,
    player_id: str | None = Query(default=None, description="Viewer; omit for spectators"),
) -> dict[str, Any]:
    """Get the game as seen by one player."""
    game = game_handler.registry.get(game_id).game
    return snapshot(game, player_id)


@router.delete("/games/{game_id}", status_code=204)
async def delete_game(
    game_id: str,
    player_id: str = Query(..., description="Host requesting the removal"),
) -> None:
    """Discard a game and its bots (host only)."""
    game_handler.registry.require_host(game_id, player_id)
    game_handler.remove_game(game_id)


@router.get("/games/{game_id}/legal")
async def get_legal_moves(
    game_id: str,
    player_id: str = Query(..., description="Player to list moves for"),
) -> LegalMovesResponse:
    """List the bids or cards a player may use right now."""
    game = game_handler.registry.get(game_id).game
    return LegalMovesResponse(
        player_id=player_id,
        bids=game.legal_bids(player_id),
        cards=[card.to_dict() for card in game.legal_cards(player_id)],
    )


@router.websocket("/games/{game_id}/ws")
async def game_websocket(
    websocket: WebSocket,
    game_id: str,
    player_id: str = Query(..., description="Player ID"),
) -> None:
    """WebSocket channel: one command in, per-player game views out.

    Messages are JSON ``{"command": ..., "content": {...}}``.
    """
    session = game_handler.registry.find(game_id)
    if session is None:
        # Must accept before closing to avoid HTTP 403
        await websocket.accept()
        await websocket.close(code=4004, reason="Game not found")
        return
    if session.game.get_player(player_id) is None:
        await websocket.accept()
        await websocket.close(code=4003, reason="Player not in game")
        return

    await websocket_manager.connect(websocket, game_id, player_id)
    await websocket_manager.send_game_state(session.game, player_id)
    try:
        while True:
            data = await websocket.receive_text()
            await game_handler.handle_message(game_id, player_id, data)
    except WebSocketDisconnect:
        websocket_manager.disconnect(game_id, player_id)
    except (RuntimeError, ConnectionError, OSError) as e:
        logger.warning("Error handling message from %s in game %s: %s", player_id, game_id, e)
        websocket_manager.disconnect(game_id, player_id)


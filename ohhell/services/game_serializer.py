"""Game serialization.

``snapshot`` builds the view a single player is allowed to see.
``serialize_game`` dumps everything, hidden cards included, for debugging
and for comparing game states; it is not a storage format.
"""

from typing import Any

from ohhell.models.card import Card
from ohhell.models.enums import GamePhase
from ohhell.models.game import Game
from ohhell.models.player import Player
from ohhell.models.round import Round
from ohhell.models.trick import Trick

_BIDS_REVEALED = (GamePhase.PLAYING, GamePhase.ROUND_END, GamePhase.GAME_END)


def serialize_cards(cards: list[Card]) -> list[dict[str, Any]]:
    """Serialize a list of cards."""
    return [card.to_dict() for card in cards]


def serialize_trick(trick: Trick) -> dict[str, Any]:
    """Serialize a Trick to a dictionary."""
    return {
        "number": trick.number,
        "leader_index": trick.leader_index,
        "led_suit": trick.led_suit.value if trick.led_suit else None,
        "plays": [
            {"player_id": play.player_id, "card": play.card.to_dict()} for play in trick.plays
        ],
        "winner_player_id": trick.winner_player_id,
        "winner_card": trick.winner_card.to_dict() if trick.winner_card else None,
    }


def _public_player(player: Player, *, bids_revealed: bool) -> dict[str, Any]:
    return {
        "id": player.id,
        "display_name": player.display_name,
        "index": player.index,
        "score": player.score,
        "is_bot": player.is_bot,
        "has_bid": player.bid is not None,
        "bid": player.bid if bids_revealed else None,
        "tricks_won": player.tricks_won,
        "hand_count": len(player.hand),
    }


def snapshot(game: Game, player_id: str | None = None) -> dict[str, Any]:
    """Build the game view for one player.

    The view carries only ``player_id``'s own hand; everything else is
    public: trump card, trick in progress, scores, whose turn it is, and
    the bids once every player has bid. Pass no player id for a spectator
    view without any hand.
    """
    current_round = game.current_round
    bids_revealed = game.phase in _BIDS_REVEALED
    current = game.current_player
    viewer = game.get_player(player_id) if player_id else None

    last_trick = None
    if current_round and current_round.tricks:
        last_trick = serialize_trick(current_round.tricks[-1])

    return {
        "game_id": game.id,
        "phase": game.phase.value,
        "round_index": game.round_index,
        "round_number": current_round.number if current_round else 0,
        "total_rounds": len(game.sequence) if game.sequence else 0,
        "hand_size": game.hand_size,
        "trump_card": (
            current_round.trump_card.to_dict() if current_round and current_round.trump_card else None
        ),
        "current_turn_player_id": current.id if current else None,
        "trick_leader_player_id": (
            game.players[game.trick_leader_index].id if current_round else None
        ),
        "players": [_public_player(p, bids_revealed=bids_revealed) for p in game.players],
        "bids": dict(current_round.bids) if current_round and bids_revealed else {},
        "current_trick": (
            serialize_trick(current_round.current_trick)
            if current_round and current_round.current_trick
            else None
        ),
        "last_trick": last_trick,
        "hand": serialize_cards(viewer.hand) if viewer else [],
        "round_results": [result.to_dict() for result in game.round_results],
        "leaderboard": game.get_leaderboard() if game.is_finished else [],
        "winners": [p.id for p in game.get_winners()],
    }


def serialize_round(round_obj: Round) -> dict[str, Any]:
    """Serialize a Round to a dictionary."""
    return {
        "number": round_obj.number,
        "hand_size": round_obj.hand_size,
        "leader_index": round_obj.leader_index,
        "trump_card": round_obj.trump_card.to_dict() if round_obj.trump_card else None,
        "deck": serialize_cards(round_obj.deck.cards) if round_obj.deck else [],
        "bids": dict(round_obj.bids),
        "tricks_won": dict(round_obj.tricks_won),
        "tricks": [serialize_trick(t) for t in round_obj.tricks],
        "current_trick": (
            serialize_trick(round_obj.current_trick) if round_obj.current_trick else None
        ),
        "scores": dict(round_obj.scores),
    }


def serialize_player(player: Player) -> dict[str, Any]:
    """Serialize a Player to a dictionary."""
    return {
        "id": player.id,
        "display_name": player.display_name,
        "score": player.score,
        "index": player.index,
        "is_bot": player.is_bot,
        "hand": serialize_cards(player.hand),
        "bid": player.bid,
        "tricks_won": player.tricks_won,
    }


def serialize_game(game: Game) -> dict[str, Any]:
    """Serialize a complete Game, hidden cards included.

    Args:
        game: Game instance to serialize

    Returns:
        JSON-compatible dictionary of the whole state
    """
    return {
        "id": game.id,
        "phase": game.phase.value,
        "players": [serialize_player(p) for p in game.players],
        "hand_sizes": list(game.sequence.hand_sizes) if game.sequence else [],
        "round_index": game.round_index,
        "current_turn_index": game.current_turn_index,
        "trick_leader_index": game.trick_leader_index,
        "current_round": serialize_round(game.current_round) if game.current_round else None,
        "round_results": [result.to_dict() for result in game.round_results],
        "rules": {
            "min_players": game.rules.min_players,
            "max_players": game.rules.max_players,
            "trump_rule": game.rules.trump_rule.value,
            "enforce_hook_rule": game.rules.enforce_hook_rule,
            "score_success_base": game.rules.scoring.success_base,
            "score_success_per_trick": game.rules.scoring.success_per_trick,
            "score_miss_per_trick": game.rules.scoring.miss_per_trick,
        },
    }

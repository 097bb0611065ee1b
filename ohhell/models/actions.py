"""Player actions accepted by the game."""

from dataclasses import dataclass
from typing import Any

from ohhell.models.card import Card


@dataclass(frozen=True)
class StartGame:
    """Leave the lobby and deal the first round."""

    player_id: str = ""


@dataclass(frozen=True)
class PlaceBid:
    """Bid a number of tricks for the current round."""

    player_id: str
    amount: int


@dataclass(frozen=True)
class PlayCard:
    """Play a card into the current trick."""

    player_id: str
    card: Card


Action = StartGame | PlaceBid | PlayCard


def describe(action: Action) -> dict[str, Any]:
    """Return a loggable dictionary for an action."""
    data: dict[str, Any] = {"type": type(action).__name__, "player_id": action.player_id}
    if isinstance(action, PlaceBid):
        data["amount"] = action.amount
    elif isinstance(action, PlayCard):
        data["card"] = action.card.code
    return data

"""Shared fixtures."""

from collections.abc import Callable

import pytest

from ohhell.models.card import Card, get_all_cards
from ohhell.models.deck import Deck
from ohhell.models.game import Game


def cards(*codes: str) -> list[Card]:
    """Build cards from codes like ``"AS"`` or ``"10H"``."""
    return [Card.parse(code) for code in codes]


@pytest.fixture
def rig_round() -> Callable[[Game, dict[str, list[str]], str | None], Game]:
    """Replace the current round's hands and trump card with known cards.

    The undealt deck is rebuilt from the remaining cards so the round still
    accounts for all 52 cards.
    """

    def _rig(game: Game, hands: dict[str, list[str]], trump: str | None) -> Game:
        assert game.current_round is not None
        used: list[Card] = []
        for player in game.players:
            player.hand = cards(*hands[player.id])
            used.extend(player.hand)

        trump_card = Card.parse(trump) if trump else None
        if trump_card:
            used.append(trump_card)
        assert len(set(used)) == len(used), "rigged cards must be distinct"

        deck = Deck()
        deck.cards = [card for card in get_all_cards() if card not in used]
        game.current_round.trump_card = trump_card
        game.current_round.deck = deck
        return game

    return _rig

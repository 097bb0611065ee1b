"""Dealing hands and turning up the trump card."""

import logging
import random
from dataclasses import dataclass

from ohhell.constants import DECK_SIZE
from ohhell.models.card import Card
from ohhell.models.deck import Deck
from ohhell.models.errors import InsufficientCardsError
from ohhell.models.player import Player

logger = logging.getLogger(__name__)


@dataclass
class Deal:
    """Result of dealing a round.

    Attributes:
        deck: The cards left undealt
        trump_card: Card turned up for trump (None when the hands use the whole deck)

    """

    deck: Deck
    trump_card: Card | None


def deal_round(players: list[Player], hand_size: int, rng: random.Random | None = None) -> Deal:
    """Deal a fresh round.

    Builds and shuffles a new deck, gives ``hand_size`` cards to each player
    in seat order, then turns up the next card as trump. When the hands take
    the whole deck no trump card is turned and the round is played without
    trump. Bids and tricks won are reset for every player.

    Raises:
        InsufficientCardsError: If the hands need more cards than the deck holds

    """
    needed = len(players) * hand_size
    if hand_size < 1 or needed > DECK_SIZE:
        msg = f"Cannot deal {hand_size} cards to {len(players)} players"
        raise InsufficientCardsError(msg)

    deck = Deck.new(rng)
    deck.shuffle()

    for player in players:
        player.reset_round()
        player.hand = deck.deal(hand_size)

    trump_card = deck.deal(1)[0] if len(deck) else None
    if trump_card is None:
        logger.debug("Hands use the whole deck, playing round of %d without trump", hand_size)

    return Deal(deck=deck, trump_card=trump_card)

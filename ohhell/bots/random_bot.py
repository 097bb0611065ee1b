"""Random bot that makes random legal moves."""

import random

from ohhell.bots.base_bot import BaseBot
from ohhell.models.card import Card
from ohhell.models.game import Game


class RandomBot(BaseBot):
    """Bot that makes completely random decisions.

    This serves as a baseline opponent, as the default move when a seat has
    to be played on someone's behalf, and as a driver for simulations.
    """

    def __init__(self, player_id: str, seed: int | None = None) -> None:
        """Initialize random bot with its own random source."""
        super().__init__(player_id)
        self.rng = random.Random(seed)  # noqa: S311

    def make_bid(self, _game: Game, legal_bids: list[int]) -> int:
        """Pick a random legal bid."""
        return self.rng.choice(legal_bids)

    def pick_card(self, _game: Game, legal_cards: list[Card]) -> Card:
        """Pick a random legal card."""
        return self.rng.choice(legal_cards)

"""Deck model for shuffling and dealing cards."""

import random

from ohhell.models.card import Card, get_all_cards
from ohhell.models.errors import InsufficientCardsError


class Deck:
    """
    Represents a standard 52-card deck.

    Cards are dealt from the front. A dealt card never returns to the deck;
    every round builds a fresh one.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        """Initialize a full, unshuffled deck.

        Args:
            rng: Random source used for shuffling (each game owns its own)

        """
        self.rng = rng or random.Random()  # noqa: S311
        self.cards: list[Card] = get_all_cards()

    @classmethod
    def new(cls, rng: random.Random | None = None) -> "Deck":
        """Return a full unshuffled deck."""
        return cls(rng)

    def shuffle(self) -> None:
        """Shuffle the remaining cards in place (Fisher-Yates)."""
        cards = self.cards
        for i in range(len(cards) - 1, 0, -1):
            j = self.rng.randint(0, i)
            cards[i], cards[j] = cards[j], cards[i]

    def deal(self, count: int) -> list[Card]:
        """
        Remove and return the first ``count`` cards.

        Raises:
            InsufficientCardsError: If fewer than ``count`` cards remain

        """
        if count < 0:
            msg = f"Cannot deal a negative number of cards: {count}"
            raise ValueError(msg)
        if count > len(self.cards):
            msg = f"Cannot deal {count} cards, only {len(self.cards)} left"
            raise InsufficientCardsError(msg)

        dealt = self.cards[:count]
        del self.cards[:count]
        return dealt

    def __len__(self) -> int:
        """Return the number of cards left."""
        return len(self.cards)

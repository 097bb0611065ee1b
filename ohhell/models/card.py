"""Card model and trick-winning logic."""

from dataclasses import dataclass
from typing import Any

from ohhell.models.enums import RANK_LABELS, SUIT_SYMBOLS, Rank, Suit

_SUIT_LETTERS = {
    "C": Suit.CLUBS,
    "D": Suit.DIAMONDS,
    "H": Suit.HEARTS,
    "S": Suit.SPADES,
}
_SUIT_BY_SYMBOL = {symbol: suit for suit, symbol in SUIT_SYMBOLS.items()}
_RANK_BY_LABEL = {label: rank for rank, label in RANK_LABELS.items()}


@dataclass(frozen=True)
class Card:
    """A playing card.

    Attributes:
        suit: One of the four suits
        rank: Rank from 2 (lowest) to Ace (highest)

    """

    suit: Suit
    rank: Rank

    @property
    def code(self) -> str:
        """Return the compact code, e.g. ``10S`` or ``QH``."""
        return f"{self.rank.label}{self.suit.value[0].upper()}"

    def beats(self, other: "Card", led_suit: Suit, trump_suit: Suit | None) -> bool:
        """Check if this card beats ``other`` within a trick.

        Trump beats everything else, higher trump beats lower trump, and
        among non-trump cards only the led suit counts.
        """
        if trump_suit is not None:
            if self.suit == trump_suit and other.suit != trump_suit:
                return True
            if other.suit == trump_suit and self.suit != trump_suit:
                return False
            if self.suit == trump_suit:
                return self.rank > other.rank
        if self.suit == led_suit and other.suit != led_suit:
            return True
        if self.suit == led_suit:
            return self.rank > other.rank
        return False

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-compatible dictionary."""
        return {"suit": self.suit.value, "rank": int(self.rank), "code": self.code}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Card":
        """Build a card from ``{"suit": ..., "rank": ...}``."""
        return cls(suit=Suit(data["suit"]), rank=Rank(int(data["rank"])))

    @classmethod
    def parse(cls, text: str) -> "Card":
        """Parse a card code such as ``AS``, ``10h`` or ``5♦``.

        Raises:
            ValueError: If the text is not a valid card code

        """
        text = text.strip()
        if len(text) < 2:  # noqa: PLR2004
            msg = f"Invalid card code: {text!r}"
            raise ValueError(msg)

        rank_part, suit_part = text[:-1].upper(), text[-1]
        suit = _SUIT_BY_SYMBOL.get(suit_part) or _SUIT_LETTERS.get(suit_part.upper())
        if suit is None:
            msg = f"Invalid suit in card code: {text!r}"
            raise ValueError(msg)

        if rank_part in _RANK_BY_LABEL:
            return cls(suit=suit, rank=_RANK_BY_LABEL[rank_part])
        if rank_part.isdigit() and Rank.TWO <= int(rank_part) <= Rank.TEN:
            return cls(suit=suit, rank=Rank(int(rank_part)))
        msg = f"Invalid rank in card code: {text!r}"
        raise ValueError(msg)

    def __str__(self) -> str:
        """Return display form, e.g. ``10♠``."""
        return f"{self.rank.label}{self.suit.symbol}"


def get_all_cards() -> list[Card]:
    """Return the 52 cards in suit order, each suit from 2 to Ace."""
    return [Card(suit=suit, rank=rank) for suit in Suit for rank in Rank]


def determine_winner(cards: list[Card], trump_suit: Suit | None) -> Card | None:
    """Determine which card wins a trick.

    Args:
        cards: Cards in the order they were played; the first sets the led suit
        trump_suit: Trump suit for the round, or None for a no-trump round

    Returns:
        The winning card, or None for an empty trick

    """
    if not cards:
        return None

    led_suit = cards[0].suit
    winner = cards[0]
    for card in cards[1:]:
        if card.beats(winner, led_suit, trump_suit):
            winner = card
    return winner

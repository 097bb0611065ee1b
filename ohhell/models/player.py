"""Player model."""

from dataclasses import dataclass, field

from ohhell.models.card import Card


@dataclass
class Player:
    """Represents a player in the game.

    Attributes:
        id: Unique player identifier
        display_name: Player's display name
        score: Current total score
        index: Seat position / turn order
        is_bot: Whether this seat is played by a bot
        hand: Current cards in hand
        bid: Current round bid (None if not yet bid)
        tricks_won: Number of tricks won this round

    """

    id: str
    display_name: str = ""
    score: int = 0
    index: int = 0
    is_bot: bool = False
    hand: list[Card] = field(default_factory=list)
    bid: int | None = None
    tricks_won: int = 0

    def __post_init__(self) -> None:
        """Default the display name to the id."""
        if not self.display_name:
            self.display_name = self.id

    def reset_round(self) -> None:
        """Reset player state for a new round."""
        self.hand = []
        self.bid = None
        self.tricks_won = 0

    def has_card(self, card: Card) -> bool:
        """Check if player has a card in their hand."""
        return card in self.hand

    def remove_card(self, card: Card) -> None:
        """Remove a card from player's hand."""
        self.hand.remove(card)

    def update_score(self, points: int) -> None:
        """Update player's score."""
        self.score += points

    def __str__(self) -> str:
        """Return string representation."""
        bot_str = " (Bot)" if self.is_bot else ""
        return f"{self.display_name}{bot_str} - Score: {self.score}"

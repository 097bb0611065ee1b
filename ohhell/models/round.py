"""Round model representing one round of the game."""

from dataclasses import dataclass, field
from typing import Any

from ohhell.models.card import Card
from ohhell.models.deck import Deck
from ohhell.models.enums import Suit
from ohhell.models.trick import Trick


@dataclass
class Round:
    """Represents a single round of Oh Hell.

    Each player is dealt ``hand_size`` cards and bids how many tricks they
    will win. The round consists of ``hand_size`` tricks.

    Attributes:
        number: Round number (1-indexed)
        hand_size: Cards dealt to each player
        leader_index: Seat index of the player who bids and leads first
        trump_card: Card turned up for trump (None for a no-trump round)
        deck: Cards left undealt
        bids: Each player's bid for this round
        tricks_won: Tricks won so far, keyed by player id
        tricks: Completed tricks
        current_trick: Trick being played, if any
        scores: Score changes for each player this round

    """

    number: int
    hand_size: int
    leader_index: int
    trump_card: Card | None = None
    deck: Deck | None = None
    bids: dict[str, int] = field(default_factory=dict)
    tricks_won: dict[str, int] = field(default_factory=dict)
    tricks: list[Trick] = field(default_factory=list)
    current_trick: Trick | None = None
    scores: dict[str, int] = field(default_factory=dict)

    @property
    def trump_suit(self) -> Suit | None:
        """Trump suit for this round."""
        return self.trump_card.suit if self.trump_card else None

    @property
    def cards_left_in_deck(self) -> int:
        """Number of undealt cards."""
        return len(self.deck) if self.deck is not None else 0

    def all_bids_placed(self, num_players: int) -> bool:
        """Check if all players have placed their bids."""
        return len(self.bids) >= num_players

    def add_bid(self, player_id: str, bid: int) -> None:
        """Add a player's bid."""
        self.bids[player_id] = bid

    def start_trick(self, leader_index: int) -> Trick:
        """Open the next trick, led by the player at ``leader_index``."""
        self.current_trick = Trick(number=len(self.tricks) + 1, leader_index=leader_index)
        return self.current_trick

    def __str__(self) -> str:
        """Return string representation."""
        return f"Round {self.number}: {len(self.bids)} bids, {len(self.tricks)} tricks"


@dataclass(frozen=True)
class RoundResult:
    """Summary of a finished round.

    Attributes:
        number: Round number (1-indexed)
        hand_size: Cards dealt to each player
        trump_card: Trump card of the round
        bids: Final bids
        tricks_won: Tricks won by each player
        scores: Score delta for each player

    """

    number: int
    hand_size: int
    trump_card: Card | None
    bids: dict[str, int]
    tricks_won: dict[str, int]
    scores: dict[str, int]

    @classmethod
    def from_round(cls, round_obj: Round) -> "RoundResult":
        """Freeze a finished round into a result."""
        return cls(
            number=round_obj.number,
            hand_size=round_obj.hand_size,
            trump_card=round_obj.trump_card,
            bids=dict(round_obj.bids),
            tricks_won=dict(round_obj.tricks_won),
            scores=dict(round_obj.scores),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-compatible dictionary."""
        return {
            "number": self.number,
            "hand_size": self.hand_size,
            "trump_card": self.trump_card.to_dict() if self.trump_card else None,
            "bids": dict(self.bids),
            "tricks_won": dict(self.tricks_won),
            "scores": dict(self.scores),
        }

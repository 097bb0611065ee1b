"""Trick model for a single trick within a round."""

from dataclasses import dataclass, field

from ohhell.models.card import Card, determine_winner
from ohhell.models.enums import Suit, TrumpRule
from ohhell.models.errors import MustFollowSuitError


@dataclass(frozen=True)
class PlayedCard:
    """Represents a card played by a player in a trick."""

    player_id: str
    card: Card


@dataclass
class Trick:
    """Represents a single trick within a round.

    A trick consists of each player playing one card in turn order. The
    first card sets the led suit.

    Attributes:
        number: Trick number within the round (1-indexed)
        leader_index: Seat index of the player who led
        plays: Cards played so far, in order
        winner_player_id: ID of player who won this trick
        winner_card: Card that won this trick

    """

    number: int
    leader_index: int
    plays: list[PlayedCard] = field(default_factory=list)
    winner_player_id: str | None = None
    winner_card: Card | None = None

    @property
    def led_suit(self) -> Suit | None:
        """Suit of the first card played, or None while the trick is empty."""
        if not self.plays:
            return None
        return self.plays[0].card.suit

    def has_player_played(self, player_id: str) -> bool:
        """Check if a player has already played a card in this trick."""
        return any(play.player_id == player_id for play in self.plays)

    def get_cards(self) -> list[Card]:
        """Get all cards played in this trick."""
        return [play.card for play in self.plays]

    def add_card(self, player_id: str, card: Card) -> None:
        """Add a played card to this trick."""
        self.plays.append(PlayedCard(player_id, card))

    def is_complete(self, num_players: int) -> bool:
        """Check if all players have played a card."""
        return len(self.plays) == num_players

    def determine_winner(self, trump_suit: Suit | None) -> tuple[Card | None, str | None]:
        """Determine the winner of this trick.

        Returns:
            Tuple of (winner_card, winner_player_id), both None for an empty trick

        """
        winner_card = determine_winner(self.get_cards(), trump_suit)
        if winner_card is None:
            return None, None

        winner_player_id = next(play.player_id for play in self.plays if play.card == winner_card)
        self.winner_card = winner_card
        self.winner_player_id = winner_player_id
        return winner_card, winner_player_id

    def get_valid_cards(
        self,
        hand: list[Card],
        trump_suit: Suit | None,
        trump_rule: TrumpRule = TrumpRule.ALWAYS_PLAYABLE,
    ) -> list[Card]:
        """Get the cards from ``hand`` that may legally be played.

        - The leader may play anything
        - A player holding the led suit must follow it
        - Under ``TrumpRule.ALWAYS_PLAYABLE`` trump may be played instead
        - A player void in the led suit may play anything
        """
        led_suit = self.led_suit
        if led_suit is None:
            return list(hand)

        suit_cards = [card for card in hand if card.suit == led_suit]
        if not suit_cards:
            return list(hand)

        if trump_rule == TrumpRule.ALWAYS_PLAYABLE and trump_suit is not None:
            return [card for card in hand if card.suit in (led_suit, trump_suit)]
        return suit_cards

    def check_play(
        self,
        hand: list[Card],
        card: Card,
        trump_suit: Suit | None,
        trump_rule: TrumpRule = TrumpRule.ALWAYS_PLAYABLE,
    ) -> None:
        """Check that ``card`` respects the follow-suit rule.

        Raises:
            MustFollowSuitError: If the player holds the led suit and plays something else

        """
        if card not in self.get_valid_cards(hand, trump_suit, trump_rule):
            msg = f"Must follow {self.led_suit.value if self.led_suit else 'suit'}, cannot play {card}"
            raise MustFollowSuitError(msg)

    def __str__(self) -> str:
        """Return string representation of the trick."""
        if self.winner_player_id:
            return f"Trick {self.number}: Winner {self.winner_player_id}"
        return f"Trick {self.number}: {len(self.plays)} cards played"

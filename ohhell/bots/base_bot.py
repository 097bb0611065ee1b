"""Base class for all bot strategies."""

from abc import ABC, abstractmethod

from ohhell.models.actions import Action, PlaceBid, PlayCard
from ohhell.models.card import Card
from ohhell.models.enums import GamePhase
from ohhell.models.game import Game


class BaseBot(ABC):
    """Abstract base class for bot strategies.

    All bot implementations must inherit from this class and implement
    the make_bid() and pick_card() methods. Bots only ever choose among the
    moves the game reports as legal.
    """

    def __init__(self, player_id: str) -> None:
        """Initialize the bot.

        Args:
            player_id: ID of the player this bot controls

        """
        self.player_id = player_id

    @abstractmethod
    def make_bid(self, game: Game, legal_bids: list[int]) -> int:
        """Choose a bid from ``legal_bids``."""

    @abstractmethod
    def pick_card(self, game: Game, legal_cards: list[Card]) -> Card:
        """Choose a card from ``legal_cards``."""

    def choose_action(self, game: Game) -> Action | None:
        """Return the bot's next action, or None if it is not the bot's turn."""
        if game.phase == GamePhase.BIDDING:
            bids = game.legal_bids(self.player_id)
            if bids:
                return PlaceBid(self.player_id, self.make_bid(game, bids))
        elif game.phase == GamePhase.PLAYING:
            cards = game.legal_cards(self.player_id)
            if cards:
                return PlayCard(self.player_id, self.pick_card(game, cards))
        return None

    def __str__(self) -> str:
        """Return string representation."""
        return f"{self.__class__.__name__} ({self.player_id})"

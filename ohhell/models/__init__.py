"""Game domain models."""

from ohhell.models.actions import Action, PlaceBid, PlayCard, StartGame
from ohhell.models.card import Card
from ohhell.models.deck import Deck
from ohhell.models.enums import Command, GamePhase, Rank, Suit, TrumpRule
from ohhell.models.game import Game, start_game
from ohhell.models.player import Player
from ohhell.models.round import Round, RoundResult
from ohhell.models.round_sequence import RoundSequence
from ohhell.models.rules import GameRules
from ohhell.models.scoring import ScoringRules
from ohhell.models.trick import Trick

__all__ = [
    "Action",
    "Card",
    "Command",
    "Deck",
    "Game",
    "GamePhase",
    "GameRules",
    "PlaceBid",
    "PlayCard",
    "Player",
    "Rank",
    "Round",
    "RoundResult",
    "RoundSequence",
    "ScoringRules",
    "StartGame",
    "Suit",
    "Trick",
    "TrumpRule",
    "start_game",
]

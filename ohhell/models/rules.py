"""Game variant parameters."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ohhell.constants import DECK_SIZE, MAX_PLAYERS, MIN_PLAYERS
from ohhell.models.enums import TrumpRule
from ohhell.models.scoring import ScoringRules

if TYPE_CHECKING:
    from ohhell.config import Settings


@dataclass(frozen=True)
class GameRules:
    """Variant parameters the engine is played with.

    Attributes:
        min_players: Fewest players allowed to start (some variants want 3)
        max_players: Most players allowed to start
        trump_rule: Whether trump may be played while holding the led suit
        enforce_hook_rule: Forbid the last bidder from making bids total the hand size
        scoring: Score constants

    """

    min_players: int = MIN_PLAYERS
    max_players: int = MAX_PLAYERS
    trump_rule: TrumpRule = TrumpRule.ALWAYS_PLAYABLE
    enforce_hook_rule: bool = True
    scoring: ScoringRules = field(default_factory=ScoringRules)

    def __post_init__(self) -> None:
        """Validate the player range."""
        if self.min_players < 2:  # noqa: PLR2004
            msg = f"min_players must be at least 2, got {self.min_players}"
            raise ValueError(msg)
        if self.max_players < self.min_players:
            msg = f"max_players ({self.max_players}) is below min_players ({self.min_players})"
            raise ValueError(msg)
        if self.max_players > DECK_SIZE:
            msg = f"max_players must be at most {DECK_SIZE}, got {self.max_players}"
            raise ValueError(msg)

    @classmethod
    def from_settings(cls, settings: "Settings") -> "GameRules":
        """Build rules from application settings."""
        return cls(
            min_players=settings.min_players,
            max_players=settings.max_players,
            trump_rule=TrumpRule(settings.trump_rule),
            enforce_hook_rule=settings.enforce_hook_rule,
            scoring=ScoringRules(
                success_base=settings.score_success_base,
                success_per_trick=settings.score_success_per_trick,
                miss_per_trick=settings.score_miss_per_trick,
            ),
        )

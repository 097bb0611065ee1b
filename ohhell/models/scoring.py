"""Round scoring."""

from collections.abc import Iterable
from dataclasses import dataclass

from ohhell.constants import SCORE_MISS_PER_TRICK, SCORE_SUCCESS_BASE, SCORE_SUCCESS_PER_TRICK
from ohhell.models.player import Player


@dataclass(frozen=True)
class ScoringRules:
    """Score constants for a game variant.

    An exact bid earns ``success_base + success_per_trick * bid``.
    A missed bid costs ``miss_per_trick * |bid - tricks_won|``.

    Classic Oh Hell is ``ScoringRules(10, 1, 0)``: exact bidders gain
    ten plus their bid, everyone else gains nothing.
    """

    success_base: int = SCORE_SUCCESS_BASE
    success_per_trick: int = SCORE_SUCCESS_PER_TRICK
    miss_per_trick: int = SCORE_MISS_PER_TRICK

    def __post_init__(self) -> None:
        """Reject constants that would reward a miss or punish a hit."""
        if self.success_base < 0 or self.success_per_trick < 0:
            msg = "Success bonus constants must not be negative"
            raise ValueError(msg)
        if self.miss_per_trick < 0:
            msg = "Miss penalty per trick must not be negative"
            raise ValueError(msg)

    def score(self, bid: int, tricks_won: int) -> int:
        """Return the score delta for one player's round."""
        if bid == tricks_won:
            return self.success_base + self.success_per_trick * bid
        return -self.miss_per_trick * abs(bid - tricks_won)


def score_round(
    players: Iterable[Player],
    bids: dict[str, int],
    tricks_won: dict[str, int],
    rules: ScoringRules | None = None,
) -> dict[str, int]:
    """Compute score deltas for a finished round.

    Args:
        players: Players in seat order
        bids: Each player's bid, keyed by player id
        tricks_won: Tricks each player won, keyed by player id
        rules: Score constants (defaults to ``ScoringRules()``)

    Returns:
        Score delta per player id, in seat order

    """
    rules = rules or ScoringRules()
    return {
        player.id: rules.score(bids[player.id], tricks_won.get(player.id, 0))
        for player in players
    }

"""Hand sizes for every round of a match."""

from dataclasses import dataclass

from ohhell.constants import DECK_SIZE, MAX_PLAYERS, MIN_PLAYERS
from ohhell.models.errors import NotEnoughPlayersError, TooManyPlayersError


@dataclass(frozen=True)
class RoundSequence:
    """The up-and-down progression of hand sizes.

    With N players the largest hand is ``DECK_SIZE // N``. The match deals
    1, 2, ... up to that size and back down to 1, so it lasts
    ``2 * max_round - 1`` rounds.

    Attributes:
        player_count: Number of players the sequence was built for
        hand_sizes: Hand size for each round index

    """

    player_count: int
    hand_sizes: tuple[int, ...]

    @classmethod
    def for_players(
        cls,
        player_count: int,
        min_players: int = MIN_PLAYERS,
        max_players: int = MAX_PLAYERS,
    ) -> "RoundSequence":
        """Build the sequence for ``player_count`` players.

        Raises:
            NotEnoughPlayersError: Below ``min_players``
            TooManyPlayersError: Above ``max_players``

        """
        if player_count < min_players:
            msg = f"Need at least {min_players} players, got {player_count}"
            raise NotEnoughPlayersError(msg)
        if player_count > max_players:
            msg = f"At most {max_players} players allowed, got {player_count}"
            raise TooManyPlayersError(msg)

        max_round = DECK_SIZE // player_count
        ascending = range(1, max_round + 1)
        descending = range(max_round - 1, 0, -1)
        return cls(player_count=player_count, hand_sizes=(*ascending, *descending))

    @property
    def max_round(self) -> int:
        """Largest hand size in the match."""
        return max(self.hand_sizes)

    @property
    def last_index(self) -> int:
        """Index of the final round."""
        return len(self.hand_sizes) - 1

    def hand_size(self, round_index: int) -> int:
        """Return the hand size for ``round_index``.

        Raises:
            IndexError: If the index is outside the match

        """
        if not 0 <= round_index < len(self.hand_sizes):
            msg = f"Round index {round_index} outside 0..{self.last_index}"
            raise IndexError(msg)
        return self.hand_sizes[round_index]

    def is_last(self, round_index: int) -> bool:
        """Check whether ``round_index`` is the final round."""
        return round_index >= self.last_index

    def __len__(self) -> int:
        """Return the total number of rounds."""
        return len(self.hand_sizes)


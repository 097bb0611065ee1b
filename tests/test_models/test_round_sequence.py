"""Tests for the round sequence."""

import pytest

from ohhell.models.errors import InvalidPlayerCountError, NotEnoughPlayersError, TooManyPlayersError
from ohhell.models.round_sequence import RoundSequence


class TestRoundSequence:
    """Up-and-down hand sizes."""

    def test_four_players(self):
        """Four players go 1..13 and back down to 1."""
        sequence = RoundSequence.for_players(4)
        assert sequence.max_round == 13
        assert sequence.hand_sizes == (*range(1, 14), *range(12, 0, -1))
        assert len(sequence) == 25

    def test_five_players(self):
        """floor(52 / 5) = 10."""
        sequence = RoundSequence.for_players(5)
        assert sequence.hand_sizes[:3] == (1, 2, 3)
        assert sequence.max_round == 10
        assert len(sequence) == 19

    @pytest.mark.parametrize("count", range(2, 8))
    def test_shape_for_every_supported_count(self, count):
        """Length 2*max-1, steps of one up then down, palindrome."""
        sequence = RoundSequence.for_players(count)
        max_round = 52 // count
        sizes = sequence.hand_sizes
        assert len(sizes) == 2 * max_round - 1
        assert max(sizes) == max_round
        assert sizes == sizes[::-1]
        peak = sizes.index(max_round)
        assert all(b - a == 1 for a, b in zip(sizes[:peak], sizes[1 : peak + 1]))
        assert all(a - b == 1 for a, b in zip(sizes[peak:], sizes[peak + 1 :]))

    def test_hand_size_lookup(self):
        """hand_size returns the element at the round index."""
        sequence = RoundSequence.for_players(7)
        assert sequence.hand_size(0) == 1
        assert sequence.hand_size(6) == 7
        assert sequence.hand_size(sequence.last_index) == 1
        assert sequence.is_last(sequence.last_index)
        assert not sequence.is_last(0)
        with pytest.raises(IndexError):
            sequence.hand_size(len(sequence))

    def test_too_few_players(self):
        """One player cannot play."""
        with pytest.raises(NotEnoughPlayersError):
            RoundSequence.for_players(1)

    def test_too_many_players(self):
        """Eight players exceed the default range."""
        with pytest.raises(TooManyPlayersError):
            RoundSequence.for_players(8)

    def test_variant_minimum(self):
        """A variant may require three players."""
        with pytest.raises(InvalidPlayerCountError):
            RoundSequence.for_players(2, min_players=3)
        assert len(RoundSequence.for_players(3, min_players=3)) == 33

"""Tests for bid legality and the hook rule."""

import pytest

from ohhell.models.bidding import forbidden_bid, legal_bids, validate_bid
from ohhell.models.errors import InvalidBidError


class TestForbiddenBid:
    """Which bid the last bidder may not make."""

    def test_remaining_tricks_are_forbidden(self):
        """Three players, five cards, bids of 1 and 2 so far: 2 is forbidden."""
        assert forbidden_bid(5, [1, 2]) == 2

    def test_no_forbidden_bid_when_overbid(self):
        """If earlier bids already exceed the hand size nothing is forbidden."""
        assert forbidden_bid(3, [2, 2]) is None

    def test_zero_can_be_forbidden(self):
        """When the others already bid every trick, zero is forbidden."""
        assert forbidden_bid(4, [3, 1]) == 0


class TestLegalBids:
    """Listing bids."""

    def test_non_last_bidder_may_bid_anything(self):
        """Earlier bidders may bid 0..hand_size."""
        assert legal_bids(5, [1], is_last_bidder=False) == [0, 1, 2, 3, 4, 5]

    def test_last_bidder_hook_rule(self):
        """The last bidder loses exactly the bid that makes the total fit."""
        assert legal_bids(5, [1, 2], is_last_bidder=True) == [0, 1, 3, 4, 5]

    def test_hook_rule_can_be_disabled(self):
        """With the hook rule off the last bidder may bid anything."""
        assert legal_bids(5, [1, 2], is_last_bidder=True, enforce_hook_rule=False) == [0, 1, 2, 3, 4, 5]

    def test_one_card_round(self):
        """In a one-card round the last bidder may be forced into a single bid."""
        assert legal_bids(1, [0, 0, 0], is_last_bidder=True) == [0]
        assert legal_bids(1, [1, 0, 0], is_last_bidder=True) == [1]
        assert legal_bids(1, [1, 1, 0], is_last_bidder=True) == [0, 1]


class TestValidateBid:
    """Rejecting bids."""

    def test_valid_bid_passes(self):
        """A legal bid raises nothing."""
        validate_bid(3, 5, [1, 2], is_last_bidder=True)

    @pytest.mark.parametrize("amount", [-1, 6, 100])
    def test_out_of_range(self, amount):
        """Bids outside 0..hand_size are rejected."""
        with pytest.raises(InvalidBidError, match="must be 0-5"):
            validate_bid(amount, 5, [], is_last_bidder=False)

    @pytest.mark.parametrize("amount", [1.5, "2", None, True])
    def test_not_a_whole_number(self, amount):
        """Non-integers (and booleans) are rejected."""
        with pytest.raises(InvalidBidError):
            validate_bid(amount, 5, [], is_last_bidder=False)

    def test_hook_rule_violation(self):
        """The forbidden bid raises for the last bidder only."""
        with pytest.raises(InvalidBidError, match="Last bidder"):
            validate_bid(2, 5, [1, 2], is_last_bidder=True)
        validate_bid(2, 5, [1, 2], is_last_bidder=False)

    def test_error_code(self):
        """The error carries a stable code for clients."""
        with pytest.raises(InvalidBidError) as exc_info:
            validate_bid(9, 5, [], is_last_bidder=False)
        assert exc_info.value.code == InvalidBidError.code

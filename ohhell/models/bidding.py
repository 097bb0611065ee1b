"""Bid legality, including the hook rule."""

from ohhell.models.errors import InvalidBidError


def forbidden_bid(hand_size: int, existing_bids: list[int]) -> int | None:
    """Return the bid the last bidder may not make, if any.

    The last bidder may never bring the total of all bids to exactly the
    number of tricks in the round, so at least one player misses.
    """
    forbidden = hand_size - sum(existing_bids)
    if 0 <= forbidden <= hand_size:
        return forbidden
    return None


def legal_bids(
    hand_size: int,
    existing_bids: list[int],
    *,
    is_last_bidder: bool,
    enforce_hook_rule: bool = True,
) -> list[int]:
    """List every bid the current bidder may make."""
    bids = list(range(hand_size + 1))
    if is_last_bidder and enforce_hook_rule:
        forbidden = forbidden_bid(hand_size, existing_bids)
        bids = [bid for bid in bids if bid != forbidden]
    return bids


def validate_bid(
    amount: int,
    hand_size: int,
    existing_bids: list[int],
    *,
    is_last_bidder: bool,
    enforce_hook_rule: bool = True,
) -> None:
    """Check a bid.

    Raises:
        InvalidBidError: If the amount is out of range or breaks the hook rule

    """
    if isinstance(amount, bool) or not isinstance(amount, int):
        msg = f"Bid must be a whole number, got {amount!r}"
        raise InvalidBidError(msg)
    if not 0 <= amount <= hand_size:
        msg = f"Invalid bid: must be 0-{hand_size}"
        raise InvalidBidError(msg)
    if is_last_bidder and enforce_hook_rule and amount == forbidden_bid(hand_size, existing_bids):
        msg = f"Last bidder cannot bid {amount}: total bids would equal {hand_size} tricks"
        raise InvalidBidError(msg)

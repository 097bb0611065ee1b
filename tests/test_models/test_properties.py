"""Property-based tests for the engine using Hypothesis.

Random seeds drive random bots through whole matches; after every action
the game must still account for all 52 cards and respect the bid and
trick bookkeeping.
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from ohhell.bots import RandomBot
from ohhell.models.bidding import legal_bids
from ohhell.models.card import Card, determine_winner
from ohhell.models.enums import GamePhase, Rank, Suit, TrumpRule
from ohhell.models.game import start_game
from ohhell.models.round_sequence import RoundSequence
from ohhell.models.rules import GameRules

cards_strategy = st.builds(Card, suit=st.sampled_from(list(Suit)), rank=st.sampled_from(list(Rank)))


class TestEngineProperties:
    """Invariants that hold for any seed and any legal play."""

    @given(count=st.integers(2, 7))
    @settings(max_examples=20, deadline=None)
    def test_sequence_shape(self, count: int) -> None:
        """Round sequence climbs to floor(52/N) and back in steps of one."""
        sizes = RoundSequence.for_players(count).hand_sizes
        max_round = 52 // count
        assert len(sizes) == 2 * max_round - 1
        assert sizes[0] == sizes[-1] == 1
        assert all(abs(b - a) == 1 for a, b in zip(sizes, sizes[1:]))

    @given(
        hand_size=st.integers(1, 13),
        bids=st.lists(st.integers(0, 13), min_size=1, max_size=6),
    )
    @settings(max_examples=100, deadline=None)
    def test_last_bidder_always_has_a_bid(self, hand_size: int, bids: list[int]) -> None:
        """The hook rule removes at most one bid, so one always remains."""
        existing = [min(bid, hand_size) for bid in bids]
        allowed = legal_bids(hand_size, existing, is_last_bidder=True)
        assert allowed
        assert len(allowed) >= hand_size
        assert all(sum(existing) + bid != hand_size for bid in allowed)

    @given(
        cards=st.lists(cards_strategy, min_size=1, max_size=7, unique=True),
        trump=st.one_of(st.none(), st.sampled_from(list(Suit))),
    )
    @settings(max_examples=100, deadline=None)
    def test_winner_is_played_and_unbeaten(self, cards: list[Card], trump: Suit | None) -> None:
        """The winning card was played and no other card beats it."""
        winner = determine_winner(cards, trump)
        assert winner in cards
        led = cards[0].suit
        assert not any(card.beats(winner, led, trump) for card in cards if card != winner)

    @given(
        count=st.integers(2, 7),
        seed=st.integers(0, 100000),
        rule=st.sampled_from(list(TrumpRule)),
    )
    @settings(max_examples=15, deadline=None)
    def test_random_games_conserve_cards(self, count: int, seed: int, rule: TrumpRule) -> None:
        """Cards are never created or lost, and every round balances."""
        player_ids = [f"p{i}" for i in range(count)]
        game = start_game(player_ids, rules=GameRules(trump_rule=rule), seed=seed)
        bots = {pid: RandomBot(pid, seed=seed + i) for i, pid in enumerate(player_ids)}

        while not game.is_finished:
            assert game.card_count() == 52
            current = game.current_player
            assert current is not None
            if game.phase == GamePhase.PLAYING:
                assert current.hand
            action = bots[current.id].choose_action(game)
            assert action is not None
            game.apply(action)

        assert game.card_count() == 52
        assert len(game.round_results) == len(game.sequence)
        for result in game.round_results:
            assert sum(result.tricks_won.values()) == result.hand_size
            assert sum(result.bids.values()) != result.hand_size
        assert game.get_winners()

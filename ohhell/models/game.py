"""Game model: the round, bid, trick and score state machine."""

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from ohhell.constants import DECK_SIZE
from ohhell.models.actions import Action, PlaceBid, PlayCard, StartGame
from ohhell.models.bidding import legal_bids, validate_bid
from ohhell.models.card import Card
from ohhell.models.dealing import deal_round
from ohhell.models.enums import GamePhase
from ohhell.models.errors import (
    CardNotInHandError,
    InsufficientCardsError,
    NotYourTurnError,
    UnknownPlayerError,
    WrongPhaseError,
)
from ohhell.models.player import Player
from ohhell.models.round import Round, RoundResult
from ohhell.models.round_sequence import RoundSequence
from ohhell.models.rules import GameRules
from ohhell.models.scoring import score_round

logger = logging.getLogger(__name__)


@dataclass
class Game:
    """Represents a complete Oh Hell match.

    The game is the only thing that mutates its own state. Every action is
    checked in full before anything changes, so a rejected action leaves
    the game exactly as it was.

    Attributes:
        id: Unique game identifier
        rules: Variant parameters
        phase: Current phase
        players: Players in seat order
        sequence: Hand sizes for the match (set when the game starts)
        round_index: Index into ``sequence`` of the current round
        current_turn_index: Seat index of the player to act
        trick_leader_index: Seat index of the player who leads the current trick
        current_round: Per-round state (hands live on the players)
        round_results: Summaries of finished rounds
        seed: Optional seed for this game's random source

    """

    id: str
    rules: GameRules = field(default_factory=GameRules)
    phase: GamePhase = GamePhase.LOBBY
    players: list[Player] = field(default_factory=list)
    sequence: RoundSequence | None = None
    round_index: int = 0
    current_turn_index: int = 0
    trick_leader_index: int = 0
    current_round: Round | None = None
    round_results: list[RoundResult] = field(default_factory=list)
    seed: int | None = None
    rng: random.Random = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Give the game its own random source."""
        self.rng = random.Random(self.seed)  # noqa: S311

    # ------------------------------------------------------------------
    # Seating
    # ------------------------------------------------------------------

    def add_player(self, player: Player) -> bool:
        """Seat a player while in the lobby."""
        if self.phase != GamePhase.LOBBY:
            return False
        if len(self.players) >= self.rules.max_players:
            return False
        if any(p.id == player.id for p in self.players):
            return False

        player.index = len(self.players)
        self.players.append(player)
        return True

    def get_player(self, player_id: str) -> Player | None:
        """Get a player by ID."""
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    @property
    def current_player(self) -> Player | None:
        """Player whose turn it is, or None outside bidding and playing."""
        if self.phase not in (GamePhase.BIDDING, GamePhase.PLAYING):
            return None
        return self.players[self.current_turn_index]

    @property
    def hand_size(self) -> int:
        """Hand size of the current round (0 before the game starts)."""
        return self.current_round.hand_size if self.current_round else 0

    @property
    def is_finished(self) -> bool:
        """Check if the game has ended."""
        return self.phase == GamePhase.GAME_END

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def apply(self, action: Action) -> "Game":
        """Apply one action and return the game.

        Raises:
            GameError: If the action is illegal; the game is left unchanged

        """
        handlers: dict[type, Callable[[Any], None]] = {
            StartGame: lambda _a: self.start(),
            PlaceBid: lambda a: self.place_bid(a.player_id, a.amount),
            PlayCard: lambda a: self.play_card(a.player_id, a.card),
        }
        handler = handlers.get(type(action))
        if handler is None:
            msg = f"Unknown action: {action!r}"
            raise TypeError(msg)
        handler(action)
        return self

    def start(self) -> None:
        """Leave the lobby and deal the first round.

        Raises:
            WrongPhaseError: If the game already started
            NotEnoughPlayersError: Below the variant's minimum
            TooManyPlayersError: Above the variant's maximum

        """
        if self.phase != GamePhase.LOBBY:
            msg = "Game already started"
            raise WrongPhaseError(msg)

        self.sequence = RoundSequence.for_players(
            len(self.players),
            min_players=self.rules.min_players,
            max_players=self.rules.max_players,
        )
        logger.info(
            "Game %s starting with %d players over %d rounds",
            self.id,
            len(self.players),
            len(self.sequence),
        )
        self.begin_round(0)

    def begin_round(self, round_index: int) -> Round:
        """Deal the round at ``round_index`` and open bidding.

        The first round is led by seat 0; later rounds are led by whoever
        won the last trick of the previous round.
        """
        if self.sequence is None:
            msg = "Cannot begin a round before the game starts"
            raise WrongPhaseError(msg)

        self.phase = GamePhase.DEALING
        self.round_index = round_index
        hand_size = self.sequence.hand_size(round_index)
        leader_index = 0 if round_index == 0 else self.trick_leader_index

        deal = deal_round(self.players, hand_size, self.rng)
        self.current_round = Round(
            number=round_index + 1,
            hand_size=hand_size,
            leader_index=leader_index,
            trump_card=deal.trump_card,
            deck=deal.deck,
            tricks_won={p.id: 0 for p in self.players},
        )
        self.current_turn_index = leader_index
        self.trick_leader_index = leader_index
        self.phase = GamePhase.BIDDING

        logger.info(
            "Game %s round %d: %d cards each, trump %s",
            self.id,
            self.current_round.number,
            hand_size,
            deal.trump_card or "none",
        )
        return self.current_round

    def place_bid(self, player_id: str, amount: int) -> None:
        """Record a bid for the player whose turn it is.

        Raises:
            WrongPhaseError: Outside bidding
            NotYourTurnError: Not this player's turn
            InvalidBidError: Out of range or breaks the hook rule

        """
        current_round = self._require_phase(GamePhase.BIDDING)
        player = self._require_turn(player_id)
        validate_bid(
            amount,
            current_round.hand_size,
            list(current_round.bids.values()),
            is_last_bidder=self._is_last_bidder(),
            enforce_hook_rule=self.rules.enforce_hook_rule,
        )

        player.bid = amount
        current_round.add_bid(player.id, amount)
        self.current_turn_index = (self.current_turn_index + 1) % len(self.players)
        logger.info("Player %s bid %d in game %s", player.id, amount, self.id)

        if current_round.all_bids_placed(len(self.players)):
            self._end_bidding(current_round)

    def play_card(self, player_id: str, card: Card) -> None:
        """Play a card for the player whose turn it is.

        Raises:
            WrongPhaseError: Outside playing
            NotYourTurnError: Not this player's turn
            CardNotInHandError: Card is not in the player's hand
            MustFollowSuitError: Player holds the led suit and played something else

        """
        current_round = self._require_phase(GamePhase.PLAYING)
        player = self._require_turn(player_id)
        if not player.has_card(card):
            msg = f"{card} is not in {player.id}'s hand"
            raise CardNotInHandError(msg)

        trick = current_round.current_trick
        assert trick is not None
        trick.check_play(player.hand, card, current_round.trump_suit, self.rules.trump_rule)

        player.remove_card(card)
        trick.add_card(player.id, card)
        self.current_turn_index = (self.current_turn_index + 1) % len(self.players)
        logger.debug("Player %s played %s in game %s", player.id, card, self.id)

        if trick.is_complete(len(self.players)):
            self._complete_trick(current_round)

    def legal_bids(self, player_id: str) -> list[int]:
        """Bids the player may make right now (empty when not their turn)."""
        current = self.current_player
        if self.phase != GamePhase.BIDDING or current is None or current.id != player_id:
            return []
        assert self.current_round is not None
        return legal_bids(
            self.current_round.hand_size,
            list(self.current_round.bids.values()),
            is_last_bidder=self._is_last_bidder(),
            enforce_hook_rule=self.rules.enforce_hook_rule,
        )

    def legal_cards(self, player_id: str) -> list[Card]:
        """Cards the player may play right now (empty when not their turn)."""
        current = self.current_player
        if self.phase != GamePhase.PLAYING or current is None or current.id != player_id:
            return []
        assert self.current_round is not None
        trick = self.current_round.current_trick
        if trick is None:
            return list(current.hand)
        return trick.get_valid_cards(
            current.hand, self.current_round.trump_suit, self.rules.trump_rule
        )

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _end_bidding(self, current_round: Round) -> None:
        """Close bidding and let the round leader open the first trick."""
        self.phase = GamePhase.PLAYING
        self.current_turn_index = current_round.leader_index
        self.trick_leader_index = current_round.leader_index
        current_round.start_trick(current_round.leader_index)
        logger.info(
            "Bidding complete for round %d in game %s: %s",
            current_round.number,
            self.id,
            current_round.bids,
        )

    def _complete_trick(self, current_round: Round) -> None:
        """Resolve a full trick, hand the lead to its winner, and maybe end the round."""
        trick = current_round.current_trick
        assert trick is not None
        winner_card, winner_id = trick.determine_winner(current_round.trump_suit)
        winner = self.get_player(winner_id) if winner_id else None
        if winner is None:
            msg = f"Trick {trick.number} in game {self.id} has no winner"
            raise RuntimeError(msg)

        winner.tricks_won += 1
        current_round.tricks_won[winner.id] = winner.tricks_won
        current_round.tricks.append(trick)
        current_round.current_trick = None
        self.trick_leader_index = winner.index
        self.current_turn_index = winner.index
        logger.info(
            "Trick %d won by %s with %s in game %s",
            trick.number,
            winner.id,
            winner_card,
            self.id,
        )

        if all(not p.hand for p in self.players):
            self._end_round(current_round)
        else:
            current_round.start_trick(winner.index)

    def _end_round(self, current_round: Round) -> None:
        """Score the round, then deal the next one or end the game."""
        self.phase = GamePhase.ROUND_END
        if sum(current_round.tricks_won.values()) != current_round.hand_size:
            msg = f"Tricks won do not add up to {current_round.hand_size} in game {self.id}"
            raise RuntimeError(msg)

        current_round.scores = score_round(
            self.players,
            current_round.bids,
            current_round.tricks_won,
            self.rules.scoring,
        )
        for player in self.players:
            player.update_score(current_round.scores[player.id])
        self.round_results.append(RoundResult.from_round(current_round))
        logger.info(
            "Round %d complete in game %s: %s",
            current_round.number,
            self.id,
            current_round.scores,
        )

        assert self.sequence is not None
        if self.sequence.is_last(self.round_index):
            self.phase = GamePhase.GAME_END
            self.current_turn_index = 0
            logger.info("Game %s ended. Winners: %s", self.id, [p.id for p in self.get_winners()])
        else:
            self.begin_round(self.round_index + 1)

    # ------------------------------------------------------------------
    # Checks
    # ------------------------------------------------------------------

    def _require_phase(self, phase: GamePhase) -> Round:
        if self.phase != phase or self.current_round is None:
            msg = f"Cannot do that during {self.phase.value}"
            raise WrongPhaseError(msg)
        return self.current_round

    def _require_turn(self, player_id: str) -> Player:
        player = self.get_player(player_id)
        if player is None:
            msg = f"Player {player_id} is not in game {self.id}"
            raise UnknownPlayerError(msg)
        if player.index != self.current_turn_index:
            msg = f"It is {self.players[self.current_turn_index].id}'s turn"
            raise NotYourTurnError(msg)
        return player

    def _is_last_bidder(self) -> bool:
        assert self.current_round is not None
        return len(self.current_round.bids) == len(self.players) - 1

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def card_count(self) -> int:
        """Count every card of the round: hands, trick, deck and trump.

        Raises:
            InsufficientCardsError: If the count is not a full deck

        """
        if self.current_round is None:
            return 0
        trick = self.current_round.current_trick
        total = (
            sum(len(p.hand) for p in self.players)
            + (len(trick.plays) if trick else 0)
            + sum(len(t.plays) for t in self.current_round.tricks)
            + self.current_round.cards_left_in_deck
            + (1 if self.current_round.trump_card else 0)
        )
        if total != DECK_SIZE:
            msg = f"Game {self.id} accounts for {total} cards instead of {DECK_SIZE}"
            raise InsufficientCardsError(msg)
        return total

    def get_leaderboard(self) -> list[dict[str, Any]]:
        """Get sorted leaderboard."""
        sorted_players = sorted(self.players, key=lambda p: p.score, reverse=True)
        return [
            {
                "player_id": p.id,
                "display_name": p.display_name,
                "score": p.score,
                "is_bot": p.is_bot,
            }
            for p in sorted_players
        ]

    def get_winners(self) -> list[Player]:
        """Get the players sharing the top score once the game has ended."""
        if not self.is_finished or not self.players:
            return []
        best = max(p.score for p in self.players)
        return [p for p in self.players if p.score == best]

    def __str__(self) -> str:
        """Return string representation."""
        round_number = self.current_round.number if self.current_round else 0
        return (
            f"Game {self.id}: {len(self.players)} players, "
            f"Round {round_number}, Phase: {self.phase.value}"
        )


def start_game(
    player_ids: list[str],
    rules: GameRules | None = None,
    game_id: str = "",
    seed: int | None = None,
) -> Game:
    """Create a game for ``player_ids`` (in seat order) and deal the first round.

    Raises:
        NotEnoughPlayersError: Too few players for the variant
        TooManyPlayersError: Too many players for the variant

    """
    if len(set(player_ids)) != len(player_ids):
        msg = f"Duplicate player ids: {player_ids}"
        raise ValueError(msg)

    game = Game(id=game_id or "-".join(player_ids), rules=rules or GameRules(), seed=seed)
    for player_id in player_ids:
        game.players.append(Player(id=player_id, index=len(game.players)))
    game.start()
    return game

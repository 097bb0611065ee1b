#!/usr/bin/env python3
"""
CLI script to watch bots play Oh Hell.

This script seats random bots, plays a complete match through the same
actions a client would send, and prints every round and the final
leaderboard.
"""

import argparse
import logging

from rich.console import Console
from rich.table import Table

from ohhell.bots import RandomBot
from ohhell.models.enums import TrumpRule
from ohhell.models.game import Game, start_game
from ohhell.models.rules import GameRules

console = Console()


class BotGameSimulator:
    """Simulates a game between bot players."""

    def __init__(self, num_players: int = 4, seed: int | None = None, rules: GameRules | None = None):
        """
        Initialize simulator.

        Args:
            num_players: Number of players
            seed: Seed for dealing and for the bots
            rules: Variant parameters
        """
        self.player_ids = [f"bot_{i}" for i in range(num_players)]
        self.seed = seed
        self.rules = rules or GameRules()
        self.bots = {
            player_id: RandomBot(player_id, seed=None if seed is None else seed + i)
            for i, player_id in enumerate(self.player_ids)
        }

    def play(self) -> Game:
        """Play the whole match and return the finished game."""
        game = start_game(self.player_ids, rules=self.rules, game_id="bot-game", seed=self.seed)
        console.rule(f"Oh Hell: {len(self.player_ids)} bots, {len(game.sequence or ())} rounds")

        results_seen = 0
        while not game.is_finished:
            current = game.current_player
            assert current is not None
            action = self.bots[current.id].choose_action(game)
            assert action is not None
            game.apply(action)

            if len(game.round_results) > results_seen:
                self.print_round(game, results_seen)
                results_seen = len(game.round_results)

        self.print_leaderboard(game)
        return game

    def print_round(self, game: Game, result_index: int) -> None:
        """Print one finished round."""
        result = game.round_results[result_index]
        trump = str(result.trump_card) if result.trump_card else "no trump"
        table = Table(title=f"Round {result.number}: {result.hand_size} cards, {trump}")
        table.add_column("Player")
        table.add_column("Bid", justify="right")
        table.add_column("Won", justify="right")
        table.add_column("Delta", justify="right")
        for player in game.players:
            delta = result.scores[player.id]
            style = "green" if delta > 0 else "red"
            table.add_row(
                player.display_name,
                str(result.bids[player.id]),
                str(result.tricks_won[player.id]),
                f"[{style}]{delta:+d}[/{style}]",
            )
        console.print(table)

    def print_leaderboard(self, game: Game) -> None:
        """Print the final standings."""
        table = Table(title="Final scores")
        table.add_column("#", justify="right")
        table.add_column("Player")
        table.add_column("Score", justify="right")
        for rank, entry in enumerate(game.get_leaderboard(), start=1):
            table.add_row(str(rank), entry["display_name"], str(entry["score"]))
        console.print(table)
        winners = ", ".join(p.display_name for p in game.get_winners())
        console.print(f"[bold]Winner: {winners}[/bold]")


def main() -> None:
    """Parse arguments and run a simulated match."""
    parser = argparse.ArgumentParser(description="Watch random bots play Oh Hell")
    parser.add_argument("--players", type=int, default=4, help="Number of bots (default: 4)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument(
        "--trump-rule",
        choices=[rule.value for rule in TrumpRule],
        default=TrumpRule.ALWAYS_PLAYABLE.value,
    )
    parser.add_argument("--verbose", action="store_true", help="Show engine logs")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)
    rules = GameRules(trump_rule=TrumpRule(args.trump_rule))
    BotGameSimulator(args.players, seed=args.seed, rules=rules).play()


if __name__ == "__main__":
    main()

"""Bot players for Oh Hell.

Available bots:
- RandomBot: Plays random legal bids and cards
"""

from ohhell.bots.base_bot import BaseBot
from ohhell.bots.random_bot import RandomBot

__all__ = ["BaseBot", "RandomBot"]

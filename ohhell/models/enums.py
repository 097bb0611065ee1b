"""Enums for the game."""

from enum import Enum, IntEnum


class Suit(str, Enum):
    """The four suits of a standard deck."""

    CLUBS = "clubs"
    DIAMONDS = "diamonds"
    HEARTS = "hearts"
    SPADES = "spades"

    @property
    def symbol(self) -> str:
        """Return the suit symbol."""
        return SUIT_SYMBOLS[self]


SUIT_SYMBOLS = {
    Suit.CLUBS: "♣",
    Suit.DIAMONDS: "♦",
    Suit.HEARTS: "♥",
    Suit.SPADES: "♠",
}


class Rank(IntEnum):
    """Card ranks, ordered from lowest to highest."""

    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    @property
    def label(self) -> str:
        """Return the short label used on card faces (2-10, J, Q, K, A)."""
        return RANK_LABELS.get(self, str(self.value))


RANK_LABELS = {
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
    Rank.ACE: "A",
}


class GamePhase(str, Enum):
    """Phases of the game lifecycle."""

    LOBBY = "LOBBY"
    DEALING = "DEALING"
    BIDDING = "BIDDING"
    PLAYING = "PLAYING"
    ROUND_END = "ROUND_END"
    GAME_END = "GAME_END"


class TrumpRule(str, Enum):
    """When a trump card may be played instead of following the led suit."""

    # Trump may always be played, even when holding the led suit
    ALWAYS_PLAYABLE = "always_playable"
    # Trump only when void in the led suit
    MUST_FOLLOW = "must_follow"


class Command(str, Enum):
    """WebSocket commands."""

    # Commands sent to players
    GAME_STATE = "GAME_STATE"
    REPORT_ERROR = "REPORT_ERROR"

    # Commands from client
    START_GAME = "START_GAME"
    BID = "BID"
    PICK = "PICK"
    SYNC_STATE = "SYNC_STATE"
    ADD_BOT = "ADD_BOT"

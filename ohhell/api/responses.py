"""Request/response models and error mapping."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field, field_validator

from ohhell.models.card import Card
from ohhell.models.enums import Command, Suit
from ohhell.models.errors import (
    CardNotInHandError,
    GameError,
    InvalidBidError,
    InvalidPlayerCountError,
    MustFollowSuitError,
    NotYourTurnError,
    UnknownPlayerError,
    WrongPhaseError,
)
from ohhell.services.game_registry import (
    GameAlreadyExistsError,
    GameFullError,
    GameNotFoundError,
    NotHostError,
    PlayerAlreadyJoinedError,
)

__all__ = [
    "AddBotRequest",
    "BidRequest",
    "CardPayload",
    "Command",
    "CreateGameRequest",
    "CreateGameResponse",
    "ErrorCode",
    "ErrorResponse",
    "GameSummary",
    "JoinGameRequest",
    "LegalMovesResponse",
    "PlayCardRequest",
    "ServerMessage",
    "StartGameRequest",
    "parse_card",
    "status_for_error",
]


class ErrorCode(StrEnum):
    """Error codes that are not engine errors (engine errors carry their own code)."""

    INVALID_CARD = "error.invalidCard"
    MISSING_BID_VALUE = "error.missingBidValue"
    BID_MUST_BE_NUMBER = "error.bidMustBeNumber"
    BOTS_DISABLED = "error.botsDisabled"
    UNKNOWN_COMMAND = "error.unknownCommand"
    INVALID_MESSAGE = "error.invalidMessage"
    INVALID_BOT_ID = "error.invalidBotId"


# Checked in order, most specific first
_ERROR_STATUS: list[tuple[type[GameError], int]] = [
    (GameNotFoundError, 404),
    (UnknownPlayerError, 404),
    (NotHostError, 403),
    (InvalidBidError, 422),
    (CardNotInHandError, 422),
    (MustFollowSuitError, 422),
    (WrongPhaseError, 409),
    (NotYourTurnError, 409),
    (InvalidPlayerCountError, 409),
    (GameAlreadyExistsError, 409),
    (GameFullError, 409),
    (PlayerAlreadyJoinedError, 409),
]


def status_for_error(error: GameError) -> int:
    """Map a game error to an HTTP status code."""
    for error_type, status in _ERROR_STATUS:
        if isinstance(error, error_type):
            return status
    return 400


class CardPayload(BaseModel):
    """Card as ``{"suit": "spades", "rank": 14}``."""

    suit: Suit
    rank: int = Field(ge=2, le=14)

    def to_card(self) -> Card:
        """Convert to a Card."""
        return Card.from_dict({"suit": self.suit.value, "rank": self.rank})


def parse_card(value: Any) -> Card:
    """Parse a card from a code string (``"QH"``, ``"10♠"``) or a suit/rank mapping.

    Raises:
        ValueError: If the value does not describe a card

    """
    if isinstance(value, Card):
        return value
    if isinstance(value, str):
        return Card.parse(value)
    if isinstance(value, dict):
        try:
            return Card.from_dict(value)
        except (KeyError, TypeError, ValueError) as e:
            msg = f"Invalid card: {value!r}"
            raise ValueError(msg) from e
    msg = f"Invalid card: {value!r}"
    raise ValueError(msg)


class CreateGameRequest(BaseModel):
    """Request to create a new game."""

    host_id: str = Field(min_length=1)
    display_name: str = ""
    game_id: str | None = None


class CreateGameResponse(BaseModel):
    """Response for game creation."""

    game_id: str
    host_id: str
    message: str = "Game created successfully"


class JoinGameRequest(BaseModel):
    """Request to join a game in the lobby."""

    player_id: str = Field(min_length=1)
    display_name: str = ""


class AddBotRequest(BaseModel):
    """Request to seat a bot (host only)."""

    player_id: str
    bot_id: str | None = Field(default=None, min_length=1)


class StartGameRequest(BaseModel):
    """Request to start a game (host only)."""

    player_id: str


class BidRequest(BaseModel):
    """Request to place a bid."""

    player_id: str
    amount: int


class PlayCardRequest(BaseModel):
    """Request to play a card, given as a code string or a suit/rank object."""

    player_id: str
    card: str | CardPayload

    @field_validator("card")
    @classmethod
    def _check_card(cls, value: str | CardPayload) -> str | CardPayload:
        if isinstance(value, str):
            Card.parse(value)
        return value

    def to_card(self) -> Card:
        """Convert the payload to a Card."""
        if isinstance(self.card, CardPayload):
            return self.card.to_card()
        return Card.parse(self.card)


class GameSummary(BaseModel):
    """Game listing entry."""

    game_id: str
    host_id: str
    phase: str
    player_count: int
    max_players: int
    created_at: str


class LegalMovesResponse(BaseModel):
    """Legal bids and cards for a player right now."""

    player_id: str
    bids: list[int]
    cards: list[dict[str, Any]]


class ErrorResponse(BaseModel):
    """Error response."""

    error: str
    detail: str | None = None


@dataclass
class ServerMessage:
    """Message sent from server to clients via WebSocket.

    Attributes:
        command: Command type
        game_id: Game identifier
        content: Message payload (varies by command)
        receiver_id: Specific player to receive (empty = broadcast)

    """

    command: Command
    game_id: str
    content: Any
    receiver_id: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "command": self.command.value,
            "content": self.content,
        }

"""Game rule violations raised by the engine.

Every rule violation derives from GameError and carries a stable ``code``
the transport layer can map to a message or status code. The engine leaves
the game untouched when it raises one of these.
"""


class GameError(Exception):
    """Base class for rejected game actions."""

    code = "error.game"

    def __init__(self, message: str = "") -> None:
        """Initialize with an optional human-readable message."""
        super().__init__(message or self.__class__.__doc__ or self.code)
        self.message = str(self)


class InvalidPlayerCountError(GameError):
    """Player count is outside the supported range."""

    code = "error.invalidPlayerCount"


class NotEnoughPlayersError(InvalidPlayerCountError):
    """Not enough players to start the game."""

    code = "error.notEnoughPlayers"


class TooManyPlayersError(InvalidPlayerCountError):
    """Too many players to start the game."""

    code = "error.tooManyPlayers"


class WrongPhaseError(GameError):
    """Action is not allowed in the current phase."""

    code = "error.wrongPhase"


class NotYourTurnError(GameError):
    """It is not this player's turn."""

    code = "error.notYourTurn"


class UnknownPlayerError(NotYourTurnError):
    """Player is not seated in this game."""

    code = "error.playerNotFound"


class InvalidBidError(GameError):
    """Bid is out of range or breaks the hook rule."""

    code = "error.invalidBid"


class CardNotInHandError(GameError):
    """Card is not in the player's hand."""

    code = "error.cardNotInHand"


class MustFollowSuitError(GameError):
    """Player must follow the led suit."""

    code = "error.mustFollowSuit"


class InsufficientCardsError(RuntimeError):
    """Deck ran out of cards.

    Round sizes are computed so this never happens during play; seeing it
    means the engine's own bookkeeping is broken.
    """

    code = "error.insufficientCards"

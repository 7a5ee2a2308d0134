"""Error taxonomy for FairDice.

Construction-time violations raise immediately. A proof that does not match a
reveal is not an exception: verification returns ``False`` instead.
"""


class FairDiceError(Exception):
    """Base class for all FairDice errors."""


class InvalidRangeError(FairDiceError, ValueError):
    """Raised when a value range is not a positive integer."""


class InvalidDiceError(FairDiceError, ValueError):
    """Raised when a die has no faces or a face is not a non-negative integer."""


class InsufficientDistributionsError(FairDiceError, ValueError):
    """Raised when a game is set up with fewer dice than two players need."""


class InvalidInputError(FairDiceError, ValueError):
    """Raised when a raw choice is not one of the offered options."""

    def __init__(self, raw: str, valid_options):
        self.raw = raw
        self.valid_options = list(valid_options)
        super().__init__(f"Invalid input {raw!r}; expected one of {self.valid_options}")


class GamePhaseError(FairDiceError):
    """Raised when a game operation is called out of order."""


class DieUnavailableError(FairDiceError):
    """Raised when a player selects a die that is not offered to them."""

"""Constants and type definitions for FairDice."""

from typing import Literal

# Type definitions
Player = Literal["user", "computer"]
GamePhase = Literal["first_move", "selection", "roll", "finished"]
Outcome = Literal["user", "computer", "tie"]

# Control options accepted wherever a numbered choice is expected
EXIT_OPTION = "X"
HELP_OPTION = "?"

# Placeholder for self-comparison cells in a probability table
NOT_APPLICABLE = "-"

# Message returned when a raw choice does not match any option
INVALID_INPUT_MESSAGE = "Invalid input. Try again."

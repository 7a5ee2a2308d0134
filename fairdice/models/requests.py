"""Pydantic request models for FairDice API."""

from typing import List, Union

from pydantic import BaseModel, Field

from fairdice.config import settings

# A die is either a list of faces or the comma separated form "1,2,3"
DiceConfig = Union[List[int], str]


class DiceSetRequest(BaseModel):
    """Dice to estimate probabilities for."""
    dice: List[DiceConfig] = Field(max_length=settings.max_dice)


class GameCreateRequest(BaseModel):
    """Request to start a new game."""
    dice: List[DiceConfig] = Field(max_length=settings.max_dice)


class ChoiceRequest(BaseModel):
    """A raw menu choice, e.g. "0", "2", "X" or "?"."""
    choice: str

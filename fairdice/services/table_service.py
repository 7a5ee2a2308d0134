"""Probability table helpers shared by the HTTP routers."""

from typing import Iterable, Union

from fairdice.config import settings
from fairdice.models.dice import Dice, DiceSet
from fairdice.services.probability_service import ProbabilityEstimator
from fairdice.utils.table import render_probability_table


def build_dice_set(configs: Iterable[Union[list, str]]) -> DiceSet:
    """Build a DiceSet from face lists or comma separated strings.

    Raises:
        InvalidDiceError: If a die is malformed
        InsufficientDistributionsError: If there are too few dice
    """
    dice = [Dice.from_string(c) if isinstance(c, str) else Dice(c) for c in configs]
    return DiceSet(dice, min_dice=settings.min_dice)


def table_payload(dice: Iterable[Dice]) -> dict:
    """Estimate and render the probability table for a collection of dice.

    CPU bound; async callers run it in a worker thread.
    """
    dice = list(dice)
    table = ProbabilityEstimator().estimate_all(dice)
    return {**table.to_dict(), **render_probability_table(table, dice)}

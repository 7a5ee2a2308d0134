"""Pure formatting of probability tables for display."""

from typing import Sequence

from fairdice.constants import NOT_APPLICABLE
from fairdice.models.dice import Dice
from fairdice.models.probability import ProbabilityTable


def render_probability_table(table: ProbabilityTable, dice: Sequence[Dice]) -> dict:
    """Build a header row and labelled rows of formatted probabilities.

    Cell (i, j) is the chance that the die in row i beats the die in column j.
    """
    labels = [str(d) for d in dice]
    rows = []
    for i, label in enumerate(labels):
        cells = []
        for j in range(len(labels)):
            p = table.get(i, j)
            cells.append(NOT_APPLICABLE if p is None else f"{p:.{table.precision}f}")
        rows.append([label] + cells)
    return {"headers": ["User dice vs"] + labels, "rows": rows}

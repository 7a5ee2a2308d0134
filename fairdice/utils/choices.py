"""Validation of raw menu choices, independent of any input medium."""

from dataclasses import dataclass
from typing import Iterable, Literal, Optional

from fairdice.constants import EXIT_OPTION, HELP_OPTION
from fairdice.exceptions import InvalidInputError

ChoiceKind = Literal["option", "exit", "help"]


@dataclass(frozen=True)
class Choice:
    """A validated choice. ``value`` is set for numbered options only."""
    kind: ChoiceKind
    raw: str
    value: Optional[int] = None


def numbered_options(count: int) -> list[str]:
    """Options "0".."count-1"."""
    return [str(i) for i in range(count)]


def parse_choice(raw: str, valid_options: Iterable[str]) -> Choice:
    """
    Validate a raw choice against the offered options.

    Args:
        raw: Text as typed or sent by the player
        valid_options: Accepted options, e.g. ["0", "1", "X", "?"]

    Returns:
        The parsed Choice

    Raises:
        InvalidInputError: If raw is not one of valid_options
    """
    options = list(valid_options)
    text = raw.strip() if isinstance(raw, str) else ""
    if text.upper() == EXIT_OPTION and EXIT_OPTION in options:
        return Choice(kind="exit", raw=EXIT_OPTION)
    if text == HELP_OPTION and HELP_OPTION in options:
        return Choice(kind="help", raw=HELP_OPTION)
    if text not in options or text in (EXIT_OPTION, HELP_OPTION):
        raise InvalidInputError(raw, options)
    return Choice(kind="option", raw=text, value=int(text) if text.isdigit() else None)

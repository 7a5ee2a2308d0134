"""Dice models for FairDice."""

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from fairdice.exceptions import InsufficientDistributionsError, InvalidDiceError
from fairdice.utils.random_source import RandomSource, default_source


@dataclass(frozen=True)
class Dice:
    """A finite multiset of non-negative integer faces sampled by index."""

    faces: tuple

    def __init__(self, faces: Iterable[int]):
        if isinstance(faces, (str, bytes)):
            raise InvalidDiceError("faces must be a sequence of integers")
        faces = tuple(faces)
        if not faces:
            raise InvalidDiceError("a die needs at least one face")
        for face in faces:
            if isinstance(face, bool) or not isinstance(face, int) or face < 0:
                raise InvalidDiceError(
                    f"Invalid dice configuration {list(faces)}: only non-negative integers are allowed"
                )
        object.__setattr__(self, "faces", faces)

    @classmethod
    def from_string(cls, config: str) -> "Dice":
        """Parse a comma separated die such as ``"2,2,4,4,9,9"``."""
        faces = []
        for part in config.split(","):
            part = part.strip()
            if not part.isdigit():
                raise InvalidDiceError(f"Invalid dice configuration {config!r}: {part!r} is not a non-negative integer")
            faces.append(int(part))
        return cls(faces)

    def __len__(self) -> int:
        return len(self.faces)

    def sample(self, source: Optional[RandomSource] = None) -> int:
        """Return a face chosen uniformly by index."""
        source = source or default_source
        return self.faces[source.randbelow(len(self.faces))]

    def __str__(self) -> str:
        return "[" + ",".join(str(f) for f in self.faces) + "]"


DiscreteDistribution = Dice


class DiceSet:
    """Ordered collection of dice offered in a game.

    Indices are the identity of a die for the whole session.
    """

    def __init__(self, dice: Sequence[Dice], min_dice: int = 3):
        dice = tuple(d if isinstance(d, Dice) else Dice(d) for d in dice)
        if len(dice) < min_dice:
            raise InsufficientDistributionsError(
                f"At least {min_dice} dice configurations are required, got {len(dice)}"
            )
        self.dice = dice

    def __len__(self) -> int:
        return len(self.dice)

    def __getitem__(self, index: int) -> Dice:
        return self.dice[index]

    def __iter__(self):
        return iter(self.dice)

    def remaining(self, excluded: Iterable[int] = ()) -> list[tuple[int, Dice]]:
        """Return (index, die) pairs not in excluded."""
        taken = set(excluded)
        return [(i, d) for i, d in enumerate(self.dice) if i not in taken]

"""Probability table models for FairDice."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class ProbabilityEntry:
    """Estimated probability that die i rolls higher than die j."""
    i: int
    j: int
    wins: int
    ties: int
    trials: int
    probability: float  # wins / trials, rounded to the table precision

    def to_dict(self) -> dict:
        return {
            "i": self.i,
            "j": self.j,
            "probability": self.probability,
            "wins": self.wins,
            "ties": self.ties,
            "trials": self.trials,
        }


@dataclass
class ProbabilityTable:
    """Pairwise win probabilities for an ordered collection of dice.

    Self comparisons are never simulated; ``get(i, i)`` returns None.
    """
    size: int
    trials: int
    precision: int = 4
    entries: List[ProbabilityEntry] = field(default_factory=list)
    _index: Dict[Tuple[int, int], ProbabilityEntry] = field(default_factory=dict, repr=False)

    def add(self, entry: ProbabilityEntry):
        if entry.i == entry.j:
            raise ValueError("self comparison has no probability")
        self.entries.append(entry)
        self._index[(entry.i, entry.j)] = entry

    def get(self, i: int, j: int) -> Optional[float]:
        entry = self._index.get((i, j))
        return entry.probability if entry else None

    def entry(self, i: int, j: int) -> Optional[ProbabilityEntry]:
        return self._index.get((i, j))

    def matrix(self) -> List[List[Optional[float]]]:
        """n x n list of probabilities with None on the diagonal."""
        return [[self.get(i, j) for j in range(self.size)] for i in range(self.size)]

    def beats(self, i: int, j: int) -> bool:
        """True if die i wins against die j more often than it loses."""
        forward = self.get(i, j)
        backward = self.get(j, i)
        if forward is None or backward is None:
            return False
        return forward > backward

    def to_dict(self) -> dict:
        return {
            "size": self.size,
            "trials": self.trials,
            "precision": self.precision,
            "entries": [e.to_dict() for e in self.entries],
            "matrix": self.matrix(),
        }

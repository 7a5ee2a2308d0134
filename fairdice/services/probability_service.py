"""Probability estimation service for FairDice.

This module estimates how often one die beats another:
- Monte Carlo simulation of every ordered pair of dice
- Optional splitting of trials across worker threads
- Exact win probability by enumerating face pairs

P(i beats j) and P(j beats i) come from separate simulation runs. Ties count
toward neither side and are reported as their own count, so the two estimates
do not have to sum to 1. Nothing assumes the "beats" relation is transitive.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from fractions import Fraction
from typing import Optional, Sequence

from fairdice.config import settings
from fairdice.models.dice import Dice
from fairdice.models.probability import ProbabilityEntry, ProbabilityTable
from fairdice.utils.random_source import RandomSource, default_source

log = logging.getLogger(__name__)


def simulate_matches(a: Dice, b: Dice, trials: int, source: RandomSource) -> tuple[int, int]:
    """Roll a against b `trials` times.

    Returns:
        Tuple of (wins for a, ties)
    """
    wins = 0
    ties = 0
    for _ in range(trials):
        roll_a = a.sample(source)
        roll_b = b.sample(source)
        if roll_a > roll_b:
            wins += 1
        elif roll_a == roll_b:
            ties += 1
    return wins, ties


def exact_win_probability(a: Dice, b: Dice) -> Fraction:
    """Probability that a rolls strictly higher than b, by enumeration."""
    wins = sum(1 for fa in a.faces for fb in b.faces if fa > fb)
    return Fraction(wins, len(a.faces) * len(b.faces))


def _split_trials(trials: int, workers: int) -> list[int]:
    base, extra = divmod(trials, workers)
    return [base + (1 if k < extra else 0) for k in range(workers) if base or k < extra]


class ProbabilityEstimator:
    """Monte Carlo estimator of pairwise win probabilities."""

    def __init__(
        self,
        trials: Optional[int] = None,
        workers: Optional[int] = None,
        precision: Optional[int] = None,
        source: Optional[RandomSource] = None,
    ):
        self.trials = trials if trials is not None else settings.simulation_trials
        self.workers = workers if workers is not None else settings.simulation_workers
        self.precision = precision if precision is not None else settings.probability_precision
        self.source = source or default_source
        if self.trials < 1 or self.workers < 1:
            raise ValueError("trials and workers must be positive")

    def _count(self, a: Dice, b: Dice, executor: Optional[ThreadPoolExecutor]) -> tuple[int, int]:
        if executor is None:
            return simulate_matches(a, b, self.trials, self.source)
        futures = [
            executor.submit(simulate_matches, a, b, n, self.source.spawn())
            for n in _split_trials(self.trials, self.workers)
        ]
        wins = 0
        ties = 0
        for future in futures:
            w, t = future.result()
            wins += w
            ties += t
        return wins, ties

    def _entry(self, i: int, j: int, wins: int, ties: int) -> ProbabilityEntry:
        return ProbabilityEntry(
            i=i,
            j=j,
            wins=wins,
            ties=ties,
            trials=self.trials,
            probability=round(wins / self.trials, self.precision),
        )

    def estimate_pair(self, a: Dice, b: Dice, i: int = 0, j: int = 1) -> ProbabilityEntry:
        """Estimate P(a rolls higher than b)."""
        wins, ties = simulate_matches(a, b, self.trials, self.source)
        return self._entry(i, j, wins, ties)

    def estimate_all(self, dice: Sequence[Dice]) -> ProbabilityTable:
        """Estimate P(dice[i] beats dice[j]) for every ordered pair i != j."""
        dice = list(dice)
        table = ProbabilityTable(size=len(dice), trials=self.trials, precision=self.precision)
        executor = ThreadPoolExecutor(max_workers=self.workers) if self.workers > 1 else None
        try:
            for i, a in enumerate(dice):
                for j, b in enumerate(dice):
                    if i == j:
                        continue
                    wins, ties = self._count(a, b, executor)
                    table.add(self._entry(i, j, wins, ties))
        finally:
            if executor is not None:
                executor.shutdown()
        log.debug("estimated %d pairs with %d trials each", len(table.entries), self.trials)
        return table


ComparativeProbabilityEstimator = ProbabilityEstimator

"""Injectable random sources.

Production code draws from the operating system through ``secrets``. Tests
substitute a seeded source with the same interface so that games and
simulations are reproducible.
"""

import random
import secrets
import threading
from abc import ABC, abstractmethod


class RandomSource(ABC):
    """Interface shared by every random source."""

    def __init__(self):
        self._lock = threading.Lock()

    def randbelow(self, n: int) -> int:
        """Return a uniform int in [0, n)."""
        if n <= 0:
            raise ValueError("n must be positive")
        with self._lock:
            return self._randbelow(n)

    def token_bytes(self, nbytes: int) -> bytes:
        """Return nbytes random bytes."""
        with self._lock:
            return self._token_bytes(nbytes)

    @abstractmethod
    def _randbelow(self, n: int) -> int:
        pass

    @abstractmethod
    def _token_bytes(self, nbytes: int) -> bytes:
        pass

    @abstractmethod
    def spawn(self) -> "RandomSource":
        """Return an independent source for use by a single worker."""


class SecureRandomSource(RandomSource):
    """OS-backed cryptographically secure source. Never seeded."""

    def _randbelow(self, n: int) -> int:
        return secrets.randbelow(n)

    def _token_bytes(self, nbytes: int) -> bytes:
        return secrets.token_bytes(nbytes)

    def spawn(self) -> "SecureRandomSource":
        return SecureRandomSource()


class SeededRandomSource(RandomSource):
    """Deterministic source for tests and reproducible simulations.

    Not suitable for real commitments: anyone holding the seed can
    predict every key and value.
    """

    def __init__(self, seed: int):
        super().__init__()
        self.seed = seed
        self._rng = random.Random(seed)

    def _randbelow(self, n: int) -> int:
        return self._rng.randrange(n)

    def _token_bytes(self, nbytes: int) -> bytes:
        return self._rng.randbytes(nbytes)

    def spawn(self) -> "SeededRandomSource":
        # Child seeds come from this source so spawned workers are
        # reproducible but not correlated with each other.
        with self._lock:
            child_seed = self._rng.getrandbits(64)
        return SeededRandomSource(child_seed)


# Process-wide default
default_source = SecureRandomSource()

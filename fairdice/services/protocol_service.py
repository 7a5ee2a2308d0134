"""Fair random protocol for FairDice.

This module implements the two-phase commit/reveal round:
- Generate a fresh key and a secret value in [0, range)
- Publish an HMAC proof of the value while withholding key and value
- Reveal both after the counterparty has chosen, and verify the proof
"""

import logging
from typing import Optional

from fairdice.config import settings
from fairdice.exceptions import InvalidRangeError
from fairdice.models.commitment import Commitment, RevealResult
from fairdice.utils.commit_reveal import compute_proof, verify_proof
from fairdice.utils.random_source import RandomSource, default_source

log = logging.getLogger(__name__)

MIN_KEY_BYTES = 32


class FairRandomProtocol:
    """Commit/reveal rounds backed by an injectable random source."""

    def __init__(self, source: Optional[RandomSource] = None, key_bytes: Optional[int] = None):
        self.source = source or default_source
        self.key_bytes = key_bytes if key_bytes is not None else settings.key_bytes
        if self.key_bytes < MIN_KEY_BYTES:
            raise ValueError(f"key_bytes must be at least {MIN_KEY_BYTES} (256 bits), got {self.key_bytes}")

    def generate_key(self) -> bytes:
        """Return a fresh secret key of at least 256 bits."""
        return self.source.token_bytes(self.key_bytes)

    def generate_value(self, range_: int) -> int:
        """Return a uniform int in [0, range_).

        Raises:
            InvalidRangeError: If range_ is not a positive integer
        """
        if isinstance(range_, bool) or not isinstance(range_, int) or range_ <= 0:
            raise InvalidRangeError(f"range must be a positive integer, got {range_!r}")
        return self.source.randbelow(range_)

    @staticmethod
    def commit(value: int, key: bytes) -> str:
        """Compute the proof for a value under a key."""
        return compute_proof(value, key)

    @staticmethod
    def verify(value: int, key: bytes, proof: str) -> bool:
        """Return True if (value, key) matches proof. Never raises."""
        return verify_proof(value, key, proof)

    def create_commitment(self, range_: int) -> Commitment:
        """Run steps 1-3 of a round: key, value and proof."""
        key = self.generate_key()
        value = self.generate_value(range_)
        proof = self.commit(value, key)
        log.debug("committed to a value in [0, %d) with proof %s", range_, proof)
        return Commitment(_value=value, _key=key, proof=proof, range=range_)

    def reveal(self, commitment: Commitment) -> RevealResult:
        """Reveal a published commitment and check it against its proof."""
        value, key = commitment.reveal()
        verified = self.verify(value, key, commitment.proof)
        if not verified:
            log.warning("reveal does not match published proof %s", commitment.proof)
        return RevealResult(value=value, key=key, proof=commitment.proof, verified=verified)

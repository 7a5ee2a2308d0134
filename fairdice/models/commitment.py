"""Commitment models for the commit-reveal protocol."""

from dataclasses import dataclass, field

from fairdice.exceptions import GamePhaseError


@dataclass(frozen=True)
class PublishedCommitment:
    """What the counterparty sees before the reveal."""
    proof: str
    range: int

    def to_dict(self) -> dict:
        return {"proof": self.proof, "range": self.range}


@dataclass(frozen=True)
class RevealResult:
    """A reveal together with the outcome of checking it against the proof."""
    value: int
    key: bytes
    proof: str
    verified: bool

    @property
    def key_hex(self) -> str:
        return self.key.hex()

    def to_dict(self) -> dict:
        return {
            "value": self.value,
            "key": self.key_hex,
            "proof": self.proof,
            "verified": self.verified,
        }


@dataclass(eq=False)
class Commitment:
    """A secret value bound to a published proof.

    Lifecycle: created -> published -> revealed. The value and key are
    fixed at creation and only leave the object through ``reveal()``.
    """

    _value: int = field(repr=False)
    _key: bytes = field(repr=False)
    proof: str
    range: int
    published: bool = False
    revealed: bool = False

    def __setattr__(self, name, value):
        if name in ("_value", "_key", "proof", "range") and name in self.__dict__:
            raise AttributeError(f"{name} is fixed once the commitment exists")
        if name in ("published", "revealed") and self.__dict__.get(name) and not value:
            raise AttributeError(f"{name} cannot be undone")
        super().__setattr__(name, value)

    def publish(self) -> PublishedCommitment:
        """Mark the proof as shown to the counterparty and return it."""
        self.published = True
        return PublishedCommitment(proof=self.proof, range=self.range)

    def reveal(self) -> tuple[int, bytes]:
        """Release the value and key. Only allowed after publishing."""
        if not self.published:
            raise GamePhaseError("proof must be published before the value is revealed")
        self.revealed = True
        return self._value, self._key

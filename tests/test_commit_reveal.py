"""Unit tests for the commit-reveal protocol.

Tests cover:
- Proof format and determinism
- Verification of matching and mismatching reveals
- Avalanche behaviour under single-byte changes
- Key and value generation
- Commitment lifecycle
"""

import hashlib
import hmac
import secrets

import pytest
from fairdice.exceptions import GamePhaseError, InvalidRangeError
from fairdice.models.commitment import Commitment
from fairdice.services.protocol_service import FairRandomProtocol
from fairdice.utils.commit_reveal import PROOF_HEX_LENGTH, compute_proof, verify_proof
from fairdice.utils.random_source import SeededRandomSource


class TestComputeProof:
    """Test proof computation."""

    def test_matches_hmac_sha3_256(self):
        """Test proof is HMAC-SHA3-256 of the decimal value."""
        key = bytes(range(32))
        expected = hmac.new(key, b"42", hashlib.sha3_256).hexdigest()
        assert compute_proof(42, key) == expected

    def test_lowercase_hex_of_digest_size(self):
        """Test proof is 64 lowercase hex characters."""
        proof = compute_proof(7, secrets.token_bytes(32))
        assert len(proof) == PROOF_HEX_LENGTH == 64
        assert proof == proof.lower()
        int(proof, 16)

    def test_deterministic(self):
        """Test identical value and key give identical proofs."""
        key = secrets.token_bytes(32)
        assert compute_proof(3, key) == compute_proof(3, key)


class TestVerifyProof:
    """Test verification of reveals."""

    def test_round_trip(self):
        """Test every honest reveal verifies."""
        for value in range(50):
            key = secrets.token_bytes(32)
            assert verify_proof(value, key, compute_proof(value, key))

    def test_different_value_fails(self):
        """Test a proof made for another value does not verify."""
        key = secrets.token_bytes(32)
        proof = compute_proof(0, key)
        assert verify_proof(1, key, proof) is False

    def test_different_key_fails(self):
        """Test a proof made under another key does not verify."""
        proof = compute_proof(1, secrets.token_bytes(32))
        assert verify_proof(1, secrets.token_bytes(32), proof) is False

    def test_uppercase_proof_accepted(self):
        """Test hex case does not matter."""
        key = secrets.token_bytes(32)
        assert verify_proof(5, key, compute_proof(5, key).upper())

    def test_malformed_input_returns_false(self):
        """Test malformed proofs and keys never raise."""
        key = secrets.token_bytes(32)
        assert verify_proof(1, key, "not hex at all") is False
        assert verify_proof(1, key, "ü" * 64) is False
        assert verify_proof(1, key, None) is False
        assert verify_proof(1, "a string key", compute_proof(1, key)) is False


class TestAvalanche:
    """Test small input changes give unrelated proofs."""

    def test_single_key_byte_mutation(self):
        """Test flipping one key byte changes the proof."""
        matches = 0
        for _ in range(200):
            key = bytearray(secrets.token_bytes(32))
            value = secrets.randbelow(1000)
            original = compute_proof(value, bytes(key))
            pos = secrets.randbelow(len(key))
            key[pos] ^= 1 + secrets.randbelow(255)
            if compute_proof(value, bytes(key)) == original:
                matches += 1
        assert matches == 0

    def test_value_mutation(self):
        """Test changing the value changes the proof."""
        matches = 0
        for _ in range(200):
            key = secrets.token_bytes(32)
            value = secrets.randbelow(10**6)
            other = value + 1 + secrets.randbelow(9)
            if compute_proof(value, key) == compute_proof(other, key):
                matches += 1
        assert matches == 0


class TestFairRandomProtocol:
    """Test key and value generation."""

    def test_key_length(self):
        """Test keys are at least 256 bits."""
        key = FairRandomProtocol().generate_key()
        assert isinstance(key, bytes)
        assert len(key) >= 32

    def test_keys_are_fresh(self):
        """Test no two keys repeat."""
        protocol = FairRandomProtocol()
        keys = {protocol.generate_key() for _ in range(100)}
        assert len(keys) == 100

    def test_values_in_range(self):
        """Test values always fall in [0, r)."""
        protocol = FairRandomProtocol()
        for r in range(1, 20):
            for _ in range(200):
                assert 0 <= protocol.generate_value(r) < r

    def test_explicit_key_size(self):
        """Test a larger key size is honoured."""
        assert len(FairRandomProtocol(key_bytes=64).generate_key()) == 64

    @pytest.mark.parametrize("size", [0, 16, 31])
    def test_short_keys_rejected(self, size):
        """Test keys below 256 bits cannot be configured."""
        with pytest.raises(ValueError):
            FairRandomProtocol(key_bytes=size)

    def test_range_one(self):
        """Test a single-value range always returns 0."""
        assert FairRandomProtocol().generate_value(1) == 0

    def test_values_uniform_chi_square(self):
        """Test value frequencies pass a chi-square goodness-of-fit test."""
        protocol = FairRandomProtocol()
        r, n = 6, 60000
        counts = [0] * r
        for _ in range(n):
            counts[protocol.generate_value(r)] += 1
        expected = n / r
        chi2 = sum((c - expected) ** 2 / expected for c in counts)
        # 5 degrees of freedom; 25.7 is the p=0.0001 critical value
        assert chi2 < 25.7

    @pytest.mark.parametrize("bad", [0, -1, -100, 1.5, "6", True, None])
    def test_invalid_range(self, bad):
        """Test non-positive or non-integer ranges are rejected."""
        with pytest.raises(InvalidRangeError):
            FairRandomProtocol().generate_value(bad)

    def test_seeded_source_is_reproducible(self):
        """Test two protocols on the same seed commit identically."""
        a = FairRandomProtocol(SeededRandomSource(1234)).create_commitment(6)
        b = FairRandomProtocol(SeededRandomSource(1234)).create_commitment(6)
        assert a.proof == b.proof


class TestCommitmentLifecycle:
    """Test the created -> published -> revealed lifecycle."""

    def test_full_round(self):
        """Test commit 1, guess 0, reveal, verify; guesser does not move first."""
        key = secrets.token_bytes(32)
        proof = FairRandomProtocol.commit(1, key)
        commitment = Commitment(_value=1, _key=key, proof=proof, range=2)

        published = commitment.publish()
        assert published.proof == proof
        assert published.range == 2

        guess = 0
        result = FairRandomProtocol().reveal(commitment)
        assert result.value == 1
        assert result.key == key
        assert result.verified is True
        assert FairRandomProtocol.verify(1, key, proof) is True
        first_player = "user" if guess == result.value else "computer"
        assert first_player == "computer"

    def test_published_view_hides_secret(self):
        """Test publishing exposes only proof and range."""
        commitment = FairRandomProtocol().create_commitment(2)
        assert set(commitment.publish().to_dict()) == {"proof", "range"}
        assert "_value" not in repr(commitment)

    def test_reveal_before_publish_fails(self):
        """Test the value cannot be revealed before the proof is shown."""
        commitment = FairRandomProtocol().create_commitment(2)
        with pytest.raises(GamePhaseError):
            commitment.reveal()

    def test_fields_cannot_change(self):
        """Test value, key and proof are fixed after creation."""
        commitment = FairRandomProtocol().create_commitment(2)
        with pytest.raises(AttributeError):
            commitment._value = 0
        with pytest.raises(AttributeError):
            commitment.proof = "0" * 64

    def test_flags_cannot_revert(self):
        """Test published and revealed stay set once reached."""
        commitment = FairRandomProtocol().create_commitment(2)
        commitment.publish()
        commitment.reveal()
        with pytest.raises(AttributeError):
            commitment.published = False
        with pytest.raises(AttributeError):
            commitment.revealed = False
        assert commitment.published and commitment.revealed

    def test_mismatched_reveal_is_reported(self):
        """Test a reveal that does not match the proof verifies False."""
        key = secrets.token_bytes(32)
        commitment = Commitment(_value=1, _key=key, proof=compute_proof(0, key), range=2)
        commitment.publish()
        result = FairRandomProtocol().reveal(commitment)
        assert result.verified is False
        assert result.to_dict()["key"] == key.hex()

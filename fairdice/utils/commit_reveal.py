"""Cryptographic commit-reveal mechanism for fair game outcomes."""

import hashlib
import hmac

DIGEST = hashlib.sha3_256
PROOF_HEX_LENGTH = DIGEST().digest_size * 2


def compute_proof(value: int, key: bytes) -> str:
    """
    Create a cryptographic commitment to a value.

    Args:
        value: The secret value to commit to
        key: Secret HMAC key, revealed together with the value

    Returns:
        Lowercase hex HMAC-SHA3-256 of the decimal form of the value
    """
    return hmac.new(key, str(value).encode("utf-8"), DIGEST).hexdigest()


def verify_proof(value: int, key: bytes, proof: str) -> bool:
    """
    Check a revealed value and key against a published proof.

    Args:
        value: The revealed value
        key: The revealed key
        proof: The proof published before the reveal

    Returns:
        True if the proof matches, False otherwise
    """
    if not isinstance(proof, str) or not isinstance(key, (bytes, bytearray)):
        return False
    expected = compute_proof(value, bytes(key))
    return hmac.compare_digest(expected.encode("ascii"), proof.lower().encode("utf-8"))

"""Hash commitments over SHA-256.

A commitment binds a message to a random witness:

    commitment = SHA-256(witness || message')

where ``message'`` is ``SHA-256(message)`` when the message is longer than
one digest (32 bytes) and the message itself otherwise. Witness and message
are concatenated raw, without length prefixes.

Verification is pure: a mismatch returns False and never raises. The hex
variant additionally returns False for anything that is not valid hex.

Usage:
    from vvote_verifier.domain.primitives.hash_commitment import verify_hex

    if not verify_hex(commitment_hex, witness_hex, value_hex):
        ...
"""

import binascii
import hashlib
import hmac

DIGEST_SIZE = 32


def _prepare_message(message: bytes) -> bytes:
    if len(message) > DIGEST_SIZE:
        return hashlib.sha256(message).digest()
    return message


def commit(witness: bytes, message: bytes) -> bytes:
    """Compute the commitment for a witness and message.

    Args:
        witness: Random witness bytes.
        message: Committed message bytes.

    Returns:
        The 32 byte commitment.
    """
    digest = hashlib.sha256()
    digest.update(witness)
    digest.update(_prepare_message(message))
    return digest.digest()


def verify(commitment: bytes, witness: bytes, message: bytes) -> bool:
    """Check that a commitment opens to the given witness and message."""
    return hmac.compare_digest(commit(witness, message), commitment)


def verify_hex(commitment_hex: str, witness_hex: str, message_hex: str) -> bool:
    """Hex-string variant of :func:`verify`.

    Hex input is accepted in either case. Any value that is not valid hex
    makes the commitment fail to open.

    Args:
        commitment_hex: Hex encoded commitment.
        witness_hex: Hex encoded witness.
        message_hex: Hex encoded message.

    Returns:
        True when the commitment opens correctly.
    """
    try:
        commitment = bytes.fromhex(commitment_hex)
        witness = bytes.fromhex(witness_hex)
        message = bytes.fromhex(message_hex)
    except (ValueError, TypeError):
        return False
    return verify(commitment, witness, message)


def is_hex(value: str) -> bool:
    """Return True when ``value`` is a non-empty, even-length hex string."""
    if not value or len(value) % 2:
        return False
    try:
        binascii.unhexlify(value)
    except (binascii.Error, ValueError):
        return False
    return True

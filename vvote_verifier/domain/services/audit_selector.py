"""Fiat-Shamir audit selection.

The audit set of a printer must be unpredictable to the printer yet
reproducible by anyone. It is derived from the Fiat-Shamir value

    SHA-256(peer id || submission id || commit time || ciphers file || σ)

where σ is the bulletin board's joint signature on the submission. That
value seeds a Hash_DRBG (personalised with the peer id) that shuffles the
printer's serial numbers in canonical order; the first K are audited.
"""

import hashlib
from typing import Iterable

from vvote_verifier.domain.primitives.drbg_shuffle import DrbgRandom, shuffle
from vvote_verifier.domain.primitives.hash_drbg import (
    SECURITY_STRENGTH_BYTES,
    HashDRBG,
)
from vvote_verifier.domain.primitives.serial_numbers import sort_serial_numbers


def fiat_shamir_value(
    peer_id: str,
    submission_id: str,
    commit_time: str,
    ciphers_data: bytes,
    combined_signature: bytes,
) -> bytes:
    """Recompute the Fiat-Shamir value for one printer's audit."""
    digest = hashlib.sha256()
    digest.update(peer_id.encode("utf-8"))
    digest.update(submission_id.encode("utf-8"))
    digest.update(commit_time.encode("utf-8"))
    digest.update(ciphers_data)
    digest.update(combined_signature)
    return digest.digest()


def select_audit_serials(
    serial_numbers: Iterable[str],
    seed: bytes,
    peer_id: str,
    count: int,
) -> list[str]:
    """Reproduce the audit selection.

    Args:
        serial_numbers: The printer's generated serial numbers, any order.
        seed: The disclosed Fiat-Shamir value; its first 32 bytes are the
            DRBG entropy.
        peer_id: Printer peer id, the DRBG personalisation string.
        count: Number of ballots to audit.

    Returns:
        The serial numbers expected to be audited, in selection order.

    Raises:
        SerialNumberError: If a serial number is malformed.
        ValueError: If the seed is shorter than 32 bytes.
    """
    ordered = sort_serial_numbers(serial_numbers)
    drbg = HashDRBG(
        entropy=seed[:SECURITY_STRENGTH_BYTES],
        personalization=peer_id.encode("utf-8"),
    )
    shuffle(ordered, DrbgRandom(drbg))
    return ordered[:count]

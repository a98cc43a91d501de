"""Committed generic ballots published by PoD printers."""

import base64
import binascii
from dataclasses import dataclass

from vvote_verifier.domain.errors.malformed_input import CommittedBallotError
from vvote_verifier.domain.primitives.elgamal import ElGamalCipher


@dataclass(frozen=True)
class CommittedBallot:
    """A generic ballot as committed before audit selection.

    Attributes:
        serial_no: Ballot serial number.
        permutation: Base64 commitment to the ballot's permutation string.
        ciphers: Sorted re-encrypted candidate ciphers, races concatenated.
    """

    serial_no: str
    permutation: str
    ciphers: tuple[ElGamalCipher, ...]

    def __post_init__(self) -> None:
        if not self.serial_no:
            raise CommittedBallotError("serial_no cannot be empty")
        try:
            base64.b64decode(self.permutation, validate=True)
        except (binascii.Error, ValueError) as e:
            raise CommittedBallotError(
                "permutation is not valid base64", serial_no=self.serial_no
            ) from e

    @property
    def permutation_commitment(self) -> bytes:
        return base64.b64decode(self.permutation)

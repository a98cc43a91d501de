"""Combine mix server randomness into the values a printer used.

For each candidate slot a fresh SHA-256 accumulator is fed the raw
randomness value of every contributor at that slot, in the order the
contributions were published. The slot digest is the combined randomness.
"""

import hashlib
from dataclasses import dataclass

from vvote_verifier.domain.models.randomness import BallotGenerationRandomness


@dataclass(frozen=True)
class CombinedRandomness:
    """Combined randomness for one ballot.

    Attributes:
        serial_no: Ballot serial number.
        digests: One 32 byte digest per slot, left to right.
    """

    serial_no: str
    digests: tuple[bytes, ...]

    def __len__(self) -> int:
        return len(self.digests)

    @property
    def witness(self) -> bytes:
        """Digest of the final slot, the permutation commitment witness."""
        return self.digests[-1]


def combine_randomness(randomness: BallotGenerationRandomness) -> CombinedRandomness:
    """Chain every contributor's value per slot into one digest."""
    digests = []
    for slot in range(randomness.pair_count):
        accumulator = hashlib.sha256()
        for contribution in randomness.opened:
            accumulator.update(contribution.pairs[slot].randomness_bytes)
        digests.append(accumulator.digest())
    return CombinedRandomness(serial_no=randomness.serial_no, digests=tuple(digests))

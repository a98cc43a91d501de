"""Reconstruct a generic ballot from base ciphers and combined randomness.

Per race (LA, LC above the line, LC below the line) over its contiguous
slice of slots:

1. read slot ``i``'s digest as an unsigned big-endian integer ``r``
2. re-encrypt base cipher ``i`` with ``r``
3. tag the result with its index within the race and sort by the canonical
   cipher order
4. record the sorted indices, joined by "," and terminated by ":"

The sorted ciphers of the three races are concatenated; the permutation
strings are concatenated into the ballot's permutation.
"""

from dataclasses import dataclass
from typing import Sequence

from vvote_verifier.domain.primitives.elgamal import ECPoint, ElGamalCipher, reencrypt

RACE_SEPARATOR = ":"
PREFERENCE_SEPARATOR = ","


@dataclass(frozen=True)
class ReconstructedBallot:
    """Expected committed ballot content.

    Attributes:
        ciphers: Sorted re-encrypted ciphers, races concatenated.
        permutation: Permutation string, e.g. "1,0,2:0,1:2,0,1:".
    """

    ciphers: tuple[ElGamalCipher, ...]
    permutation: str

    @property
    def permutation_bytes(self) -> bytes:
        return self.permutation.encode("utf-8")


def reconstruct_ballot(
    base_ciphers: Sequence[ElGamalCipher],
    public_key: ECPoint,
    digests: Sequence[bytes],
    race_sizes: Sequence[int],
) -> ReconstructedBallot:
    """Re-encrypt and sort the base ciphers race by race.

    Args:
        base_ciphers: Base encrypted candidate ids, one per candidate.
        public_key: Election public key.
        digests: Combined randomness; at least one digest per candidate.
        race_sizes: Candidates per race, in race order.

    Raises:
        ValueError: If there are fewer base ciphers or digests than
            candidates.
    """
    total = sum(race_sizes)
    if len(base_ciphers) < total:
        raise ValueError(
            f"{len(base_ciphers)} base ciphers for {total} candidates"
        )
    if len(digests) < total:
        raise ValueError(f"{len(digests)} randomness values for {total} candidates")

    ciphers: list[ElGamalCipher] = []
    permutation: list[str] = []
    offset = 0
    for size in race_sizes:
        indexed = []
        for index in range(size):
            slot = offset + index
            r = int.from_bytes(digests[slot], "big")
            indexed.append((index, reencrypt(base_ciphers[slot], public_key, r)))
        indexed.sort(key=lambda item: item[1].sort_key())
        ciphers.extend(cipher for _, cipher in indexed)
        permutation.append(
            PREFERENCE_SEPARATOR.join(str(index) for index, _ in indexed)
            + RACE_SEPARATOR
        )
        offset += size
    return ReconstructedBallot(ciphers=tuple(ciphers), permutation="".join(permutation))

"""Bounded draws and shuffling driven by a Hash_DRBG.

The audit selection is defined in terms of the classic linear-congruential
era API: ``next(bits)``, ``nextInt(bound)`` and the Fisher-Yates shuffle
that swaps position ``i - 1`` with ``nextInt(i)`` for ``i`` from the list
size down to 2. The same algorithms are reproduced here bit for bit, with
every random byte taken from the DRBG.

Usage:
    rng = DrbgRandom(HashDRBG(entropy=seed[:32], personalization=peer_id))
    shuffle(serial_numbers, rng)
"""

from typing import MutableSequence, TypeVar

from vvote_verifier.domain.primitives.hash_drbg import HashDRBG

T = TypeVar("T")

_INT31_LIMIT = 1 << 31


class DrbgRandom:
    """Integer draws whose bytes come from a :class:`HashDRBG`."""

    def __init__(self, drbg: HashDRBG) -> None:
        self._drbg = drbg

    def next_bits(self, bits: int) -> int:
        """Draw ``bits`` (1-32) random bits.

        One DRBG request of ``ceil(bits / 8)`` bytes, read big-endian, with
        the surplus low bits shifted out.
        """
        if not 1 <= bits <= 32:
            raise ValueError(f"bits must be between 1 and 32, got {bits}")
        num_bytes = (bits + 7) // 8
        value = int.from_bytes(self._drbg.generate(num_bytes), "big")
        return value >> (num_bytes * 8 - bits)

    def next_int(self, bound: int) -> int:
        """Uniform integer in ``[0, bound)`` with rejection sampling."""
        if bound <= 0:
            raise ValueError(f"bound must be positive, got {bound}")
        r = self.next_bits(31)
        m = bound - 1
        if bound & m == 0:
            return (bound * r) >> 31
        u = r
        r = u % bound
        # reject draws from the incomplete final bucket
        while u - r + m >= _INT31_LIMIT:
            u = self.next_bits(31)
            r = u % bound
        return r


def shuffle(items: MutableSequence[T], rng: DrbgRandom) -> None:
    """Shuffle ``items`` in place."""
    for i in range(len(items), 1, -1):
        j = rng.next_int(i)
        items[i - 1], items[j] = items[j], items[i - 1]

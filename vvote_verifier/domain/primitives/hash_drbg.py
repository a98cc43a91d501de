"""NIST SP 800-90A Hash_DRBG over SHA-256.

Deterministic random bit generator used to reproduce the Fiat-Shamir audit
selection. Parameters are fixed by the ballot generation protocol:

- hash function SHA-256, security strength 256 bits
- seed length 440 bits (55 bytes)
- no nonce, no prediction resistance, no reseeding

Instantiate:
    seed_material = entropy || personalization
    V = Hash_df(seed_material, 440)
    C = Hash_df(0x00 || V, 440)
    reseed_counter = 1

Generate:
    output = Hashgen(V)
    V = (V + SHA-256(0x03 || V) + C + reseed_counter) mod 2^440
    reseed_counter += 1
"""

import hashlib

SEED_LENGTH_BITS = 440
SEED_LENGTH_BYTES = SEED_LENGTH_BITS // 8
SECURITY_STRENGTH_BYTES = 32
_SEED_MODULUS = 1 << SEED_LENGTH_BITS


def _hash_df(seed_material: bytes, length_bits: int) -> bytes:
    """Hash derivation function (SP 800-90A, 10.3.1)."""
    length_bytes = (length_bits + 7) // 8
    output = bytearray()
    counter = 1
    while len(output) < length_bytes:
        digest = hashlib.sha256()
        digest.update(bytes([counter]))
        digest.update(length_bits.to_bytes(4, "big"))
        digest.update(seed_material)
        output.extend(digest.digest())
        counter += 1
    return bytes(output[:length_bytes])


def _add(value: bytes, *terms: int) -> bytes:
    total = int.from_bytes(value, "big") + sum(terms)
    return (total % _SEED_MODULUS).to_bytes(SEED_LENGTH_BYTES, "big")


class HashDRBG:
    """SHA-256 Hash_DRBG instantiated from fixed entropy.

    Attributes:
        reseed_counter: Number of generate calls made so far, plus one.
    """

    def __init__(
        self, entropy: bytes, personalization: bytes = b"", nonce: bytes = b""
    ) -> None:
        """Instantiate the generator.

        Args:
            entropy: Entropy input; at least 32 bytes for 256-bit strength.
            personalization: Optional personalization string.
            nonce: Optional nonce, appended after the entropy.

        Raises:
            ValueError: If the entropy is shorter than the security strength.
        """
        if len(entropy) < SECURITY_STRENGTH_BYTES:
            raise ValueError(
                f"entropy must be at least {SECURITY_STRENGTH_BYTES} bytes, "
                f"got {len(entropy)}"
            )
        seed_material = entropy + nonce + personalization
        self._v = _hash_df(seed_material, SEED_LENGTH_BITS)
        self._c = _hash_df(b"\x00" + self._v, SEED_LENGTH_BITS)
        self.reseed_counter = 1

    def _hashgen(self, num_bytes: int) -> bytes:
        data = int.from_bytes(self._v, "big")
        output = bytearray()
        while len(output) < num_bytes:
            output.extend(
                hashlib.sha256(data.to_bytes(SEED_LENGTH_BYTES, "big")).digest()
            )
            data = (data + 1) % _SEED_MODULUS
        return bytes(output[:num_bytes])

    def generate(self, num_bytes: int) -> bytes:
        """Return ``num_bytes`` pseudorandom bytes and advance the state."""
        output = self._hashgen(num_bytes)
        h = hashlib.sha256(b"\x03" + self._v).digest()
        self._v = _add(
            self._v,
            int.from_bytes(h, "big"),
            int.from_bytes(self._c, "big"),
            self.reseed_counter,
        )
        self.reseed_counter += 1
        return output

"""Elliptic-curve ElGamal over NIST P-256.

Candidate identifiers are curve points. A cipher is the pair
``(gr, myr) = (r·G, m + r·Y)`` for plaintext point ``m``, public key ``Y``
and randomness ``r``. Re-encryption adds a fresh encryption of the identity:
``(gr + r'·G, myr + r'·Y)``.

Points are exchanged as JSON objects ``{"x": hex, "y": hex}`` and ordered by
the unsigned integer value of their uncompressed SEC1 encoding
(``04 || x || y``).
"""

from dataclasses import dataclass
from typing import Any, Mapping

from ecdsa import NIST256p
from ecdsa.ellipticcurve import INFINITY, Point, PointJacobi

from vvote_verifier.domain.errors.malformed_input import PointEncodingError

CURVE_NAME = "P-256"
CURVE = NIST256p.curve
GENERATOR: PointJacobi = NIST256p.generator
ORDER: int = NIST256p.order
COORDINATE_SIZE = 32

ECPoint = PointJacobi | Point


def is_infinity(point: ECPoint) -> bool:
    """Return True for the point at infinity."""
    return point == INFINITY


def point_from_coordinates(x: int, y: int) -> PointJacobi:
    """Build a curve point from affine coordinates.

    Raises:
        PointEncodingError: If (x, y) is not a point on P-256.
    """
    p = CURVE.p()
    if not (0 <= x < p and 0 <= y < p) or not CURVE.contains_point(x, y):
        raise PointEncodingError(f"({x:x}, {y:x}) is not a point on {CURVE_NAME}")
    return PointJacobi.from_affine(Point(CURVE, x, y))


def point_from_json(data: Mapping[str, Any]) -> PointJacobi:
    """Decode a ``{"x": hex, "y": hex}`` JSON point.

    Raises:
        PointEncodingError: If a coordinate is missing, not hex, or the point
            is not on the curve.
    """
    try:
        x = int(data["x"], 16)
        y = int(data["y"], 16)
    except (KeyError, TypeError, ValueError) as e:
        raise PointEncodingError(f"invalid point coordinates: {e}") from e
    return point_from_coordinates(x, y)


def point_to_json(point: ECPoint) -> dict[str, str]:
    """Encode a point as ``{"x": hex, "y": hex}``."""
    return {"x": format(point.x(), "x"), "y": format(point.y(), "x")}


def encode_point(point: ECPoint) -> bytes:
    """Uncompressed SEC1 encoding; the point at infinity encodes as ``00``."""
    if is_infinity(point):
        return b"\x00"
    return (
        b"\x04"
        + point.x().to_bytes(COORDINATE_SIZE, "big")
        + point.y().to_bytes(COORDINATE_SIZE, "big")
    )


@dataclass(frozen=True, eq=False)
class ElGamalCipher:
    """An EC ElGamal cipher.

    Equality and hashing use the point encodings, so ciphers built from
    different internal point representations compare correctly.

    Attributes:
        gr: The ephemeral component ``r·G``.
        myr: The masked message ``m + r·Y``.
    """

    gr: ECPoint
    myr: ECPoint

    def encoded(self) -> bytes:
        return encode_point(self.gr) + encode_point(self.myr)

    def sort_key(self) -> tuple[int, int]:
        """Canonical order: unsigned value of ``gr``, then of ``myr``."""
        return (
            int.from_bytes(encode_point(self.gr), "big"),
            int.from_bytes(encode_point(self.myr), "big"),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ElGamalCipher):
            return NotImplemented
        return self.encoded() == other.encoded()

    def __hash__(self) -> int:
        return hash(self.encoded())

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "ElGamalCipher":
        """Decode ``{"gr": point, "myr": point}``."""
        try:
            gr, myr = data["gr"], data["myr"]
        except (KeyError, TypeError) as e:
            raise PointEncodingError(f"cipher is missing a component: {e}") from e
        return cls(gr=point_from_json(gr), myr=point_from_json(myr))

    def to_json(self) -> dict[str, dict[str, str]]:
        return {"gr": point_to_json(self.gr), "myr": point_to_json(self.myr)}


def encrypt(message: ECPoint, public_key: ECPoint, randomness: int) -> ElGamalCipher:
    """Encrypt a plaintext point under ``public_key`` with fixed randomness."""
    return ElGamalCipher(
        gr=GENERATOR * randomness,
        myr=public_key * randomness + message,
    )


def reencrypt(
    cipher: ElGamalCipher, public_key: ECPoint, randomness: int
) -> ElGamalCipher:
    """Re-randomise a cipher without changing its plaintext."""
    return ElGamalCipher(
        gr=cipher.gr + GENERATOR * randomness,
        myr=cipher.myr + public_key * randomness,
    )


def decrypt(cipher: ElGamalCipher, private_key: int) -> ECPoint:
    """Recover the plaintext point: ``myr - x·gr``."""
    return cipher.myr + (-(cipher.gr * private_key))

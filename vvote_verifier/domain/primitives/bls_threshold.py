"""Threshold BLS signatures on BLS12-381.

The web bulletin board peers hold Shamir shares of a signing key. Each peer
signs with its share; any ``threshold`` partial signatures are combined by
Lagrange interpolation at zero into the board's signature:

    σ = Σ λ_i · σ_i,    λ_i = Π_{j≠i} α_j / (α_j - α_i)  (mod r)

where ``α_i = index + 1`` is the evaluation point of the share with 0-based
``index``. Signatures and shares live in G1 (48-byte compressed encoding);
public keys live in G2 (96-byte compressed encoding).

Usage:
    combiner = ThresholdCombiner(number_of_nodes=5, threshold=4)
    for index, share in shares:
        combiner.add_share(share, index)
    signature = combiner.combine()
"""

import hashlib
from typing import Any

from py_ecc.bls.g2_primitives import (
    G1_to_pubkey,
    G2_to_signature,
    pubkey_to_G1,
    signature_to_G2,
    subgroup_check,
)
from py_ecc.bls.hash_to_curve import hash_to_G1
from py_ecc.optimized_bls12_381 import G2, Z1, add, curve_order, multiply, pairing

from vvote_verifier.domain.errors.bls import InsufficientSharesError, InvalidShareError
from vvote_verifier.domain.errors.configuration import ConfigurationError

G1_ENCODED_SIZE = 48
G2_ENCODED_SIZE = 96
DEFAULT_NUMBER_OF_NODES = 5
DEFAULT_THRESHOLD = 4
SIGNATURE_DST = b"BLS_SIG_BLS12381G1_XMD:SHA-256_SSWU_RO_NUL_"

# py_ecc optimized points are (x, y, z) tuples of field elements
G1Point = tuple[Any, Any, Any]
G2Point = tuple[Any, Any, Any]


def decode_g1(data: bytes) -> G1Point:
    """Decode a compressed G1 point, checking subgroup membership.

    Raises:
        ValueError: If the bytes are not a valid G1 point.
    """
    if len(data) != G1_ENCODED_SIZE:
        raise ValueError(f"expected {G1_ENCODED_SIZE} bytes, got {len(data)}")
    point = pubkey_to_G1(data)
    if not subgroup_check(point):
        raise ValueError("point is not in the G1 subgroup")
    return point


def encode_g1(point: G1Point) -> bytes:
    return bytes(G1_to_pubkey(point))


def decode_g2(data: bytes) -> G2Point:
    """Decode a compressed G2 point, checking subgroup membership."""
    if len(data) != G2_ENCODED_SIZE:
        raise ValueError(f"expected {G2_ENCODED_SIZE} bytes, got {len(data)}")
    point = signature_to_G2(data)
    if not subgroup_check(point):
        raise ValueError("point is not in the G2 subgroup")
    return point


def encode_g2(point: G2Point) -> bytes:
    return bytes(G2_to_signature(point))


def hash_message_to_g1(message: bytes) -> G1Point:
    return hash_to_G1(message, SIGNATURE_DST, hashlib.sha256)


def lagrange_weights(indices: list[int]) -> dict[int, int]:
    """Lagrange coefficients at zero for shares with the given 0-based indices.

    Args:
        indices: Distinct 0-based share indices.

    Returns:
        Mapping of index to its weight modulo the group order.
    """
    alphas = {index: index + 1 for index in indices}
    weights: dict[int, int] = {}
    for i, alpha_i in alphas.items():
        numerator = 1
        denominator = 1
        for j, alpha_j in alphas.items():
            if j == i:
                continue
            numerator = numerator * alpha_j % curve_order
            denominator = denominator * (alpha_j - alpha_i) % curve_order
        weights[i] = numerator * pow(denominator, -1, curve_order) % curve_order
    return weights


class ThresholdCombiner:
    """Collects partial signatures and combines them once enough are present.

    Attributes:
        number_of_nodes: Total number of signing peers.
        threshold: Minimum number of shares needed to combine.
    """

    def __init__(
        self,
        number_of_nodes: int = DEFAULT_NUMBER_OF_NODES,
        threshold: int = DEFAULT_THRESHOLD,
    ) -> None:
        """Create a combiner.

        Raises:
            ConfigurationError: If the threshold is not between 1 and the
                number of nodes.
        """
        if number_of_nodes < 1:
            raise ConfigurationError(
                "number_of_nodes", f"must be positive, got {number_of_nodes}"
            )
        if not 1 <= threshold <= number_of_nodes:
            raise ConfigurationError(
                "threshold",
                f"must be between 1 and {number_of_nodes}, got {threshold}",
            )
        self.number_of_nodes = number_of_nodes
        self.threshold = threshold
        self._shares: dict[int, G1Point] = {}

    @property
    def share_count(self) -> int:
        return len(self._shares)

    def add_share(self, share: bytes, index: int) -> None:
        """Add the partial signature of the peer at ``index``.

        Raises:
            InvalidShareError: If the index is out of range or already used,
                or the share does not decode to a G1 point.
        """
        if not 0 <= index < self.number_of_nodes:
            raise InvalidShareError(
                index, f"index outside [0, {self.number_of_nodes})"
            )
        if index in self._shares:
            raise InvalidShareError(index, "duplicate share index")
        try:
            point = decode_g1(share)
        except ValueError as e:
            raise InvalidShareError(index, str(e)) from e
        self._shares[index] = point

    def combine(self) -> bytes:
        """Interpolate the shares into the compressed combined signature.

        Raises:
            InsufficientSharesError: If fewer than ``threshold`` shares were
                added.
        """
        if len(self._shares) < self.threshold:
            raise InsufficientSharesError(len(self._shares), self.threshold)
        weights = lagrange_weights(sorted(self._shares))
        combined = Z1
        for index, point in sorted(self._shares.items()):
            combined = add(combined, multiply(point, weights[index]))
        return encode_g1(combined)


def verify_signature(message: bytes, signature: bytes, public_key: bytes) -> bool:
    """Check ``e(σ, g2) == e(H(m), pk)`` for a G1 signature and G2 key.

    Malformed signature or key bytes verify as False.
    """
    try:
        sigma = decode_g1(signature)
        pk = decode_g2(public_key)
    except ValueError:
        return False
    return pairing(G2, sigma) == pairing(pk, hash_message_to_g1(message))

"""Election cryptographic configuration.

Holds the election public key and the candidate identifier tables the
printers start from. The active curve is a value on this object; the
verifier only supports NIST P-256.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from vvote_verifier.domain.errors.configuration import (
    ConfigurationError,
    CurveMismatchError,
)
from vvote_verifier.domain.errors.malformed_input import PointEncodingError
from vvote_verifier.domain.primitives.elgamal import (
    CURVE_NAME,
    ECPoint,
    ElGamalCipher,
    point_from_json,
)


@dataclass(frozen=True, eq=False)
class ElectionConfig:
    """Election key and candidate identifiers.

    Attributes:
        curve_name: Name of the election curve; must be "P-256".
        public_key: Election ElGamal public key ``Y``.
        base_encrypted_ids: Candidate ids encrypted with randomness 1.
        plaintext_ids: Candidate id points.
    """

    curve_name: str
    public_key: ECPoint
    base_encrypted_ids: tuple[ElGamalCipher, ...]
    plaintext_ids: tuple[ECPoint, ...] = ()

    def __post_init__(self) -> None:
        if self.curve_name != CURVE_NAME:
            raise CurveMismatchError(expected=CURVE_NAME, actual=self.curve_name)

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> ElectionConfig:
        """Parse the election configuration JSON object.

        Expected keys: ``curve``, ``publicKey``, ``baseEncryptedIds`` and
        optionally ``plaintextIds``.

        Raises:
            CurveMismatchError: If the curve is not P-256.
            ConfigurationError: If a key is missing or a point is invalid.
        """
        curve_name = data.get("curve", CURVE_NAME)
        if curve_name != CURVE_NAME:
            raise CurveMismatchError(expected=CURVE_NAME, actual=str(curve_name))
        try:
            public_key = point_from_json(data["publicKey"])
            base_ids = tuple(
                ElGamalCipher.from_json(cipher) for cipher in data["baseEncryptedIds"]
            )
            plaintext_ids = tuple(
                point_from_json(point) for point in data.get("plaintextIds", [])
            )
        except KeyError as e:
            raise ConfigurationError(str(e.args[0]), "missing") from e
        except (PointEncodingError, TypeError) as e:
            raise ConfigurationError("election", str(e)) from e
        return cls(
            curve_name=curve_name,
            public_key=public_key,
            base_encrypted_ids=base_ids,
            plaintext_ids=plaintext_ids,
        )

"""Bulletin board peer certificates.

The certificates file maps each bulletin board peer to the sequence number of
its key share. Only entries whose key ends in ``_SigningSK2`` belong to
signing peers; the ``WBB`` entry carries the board's joint public key.

Example:
    {
        "jksPath": "./keys.jks",
        "WBB": {"pubKeyEntry": {"publicKey": "...", "g": "..."}},
        "Peer1_SigningSK2": {
            "pubKeyEntry": {
                "publicKey": "...", "g": "...",
                "partialPublicKey": "...", "sequenceNo": 0
            }
        }
    }
"""

from dataclasses import dataclass, field
from typing import Any, Mapping

from vvote_verifier.domain.errors.bls import UnknownPeerError
from vvote_verifier.domain.errors.malformed_input import MalformedInputError

SIGNING_KEY_SUFFIX = "_SigningSK2"
WBB_CERT = "WBB"
JKS_PATH = "jksPath"
PUBLIC_KEY_ENTRY = "pubKeyEntry"


@dataclass(frozen=True)
class PeerCertificate:
    """Certificate entry of one signing peer.

    Attributes:
        peer_id: Peer id (certificate key without the signing suffix).
        sequence_number: 0-based position of the peer's key share.
        public_key: Base64 joint public key, when present.
        partial_public_key: Base64 public key of the peer's share, when
            present.
    """

    peer_id: str
    sequence_number: int
    public_key: str | None = None
    partial_public_key: str | None = None


@dataclass(frozen=True)
class CertificatesFile:
    """Peer id to key share sequence number mapping.

    Attributes:
        peers: Signing peer certificates keyed by peer id.
        wbb_public_key: Base64 joint public key of the board, when present.
        jks_path: Key store path recorded in the file, when present.
    """

    peers: Mapping[str, PeerCertificate] = field(default_factory=dict)
    wbb_public_key: str | None = None
    jks_path: str | None = None

    def sequence_number_for(self, peer_id: str) -> int:
        """Return the sequence number of ``peer_id``.

        Raises:
            UnknownPeerError: If the peer has no certificate.
        """
        try:
            return self.peers[peer_id].sequence_number
        except KeyError:
            raise UnknownPeerError(peer_id) from None

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "CertificatesFile":
        """Parse the certificates JSON object.

        Raises:
            MalformedInputError: If a signing peer entry has no public key
                entry or sequence number.
        """
        peers: dict[str, PeerCertificate] = {}
        wbb_public_key = None
        for key, entry in data.items():
            if key == JKS_PATH:
                continue
            if not isinstance(entry, Mapping) or not isinstance(
                entry.get(PUBLIC_KEY_ENTRY), Mapping
            ):
                raise MalformedInputError(
                    "Certificate", f"entry '{key}' has no {PUBLIC_KEY_ENTRY}"
                )
            key_entry = entry[PUBLIC_KEY_ENTRY]
            if key == WBB_CERT:
                wbb_public_key = key_entry.get("publicKey")
                continue
            if not key.endswith(SIGNING_KEY_SUFFIX):
                continue
            sequence_number = key_entry.get("sequenceNo")
            if isinstance(sequence_number, bool) or not isinstance(
                sequence_number, int
            ):
                raise MalformedInputError(
                    "Certificate", f"entry '{key}' has no integer sequenceNo"
                )
            peer_id = key[: -len(SIGNING_KEY_SUFFIX)]
            peers[peer_id] = PeerCertificate(
                peer_id=peer_id,
                sequence_number=sequence_number,
                public_key=key_entry.get("publicKey"),
                partial_public_key=key_entry.get("partialPublicKey"),
            )
        return cls(
            peers=peers,
            wbb_public_key=wbb_public_key,
            jks_path=data.get(JKS_PATH),
        )

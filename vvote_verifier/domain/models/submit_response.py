"""Bulletin board responses to a printer's audit submission.

When a printer submits its audit data, the bulletin board peers each sign the
submission with their share of the threshold key. The printer publishes the
response, including the partial signatures and the Fiat-Shamir value it
derived from the combined signature.
"""

import base64
import binascii
from dataclasses import dataclass

from vvote_verifier.domain.errors.malformed_input import SubmitResponseError


@dataclass(frozen=True)
class WBBSignature:
    """One bulletin board peer's partial signature.

    Attributes:
        wbb_id: Peer id of the signer.
        wbb_sig: Base64 partial signature.
        serial_no: Serial number or submission the peer signed.
        commit_time: Commit time the peer signed.
        message_type: Type of the signed message.
        used_as_part_of_threshold: True when the published record carries a
            ``valid`` flag; only such signatures are combined.
        valid: The published ``valid`` flag, True when absent.
    """

    wbb_id: str
    wbb_sig: str
    serial_no: str
    commit_time: str
    message_type: str
    used_as_part_of_threshold: bool
    valid: bool = True

    def __post_init__(self) -> None:
        if not self.wbb_id:
            raise SubmitResponseError("WBBID cannot be empty")
        try:
            base64.b64decode(self.wbb_sig, validate=True)
        except (binascii.Error, ValueError) as e:
            raise SubmitResponseError(
                f"signature of {self.wbb_id} is not valid base64"
            ) from e

    @property
    def signature_bytes(self) -> bytes:
        return base64.b64decode(self.wbb_sig)


@dataclass(frozen=True)
class BallotSubmitResponse:
    """The published response to a printer's ballot audit submission.

    Attributes:
        submission_id: Board submission id.
        ballot_file: Name of the submitted ballot file.
        peer_id: Printer peer id.
        fiat_shamir: Base64 Fiat-Shamir value disclosed by the printer.
        wbb_signatures: Partial signatures from the board peers.
    """

    submission_id: str
    ballot_file: str
    peer_id: str
    fiat_shamir: str
    wbb_signatures: tuple[WBBSignature, ...]

    def __post_init__(self) -> None:
        if not self.submission_id:
            raise SubmitResponseError("submissionID cannot be empty")
        if not self.peer_id:
            raise SubmitResponseError("peerID cannot be empty")
        try:
            base64.b64decode(self.fiat_shamir, validate=True)
        except (binascii.Error, ValueError) as e:
            raise SubmitResponseError("fiatShamir is not valid base64") from e

    @property
    def fiat_shamir_bytes(self) -> bytes:
        return base64.b64decode(self.fiat_shamir)

    def threshold_signatures(self) -> tuple[WBBSignature, ...]:
        """Signatures flagged for use in the threshold combination."""
        return tuple(
            signature
            for signature in self.wbb_signatures
            if signature.used_as_part_of_threshold
        )

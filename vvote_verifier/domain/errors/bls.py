"""Threshold BLS signature errors.

Provides exception classes for failures while combining the partial
signatures produced by the web bulletin board peers. These are structural
errors: they are fatal for the printer commitment whose signature could not
be rebuilt.
"""

from vvote_verifier.domain.exceptions import VerifierError


class BLSSignatureError(VerifierError):
    """Base class for threshold signature errors."""

    pass


class InvalidShareError(BLSSignatureError):
    """Raised when a signature share is rejected by the combiner.

    Attributes:
        index: Share index that was rejected.
        reason: Why the share was rejected.
    """

    def __init__(self, index: int, reason: str) -> None:
        self.index = index
        self.reason = reason
        super().__init__(f"Signature share {index} rejected: {reason}")


class InsufficientSharesError(BLSSignatureError):
    """Raised when fewer shares than the threshold are available.

    Attributes:
        available: Number of shares added to the combiner.
        threshold: Number of shares required.
    """

    def __init__(self, available: int, threshold: int) -> None:
        self.available = available
        self.threshold = threshold
        super().__init__(
            f"Insufficient signature shares: {available} available, "
            f"{threshold} required"
        )


class UnknownPeerError(BLSSignatureError):
    """Raised when a peer id has no sequence number in the certificates.

    Attributes:
        peer_id: The unknown peer.
    """

    def __init__(self, peer_id: str) -> None:
        self.peer_id = peer_id
        super().__init__(f"No certificate sequence number for peer '{peer_id}'")

"""Malformed input errors for published commitment records.

A published record that cannot be parsed into the typed model raises one of
these errors at construction time. The error is fatal for that record only:
data loaders report the record and exclude it, and the verification run
continues with the remaining data.
"""

from vvote_verifier.domain.exceptions import VerifierError


class MalformedInputError(VerifierError):
    """Base class for records that fail structural validation.

    Attributes:
        record: Kind of record that failed (e.g. "RandomnessPair").
        reason: What was wrong with it.
    """

    def __init__(self, record: str, reason: str) -> None:
        """Initialize malformed input error.

        Args:
            record: Kind of record that failed.
            reason: What was wrong with it.
        """
        self.record = record
        self.reason = reason
        super().__init__(f"Malformed {record}: {reason}")


class CommitIdentifierError(MalformedInputError):
    """Raised when a commit identifier is missing one of its parts."""

    def __init__(self, reason: str) -> None:
        super().__init__("CommitIdentifier", reason)


class RandomnessPairError(MalformedInputError):
    """Raised when a witness/randomness pair is short or not hex encoded."""

    def __init__(self, reason: str) -> None:
        super().__init__("RandomnessPair", reason)


class BallotRandomnessError(MalformedInputError):
    """Raised when the opened randomness for one ballot is inconsistent.

    Attributes:
        serial_no: Serial number of the affected ballot, when known.
    """

    def __init__(self, reason: str, serial_no: str | None = None) -> None:
        self.serial_no = serial_no
        super().__init__("BallotGenerationRandomness", reason)


class CommitMessageError(MalformedInputError):
    """Raised when a file commit message is missing fields or inconsistent."""

    def __init__(self, reason: str) -> None:
        super().__init__("FileMessage", reason)


class CommittedBallotError(MalformedInputError):
    """Raised when a committed generic ballot cannot be decoded.

    Attributes:
        serial_no: Serial number of the ballot, when known.
    """

    def __init__(self, reason: str, serial_no: str | None = None) -> None:
        self.serial_no = serial_no
        super().__init__("CommittedBallot", reason)


class SubmitResponseError(MalformedInputError):
    """Raised when a ballot submit response or its signatures are malformed."""

    def __init__(self, reason: str) -> None:
        super().__init__("BallotSubmitResponse", reason)


class FinalCommitmentError(MalformedInputError):
    """Raised when commit files cannot form a consistent final commitment."""

    def __init__(self, reason: str) -> None:
        super().__init__("FinalCommitment", reason)


class SerialNumberError(MalformedInputError):
    """Raised when a serial number is not of the form <device>:<n>.

    Attributes:
        serial_no: The offending serial number.
    """

    def __init__(self, serial_no: str) -> None:
        self.serial_no = serial_no
        super().__init__(
            "SerialNumber", f"'{serial_no}' is not of the form <device>:<number>"
        )


class PointEncodingError(MalformedInputError):
    """Raised when an elliptic curve point is not on the expected curve."""

    def __init__(self, reason: str) -> None:
        super().__init__("ECPoint", reason)


class CommitFileError(MalformedInputError):
    """Raised when a commit file has the wrong kind of name for its role."""

    def __init__(self, reason: str) -> None:
        super().__init__("CommitFile", reason)

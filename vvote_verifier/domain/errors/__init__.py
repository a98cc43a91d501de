"""Domain errors for the ballot generation verifier.

Provides specific exception classes for different failure scenarios.
All exceptions inherit from VerifierError.
"""

from vvote_verifier.domain.errors.bls import (
    BLSSignatureError,
    InsufficientSharesError,
    InvalidShareError,
    UnknownPeerError,
)
from vvote_verifier.domain.errors.configuration import (
    ConfigurationError,
    CurveMismatchError,
)
from vvote_verifier.domain.errors.malformed_input import (
    BallotRandomnessError,
    CommitFileError,
    CommitIdentifierError,
    CommitMessageError,
    CommittedBallotError,
    FinalCommitmentError,
    MalformedInputError,
    PointEncodingError,
    RandomnessPairError,
    SerialNumberError,
    SubmitResponseError,
)

__all__: list[str] = [
    "BLSSignatureError",
    "BallotRandomnessError",
    "CommitFileError",
    "CommitIdentifierError",
    "CommitMessageError",
    "CommittedBallotError",
    "ConfigurationError",
    "CurveMismatchError",
    "FinalCommitmentError",
    "InsufficientSharesError",
    "InvalidShareError",
    "MalformedInputError",
    "PointEncodingError",
    "RandomnessPairError",
    "SerialNumberError",
    "SubmitResponseError",
    "UnknownPeerError",
]

"""Per-printer bundles of committed ballot generation data."""

from dataclasses import dataclass, field
from typing import Mapping

from vvote_verifier.domain.models.commit_identifier import CommitIdentifier
from vvote_verifier.domain.models.commit_messages import FileMessage
from vvote_verifier.domain.models.committed_ballot import CommittedBallot
from vvote_verifier.domain.models.randomness import BallotGenerationRandomness
from vvote_verifier.domain.models.submit_response import BallotSubmitResponse


@dataclass(frozen=True, eq=False)
class BallotGenCommit:
    """Generic ballots committed by one printer.

    Attributes:
        identifier: Commitment and printer the ballots belong to.
        message: File message announcing the ciphers file.
        ballots: Committed ballots keyed by serial number.
        ciphers_data: Raw bytes of the ciphers data file, hashed into the
            Fiat-Shamir challenge.
    """

    identifier: CommitIdentifier
    message: FileMessage
    ballots: Mapping[str, CommittedBallot] = field(default_factory=dict)
    ciphers_data: bytes = b""

    @property
    def serial_numbers(self) -> list[str]:
        return list(self.ballots)


@dataclass(frozen=True, eq=False)
class BallotAuditCommit:
    """Opened audit data published by one printer.

    Attributes:
        identifier: Commitment and printer the audit belongs to.
        message: File message announcing the audit file.
        response: Bulletin board response to the audit submission.
        randomness: Opened randomness keyed by audited serial number.
    """

    identifier: CommitIdentifier
    message: FileMessage
    response: BallotSubmitResponse
    randomness: Mapping[str, BallotGenerationRandomness] = field(
        default_factory=dict
    )

    @property
    def serial_numbers(self) -> list[str]:
        return list(self.randomness)

"""Domain models for the published ballot generation data."""

from vvote_verifier.domain.models.certificates import CertificatesFile, PeerCertificate
from vvote_verifier.domain.models.commit_files import (
    CommitAttachment,
    CommitFile,
    CommitFileMessage,
    CommitSignature,
    FinalCommitment,
    FinalCommitmentBuilder,
)
from vvote_verifier.domain.models.commit_identifier import CommitIdentifier
from vvote_verifier.domain.models.commit_messages import (
    FileMessage,
    MessageType,
    MixRandomCommitMessage,
)
from vvote_verifier.domain.models.committed_ballot import CommittedBallot
from vvote_verifier.domain.models.mix_commits import MixCommitData, MixRandomCommit
from vvote_verifier.domain.models.printer_commits import (
    BallotAuditCommit,
    BallotGenCommit,
)
from vvote_verifier.domain.models.randomness import (
    BallotGenerationRandomness,
    OpenedRandomnessCommitments,
    RandomnessPair,
)
from vvote_verifier.domain.models.submit_response import (
    BallotSubmitResponse,
    WBBSignature,
)
from vvote_verifier.domain.models.verification_report import (
    CheckName,
    Finding,
    VerificationReport,
)

__all__: list[str] = [
    "BallotAuditCommit",
    "BallotGenCommit",
    "BallotGenerationRandomness",
    "BallotSubmitResponse",
    "CertificatesFile",
    "CheckName",
    "CommitAttachment",
    "CommitFile",
    "CommitFileMessage",
    "CommitIdentifier",
    "CommitSignature",
    "CommittedBallot",
    "FileMessage",
    "FinalCommitment",
    "FinalCommitmentBuilder",
    "Finding",
    "MessageType",
    "MixCommitData",
    "MixRandomCommit",
    "MixRandomCommitMessage",
    "OpenedRandomnessCommitments",
    "PeerCertificate",
    "RandomnessPair",
    "VerificationReport",
    "WBBSignature",
]

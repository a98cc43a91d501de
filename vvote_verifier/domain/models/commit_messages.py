"""File commit messages posted to the public bulletin board.

Every data file a PoD printer or mix server submits is announced by a typed
file message: who submitted it, when the board committed it, and the digest
of the archive that carries it.
"""

from dataclasses import dataclass
from enum import Enum

from vvote_verifier.domain.errors.malformed_input import CommitMessageError


class MessageType(str, Enum):
    """Typed message kinds relevant to ballot generation."""

    FILE = "file"
    MIX_RANDOM_COMMIT = "mixrandomcommit"
    BALLOT_GEN_COMMIT = "ballotgencommit"
    BALLOT_AUDIT_COMMIT = "ballotauditcommit"


@dataclass(frozen=True)
class FileMessage:
    """A file submission committed by the bulletin board.

    Attributes:
        message_type: Kind of file commit.
        booth_id: Submitting device (printer or mix server).
        booth_sig: Device signature over the submission.
        commit_time: Commit time string assigned by the board.
        submission_id: Board submission id.
        file_size: Size of the committed archive in bytes.
        file_name: Name of the committed archive.
        digest: Digest of the committed archive.
    """

    message_type: MessageType
    booth_id: str
    booth_sig: str
    commit_time: str
    submission_id: str
    file_size: int
    file_name: str
    digest: str

    def __post_init__(self) -> None:
        for name in ("booth_id", "commit_time", "submission_id", "file_name"):
            if not getattr(self, name):
                raise CommitMessageError(f"{name} cannot be empty")
        if self.file_size < 0:
            raise CommitMessageError(
                f"file_size must be non-negative, got {self.file_size}"
            )


@dataclass(frozen=True)
class MixRandomCommitMessage(FileMessage):
    """File message for a mix server's randomness commitments to a printer.

    Attributes:
        printer_id: Printer the committed randomness was generated for.
    """

    printer_id: str

    def __post_init__(self) -> None:
        super().__post_init__()
        if not self.printer_id:
            raise CommitMessageError("printer_id cannot be empty")

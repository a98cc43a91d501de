"""Mix server randomness commitments.

Before any audit selection, each mix server publishes, per printer and per
ballot serial number, a hash commitment to every randomness value it sent
to the printer.
"""

from dataclasses import dataclass, field
from typing import Mapping

from vvote_verifier.domain.models.commit_messages import MixRandomCommitMessage


@dataclass(frozen=True)
class MixCommitData:
    """Commitments from one mix server for one ballot.

    Attributes:
        server_name: Mix server that made the commitments.
        serial_no: Ballot serial number.
        commitments: Hex commitments, one per candidate slot.
    """

    server_name: str
    serial_no: str
    commitments: tuple[str, ...]

    def commitment_at(self, index: int) -> str | None:
        if 0 <= index < len(self.commitments):
            return self.commitments[index]
        return None


@dataclass(frozen=True, eq=False)
class MixRandomCommit:
    """One committed randomness file from a mix server to a printer.

    Attributes:
        message: The bulletin board file message announcing the commit.
        commits: Commitments keyed by ballot serial number.
    """

    message: MixRandomCommitMessage
    commits: Mapping[str, MixCommitData] = field(default_factory=dict)

    @property
    def server_name(self) -> str:
        return self.message.booth_id

    @property
    def printer_id(self) -> str:
        return self.message.printer_id

    def for_serial(self, serial_no: str) -> MixCommitData | None:
        return self.commits.get(serial_no)

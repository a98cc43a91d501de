"""Port for the published ballot generation data.

The verifier consumes fully typed, in-memory data. Where the data comes from
(an extracted commitment tree, a test fixture) is an adapter concern.
"""

from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Mapping, Protocol, Sequence

if TYPE_CHECKING:
    from vvote_verifier.config.ballot_generation_config import BallotGenerationConfig
    from vvote_verifier.config.election_config import ElectionConfig
    from vvote_verifier.domain.models.certificates import CertificatesFile
    from vvote_verifier.domain.models.commit_identifier import CommitIdentifier
    from vvote_verifier.domain.models.mix_commits import MixRandomCommit
    from vvote_verifier.domain.models.printer_commits import (
        BallotAuditCommit,
        BallotGenCommit,
    )


@dataclass(frozen=True)
class LoadProblem:
    """A published object that could not be loaded.

    Attributes:
        source: File (and line) the object came from.
        reason: Why it was excluded.
    """

    source: str
    reason: str


@dataclass(frozen=True, eq=False)
class BallotGenData:
    """Everything the ballot generation verifier needs.

    Attributes:
        ballot_generation_config: Race sizes and audit size.
        election_config: Election key and candidate identifier tables.
        certificates: Peer id to key share sequence number mapping.
        audit_commits: Printers' opened audit data by commit identifier.
        ballot_gen_commits: Printers' committed ballots by commit identifier.
        mix_commits: Mix server commit files, keyed by server name, then by
            commit identifier (whose printer is the commits' recipient).
        load_problems: Objects excluded while loading.
    """

    ballot_generation_config: BallotGenerationConfig
    election_config: ElectionConfig
    certificates: CertificatesFile
    audit_commits: Mapping[CommitIdentifier, BallotAuditCommit] = field(
        default_factory=dict
    )
    ballot_gen_commits: Mapping[CommitIdentifier, BallotGenCommit] = field(
        default_factory=dict
    )
    mix_commits: Mapping[str, Mapping[CommitIdentifier, Sequence[MixRandomCommit]]] = (
        field(default_factory=dict)
    )
    load_problems: tuple[LoadProblem, ...] = ()

    def mix_commits_for(self, server: str, printer_id: str) -> list[MixRandomCommit]:
        """Commit files ``server`` published for ``printer_id``, in load order."""
        commits: list[MixRandomCommit] = []
        for identifier, files in self.mix_commits.get(server, {}).items():
            if identifier.printer_id == printer_id:
                commits.extend(files)
        return commits


class BallotGenDataSource(Protocol):
    """Protocol for loading the published ballot generation data."""

    @abstractmethod
    def load(self) -> BallotGenData:
        """Load and type every published object.

        Objects that fail validation are excluded and listed in
        ``BallotGenData.load_problems``.

        Raises:
            ConfigurationError: If the election or ballot generation
                configuration cannot be loaded.
        """
        ...

"""Open a mix server's contribution against its published commitments.

A mix server may have published several commit files for the same printer.
A contribution opens when every pair satisfies
``commitment == SHA-256(witness || value)`` against one of them. The commit
files are tried in publication order; a failed opening falls through to the
next file and only the last failure is reported.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

from vvote_verifier.domain.models.mix_commits import MixRandomCommit
from vvote_verifier.domain.models.randomness import OpenedRandomnessCommitments
from vvote_verifier.domain.primitives.hash_commitment import verify_hex


@dataclass(frozen=True)
class OpeningResult:
    """Outcome of opening one contribution.

    Attributes:
        opened: True when every pair opened against one commit file.
        slot: First failing slot of the last commit file tried.
        reason: Why the last commit file did not open.
        attempts: Number of commit files tried.
    """

    opened: bool
    slot: Optional[int] = None
    reason: Optional[str] = None
    attempts: int = 0


def _open_against(
    contribution: OpenedRandomnessCommitments, commit: MixRandomCommit
) -> tuple[Optional[int], Optional[str]]:
    data = commit.for_serial(contribution.serial_no)
    if data is None:
        return None, f"no commitments for serial number {contribution.serial_no}"
    for slot, pair in enumerate(contribution.pairs):
        commitment = data.commitment_at(slot)
        if commitment is None:
            return slot, f"no commitment at slot {slot}"
        if not verify_hex(commitment, pair.witness, pair.randomness_value):
            return slot, f"commitment does not open at slot {slot}"
    return None, None


def open_contribution(
    contribution: OpenedRandomnessCommitments,
    commits: Sequence[MixRandomCommit],
) -> OpeningResult:
    """Open ``contribution`` against the server's commit files for the printer."""
    if not commits:
        return OpeningResult(
            opened=False,
            reason=f"no commitments from {contribution.peer_id} for this printer",
        )
    slot: Optional[int] = None
    reason: Optional[str] = None
    for attempt, commit in enumerate(commits, start=1):
        slot, reason = _open_against(contribution, commit)
        if reason is None:
            return OpeningResult(opened=True, attempts=attempt)
    return OpeningResult(opened=False, slot=slot, reason=reason, attempts=len(commits))

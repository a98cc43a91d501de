"""Opened randomness published by PoD printers for audited ballots.

For every audited ballot each mix server's contribution is opened: the
printer discloses, per candidate slot, the randomness value together with
the witness that was used when the mix server committed to it.

Invariants enforced at construction:
- witnesses and randomness values are hex strings of at least 64 characters
- every contributor for a ballot reports the ballot's serial number
- every contributor reports the same number of pairs
- there is at least one contributor
"""

from dataclasses import dataclass

from vvote_verifier.domain.errors.malformed_input import (
    BallotRandomnessError,
    RandomnessPairError,
)
from vvote_verifier.domain.primitives.hash_commitment import is_hex

MIN_HEX_LENGTH = 64


@dataclass(frozen=True)
class RandomnessPair:
    """A randomness value and the witness of its commitment.

    Attributes:
        witness: Hex encoded commitment witness (``rComm``).
        randomness_value: Hex encoded randomness value (``r``).
    """

    witness: str
    randomness_value: str

    def __post_init__(self) -> None:
        for name, value in (
            ("witness", self.witness),
            ("randomness_value", self.randomness_value),
        ):
            if len(value) < MIN_HEX_LENGTH:
                raise RandomnessPairError(
                    f"{name} must be at least {MIN_HEX_LENGTH} hex characters, "
                    f"got {len(value)}"
                )
            if not is_hex(value):
                raise RandomnessPairError(f"{name} is not valid hex")

    @property
    def randomness_bytes(self) -> bytes:
        return bytes.fromhex(self.randomness_value)


@dataclass(frozen=True)
class OpenedRandomnessCommitments:
    """One mix server's opened contribution for one ballot.

    Attributes:
        serial_no: Ballot serial number.
        peer_id: Mix server that contributed the randomness.
        pairs: Randomness pairs, one per candidate slot, left to right.
    """

    serial_no: str
    peer_id: str
    pairs: tuple[RandomnessPair, ...]

    def __post_init__(self) -> None:
        if not self.serial_no:
            raise BallotRandomnessError("serial_no cannot be empty")
        if not self.peer_id:
            raise BallotRandomnessError(
                "peer_id cannot be empty", serial_no=self.serial_no
            )


@dataclass(frozen=True)
class BallotGenerationRandomness:
    """All opened contributions for one audited ballot.

    Attributes:
        serial_no: Ballot serial number.
        opened: Contributions in the order they were published.
    """

    serial_no: str
    opened: tuple[OpenedRandomnessCommitments, ...]

    def __post_init__(self) -> None:
        if not self.opened:
            raise BallotRandomnessError(
                "at least one contributor is required", serial_no=self.serial_no
            )
        pair_count = len(self.opened[0].pairs)
        for contribution in self.opened:
            if contribution.serial_no != self.serial_no:
                raise BallotRandomnessError(
                    f"contributor {contribution.peer_id} reports serial number "
                    f"{contribution.serial_no}",
                    serial_no=self.serial_no,
                )
            if len(contribution.pairs) != pair_count:
                raise BallotRandomnessError(
                    f"contributor {contribution.peer_id} has "
                    f"{len(contribution.pairs)} pairs, expected {pair_count}",
                    serial_no=self.serial_no,
                )

    @classmethod
    def from_contributions(
        cls, opened: list[OpenedRandomnessCommitments]
    ) -> "BallotGenerationRandomness":
        """Build from contributions, taking the serial number from the first.

        Raises:
            BallotRandomnessError: If the list is empty or inconsistent.
        """
        if not opened:
            raise BallotRandomnessError("at least one contributor is required")
        return cls(serial_no=opened[0].serial_no, opened=tuple(opened))

    @property
    def pair_count(self) -> int:
        return len(self.opened[0].pairs)

    @property
    def peer_ids(self) -> tuple[str, ...]:
        return tuple(contribution.peer_id for contribution in self.opened)

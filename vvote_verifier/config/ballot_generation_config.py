"""Ballot generation configuration.

Describes the shape of every generic ballot and the size of the audit:

- three races in fixed order: Legislative Assembly (``la``), Legislative
  Council above the line (``lc_atl``) and below the line (``lc_btl``)
- the number of ballots each printer generates and how many are audited

Each ballot carries one randomness slot per candidate plus one extra slot
whose combined value is the witness of the permutation commitment.

Example file:
    {
        "races": [
            {"id": "la", "candidates": 5},
            {"id": "lc_atl", "candidates": 6},
            {"id": "lc_btl", "candidates": 20}
        ],
        "ballotsToAudit": 10,
        "ballotToGenerate": 100
    }
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from vvote_verifier.domain.errors.configuration import ConfigurationError

RACE_ORDER = ("la", "lc_atl", "lc_btl")


@dataclass(frozen=True)
class BallotGenerationConfig:
    """Sizes of the races and of the audit.

    Attributes:
        la_size: Candidates in the Legislative Assembly race.
        lc_atl_size: Groups in the Legislative Council above-the-line race.
        lc_btl_size: Candidates in the Legislative Council below-the-line race.
        ballots_to_generate: Ballots each printer generates (> 0).
        ballots_to_audit: Ballots each printer must audit (0 to generate).
        ballot_output_folder: Printer output folder, informational.
        ballot_list: Ballot list file name, informational.
        ballot_db: Ballot database file name, informational.
    """

    la_size: int
    lc_atl_size: int
    lc_btl_size: int
    ballots_to_generate: int
    ballots_to_audit: int
    ballot_output_folder: Optional[str] = None
    ballot_list: Optional[str] = None
    ballot_db: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate configuration values."""
        for name in ("la_size", "lc_atl_size", "lc_btl_size"):
            if getattr(self, name) < 0:
                raise ConfigurationError(
                    name, f"must be non-negative, got {getattr(self, name)}"
                )
        if self.ballots_to_generate <= 0:
            raise ConfigurationError(
                "ballotToGenerate",
                f"must be positive, got {self.ballots_to_generate}",
            )
        if self.ballots_to_audit < 0:
            raise ConfigurationError(
                "ballotsToAudit", f"must be non-negative, got {self.ballots_to_audit}"
            )
        if self.ballots_to_audit > self.ballots_to_generate:
            raise ConfigurationError(
                "ballotsToAudit",
                f"{self.ballots_to_audit} exceeds ballots to generate "
                f"({self.ballots_to_generate})",
            )

    @property
    def race_sizes(self) -> tuple[int, int, int]:
        return (self.la_size, self.lc_atl_size, self.lc_btl_size)

    @property
    def number_of_candidates(self) -> int:
        return sum(self.race_sizes)

    @property
    def number_of_randomness_values(self) -> int:
        """Randomness slots per ballot: one per candidate plus the witness slot."""
        return self.number_of_candidates + 1

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> BallotGenerationConfig:
        """Parse the ballot generation configuration JSON object.

        Raises:
            ConfigurationError: If the races are missing, out of order, or a
                count is missing or not an integer.
        """
        races = data.get("races")
        if not isinstance(races, list) or len(races) != len(RACE_ORDER):
            raise ConfigurationError(
                "races", f"exactly {len(RACE_ORDER)} races are required"
            )
        sizes: list[int] = []
        for expected_id, race in zip(RACE_ORDER, races):
            if not isinstance(race, Mapping) or race.get("id") != expected_id:
                raise ConfigurationError(
                    "races", f"expected race '{expected_id}', got {race!r}"
                )
            sizes.append(_require_int(race, "candidates"))
        return cls(
            la_size=sizes[0],
            lc_atl_size=sizes[1],
            lc_btl_size=sizes[2],
            ballots_to_generate=_require_int(data, "ballotToGenerate"),
            ballots_to_audit=_require_int(data, "ballotsToAudit"),
            ballot_output_folder=data.get("BallotOutputFolder"),
            ballot_list=data.get("ballotList"),
            ballot_db=data.get("ballotDB"),
        )


def _require_int(data: Mapping[str, Any], key: str) -> int:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(key, f"an integer is required, got {value!r}")
    return value

"""Verification findings and the run report.

A verification mismatch is never raised: it is recorded as a ``Finding``
and folded into the aggregate result. Structural errors that stop the
verification of one printer commitment are recorded the same way.

Usage:
    finding = Finding(
        check=CheckName.REENCRYPTION,
        identifier="commit-1/Printer1",
        serial_no="Printer1:4",
        expected="cipher 3 matches committed cipher",
        actual="mismatch",
    )
    report = VerificationReport(verified=False, findings=(finding,), checks_passed=41)
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional


class CheckName(str, Enum):
    """Every check the ballot generation verifier performs."""

    DATA_LOAD = "data_load"
    BASE_CANDIDATE_IDS = "base_candidate_ids"
    RANDOMNESS_VALUES_RECEIVED = "randomness_values_received_by_printers"
    RANDOMNESS_VALUES_COMMITTED = "randomness_values_committed_by_mix_servers"
    BALLOTS_TO_AUDIT = "number_of_ballots_to_audit"
    BALLOTS_GENERATED = "number_of_ballots_generated"
    COMBINED_SIGNATURE = "combined_signature"
    FIAT_SHAMIR = "fiat_shamir_value"
    AUDIT_SELECTION = "audit_selection"
    RANDOMNESS_COMMITMENT = "randomness_commitment"
    REENCRYPTION = "reencryption"
    PERMUTATION_COMMITMENT = "permutation_commitment"


@dataclass(frozen=True)
class Finding:
    """A single failed check.

    Attributes:
        check: Which check failed.
        identifier: Printer commitment ("<commit>/<printer>"), when the check
            is scoped to one.
        serial_no: Ballot serial number, when the check is scoped to one.
        expected: What the check expected.
        actual: What the data showed.
        detail: Free-form context.
    """

    check: CheckName
    identifier: Optional[str] = None
    serial_no: Optional[str] = None
    expected: Optional[str] = None
    actual: Optional[str] = None
    detail: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "check": self.check.value,
            "identifier": self.identifier,
            "serial_no": self.serial_no,
            "expected": self.expected,
            "actual": self.actual,
            "detail": self.detail,
        }


@dataclass(frozen=True)
class VerificationReport:
    """Outcome of a verification run.

    Attributes:
        verified: True when every check passed and nothing failed to load.
        findings: Every failed check, in the order it was recorded.
        checks_passed: Number of checks that passed.
        run_id: Correlation id of the run.
        started_at: When the run began.
        completed_at: When the run completed.
    """

    verified: bool
    findings: tuple[Finding, ...] = ()
    checks_passed: int = 0
    run_id: str = ""
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        if self.verified and self.findings:
            raise ValueError("a verified report cannot carry findings")
        if self.checks_passed < 0:
            raise ValueError(
                f"checks_passed must be non-negative, got {self.checks_passed}"
            )

    @property
    def checks_failed(self) -> int:
        return len(self.findings)

    def findings_for(self, check: CheckName) -> tuple[Finding, ...]:
        return tuple(f for f in self.findings if f.check == check)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serialisable dictionary."""
        return {
            "verified": self.verified,
            "run_id": self.run_id,
            "checks_passed": self.checks_passed,
            "checks_failed": self.checks_failed,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "completed_at": (
                self.completed_at.isoformat() if self.completed_at else None
            ),
            "findings": [finding.to_dict() for finding in self.findings],
        }

"""Unit tests for findings and the verification report."""

from datetime import datetime, timezone

import pytest

from vvote_verifier.domain.models.verification_report import (
    CheckName,
    Finding,
    VerificationReport,
)


class TestVerificationReport:
    """Tests for VerificationReport."""

    def test_verified_report_cannot_carry_findings(self) -> None:
        with pytest.raises(ValueError):
            VerificationReport(verified=True, findings=(Finding(CheckName.REENCRYPTION),))

    def test_findings_for(self) -> None:
        report = VerificationReport(
            verified=False,
            findings=(
                Finding(CheckName.REENCRYPTION, serial_no="Printer1:1"),
                Finding(CheckName.FIAT_SHAMIR),
                Finding(CheckName.REENCRYPTION, serial_no="Printer1:2"),
            ),
            checks_passed=5,
        )

        assert report.checks_failed == 3
        assert [f.serial_no for f in report.findings_for(CheckName.REENCRYPTION)] == [
            "Printer1:1",
            "Printer1:2",
        ]

    def test_to_dict(self) -> None:
        started = datetime(2026, 1, 1, tzinfo=timezone.utc)
        report = VerificationReport(
            verified=False,
            findings=(
                Finding(
                    CheckName.AUDIT_SELECTION,
                    identifier="c1/Printer1",
                    expected="a",
                    actual="b",
                ),
            ),
            checks_passed=2,
            run_id="run-1",
            started_at=started,
        )

        data = report.to_dict()

        assert data["verified"] is False
        assert data["checks_failed"] == 1
        assert data["started_at"] == started.isoformat()
        assert data["completed_at"] is None
        assert data["findings"][0] == {
            "check": "audit_selection",
            "identifier": "c1/Printer1",
            "serial_no": None,
            "expected": "a",
            "actual": "b",
            "detail": None,
        }

"""Thread-safe collector of check outcomes.

Every check outcome is counted and written to the results log channel;
failures are kept as findings for the report. The collector is shared by
worker threads during concurrent verification, so all mutation happens
under a lock.
"""

import threading
from datetime import datetime, timezone
from typing import Optional

from vvote_verifier.domain.models.verification_report import (
    CheckName,
    Finding,
    VerificationReport,
)
from vvote_verifier.infrastructure.observability.logging import get_results_logger


class FindingsCollector:
    """Accumulates passed checks and findings for one verification run."""

    def __init__(self, run_id: str = "") -> None:
        self._lock = threading.Lock()
        self._findings: list[Finding] = []
        self._checks_passed = 0
        self._run_id = run_id
        self._started_at = datetime.now(timezone.utc)
        self._results = get_results_logger()

    @property
    def findings(self) -> tuple[Finding, ...]:
        with self._lock:
            return tuple(self._findings)

    @property
    def checks_passed(self) -> int:
        with self._lock:
            return self._checks_passed

    def passed(
        self,
        check: CheckName,
        identifier: Optional[str] = None,
        serial_no: Optional[str] = None,
    ) -> None:
        with self._lock:
            self._checks_passed += 1
        self._results.info(
            "check_passed",
            check=check.value,
            identifier=identifier,
            serial_no=serial_no,
        )

    def failed(
        self,
        check: CheckName,
        identifier: Optional[str] = None,
        serial_no: Optional[str] = None,
        expected: Optional[str] = None,
        actual: Optional[str] = None,
        detail: Optional[str] = None,
    ) -> Finding:
        finding = Finding(
            check=check,
            identifier=identifier,
            serial_no=serial_no,
            expected=expected,
            actual=actual,
            detail=detail,
        )
        with self._lock:
            self._findings.append(finding)
        self._results.warning("check_failed", **finding.to_dict())
        return finding

    def record(
        self,
        check: CheckName,
        ok: bool,
        identifier: Optional[str] = None,
        serial_no: Optional[str] = None,
        **details: Optional[str],
    ) -> bool:
        """Record a boolean outcome and return it."""
        if ok:
            self.passed(check, identifier=identifier, serial_no=serial_no)
        else:
            self.failed(check, identifier=identifier, serial_no=serial_no, **details)
        return ok

    def report(self) -> VerificationReport:
        with self._lock:
            findings = tuple(self._findings)
            checks_passed = self._checks_passed
        return VerificationReport(
            verified=not findings,
            findings=findings,
            checks_passed=checks_passed,
            run_id=self._run_id,
            started_at=self._started_at,
            completed_at=datetime.now(timezone.utc),
        )

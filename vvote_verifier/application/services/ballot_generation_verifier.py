"""Ballot generation audit verifier.

Re-derives, from the publicly posted commitment data, whether the PoD
printers generated their encrypted generic ballots honestly and whether the
audited subset was chosen fairly.

Checks, in the order ``do_verification`` runs them:
1. base encrypted candidate ids are encryptions of the plaintext ids
2. every opened randomness record, and every mix server commitment to an
   audited ballot, has one value per slot
3. every printer disclosed exactly ballots-to-audit records
4. the Fiat-Shamir value and the audit selection of every printer
5. per audited ballot:
   - every mix server contribution opens against its commitment
   - the combined randomness re-encrypts the base ciphers into exactly the
     committed ballot, and the permutation opens its commitment

A mismatch is never raised: it is recorded as a finding and the run
continues. Structural errors (unknown peer, too few signature shares) stop
only the printer commitment they belong to.

Usage:
    verifier = BallotGenerationVerifier(data, settings)
    verified = verifier.do_verification()
    report = verifier.report
"""

from __future__ import annotations

import asyncio
import base64
import hmac
import threading
from typing import Callable, Optional, Sequence

from vvote_verifier.application.ports.ballot_gen_data_source import BallotGenData
from vvote_verifier.application.services.base import LoggingMixin
from vvote_verifier.application.services.findings_collector import FindingsCollector
from vvote_verifier.config.verifier_settings import VerifierSettings
from vvote_verifier.domain.errors.bls import BLSSignatureError
from vvote_verifier.domain.errors.malformed_input import SerialNumberError
from vvote_verifier.domain.models.commit_identifier import CommitIdentifier
from vvote_verifier.domain.models.randomness import BallotGenerationRandomness
from vvote_verifier.domain.models.submit_response import BallotSubmitResponse
from vvote_verifier.domain.models.verification_report import (
    CheckName,
    VerificationReport,
)
from vvote_verifier.domain.primitives.bls_threshold import ThresholdCombiner
from vvote_verifier.domain.primitives.elgamal import ElGamalCipher, encrypt
from vvote_verifier.domain.primitives.hash_commitment import verify as verify_commitment
from vvote_verifier.domain.services.audit_selector import (
    fiat_shamir_value,
    select_audit_serials,
)
from vvote_verifier.domain.services.ballot_reconstructor import reconstruct_ballot
from vvote_verifier.domain.services.randomness_combiner import (
    CombinedRandomness,
    combine_randomness,
)
from vvote_verifier.domain.services.randomness_opening import open_contribution
from vvote_verifier.infrastructure.observability.run_context import get_run_id


BallotCheck = Callable[[BallotGenerationRandomness, CommitIdentifier], bool]


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


class BallotGenerationVerifier(LoggingMixin):
    """Verifies the ballot generation audit of every printer.

    The verifier owns only transient state for one run: the combined
    randomness of the ballots checked so far and the findings collector.
    Every check recombines the ballot it is given. Call ``reset()`` to start
    a fresh report.
    """

    def __init__(
        self,
        data: BallotGenData,
        settings: Optional[VerifierSettings] = None,
    ) -> None:
        self._data = data
        self._settings = settings or VerifierSettings()
        self._config = data.ballot_generation_config
        self._election = data.election_config
        self._combined: dict[tuple[CommitIdentifier, str], CombinedRandomness] = {}
        self._combined_lock = threading.Lock()
        self._collector = FindingsCollector(run_id=get_run_id())
        self._init_logger(component="ballot_generation")

    @property
    def data(self) -> BallotGenData:
        return self._data

    @property
    def report(self) -> VerificationReport:
        return self._collector.report()

    def reset(self) -> None:
        """Discard findings and cached randomness from earlier calls."""
        with self._combined_lock:
            self._combined.clear()
        self._collector = FindingsCollector(run_id=get_run_id())

    # ------------------------------------------------------------------
    # Data load and configuration checks
    # ------------------------------------------------------------------

    def record_load_problems(self) -> bool:
        """Record every object excluded while loading as a finding."""
        for problem in self._data.load_problems:
            self._collector.failed(
                CheckName.DATA_LOAD,
                detail=f"{problem.source}: {problem.reason}",
            )
        return not self._data.load_problems

    def verify_base_candidate_ids(self) -> bool:
        """Check that base ids are the plaintext ids encrypted with randomness 1.

        Skipped (passes) when the election configuration carries no
        plaintext id table.
        """
        log = self._log_operation("verify_base_candidate_ids")
        plaintext_ids = self._election.plaintext_ids
        base_ids = self._election.base_encrypted_ids
        if not plaintext_ids:
            log.info("plaintext_ids_not_provided")
            return True
        if len(plaintext_ids) != len(base_ids):
            self._collector.failed(
                CheckName.BASE_CANDIDATE_IDS,
                expected=f"{len(plaintext_ids)} base encrypted ids",
                actual=str(len(base_ids)),
            )
            return False
        public_key = self._election.public_key
        for index, (plaintext, base) in enumerate(zip(plaintext_ids, base_ids)):
            if encrypt(plaintext, public_key, 1) != base:
                self._collector.failed(
                    CheckName.BASE_CANDIDATE_IDS,
                    expected="encryption of plaintext id with randomness 1",
                    actual="mismatch",
                    detail=f"candidate index {index}",
                )
                return False
        self._collector.passed(CheckName.BASE_CANDIDATE_IDS)
        log.debug("base_candidate_ids_verified", count=len(base_ids))
        return True

    # ------------------------------------------------------------------
    # Counts
    # ------------------------------------------------------------------

    def verify_number_of_randomness_values_received_by_printers(
        self, serial_no: Optional[str] = None
    ) -> bool:
        """Every opened record holds one pair per randomness slot.

        Args:
            serial_no: Restrict the check to one ballot; all ballots when
                omitted.
        """
        expected = self._config.number_of_randomness_values
        verified = True
        for identifier, audit in self._data.audit_commits.items():
            for serial, ballot in audit.randomness.items():
                if serial_no is not None and serial != serial_no:
                    continue
                for contribution in ballot.opened:
                    ok = self._collector.record(
                        CheckName.RANDOMNESS_VALUES_RECEIVED,
                        len(contribution.pairs) == expected,
                        identifier=str(identifier),
                        serial_no=serial,
                        expected=str(expected),
                        actual=str(len(contribution.pairs)),
                        detail=f"contribution from {contribution.peer_id}",
                    )
                    verified = verified and ok
        return verified

    def verify_number_of_randomness_values_committed_by_mix_servers(
        self, serial_no: str
    ) -> bool:
        """Every mix server commit for ``serial_no`` has one entry per slot."""
        expected = self._config.number_of_randomness_values
        verified = True
        for server, by_identifier in self._data.mix_commits.items():
            for identifier, commits in by_identifier.items():
                for commit in commits:
                    data = commit.for_serial(serial_no)
                    if data is None:
                        continue
                    ok = self._collector.record(
                        CheckName.RANDOMNESS_VALUES_COMMITTED,
                        len(data.commitments) == expected,
                        identifier=str(identifier),
                        serial_no=serial_no,
                        expected=str(expected),
                        actual=str(len(data.commitments)),
                        detail=f"commitments from {server}",
                    )
                    verified = verified and ok
        return verified

    def verify_number_of_ballots_to_audit(self) -> bool:
        """Every printer disclosed exactly ballots-to-audit records."""
        expected = self._config.ballots_to_audit
        verified = True
        for identifier, audit in self._data.audit_commits.items():
            ok = self._collector.record(
                CheckName.BALLOTS_TO_AUDIT,
                len(audit.randomness) == expected,
                identifier=str(identifier),
                expected=str(expected),
                actual=str(len(audit.randomness)),
            )
            verified = verified and ok
        return verified

    # ------------------------------------------------------------------
    # Randomness commitments and combination
    # ------------------------------------------------------------------

    def verify_randomness(
        self,
        ballot: Optional[BallotGenerationRandomness] = None,
        identifier: Optional[CommitIdentifier] = None,
    ) -> bool:
        """Open every contribution of a ballot against its mix commitments.

        With no arguments every audited ballot of every printer is checked.
        """
        if ballot is None and identifier is None:
            return self._for_each_ballot(self.verify_randomness)
        if ballot is None or identifier is None:
            raise ValueError("ballot and identifier must be given together")

        log = self._log_operation(
            "verify_randomness",
            identifier=str(identifier),
            serial_no=ballot.serial_no,
        )
        verified = True
        for contribution in ballot.opened:
            if contribution.serial_no != ballot.serial_no:
                self._collector.failed(
                    CheckName.RANDOMNESS_COMMITMENT,
                    identifier=str(identifier),
                    serial_no=ballot.serial_no,
                    expected=ballot.serial_no,
                    actual=contribution.serial_no,
                    detail=f"serial number reported by {contribution.peer_id}",
                )
                verified = False
                continue
            commits = self._data.mix_commits_for(
                contribution.peer_id, identifier.printer_id
            )
            result = open_contribution(contribution, commits)
            if result.attempts > 1 and result.opened:
                log.info(
                    "randomness_opened_after_fallthrough",
                    server=contribution.peer_id,
                    attempts=result.attempts,
                )
            ok = self._collector.record(
                CheckName.RANDOMNESS_COMMITMENT,
                result.opened,
                identifier=str(identifier),
                serial_no=ballot.serial_no,
                expected="commitment opens",
                actual=result.reason,
                detail=f"contribution from {contribution.peer_id}"
                + (f", slot {result.slot}" if result.slot is not None else ""),
            )
            verified = verified and ok
        return verified

    def verify_randomness_for(self, serial_no: str) -> bool:
        return self._for_serial(serial_no, self.verify_randomness)

    def combine_randomness_values(
        self,
        ballot: BallotGenerationRandomness,
        identifier: CommitIdentifier,
    ) -> CombinedRandomness:
        """Combine (and cache) the randomness of one ballot."""
        combined = combine_randomness(ballot)
        with self._combined_lock:
            self._combined[(identifier, ballot.serial_no)] = combined
        return combined

    def combine_randomness_values_for(
        self, serial_no: str
    ) -> dict[CommitIdentifier, CombinedRandomness]:
        """Combine the randomness of ``serial_no`` for every printer that audited it."""
        combined: dict[CommitIdentifier, CombinedRandomness] = {}
        for identifier, audit in self._data.audit_commits.items():
            ballot = audit.randomness.get(serial_no)
            if ballot is not None:
                combined[identifier] = self.combine_randomness_values(ballot, identifier)
        return combined

    def combine_all_randomness_values(
        self,
    ) -> dict[tuple[CommitIdentifier, str], CombinedRandomness]:
        for identifier, audit in self._data.audit_commits.items():
            for ballot in audit.randomness.values():
                self.combine_randomness_values(ballot, identifier)
        with self._combined_lock:
            return dict(self._combined)

    # ------------------------------------------------------------------
    # Re-encryption and permutation
    # ------------------------------------------------------------------

    def verify_encryptions(
        self,
        ballot: Optional[BallotGenerationRandomness] = None,
        identifier: Optional[CommitIdentifier] = None,
    ) -> bool:
        """Rebuild a ballot from the combined randomness and compare.

        With no arguments every audited ballot of every printer is checked.
        """
        if ballot is None and identifier is None:
            return self._for_each_ballot(self.verify_encryptions)
        if ballot is None or identifier is None:
            raise ValueError("ballot and identifier must be given together")

        serial_no = ballot.serial_no
        label = str(identifier)
        gen_commit = self._data.ballot_gen_commits.get(identifier)
        committed = gen_commit.ballots.get(serial_no) if gen_commit else None
        if committed is None:
            self._collector.failed(
                CheckName.REENCRYPTION,
                identifier=label,
                serial_no=serial_no,
                expected="committed ballot",
                actual="missing",
            )
            return False

        combined = self.combine_randomness_values(ballot, identifier)
        expected_slots = self._config.number_of_randomness_values
        if len(combined) != expected_slots:
            self._collector.failed(
                CheckName.REENCRYPTION,
                identifier=label,
                serial_no=serial_no,
                expected=f"{expected_slots} randomness values",
                actual=str(len(combined)),
            )
            return False

        try:
            rebuilt = reconstruct_ballot(
                self._election.base_encrypted_ids,
                self._election.public_key,
                combined.digests,
                self._config.race_sizes,
            )
        except ValueError as e:
            self._collector.failed(
                CheckName.REENCRYPTION,
                identifier=label,
                serial_no=serial_no,
                detail=str(e),
            )
            return False

        ciphers_ok = self._compare_ciphers(
            label, serial_no, rebuilt.ciphers, committed.ciphers
        )
        permutation_ok = self._collector.record(
            CheckName.PERMUTATION_COMMITMENT,
            verify_commitment(
                committed.permutation_commitment,
                combined.witness,
                rebuilt.permutation_bytes,
            ),
            identifier=label,
            serial_no=serial_no,
            expected=committed.permutation,
            actual=rebuilt.permutation,
            detail="permutation does not open the committed hash",
        )
        return ciphers_ok and permutation_ok

    def _compare_ciphers(
        self,
        label: str,
        serial_no: str,
        rebuilt: Sequence[ElGamalCipher],
        committed: Sequence[ElGamalCipher],
    ) -> bool:
        if len(rebuilt) != len(committed):
            self._collector.failed(
                CheckName.REENCRYPTION,
                identifier=label,
                serial_no=serial_no,
                expected=f"{len(rebuilt)} ciphers",
                actual=str(len(committed)),
            )
            return False
        for index, (expected, actual) in enumerate(zip(rebuilt, committed)):
            if expected != actual:
                self._collector.failed(
                    CheckName.REENCRYPTION,
                    identifier=label,
                    serial_no=serial_no,
                    expected="re-encrypted base cipher",
                    actual="different committed cipher",
                    detail=f"cipher index {index}",
                )
                return False
        self._collector.passed(CheckName.REENCRYPTION, label, serial_no)
        return True

    def verify_encryptions_for(self, serial_no: str) -> bool:
        return self._for_serial(serial_no, self.verify_encryptions)

    # ------------------------------------------------------------------
    # Fiat-Shamir audit selection
    # ------------------------------------------------------------------

    def combined_signature(self, response: BallotSubmitResponse) -> bytes:
        """Combine the threshold partial signatures of a submit response.

        Raises:
            UnknownPeerError: If a signer has no certificate.
            InvalidShareError: If a share is malformed or duplicated.
            InsufficientSharesError: If too few shares are usable.
        """
        combiner = ThresholdCombiner(
            number_of_nodes=self._settings.bls_peers,
            threshold=self._settings.bls_threshold,
        )
        for signature in response.threshold_signatures():
            index = self._data.certificates.sequence_number_for(signature.wbb_id)
            combiner.add_share(signature.signature_bytes, index)
        return combiner.combine()

    def expected_audit_serials(self, identifier: CommitIdentifier) -> list[str]:
        """The audit selection reproduced from the disclosed Fiat-Shamir value.

        Raises:
            KeyError: If no audit or generation data exists for ``identifier``.
            SerialNumberError: If a generated serial number is malformed.
            ValueError: If the disclosed value is shorter than 32 bytes.
        """
        audit = self._data.audit_commits[identifier]
        gen_commit = self._data.ballot_gen_commits[identifier]
        return select_audit_serials(
            gen_commit.serial_numbers,
            audit.response.fiat_shamir_bytes,
            audit.response.peer_id,
            self._config.ballots_to_audit,
        )

    def verify_fiat_shamir_for(self, identifier: CommitIdentifier) -> bool:
        """Verify the Fiat-Shamir value and audit selection of one printer."""
        label = str(identifier)
        log = self._log_operation("verify_fiat_shamir", identifier=label)
        audit = self._data.audit_commits.get(identifier)
        gen_commit = self._data.ballot_gen_commits.get(identifier)
        if audit is None or gen_commit is None:
            self._collector.failed(
                CheckName.FIAT_SHAMIR,
                identifier=label,
                expected="audit and ballot generation commits",
                actual=(
                    "audit commit missing"
                    if audit is None
                    else "ballot generation commit missing"
                ),
            )
            return False

        response = audit.response
        generated = len(gen_commit.ballots)
        verified = self._collector.record(
            CheckName.BALLOTS_GENERATED,
            generated == self._config.ballots_to_generate,
            identifier=label,
            expected=str(self._config.ballots_to_generate),
            actual=str(generated),
        )

        try:
            signature = self.combined_signature(response)
        except BLSSignatureError as e:
            log.warning("combined_signature_failed", error=str(e))
            self._collector.failed(
                CheckName.COMBINED_SIGNATURE,
                identifier=label,
                detail=str(e),
            )
            return False
        self._collector.passed(CheckName.COMBINED_SIGNATURE, label)

        recomputed = fiat_shamir_value(
            response.peer_id,
            response.submission_id,
            audit.message.commit_time,
            gen_commit.ciphers_data,
            signature,
        )
        value_ok = self._collector.record(
            CheckName.FIAT_SHAMIR,
            hmac.compare_digest(recomputed, response.fiat_shamir_bytes),
            identifier=label,
            expected=_b64(recomputed),
            actual=response.fiat_shamir,
        )

        try:
            expected = self.expected_audit_serials(identifier)
        except (SerialNumberError, ValueError) as e:
            self._collector.failed(
                CheckName.AUDIT_SELECTION, identifier=label, detail=str(e)
            )
            return False

        disclosed = audit.serial_numbers
        selection_ok = self._collector.record(
            CheckName.AUDIT_SELECTION,
            len(disclosed) == self._config.ballots_to_audit
            and set(disclosed) == set(expected),
            identifier=label,
            expected=",".join(sorted(expected)),
            actual=",".join(sorted(disclosed)),
        )
        log.debug("fiat_shamir_checked", value_ok=value_ok, selection_ok=selection_ok)
        return verified and value_ok and selection_ok

    def verify_fiat_shamir_calculation(self) -> bool:
        """Verify the Fiat-Shamir value and audit selection of every printer."""
        verified = True
        for identifier in self._data.audit_commits:
            if not self.verify_fiat_shamir_for(identifier):
                verified = False
        return verified

    def is_audit_ballot(self, serial_no: str) -> bool:
        """True when some printer disclosed audit randomness for ``serial_no``."""
        return any(
            serial_no in audit.randomness for audit in self._data.audit_commits.values()
        )

    # ------------------------------------------------------------------
    # Orchestration
    # ------------------------------------------------------------------

    def _for_each_ballot(self, check: BallotCheck) -> bool:
        verified = True
        for identifier, audit in self._data.audit_commits.items():
            for ballot in audit.randomness.values():
                if not check(ballot, identifier):
                    verified = False
        return verified

    def _for_serial(self, serial_no: str, check: BallotCheck) -> bool:
        verified = True
        for identifier, audit in self._data.audit_commits.items():
            ballot = audit.randomness.get(serial_no)
            if ballot is not None and not check(ballot, identifier):
                verified = False
        return verified

    def _verify_ballot(
        self, ballot: BallotGenerationRandomness, identifier: CommitIdentifier
    ) -> bool:
        randomness_ok = self.verify_randomness(ballot, identifier)
        encryptions_ok = self.verify_encryptions(ballot, identifier)
        return randomness_ok and encryptions_ok

    def _audited_serials(self) -> list[str]:
        serials: set[str] = set()
        for audit in self._data.audit_commits.values():
            serials.update(audit.randomness)
        return sorted(serials)

    def _verify_printer_level(self) -> bool:
        checks = [
            self.record_load_problems(),
            self.verify_base_candidate_ids(),
            self.verify_number_of_randomness_values_received_by_printers(),
        ]
        checks.extend(
            self.verify_number_of_randomness_values_committed_by_mix_servers(serial)
            for serial in self._audited_serials()
        )
        checks.append(self.verify_number_of_ballots_to_audit())
        checks.append(self.verify_fiat_shamir_calculation())
        return all(checks)

    def do_verification(self) -> bool:
        """Run every check over all printers and audited ballots."""
        log = self._log_operation("do_verification")
        log.info(
            "verification_started",
            printers=len(self._data.audit_commits),
        )
        verified = self._verify_printer_level()
        if not self._for_each_ballot(self._verify_ballot):
            verified = False
        report = self.report
        log.info(
            "verification_completed",
            verified=verified,
            checks_passed=report.checks_passed,
            checks_failed=report.checks_failed,
        )
        return verified

    def do_verification_for(self, serial_no: str) -> bool:
        """Run the checks relevant to one ballot serial number."""
        log = self._log_operation("do_verification_for", serial_no=serial_no)
        if not self.is_audit_ballot(serial_no):
            log.info("ballot_not_audited")
            return True
        checks = [
            self.verify_number_of_randomness_values_received_by_printers(serial_no),
            self.verify_number_of_randomness_values_committed_by_mix_servers(
                serial_no
            ),
            self._for_serial(serial_no, self._verify_ballot),
        ]
        verified = all(checks)
        log.info("ballot_verification_completed", verified=verified)
        return verified

    async def do_verification_async(
        self, max_concurrency: Optional[int] = None
    ) -> bool:
        """Run every check, fanning the per-ballot checks out over threads.

        Findings are identical to ``do_verification``; only their order in
        the report may differ.
        """
        limit = max_concurrency or self._settings.max_concurrency
        log = self._log_operation("do_verification_async", max_concurrency=limit)
        log.info("verification_started", printers=len(self._data.audit_commits))

        verified = await asyncio.to_thread(self._verify_printer_level)
        semaphore = asyncio.Semaphore(limit)

        async def verify_one(
            ballot: BallotGenerationRandomness, identifier: CommitIdentifier
        ) -> bool:
            async with semaphore:
                return await asyncio.to_thread(self._verify_ballot, ballot, identifier)

        results = await asyncio.gather(
            *(
                verify_one(ballot, identifier)
                for identifier, audit in self._data.audit_commits.items()
                for ballot in audit.randomness.values()
            )
        )
        verified = verified and all(results)
        log.info("verification_completed", verified=verified)
        return verified

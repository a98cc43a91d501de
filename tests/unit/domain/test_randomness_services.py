"""Unit tests for randomness combination and commitment opening."""

import dataclasses
import hashlib

from tests.helpers.synthetic_election import SyntheticElection
from vvote_verifier.domain.models.mix_commits import MixCommitData, MixRandomCommit
from vvote_verifier.domain.models.randomness import (
    BallotGenerationRandomness,
    OpenedRandomnessCommitments,
    RandomnessPair,
)
from vvote_verifier.domain.primitives.hash_commitment import commit
from vvote_verifier.domain.services.randomness_combiner import combine_randomness
from vvote_verifier.domain.services.randomness_opening import open_contribution

W = "11" * 32


def _ballot(values_by_server: list[list[str]]) -> BallotGenerationRandomness:
    return BallotGenerationRandomness(
        serial_no="Printer1:1",
        opened=tuple(
            OpenedRandomnessCommitments(
                "Printer1:1",
                f"MixServer{i + 1}",
                tuple(RandomnessPair(witness=W, randomness_value=v) for v in values),
            )
            for i, values in enumerate(values_by_server)
        ),
    )


class TestCombineRandomness:
    """Tests for combine_randomness."""

    def test_three_server_chaining(self) -> None:
        """Test slot digests chain every server's value in order."""
        a, b, c = "aa" * 32, "bb" * 32, "cc" * 32
        ballot = _ballot([[a, b], [b, c], [c, a]])

        combined = combine_randomness(ballot)

        assert len(combined) == 2
        assert combined.digests[0] == hashlib.sha256(
            bytes.fromhex(a) + bytes.fromhex(b) + bytes.fromhex(c)
        ).digest()
        assert combined.witness == hashlib.sha256(
            bytes.fromhex(b) + bytes.fromhex(c) + bytes.fromhex(a)
        ).digest()

    def test_contributor_order_matters(self) -> None:
        a, b = "aa" * 32, "bb" * 32

        forward = combine_randomness(_ballot([[a], [b]]))
        backward = combine_randomness(_ballot([[b], [a]]))

        assert forward.digests != backward.digests

    def test_deterministic(self, election: SyntheticElection) -> None:
        serial = election.audit_serials[0]

        first = combine_randomness(election.opened(serial))
        second = combine_randomness(election.opened(serial))

        assert first == second
        assert first.serial_no == serial


class TestOpenContribution:
    """Tests for opening a contribution against mix commitments."""

    def test_honest_contribution_opens(self, election: SyntheticElection) -> None:
        serial = election.audit_serials[0]
        contribution = election.contribution("MixServer1", serial)

        result = open_contribution(contribution, [election.mix_commit("MixServer1")])

        assert result.opened
        assert result.attempts == 1

    def test_tampered_value_fails_at_slot(self, election: SyntheticElection) -> None:
        serial = election.audit_serials[0]
        contribution = election.contribution("MixServer2", serial)
        pairs = list(contribution.pairs)
        pairs[2] = RandomnessPair(witness=pairs[2].witness, randomness_value="00" * 32)
        tampered = dataclasses.replace(contribution, pairs=tuple(pairs))

        result = open_contribution(tampered, [election.mix_commit("MixServer2")])

        assert not result.opened
        assert result.slot == 2

    def test_falls_through_to_later_commit(self, election: SyntheticElection) -> None:
        """Test that a failed opening tries the server's next commit file."""
        serial = election.audit_serials[0]
        contribution = election.contribution("MixServer1", serial)
        honest = election.mix_commit("MixServer1")
        stale = MixRandomCommit(
            message=honest.message,
            commits={
                serial: MixCommitData(
                    "MixServer1",
                    serial,
                    tuple(commit(b"x", b"y").hex() for _ in range(election.slots)),
                )
            },
        )

        result = open_contribution(contribution, [stale, honest])

        assert result.opened
        assert result.attempts == 2

    def test_reports_last_failure(self, election: SyntheticElection) -> None:
        serial = election.audit_serials[0]
        contribution = election.contribution("MixServer1", serial)
        other_serial = MixRandomCommit(
            message=election.mix_commit("MixServer1").message, commits={}
        )

        result = open_contribution(contribution, [other_serial])

        assert not result.opened
        assert "no commitments for serial number" in (result.reason or "")

    def test_no_commit_files(self, election: SyntheticElection) -> None:
        contribution = election.contribution("MixServer1", election.audit_serials[0])

        result = open_contribution(contribution, [])

        assert not result.opened
        assert result.attempts == 0
        assert "MixServer1" in (result.reason or "")

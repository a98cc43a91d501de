"""Unit tests for JsonLinesDataStore over an extracted commitment tree."""

import json
from pathlib import Path

import pytest

from tests.helpers.synthetic_election import (
    COMMIT_ID,
    PRINTER_ID,
    SyntheticElection,
)
from vvote_verifier.application.ports.ballot_gen_data_source import BallotGenData
from vvote_verifier.application.services.ballot_generation_verifier import (
    BallotGenerationVerifier,
)
from vvote_verifier.domain.errors.configuration import ConfigurationError
from vvote_verifier.domain.models.commit_identifier import CommitIdentifier
from vvote_verifier.domain.models.commit_messages import (
    MessageType,
    MixRandomCommitMessage,
)
from vvote_verifier.domain.models.verification_report import CheckName
from vvote_verifier.infrastructure.adapters import BallotGenSpec, JsonLinesDataStore


def _commits(tree: Path) -> Path:
    return tree / "commits"


def _append_line(path: Path, line: str) -> None:
    with open(path, "a", encoding="utf-8") as f:
        f.write(line + "\n")


def _problem_reasons(data: BallotGenData) -> list[str]:
    return [f"{p.source}: {p.reason}" for p in data.load_problems]


class TestLoadHonestTree:
    """Tests for loading an untampered tree."""

    def test_loads_every_commit(
        self, election: SyntheticElection, election_tree: Path
    ) -> None:
        data = JsonLinesDataStore(election_tree).load()

        identifier = CommitIdentifier(COMMIT_ID, PRINTER_ID)
        assert data.load_problems == ()
        assert list(data.audit_commits) == [identifier]
        assert list(data.ballot_gen_commits) == [identifier]
        assert sorted(data.mix_commits) == sorted(election.mix_servers)

        audit = data.audit_commits[identifier]
        assert sorted(audit.serial_numbers) == sorted(election.audit_serials)
        assert audit.response.fiat_shamir_bytes == election.fiat_shamir

        gen_commit = data.ballot_gen_commits[identifier]
        assert gen_commit.ciphers_data == election.ciphers_data
        assert gen_commit.serial_numbers == election.serials

    def test_mix_commits_keyed_by_recipient(self, election_tree: Path) -> None:
        data = JsonLinesDataStore(election_tree).load()

        commits = data.mix_commits_for("MixServer1", PRINTER_ID)
        assert len(commits) == 1
        assert isinstance(commits[0].message, MixRandomCommitMessage)
        assert commits[0].message.printer_id == PRINTER_ID
        assert data.mix_commits_for("MixServer1", "Printer2") == []

    def test_loaded_tree_verifies(self, election_tree: Path) -> None:
        data = JsonLinesDataStore(election_tree).load()

        verifier = BallotGenerationVerifier(data)

        assert verifier.do_verification()

    def test_unextracted_archives_ignored(self, election_tree: Path) -> None:
        (_commits(election_tree) / f"{COMMIT_ID}_attachments.zip").write_bytes(b"PK")

        data = JsonLinesDataStore(election_tree).load()

        assert data.load_problems == ()


class TestConfigurationFiles:
    """Tests for the fatal configuration files."""

    def test_missing_election_file(self, election_tree: Path) -> None:
        (election_tree / "election.json").unlink()

        with pytest.raises(ConfigurationError) as exc_info:
            JsonLinesDataStore(election_tree).load()

        assert exc_info.value.setting == "election.json"

    def test_invalid_json_config(self, election_tree: Path) -> None:
        (election_tree / "ballotgen_conf.json").write_text("{", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="invalid JSON"):
            JsonLinesDataStore(election_tree).load()

    def test_malformed_certificates(self, election_tree: Path) -> None:
        (election_tree / "certs.json").write_text(
            json.dumps({"Peer1_SigningSK2": {"pubKeyEntry": {"publicKey": "a"}}}),
            encoding="utf-8",
        )

        with pytest.raises(ConfigurationError) as exc_info:
            JsonLinesDataStore(election_tree).load()

        assert exc_info.value.setting == "certs.json"


class TestLoadProblems:
    """Tests for objects excluded while loading."""

    def test_missing_commits_directory(self, election_tree: Path) -> None:
        _commits(election_tree).rename(election_tree / "elsewhere")

        data = JsonLinesDataStore(election_tree).load()

        assert len(data.load_problems) == 1
        assert "commits directory not found" in data.load_problems[0].reason

    def test_missing_signature(self, election_tree: Path) -> None:
        (_commits(election_tree) / f"{COMMIT_ID}_signature.json").unlink()

        data = JsonLinesDataStore(election_tree).load()

        assert data.audit_commits == {}
        assert any("missing: signature" in r for r in _problem_reasons(data))

    def test_signature_names_other_message_file(self, election_tree: Path) -> None:
        path = _commits(election_tree) / f"{COMMIT_ID}_signature.json"
        signature = json.loads(path.read_text(encoding="utf-8"))
        signature["jsonFile"] = "1699999999999.json"
        path.write_text(json.dumps(signature), encoding="utf-8")

        data = JsonLinesDataStore(election_tree).load()

        assert data.ballot_gen_commits == {}
        assert any("signature covers 1699999999999.json" in r for r in _problem_reasons(data))

    def test_malformed_message_line(self, election_tree: Path) -> None:
        message_file = _commits(election_tree) / f"{COMMIT_ID}.json"
        _append_line(message_file, "not json")

        data = JsonLinesDataStore(election_tree).load()

        assert len(data.load_problems) == 1
        problem = data.load_problems[0]
        assert problem.source == f"{COMMIT_ID}.json:6"
        assert problem.reason.startswith("malformed file message")
        assert len(data.audit_commits) == 1

    def test_unknown_message_type_skipped(
        self, election: SyntheticElection, election_tree: Path
    ) -> None:
        line = election.message_json(MessageType.FILE, PRINTER_ID, "vote.zip")
        line["type"] = "vote"
        _append_line(_commits(election_tree) / f"{COMMIT_ID}.json", json.dumps(line))

        data = JsonLinesDataStore(election_tree).load()

        assert data.load_problems == ()

    def test_malformed_audit_line(
        self, election: SyntheticElection, election_tree: Path
    ) -> None:
        audit_file = (
            _commits(election_tree)
            / f"{COMMIT_ID}_attachments"
            / f"{PRINTER_ID}_audit"
            / "auditData.json"
        )
        lines = audit_file.read_text(encoding="utf-8").splitlines()
        broken = json.loads(lines[0])
        broken[0]["randomness"][0]["r"] = "zz"
        lines[0] = json.dumps(broken)
        audit_file.write_text("\n".join(lines) + "\n", encoding="utf-8")

        data = JsonLinesDataStore(election_tree).load()

        assert [p.source for p in data.load_problems] == [
            f"{PRINTER_ID}_audit/auditData.json:1"
        ]
        (audit,) = data.audit_commits.values()
        assert len(audit.randomness) == election.ballots_to_audit - 1

        verifier = BallotGenerationVerifier(data)
        assert verifier.do_verification() is False
        failed = {f.check for f in verifier.report.findings}
        assert {CheckName.DATA_LOAD, CheckName.BALLOTS_TO_AUDIT} <= failed

    def test_missing_data_file(self, election_tree: Path) -> None:
        ciphers = (
            _commits(election_tree)
            / f"{COMMIT_ID}_attachments"
            / f"{PRINTER_ID}_ciphers"
            / "ciphers.json"
        )
        ciphers.unlink()

        data = JsonLinesDataStore(election_tree).load()

        assert data.ballot_gen_commits == {}
        assert "cannot read data file" in data.load_problems[0].reason

    def test_duplicate_audit_commit(
        self, election: SyntheticElection, election_tree: Path
    ) -> None:
        line = election.message_json(
            MessageType.BALLOT_AUDIT_COMMIT, PRINTER_ID, f"{PRINTER_ID}_audit.zip"
        )
        _append_line(_commits(election_tree) / f"{COMMIT_ID}.json", json.dumps(line))

        data = JsonLinesDataStore(election_tree).load()

        assert len(data.load_problems) == 1
        assert "duplicate audit commit" in data.load_problems[0].reason
        assert len(data.audit_commits) == 1


class TestBallotGenSpec:
    """Tests for file name overrides."""

    def test_from_json_overrides(self) -> None:
        spec = BallotGenSpec.from_json(
            {"commitsFolder": "published", "auditDataFile": "audit.json"}
        )

        assert spec.commits_dir == "published"
        assert spec.audit_data_file == "audit.json"
        assert spec.ciphers_data_file == BallotGenSpec().ciphers_data_file

    def test_custom_commits_folder(self, election_tree: Path) -> None:
        _commits(election_tree).rename(election_tree / "published")
        spec = BallotGenSpec.from_json({"commitsFolder": "published"})

        data = JsonLinesDataStore(election_tree, spec).load()

        assert data.load_problems == ()
        assert len(data.audit_commits) == 1

"""JSON-lines data store over an extracted commitment tree.

Reads the published ballot generation data from disk into ``BallotGenData``.

Directory layout:
    <base>/election.json                 election key and candidate ids
    <base>/ballotgen_conf.json           race sizes and audit size
    <base>/certs.json                    bulletin board peer certificates
    <base>/commits/<id>.json             one typed file message per line
    <base>/commits/<id>_signature.json   joint signature over the commitment
    <base>/commits/<id>_attachments/     extracted attachment archive, one
                                         sub-directory per inner archive

The three files of a commitment are assembled with ``FinalCommitmentBuilder``.
Each message line names an inner archive (``_fileName``); its data files are
read from the sub-directory with the archive's stem.

A malformed object is excluded and recorded as a ``LoadProblem``; loading
continues. Only the configuration files are fatal.

Usage:
    store = JsonLinesDataStore(Path("./ballotgen_data"))
    data = store.load()
"""

from __future__ import annotations

import json
from collections import defaultdict
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator, Mapping, Optional

from pydantic import ValidationError

from vvote_verifier.application.ports.ballot_gen_data_source import (
    BallotGenData,
    LoadProblem,
)
from vvote_verifier.application.services.base import LoggingMixin
from vvote_verifier.config.ballot_generation_config import BallotGenerationConfig
from vvote_verifier.config.election_config import ElectionConfig
from vvote_verifier.domain.errors.configuration import ConfigurationError
from vvote_verifier.domain.errors.malformed_input import (
    FinalCommitmentError,
    MalformedInputError,
)
from vvote_verifier.domain.models.certificates import CertificatesFile
from vvote_verifier.domain.models.commit_files import (
    ATTACHMENT_SUFFIX,
    JSON_EXTENSION,
    SIGNATURE_SUFFIX,
    CommitAttachment,
    CommitFileMessage,
    CommitSignature,
    FinalCommitment,
    FinalCommitmentBuilder,
)
from vvote_verifier.domain.models.commit_identifier import CommitIdentifier
from vvote_verifier.domain.models.commit_messages import (
    FileMessage,
    MessageType,
    MixRandomCommitMessage,
)
from vvote_verifier.domain.models.committed_ballot import CommittedBallot
from vvote_verifier.domain.models.mix_commits import MixCommitData, MixRandomCommit
from vvote_verifier.domain.models.printer_commits import (
    BallotAuditCommit,
    BallotGenCommit,
)
from vvote_verifier.domain.models.randomness import BallotGenerationRandomness
from vvote_verifier.infrastructure.adapters.records import (
    BallotSubmitResponseRecord,
    CommittedBallotRecord,
    FileMessageRecord,
    MixCommitRecord,
    SignatureMessageRecord,
    ballot_randomness_from_line,
)

# Errors that make one published object unusable
_RECORD_ERRORS = (ValidationError, MalformedInputError, ValueError, TypeError)


@dataclass(frozen=True)
class BallotGenSpec:
    """File names used by the ballot generation commitments.

    Attributes:
        commit_data_file: Mix server commit data file.
        audit_data_file: Printer audit data file (opened randomness).
        ballot_submit_response: Bulletin board response to the audit.
        ciphers_data_file: Printer committed ballots file.
        election_file: Election configuration file.
        ballot_generation_file: Ballot generation configuration file.
        certificates_file: Peer certificates file.
        commits_dir: Directory holding the commitments.
    """

    commit_data_file: str = "commitData.json"
    audit_data_file: str = "auditData.json"
    ballot_submit_response: str = "ballotSubmitResponse.json"
    ciphers_data_file: str = "ciphers.json"
    election_file: str = "election.json"
    ballot_generation_file: str = "ballotgen_conf.json"
    certificates_file: str = "certs.json"
    commits_dir: str = "commits"

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> BallotGenSpec:
        """Read overrides from a spec JSON object; missing keys keep defaults."""
        defaults = cls()
        return cls(
            commit_data_file=data.get("commitDataFile", defaults.commit_data_file),
            audit_data_file=data.get("auditDataFile", defaults.audit_data_file),
            ballot_submit_response=data.get(
                "ballotSubmitResponse", defaults.ballot_submit_response
            ),
            ciphers_data_file=data.get("ciphersDataFile", defaults.ciphers_data_file),
            election_file=data.get("electionFile", defaults.election_file),
            ballot_generation_file=data.get(
                "ballotGenConf", defaults.ballot_generation_file
            ),
            certificates_file=data.get("certsFile", defaults.certificates_file),
            commits_dir=data.get("commitsFolder", defaults.commits_dir),
        )


class _Loaded:
    """Mutable accumulator for one ``load()`` call."""

    def __init__(self) -> None:
        self.problems: list[LoadProblem] = []
        self.audit: dict[CommitIdentifier, BallotAuditCommit] = {}
        self.ballot_gen: dict[CommitIdentifier, BallotGenCommit] = {}
        self.mix: defaultdict[str, defaultdict[CommitIdentifier, list[MixRandomCommit]]] = (
            defaultdict(lambda: defaultdict(list))
        )

    def problem(self, source: str, reason: str) -> None:
        self.problems.append(LoadProblem(source=source, reason=reason))


class JsonLinesDataStore(LoggingMixin):
    """Loads ``BallotGenData`` from an extracted commitment tree."""

    def __init__(self, base_path: Path, spec: Optional[BallotGenSpec] = None) -> None:
        self._base_path = Path(base_path)
        self._spec = spec or BallotGenSpec()
        self._init_logger(component="data_store")

    @property
    def base_path(self) -> Path:
        return self._base_path

    def load(self) -> BallotGenData:
        """Load every published object.

        Raises:
            ConfigurationError: If a configuration or certificates file is
                missing or invalid.
        """
        log = self._log_operation("load", base_path=str(self._base_path))
        ballot_config = BallotGenerationConfig.from_json(
            self._read_config(self._spec.ballot_generation_file)
        )
        election = ElectionConfig.from_json(self._read_config(self._spec.election_file))
        try:
            certificates = CertificatesFile.from_json(
                self._read_config(self._spec.certificates_file)
            )
        except MalformedInputError as e:
            raise ConfigurationError(self._spec.certificates_file, str(e)) from e

        loaded = _Loaded()
        for commitment in self._final_commitments(loaded):
            self._load_commitment(commitment, loaded)

        data = BallotGenData(
            ballot_generation_config=ballot_config,
            election_config=election,
            certificates=certificates,
            audit_commits=loaded.audit,
            ballot_gen_commits=loaded.ballot_gen,
            mix_commits={
                server: dict(by_identifier)
                for server, by_identifier in loaded.mix.items()
            },
            load_problems=tuple(loaded.problems),
        )
        log.info(
            "data_loaded",
            audit_commits=len(data.audit_commits),
            ballot_gen_commits=len(data.ballot_gen_commits),
            mix_servers=len(data.mix_commits),
            load_problems=len(data.load_problems),
        )
        return data

    # ------------------------------------------------------------------
    # Configuration files
    # ------------------------------------------------------------------

    def _read_config(self, name: str) -> Mapping[str, Any]:
        path = self._base_path / name
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise ConfigurationError(name, f"file not found: {path}") from e
        except json.JSONDecodeError as e:
            raise ConfigurationError(name, f"invalid JSON: {e}") from e
        if not isinstance(data, Mapping):
            raise ConfigurationError(name, "a JSON object is required")
        return data

    # ------------------------------------------------------------------
    # Commitment assembly
    # ------------------------------------------------------------------

    def _final_commitments(self, loaded: _Loaded) -> Iterator[FinalCommitment]:
        commits_dir = self._base_path / self._spec.commits_dir
        if not commits_dir.is_dir():
            loaded.problem(str(commits_dir), "commits directory not found")
            return

        builders: dict[str, FinalCommitmentBuilder] = {}
        for path in sorted(commits_dir.iterdir()):
            try:
                part = self._commit_file(path)
            except _RECORD_ERRORS as e:
                loaded.problem(path.name, str(e))
                continue
            if part is None:
                continue
            builder = builders.setdefault(part.identifier, FinalCommitmentBuilder())
            try:
                builder.add(part)
            except FinalCommitmentError as e:
                loaded.problem(path.name, str(e))

        for identifier, builder in builders.items():
            try:
                yield builder.build()
            except FinalCommitmentError as e:
                loaded.problem(identifier, str(e))

    def _commit_file(
        self, path: Path
    ) -> CommitFileMessage | CommitAttachment | CommitSignature | None:
        if path.is_dir():
            if path.name.endswith(ATTACHMENT_SUFFIX):
                return CommitAttachment(path)
            return None
        if path.suffix != JSON_EXTENSION:
            # Unextracted archives and stray files are not commit parts
            return None
        if path.stem.endswith(SIGNATURE_SUFFIX):
            record = SignatureMessageRecord.model_validate(_read_json(path))
            return CommitSignature(
                path,
                json_file=record.json_file,
                attachment_file=record.attachment_file,
                joint_sig=record.joint_sig,
            )
        return CommitFileMessage(path)

    def _load_commitment(self, commitment: FinalCommitment, loaded: _Loaded) -> None:
        message_path = commitment.message.file_path
        try:
            lines = message_path.read_text(encoding="utf-8").splitlines()
        except OSError as e:
            loaded.problem(message_path.name, str(e))
            return

        for line_no, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            source = f"{message_path.name}:{line_no}"
            try:
                record = FileMessageRecord.model_validate(json.loads(line))
            except (json.JSONDecodeError, ValidationError) as e:
                loaded.problem(source, f"malformed file message: {e}")
                continue
            if record.message_type is None:
                self._log.debug("message_skipped", source=source, type=record.type)
                continue
            try:
                message = record.to_domain()
                self._dispatch(commitment, message, source, loaded)
            except OSError as e:
                loaded.problem(source, f"cannot read data file: {e}")
            except _RECORD_ERRORS as e:
                loaded.problem(source, str(e))

    def _dispatch(
        self,
        commitment: FinalCommitment,
        message: FileMessage,
        source: str,
        loaded: _Loaded,
    ) -> None:
        data_dir = commitment.attachment.file_path / Path(message.file_name).stem
        if isinstance(message, MixRandomCommitMessage):
            self._load_mix_commit(commitment, message, data_dir, loaded)
        elif message.message_type is MessageType.BALLOT_GEN_COMMIT:
            self._load_ballot_gen_commit(commitment, message, data_dir, loaded)
        elif message.message_type is MessageType.BALLOT_AUDIT_COMMIT:
            self._load_audit_commit(commitment, message, data_dir, source, loaded)

    # ------------------------------------------------------------------
    # Typed commits
    # ------------------------------------------------------------------

    def _load_mix_commit(
        self,
        commitment: FinalCommitment,
        message: MixRandomCommitMessage,
        data_dir: Path,
        loaded: _Loaded,
    ) -> None:
        identifier = CommitIdentifier(commitment.identifier, message.printer_id)
        path = data_dir / self._spec.commit_data_file
        commits: dict[str, MixCommitData] = {}
        for line_source, value in self._json_lines(path, loaded):
            try:
                data = MixCommitRecord.model_validate(value).to_domain(message.booth_id)
            except _RECORD_ERRORS as e:
                loaded.problem(line_source, str(e))
                continue
            commits.setdefault(data.serial_no, data)
        loaded.mix[message.booth_id][identifier].append(
            MixRandomCommit(message=message, commits=commits)
        )

    def _load_ballot_gen_commit(
        self,
        commitment: FinalCommitment,
        message: FileMessage,
        data_dir: Path,
        loaded: _Loaded,
    ) -> None:
        identifier = CommitIdentifier(commitment.identifier, message.booth_id)
        if identifier in loaded.ballot_gen:
            self._log.warning("duplicate_ballot_gen_commit", identifier=str(identifier))
            return
        path = data_dir / self._spec.ciphers_data_file
        ciphers_data = path.read_bytes()
        ballots: dict[str, CommittedBallot] = {}
        for line_source, value in self._json_lines(path, loaded):
            try:
                ballot = CommittedBallotRecord.model_validate(value).to_domain()
            except _RECORD_ERRORS as e:
                loaded.problem(line_source, str(e))
                continue
            if ballot.serial_no in ballots:
                loaded.problem(line_source, f"duplicate serial number {ballot.serial_no}")
                continue
            ballots[ballot.serial_no] = ballot
        loaded.ballot_gen[identifier] = BallotGenCommit(
            identifier=identifier,
            message=message,
            ballots=ballots,
            ciphers_data=ciphers_data,
        )

    def _load_audit_commit(
        self,
        commitment: FinalCommitment,
        message: FileMessage,
        data_dir: Path,
        source: str,
        loaded: _Loaded,
    ) -> None:
        identifier = CommitIdentifier(commitment.identifier, message.booth_id)
        if identifier in loaded.audit:
            loaded.problem(source, f"duplicate audit commit for {identifier}")
            return
        response = BallotSubmitResponseRecord.model_validate(
            _read_json(data_dir / self._spec.ballot_submit_response)
        ).to_domain()

        randomness: dict[str, BallotGenerationRandomness] = {}
        path = data_dir / self._spec.audit_data_file
        for line_source, value in self._json_lines(path, loaded):
            try:
                if not isinstance(value, list):
                    raise TypeError("audit line must be a JSON array")
                ballot = ballot_randomness_from_line(value)
            except _RECORD_ERRORS as e:
                loaded.problem(line_source, str(e))
                continue
            if ballot.serial_no in randomness:
                loaded.problem(line_source, f"duplicate serial number {ballot.serial_no}")
                continue
            randomness[ballot.serial_no] = ballot
        loaded.audit[identifier] = BallotAuditCommit(
            identifier=identifier,
            message=message,
            response=response,
            randomness=randomness,
        )

    def _json_lines(self, path: Path, loaded: _Loaded) -> Iterator[tuple[str, Any]]:
        """Yield ``(source, value)`` for every non-blank line of ``path``.

        Lines that are not JSON are recorded as problems and skipped.
        """
        with open(path, encoding="utf-8") as f:
            for line_no, line in enumerate(f, start=1):
                if not line.strip():
                    continue
                source = f"{path.parent.name}/{path.name}:{line_no}"
                try:
                    yield source, json.loads(line)
                except json.JSONDecodeError as e:
                    loaded.problem(source, f"invalid JSON: {e}")


def _read_json(path: Path) -> Any:
    with open(path, encoding="utf-8") as f:
        return json.load(f)

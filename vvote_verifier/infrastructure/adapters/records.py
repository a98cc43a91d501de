"""Pydantic schemas for the published JSON records.

Each record mirrors the field names used on the public bulletin board and
converts to the frozen domain model with ``to_domain()``. Schema problems
raise ``pydantic.ValidationError``; domain invariants raise
``MalformedInputError`` subclasses. Loaders treat both as a malformed record.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from vvote_verifier.domain.models.commit_messages import (
    FileMessage,
    MessageType,
    MixRandomCommitMessage,
)
from vvote_verifier.domain.models.committed_ballot import CommittedBallot
from vvote_verifier.domain.models.mix_commits import MixCommitData
from vvote_verifier.domain.models.randomness import (
    BallotGenerationRandomness,
    OpenedRandomnessCommitments,
    RandomnessPair,
)
from vvote_verifier.domain.models.submit_response import (
    BallotSubmitResponse,
    WBBSignature,
)
from vvote_verifier.domain.primitives.elgamal import ElGamalCipher

_RECORD_CONFIG = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class FileMessageRecord(BaseModel):
    """A typed file commit message (one line of ``<id>.json``)."""

    model_config = _RECORD_CONFIG

    type: str
    booth_id: str = Field(alias="boothID")
    booth_sig: str = Field(default="", alias="boothSig")
    commit_time: str = Field(alias="commitTime")
    submission_id: str = Field(alias="submissionID")
    file_size: int = Field(alias="fileSize", ge=0)
    file_name: str = Field(alias="_fileName")
    digest: str
    inner_digest: str = Field(alias="_digest")
    printer_id: Optional[str] = Field(default=None, alias="printerID")

    @model_validator(mode="after")
    def _digests_agree(self) -> "FileMessageRecord":
        if self.digest != self.inner_digest:
            raise ValueError("digest and _digest differ")
        return self

    @property
    def message_type(self) -> Optional[MessageType]:
        try:
            return MessageType(self.type)
        except ValueError:
            return None

    def to_domain(self) -> FileMessage:
        message_type = self.message_type
        if message_type is None:
            raise ValueError(f"unsupported message type '{self.type}'")
        fields: dict[str, Any] = dict(
            message_type=message_type,
            booth_id=self.booth_id,
            booth_sig=self.booth_sig,
            commit_time=self.commit_time,
            submission_id=self.submission_id,
            file_size=self.file_size,
            file_name=self.file_name,
            digest=self.digest,
        )
        if message_type is MessageType.MIX_RANDOM_COMMIT:
            return MixRandomCommitMessage(printer_id=self.printer_id or "", **fields)
        return FileMessage(**fields)


class SignatureMessageRecord(BaseModel):
    """Contents of ``<id>_signature.json``."""

    model_config = _RECORD_CONFIG

    joint_sig: str = Field(alias="jointSig")
    json_file: str = Field(alias="jsonFile")
    attachment_file: str = Field(alias="attachmentFile")


class RandomnessPairRecord(BaseModel):
    model_config = _RECORD_CONFIG

    witness: str = Field(alias="rComm")
    randomness_value: str = Field(alias="r")

    def to_domain(self) -> RandomnessPair:
        return RandomnessPair(
            witness=self.witness, randomness_value=self.randomness_value
        )


class OpenedRandomnessRecord(BaseModel):
    """One mix server's opened randomness for one audited ballot."""

    model_config = _RECORD_CONFIG

    serial_no: str = Field(alias="serialNo")
    peer_id: str = Field(alias="peerID")
    randomness: list[RandomnessPairRecord]

    def to_domain(self) -> OpenedRandomnessCommitments:
        return OpenedRandomnessCommitments(
            serial_no=self.serial_no,
            peer_id=self.peer_id,
            pairs=tuple(pair.to_domain() for pair in self.randomness),
        )


def ballot_randomness_from_line(records: list[Any]) -> BallotGenerationRandomness:
    """Convert one audit data line (a JSON array of opened records).

    Raises:
        pydantic.ValidationError: If a record does not match the schema.
        BallotRandomnessError: If the records are inconsistent.
    """
    opened = [OpenedRandomnessRecord.model_validate(record).to_domain() for record in records]
    return BallotGenerationRandomness.from_contributions(opened)


class MixCommitRecord(BaseModel):
    """One line of a mix server's commit data file."""

    model_config = _RECORD_CONFIG

    serial_no: str = Field(alias="serialNo")
    randomness: list[str]

    def to_domain(self, server_name: str) -> MixCommitData:
        return MixCommitData(
            server_name=server_name,
            serial_no=self.serial_no,
            commitments=tuple(self.randomness),
        )


class CommittedBallotRecord(BaseModel):
    """One line of a printer's ciphers data file."""

    model_config = _RECORD_CONFIG

    serial_no: str = Field(alias="serialNo")
    permutation: str
    ciphers: list[dict[str, Any]]

    def to_domain(self) -> CommittedBallot:
        return CommittedBallot(
            serial_no=self.serial_no,
            permutation=self.permutation,
            ciphers=tuple(ElGamalCipher.from_json(cipher) for cipher in self.ciphers),
        )


class WBBSignatureRecord(BaseModel):
    """A bulletin board peer's partial signature in a submit response."""

    model_config = _RECORD_CONFIG

    valid: Optional[bool] = None
    serial_no: str = Field(alias="serialNo")
    commit_time: str = Field(alias="commitTime")
    type: str
    wbb_id: str = Field(alias="WBBID")
    wbb_sig: str = Field(alias="WBBSig")

    @field_validator("type")
    @classmethod
    def _signs_ballot_gen_commit(cls, value: str) -> str:
        if value != MessageType.BALLOT_GEN_COMMIT.value:
            raise ValueError(
                f"signature type must be {MessageType.BALLOT_GEN_COMMIT.value}, "
                f"got {value}"
            )
        return value

    def to_domain(self) -> WBBSignature:
        return WBBSignature(
            wbb_id=self.wbb_id,
            wbb_sig=self.wbb_sig,
            serial_no=self.serial_no,
            commit_time=self.commit_time,
            message_type=self.type,
            used_as_part_of_threshold=self.valid is not None,
            valid=True if self.valid is None else self.valid,
        )


class BallotSubmitResponseRecord(BaseModel):
    """The bulletin board response to a printer's audit submission."""

    model_config = _RECORD_CONFIG

    submission_id: str = Field(alias="submissionID")
    ballot_file: str = Field(default="", alias="ballotFile")
    peer_id: str = Field(alias="peerID")
    fiat_shamir: str = Field(alias="fiatShamir")
    wbb_signatures: list[WBBSignatureRecord] = Field(alias="WBBSig")

    def to_domain(self) -> BallotSubmitResponse:
        return BallotSubmitResponse(
            submission_id=self.submission_id,
            ballot_file=self.ballot_file,
            peer_id=self.peer_id,
            fiat_shamir=self.fiat_shamir,
            wbb_signatures=tuple(
                signature.to_domain() for signature in self.wbb_signatures
            ),
        )

"""Commit files and final commitments.

The public bulletin board publishes each commitment as three files sharing
one identifier:

- ``<id>.json``: the commit message file, one typed file message per line
- ``<id>_attachments.zip``: the attachment archive carrying the data files
  (read here from its extracted directory ``<id>_attachments``)
- ``<id>_signature.json``: the board's joint signature, naming the message
  and attachment files it covers

``CommitFile`` is the tagged union of the three kinds. A
``FinalCommitmentBuilder`` collects exactly one file of each kind, rejecting
any part whose identifier or file names disagree with the parts already
present, and builds an immutable ``FinalCommitment`` once all three are in.

Usage:
    builder = FinalCommitmentBuilder()
    builder.add(CommitFileMessage(path_to_json))
    builder.add(CommitAttachment(path_to_attachment))
    builder.add(CommitSignature(path_to_signature, json_file=..., attachment_file=...))
    commitment = builder.build()
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import ClassVar, Union, cast

from vvote_verifier.domain.errors.malformed_input import (
    CommitFileError,
    FinalCommitmentError,
)

ATTACHMENT_SUFFIX = "_attachments"
SIGNATURE_SUFFIX = "_signature"
ARCHIVE_EXTENSION = ".zip"
JSON_EXTENSION = ".json"


class CommitFileKind(str, Enum):
    MESSAGE = "message"
    ATTACHMENT = "attachment"
    SIGNATURE = "signature"


def archive_name(name: str) -> str:
    """File name with any ``.zip`` extension removed."""
    if name.endswith(ARCHIVE_EXTENSION):
        return name[: -len(ARCHIVE_EXTENSION)]
    return name


@dataclass(frozen=True)
class CommitFileMessage:
    """The ``<id>.json`` commit message file."""

    kind: ClassVar[CommitFileKind] = CommitFileKind.MESSAGE

    file_path: Path

    def __post_init__(self) -> None:
        if self.file_path.suffix != JSON_EXTENSION:
            raise CommitFileError(f"commit message must be a .json file: {self.file_path}")
        if self.file_path.stem.endswith(SIGNATURE_SUFFIX):
            raise CommitFileError(f"{self.file_path.name} is a signature file")

    @property
    def identifier(self) -> str:
        return self.file_path.stem


@dataclass(frozen=True)
class CommitAttachment:
    """The attachment archive, or the directory it was extracted to."""

    kind: ClassVar[CommitFileKind] = CommitFileKind.ATTACHMENT

    file_path: Path

    def __post_init__(self) -> None:
        if self.file_path.suffix not in ("", ARCHIVE_EXTENSION):
            raise CommitFileError(
                f"commit attachment must be a .zip archive or directory: {self.file_path}"
            )

    @property
    def identifier(self) -> str:
        name = archive_name(self.file_path.name)
        if name.endswith(ATTACHMENT_SUFFIX):
            return name[: -len(ATTACHMENT_SUFFIX)]
        return name


@dataclass(frozen=True)
class CommitSignature:
    """The ``<id>_signature.json`` joint signature file.

    Attributes:
        json_file: Name of the commit message file the signature covers.
        attachment_file: Name of the attachment archive it covers.
        joint_sig: Base64 joint signature of the board.
    """

    kind: ClassVar[CommitFileKind] = CommitFileKind.SIGNATURE

    file_path: Path
    json_file: str = ""
    attachment_file: str = ""
    joint_sig: str = ""

    def __post_init__(self) -> None:
        if self.file_path.suffix != JSON_EXTENSION:
            raise CommitFileError(f"commit signature must be a .json file: {self.file_path}")
        if not self.json_file or not self.attachment_file:
            raise CommitFileError(
                f"{self.file_path.name} must name its json and attachment files"
            )

    @property
    def identifier(self) -> str:
        stem = self.file_path.stem
        if stem.endswith(SIGNATURE_SUFFIX):
            return stem[: -len(SIGNATURE_SUFFIX)]
        return stem


CommitFile = Union[CommitFileMessage, CommitAttachment, CommitSignature]


@dataclass(frozen=True)
class FinalCommitment:
    """A complete, consistent commitment: message, attachment and signature."""

    identifier: str
    message: CommitFileMessage
    attachment: CommitAttachment
    signature: CommitSignature


@dataclass
class FinalCommitmentBuilder:
    """Collects the three parts of a final commitment."""

    _parts: dict[CommitFileKind, CommitFile] = field(default_factory=dict)

    @property
    def identifier(self) -> str | None:
        for part in self._parts.values():
            return part.identifier
        return None

    @property
    def is_complete(self) -> bool:
        return len(self._parts) == len(CommitFileKind)

    def add(self, part: CommitFile) -> None:
        """Add one part.

        Raises:
            FinalCommitmentError: If the slot is already filled, the
                identifier differs from the parts already present, or the
                signature names other files.
        """
        if part.kind in self._parts:
            raise FinalCommitmentError(
                f"{part.kind.value} already present for commitment {self.identifier}"
            )
        current = self.identifier
        if current is not None and part.identifier != current:
            raise FinalCommitmentError(
                f"{part.kind.value} {part.file_path.name} has identifier "
                f"{part.identifier}, expected {current}"
            )
        candidate = dict(self._parts)
        candidate[part.kind] = part
        _check_signature_file_names(candidate)
        self._parts = candidate

    def build(self) -> FinalCommitment:
        """Return the final commitment.

        Raises:
            FinalCommitmentError: If any of the three parts is missing.
        """
        missing = [kind.value for kind in CommitFileKind if kind not in self._parts]
        if missing:
            raise FinalCommitmentError(
                f"commitment {self.identifier} is missing: {', '.join(missing)}"
            )
        # slots are keyed by each part's class-level kind
        message = cast(CommitFileMessage, self._parts[CommitFileKind.MESSAGE])
        attachment = cast(CommitAttachment, self._parts[CommitFileKind.ATTACHMENT])
        signature = cast(CommitSignature, self._parts[CommitFileKind.SIGNATURE])
        return FinalCommitment(
            identifier=message.identifier,
            message=message,
            attachment=attachment,
            signature=signature,
        )


def _check_signature_file_names(parts: dict[CommitFileKind, CommitFile]) -> None:
    signature = parts.get(CommitFileKind.SIGNATURE)
    if not isinstance(signature, CommitSignature):
        return
    message = parts.get(CommitFileKind.MESSAGE)
    if message is not None and signature.json_file != message.file_path.name:
        raise FinalCommitmentError(
            f"signature covers {signature.json_file}, "
            f"message file is {message.file_path.name}"
        )
    attachment = parts.get(CommitFileKind.ATTACHMENT)
    if attachment is not None and archive_name(signature.attachment_file) != archive_name(
        attachment.file_path.name
    ):
        raise FinalCommitmentError(
            f"signature covers {signature.attachment_file}, "
            f"attachment is {attachment.file_path.name}"
        )

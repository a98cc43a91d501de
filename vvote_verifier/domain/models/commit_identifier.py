"""Commit identifier value object.

Each PoD printer's data inside a public bulletin board commitment is keyed by
the pair (commitment identifier, printer id).
"""

from dataclasses import dataclass

from vvote_verifier.domain.errors.malformed_input import CommitIdentifierError


@dataclass(frozen=True)
class CommitIdentifier:
    """Identifies one printer's data within one commitment.

    Attributes:
        identifier: The public bulletin board commitment identifier.
        printer_id: The PoD printer (booth) id.
    """

    identifier: str
    printer_id: str

    def __post_init__(self) -> None:
        if not self.identifier:
            raise CommitIdentifierError("identifier cannot be empty")
        if not self.printer_id:
            raise CommitIdentifierError("printer_id cannot be empty")

    def __str__(self) -> str:
        return f"{self.identifier}/{self.printer_id}"

"""Adapters reading the published commitment data.

Available Adapters:
- JsonLinesDataStore: loads BallotGenData from an extracted commitment tree
"""

from vvote_verifier.infrastructure.adapters.json_lines_store import (
    BallotGenSpec,
    JsonLinesDataStore,
)

__all__: list[str] = [
    "BallotGenSpec",
    "JsonLinesDataStore",
]

"""Application services."""

from vvote_verifier.application.services.ballot_generation_verifier import (
    BallotGenerationVerifier,
)
from vvote_verifier.application.services.findings_collector import FindingsCollector
from vvote_verifier.application.services.verifier_registry import (
    VerifierName,
    build_verifier,
)

__all__: list[str] = [
    "BallotGenerationVerifier",
    "FindingsCollector",
    "VerifierName",
    "build_verifier",
]

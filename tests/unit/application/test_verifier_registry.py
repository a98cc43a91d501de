"""Unit tests for the verifier registry."""

import pytest

from tests.helpers.synthetic_election import SyntheticElection
from vvote_verifier.application.services.ballot_generation_verifier import (
    BallotGenerationVerifier,
)
from vvote_verifier.application.services.verifier_registry import (
    VerifierName,
    build_verifier,
)
from vvote_verifier.config.verifier_settings import VerifierSettings
from vvote_verifier.domain.errors.configuration import ConfigurationError


class TestBuildVerifier:
    """Tests for build_verifier."""

    def test_by_enum(self, election: SyntheticElection) -> None:
        verifier = build_verifier(VerifierName.BALLOT_GENERATION, election.data())

        assert isinstance(verifier, BallotGenerationVerifier)

    def test_by_string(self, election: SyntheticElection) -> None:
        settings = VerifierSettings(max_concurrency=2)

        verifier = build_verifier("ballot_generation", election.data(), settings)

        assert isinstance(verifier, BallotGenerationVerifier)

    def test_unknown_name(self, election: SyntheticElection) -> None:
        with pytest.raises(ConfigurationError, match="vote_packing"):
            build_verifier("vote_packing", election.data())

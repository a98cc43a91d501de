"""Unit tests for the configuration objects."""

import pytest

from tests.helpers.synthetic_election import SyntheticElection
from vvote_verifier.config.ballot_generation_config import BallotGenerationConfig
from vvote_verifier.config.election_config import ElectionConfig
from vvote_verifier.config.verifier_settings import VerifierSettings
from vvote_verifier.domain.errors.configuration import (
    ConfigurationError,
    CurveMismatchError,
)

RACES = [
    {"id": "la", "candidates": 5},
    {"id": "lc_atl", "candidates": 6},
    {"id": "lc_btl", "candidates": 20},
]


class TestBallotGenerationConfig:
    """Tests for BallotGenerationConfig."""

    def test_from_json(self) -> None:
        config = BallotGenerationConfig.from_json(
            {
                "races": RACES,
                "ballotsToAudit": 10,
                "ballotToGenerate": 100,
                "ballotList": "ballots.txt",
            }
        )

        assert config.race_sizes == (5, 6, 20)
        assert config.number_of_candidates == 31
        assert config.number_of_randomness_values == 32
        assert config.ballots_to_audit == 10
        assert config.ballot_list == "ballots.txt"

    def test_races_out_of_order_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="lc_atl"):
            BallotGenerationConfig.from_json(
                {
                    "races": [RACES[0], RACES[2], RACES[1]],
                    "ballotsToAudit": 1,
                    "ballotToGenerate": 2,
                }
            )

    def test_missing_count_rejected(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            BallotGenerationConfig.from_json({"races": RACES, "ballotToGenerate": 2})

        assert exc_info.value.setting == "ballotsToAudit"

    def test_boolean_is_not_an_integer(self) -> None:
        with pytest.raises(ConfigurationError):
            BallotGenerationConfig.from_json(
                {"races": RACES, "ballotsToAudit": True, "ballotToGenerate": 2}
            )

    def test_audit_larger_than_generate_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="exceeds"):
            BallotGenerationConfig(1, 1, 1, ballots_to_generate=5, ballots_to_audit=6)

    def test_generate_must_be_positive(self) -> None:
        with pytest.raises(ConfigurationError):
            BallotGenerationConfig(1, 1, 1, ballots_to_generate=0, ballots_to_audit=0)


class TestElectionConfig:
    """Tests for ElectionConfig."""

    def test_from_json(self, election: SyntheticElection) -> None:
        config = ElectionConfig.from_json(election.election_json())

        assert config.base_encrypted_ids == tuple(election.base_ids)
        assert len(config.plaintext_ids) == len(election.plaintext_ids)

    def test_plaintext_ids_optional(self, election: SyntheticElection) -> None:
        config = ElectionConfig.from_json(election.election_json(include_plaintext=False))

        assert config.plaintext_ids == ()

    def test_other_curve_rejected(self, election: SyntheticElection) -> None:
        data = election.election_json()
        data["curve"] = "P-384"

        with pytest.raises(CurveMismatchError) as exc_info:
            ElectionConfig.from_json(data)

        assert exc_info.value.actual == "P-384"
        assert isinstance(exc_info.value, ConfigurationError)

    def test_missing_key_rejected(self, election: SyntheticElection) -> None:
        data = election.election_json()
        del data["publicKey"]

        with pytest.raises(ConfigurationError) as exc_info:
            ElectionConfig.from_json(data)

        assert exc_info.value.setting == "publicKey"

    def test_invalid_point_rejected(self, election: SyntheticElection) -> None:
        data = election.election_json()
        data["publicKey"] = {"x": "1", "y": "2"}

        with pytest.raises(ConfigurationError):
            ElectionConfig.from_json(data)


class TestVerifierSettings:
    """Tests for VerifierSettings."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for key in (
            "VVOTE_BLS_PEERS",
            "VVOTE_BLS_THRESHOLD",
            "VVOTE_MAX_CONCURRENCY",
            "VVOTE_LOG_FORMAT",
        ):
            monkeypatch.delenv(key, raising=False)

        settings = VerifierSettings.from_environment()

        assert settings.bls_peers == 5
        assert settings.bls_threshold == 4
        assert settings.max_concurrency == 4
        assert settings.log_format == "production"

    def test_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("VVOTE_BLS_PEERS", "7")
        monkeypatch.setenv("VVOTE_BLS_THRESHOLD", "5")
        monkeypatch.setenv("VVOTE_MAX_CONCURRENCY", "16")
        monkeypatch.setenv("VVOTE_LOG_FORMAT", "Development")

        settings = VerifierSettings.from_environment()

        assert (settings.bls_peers, settings.bls_threshold) == (7, 5)
        assert settings.max_concurrency == 16
        assert settings.log_format == "development"

    def test_invalid_values_fall_back(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("VVOTE_BLS_PEERS", "many")
        monkeypatch.setenv("VVOTE_BLS_THRESHOLD", "9")
        monkeypatch.setenv("VVOTE_MAX_CONCURRENCY", "1000")
        monkeypatch.setenv("VVOTE_LOG_FORMAT", "xml")

        settings = VerifierSettings.from_environment()

        assert settings.bls_peers == 5
        assert settings.bls_threshold == 4
        assert settings.max_concurrency == 64
        assert settings.log_format == "production"

    def test_direct_construction_validates(self) -> None:
        with pytest.raises(ValueError):
            VerifierSettings(bls_peers=3, bls_threshold=4)

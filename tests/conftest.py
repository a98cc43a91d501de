"""
Pytest configuration and shared fixtures for the verifier tests.

Testing Standards:
- All async tests use pytest.mark.asyncio (auto mode enabled in pyproject.toml)
- Unit tests go in tests/unit/, mirroring the package layers
- End-to-end scenarios over the synthetic election go in tests/integration/
- Pairing-heavy tests are marked slow
"""

from pathlib import Path

import pytest
import structlog

from tests.helpers.synthetic_election import SyntheticElection, build_election
from vvote_verifier.infrastructure.observability.run_context import set_run_id


@pytest.fixture(autouse=True)
def reset_observability():
    """Drop logging configuration and run id installed by a test (the CLI sets both)."""
    yield
    structlog.reset_defaults()
    set_run_id("")


@pytest.fixture(scope="session")
def election() -> SyntheticElection:
    """An honest 10-ballot, 3-audit election with three mix servers."""
    return build_election()


@pytest.fixture
def election_tree(election: SyntheticElection, tmp_path: Path) -> Path:
    """The honest election written as an extracted commitment tree."""
    return election.write_tree(tmp_path / "ballotgen")


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from vvote_verifier import __version__

    return __version__

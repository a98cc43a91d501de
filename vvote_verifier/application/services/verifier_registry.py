"""Registry of available verifiers.

Maps a ``VerifierName`` to the constructor of the verifier it names, so that
callers (the CLI, tests) can build a verifier from a name without knowing
its class.
"""

from enum import Enum
from typing import Callable, Optional

from vvote_verifier.application.ports.ballot_gen_data_source import BallotGenData
from vvote_verifier.application.services.ballot_generation_verifier import (
    BallotGenerationVerifier,
)
from vvote_verifier.config.verifier_settings import VerifierSettings
from vvote_verifier.domain.errors.configuration import ConfigurationError


class VerifierName(str, Enum):
    """Names of the available verifiers."""

    BALLOT_GENERATION = "ballot_generation"


VerifierFactory = Callable[
    [BallotGenData, Optional[VerifierSettings]], BallotGenerationVerifier
]

VERIFIER_REGISTRY: dict[VerifierName, VerifierFactory] = {
    VerifierName.BALLOT_GENERATION: BallotGenerationVerifier,
}


def build_verifier(
    name: VerifierName | str,
    data: BallotGenData,
    settings: Optional[VerifierSettings] = None,
) -> BallotGenerationVerifier:
    """Construct the verifier registered under ``name``.

    Raises:
        ConfigurationError: If no verifier is registered under ``name``.
    """
    try:
        factory = VERIFIER_REGISTRY[VerifierName(name)]
    except (KeyError, ValueError):
        raise ConfigurationError("verifier", f"unknown verifier '{name}'") from None
    return factory(data, settings)

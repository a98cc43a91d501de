"""Configuration module for the ballot generation verifier.

Available Configurations:
- BallotGenerationConfig: race sizes and audit size
- ElectionConfig: election key and candidate identifier tables
- VerifierSettings: runtime settings from the environment
"""

from vvote_verifier.config.ballot_generation_config import BallotGenerationConfig
from vvote_verifier.config.election_config import ElectionConfig
from vvote_verifier.config.verifier_settings import VerifierSettings

__all__ = [
    "BallotGenerationConfig",
    "ElectionConfig",
    "VerifierSettings",
]

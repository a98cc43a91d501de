"""Application ports."""

from vvote_verifier.application.ports.ballot_gen_data_source import (
    BallotGenData,
    BallotGenDataSource,
    LoadProblem,
)

__all__: list[str] = ["BallotGenData", "BallotGenDataSource", "LoadProblem"]

"""Test helpers for the verifier tests.

Helpers:
    SyntheticElection: an honest ballot generation run for one printer
    build_election: builds a SyntheticElection with chosen sizes
    ScriptedDRBG: replays fixed DRBG output for hand-worked draws

Usage:
    from tests.helpers import build_election
"""

from tests.helpers.scripted_drbg import ScriptedDRBG
from tests.helpers.synthetic_election import SyntheticElection, build_election

__all__ = ["ScriptedDRBG", "SyntheticElection", "build_election"]

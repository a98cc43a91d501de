"""Verifier runtime settings.

Environment Variables:
- VVOTE_BLS_PEERS: Number of bulletin board signing peers (default: 5)
- VVOTE_BLS_THRESHOLD: Shares needed for the joint signature (default: 4)
- VVOTE_MAX_CONCURRENCY: Worker threads for ballot checks (default: 4, max: 64)
- VVOTE_LOG_FORMAT: "production" (JSON) or "development" (console)
- LOG_LEVEL: Log level name (default: INFO)

Invalid values fall back to the defaults.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from vvote_verifier.domain.primitives.bls_threshold import (
    DEFAULT_NUMBER_OF_NODES,
    DEFAULT_THRESHOLD,
)

DEFAULT_MAX_CONCURRENCY = 4
MAX_CONCURRENCY_CEILING = 64
DEFAULT_LOG_FORMAT = "production"
LOG_FORMATS = ("production", "development")


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed integer value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


@dataclass(frozen=True)
class VerifierSettings:
    """Settings for one verifier process.

    Attributes:
        bls_peers: Number of signing peers.
        bls_threshold: Shares required to combine the joint signature.
        max_concurrency: Upper bound on concurrent ballot checks.
        log_format: "production" or "development".
    """

    bls_peers: int = DEFAULT_NUMBER_OF_NODES
    bls_threshold: int = DEFAULT_THRESHOLD
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY
    log_format: str = DEFAULT_LOG_FORMAT

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.bls_peers < 1:
            raise ValueError(f"bls_peers must be positive, got {self.bls_peers}")
        if not 1 <= self.bls_threshold <= self.bls_peers:
            raise ValueError(
                f"bls_threshold must be between 1 and {self.bls_peers}, "
                f"got {self.bls_threshold}"
            )
        if not 1 <= self.max_concurrency <= MAX_CONCURRENCY_CEILING:
            raise ValueError(
                f"max_concurrency must be between 1 and {MAX_CONCURRENCY_CEILING}, "
                f"got {self.max_concurrency}"
            )
        if self.log_format not in LOG_FORMATS:
            raise ValueError(
                f"log_format must be one of {LOG_FORMATS}, got {self.log_format}"
            )

    @classmethod
    def from_environment(cls) -> VerifierSettings:
        """Create settings from environment variables with defaults."""
        peers = _get_int_env("VVOTE_BLS_PEERS", DEFAULT_NUMBER_OF_NODES)
        if peers < 1:
            peers = DEFAULT_NUMBER_OF_NODES

        threshold = _get_int_env("VVOTE_BLS_THRESHOLD", DEFAULT_THRESHOLD)
        if not 1 <= threshold <= peers:
            threshold = min(DEFAULT_THRESHOLD, peers)

        concurrency = _get_int_env("VVOTE_MAX_CONCURRENCY", DEFAULT_MAX_CONCURRENCY)
        # Clamp to valid range
        concurrency = max(1, min(concurrency, MAX_CONCURRENCY_CEILING))

        log_format = os.environ.get("VVOTE_LOG_FORMAT", DEFAULT_LOG_FORMAT).lower()
        if log_format not in LOG_FORMATS:
            log_format = DEFAULT_LOG_FORMAT

        return cls(
            bls_peers=peers,
            bls_threshold=threshold,
            max_concurrency=concurrency,
            log_format=log_format,
        )

"""Observability: structured logging and run correlation.

Usage:
    from vvote_verifier.infrastructure.observability import (
        configure_structlog,
        generate_run_id,
        set_run_id,
    )

    configure_structlog(environment="production")
    set_run_id(generate_run_id())
"""

from vvote_verifier.infrastructure.observability.logging import (
    RESULTS_CHANNEL,
    configure_structlog,
    get_results_logger,
)
from vvote_verifier.infrastructure.observability.run_context import (
    generate_run_id,
    get_run_id,
    run_id_processor,
    set_run_id,
)

__all__: list[str] = [
    "RESULTS_CHANNEL",
    "configure_structlog",
    "generate_run_id",
    "get_results_logger",
    "get_run_id",
    "run_id_processor",
    "set_run_id",
]

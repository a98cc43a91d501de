"""Structured logging configuration with structlog.

Two output modes:
- production: one JSON object per line, for archiving alongside the report
- development: coloured console output

Log output goes to stderr; stdout is reserved for the report.

Log Entry Format (production):
    {
        "timestamp": "2024-01-01T00:00:00.000000Z",
        "level": "info",
        "event": "check_failed",
        "run_id": "uuid",
        "channel": "results",
        ...additional context
    }

Verification outcomes go to a separate results channel (``channel="results"``)
so that an auditor can filter the pass/fail trail from diagnostic output.

Usage:
    from vvote_verifier.infrastructure.observability import configure_structlog

    configure_structlog(environment="production")
"""

import logging
import os
import sys
from typing import cast

import structlog
from structlog.typing import Processor

from vvote_verifier.infrastructure.observability.run_context import run_id_processor

# Environment variable for log level (default: INFO)
LOG_LEVEL_ENV = "LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"
RESULTS_CHANNEL = "results"


def _get_log_level() -> int:
    """Get the configured log level from environment.

    Returns:
        The logging level integer (e.g., logging.INFO).
    """
    level_name = os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper()
    return getattr(logging, level_name, logging.INFO)


def configure_structlog(environment: str = "production") -> None:
    """Configure structlog once at startup.

    Args:
        environment: 'production' for JSON output, 'development' for console.
    """
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        cast(Processor, run_id_processor),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if environment == "production":
        final_processor: Processor = structlog.processors.JSONRenderer()
    else:
        final_processor = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=shared_processors + [final_processor],
        wrapper_class=structlog.make_filtering_bound_logger(_get_log_level()),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_results_logger() -> structlog.BoundLogger:
    """Logger for the verification results channel."""
    return structlog.get_logger().bind(channel=RESULTS_CHANNEL)

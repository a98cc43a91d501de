"""Verification run id management.

Every verification run gets a run id held in a context variable, so that
all log entries of one run, including those emitted from worker threads
started with ``asyncio.to_thread``, can be correlated.

Usage:
    run_id = generate_run_id()
    set_run_id(run_id)

    # In structlog configuration
    processors = [..., run_id_processor, ...]
"""

from contextvars import ContextVar
from typing import Any
from uuid import uuid4

# Empty string when no run is active
_run_id: ContextVar[str] = ContextVar("verification_run_id", default="")


def generate_run_id() -> str:
    """Generate a new run id (UUID4)."""
    return str(uuid4())


def get_run_id() -> str:
    """Get the run id of the current context, or an empty string."""
    return _run_id.get()


def set_run_id(run_id: str) -> None:
    """Set the run id for the current context."""
    _run_id.set(run_id)


def run_id_processor(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor adding ``run_id`` to every log entry.

    Args:
        logger: The logger instance (unused, required by structlog).
        method_name: The logging method name (unused, required by structlog).
        event_dict: The event dictionary to modify.

    Returns:
        The event dictionary with run_id added when a run is active.
    """
    run_id = get_run_id()
    if run_id:
        event_dict.setdefault("run_id", run_id)
    return event_dict

"""Base service logging mixin.

Provides the LoggingMixin class for structured logging across the
verification services.

Usage:
    from vvote_verifier.application.services.base import LoggingMixin

    class MyVerifier(LoggingMixin):
        def __init__(self, data: BallotGenData) -> None:
            self._data = data
            self._init_logger(component="ballot_generation")

        def verify_something(self) -> bool:
            log = self._log_operation("verify_something", serial_no="P1:1")
            log.info("verification_started")
            ...
"""

import structlog

from vvote_verifier.infrastructure.observability.run_context import get_run_id


class LoggingMixin:
    """Mixin providing structured logging for services.

    The logger is bound with:
    - service: The class name of the service
    - component: The component type (default: "verifier")

    Each operation gets:
    - operation: The name of the operation being performed
    - run_id: The verification run id from context
    - Any additional context passed to _log_operation()

    Attributes:
        _log: The structlog BoundLogger for this service instance.
    """

    _log: structlog.BoundLogger

    def _init_logger(self, component: str = "verifier") -> None:
        """Initialize the logger with service name binding.

        Args:
            component: The component type for log categorization.
        """
        self._log = structlog.get_logger().bind(
            service=self.__class__.__name__,
            component=component,
        )

    def _log_operation(
        self,
        operation: str,
        **context: object,
    ) -> structlog.BoundLogger:
        """Create an operation-scoped logger carrying the run id.

        Args:
            operation: Name of the operation being performed.
            **context: Additional context to bind to the logger.

        Returns:
            BoundLogger with operation and run context.
        """
        return self._log.bind(
            operation=operation,
            run_id=get_run_id(),
            **context,
        )

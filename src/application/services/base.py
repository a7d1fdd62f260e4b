"""Base service logging mixin.

Every application service derives from LoggingMixin so that log entries
share one shape: the service class name, a component tag, the operation
name, the request correlation ID and any identifiers the operation binds.

Usage:
    from src.application.services.base import LoggingMixin

    class MyService(LoggingMixin):
        def __init__(self, store: CaseStoreProtocol) -> None:
            self._store = store
            self._init_logger(component="session")

        async def complete(self, session_id: UUID) -> None:
            log = self._log_operation("complete_session", session_id=str(session_id))
            log.info("complete_session_started")
            ...
            log.info("complete_session_completed")
"""

import structlog

from src.infrastructure.observability.correlation import get_correlation_id


class LoggingMixin:
    """Mixin providing structured logging for services.

    Attributes:
        _log: The structlog BoundLogger for this service instance.
    """

    _log: structlog.BoundLogger

    def _init_logger(self, component: str = "case_lifecycle") -> None:
        """Bind the logger to the service name and component.

        Should be called in __init__ after setting up dependencies.

        Args:
            component: Component tag for log categorization.
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
        """Create an operation-scoped logger carrying the correlation ID.

        Args:
            operation: Name of the operation being performed.
            **context: Identifiers to bind (stringified UUIDs, counts).

        Returns:
            BoundLogger with operation and correlation context.
        """
        return self._log.bind(
            operation=operation,
            correlation_id=get_correlation_id(),
            **context,
        )

"""All-or-nothing execution of multi-record operations.

Several case-lifecycle operations touch more than one record: converting a
protocol writes a resource and updates the protocol, publishing a decision
appends a snapshot and updates the decision, removing a notification item
removes its attempts. Either every write lands or none does.

``AtomicOperationContext`` is an async context manager with rollback
handlers. When the body raises, handlers run in reverse registration order
(LIFO) and the original exception propagates unchanged.

Usage:
    async with AtomicOperationContext(operation="convert_protocol") as ctx:
        snapshot = tables.copy()
        ctx.add_rollback(lambda: tables.restore(snapshot))
        await write_resource()
        await update_protocol()
"""

import inspect
from collections.abc import Callable, Coroutine
from types import TracebackType
from typing import Any

import structlog

log = structlog.get_logger()

# Rollback handlers take no arguments and may be sync or async
RollbackHandler = Callable[[], None] | Callable[[], Coroutine[Any, Any, None]]


class AtomicOperationContext:
    """Context manager running rollback handlers when its body fails.

    Handlers run LIFO. A failing handler is logged and does not stop the
    remaining handlers; the exception raised by the body is always the one
    that propagates.

    Attributes:
        operation: Name used in log events.
        rolled_back: True once the handlers have run.
    """

    def __init__(self, operation: str = "atomic_operation") -> None:
        self.operation = operation
        self.rolled_back = False
        self._rollback_handlers: list[RollbackHandler] = []

    def add_rollback(self, handler: RollbackHandler) -> None:
        """Register a handler to undo a write if the operation fails.

        Args:
            handler: Zero-argument callable, sync or async.
        """
        self._rollback_handlers.append(handler)

    async def __aenter__(self) -> "AtomicOperationContext":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> bool:
        if exc_val is None:
            return False

        log.info(
            "atomic_operation_rolling_back",
            operation=self.operation,
            error_type=exc_type.__name__ if exc_type else "Unknown",
            rollback_count=len(self._rollback_handlers),
        )
        for handler in reversed(self._rollback_handlers):
            try:
                result = handler()
                if inspect.isawaitable(result):
                    await result
            except Exception as rollback_error:
                log.error(
                    "rollback_handler_failed",
                    operation=self.operation,
                    rollback_error=str(rollback_error),
                    rollback_error_type=type(rollback_error).__name__,
                )
        self.rolled_back = True
        return False

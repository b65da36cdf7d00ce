"""Exception types raised by the guard package."""

from __future__ import annotations


class TriggerGuardError(RuntimeError):
    """Base class for every error raised by trigger_guard."""


class ContextError(TriggerGuardError):
    """Raised when a handler is built outside a triggering execution context.

    Also raised for registry misuse, since both mean a handler would observe
    phase state that does not belong to the operation it runs in.
    """

    def __init__(
        self,
        message: str,
        *,
        operation_id: str | None = None,
        batch_size: int | None = None,
    ) -> None:
        super().__init__(message)
        self.operation_id = operation_id
        self.batch_size = batch_size

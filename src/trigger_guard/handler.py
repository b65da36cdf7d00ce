"""Base class for trigger handlers and the non-raising build helper."""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import model_validator

from trigger_guard.context import TriggerContext, validate_trigger_context
from trigger_guard.errors import ContextError
from trigger_guard.guard import ExecutionGuard
from trigger_guard.schema.base import TypedBaseModel
from trigger_guard.state import PhaseState
from trigger_guard.utilities.final import final_class
from trigger_guard.utilities.logger_manager import LoggerManager

HandlerT = TypeVar("HandlerT", bound="TriggerHandler")


class TriggerHandler:
    """Base for handlers the host constructs once per sub-batch.

    Construction validates the trigger context and captures the batch size;
    it never touches phase flags. Subclasses call the ``*_has_run`` queries
    before doing phase work and skip the work when they return True.
    """

    def __init__(
        self,
        context: TriggerContext,
        state: PhaseState,
        logger_manager: LoggerManager | None = None,
    ) -> None:
        try:
            validate_trigger_context(context)
            if state.operation_id != context.operation_id:
                raise ContextError(
                    f"Phase state belongs to operation {state.operation_id!r}, "
                    f"not {context.operation_id!r}",
                    operation_id=context.operation_id,
                    batch_size=context.batch_size,
                )
        except ContextError as exc:
            if logger_manager is not None:
                logger_manager.get_logger().error(
                    f"{type(self).__name__} construction rejected: {exc}",
                    extra={
                        "context": {
                            "operation_id": context.operation_id,
                            "batch_size": context.batch_size,
                            "phase": context.phase.value if context.phase else None,
                        }
                    },
                )
            raise
        self._context = context
        self._batch_size = context.batch_size
        self._guard = ExecutionGuard(state, logger_manager, context.phase)
        self.logger_manager = logger_manager

    @property
    def batch_size(self) -> int:
        return self._batch_size

    @property
    def context(self) -> TriggerContext:
        return self._context

    @property
    def operation_id(self) -> str:
        return self._context.operation_id

    @property
    def guard(self) -> ExecutionGuard:
        return self._guard

    def before_insert_has_run(self) -> bool:
        return self._guard.before_insert_has_run()

    def before_update_has_run(self) -> bool:
        return self._guard.before_update_has_run()

    def before_delete_has_run(self) -> bool:
        return self._guard.before_delete_has_run()

    def after_insert_has_run(self) -> bool:
        return self._guard.after_insert_has_run()

    def after_update_has_run(self) -> bool:
        return self._guard.after_update_has_run()

    def after_delete_has_run(self) -> bool:
        return self._guard.after_delete_has_run()

    def after_undelete_has_run(self) -> bool:
        return self._guard.after_undelete_has_run()


@final_class
class HandlerBuildResult(TypedBaseModel):
    """Outcome of ``build_handler``: exactly one of handler or error is set."""

    handler: Any = None
    error: ContextError | None = None

    @model_validator(mode="after")
    def _exactly_one(self) -> HandlerBuildResult:
        if (self.handler is None) == (self.error is None):
            raise ValueError("HandlerBuildResult needs exactly one of handler/error")
        return self

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        """Return the handler, re-raising the carried ContextError on failure."""
        if self.error is not None:
            raise self.error
        return self.handler


def build_handler(
    handler_cls: type[HandlerT],
    context: TriggerContext,
    state: PhaseState,
    logger_manager: LoggerManager | None = None,
    **kwargs: Any,
) -> HandlerBuildResult:
    """Construct ``handler_cls`` and report a ContextError as data."""
    try:
        handler = handler_cls(context, state, logger_manager, **kwargs)
    except ContextError as exc:
        return HandlerBuildResult(error=exc)
    return HandlerBuildResult(handler=handler)

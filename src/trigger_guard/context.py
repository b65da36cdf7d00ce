"""Host-supplied descriptor for one handler construction."""

from __future__ import annotations

from uuid import uuid4

from pydantic import Field

from trigger_guard.constants import CONTEXT_ERROR_MESSAGE
from trigger_guard.enums import TriggerPhase
from trigger_guard.errors import ContextError
from trigger_guard.schema.base import TypedBaseModel


def _new_operation_id() -> str:
    return uuid4().hex


class TriggerContext(TypedBaseModel):
    """What the host adapter knows when it constructs a handler.

    ``is_executing`` replaces the ambient "is a trigger running" query and
    ``test_override`` replaces environment sniffing for unit tests; both are
    supplied by the caller.
    """

    is_executing: bool
    batch_size: int = Field(..., ge=0)
    operation_id: str = Field(default_factory=_new_operation_id, min_length=1)
    test_override: bool = False
    phase: TriggerPhase | None = None

    @classmethod
    def for_test(
        cls,
        batch_size: int,
        operation_id: str | None = None,
        phase: TriggerPhase | None = None,
    ) -> TriggerContext:
        """Descriptor for exercising handlers without a live trigger."""
        return cls(
            is_executing=False,
            batch_size=batch_size,
            operation_id=operation_id or _new_operation_id(),
            test_override=True,
            phase=phase,
        )

    @property
    def allows_construction(self) -> bool:
        return self.is_executing or self.test_override


def validate_trigger_context(context: TriggerContext) -> None:
    """Raise ContextError unless ``context`` permits handler construction."""
    if not context.allows_construction:
        raise ContextError(
            f"Trigger handler {CONTEXT_ERROR_MESSAGE}",
            operation_id=context.operation_id,
            batch_size=context.batch_size,
        )

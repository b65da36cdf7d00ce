"""Centralized semantic enums for trigger phases."""

from __future__ import annotations

from enum import Enum


class TriggerTiming(str, Enum):
    """Whether a phase fires before or after the records are committed."""

    BEFORE = "before"
    AFTER = "after"


class TriggerOperation(str, Enum):
    """Record-change operations a host platform can dispatch."""

    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"
    UNDELETE = "undelete"


class TriggerPhase(str, Enum):
    """Closed set of lifecycle phases fired during one logical operation."""

    BEFORE_INSERT = "before_insert"
    BEFORE_UPDATE = "before_update"
    BEFORE_DELETE = "before_delete"
    AFTER_INSERT = "after_insert"
    AFTER_UPDATE = "after_update"
    AFTER_DELETE = "after_delete"
    AFTER_UNDELETE = "after_undelete"

    @property
    def timing(self) -> TriggerTiming:
        return TriggerTiming(self.value.split("_", 1)[0])

    @property
    def operation(self) -> TriggerOperation:
        return TriggerOperation(self.value.split("_", 1)[1])

    @classmethod
    def for_event(
        cls, timing: TriggerTiming, operation: TriggerOperation
    ) -> TriggerPhase:
        """Resolve the phase for a timing/operation pair.

        Raises ``ValueError`` for ``before_undelete``, which hosts never fire.
        """
        return cls(f"{timing.value}_{operation.value}")


PLATFORM_PHASE_ORDER: tuple[TriggerPhase, ...] = (
    TriggerPhase.BEFORE_INSERT,
    TriggerPhase.BEFORE_UPDATE,
    TriggerPhase.BEFORE_DELETE,
    TriggerPhase.AFTER_INSERT,
    TriggerPhase.AFTER_UPDATE,
    TriggerPhase.AFTER_DELETE,
    TriggerPhase.AFTER_UNDELETE,
)
"""Order in which hosts typically dispatch phases; never enforced here."""

if set(PLATFORM_PHASE_ORDER) != set(TriggerPhase):
    raise RuntimeError("PLATFORM_PHASE_ORDER must cover every TriggerPhase")

"""Check-and-set queries answering "has this phase already run?"."""

from __future__ import annotations

from trigger_guard.enums import TriggerPhase
from trigger_guard.state import PhaseState
from trigger_guard.utilities.logger_manager import LoggerManager, MetricType


class ExecutionGuard:
    """Per-phase first-caller-wins guard over a shared PhaseState.

    Each query flips the phase's flag on first use and reports whether it was
    already set, so callers proceed on ``False`` and skip on ``True``.
    """

    def __init__(
        self,
        state: PhaseState,
        logger_manager: LoggerManager | None = None,
        dispatch_phase: TriggerPhase | None = None,
    ) -> None:
        self._state = state
        self._logger_manager = logger_manager
        self._dispatch_phase = dispatch_phase

    @property
    def state(self) -> PhaseState:
        return self._state

    @property
    def dispatch_phase(self) -> TriggerPhase | None:
        """Phase the host was dispatching when the owning handler was built."""
        return self._dispatch_phase

    def phase_has_run(self, phase: TriggerPhase | str) -> bool:
        """Return True if ``phase`` already ran in this operation, else claim it."""
        phase = TriggerPhase(phase)
        already_run = self._state.check_and_set(phase)
        if self._logger_manager is not None:
            self._record(self._logger_manager, phase, already_run)
        return already_run

    def _record(
        self, manager: LoggerManager, phase: TriggerPhase, already_run: bool
    ) -> None:
        outcome = "skipped" if already_run else "first_run"
        manager.get_logger().debug(
            f"Phase {phase.value} {outcome}",
            extra={
                "context": {
                    "operation_id": self._state.operation_id,
                    "phase": phase.value,
                    "dispatch_phase": (
                        self._dispatch_phase.value if self._dispatch_phase else None
                    ),
                    "already_run": already_run,
                }
            },
        )
        manager.log_metric(
            f"guard.phase_{outcome}",
            1,
            MetricType.COUNTER,
            tags={"phase": phase.value},
        )

    def before_insert_has_run(self) -> bool:
        return self.phase_has_run(TriggerPhase.BEFORE_INSERT)

    def before_update_has_run(self) -> bool:
        return self.phase_has_run(TriggerPhase.BEFORE_UPDATE)

    def before_delete_has_run(self) -> bool:
        return self.phase_has_run(TriggerPhase.BEFORE_DELETE)

    def after_insert_has_run(self) -> bool:
        return self.phase_has_run(TriggerPhase.AFTER_INSERT)

    def after_update_has_run(self) -> bool:
        return self.phase_has_run(TriggerPhase.AFTER_UPDATE)

    def after_delete_has_run(self) -> bool:
        return self.phase_has_run(TriggerPhase.AFTER_DELETE)

    def after_undelete_has_run(self) -> bool:
        return self.phase_has_run(TriggerPhase.AFTER_UNDELETE)

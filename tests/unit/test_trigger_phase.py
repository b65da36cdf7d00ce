from __future__ import annotations

import pytest

from trigger_guard.enums import (
    PLATFORM_PHASE_ORDER,
    TriggerOperation,
    TriggerPhase,
    TriggerTiming,
)


def test_phase_set_is_closed_at_seven() -> None:
    assert len(TriggerPhase) == 7
    assert set(PLATFORM_PHASE_ORDER) == set(TriggerPhase)


def test_platform_order_runs_before_phases_first() -> None:
    timings = [phase.timing for phase in PLATFORM_PHASE_ORDER]
    assert timings == sorted(timings, key=lambda t: t is TriggerTiming.AFTER)


@pytest.mark.parametrize(
    ("phase", "timing", "operation"),
    [
        (TriggerPhase.BEFORE_INSERT, TriggerTiming.BEFORE, TriggerOperation.INSERT),
        (TriggerPhase.BEFORE_DELETE, TriggerTiming.BEFORE, TriggerOperation.DELETE),
        (TriggerPhase.AFTER_UPDATE, TriggerTiming.AFTER, TriggerOperation.UPDATE),
        (TriggerPhase.AFTER_UNDELETE, TriggerTiming.AFTER, TriggerOperation.UNDELETE),
    ],
)
def test_phase_splits_into_timing_and_operation(
    phase: TriggerPhase, timing: TriggerTiming, operation: TriggerOperation
) -> None:
    assert phase.timing is timing
    assert phase.operation is operation
    assert TriggerPhase.for_event(timing, operation) is phase


def test_before_undelete_is_not_a_phase() -> None:
    with pytest.raises(ValueError):
        TriggerPhase.for_event(TriggerTiming.BEFORE, TriggerOperation.UNDELETE)

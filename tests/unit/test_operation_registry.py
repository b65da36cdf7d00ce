from __future__ import annotations

import pytest

from trigger_guard.context import TriggerContext
from trigger_guard.enums import TriggerPhase
from trigger_guard.errors import ContextError
from trigger_guard.handler import TriggerHandler
from trigger_guard.state import OperationRegistry


def test_begin_returns_fresh_state(registry: OperationRegistry) -> None:
    state = registry.begin("op-1")
    assert state.operation_id == "op-1"
    assert state.executed_phases() == ()
    assert registry.get("op-1") is state
    assert "op-1" in registry
    assert len(registry) == 1


def test_begin_twice_is_rejected(registry: OperationRegistry) -> None:
    registry.begin("op-1")
    with pytest.raises(ContextError, match="already active"):
        registry.begin("op-1")


def test_get_unknown_operation_is_rejected(registry: OperationRegistry) -> None:
    with pytest.raises(ContextError, match="not active") as info:
        registry.get("missing")
    assert info.value.operation_id == "missing"


def test_end_discards_state_and_is_idempotent(registry: OperationRegistry) -> None:
    state = registry.begin("op-1")
    assert registry.end("op-1") is state
    assert registry.end("op-1") is None
    assert "op-1" not in registry


def test_reused_operation_id_starts_with_fresh_flags(
    registry: OperationRegistry,
) -> None:
    first = registry.begin("op-1")
    first.check_and_set(TriggerPhase.BEFORE_INSERT)
    registry.end("op-1")
    second = registry.begin("op-1")
    assert second.has_run(TriggerPhase.BEFORE_INSERT) is False


def test_concurrent_operations_are_isolated(registry: OperationRegistry) -> None:
    left = registry.begin("op-left")
    right = registry.begin("op-right")
    left.check_and_set(TriggerPhase.AFTER_UPDATE)
    assert right.has_run(TriggerPhase.AFTER_UPDATE) is False
    assert set(registry.active_operations()) == {"op-left", "op-right"}


def test_operation_scope_tears_down_on_exit(registry: OperationRegistry) -> None:
    with registry.operation("op-scope") as state:
        context = TriggerContext(
            is_executing=True, batch_size=200, operation_id=state.operation_id
        )
        handler = TriggerHandler(context, state)
        assert handler.after_insert_has_run() is False
        assert "op-scope" in registry
    assert "op-scope" not in registry


def test_operation_scope_tears_down_when_host_aborts(
    registry: OperationRegistry,
) -> None:
    with pytest.raises(RuntimeError, match="aborted"):
        with registry.operation("op-abort"):
            raise RuntimeError("host aborted the operation")
    assert len(registry) == 0


def test_operation_scope_generates_an_id(registry: OperationRegistry) -> None:
    with registry.operation() as state:
        assert registry.get(state.operation_id) is state
    assert registry.active_operations() == ()

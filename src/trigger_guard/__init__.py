"""Run-once-per-phase guard for record-change trigger handlers."""

from __future__ import annotations

from trigger_guard.constants import API_VERSION
from trigger_guard.context import TriggerContext, validate_trigger_context
from trigger_guard.enums import TriggerPhase
from trigger_guard.errors import ContextError, TriggerGuardError
from trigger_guard.guard import ExecutionGuard
from trigger_guard.handler import HandlerBuildResult, TriggerHandler, build_handler
from trigger_guard.state import OperationRegistry, PhaseState

__all__ = [
    "API_VERSION",
    "ContextError",
    "ExecutionGuard",
    "HandlerBuildResult",
    "OperationRegistry",
    "PhaseState",
    "TriggerContext",
    "TriggerGuardError",
    "TriggerHandler",
    "TriggerPhase",
    "build_handler",
    "validate_trigger_context",
]

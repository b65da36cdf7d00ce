"""Per-operation phase flags and the registry that scopes them."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
import threading
from types import MappingProxyType
from uuid import uuid4

from trigger_guard.enums import PLATFORM_PHASE_ORDER, TriggerPhase
from trigger_guard.errors import ContextError
from trigger_guard.utilities.final import final_class


@final_class
class PhaseState:
    """One "has run" flag per phase, valid for a single logical operation.

    Every handler constructed for the operation shares the same instance.
    Flags only ever go from False to True; a new operation gets a new state.
    """

    def __init__(self, operation_id: str) -> None:
        if not operation_id:
            raise ValueError("operation_id must be a non-empty string")
        self._operation_id = operation_id
        self._flags: dict[TriggerPhase, bool] = dict.fromkeys(TriggerPhase, False)
        self._lock = threading.Lock()

    @property
    def operation_id(self) -> str:
        return self._operation_id

    def has_run(self, phase: TriggerPhase | str) -> bool:
        """Read the flag for ``phase`` without changing it."""
        with self._lock:
            return self._flags[TriggerPhase(phase)]

    def check_and_set(self, phase: TriggerPhase | str) -> bool:
        """Return the previous flag for ``phase`` and mark it as run."""
        key = TriggerPhase(phase)
        with self._lock:
            previous = self._flags[key]
            self._flags[key] = True
        return previous

    def snapshot(self) -> Mapping[TriggerPhase, bool]:
        with self._lock:
            return MappingProxyType(dict(self._flags))

    def executed_phases(self) -> tuple[TriggerPhase, ...]:
        """Phases that have run, in platform dispatch order."""
        flags = self.snapshot()
        return tuple(phase for phase in PLATFORM_PHASE_ORDER if flags[phase])

    def __repr__(self) -> str:
        executed = ",".join(phase.value for phase in self.executed_phases())
        return f"PhaseState(operation_id={self._operation_id!r}, executed=[{executed}])"


class OperationRegistry:
    """Scoped registry of PhaseState objects keyed by operation id.

    The host adapter calls ``begin`` when a logical operation starts and
    ``end`` when it finishes; ``operation`` wraps both.
    """

    def __init__(self) -> None:
        self._states: dict[str, PhaseState] = {}
        self._lock = threading.Lock()

    def begin(self, operation_id: str) -> PhaseState:
        with self._lock:
            if operation_id in self._states:
                raise ContextError(
                    f"Operation {operation_id!r} is already active",
                    operation_id=operation_id,
                )
            state = PhaseState(operation_id)
            self._states[operation_id] = state
            return state

    def get(self, operation_id: str) -> PhaseState:
        with self._lock:
            try:
                return self._states[operation_id]
            except KeyError:
                raise ContextError(
                    f"Operation {operation_id!r} is not active",
                    operation_id=operation_id,
                ) from None

    def end(self, operation_id: str) -> PhaseState | None:
        """Discard the state for ``operation_id``; ending twice is a no-op."""
        with self._lock:
            return self._states.pop(operation_id, None)

    @contextmanager
    def operation(self, operation_id: str | None = None) -> Iterator[PhaseState]:
        """Begin an operation, yield its state, and always discard it on exit."""
        state = self.begin(operation_id or uuid4().hex)
        try:
            yield state
        finally:
            self.end(state.operation_id)

    def active_operations(self) -> tuple[str, ...]:
        with self._lock:
            return tuple(self._states)

    def __contains__(self, operation_id: object) -> bool:
        with self._lock:
            return operation_id in self._states

    def __len__(self) -> int:
        with self._lock:
            return len(self._states)

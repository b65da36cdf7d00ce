from __future__ import annotations

from collections.abc import Generator
import logging
import os
from pathlib import Path
import sys

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
ALLOWED_ARTIFACTS_ROOT = PROJECT_ROOT / "artifacts" / "test"
PYCACHE_PREFIX = ALLOWED_ARTIFACTS_ROOT / "pycache"
PYCACHE_PREFIX.mkdir(parents=True, exist_ok=True)
sys.dont_write_bytecode = True
sys.pycache_prefix = str(PYCACHE_PREFIX)
os.environ.setdefault("PYTHONDONTWRITEBYTECODE", "1")
os.environ.setdefault("COVERAGE_FILE", str(ALLOWED_ARTIFACTS_ROOT / ".coverage"))

from trigger_guard.state import OperationRegistry, PhaseState  # noqa: E402
from trigger_guard.utilities.logger_manager import (  # noqa: E402
    LoggerConfig,
    LoggerManager,
)


@pytest.fixture
def test_artifacts_dir(request) -> Path:
    safe_name = (
        request.node.nodeid.replace("::", "__").replace("/", "_").replace("\\", "_")
    )
    target = ALLOWED_ARTIFACTS_ROOT / safe_name
    target.mkdir(parents=True, exist_ok=True)
    return target


@pytest.fixture
def tmp_path(test_artifacts_dir: Path) -> Path:
    return test_artifacts_dir


@pytest.fixture
def logger_manager(tmp_path: Path) -> Generator[LoggerManager, None, None]:
    manager = LoggerManager(
        LoggerConfig(
            log_dir=tmp_path / "logs",
            log_level="DEBUG",
            telemetry_enabled=True,
        )
    )
    yield manager
    manager.close()


class ListHandler(logging.Handler):
    """Collects every record it receives."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


@pytest.fixture
def captured_records(
    logger_manager: LoggerManager,
) -> Generator[list[logging.LogRecord], None, None]:
    """Records emitted through the manager's logger during the test."""
    handler = ListHandler()
    logger = logger_manager.get_logger().logger
    logger.addHandler(handler)
    yield handler.records
    logger.removeHandler(handler)


@pytest.fixture
def registry() -> OperationRegistry:
    return OperationRegistry()


@pytest.fixture
def phase_state() -> PhaseState:
    return PhaseState("op-test")

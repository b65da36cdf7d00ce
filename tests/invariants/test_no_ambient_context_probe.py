"""Invariant: construction context is passed in, never sniffed from the process."""

from __future__ import annotations

from pathlib import Path
import re

SRC_ROOT = Path(__file__).resolve().parents[2] / "src" / "trigger_guard"
# Only the logging configuration loader may read the environment.
ALLOWED = {SRC_ROOT / "config" / "env.py"}
PROBES = re.compile(r"os\.environ|os\.getenv|PYTEST_CURRENT_TEST|sys\.modules")


def test_only_config_reads_the_environment() -> None:
    offenders = [
        str(path.relative_to(SRC_ROOT))
        for path in SRC_ROOT.rglob("*.py")
        if path not in ALLOWED and PROBES.search(path.read_text(encoding="utf-8"))
    ]
    assert offenders == []


def test_no_global_phase_flags() -> None:
    """Phase flags live on PhaseState instances, not module globals."""
    pattern = re.compile(r"^\s*global\s", re.MULTILINE)
    offenders = [
        str(path.relative_to(SRC_ROOT))
        for path in SRC_ROOT.rglob("*.py")
        if pattern.search(path.read_text(encoding="utf-8"))
    ]
    assert offenders == []

"""Explicit default settings for guard logging and telemetry."""

from __future__ import annotations

GUARD_DEFAULTS: dict[str, object] = {
    "log_level": "INFO",
    "log_dir": "logs",
    "log_to_file": False,
    "structured_logging": False,
    "telemetry_enabled": False,
}

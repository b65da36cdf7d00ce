"""Utilities package for trigger_guard.

Logging, telemetry counters and small class helpers shared by the guard and
handler modules.
"""

from __future__ import annotations

from .final import final_class
from .logger_manager import LoggerConfig, LoggerManager, LoggerSettings, MetricType

__all__ = [
    "LoggerConfig",
    "LoggerManager",
    "LoggerSettings",
    "MetricType",
    "final_class",
]

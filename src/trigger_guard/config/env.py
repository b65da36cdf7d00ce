"""Loads logging configuration from environment files.

Only ambient logging settings come from the environment. Whether a handler
may be constructed is decided by the ``TriggerContext`` the host passes in.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from pathlib import Path

from dotenv import load_dotenv

from trigger_guard.config.defaults import GUARD_DEFAULTS
from trigger_guard.utilities.logger_manager import LoggerConfig

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})


@dataclass(frozen=True)
class EnvSettingSpec:
    """Maps one LoggerConfig field onto an environment variable."""

    setting: str
    env_var: str
    description: str


SETTING_REGISTRY: tuple[EnvSettingSpec, ...] = (
    EnvSettingSpec("log_level", "TRIGGER_GUARD_LOG_LEVEL", "Logger threshold"),
    EnvSettingSpec("log_dir", "TRIGGER_GUARD_LOG_DIR", "Directory for log files"),
    EnvSettingSpec("log_to_file", "TRIGGER_GUARD_LOG_TO_FILE", "Enable file logging"),
    EnvSettingSpec(
        "structured_logging",
        "TRIGGER_GUARD_STRUCTURED_LOGS",
        "Emit JSON lines instead of colored text",
    ),
    EnvSettingSpec(
        "telemetry_enabled",
        "TRIGGER_GUARD_TELEMETRY",
        "Record guard counters",
    ),
)


def load_environment(dotenv_path: str | Path | None = None) -> None:
    """Load a `.env` file when available; existing variables win."""
    path = Path(dotenv_path) if dotenv_path else Path(".env")
    if path.exists():
        load_dotenv(dotenv_path=path)


def _parse_bool(env_var: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{env_var} must be a boolean flag, got {raw!r}")


def _parse_level(env_var: str, raw: str) -> str:
    level = raw.strip().upper()
    if level not in logging.getLevelNamesMapping():
        raise ValueError(f"{env_var} must be a logging level name, got {raw!r}")
    return level


def resolve_settings() -> dict[str, object]:
    """Merge GUARD_DEFAULTS with any configured environment overrides."""
    settings = dict(GUARD_DEFAULTS)
    for spec in SETTING_REGISTRY:
        raw = os.getenv(spec.env_var)
        if raw is None:
            continue
        if isinstance(GUARD_DEFAULTS[spec.setting], bool):
            settings[spec.setting] = _parse_bool(spec.env_var, raw)
        elif spec.setting == "log_level":
            settings[spec.setting] = _parse_level(spec.env_var, raw)
        else:
            settings[spec.setting] = raw
    return settings


def logger_config_from_env() -> LoggerConfig:
    """Build a LoggerConfig from defaults overlaid with the environment."""
    settings = resolve_settings()
    return LoggerConfig(
        log_dir=Path(str(settings["log_dir"])),
        log_level=str(settings["log_level"]),
        log_to_file=bool(settings["log_to_file"]),
        structured_logging=bool(settings["structured_logging"]),
        telemetry_enabled=bool(settings["telemetry_enabled"]),
    )


__all__ = [
    "SETTING_REGISTRY",
    "EnvSettingSpec",
    "load_environment",
    "logger_config_from_env",
    "resolve_settings",
]

"""Configuration helpers for trigger_guard."""

from __future__ import annotations

from .defaults import GUARD_DEFAULTS
from .env import (
    SETTING_REGISTRY,
    EnvSettingSpec,
    load_environment,
    logger_config_from_env,
    resolve_settings,
)

__all__ = [
    "GUARD_DEFAULTS",
    "SETTING_REGISTRY",
    "EnvSettingSpec",
    "load_environment",
    "logger_config_from_env",
    "resolve_settings",
]

"""Global constants shared across the guard package."""

from __future__ import annotations

API_VERSION = "1.0"
"""Public surface version of the handler/guard contract."""

CONTEXT_ERROR_MESSAGE = (
    "must only be instantiated within a triggering execution context"
)
LOGGER_NAME = "trigger_guard"

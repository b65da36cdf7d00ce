"""Invariant: public modules expose only their __all__ via star import."""

from __future__ import annotations

import importlib

PUBLIC_MODULES = ("trigger_guard", "trigger_guard.config", "trigger_guard.utilities")


def _star_imported(module_name: str) -> set[str]:
    namespace: dict[str, object] = {"__builtins__": __builtins__}
    exec(f"from {module_name} import *", namespace)
    namespace.pop("__builtins__", None)
    return set(namespace.keys())


def test_public_star_imports_match_all() -> None:
    for module_name in PUBLIC_MODULES:
        module = importlib.import_module(module_name)
        assert _star_imported(module_name) == set(module.__all__), (
            f"{module_name} star import drifted from __all__"
        )

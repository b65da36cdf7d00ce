"""Shared schema base for guard descriptors and results."""

from __future__ import annotations

from .base import ModelConfigFactory, TypedBaseModel

__all__ = ["ModelConfigFactory", "TypedBaseModel"]

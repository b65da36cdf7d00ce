"""Shared Pydantic base class with consistent configuration."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

ModelConfigFactory = ConfigDict


class TypedBaseModel(BaseModel):
    """Centralized typed base so every descriptor shares one contract.

    Descriptors handed across the host boundary are frozen and reject unknown
    keys; subclasses extend the config rather than replacing it.
    """

    model_config = ModelConfigFactory(
        arbitrary_types_allowed=True,
        frozen=True,
        extra="forbid",
    )

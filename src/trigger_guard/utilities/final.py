"""Runtime helper to enforce final class semantics."""

from __future__ import annotations

from typing import Any, TypeVar

T = TypeVar("T", bound=type[Any])


def final_class(cls: T) -> T:
    """Mark ``cls`` as final: any attempt to subclass it raises ``TypeError``."""

    def __init_subclass__(subcls: type[Any], **kwargs: Any) -> None:  # noqa: N807
        raise TypeError(
            f"{cls.__name__} is final; {subcls.__name__} cannot extend it"
        )

    cls.__init_subclass__ = classmethod(__init_subclass__)
    return cls

"""Shared Pydantic base class and the final-class guard used by all schemas."""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T", bound=type[Any])


class TypedBaseModel(BaseModel):
    """Immutable base for every buildstamp record.

    Records are created once per build invocation and never mutated, so the
    shared config freezes instances and rejects unknown fields.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")


def final_class(cls: T) -> T:
    """Mark a schema as final so subclassing raises at import time."""

    def __init_subclass__(subcls: type[Any], **kwargs: Any) -> None:  # noqa: N807
        raise TypeError(f"{cls.__name__} is final and cannot be subclassed")

    cls.__init_subclass__ = classmethod(__init_subclass__)
    return cls

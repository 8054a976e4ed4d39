"""Errors raised by the mapping layer."""

from __future__ import annotations

from typing import Any


class MappingError(Exception):
    """Base error for document mapping."""


class EntityDefinitionError(MappingError):
    """Raised when an entity reference cannot be imported or described."""


class ConversionError(MappingError, ValueError):
    """Raised when a value cannot be represented in document form.

    The mapper fills in ``operator``, ``path`` and ``stage`` before the error
    leaves a mapping call, so the failing entry can be located.
    """

    def __init__(
        self,
        value: Any,
        message: str | None = None,
        *,
        operator: str | None = None,
        path: str | None = None,
        stage: str | None = None,
    ) -> None:
        self.value = value
        self.message = message or f"Cannot convert value of type {type(value).__qualname__}"
        self.operator = operator
        self.path = path
        self.stage = stage
        super().__init__(str(self))

    def with_context(
        self,
        *,
        operator: str | None = None,
        path: str | None = None,
        stage: str | None = None,
    ) -> ConversionError:
        """Record where the failure happened, keeping the innermost values."""
        self.operator = self.operator or operator
        self.path = self.path or path
        self.stage = self.stage or stage
        self.args = (str(self),)
        return self

    def __str__(self) -> str:
        location = []
        if self.operator:
            location.append(f"operator={self.operator}")
        if self.path:
            location.append(f"path={self.path}")
        if self.stage:
            location.append(f"stage={self.stage}")
        if location:
            return f"{self.message} ({', '.join(location)})"
        return self.message

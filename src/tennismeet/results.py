"""Result envelope returned by mutating operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass
class OperationResult(Generic[T]):
    """
    Outcome of a create/update/delete call.

    ``errors`` carries structured problems (for example availability
    conflicts); ``error`` carries a single human-readable message for
    simple failures such as a missing record.
    """

    success: bool
    data: Optional[T] = None
    errors: list[Any] = field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def ok(cls, data: Optional[T] = None) -> "OperationResult[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(
        cls,
        error: Optional[str] = None,
        errors: Optional[list[Any]] = None,
    ) -> "OperationResult[T]":
        return cls(success=False, error=error, errors=list(errors or []))

    def __bool__(self) -> bool:
        return self.success


@dataclass(frozen=True)
class ValidationResult:
    """A yes/no check with the first problem found."""

    valid: bool
    error: Optional[str] = None

    def __bool__(self) -> bool:
        return self.valid

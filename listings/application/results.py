"""Service result type.

Application services never raise domain errors to their callers. Every
operation returns an ``OperationResult`` carrying either the value or
the error message, code and kind.
"""

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from listings.domain.exceptions import DomainError

T = TypeVar("T")


@dataclass
class OperationResult(Generic[T]):
    """Result of a service operation."""

    value: T | None = None
    success: bool = True
    error: str | None = None
    error_code: str | None = None
    error_kind: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(cls, value: T | None = None) -> "OperationResult[T]":
        """Build a successful result."""
        return cls(value=value)

    @classmethod
    def fail(cls, error: DomainError) -> "OperationResult[T]":
        """Build a failed result from a domain error."""
        return cls(
            success=False,
            error=error.message,
            error_code=error.error_code,
            error_kind=error.error_kind,
            details=error.details,
        )

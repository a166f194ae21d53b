"""
Exceptions for the priority emitter.

Purpose
-------
Define the structured exception hierarchy raised by the emitter's mutating
operations. Every exception carries a human-readable message, a dict of
structured details for logging, and a short stable error code.

Design Notes
------------
- All emitter exceptions inherit from `EmitterException`.
- `InvalidArgumentError` is also a `TypeError`, so callers that only know the
  builtin hierarchy still catch it.
- Validation errors are raised before any structure is mutated and never
  surface through `emit()`.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class EmitterException(Exception):
    """
    Base exception for all priority emitter errors.

    Args:
        message: Human-readable error message
        details: Additional structured data about the error
        error_code: Optional code for programmatic handling

    Example:
        >>> raise EmitterException("registry corrupted", {"event_name": "x"})
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None,
    ) -> None:
        self.message: str = message
        self.details: Dict[str, Any] = details or {}
        self.error_code: str = error_code or self.__class__.__name__
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        details_str = f" | Details: {self.details}" if self.details else ""
        return f"[{self.error_code}] {self.message}{details_str}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"details={self.details!r}"
            ")"
        )


class InvalidArgumentError(EmitterException, TypeError):
    """
    Raised when an argument to a mutating emitter method is invalid.

    The offending argument is named by `field`:

    - ``"priority"``: not a real number, a bool, or NaN
    - ``"listener"``: not callable
    - ``"listenerToRemove"``: not callable (removal path)

    Example:
        >>> try:
        ...     emitter.on("ready", print, priority=float("nan"))
        ... except InvalidArgumentError as e:
        ...     e.field
        'priority'
    """

    def __init__(self, field: str, received: Any, expected: str) -> None:
        self.field: str = field
        self.received_type: str = type(received).__name__
        super().__init__(
            f'The "{field}" argument must be {expected}. '
            f"Received type {self.received_type}",
            details={"field": field, "received_type": self.received_type},
            error_code="INVALID_ARGUMENT",
        )


__all__ = [
    "EmitterException",
    "InvalidArgumentError",
]

# academic_core/exceptions.py

"""Errors raised by the academic core.

Every error is detected before any aggregation or scanning work begins, so a
caller never receives a partial result alongside an exception. Each error
carries a machine friendly ``code`` and a suggested HTTP ``status_code`` so
the web layer can translate it without inspecting messages.
"""
from __future__ import annotations

from typing import Any, Dict, Optional


class AcademicCoreError(Exception):
    """Base class for core validation errors."""

    code: str = "academic_core_error"
    status_code: int = 422

    def __init__(
        self,
        message: str = "Academic core error",
        *,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        base = f"{self.__class__.__name__}({self.code}): {self.message}"
        if self.context:
            base += f" | context={self.context}"
        return base

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": {
                "type": self.__class__.__name__,
                "code": self.code,
                "message": self.message,
                "status_code": self.status_code,
                "context": self.context,
            }
        }


class InvalidIntervalError(AcademicCoreError):
    """Raised for a malformed candidate interval (start not before end)."""

    code = "invalid_interval"

    def __init__(
        self,
        start: Any = None,
        end: Any = None,
        message: Optional[str] = None,
        *,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        if message is None and (start is None or end is None):
            message = "Interval needs both a start and an end"
        msg = message or f"Interval start {start} must be before end {end}"
        super().__init__(msg, context=context)
        if start is not None:
            self.context.setdefault("start", str(start))
        if end is not None:
            self.context.setdefault("end", str(end))


class OutOfRangeError(AcademicCoreError):
    """Raised when marks, a GPA or a weight fall outside the configured range."""

    code = "out_of_range"

    def __init__(
        self,
        field: str,
        value: Any,
        minimum: Any = None,
        maximum: Any = None,
        message: Optional[str] = None,
        *,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        if message is None:
            if maximum is None:
                message = f"{field} {value} must be at least {minimum}"
            else:
                message = f"{field} {value} must be between {minimum} and {maximum}"
        super().__init__(message, context=context)
        self.field = field
        self.value = value
        self.context.setdefault("field", field)
        self.context.setdefault("value", str(value))
        if minimum is not None:
            self.context.setdefault("minimum", str(minimum))
        if maximum is not None:
            self.context.setdefault("maximum", str(maximum))


class UnknownGradeError(AcademicCoreError):
    """Raised when a supplied letter grade is not part of the grade table."""

    code = "unknown_grade"

    def __init__(
        self,
        letter: str,
        message: Optional[str] = None,
        *,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message or f"Grade '{letter}' is not defined in the grade table",
            context=context,
        )
        self.letter = letter
        self.context.setdefault("grade", letter)


__all__ = [
    "AcademicCoreError",
    "InvalidIntervalError",
    "OutOfRangeError",
    "UnknownGradeError",
]

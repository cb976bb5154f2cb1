# app/core/exceptions.py
"""Errors raised by the records services and translated to HTTP in ``main.py``.

Every error has a snake_case ``code`` and an HTTP ``status_code``. The JSON
body comes from ``to_dict`` under a single ``error`` key.
"""
from __future__ import annotations

from typing import Optional, Any, Dict, List
from datetime import datetime, timezone


class AppError(Exception):
    """Base class for service errors.

    ``context`` holds small identifying values (entity type, ids, counts) and
    is returned to the client. ``details`` is free-form. ``cause`` keeps the
    wrapped exception for logging only.
    """

    code: str = "app_error"
    status_code: int = 500

    def __init__(
        self,
        message: str = "An application error occurred",
        *,
        details: Optional[Any] = None,
        cause: Optional[BaseException] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details
        self.cause = cause
        self.context = dict(context or {})
        self.timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")

    def __str__(self) -> str:
        parts = [f"{type(self).__name__}({self.code}): {self.message}"]
        if self.context:
            parts.append(f"context={self.context}")
        if self.cause is not None:
            parts.append(f"cause={self.cause!r}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        body = {
            "type": type(self).__name__,
            "code": self.code,
            "message": self.message,
            "status_code": self.status_code,
            "context": self.context,
            "timestamp": self.timestamp,
        }
        if self.details is not None:
            body["details"] = self.details
        return {"error": body}

    def with_context(self, **ctx: Any) -> "AppError":
        """Add non-null values to ``context`` and return the same error."""
        self.context.update({k: v for k, v in ctx.items() if v is not None})
        return self

class EntityNotFoundError(AppError):
    """Raised when a record cannot be located in storage."""

    code = "entity_not_found"
    status_code = 404

    def __init__(
        self,
        entity_type: str,
        entity_id: Optional[Any] = None,
        message: Optional[str] = None,
        *,
        details: Optional[Any] = None,
        cause: Optional[BaseException] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        label = entity_type.replace("_", " ").capitalize()
        msg = message or (
            f"{label} {entity_id} not found" if entity_id else f"{label} not found"
        )
        super().__init__(msg, details=details, cause=cause, context=context)
        self.entity_type = entity_type
        self.context.setdefault("entity_type", entity_type)
        if entity_id is not None:
            self.context.setdefault("entity_id", str(entity_id))


class DuplicateRecordError(AppError):
    """Raised when a record would violate a uniqueness rule."""

    code = "duplicate_record"
    status_code = 409

    def __init__(
        self,
        message: str = "Record already exists",
        *,
        entity_type: Optional[str] = None,
        details: Optional[Any] = None,
        cause: Optional[BaseException] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details=details, cause=cause, context=context)
        if entity_type:
            self.context.setdefault("entity_type", entity_type)


class SchedulingConflictError(AppError):
    """Raised when a write would double-book a teacher, class or venue.

    ``conflicts`` holds one serialized entry per clashing booking so the
    caller can show what is in the way.
    """

    code = "scheduling_conflict"
    status_code = 422

    def __init__(
        self,
        message: str = "The requested time conflicts with existing bookings",
        *,
        conflicts: Optional[List[Dict[str, Any]]] = None,
        entity_type: Optional[str] = None,
        details: Optional[Any] = None,
        cause: Optional[BaseException] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details=details, cause=cause, context=context)
        self.conflicts = conflicts or []
        if entity_type:
            self.context.setdefault("entity_type", entity_type)
        self.context.setdefault("conflict_count", len(self.conflicts))

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["error"]["conflicts"] = self.conflicts
        return data


class DataProcessingError(AppError):
    """Raised for input that is well-formed but cannot be processed.

    Covers invalid references between records and bulk operations.
    """

    code = "data_processing_error"
    status_code = 422

    def __init__(
        self,
        message: str = "Data processing error occurred",
        *,
        phase: Optional[str] = None,
        entity_type: Optional[str] = None,
        validation_errors: Optional[List[Dict[str, Any]]] = None,
        details: Optional[Any] = None,
        cause: Optional[BaseException] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details=details, cause=cause, context=context)
        if phase:
            self.context.setdefault("phase", phase)
        if entity_type:
            self.context.setdefault("entity_type", entity_type)
        self.validation_errors = validation_errors or []

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["error"]["validation_errors"] = self.validation_errors
        return data


__all__ = [
    "AppError",
    "EntityNotFoundError",
    "DuplicateRecordError",
    "SchedulingConflictError",
    "DataProcessingError",
]

# backend/app/core/__init__.py

from ..config import get_settings
from .exceptions import (
    AppError,
    EntityNotFoundError,
    DuplicateRecordError,
    SchedulingConflictError,
    DataProcessingError,
)


__all__ = [
    "get_settings",
    "AppError",
    "EntityNotFoundError",
    "DuplicateRecordError",
    "SchedulingConflictError",
    "DataProcessingError",
]

# backend/app/__init__.py

"""Main application package for the School Records API."""

# Core
from .core import (
    AppError,
    DataProcessingError,
    DuplicateRecordError,
    EntityNotFoundError,
    SchedulingConflictError,
)

__all__ = [
    # Core
    "AppError",
    "EntityNotFoundError",
    "DuplicateRecordError",
    "SchedulingConflictError",
    "DataProcessingError",
]

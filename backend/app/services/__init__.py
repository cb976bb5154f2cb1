# backend/app/services/__init__.py
"""
Services package for the application.

This package contains all the business logic services that interact with the
database layer and provide functionalities to the API endpoints.
"""

from .data_retrieval import DataRetrievalService
from .data_management import CoreDataService
from .scheduling import ConflictDetectionService, SchedulingService
from .grading import GradingService

__all__ = [
    # Data access
    "DataRetrievalService",
    "CoreDataService",
    # Scheduling
    "ConflictDetectionService",
    "SchedulingService",
    # Grading
    "GradingService",
]

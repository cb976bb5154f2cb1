# backend/app/services/scheduling/__init__.py
"""
Scheduling Services Package.

Provides conflict detection and conflict-checked writes for exams, teacher
assignments, timetable entries and leave requests.
"""

from .conflict_detection_service import ConflictDetectionService
from .scheduling_service import SchedulingService


__all__ = [
    "ConflictDetectionService",
    "SchedulingService",
]

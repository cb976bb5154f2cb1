# backend/app/services/grading/__init__.py
"""
Grading services package.

Exam mark recording, statistics, GPA/CGPA and report card generation.
"""

from .grading_service import GradingService

__all__ = [
    "GradingService",
]

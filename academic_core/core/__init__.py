# academic_core/core/__init__.py

"""
Core module for conflict detection and grade aggregation
"""

from .intervals import (
    Booking,
    Conflict,
    DateRange,
    DayOfWeek,
    ResourceKey,
    ResourceType,
    TimeInterval,
    WeeklySlot,
    overlaps,
)
from .conflicts import ConflictDetector, find_conflicts
from .grading import (
    GPARecord,
    GPAStatistics,
    GradeAggregator,
    ScoredRecord,
    Summary,
    TierShare,
    cgpa,
    grade_for,
    remark_for,
    summarize,
)
from .reports import (
    PerformanceReport,
    ReportAssembler,
    ReportCardDraft,
    TermReport,
    YearReport,
)

__all__ = [
    # Intervals and bookings
    "Booking",
    "Conflict",
    "DateRange",
    "DayOfWeek",
    "ResourceKey",
    "ResourceType",
    "TimeInterval",
    "WeeklySlot",
    "overlaps",
    # Conflict detection
    "ConflictDetector",
    "find_conflicts",
    # Grading
    "GPARecord",
    "GPAStatistics",
    "GradeAggregator",
    "ScoredRecord",
    "Summary",
    "TierShare",
    "cgpa",
    "grade_for",
    "remark_for",
    "summarize",
    # Reports
    "PerformanceReport",
    "ReportAssembler",
    "ReportCardDraft",
    "TermReport",
    "YearReport",
]

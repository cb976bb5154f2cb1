# academic_core/__init__.py

"""
Academic Core Package Initialization

Pure, synchronous building blocks used by the school records API:
interval-overlap conflict detection for exams, teacher assignments and
timetable slots, and grade/GPA aggregation for marks and report cards.
"""

from .config import (
    AcademicCoreConfig,
    DEFAULT_GRADE_TABLE,
    DEFAULT_REMARK_TABLE,
    GradeBand,
    GradeThresholdTable,
    RemarkTable,
    RemarkTier,
    config,
    get_logger,
)
from .exceptions import (
    AcademicCoreError,
    InvalidIntervalError,
    OutOfRangeError,
    UnknownGradeError,
)
from .core import (
    Booking,
    Conflict,
    ConflictDetector,
    DateRange,
    DayOfWeek,
    GPARecord,
    GradeAggregator,
    ReportAssembler,
    ResourceKey,
    ResourceType,
    ScoredRecord,
    Summary,
    TimeInterval,
    WeeklySlot,
)

__version__ = "1.0.0"

__all__ = [
    # Configuration
    "AcademicCoreConfig",
    "DEFAULT_GRADE_TABLE",
    "DEFAULT_REMARK_TABLE",
    "GradeBand",
    "GradeThresholdTable",
    "RemarkTable",
    "RemarkTier",
    "config",
    "get_logger",
    # Errors
    "AcademicCoreError",
    "InvalidIntervalError",
    "OutOfRangeError",
    "UnknownGradeError",
    # Core components
    "Booking",
    "Conflict",
    "ConflictDetector",
    "DateRange",
    "DayOfWeek",
    "GPARecord",
    "GradeAggregator",
    "ReportAssembler",
    "ResourceKey",
    "ResourceType",
    "ScoredRecord",
    "Summary",
    "TimeInterval",
    "WeeklySlot",
]

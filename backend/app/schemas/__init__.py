# backend/app/schemas/__init__.py
"""Expose schema modules and primary Pydantic models for convenient imports."""

from . import academic, common, grading, scheduling

from .common import (
    PaginatedResponse,
    ConflictItem,
    ConflictCheckResponse,
)

from .academic import (
    SchoolRead,
    AcademicYearRead,
    TermRead,
    ClassRoomRead,
    SubjectRead,
    VenueRead,
    StudentRead,
    TeacherRead,
)

from .scheduling import (
    ExamCreate,
    ExamUpdate,
    ExamRead,
    ExamConflictCheck,
    TeacherAssignmentCreate,
    TeacherAssignmentUpdate,
    TeacherAssignmentRead,
    TimetableEntryCreate,
    TimetableEntryUpdate,
    TimetableEntryRead,
    TeacherLeaveCreate,
    TeacherLeaveUpdate,
    TeacherLeaveRead,
)

from .grading import (
    ExamMarkCreate,
    ExamMarkUpdate,
    ExamMarkRead,
    ExamMarkBulkCreate,
    SummaryRead,
    PerformanceReportRead,
    StudentGPARead,
    GPACalculateRequest,
    CGPARead,
    TierShareRead,
    GPAStatisticsRead,
    PerformerRead,
    ReportCardGenerate,
    ReportCardRead,
    ReportCardDetail,
)

__all__ = [
    "academic",
    "common",
    "grading",
    "scheduling",
    "PaginatedResponse",
    "ConflictItem",
    "ConflictCheckResponse",
    "SchoolRead",
    "AcademicYearRead",
    "TermRead",
    "ClassRoomRead",
    "SubjectRead",
    "VenueRead",
    "StudentRead",
    "TeacherRead",
    "ExamCreate",
    "ExamUpdate",
    "ExamRead",
    "ExamConflictCheck",
    "TeacherAssignmentCreate",
    "TeacherAssignmentUpdate",
    "TeacherAssignmentRead",
    "TimetableEntryCreate",
    "TimetableEntryUpdate",
    "TimetableEntryRead",
    "TeacherLeaveCreate",
    "TeacherLeaveUpdate",
    "TeacherLeaveRead",
    "ExamMarkCreate",
    "ExamMarkUpdate",
    "ExamMarkRead",
    "ExamMarkBulkCreate",
    "SummaryRead",
    "PerformanceReportRead",
    "StudentGPARead",
    "GPACalculateRequest",
    "CGPARead",
    "TierShareRead",
    "GPAStatisticsRead",
    "PerformerRead",
    "ReportCardGenerate",
    "ReportCardRead",
    "ReportCardDetail",
]

# app/models/__init__.py

from .base import Base
from .academic import (
    School,
    AcademicYear,
    Term,
    ClassRoom,
    Subject,
    Venue,
    Student,
    Teacher,
)
from .scheduling import (
    Exam,
    ExamStatus,
    TeacherAssignment,
    AssignmentRole,
    TimetableEntry,
    TeacherLeave,
    LeaveStatus,
    BLOCKING_LEAVE_STATUSES,
)
from .grading import ExamMark, StudentGPA, ReportCard

__all__ = [
    "Base",
    "School",
    "AcademicYear",
    "Term",
    "ClassRoom",
    "Subject",
    "Venue",
    "Student",
    "Teacher",
    "Exam",
    "ExamStatus",
    "TeacherAssignment",
    "AssignmentRole",
    "TimetableEntry",
    "TeacherLeave",
    "LeaveStatus",
    "BLOCKING_LEAVE_STATUSES",
    "ExamMark",
    "StudentGPA",
    "ReportCard",
]

# Entity registry used by the generic CRUD and retrieval services
ENTITY_MODELS = {
    "school": School,
    "academic_year": AcademicYear,
    "term": Term,
    "class": ClassRoom,
    "subject": Subject,
    "venue": Venue,
    "student": Student,
    "teacher": Teacher,
    "exam": Exam,
    "teacher_assignment": TeacherAssignment,
    "timetable_entry": TimetableEntry,
    "teacher_leave": TeacherLeave,
    "exam_mark": ExamMark,
    "student_gpa": StudentGPA,
    "report_card": ReportCard,
}

__all__.append("ENTITY_MODELS")

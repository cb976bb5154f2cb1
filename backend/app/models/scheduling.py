# app/models/scheduling.py

import enum
import uuid
from datetime import date, time
from decimal import Decimal
from typing import Optional

from sqlalchemy import (
    String,
    Date,
    Boolean,
    ForeignKey,
    Index,
    Numeric,
    Text,
    Time,
    Uuid,
    Enum as SAEnum,
)
from sqlalchemy.orm import Mapped, mapped_column

from academic_core.core.intervals import DayOfWeek

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class ExamStatus(str, enum.Enum):
    scheduled = "scheduled"
    ongoing = "ongoing"
    completed = "completed"
    cancelled = "cancelled"


class AssignmentRole(str, enum.Enum):
    class_teacher = "class_teacher"
    subject_teacher = "subject_teacher"


class LeaveStatus(str, enum.Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"
    cancelled = "cancelled"


# Leave in these states blocks the teacher's calendar
BLOCKING_LEAVE_STATUSES = (LeaveStatus.pending, LeaveStatus.approved)


def _enum(enum_cls, name: str) -> SAEnum:
    # non-native so the same DDL works on PostgreSQL and SQLite
    return SAEnum(
        enum_cls,
        name=name,
        native_enum=False,
        validate_strings=True,
        values_callable=lambda members: [member.value for member in members],
    )


class Exam(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "exams"
    __table_args__ = (
        Index("ix_exams_class_date", "class_id", "exam_date"),
        Index("ix_exams_teacher_date", "teacher_id", "exam_date"),
    )

    name: Mapped[str] = mapped_column(String, nullable=False)
    class_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("classes.id", ondelete="CASCADE"), nullable=False
    )
    subject_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("subjects.id"), nullable=False
    )
    # examiner / invigilating teacher
    teacher_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid, ForeignKey("teachers.id", ondelete="SET NULL")
    )
    venue_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid, ForeignKey("venues.id", ondelete="SET NULL")
    )
    term_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("terms.id"), nullable=False
    )
    exam_date: Mapped[date] = mapped_column(Date, nullable=False)
    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    end_time: Mapped[time] = mapped_column(Time, nullable=False)
    total_marks: Mapped[Decimal] = mapped_column(
        Numeric(6, 2), default=Decimal("100"), nullable=False
    )
    pass_marks: Mapped[Optional[Decimal]] = mapped_column(Numeric(6, 2))
    status: Mapped[ExamStatus] = mapped_column(
        _enum(ExamStatus, "exam_status_enum"),
        default=ExamStatus.scheduled,
        nullable=False,
    )
    instructions: Mapped[Optional[str]] = mapped_column(Text)


class TeacherAssignment(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "teacher_assignments"
    __table_args__ = (
        Index("ix_teacher_assignments_teacher_year", "teacher_id", "academic_year_id"),
    )

    teacher_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("teachers.id", ondelete="CASCADE"), nullable=False
    )
    class_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("classes.id", ondelete="CASCADE"), nullable=False
    )
    subject_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid, ForeignKey("subjects.id")
    )
    academic_year_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("academic_years.id"), nullable=False
    )
    term_id: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid, ForeignKey("terms.id"))
    role: Mapped[AssignmentRole] = mapped_column(
        _enum(AssignmentRole, "assignment_role_enum"), nullable=False
    )
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    notes: Mapped[Optional[str]] = mapped_column(Text)


class TimetableEntry(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """A recurring weekly lesson slot for one class within a term."""

    __tablename__ = "timetable_entries"
    __table_args__ = (Index("ix_timetable_entries_term_day", "term_id", "day_of_week"),)

    class_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("classes.id", ondelete="CASCADE"), nullable=False
    )
    subject_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("subjects.id"), nullable=False
    )
    teacher_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("teachers.id", ondelete="CASCADE"), nullable=False
    )
    venue_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid, ForeignKey("venues.id", ondelete="SET NULL")
    )
    term_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("terms.id"), nullable=False
    )
    day_of_week: Mapped[DayOfWeek] = mapped_column(
        _enum(DayOfWeek, "day_of_week_enum"), nullable=False
    )
    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    end_time: Mapped[time] = mapped_column(Time, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)


class TeacherLeave(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "teacher_leaves"

    teacher_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("teachers.id", ondelete="CASCADE"), nullable=False, index=True
    )
    leave_type: Mapped[str] = mapped_column(String, default="annual", nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    reason: Mapped[Optional[str]] = mapped_column(Text)
    status: Mapped[LeaveStatus] = mapped_column(
        _enum(LeaveStatus, "leave_status_enum"),
        default=LeaveStatus.pending,
        nullable=False,
    )

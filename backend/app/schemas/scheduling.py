# app/schemas/scheduling.py
"""Pydantic v2 schemas for exams, teacher assignments, timetables and leave."""

from __future__ import annotations
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from uuid import UUID
from datetime import date, time, datetime

from academic_core.core.intervals import DayOfWeek

from ..models.scheduling import AssignmentRole, ExamStatus, LeaveStatus

MODEL_CONFIG = ConfigDict(from_attributes=True)


# --- Exam ---
class ExamBase(BaseModel):
    name: str
    class_id: UUID
    subject_id: UUID
    teacher_id: Optional[UUID] = None
    venue_id: Optional[UUID] = None
    term_id: UUID
    exam_date: date
    start_time: time
    end_time: time
    total_marks: float = Field(default=100, gt=0)
    pass_marks: Optional[float] = Field(default=None, ge=0)
    status: ExamStatus = ExamStatus.scheduled
    instructions: Optional[str] = None


class ExamCreate(ExamBase):
    pass


class ExamUpdate(BaseModel):
    name: Optional[str] = None
    class_id: Optional[UUID] = None
    subject_id: Optional[UUID] = None
    teacher_id: Optional[UUID] = None
    venue_id: Optional[UUID] = None
    term_id: Optional[UUID] = None
    exam_date: Optional[date] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    total_marks: Optional[float] = Field(default=None, gt=0)
    pass_marks: Optional[float] = Field(default=None, ge=0)
    status: Optional[ExamStatus] = None
    instructions: Optional[str] = None


class ExamRead(ExamBase):
    model_config = MODEL_CONFIG
    id: UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ExamConflictCheck(BaseModel):
    """Proposed slot for a dry-run conflict check."""

    class_id: UUID
    teacher_id: Optional[UUID] = None
    venue_id: Optional[UUID] = None
    exam_date: date
    start_time: time
    end_time: time
    exclude_exam_id: Optional[UUID] = None


# --- Teacher Assignment ---
class TeacherAssignmentBase(BaseModel):
    teacher_id: UUID
    class_id: UUID
    subject_id: Optional[UUID] = None
    academic_year_id: UUID
    term_id: Optional[UUID] = None
    role: AssignmentRole
    start_date: date
    end_date: date
    is_active: bool = True
    notes: Optional[str] = None


class TeacherAssignmentCreate(TeacherAssignmentBase):
    pass


class TeacherAssignmentUpdate(BaseModel):
    teacher_id: Optional[UUID] = None
    class_id: Optional[UUID] = None
    subject_id: Optional[UUID] = None
    term_id: Optional[UUID] = None
    role: Optional[AssignmentRole] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_active: Optional[bool] = None
    notes: Optional[str] = None


class TeacherAssignmentRead(TeacherAssignmentBase):
    model_config = MODEL_CONFIG
    id: UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# --- Timetable ---
class TimetableEntryBase(BaseModel):
    class_id: UUID
    subject_id: UUID
    teacher_id: UUID
    venue_id: Optional[UUID] = None
    term_id: UUID
    day_of_week: DayOfWeek
    start_time: time
    end_time: time
    is_active: bool = True


class TimetableEntryCreate(TimetableEntryBase):
    pass


class TimetableEntryUpdate(BaseModel):
    subject_id: Optional[UUID] = None
    teacher_id: Optional[UUID] = None
    venue_id: Optional[UUID] = None
    day_of_week: Optional[DayOfWeek] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    is_active: Optional[bool] = None


class TimetableEntryRead(TimetableEntryBase):
    model_config = MODEL_CONFIG
    id: UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# --- Teacher Leave ---
class TeacherLeaveBase(BaseModel):
    teacher_id: UUID
    leave_type: str = "annual"
    start_date: date
    end_date: date
    reason: Optional[str] = None
    status: LeaveStatus = LeaveStatus.pending


class TeacherLeaveCreate(TeacherLeaveBase):
    pass


class TeacherLeaveUpdate(BaseModel):
    leave_type: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    reason: Optional[str] = None
    status: Optional[LeaveStatus] = None


class TeacherLeaveRead(TeacherLeaveBase):
    model_config = MODEL_CONFIG
    id: UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

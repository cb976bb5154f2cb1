# app/schemas/grading.py
"""Pydantic v2 schemas for marks, GPA and report cards."""

from __future__ import annotations
from pydantic import BaseModel, Field, ConfigDict
from typing import Dict, List, Optional
from uuid import UUID
from datetime import date, datetime

MODEL_CONFIG = ConfigDict(from_attributes=True)


# --- Exam Marks ---
class ExamMarkBase(BaseModel):
    exam_id: UUID
    student_id: UUID
    marks_obtained: float = Field(ge=0)
    grade: Optional[str] = None
    remarks: Optional[str] = None
    recorded_by: Optional[UUID] = None


class ExamMarkCreate(ExamMarkBase):
    pass


class ExamMarkUpdate(BaseModel):
    marks_obtained: Optional[float] = Field(default=None, ge=0)
    grade: Optional[str] = None
    remarks: Optional[str] = None
    recorded_by: Optional[UUID] = None


class ExamMarkRead(ExamMarkBase):
    model_config = MODEL_CONFIG
    id: UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class BulkMarkItem(BaseModel):
    student_id: UUID
    marks_obtained: float = Field(ge=0)
    grade: Optional[str] = None
    remarks: Optional[str] = None


class ExamMarkBulkCreate(BaseModel):
    exam_id: UUID
    recorded_by: Optional[UUID] = None
    marks: List[BulkMarkItem] = Field(min_length=1)


# --- Statistics ---
class SummaryRead(BaseModel):
    count: int
    pass_count: int
    fail_count: int
    pass_rate: float
    average: Optional[float] = None
    highest: Optional[float] = None
    lowest: Optional[float] = None
    grade_distribution: Dict[str, int] = Field(default_factory=dict)


class PerformanceReportRead(BaseModel):
    group_by: str
    overall: SummaryRead
    groups: Dict[str, SummaryRead]


# --- GPA ---
class StudentGPARead(BaseModel):
    model_config = MODEL_CONFIG

    id: UUID
    student_id: UUID
    term_id: UUID
    academic_year_id: UUID
    gpa: float
    cgpa: Optional[float] = None
    total_credit_units: Optional[int] = None
    subject_count: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class GPACalculateRequest(BaseModel):
    student_id: UUID
    term_id: UUID


class CGPARead(BaseModel):
    student_id: UUID
    academic_year_id: UUID
    cgpa: float
    term_count: int
    remark: str
    remark_message: str


class TierShareRead(BaseModel):
    label: str
    count: int
    percentage: float


class GPAStatisticsRead(BaseModel):
    total: int
    average: float
    highest: Optional[float] = None
    lowest: Optional[float] = None


class PerformerRead(BaseModel):
    student_id: UUID
    student_name: str
    admission_number: str
    gpa: float
    cgpa: Optional[float] = None


# --- Report Cards ---
class ReportCardGenerate(BaseModel):
    student_id: UUID
    class_id: UUID
    term_id: UUID


class ReportCardRead(BaseModel):
    model_config = MODEL_CONFIG

    id: UUID
    student_id: UUID
    class_id: UUID
    term_id: UUID
    academic_year_id: UUID
    gpa: float
    cgpa: float
    remarks: Optional[str] = None
    issued_date: date
    format: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ReportCardDetail(BaseModel):
    report_card: ReportCardRead
    summary: SummaryRead
    created: bool

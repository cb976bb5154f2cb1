# app/schemas/academic.py
"""Pydantic v2 schemas for the academic reference data."""

from __future__ import annotations
from pydantic import BaseModel, Field, ConfigDict, model_validator
from typing import Optional
from uuid import UUID
from datetime import date, datetime

# Use attribute loading for ORM compatibility
MODEL_CONFIG = ConfigDict(from_attributes=True)


class _DateSpan(BaseModel):
    @model_validator(mode="after")
    def check_dates(self):
        start = getattr(self, "start_date", None)
        end = getattr(self, "end_date", None)
        if start and end and start > end:
            raise ValueError("start_date must not be after end_date")
        return self


# --- School ---
class SchoolBase(BaseModel):
    name: str = Field(min_length=1)
    code: str = Field(min_length=1)
    address: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    is_active: bool = True


class SchoolCreate(SchoolBase):
    pass


class SchoolUpdate(BaseModel):
    name: Optional[str] = None
    code: Optional[str] = None
    address: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    is_active: Optional[bool] = None


class SchoolRead(SchoolBase):
    model_config = MODEL_CONFIG
    id: UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# --- Academic Year ---
class AcademicYearBase(_DateSpan):
    school_id: UUID
    name: str
    start_date: date
    end_date: date
    is_current: bool = False


class AcademicYearCreate(AcademicYearBase):
    pass


class AcademicYearUpdate(_DateSpan):
    name: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_current: Optional[bool] = None


class AcademicYearRead(AcademicYearBase):
    model_config = MODEL_CONFIG
    id: UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# --- Term ---
class TermBase(_DateSpan):
    academic_year_id: UUID
    name: str
    start_date: date
    end_date: date
    is_current: bool = False


class TermCreate(TermBase):
    pass


class TermUpdate(_DateSpan):
    name: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_current: Optional[bool] = None


class TermRead(TermBase):
    model_config = MODEL_CONFIG
    id: UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# --- Class ---
class ClassRoomBase(BaseModel):
    school_id: UUID
    academic_year_id: Optional[UUID] = None
    name: str
    grade_level: int = Field(ge=0)
    section: Optional[str] = None
    capacity: Optional[int] = Field(default=None, ge=1)
    is_active: bool = True


class ClassRoomCreate(ClassRoomBase):
    pass


class ClassRoomUpdate(BaseModel):
    academic_year_id: Optional[UUID] = None
    name: Optional[str] = None
    grade_level: Optional[int] = Field(default=None, ge=0)
    section: Optional[str] = None
    capacity: Optional[int] = Field(default=None, ge=1)
    is_active: Optional[bool] = None


class ClassRoomRead(ClassRoomBase):
    model_config = MODEL_CONFIG
    id: UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# --- Subject ---
class SubjectBase(BaseModel):
    school_id: UUID
    name: str
    code: str
    credit_units: int = Field(default=1, ge=1)
    is_core: bool = True
    is_active: bool = True


class SubjectCreate(SubjectBase):
    pass


class SubjectUpdate(BaseModel):
    name: Optional[str] = None
    code: Optional[str] = None
    credit_units: Optional[int] = Field(default=None, ge=1)
    is_core: Optional[bool] = None
    is_active: Optional[bool] = None


class SubjectRead(SubjectBase):
    model_config = MODEL_CONFIG
    id: UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# --- Venue ---
class VenueBase(BaseModel):
    school_id: UUID
    name: str
    code: str
    venue_type: Optional[str] = None
    capacity: Optional[int] = Field(default=None, ge=1)
    is_active: bool = True


class VenueCreate(VenueBase):
    pass


class VenueUpdate(BaseModel):
    name: Optional[str] = None
    code: Optional[str] = None
    venue_type: Optional[str] = None
    capacity: Optional[int] = Field(default=None, ge=1)
    is_active: Optional[bool] = None


class VenueRead(VenueBase):
    model_config = MODEL_CONFIG
    id: UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# --- Student ---
class StudentBase(BaseModel):
    school_id: UUID
    class_id: Optional[UUID] = None
    admission_number: str
    first_name: str
    last_name: str
    date_of_birth: Optional[date] = None
    gender: Optional[str] = None
    status: str = "active"


class StudentCreate(StudentBase):
    pass


class StudentUpdate(BaseModel):
    class_id: Optional[UUID] = None
    admission_number: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    date_of_birth: Optional[date] = None
    gender: Optional[str] = None
    status: Optional[str] = None


class StudentRead(StudentBase):
    model_config = MODEL_CONFIG
    id: UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# --- Teacher ---
class TeacherBase(BaseModel):
    school_id: UUID
    employee_number: str
    first_name: str
    last_name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    specialization: Optional[str] = None
    is_active: bool = True


class TeacherCreate(TeacherBase):
    pass


class TeacherUpdate(BaseModel):
    employee_number: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    specialization: Optional[str] = None
    is_active: Optional[bool] = None


class TeacherRead(TeacherBase):
    model_config = MODEL_CONFIG
    id: UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

# backend/app/api/v1/routes/reference_data.py
"""API endpoints for schools, calendars, classes, subjects, venues and people."""

from fastapi import APIRouter

from ....schemas.academic import (
    AcademicYearCreate,
    AcademicYearRead,
    AcademicYearUpdate,
    ClassRoomCreate,
    ClassRoomRead,
    ClassRoomUpdate,
    SchoolCreate,
    SchoolRead,
    SchoolUpdate,
    StudentCreate,
    StudentRead,
    StudentUpdate,
    SubjectCreate,
    SubjectRead,
    SubjectUpdate,
    TeacherCreate,
    TeacherRead,
    TeacherUpdate,
    TermCreate,
    TermRead,
    TermUpdate,
    VenueCreate,
    VenueRead,
    VenueUpdate,
)
from .crud import register_crud_routes

schools_router = register_crud_routes(
    APIRouter(),
    "school",
    SchoolRead,
    SchoolCreate,
    SchoolUpdate,
    filters=("is_active",),
)

academic_years_router = register_crud_routes(
    APIRouter(),
    "academic_year",
    AcademicYearRead,
    AcademicYearCreate,
    AcademicYearUpdate,
    filters=("school_id", "is_current"),
)

terms_router = register_crud_routes(
    APIRouter(),
    "term",
    TermRead,
    TermCreate,
    TermUpdate,
    filters=("academic_year_id", "is_current"),
)

classes_router = register_crud_routes(
    APIRouter(),
    "class",
    ClassRoomRead,
    ClassRoomCreate,
    ClassRoomUpdate,
    filters=("school_id", "academic_year_id", "grade_level", "is_active"),
)

subjects_router = register_crud_routes(
    APIRouter(),
    "subject",
    SubjectRead,
    SubjectCreate,
    SubjectUpdate,
    filters=("school_id", "is_core", "is_active"),
)

venues_router = register_crud_routes(
    APIRouter(),
    "venue",
    VenueRead,
    VenueCreate,
    VenueUpdate,
    filters=("school_id", "venue_type", "is_active"),
)

students_router = register_crud_routes(
    APIRouter(),
    "student",
    StudentRead,
    StudentCreate,
    StudentUpdate,
    filters=("school_id", "class_id", "status"),
)

teachers_router = register_crud_routes(
    APIRouter(),
    "teacher",
    TeacherRead,
    TeacherCreate,
    TeacherUpdate,
    filters=("school_id", "is_active"),
)

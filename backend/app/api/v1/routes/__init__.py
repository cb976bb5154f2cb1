# backend/app/api/v1/routes/__init__.py
from fastapi import APIRouter
from .reference_data import (
    schools_router,
    academic_years_router,
    terms_router,
    classes_router,
    subjects_router,
    venues_router,
    students_router,
    teachers_router,
)
from .exams import router as exams_router
from .teacher_assignments import router as teacher_assignments_router
from .timetables import router as timetables_router
from .teacher_leaves import router as teacher_leaves_router
from .exam_marks import router as exam_marks_router
from .gpa import router as gpa_router
from .report_cards import router as report_cards_router

# Create a main router that includes all sub-routers
router = APIRouter()

# Reference data
router.include_router(schools_router, prefix="/schools", tags=["Schools"])
router.include_router(
    academic_years_router, prefix="/academic-years", tags=["Academic Years"]
)
router.include_router(terms_router, prefix="/terms", tags=["Terms"])
router.include_router(classes_router, prefix="/classes", tags=["Classes"])
router.include_router(subjects_router, prefix="/subjects", tags=["Subjects"])
router.include_router(venues_router, prefix="/venues", tags=["Venues"])
router.include_router(students_router, prefix="/students", tags=["Students"])
router.include_router(teachers_router, prefix="/teachers", tags=["Teachers"])

# Scheduling (conflict-checked)
router.include_router(exams_router, prefix="/exams", tags=["Exams"])
router.include_router(
    teacher_assignments_router,
    prefix="/teacher-assignments",
    tags=["Teacher Assignments"],
)
router.include_router(timetables_router, prefix="/timetables", tags=["Timetables"])
router.include_router(
    teacher_leaves_router, prefix="/teacher-leaves", tags=["Teacher Leave"]
)

# Grading
router.include_router(exam_marks_router, prefix="/exam-marks", tags=["Exam Marks"])
router.include_router(gpa_router, prefix="/gpa", tags=["GPA"])
router.include_router(report_cards_router, prefix="/report-cards", tags=["Report Cards"])

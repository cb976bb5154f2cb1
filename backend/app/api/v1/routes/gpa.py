# backend/app/api/v1/routes/gpa.py
"""API endpoints for term GPA, CGPA and GPA analytics."""

from dataclasses import asdict
from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query

from ....api.deps import grading_service
from ....services.grading import GradingService
from ....schemas.grading import (
    CGPARead,
    GPACalculateRequest,
    GPAStatisticsRead,
    PerformerRead,
    StudentGPARead,
    TierShareRead,
)
from .crud import register_crud_routes

router = APIRouter()


@router.post("/calculate", response_model=StudentGPARead)
async def calculate_gpa(
    request_in: GPACalculateRequest,
    service: GradingService = Depends(grading_service),
):
    """Compute and store a student's term GPA and the year's CGPA."""
    return await service.compute_term_gpa(request_in.student_id, request_in.term_id)


@router.get("/cgpa", response_model=CGPARead)
async def get_cgpa(
    student_id: UUID = Query(...),
    academic_year_id: UUID = Query(...),
    service: GradingService = Depends(grading_service),
):
    """Mean of the stored term GPAs of one academic year, with its remark."""
    return await service.cgpa(student_id, academic_year_id)


@router.get("/distribution", response_model=List[TierShareRead])
async def gpa_distribution(
    term_id: Optional[UUID] = Query(None),
    academic_year_id: Optional[UUID] = Query(None),
    service: GradingService = Depends(grading_service),
):
    shares = await service.gpa_distribution(term_id, academic_year_id)
    return [asdict(share) for share in shares]


@router.get("/statistics", response_model=GPAStatisticsRead)
async def gpa_statistics(
    term_id: Optional[UUID] = Query(None),
    academic_year_id: Optional[UUID] = Query(None),
    service: GradingService = Depends(grading_service),
):
    return asdict(await service.gpa_statistics(term_id, academic_year_id))


@router.get("/top-performers", response_model=List[PerformerRead])
async def top_performers(
    term_id: UUID = Query(...),
    limit: int = Query(10, ge=1, le=100),
    service: GradingService = Depends(grading_service),
):
    return await service.performers(term_id, limit=limit)


@router.get("/low-performers", response_model=List[PerformerRead])
async def low_performers(
    term_id: UUID = Query(...),
    limit: int = Query(10, ge=1, le=100),
    service: GradingService = Depends(grading_service),
):
    return await service.performers(term_id, limit=limit, lowest=True)


register_crud_routes(
    router,
    "student_gpa",
    StudentGPARead,
    filters=("student_id", "term_id", "academic_year_id"),
)

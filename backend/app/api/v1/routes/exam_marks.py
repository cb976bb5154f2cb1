# backend/app/api/v1/routes/exam_marks.py
"""API endpoints for exam marks and mark statistics."""

from datetime import date
from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query, status

from ....api.deps import grading_service
from ....services.grading import GradingService
from ....schemas.grading import (
    ExamMarkBulkCreate,
    ExamMarkCreate,
    ExamMarkRead,
    ExamMarkUpdate,
    PerformanceReportRead,
    SummaryRead,
)
from .crud import register_crud_routes

router = APIRouter()


def mark_filters(
    exam_id: Optional[UUID] = Query(None),
    class_id: Optional[UUID] = Query(None),
    subject_id: Optional[UUID] = Query(None),
    term_id: Optional[UUID] = Query(None),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
) -> dict:
    """Query parameters narrowing the marks that feed a statistic."""
    return {
        "exam_id": exam_id,
        "class_id": class_id,
        "subject_id": subject_id,
        "term_id": term_id,
        "start_date": start_date,
        "end_date": end_date,
    }


@router.post("/", response_model=ExamMarkRead, status_code=status.HTTP_201_CREATED)
async def create_mark(
    mark_in: ExamMarkCreate,
    service: GradingService = Depends(grading_service),
):
    """Record a student's mark; the grade is derived when not supplied."""
    return await service.create_mark(mark_in.model_dump())


@router.post(
    "/bulk", response_model=List[ExamMarkRead], status_code=status.HTTP_201_CREATED
)
async def bulk_create_marks(
    bulk_in: ExamMarkBulkCreate,
    service: GradingService = Depends(grading_service),
):
    """Record marks for several students of one exam in a single batch."""
    return await service.bulk_create_marks(
        bulk_in.exam_id,
        [item.model_dump() for item in bulk_in.marks],
        recorded_by=bulk_in.recorded_by,
    )


@router.get("/statistics", response_model=SummaryRead)
async def mark_statistics(
    filters: dict = Depends(mark_filters),
    service: GradingService = Depends(grading_service),
):
    summary = await service.mark_statistics(filters)
    return summary.to_dict()


@router.get("/performance", response_model=PerformanceReportRead)
async def performance_report(
    group_by: str = Query("class", pattern="^(class|subject)$"),
    filters: dict = Depends(mark_filters),
    service: GradingService = Depends(grading_service),
):
    """Pass rates and averages per class or per subject, plus the overall view."""
    report = await service.performance_report(group_by, filters)
    return {
        "group_by": group_by,
        "overall": report.overall.to_dict(),
        "groups": {name: summary.to_dict() for name, summary in report.groups.items()},
    }


@router.put("/{mark_id}", response_model=ExamMarkRead)
async def update_mark(
    mark_id: UUID,
    mark_in: ExamMarkUpdate,
    service: GradingService = Depends(grading_service),
):
    """Correct a mark; changing the marks re-derives the grade."""
    return await service.update_mark(mark_id, mark_in.model_dump(exclude_unset=True))


register_crud_routes(
    router, "exam_mark", ExamMarkRead, filters=("exam_id", "student_id", "grade")
)

# backend/app/api/v1/routes/report_cards.py
"""API endpoints for report cards."""

from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, Response, status

from ....api.deps import grading_service
from ....services.grading import GradingService
from ....schemas.grading import ReportCardDetail, ReportCardGenerate, ReportCardRead
from .crud import register_crud_routes

router = APIRouter()


@router.post("/generate", response_model=ReportCardDetail)
async def generate_report_card(
    request_in: ReportCardGenerate,
    response: Response,
    service: GradingService = Depends(grading_service),
):
    """
    Issue the report card for a student's term. Generating twice returns the
    card already issued with ``created`` set to false.
    """
    card, summary, created = await service.generate_report_card(
        request_in.student_id, request_in.class_id, request_in.term_id
    )
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return {
        "report_card": ReportCardRead.model_validate(card),
        "summary": summary.to_dict(),
        "created": created,
    }


@router.get("/student/{student_id}", response_model=List[ReportCardRead])
async def list_student_report_cards(
    student_id: UUID,
    service: GradingService = Depends(grading_service),
):
    """All report cards issued to a student, most recent first."""
    return await service.report_cards_for_student(student_id)


register_crud_routes(
    router,
    "report_card",
    ReportCardRead,
    filters=("student_id", "class_id", "term_id", "academic_year_id"),
)

# backend/app/api/v1/routes/exams.py
"""API endpoints for managing exams."""

from uuid import UUID
from fastapi import APIRouter, Depends, status

from ....api.deps import grading_service, scheduling_service
from ....services.grading import GradingService
from ....services.scheduling import SchedulingService
from ....schemas.common import ConflictCheckResponse
from ....schemas.scheduling import ExamConflictCheck, ExamCreate, ExamRead, ExamUpdate
from .crud import register_crud_routes

router = APIRouter()


@router.post("/", response_model=ExamRead, status_code=status.HTTP_201_CREATED)
async def create_exam(
    exam_in: ExamCreate,
    service: SchedulingService = Depends(scheduling_service),
):
    """Create a new exam after checking its class, examiner and venue are free."""
    return await service.create_exam(exam_in.model_dump())


@router.post("/check-conflicts", response_model=ConflictCheckResponse)
async def check_exam_conflicts(
    check_in: ExamConflictCheck,
    service: SchedulingService = Depends(scheduling_service),
):
    """Report the bookings a proposed exam slot would clash with, without saving."""
    data = check_in.model_dump()
    exclude_id = data.pop("exclude_exam_id")
    conflicts = await service.check_exam_conflicts(data, exclude_id=exclude_id)
    return service.conflicts.serialize(conflicts)


@router.put("/{exam_id}", response_model=ExamRead)
async def update_exam(
    exam_id: UUID,
    exam_in: ExamUpdate,
    service: SchedulingService = Depends(scheduling_service),
    grading: GradingService = Depends(grading_service),
):
    """
    Update an existing exam; the exam does not conflict with itself.
    A new total is refused below the highest recorded mark and regrades
    the marks already recorded.
    """
    if exam_in.total_marks is not None:
        await grading.check_total_marks(exam_id, exam_in.total_marks)
    exam = await service.update_exam(exam_id, exam_in.model_dump(exclude_unset=True))
    if exam_in.total_marks is not None:
        await grading.regrade_exam(exam)
    return exam


register_crud_routes(
    router,
    "exam",
    ExamRead,
    filters=(
        "class_id",
        "subject_id",
        "teacher_id",
        "venue_id",
        "term_id",
        "exam_date",
        "status",
    ),
)

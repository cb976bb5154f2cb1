# backend/app/api/v1/routes/teacher_assignments.py
"""API endpoints for class teacher and subject teacher assignments."""

from uuid import UUID
from fastapi import APIRouter, Depends, status

from ....api.deps import scheduling_service
from ....services.scheduling import SchedulingService
from ....schemas.scheduling import (
    TeacherAssignmentCreate,
    TeacherAssignmentRead,
    TeacherAssignmentUpdate,
)
from .crud import register_crud_routes

router = APIRouter()


@router.post(
    "/", response_model=TeacherAssignmentRead, status_code=status.HTTP_201_CREATED
)
async def create_assignment(
    assignment_in: TeacherAssignmentCreate,
    service: SchedulingService = Depends(scheduling_service),
):
    """Assign a teacher to a class (or a class subject) for a date range."""
    return await service.create_assignment(assignment_in.model_dump())


@router.put("/{assignment_id}", response_model=TeacherAssignmentRead)
async def update_assignment(
    assignment_id: UUID,
    assignment_in: TeacherAssignmentUpdate,
    service: SchedulingService = Depends(scheduling_service),
):
    return await service.update_assignment(
        assignment_id, assignment_in.model_dump(exclude_unset=True)
    )


register_crud_routes(
    router,
    "teacher_assignment",
    TeacherAssignmentRead,
    filters=(
        "teacher_id",
        "class_id",
        "subject_id",
        "academic_year_id",
        "term_id",
        "role",
        "is_active",
    ),
)

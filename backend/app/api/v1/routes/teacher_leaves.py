# backend/app/api/v1/routes/teacher_leaves.py
"""API endpoints for teacher leave requests."""

from uuid import UUID
from fastapi import APIRouter, Depends, status

from ....api.deps import scheduling_service
from ....services.scheduling import SchedulingService
from ....schemas.scheduling import TeacherLeaveCreate, TeacherLeaveRead, TeacherLeaveUpdate
from .crud import register_crud_routes

router = APIRouter()


@router.post("/", response_model=TeacherLeaveRead, status_code=status.HTTP_201_CREATED)
async def create_leave(
    leave_in: TeacherLeaveCreate,
    service: SchedulingService = Depends(scheduling_service),
):
    """Request leave; overlapping pending or approved leave is rejected."""
    return await service.create_leave(leave_in.model_dump())


@router.put("/{leave_id}", response_model=TeacherLeaveRead)
async def update_leave(
    leave_id: UUID,
    leave_in: TeacherLeaveUpdate,
    service: SchedulingService = Depends(scheduling_service),
):
    """Change dates or status (approve, reject, cancel) of a leave request."""
    return await service.update_leave(leave_id, leave_in.model_dump(exclude_unset=True))


register_crud_routes(
    router, "teacher_leave", TeacherLeaveRead, filters=("teacher_id", "status")
)

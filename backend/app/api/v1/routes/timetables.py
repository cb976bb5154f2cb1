# backend/app/api/v1/routes/timetables.py
"""API endpoints for the weekly class timetable."""

from uuid import UUID
from fastapi import APIRouter, Depends, status

from ....api.deps import scheduling_service
from ....services.scheduling import SchedulingService
from ....schemas.scheduling import (
    TimetableEntryCreate,
    TimetableEntryRead,
    TimetableEntryUpdate,
)
from .crud import register_crud_routes

router = APIRouter()


@router.post("/", response_model=TimetableEntryRead, status_code=status.HTTP_201_CREATED)
async def create_timetable_entry(
    entry_in: TimetableEntryCreate,
    service: SchedulingService = Depends(scheduling_service),
):
    """
    Add a weekly lesson slot. The class, the teacher and the venue must all be
    free on that weekday and time within the term.
    """
    return await service.create_timetable_entry(entry_in.model_dump())


@router.put("/{entry_id}", response_model=TimetableEntryRead)
async def update_timetable_entry(
    entry_id: UUID,
    entry_in: TimetableEntryUpdate,
    service: SchedulingService = Depends(scheduling_service),
):
    return await service.update_timetable_entry(
        entry_id, entry_in.model_dump(exclude_unset=True)
    )


register_crud_routes(
    router,
    "timetable_entry",
    TimetableEntryRead,
    filters=("class_id", "teacher_id", "venue_id", "term_id", "day_of_week", "is_active"),
)

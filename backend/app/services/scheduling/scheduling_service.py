# backend/app/services/scheduling/scheduling_service.py
"""
Service for writing schedulable records.

Exams, teacher assignments, timetable entries and leave requests are checked
for conflicts before they are persisted. A record that no longer blocks
anybody (a cancelled exam, an inactive assignment, a rejected leave) is
written without a check.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from academic_core.core.intervals import Conflict

from ...core.exceptions import DataProcessingError
from ...models import (
    AssignmentRole,
    BLOCKING_LEAVE_STATUSES,
    Exam,
    ExamStatus,
    LeaveStatus,
    TeacherAssignment,
    TeacherLeave,
    TimetableEntry,
)
from ..data_management import CoreDataService
from ..data_retrieval import DataRetrievalService
from .conflict_detection_service import ConflictDetectionService

logger = logging.getLogger(__name__)

# Foreign keys checked before a write, by column name
REFERENCES = {
    "school_id": "school",
    "academic_year_id": "academic_year",
    "term_id": "term",
    "class_id": "class",
    "subject_id": "subject",
    "teacher_id": "teacher",
    "venue_id": "venue",
}

EXAM_FIELDS = (
    "class_id",
    "teacher_id",
    "venue_id",
    "exam_date",
    "start_time",
    "end_time",
    "status",
)
ASSIGNMENT_FIELDS = (
    "teacher_id",
    "class_id",
    "subject_id",
    "academic_year_id",
    "role",
    "start_date",
    "end_date",
    "is_active",
)
TIMETABLE_FIELDS = (
    "term_id",
    "class_id",
    "teacher_id",
    "venue_id",
    "day_of_week",
    "start_time",
    "end_time",
    "is_active",
)
LEAVE_FIELDS = ("teacher_id", "start_date", "end_date", "status")


def _without_nulls(entity: Any, data: Dict[str, Any]) -> Dict[str, Any]:
    """Drop explicit nulls sent for NOT NULL columns; the stored value stays."""
    columns = type(entity).__table__.columns
    return {
        name: value
        for name, value in data.items()
        if value is not None or name not in columns or columns[name].nullable
    }


def _merge(entity: Any, data: Dict[str, Any], fields: Iterable[str]) -> Dict[str, Any]:
    """Current values of ``fields`` overlaid with the incoming changes."""
    return {name: data.get(name, getattr(entity, name)) for name in fields}


class SchedulingService:
    """Conflict-checked create and update for every schedulable record."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.conflicts = ConflictDetectionService(session)
        self.data = CoreDataService(session)
        self.retrieval = DataRetrievalService(session)

    async def _require_references(self, data: Dict[str, Any]) -> None:
        for column, entity_type in REFERENCES.items():
            value = data.get(column)
            if value is not None:
                await self.retrieval.get_entity_or_404(entity_type, value)

    # --- Exams ---
    async def check_exam_conflicts(
        self, data: Dict[str, Any], exclude_id: Optional[UUID] = None
    ) -> List[Conflict]:
        return await self.conflicts.check_exam(
            class_id=data["class_id"],
            exam_date=data["exam_date"],
            start_time=data["start_time"],
            end_time=data["end_time"],
            teacher_id=data.get("teacher_id"),
            venue_id=data.get("venue_id"),
            exclude_id=exclude_id,
        )

    async def create_exam(self, data: Dict[str, Any]) -> Exam:
        await self._require_references(data)
        if ExamStatus(data.get("status", ExamStatus.scheduled)) != ExamStatus.cancelled:
            conflicts = await self.check_exam_conflicts(data)
            self.conflicts.raise_if_conflicts(conflicts, "exam")
        return await self.data.create("exam", data)

    async def update_exam(self, exam_id: UUID, data: Dict[str, Any]) -> Exam:
        exam = await self.retrieval.get_entity_or_404("exam", exam_id)
        data = _without_nulls(exam, data)
        await self._require_references(data)
        merged = _merge(exam, data, EXAM_FIELDS)
        if ExamStatus(merged["status"]) != ExamStatus.cancelled:
            conflicts = await self.check_exam_conflicts(merged, exclude_id=exam_id)
            self.conflicts.raise_if_conflicts(conflicts, "exam")
        return await self.data.update("exam", exam_id, data)

    # --- Teacher assignments ---
    async def _check_assignment(
        self, values: Dict[str, Any], exclude_id: Optional[UUID] = None
    ) -> None:
        role = AssignmentRole(values["role"])
        if role == AssignmentRole.subject_teacher and values.get("subject_id") is None:
            raise DataProcessingError(
                "A subject teacher assignment needs a subject_id",
                phase="validation",
                entity_type="teacher_assignment",
            )
        if not values.get("is_active", True):
            return
        conflicts = await self.conflicts.check_assignment(
            teacher_id=values["teacher_id"],
            class_id=values["class_id"],
            academic_year_id=values["academic_year_id"],
            role=role,
            start_date=values["start_date"],
            end_date=values["end_date"],
            subject_id=values.get("subject_id"),
            exclude_id=exclude_id,
        )
        self.conflicts.raise_if_conflicts(conflicts, "teacher_assignment")

    async def create_assignment(self, data: Dict[str, Any]) -> TeacherAssignment:
        await self._require_references(data)
        await self._check_assignment(data)
        return await self.data.create("teacher_assignment", data)

    async def update_assignment(
        self, assignment_id: UUID, data: Dict[str, Any]
    ) -> TeacherAssignment:
        assignment = await self.retrieval.get_entity_or_404(
            "teacher_assignment", assignment_id
        )
        data = _without_nulls(assignment, data)
        await self._require_references(data)
        await self._check_assignment(
            _merge(assignment, data, ASSIGNMENT_FIELDS), exclude_id=assignment_id
        )
        return await self.data.update("teacher_assignment", assignment_id, data)

    # --- Timetable ---
    async def _check_timetable(
        self, values: Dict[str, Any], exclude_id: Optional[UUID] = None
    ) -> None:
        if not values.get("is_active", True):
            return
        conflicts = await self.conflicts.check_timetable_entry(
            term_id=values["term_id"],
            class_id=values["class_id"],
            teacher_id=values["teacher_id"],
            day_of_week=values["day_of_week"],
            start_time=values["start_time"],
            end_time=values["end_time"],
            venue_id=values.get("venue_id"),
            exclude_id=exclude_id,
        )
        self.conflicts.raise_if_conflicts(conflicts, "timetable_entry")

    async def create_timetable_entry(self, data: Dict[str, Any]) -> TimetableEntry:
        await self._require_references(data)
        await self._check_timetable(data)
        return await self.data.create("timetable_entry", data)

    async def update_timetable_entry(
        self, entry_id: UUID, data: Dict[str, Any]
    ) -> TimetableEntry:
        entry = await self.retrieval.get_entity_or_404("timetable_entry", entry_id)
        data = _without_nulls(entry, data)
        await self._require_references(data)
        await self._check_timetable(
            _merge(entry, data, TIMETABLE_FIELDS), exclude_id=entry_id
        )
        return await self.data.update("timetable_entry", entry_id, data)

    # --- Leave ---
    async def _check_leave(
        self, values: Dict[str, Any], exclude_id: Optional[UUID] = None
    ) -> None:
        status = LeaveStatus(values.get("status", LeaveStatus.pending))
        if status not in BLOCKING_LEAVE_STATUSES:
            return
        conflicts = await self.conflicts.check_leave(
            teacher_id=values["teacher_id"],
            start_date=values["start_date"],
            end_date=values["end_date"],
            exclude_id=exclude_id,
        )
        self.conflicts.raise_if_conflicts(conflicts, "teacher_leave")

    async def create_leave(self, data: Dict[str, Any]) -> TeacherLeave:
        await self._require_references(data)
        await self._check_leave(data)
        return await self.data.create("teacher_leave", data)

    async def update_leave(self, leave_id: UUID, data: Dict[str, Any]) -> TeacherLeave:
        leave = await self.retrieval.get_entity_or_404("teacher_leave", leave_id)
        data = _without_nulls(leave, data)
        await self._check_leave(_merge(leave, data, LEAVE_FIELDS), exclude_id=leave_id)
        return await self.data.update("teacher_leave", leave_id, data)

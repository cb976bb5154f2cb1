# backend/app/services/scheduling/conflict_detection_service.py
"""
Service for detecting scheduling conflicts.

Loads the active bookings that could clash with a proposed exam, teacher
assignment, timetable slot or leave request, and hands the overlap decision
to the academic core's ConflictDetector.
"""

import logging
from datetime import date, time
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from academic_core.core.conflicts import ConflictDetector
from academic_core.core.intervals import (
    Booking,
    Conflict,
    DateRange,
    DayOfWeek,
    ResourceKey,
    ResourceType,
    TimeInterval,
    WeeklySlot,
)

from ...core.exceptions import DataProcessingError, SchedulingConflictError
from ...models import (
    AssignmentRole,
    BLOCKING_LEAVE_STATUSES,
    Exam,
    ExamStatus,
    TeacherAssignment,
    TeacherLeave,
    TimetableEntry,
)

logger = logging.getLogger(__name__)


def _key(resource_type: ResourceType, resource_id: Any) -> ResourceKey:
    return ResourceKey(resource_type, resource_id)


def class_subject_id(class_id: UUID, subject_id: UUID) -> str:
    return f"{class_id}:{subject_id}"


class ConflictDetectionService:
    """Provides conflict checks for every schedulable record."""

    def __init__(
        self, session: AsyncSession, detector: Optional[ConflictDetector] = None
    ):
        self.session = session
        self.detector = detector or ConflictDetector()

    # --- Exams ---
    @staticmethod
    def _exam_keys(
        class_id: UUID, teacher_id: Optional[UUID], venue_id: Optional[UUID]
    ) -> List[ResourceKey]:
        keys = [_key(ResourceType.CLASS, class_id)]
        if teacher_id:
            keys.append(_key(ResourceType.TEACHER, teacher_id))
        if venue_id:
            keys.append(_key(ResourceType.ROOM, venue_id))
        return keys

    async def _exam_bookings(
        self,
        exam_date: date,
        class_id: UUID,
        teacher_id: Optional[UUID],
        venue_id: Optional[UUID],
    ) -> List[Booking]:
        """Non-cancelled exams on the same date sharing a class, examiner or venue."""
        matches = [Exam.class_id == class_id]
        if teacher_id:
            matches.append(Exam.teacher_id == teacher_id)
        if venue_id:
            matches.append(Exam.venue_id == venue_id)

        stmt = select(Exam).where(
            Exam.exam_date == exam_date,
            Exam.status != ExamStatus.cancelled,
            or_(*matches),
        )
        exams = (await self.session.execute(stmt)).scalars().all()

        bookings: List[Booking] = []
        for exam in exams:
            interval = TimeInterval(exam.exam_date, exam.start_time, exam.end_time)
            for key in self._exam_keys(exam.class_id, exam.teacher_id, exam.venue_id):
                bookings.append(Booking(key, interval, exam.id, label=exam.name))
        return bookings

    async def _leave_bookings(
        self, teacher_id: UUID, start: date, end: date
    ) -> List[Booking]:
        """Pending or approved leave of a teacher touching ``start..end``."""
        stmt = select(TeacherLeave).where(
            TeacherLeave.teacher_id == teacher_id,
            TeacherLeave.status.in_(BLOCKING_LEAVE_STATUSES),
            TeacherLeave.start_date <= end,
            TeacherLeave.end_date >= start,
        )
        leaves = (await self.session.execute(stmt)).scalars().all()
        return [
            Booking(
                _key(ResourceType.TEACHER, leave.teacher_id),
                DateRange(leave.start_date, leave.end_date),
                leave.id,
                label=f"{leave.leave_type} leave ({leave.status.value})",
            )
            for leave in leaves
        ]

    async def check_exam(
        self,
        class_id: UUID,
        exam_date: date,
        start_time: time,
        end_time: time,
        teacher_id: Optional[UUID] = None,
        venue_id: Optional[UUID] = None,
        exclude_id: Optional[UUID] = None,
    ) -> List[Conflict]:
        interval = TimeInterval(exam_date, start_time, end_time)
        interval.validate()
        owner = exclude_id or "proposed-exam"
        candidates = [
            Booking(key, interval, owner, exclude_id=exclude_id)
            for key in self._exam_keys(class_id, teacher_id, venue_id)
        ]

        existing = await self._exam_bookings(exam_date, class_id, teacher_id, venue_id)
        if teacher_id:
            existing.extend(await self._leave_bookings(teacher_id, exam_date, exam_date))

        conflicts = self.detector.find_all_conflicts(candidates, existing)
        logger.debug(
            f"Exam check for class {class_id} on {exam_date}: {len(conflicts)} conflict(s)"
        )
        return conflicts

    # --- Teacher assignments ---
    async def check_assignment(
        self,
        teacher_id: UUID,
        class_id: UUID,
        academic_year_id: UUID,
        role: AssignmentRole,
        start_date: date,
        end_date: date,
        subject_id: Optional[UUID] = None,
        exclude_id: Optional[UUID] = None,
    ) -> List[Conflict]:
        """
        A teacher is class teacher of one class at a time and a class has one
        class teacher at a time; a class-subject pair has one subject teacher
        at a time. Only active assignments of the same academic year count.
        """
        interval = DateRange(start_date, end_date)
        interval.validate()
        owner = exclude_id or "proposed-assignment"

        stmt = select(TeacherAssignment).where(
            TeacherAssignment.academic_year_id == academic_year_id,
            TeacherAssignment.role == role,
            TeacherAssignment.is_active.is_(True),
        )
        if role == AssignmentRole.class_teacher:
            keys = [
                _key(ResourceType.TEACHER, teacher_id),
                _key(ResourceType.CLASS, class_id),
            ]
            stmt = stmt.where(
                or_(
                    TeacherAssignment.teacher_id == teacher_id,
                    TeacherAssignment.class_id == class_id,
                )
            )
        else:
            if subject_id is None:
                raise DataProcessingError(
                    "A subject teacher assignment needs a subject_id",
                    entity_type="teacher_assignment",
                )
            keys = [
                _key(ResourceType.CLASS_SUBJECT, class_subject_id(class_id, subject_id))
            ]
            stmt = stmt.where(
                TeacherAssignment.class_id == class_id,
                TeacherAssignment.subject_id == subject_id,
            )

        assignments = (await self.session.execute(stmt)).scalars().all()
        existing: List[Booking] = []
        for assignment in assignments:
            span = DateRange(assignment.start_date, assignment.end_date)
            if role == AssignmentRole.class_teacher:
                existing_keys = [
                    _key(ResourceType.TEACHER, assignment.teacher_id),
                    _key(ResourceType.CLASS, assignment.class_id),
                ]
            else:
                existing_keys = [
                    _key(
                        ResourceType.CLASS_SUBJECT,
                        class_subject_id(assignment.class_id, assignment.subject_id),
                    )
                ]
            for key in existing_keys:
                existing.append(
                    Booking(key, span, assignment.id, label=f"{role.value} assignment")
                )

        candidates = [Booking(key, interval, owner, exclude_id=exclude_id) for key in keys]
        return self.detector.find_all_conflicts(candidates, existing)

    # --- Timetable ---
    async def check_timetable_entry(
        self,
        term_id: UUID,
        class_id: UUID,
        teacher_id: UUID,
        day_of_week: DayOfWeek,
        start_time: time,
        end_time: time,
        venue_id: Optional[UUID] = None,
        exclude_id: Optional[UUID] = None,
    ) -> List[Conflict]:
        slot = WeeklySlot(DayOfWeek(day_of_week), start_time, end_time)
        slot.validate()
        owner = exclude_id or "proposed-entry"

        matches = [
            TimetableEntry.class_id == class_id,
            TimetableEntry.teacher_id == teacher_id,
        ]
        if venue_id:
            matches.append(TimetableEntry.venue_id == venue_id)
        stmt = select(TimetableEntry).where(
            TimetableEntry.term_id == term_id,
            TimetableEntry.day_of_week == slot.day_of_week,
            TimetableEntry.is_active.is_(True),
            or_(*matches),
        )
        entries = (await self.session.execute(stmt)).scalars().all()

        def keys_for(entry_class, entry_teacher, entry_venue):
            keys = [
                _key(ResourceType.CLASS, entry_class),
                _key(ResourceType.TEACHER, entry_teacher),
            ]
            if entry_venue:
                keys.append(_key(ResourceType.ROOM, entry_venue))
            return keys

        existing = [
            Booking(
                key,
                WeeklySlot(entry.day_of_week, entry.start_time, entry.end_time),
                entry.id,
                label="timetable entry",
            )
            for entry in entries
            for key in keys_for(entry.class_id, entry.teacher_id, entry.venue_id)
        ]
        candidates = [
            Booking(key, slot, owner, exclude_id=exclude_id)
            for key in keys_for(class_id, teacher_id, venue_id)
        ]
        return self.detector.find_all_conflicts(candidates, existing)

    # --- Leave ---
    async def check_leave(
        self,
        teacher_id: UUID,
        start_date: date,
        end_date: date,
        exclude_id: Optional[UUID] = None,
    ) -> List[Conflict]:
        interval = DateRange(start_date, end_date)
        interval.validate()
        candidate = Booking(
            _key(ResourceType.TEACHER, teacher_id),
            interval,
            exclude_id or "proposed-leave",
            exclude_id=exclude_id,
        )
        existing = await self._leave_bookings(teacher_id, start_date, end_date)
        return self.detector.find_conflicts(candidate, existing)

    @staticmethod
    def raise_if_conflicts(conflicts: List[Conflict], entity_type: str) -> None:
        if not conflicts:
            return
        logger.info(f"Rejected {entity_type}: {len(conflicts)} scheduling conflict(s)")
        raise SchedulingConflictError(
            conflicts[0].message
            if len(conflicts) == 1
            else f"{len(conflicts)} scheduling conflicts found",
            conflicts=[conflict.to_dict() for conflict in conflicts],
            entity_type=entity_type,
        )

    @staticmethod
    def serialize(conflicts: List[Conflict]) -> Dict[str, Any]:
        return {
            "has_conflicts": bool(conflicts),
            "conflicts": [conflict.to_dict() for conflict in conflicts],
        }

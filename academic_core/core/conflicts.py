# academic_core/core/conflicts.py

"""
Interval-overlap conflict detection.

One detector serves every scheduling call site (exams, teacher assignments,
timetable entries, leave requests). The caller pre-filters storage to the
active bookings that could matter; the detector only decides overlap.
"""

from typing import Iterable, List, Sequence

from .intervals import Booking, Conflict, overlaps
from ..config import get_logger

logger = get_logger("conflicts")


class ConflictDetector:
    """Finds existing bookings that overlap a candidate on the same resource."""

    def find_conflicts(
        self, candidate: Booking, existing: Iterable[Booking]
    ) -> List[Conflict]:
        """
        Return the bookings in ``existing`` that clash with ``candidate``.

        Raises ``InvalidIntervalError`` before scanning if the candidate's
        interval is malformed. Bookings on other resources and the record
        named by ``candidate.exclude_id`` are skipped. Input order is kept.
        """
        candidate.interval.validate()

        conflicts: List[Conflict] = []
        for booking in existing:
            if booking.resource_key != candidate.resource_key:
                continue
            if (
                candidate.exclude_id is not None
                and booking.owner_id == candidate.exclude_id
            ):
                continue
            if overlaps(candidate.interval, booking.interval):
                conflicts.append(Conflict(candidate=candidate, existing=booking))

        if conflicts:
            logger.debug(
                f"{len(conflicts)} conflict(s) for {candidate.resource_key} "
                f"at {candidate.interval}"
            )
        return conflicts

    def find_all_conflicts(
        self, candidates: Sequence[Booking], existing: Sequence[Booking]
    ) -> List[Conflict]:
        """
        Check several candidate bookings belonging to one record.

        Every candidate is validated before any scanning, so a malformed
        interval never yields a partial result.
        """
        for candidate in candidates:
            candidate.interval.validate()

        conflicts: List[Conflict] = []
        for candidate in candidates:
            conflicts.extend(self.find_conflicts(candidate, existing))
        return conflicts

    def has_conflict(self, candidate: Booking, existing: Iterable[Booking]) -> bool:
        return bool(self.find_conflicts(candidate, existing))


def find_conflicts(candidate: Booking, existing: Iterable[Booking]) -> List[Conflict]:
    """Module-level shortcut around a shared detector."""
    return _detector.find_conflicts(candidate, existing)


_detector = ConflictDetector()

# academic_core/core/intervals.py

"""
Interval and booking value objects shared by the conflict detector.

Three interval kinds exist:

- ``TimeInterval``: a time-of-day window on one calendar date (exam slots).
  Half-open, so back-to-back windows do not overlap.
- ``DateRange``: an inclusive range of whole days (teacher assignments,
  leave periods). Ranges sharing a boundary day overlap by that day.
- ``WeeklySlot``: a recurring time-of-day window on a weekday (timetable
  entries). Half-open like ``TimeInterval``.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import date, time, timedelta
from typing import Any, Dict, Hashable, Optional, Tuple, Union

from ..exceptions import InvalidIntervalError


class DayOfWeek(str, enum.Enum):
    monday = "monday"
    tuesday = "tuesday"
    wednesday = "wednesday"
    thursday = "thursday"
    friday = "friday"
    saturday = "saturday"
    sunday = "sunday"

    @classmethod
    def from_date(cls, value: date) -> "DayOfWeek":
        return list(cls)[value.weekday()]


class ResourceType(str, enum.Enum):
    """Kinds of contended resources."""

    TEACHER = "teacher"
    CLASS = "class"
    ROOM = "room"
    CLASS_SUBJECT = "class_subject"


@dataclass(frozen=True)
class ResourceKey:
    resource_type: ResourceType
    resource_id: Hashable

    def __str__(self) -> str:
        return f"{self.resource_type.value}:{self.resource_id}"


@dataclass(frozen=True)
class TimeInterval:
    date: date
    start: time
    end: time

    @property
    def is_valid(self) -> bool:
        return None not in (self.start, self.end) and self.start < self.end

    def validate(self) -> "TimeInterval":
        if not self.is_valid:
            raise InvalidIntervalError(
                self.start, self.end, context={"date": str(self.date)}
            )
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": "time",
            "date": self.date.isoformat(),
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
        }

    def __str__(self) -> str:
        return f"{self.date.isoformat()} {self.start:%H:%M}-{self.end:%H:%M}"


@dataclass(frozen=True)
class DateRange:
    start: date
    end: date

    @property
    def is_valid(self) -> bool:
        return None not in (self.start, self.end) and self.start <= self.end

    def validate(self) -> "DateRange":
        if None in (self.start, self.end):
            raise InvalidIntervalError(self.start, self.end)
        if not self.is_valid:
            raise InvalidIntervalError(
                self.start,
                self.end,
                message=f"Date range start {self.start} must not be after end {self.end}",
            )
        return self

    def contains(self, value: date) -> bool:
        return self.start <= value <= self.end

    def weekdays(self) -> set:
        """Weekdays covered by the range (at most one week needs checking)."""
        span = min((self.end - self.start).days, 6)
        return {
            DayOfWeek.from_date(self.start + timedelta(days=offset))
            for offset in range(span + 1)
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": "date_range",
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
        }

    def __str__(self) -> str:
        return f"{self.start.isoformat()} to {self.end.isoformat()}"


@dataclass(frozen=True)
class WeeklySlot:
    day_of_week: DayOfWeek
    start: time
    end: time

    @property
    def is_valid(self) -> bool:
        return None not in (self.start, self.end) and self.start < self.end

    def validate(self) -> "WeeklySlot":
        if not self.is_valid:
            raise InvalidIntervalError(
                self.start, self.end, context={"day_of_week": self.day_of_week.value}
            )
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": "weekly",
            "day_of_week": self.day_of_week.value,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
        }

    def __str__(self) -> str:
        return f"{self.day_of_week.value} {self.start:%H:%M}-{self.end:%H:%M}"


Interval = Union[TimeInterval, DateRange, WeeklySlot]


def _times_overlap(a_start: time, a_end: time, b_start: time, b_end: time) -> bool:
    # half-open: touching endpoints are not an overlap
    return a_start < b_end and b_start < a_end


def overlaps(a: Interval, b: Interval) -> bool:
    """
    Return True when two intervals share any moment.

    Same-kind rules follow the interval semantics described in the module
    docstring. Mixed kinds are projected onto the coarser granularity: a
    timed window falls inside a date range when its date does, and a weekly
    slot recurs on every matching weekday.
    """
    if isinstance(a, TimeInterval) and isinstance(b, TimeInterval):
        return a.date == b.date and _times_overlap(a.start, a.end, b.start, b.end)
    if isinstance(a, DateRange) and isinstance(b, DateRange):
        return a.start <= b.end and b.start <= a.end
    if isinstance(a, WeeklySlot) and isinstance(b, WeeklySlot):
        return a.day_of_week == b.day_of_week and _times_overlap(
            a.start, a.end, b.start, b.end
        )

    if isinstance(b, TimeInterval):
        a, b = b, a
    if isinstance(a, TimeInterval):
        if isinstance(b, DateRange):
            return b.contains(a.date)
        return DayOfWeek.from_date(a.date) == b.day_of_week and _times_overlap(
            a.start, a.end, b.start, b.end
        )

    # remaining pair: WeeklySlot with DateRange
    if isinstance(a, DateRange):
        a, b = b, a
    return a.day_of_week in b.weekdays()


@dataclass(frozen=True)
class Booking:
    """
    A claim on one resource for one interval.

    ``owner_id`` identifies the record that holds the booking (an exam, an
    assignment, a timetable entry). ``exclude_id`` is set on a candidate that
    re-checks an existing record during an update.
    """

    resource_key: ResourceKey
    interval: Interval
    owner_id: Hashable
    exclude_id: Optional[Hashable] = None
    label: Optional[str] = None
    metadata: Tuple[Tuple[str, Any], ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "resource_type": self.resource_key.resource_type.value,
            "resource_id": str(self.resource_key.resource_id),
            "owner_id": str(self.owner_id),
            "label": self.label,
            "interval": self.interval.to_dict(),
            **{key: value for key, value in self.metadata},
        }


@dataclass(frozen=True)
class Conflict:
    """An existing booking that overlaps a candidate on the same resource."""

    candidate: Booking
    existing: Booking

    @property
    def owner_id(self) -> Hashable:
        return self.existing.owner_id

    @property
    def resource_key(self) -> ResourceKey:
        return self.existing.resource_key

    @property
    def interval(self) -> Interval:
        return self.existing.interval

    @property
    def message(self) -> str:
        what = self.existing.label or str(self.existing.owner_id)
        return (
            f"{self.resource_key.resource_type.value} {self.resource_key.resource_id} "
            f"is already booked by {what} ({self.existing.interval})"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "candidate_interval": self.candidate.interval.to_dict(),
            **self.existing.to_dict(),
        }

# academic_core/tests/unit/test_conflicts.py

"""
Tests for the conflict detector.
"""

import pytest
from datetime import date, time
from uuid import uuid4

from academic_core.core.conflicts import ConflictDetector, find_conflicts
from academic_core.core.intervals import (
    Booking,
    DateRange,
    DayOfWeek,
    ResourceKey,
    ResourceType,
    TimeInterval,
    WeeklySlot,
)
from academic_core.exceptions import InvalidIntervalError


@pytest.fixture
def detector():
    return ConflictDetector()


class TestFindConflicts:
    def test_overlapping_exam_is_reported(self, detector, make_exam_booking):
        exam_a = make_exam_booking((9, 0), (10, 0), label="Exam A")
        exam_b = make_exam_booking((9, 30), (10, 30))

        conflicts = detector.find_conflicts(exam_b, [exam_a])

        assert len(conflicts) == 1
        assert conflicts[0].existing is exam_a
        assert conflicts[0].owner_id == exam_a.owner_id
        assert "Exam A" in conflicts[0].message

    def test_back_to_back_exam_is_free(self, detector, make_exam_booking):
        exam_a = make_exam_booking((9, 0), (10, 0))
        exam_c = make_exam_booking((10, 0), (11, 0))

        assert detector.find_conflicts(exam_c, [exam_a]) == []

    def test_update_excludes_the_record_itself(self, detector, make_exam_booking):
        exam_a = make_exam_booking((9, 0), (10, 0))
        moved = make_exam_booking(
            (9, 15), (10, 15), owner_id=exam_a.owner_id, exclude_id=exam_a.owner_id
        )

        assert detector.find_conflicts(moved, [exam_a]) == []

    def test_exclusion_only_skips_the_named_record(self, detector, make_exam_booking):
        exam_a = make_exam_booking((9, 0), (10, 0))
        exam_b = make_exam_booking((9, 30), (10, 30))
        moved = make_exam_booking(
            (9, 15), (10, 15), owner_id=exam_a.owner_id, exclude_id=exam_a.owner_id
        )

        conflicts = detector.find_conflicts(moved, [exam_a, exam_b])

        assert [c.existing for c in conflicts] == [exam_b]

    def test_other_resources_are_ignored(self, detector, make_exam_booking, exam_day):
        exam_a = make_exam_booking((9, 0), (10, 0))
        other_class = Booking(
            resource_key=ResourceKey(ResourceType.CLASS, uuid4()),
            interval=TimeInterval(exam_day, time(9, 0), time(10, 0)),
            owner_id=uuid4(),
        )

        assert detector.find_conflicts(other_class, [exam_a]) == []

    def test_input_order_is_preserved(self, detector, make_exam_booking):
        existing = [
            make_exam_booking((8, 0), (9, 30)),
            make_exam_booking((13, 0), (14, 0)),
            make_exam_booking((9, 45), (12, 0)),
            make_exam_booking((9, 0), (9, 15)),
        ]
        candidate = make_exam_booking((9, 0), (10, 0))

        conflicts = detector.find_conflicts(candidate, existing)

        assert [c.existing for c in conflicts] == [existing[0], existing[2], existing[3]]

    def test_invalid_candidate_raises(self, detector, make_exam_booking):
        bad = make_exam_booking((11, 0), (10, 0))
        with pytest.raises(InvalidIntervalError):
            detector.find_conflicts(bad, [])

    def test_empty_existing(self, detector, make_exam_booking):
        assert detector.find_conflicts(make_exam_booking((9, 0), (10, 0)), []) == []
        assert not detector.has_conflict(make_exam_booking((9, 0), (10, 0)), [])

    def test_module_level_shortcut(self, make_exam_booking):
        exam_a = make_exam_booking((9, 0), (10, 0))
        exam_b = make_exam_booking((9, 30), (10, 30))
        assert len(find_conflicts(exam_b, [exam_a])) == 1


class TestDateRangeConflicts:
    def test_assignment_sharing_boundary_day_conflicts(self, detector):
        teacher = ResourceKey(ResourceType.TEACHER, uuid4())
        term_one = Booking(
            teacher, DateRange(date(2024, 1, 1), date(2024, 4, 30)), owner_id=uuid4()
        )
        term_two = Booking(
            teacher, DateRange(date(2024, 4, 30), date(2024, 7, 31)), owner_id=uuid4()
        )

        assert len(detector.find_conflicts(term_two, [term_one])) == 1


class TestFindAllConflicts:
    def test_validates_every_candidate_first(self, detector, make_exam_booking):
        good = make_exam_booking((9, 0), (10, 0))
        bad = make_exam_booking((11, 0), (10, 0))
        with pytest.raises(InvalidIntervalError):
            detector.find_all_conflicts([good, bad], [make_exam_booking((9, 0), (10, 0))])

    def test_collects_conflicts_per_candidate(self, detector, class_id, exam_day):
        teacher_id = uuid4()
        existing = [
            Booking(
                ResourceKey(ResourceType.TEACHER, teacher_id),
                TimeInterval(exam_day, time(9, 0), time(10, 0)),
                owner_id=uuid4(),
            ),
            Booking(
                ResourceKey(ResourceType.CLASS, class_id),
                TimeInterval(exam_day, time(9, 30), time(11, 0)),
                owner_id=uuid4(),
            ),
        ]
        interval = TimeInterval(exam_day, time(9, 0), time(10, 0))
        owner = uuid4()
        candidates = [
            Booking(ResourceKey(ResourceType.CLASS, class_id), interval, owner),
            Booking(ResourceKey(ResourceType.TEACHER, teacher_id), interval, owner),
        ]

        conflicts = detector.find_all_conflicts(candidates, existing)

        assert [c.resource_key.resource_type for c in conflicts] == [
            ResourceType.CLASS,
            ResourceType.TEACHER,
        ]


def test_conflict_to_dict(make_exam_booking):
    exam_a = make_exam_booking((9, 0), (10, 0), label="Mathematics")
    exam_b = make_exam_booking((9, 30), (10, 30))

    payload = find_conflicts(exam_b, [exam_a])[0].to_dict()

    assert payload["resource_type"] == "class"
    assert payload["owner_id"] == str(exam_a.owner_id)
    assert payload["label"] == "Mathematics"
    assert payload["interval"]["kind"] == "time"
    assert payload["candidate_interval"]["start"] == "09:30:00"


FRIDAY = date(2024, 3, 1)


class TestCommutativity:
    @pytest.mark.parametrize(
        "first, second",
        [
            (
                TimeInterval(FRIDAY, time(9, 0), time(10, 0)),
                TimeInterval(FRIDAY, time(9, 30), time(10, 30)),
            ),
            (
                TimeInterval(FRIDAY, time(9, 0), time(10, 0)),
                TimeInterval(FRIDAY, time(10, 0), time(11, 0)),
            ),
            (
                TimeInterval(FRIDAY, time(8, 0), time(12, 0)),
                TimeInterval(FRIDAY, time(9, 0), time(9, 30)),
            ),
            (
                DateRange(date(2024, 1, 1), date(2024, 4, 30)),
                DateRange(date(2024, 4, 30), date(2024, 7, 31)),
            ),
            (
                DateRange(date(2024, 1, 1), date(2024, 1, 31)),
                DateRange(date(2024, 2, 1), date(2024, 2, 28)),
            ),
            (
                TimeInterval(FRIDAY, time(9, 0), time(10, 0)),
                DateRange(date(2024, 2, 28), date(2024, 3, 1)),
            ),
            (
                TimeInterval(FRIDAY, time(9, 0), time(10, 0)),
                WeeklySlot(DayOfWeek.friday, time(9, 45), time(10, 30)),
            ),
            (
                TimeInterval(FRIDAY, time(9, 0), time(10, 0)),
                WeeklySlot(DayOfWeek.monday, time(9, 0), time(10, 0)),
            ),
            (
                WeeklySlot(DayOfWeek.tuesday, time(8, 0), time(9, 0)),
                DateRange(date(2024, 3, 4), date(2024, 3, 6)),
            ),
        ],
    )
    def test_detection_does_not_depend_on_which_side_is_the_candidate(
        self, detector, first, second
    ):
        resource = ResourceKey(ResourceType.TEACHER, uuid4())
        a = Booking(resource, first, owner_id=uuid4())
        b = Booking(resource, second, owner_id=uuid4())

        forward = detector.find_conflicts(a, [b])
        backward = detector.find_conflicts(b, [a])

        assert len(forward) == len(backward)
        assert [c.owner_id for c in forward] == [b.owner_id] * len(forward)
        assert [c.owner_id for c in backward] == [a.owner_id] * len(backward)

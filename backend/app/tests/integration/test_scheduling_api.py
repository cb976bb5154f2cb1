# backend/app/tests/integration/test_scheduling_api.py

"""
Integration tests for exams, teacher assignments, timetables and leave.
"""

import pytest
from uuid import uuid4


@pytest.mark.asyncio
class TestExamEndpoints:
    async def test_create_and_list_exams(self, client, exam_payload):
        created = await client.post("/api/v1/exams/", json=exam_payload())

        assert created.status_code == 201
        exam = created.json()
        assert exam["status"] == "scheduled"
        assert exam["total_marks"] == 100

        listing = await client.get(
            "/api/v1/exams/", params={"exam_date": "2024-10-14"}
        )
        assert [e["id"] for e in listing.json()["data"]] == [exam["id"]]

    async def test_overlapping_exam_returns_conflicts(self, client, exam_payload):
        first = (await client.post("/api/v1/exams/", json=exam_payload())).json()

        response = await client.post(
            "/api/v1/exams/",
            json=exam_payload(
                name="English Mid-Term", start_time="09:59:00", end_time="11:00:00"
            ),
        )

        assert response.status_code == 422
        error = response.json()["error"]
        assert error["code"] == "scheduling_conflict"
        assert error["context"]["conflict_count"] == 3
        assert {c["owner_id"] for c in error["conflicts"]} == {first["id"]}

    async def test_touching_exams_are_allowed(self, client, exam_payload):
        await client.post("/api/v1/exams/", json=exam_payload())

        response = await client.post(
            "/api/v1/exams/",
            json=exam_payload(start_time="10:00:00", end_time="11:00:00"),
        )

        assert response.status_code == 201

    async def test_start_after_end_is_rejected(self, client, exam_payload):
        response = await client.post(
            "/api/v1/exams/",
            json=exam_payload(start_time="11:00:00", end_time="10:00:00"),
        )

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "invalid_interval"

    async def test_unknown_class_is_not_found(self, client, exam_payload):
        response = await client.post(
            "/api/v1/exams/", json=exam_payload(class_id=str(uuid4()))
        )

        assert response.status_code == 404

    async def test_check_conflicts_dry_run(self, client, exam_payload, school_data):
        first = (await client.post("/api/v1/exams/", json=exam_payload())).json()
        body = {
            "class_id": str(school_data.class_b.id),
            "venue_id": str(school_data.hall.id),
            "exam_date": "2024-10-14",
            "start_time": "09:30:00",
            "end_time": "10:30:00",
        }

        clash = await client.post("/api/v1/exams/check-conflicts", json=body)
        excluded = await client.post(
            "/api/v1/exams/check-conflicts",
            json=dict(body, exclude_exam_id=first["id"]),
        )
        listing = await client.get("/api/v1/exams/")

        assert clash.status_code == 200
        assert clash.json()["has_conflicts"] is True
        [conflict] = clash.json()["conflicts"]
        assert conflict["resource_type"] == "room"
        assert excluded.json() == {"has_conflicts": False, "conflicts": []}
        assert listing.json()["total"] == 1

    async def test_reschedule_exam(self, client, exam_payload):
        exam = (await client.post("/api/v1/exams/", json=exam_payload())).json()

        response = await client.put(
            f"/api/v1/exams/{exam['id']}",
            json={"start_time": "09:30:00", "end_time": "10:30:00"},
        )

        assert response.status_code == 200
        assert response.json()["start_time"] == "09:30:00"

    async def test_cancel_then_reuse_slot(self, client, exam_payload):
        exam = (await client.post("/api/v1/exams/", json=exam_payload())).json()

        cancelled = await client.put(
            f"/api/v1/exams/{exam['id']}", json={"status": "cancelled"}
        )
        replacement = await client.post("/api/v1/exams/", json=exam_payload())

        assert cancelled.json()["status"] == "cancelled"
        assert replacement.status_code == 201

    async def test_null_times_keep_the_stored_slot(self, client, exam_payload):
        exam = (await client.post("/api/v1/exams/", json=exam_payload())).json()

        response = await client.put(
            f"/api/v1/exams/{exam['id']}", json={"end_time": None, "venue_id": None}
        )

        assert response.status_code == 200
        assert response.json()["start_time"] == "09:00:00"
        assert response.json()["end_time"] == "10:00:00"
        assert response.json()["venue_id"] is None


@pytest.mark.asyncio
class TestTeacherAssignmentEndpoints:
    def payload(self, data, **overrides):
        body = {
            "teacher_id": str(data.teacher1.id),
            "class_id": str(data.class_a.id),
            "academic_year_id": str(data.year.id),
            "role": "class_teacher",
            "start_date": "2024-09-01",
            "end_date": "2025-07-31",
        }
        body.update(overrides)
        return body

    async def test_second_class_teacher_is_rejected(self, client, school_data):
        first = await client.post(
            "/api/v1/teacher-assignments/", json=self.payload(school_data)
        )
        second = await client.post(
            "/api/v1/teacher-assignments/",
            json=self.payload(school_data, teacher_id=str(school_data.teacher2.id)),
        )

        assert first.status_code == 201
        assert second.status_code == 422
        assert second.json()["error"]["conflicts"][0]["resource_type"] == "class"

    async def test_deactivate_frees_the_class(self, client, school_data):
        first = (
            await client.post(
                "/api/v1/teacher-assignments/", json=self.payload(school_data)
            )
        ).json()

        await client.put(
            f"/api/v1/teacher-assignments/{first['id']}", json={"is_active": False}
        )
        second = await client.post(
            "/api/v1/teacher-assignments/",
            json=self.payload(school_data, teacher_id=str(school_data.teacher2.id)),
        )

        assert second.status_code == 201

    async def test_subject_teacher_requires_subject(self, client, school_data):
        response = await client.post(
            "/api/v1/teacher-assignments/",
            json=self.payload(school_data, role="subject_teacher"),
        )

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "data_processing_error"


@pytest.mark.asyncio
class TestTimetableAndLeaveEndpoints:
    async def test_weekly_slot_conflict(self, client, school_data):
        body = {
            "class_id": str(school_data.class_a.id),
            "subject_id": str(school_data.maths.id),
            "teacher_id": str(school_data.teacher1.id),
            "venue_id": str(school_data.hall.id),
            "term_id": str(school_data.term1.id),
            "day_of_week": "wednesday",
            "start_time": "08:00:00",
            "end_time": "08:40:00",
        }
        first = await client.post("/api/v1/timetables/", json=body)
        clash = await client.post(
            "/api/v1/timetables/",
            json=dict(
                body,
                class_id=str(school_data.class_b.id),
                teacher_id=str(school_data.teacher2.id),
                start_time="08:20:00",
                end_time="09:00:00",
            ),
        )
        listing = await client.get(
            "/api/v1/timetables/", params={"day_of_week": "wednesday"}
        )

        assert first.status_code == 201
        assert clash.status_code == 422
        [conflict] = clash.json()["error"]["conflicts"]
        assert conflict["resource_type"] == "room"
        assert listing.json()["total"] == 1

        updated = await client.put(
            f"/api/v1/timetables/{first.json()['id']}",
            json={"start_time": None, "end_time": "08:50:00"},
        )
        assert updated.status_code == 200
        assert updated.json()["start_time"] == "08:00:00"
        assert updated.json()["end_time"] == "08:50:00"

    async def test_leave_blocks_examiner(self, client, school_data, exam_payload):
        leave = await client.post(
            "/api/v1/teacher-leaves/",
            json={
                "teacher_id": str(school_data.teacher1.id),
                "leave_type": "sick",
                "start_date": "2024-10-13",
                "end_date": "2024-10-14",
                "status": "approved",
            },
        )
        exam = await client.post("/api/v1/exams/", json=exam_payload(venue_id=None))

        assert leave.status_code == 201
        assert exam.status_code == 422
        [conflict] = exam.json()["error"]["conflicts"]
        assert conflict["label"] == "sick leave (approved)"

    async def test_leave_dates_are_validated(self, client, school_data):
        response = await client.post(
            "/api/v1/teacher-leaves/",
            json={
                "teacher_id": str(school_data.teacher1.id),
                "start_date": "2024-10-14",
                "end_date": "2024-10-13",
            },
        )

        assert response.status_code == 422

"""
Tests for the generic retrieval and CRUD services
"""

from datetime import date, time
from decimal import Decimal
from uuid import uuid4

import pytest

from app.core.exceptions import (
    DataProcessingError,
    DuplicateRecordError,
    EntityNotFoundError,
)
from app.services.data_management import CoreDataService
from app.services.data_retrieval import DataRetrievalService, resolve_model


def test_resolve_model_rejects_unknown_entity():
    with pytest.raises(ValueError):
        resolve_model("invigilator")


@pytest.mark.asyncio
class TestDataRetrievalService:
    async def test_get_entity_or_404(self, test_session, school_data):
        service = DataRetrievalService(test_session)

        school = await service.get_entity_or_404("school", school_data.school.id)
        assert school.code == "GFA"

        with pytest.raises(EntityNotFoundError) as exc_info:
            await service.get_entity_or_404("student", uuid4())
        assert exc_info.value.status_code == 404
        assert exc_info.value.context["entity_type"] == "student"

    async def test_pagination(self, test_session, school_data):
        service = DataRetrievalService(test_session)

        first = await service.get_paginated_entities("student", page=1, page_size=2)
        second = await service.get_paginated_entities("student", page=2, page_size=2)

        assert first["total"] == 3
        assert first["total_pages"] == 2
        assert len(first["data"]) == 2
        assert len(second["data"]) == 1
        ids = {s.id for s in first["data"]} | {s.id for s in second["data"]}
        assert ids == {s.id for s in school_data.students}

    async def test_filters_convert_query_strings(self, test_session, school_data):
        service = DataRetrievalService(test_session)

        by_class = await service.get_paginated_entities(
            "student",
            page=1,
            page_size=10,
            filters={"class_id": str(school_data.class_a.id)},
        )
        by_flag = await service.get_paginated_entities(
            "term", page=1, page_size=10, filters={"is_current": "true"}
        )
        by_date = await service.get_paginated_entities(
            "term", page=1, page_size=10, filters={"start_date": "2025-01-06"}
        )

        assert by_class["total"] == 3
        assert [t.name for t in by_flag["data"]] == ["First Term"]
        assert [t.name for t in by_date["data"]] == ["Second Term"]

    async def test_invalid_filters_are_rejected(self, test_session, school_data):
        service = DataRetrievalService(test_session)

        with pytest.raises(DataProcessingError):
            await service.get_paginated_entities(
                "student", page=1, page_size=10, filters={"class_id": "not-a-uuid"}
            )
        with pytest.raises(DataProcessingError):
            await service.get_paginated_entities(
                "student", page=1, page_size=10, filters={"favourite_colour": "red"}
            )


@pytest.mark.asyncio
class TestCoreDataService:
    async def test_create_update_delete(self, test_session, school_data):
        service = CoreDataService(test_session)

        venue = await service.create(
            "venue",
            {"school_id": school_data.school.id, "name": "Lab 2", "code": "LAB-2"},
        )
        assert venue.id is not None

        updated = await service.update("venue", venue.id, {"capacity": 30})
        assert updated.capacity == 30

        await service.delete("venue", venue.id)
        retrieval = DataRetrievalService(test_session)
        assert await retrieval.get_entity_by_id("venue", venue.id) is None

    async def test_numeric_values_are_stored_as_decimals(
        self, test_session, school_data
    ):
        service = CoreDataService(test_session)

        exam = await service.create(
            "exam",
            {
                "name": "Quiz",
                "class_id": school_data.class_a.id,
                "subject_id": school_data.maths.id,
                "term_id": school_data.term1.id,
                "exam_date": date(2024, 10, 1),
                "start_time": time(8, 0),
                "end_time": time(8, 30),
                "total_marks": 40.5,
            },
        )

        assert exam.total_marks == Decimal("40.5")

    async def test_unique_violation_is_a_duplicate(self, test_session, school_data):
        service = CoreDataService(test_session)

        with pytest.raises(DuplicateRecordError) as exc_info:
            await service.create("school", {"name": "Copy", "code": "GFA"})

        assert exc_info.value.status_code == 409

    async def test_missing_reference_is_a_processing_error(self, test_session):
        service = CoreDataService(test_session)

        with pytest.raises(DataProcessingError):
            await service.create(
                "venue", {"school_id": uuid4(), "name": "Nowhere", "code": "NOPE"}
            )

    async def test_update_unknown_entity(self, test_session):
        service = CoreDataService(test_session)

        with pytest.raises(EntityNotFoundError):
            await service.update("teacher", uuid4(), {"first_name": "X"})

    async def test_create_many_is_atomic(self, test_session, school_data):
        service = CoreDataService(test_session)
        school_id = school_data.school.id

        with pytest.raises(DuplicateRecordError):
            await service.create_many(
                "subject",
                [
                    {"school_id": school_id, "name": "Physics", "code": "PHY"},
                    {"school_id": school_id, "name": "Maths again", "code": "MTH"},
                ],
            )

        retrieval = DataRetrievalService(test_session)
        listing = await retrieval.get_paginated_entities(
            "subject", page=1, page_size=10
        )
        assert {s.code for s in listing["data"]} == {"MTH", "ENG"}

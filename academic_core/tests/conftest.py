# academic_core/tests/conftest.py

"""
Pytest configuration and fixtures for academic core tests.
"""

import pytest
import logging
from datetime import date, time
from uuid import uuid4

from academic_core.core.intervals import (
    Booking,
    ResourceKey,
    ResourceType,
    TimeInterval,
)

# Configure logging for tests
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)


@pytest.fixture
def class_id():
    """Generate a test class ID"""
    return uuid4()


@pytest.fixture
def exam_day():
    return date(2024, 3, 1)


@pytest.fixture
def make_exam_booking(class_id, exam_day):
    """Factory for exam bookings on the fixture class and day"""

    def _make(start, end, owner_id=None, exclude_id=None, label=None, day=None):
        return Booking(
            resource_key=ResourceKey(ResourceType.CLASS, class_id),
            interval=TimeInterval(day or exam_day, time(*start), time(*end)),
            owner_id=owner_id or uuid4(),
            exclude_id=exclude_id,
            label=label,
        )

    return _make

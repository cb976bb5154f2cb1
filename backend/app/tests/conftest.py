# backend/app/tests/conftest.py

import os

os.environ.setdefault("ENVIRONMENT", "testing")

import logging
from datetime import date
from types import SimpleNamespace
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.api.deps import db_session
from app.database import db_manager
from app.models import (
    Base,
    School,
    AcademicYear,
    Term,
    ClassRoom,
    Subject,
    Venue,
    Student,
    Teacher,
)

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

logging.basicConfig(
    level=logging.DEBUG,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


@pytest_asyncio.fixture
async def test_engine():
    """A fresh in-memory database per test with every table created."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine.sync_engine, "connect")
    def enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def test_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    session_maker = async_sessionmaker(
        test_engine, expire_on_commit=False, class_=AsyncSession
    )
    async with session_maker() as session:
        yield session


@pytest_asyncio.fixture
async def client(test_engine) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client talking to the app with its sessions bound to the test engine."""
    db_manager.bind(test_engine)
    session_maker = async_sessionmaker(
        test_engine, expire_on_commit=False, class_=AsyncSession
    )

    async def override_db_session():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[db_session] = override_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
    db_manager.engine = None
    db_manager.AsyncSessionLocal = None
    db_manager._is_initialized = False


@pytest_asyncio.fixture
async def school_data(test_session: AsyncSession) -> SimpleNamespace:
    """
    One school with an academic year of two terms, two classes, two subjects
    (Mathematics worth 2 credit units), a venue, two teachers and three
    students in the first class.
    """
    school = School(name="Greenfield Academy", code="GFA")
    test_session.add(school)
    await test_session.flush()

    year = AcademicYear(
        school_id=school.id,
        name="2024/2025",
        start_date=date(2024, 9, 1),
        end_date=date(2025, 7, 31),
        is_current=True,
    )
    test_session.add(year)
    await test_session.flush()

    term1 = Term(
        academic_year_id=year.id,
        name="First Term",
        start_date=date(2024, 9, 1),
        end_date=date(2024, 12, 20),
        is_current=True,
    )
    term2 = Term(
        academic_year_id=year.id,
        name="Second Term",
        start_date=date(2025, 1, 6),
        end_date=date(2025, 4, 4),
    )
    class_a = ClassRoom(
        school_id=school.id,
        academic_year_id=year.id,
        name="JSS 1A",
        grade_level=7,
        section="A",
    )
    class_b = ClassRoom(
        school_id=school.id,
        academic_year_id=year.id,
        name="JSS 2B",
        grade_level=8,
        section="B",
    )
    maths = Subject(school_id=school.id, name="Mathematics", code="MTH", credit_units=2)
    english = Subject(school_id=school.id, name="English", code="ENG", credit_units=1)
    hall = Venue(school_id=school.id, name="Main Hall", code="HALL-1", capacity=120)
    test_session.add_all([term1, term2, class_a, class_b, maths, english, hall])
    await test_session.flush()

    teacher1 = Teacher(
        school_id=school.id, employee_number="T-001", first_name="Ada", last_name="Obi"
    )
    teacher2 = Teacher(
        school_id=school.id, employee_number="T-002", first_name="Tunde", last_name="Bello"
    )
    students = [
        Student(
            school_id=school.id,
            class_id=class_a.id,
            admission_number=f"ADM-{number:03d}",
            first_name=first,
            last_name=last,
        )
        for number, (first, last) in enumerate(
            [("Chidi", "Eze"), ("Amina", "Yusuf"), ("Kofi", "Mensah")], start=1
        )
    ]
    test_session.add_all([teacher1, teacher2, *students])
    await test_session.commit()

    return SimpleNamespace(
        school=school,
        year=year,
        term1=term1,
        term2=term2,
        class_a=class_a,
        class_b=class_b,
        maths=maths,
        english=english,
        hall=hall,
        teacher1=teacher1,
        teacher2=teacher2,
        students=students,
    )


@pytest.fixture
def exam_payload(school_data):
    """Factory for exam request bodies on the seeded data."""

    def build(**overrides):
        payload = {
            "name": "Mathematics Mid-Term",
            "class_id": str(school_data.class_a.id),
            "subject_id": str(school_data.maths.id),
            "teacher_id": str(school_data.teacher1.id),
            "venue_id": str(school_data.hall.id),
            "term_id": str(school_data.term1.id),
            "exam_date": "2024-10-14",
            "start_time": "09:00:00",
            "end_time": "10:00:00",
            "total_marks": 100,
        }
        payload.update(overrides)
        return payload

    return build


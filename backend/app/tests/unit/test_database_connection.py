# backend/app/tests/unit/test_database_connection.py

import pytest
from sqlalchemy import inspect, text
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import DatabaseManager, check_db_health, db_manager


class TestDatabaseConnection:
    """Test database connection and schema creation"""

    @pytest.mark.asyncio
    async def test_database_connection(self, test_session: AsyncSession):
        result = await test_session.execute(text("SELECT 1"))
        assert result.scalar() == 1

    @pytest.mark.asyncio
    async def test_all_tables_are_created(self, test_engine):
        async with test_engine.connect() as conn:
            tables = await conn.run_sync(
                lambda sync_conn: inspect(sync_conn).get_table_names()
            )

        for name in (
            "schools",
            "academic_years",
            "terms",
            "classes",
            "students",
            "teachers",
            "exams",
            "exam_marks",
            "teacher_assignments",
            "timetable_entries",
            "teacher_leaves",
            "student_gpas",
            "report_cards",
        ):
            assert name in tables

    @pytest.mark.asyncio
    async def test_foreign_keys_are_enforced(self, test_session: AsyncSession):
        result = await test_session.execute(text("PRAGMA foreign_keys"))
        assert result.scalar() == 1


class TestDatabaseManager:
    @pytest.mark.asyncio
    async def test_session_requires_initialization(self):
        manager = DatabaseManager()

        with pytest.raises(RuntimeError):
            async with manager.get_session():
                pass

    @pytest.mark.asyncio
    async def test_bound_engine_serves_sessions(self, test_engine):
        manager = DatabaseManager()
        manager.bind(test_engine)

        async with manager.get_session() as session:
            result = await session.execute(text("SELECT 1"))

        assert manager.is_initialized
        assert result.scalar() == 1

    @pytest.mark.asyncio
    async def test_health_check(self, test_engine):
        db_manager.bind(test_engine)
        try:
            health = await check_db_health()
        finally:
            db_manager.engine = None
            db_manager.AsyncSessionLocal = None
            db_manager._is_initialized = False

        assert health["status"] == "healthy"
        assert health["connection_pool"]["pool"] == "StaticPool"

    @pytest.mark.asyncio
    async def test_health_check_without_engine(self):
        health = await check_db_health()

        assert health["status"] == "unhealthy"

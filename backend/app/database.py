# app/database.py

"""
Async database access with PostgreSQL (schema-aware) and SQLite support.
"""

import asyncio
import logging
from typing import Optional, AsyncGenerator, Dict, Any
from contextlib import asynccontextmanager

from sqlalchemy import text, event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    create_async_engine,
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
)
from sqlalchemy.pool import StaticPool

from .models.base import Base

logger = logging.getLogger(__name__)


def _is_sqlite(database_url: str) -> bool:
    return make_url(database_url).get_backend_name() == "sqlite"


class DatabaseManager:
    """Manages async SQLAlchemy engine and async session factory."""

    def __init__(self) -> None:
        self.engine: Optional[AsyncEngine] = None
        self.AsyncSessionLocal: Optional[async_sessionmaker] = None
        self.schema: Optional[str] = None
        self._is_initialized = False

    @property
    def is_initialized(self) -> bool:
        return self._is_initialized

    async def initialize(
        self,
        database_url: str,
        pool_size: int = 10,
        max_overflow: int = 20,
        pool_timeout: int = 30,
        pool_recycle: int = 3600,
        echo: bool = False,
        schema: Optional[str] = "school_records",
        max_retries: int = 3,
        retry_delay: int = 1,
    ) -> None:
        """
        Initialize async engine and async session factory.
        Retries on failure. The schema search path only applies to PostgreSQL.
        """
        if self._is_initialized:
            logger.warning("Database already initialized")
            return

        if not database_url:
            raise ValueError("Database URL is required")

        # Convert sync prefix to async if needed
        if database_url.startswith("postgresql://"):
            database_url = database_url.replace(
                "postgresql://", "postgresql+asyncpg://", 1
            )

        sqlite = _is_sqlite(database_url)
        if sqlite:
            engine_kwargs: Dict[str, Any] = {
                "echo": echo,
                "connect_args": {"check_same_thread": False},
                "poolclass": StaticPool,
            }
            schema = None
        else:
            engine_kwargs = {
                "echo": echo,
                "pool_size": pool_size,
                "max_overflow": max_overflow,
                "pool_timeout": pool_timeout,
                "pool_recycle": pool_recycle,
                "pool_pre_ping": True,
            }
            if schema:
                engine_kwargs["connect_args"] = {
                    "server_settings": {"search_path": f"{schema},public"}
                }

        last_error = None
        for attempt in range(max_retries):
            try:
                self.engine = create_async_engine(database_url, **engine_kwargs)
                self.AsyncSessionLocal = async_sessionmaker(
                    bind=self.engine, expire_on_commit=False, class_=AsyncSession
                )
                self.schema = schema

                if sqlite:
                    self._setup_sqlite_listeners()

                await self._test_connection()

                self._is_initialized = True
                logger.info(
                    f"Async database initialized successfully"
                    f"{f' with schema: {schema}' if schema else ''}"
                )
                return
            except Exception as e:
                last_error = e
                logger.error(
                    f"Database initialization attempt {attempt + 1}/{max_retries} failed: {e}"
                )
                if self.engine is not None:
                    await self.engine.dispose()
                    self.engine = None
                if attempt < max_retries - 1:
                    await asyncio.sleep(retry_delay * (attempt + 1))

        raise RuntimeError(
            f"Failed to initialize async database after {max_retries} attempts"
        ) from last_error

    def bind(self, engine: AsyncEngine, schema: Optional[str] = None) -> None:
        """Attach an already created engine (tests, scripts)."""
        self.engine = engine
        self.AsyncSessionLocal = async_sessionmaker(
            bind=engine, expire_on_commit=False, class_=AsyncSession
        )
        self.schema = schema
        self._is_initialized = True

    def _setup_sqlite_listeners(self) -> None:
        """Enforce foreign keys on every SQLite connection."""
        if not self.engine:
            return

        @event.listens_for(self.engine.sync_engine, "connect")
        def on_connect(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    async def _test_connection(self) -> None:
        """Run a lightweight query to ensure connectivity."""
        if self.engine is None:
            raise RuntimeError("Engine not initialized")

        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        logger.info("Database connection test successful")

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """Async context manager returning an AsyncSession."""
        if not self._is_initialized or not self.AsyncSessionLocal:
            raise RuntimeError("Database not initialized. Call initialize() first.")

        async with self.AsyncSessionLocal() as session:
            try:
                yield session
            except Exception as e:
                logger.error(f"Async DB session error: {e}")
                await session.rollback()
                raise

    async def create_all_tables(self) -> None:
        """Create tables, and the schema first on PostgreSQL."""
        if not self._is_initialized or self.engine is None:
            raise RuntimeError("Database not initialized")

        try:
            async with self.engine.begin() as conn:
                if self.schema:
                    await conn.execute(text(f"CREATE SCHEMA IF NOT EXISTS {self.schema}"))
                    await conn.execute(text(f"SET search_path TO {self.schema}, public"))
                await conn.run_sync(Base.metadata.create_all)
            logger.info("All tables created successfully")
        except Exception as e:
            logger.error(f"Failed to create tables: {e}")
            raise

    async def get_connection_info(self) -> Dict[str, Any]:
        """Return pool information when available."""
        if not self.engine:
            return {"status": "Engine not initialized"}

        pool = self.engine.sync_engine.pool
        return {"pool": pool.__class__.__name__, "status": pool.status()}

    async def close(self) -> None:
        """Dispose the async engine."""
        if self.engine:
            await self.engine.dispose()
            logger.info("Database connections closed")
        self.engine = None
        self.AsyncSessionLocal = None
        self._is_initialized = False


# Global manager
db_manager = DatabaseManager()


# FastAPI dependency
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency that yields an AsyncSession."""
    async with db_manager.get_session() as session:
        yield session


async def init_db(
    database_url: str,
    create_tables: bool = False,
    schema: Optional[str] = "school_records",
    **engine_options: Any,
) -> None:
    """Initialize the async database, optionally creating tables."""
    await db_manager.initialize(database_url=database_url, schema=schema, **engine_options)

    if create_tables:
        await db_manager.create_all_tables()


async def check_db_health() -> Dict[str, Any]:
    """Async health check."""
    try:
        engine = db_manager.engine
        if engine is None:
            raise RuntimeError("Engine not initialized")

        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

        info = await db_manager.get_connection_info()
        return {
            "status": "healthy",
            "connection_pool": info,
            "message": "Database is accessible",
        }
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return {
            "status": "unhealthy",
            "error": str(e),
            "message": "Database connection failed",
        }


__all__ = [
    "Base",
    "DatabaseManager",
    "db_manager",
    "get_db",
    "init_db",
    "check_db_health",
]

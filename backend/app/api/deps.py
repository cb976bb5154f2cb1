# backend/app/api/deps.py
import logging
from functools import lru_cache
from typing import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from academic_core.config import AcademicCoreConfig

from ..config import Settings, get_settings
from ..database import get_db
from ..services.grading import GradingService
from ..services.scheduling import SchedulingService

# Configure logging
logger = logging.getLogger(__name__)


async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Dependency to get a database session."""
    async for session in get_db():
        yield session


def app_settings() -> Settings:
    return get_settings()


@lru_cache()
def get_grading_config() -> AcademicCoreConfig:
    """Grading policy built once from the settings."""
    config = get_settings().grading_config()
    logger.debug(
        f"Grading policy loaded: {len(config.grade_table.bands)} bands, "
        f"max GPA {config.max_gpa}"
    )
    return config


async def scheduling_service(
    db: AsyncSession = Depends(db_session),
) -> SchedulingService:
    return SchedulingService(db)


async def grading_service(
    db: AsyncSession = Depends(db_session),
    grading_config: AcademicCoreConfig = Depends(get_grading_config),
    settings: Settings = Depends(app_settings),
) -> GradingService:
    return GradingService(
        db, grading_config=grading_config, report_format=settings.REPORT_CARD_FORMAT
    )

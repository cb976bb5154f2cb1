# backend/app/api/__init__.py
from .deps import db_session, get_grading_config, grading_service, scheduling_service

__all__ = ["db_session", "get_grading_config", "grading_service", "scheduling_service"]

# backend/app/services/data_retrieval/data_retrieval_service.py
"""
A unified service for read-only access to the registered entities:
lookup by id and paginated, filtered listing.
"""

import enum
import logging
import math
import uuid
from datetime import date
from typing import Dict, Any, Optional, Type
from uuid import UUID

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.exceptions import DataProcessingError, EntityNotFoundError
from ...models import ENTITY_MODELS, Base

logger = logging.getLogger(__name__)


def resolve_model(entity_type: str) -> Type[Base]:
    try:
        return ENTITY_MODELS[entity_type]
    except KeyError:
        raise ValueError(f"Unknown entity type '{entity_type}'")


class DataRetrievalService:
    """A unified interface for entity lookups."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_entity_by_id(
        self, entity_type: str, entity_id: UUID
    ) -> Optional[Base]:
        model = resolve_model(entity_type)
        logger.debug(f"Fetching {entity_type} {entity_id}")
        return await self.session.get(model, entity_id)

    async def get_entity_or_404(self, entity_type: str, entity_id: UUID) -> Base:
        entity = await self.get_entity_by_id(entity_type, entity_id)
        if entity is None:
            raise EntityNotFoundError(entity_type, entity_id)
        return entity

    async def get_paginated_entities(
        self,
        entity_type: str,
        page: int,
        page_size: int,
        filters: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Return ``{data, total, page, page_size, total_pages}``.

        ``filters`` maps column names to raw values (query-string strings are
        converted to the column's Python type); every filter is an equality.
        """
        model = resolve_model(entity_type)
        conditions = []
        for name, value in (filters or {}).items():
            if value is None:
                continue
            value = self._coerce_filter(model, name, value)
            conditions.append(model.__table__.columns[name] == value)

        try:
            count_stmt = select(func.count()).select_from(model).where(*conditions)
            total = (await self.session.execute(count_stmt)).scalar_one()

            stmt = (
                select(model)
                .where(*conditions)
                .order_by(*self._default_ordering(model))
                .offset((page - 1) * page_size)
                .limit(page_size)
            )
            rows = (await self.session.execute(stmt)).scalars().all()
        except Exception as e:
            logger.error(
                f"Failed to list {entity_type} (page {page}): {e}", exc_info=True
            )
            raise

        logger.debug(f"Listed {len(rows)} of {total} {entity_type} records")
        return {
            "data": list(rows),
            "total": total,
            "page": page,
            "page_size": page_size,
            "total_pages": math.ceil(total / page_size) if page_size else 0,
        }

    @staticmethod
    def _default_ordering(model):
        columns = model.__table__.columns
        ordering = []
        for name in ("exam_date", "start_date", "day_of_week", "start_time", "name"):
            if name in columns:
                ordering.append(columns[name])
        ordering.append(columns["created_at"].desc())
        ordering.append(columns["id"])
        return ordering

    @staticmethod
    def _coerce_filter(model, name: str, value: Any) -> Any:
        column = model.__table__.columns.get(name)
        if column is None:
            raise DataProcessingError(
                f"Cannot filter on '{name}'", phase="filtering"
            )
        if not isinstance(value, str):
            return value

        python_type = column.type.python_type
        try:
            if python_type is bool:
                return value.strip().lower() in ("1", "true", "yes")
            if python_type is uuid.UUID:
                return uuid.UUID(value)
            if python_type is date:
                return date.fromisoformat(value)
            if python_type is int:
                return int(value)
            if isinstance(python_type, type) and issubclass(python_type, enum.Enum):
                return python_type(value)
        except ValueError as e:
            raise DataProcessingError(
                f"Invalid value for filter '{name}': {value}",
                phase="filtering",
                cause=e,
            )
        return value

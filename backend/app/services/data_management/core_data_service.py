# backend/app/services/data_management/core_data_service.py
"""
Service for core data management (CRUD operations).
All writes go through one helper so commit, rollback, refresh and the
translation of integrity errors are handled the same way for every entity.
"""

import logging
from typing import Any, Awaitable, Callable, Dict, List
from uuid import UUID

from sqlalchemy import Numeric
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from academic_core.config import to_decimal

from ...core.exceptions import (
    DataProcessingError,
    DuplicateRecordError,
    EntityNotFoundError,
)
from ...models import Base
from ..data_retrieval import resolve_model

logger = logging.getLogger(__name__)


def _is_unique_violation(error: IntegrityError) -> bool:
    text = str(error.orig).lower()
    return "unique" in text or "duplicate key" in text


class CoreDataService:
    """Provides CRUD operations for the registered entities."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _execute_cud(
        self,
        operation: str,
        entity_type: str,
        action: Callable[[], Awaitable[Any]],
    ) -> Any:
        """
        Generic helper for Create, Update, Delete (CUD) operations.
        Commits on success; on failure rolls back and raises an AppError.
        """
        try:
            result = await action()
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            logger.warning(f"Integrity error during {operation} {entity_type}: {e.orig}")
            if _is_unique_violation(e):
                raise DuplicateRecordError(
                    f"A {entity_type.replace('_', ' ')} with these details already exists",
                    entity_type=entity_type,
                    cause=e,
                )
            raise DataProcessingError(
                f"Invalid reference while trying to {operation} {entity_type}",
                phase=operation,
                entity_type=entity_type,
                cause=e,
            )
        except Exception as e:
            await self.session.rollback()
            logger.error(f"Error in {operation} for {entity_type}: {e}", exc_info=True)
            raise

        if isinstance(result, Base):
            await self.session.refresh(result)
        logger.info(f"Completed {operation} for {entity_type}")
        return result

    @staticmethod
    def _coerce_numeric(model, data: Dict[str, Any]) -> Dict[str, Any]:
        columns = model.__table__.columns
        coerced = dict(data)
        for key, value in data.items():
            if (
                key in columns
                and value is not None
                and isinstance(columns[key].type, Numeric)
            ):
                coerced[key] = to_decimal(value)
        return coerced

    async def _get_or_404(self, entity_type: str, entity_id: UUID) -> Base:
        entity = await self.session.get(resolve_model(entity_type), entity_id)
        if entity is None:
            raise EntityNotFoundError(entity_type, entity_id)
        return entity

    async def create(self, entity_type: str, data: Dict[str, Any]) -> Base:
        model = resolve_model(entity_type)
        entity = model(**self._coerce_numeric(model, data))

        async def action():
            self.session.add(entity)
            await self.session.flush()
            return entity

        return await self._execute_cud("create", entity_type, action)

    async def create_many(
        self, entity_type: str, rows: List[Dict[str, Any]]
    ) -> List[Base]:
        """Insert all rows in one transaction; any failure rolls back all of them."""
        model = resolve_model(entity_type)
        entities = [model(**self._coerce_numeric(model, row)) for row in rows]

        async def action():
            self.session.add_all(entities)
            await self.session.flush()
            return entities

        created = await self._execute_cud("bulk create", entity_type, action)
        for entity in created:
            await self.session.refresh(entity)
        return created

    async def update(
        self, entity_type: str, entity_id: UUID, data: Dict[str, Any]
    ) -> Base:
        entity = await self._get_or_404(entity_type, entity_id)
        values = self._coerce_numeric(type(entity), data)

        async def action():
            for key, value in values.items():
                setattr(entity, key, value)
            await self.session.flush()
            return entity

        return await self._execute_cud("update", entity_type, action)

    async def delete(self, entity_type: str, entity_id: UUID) -> None:
        entity = await self._get_or_404(entity_type, entity_id)

        async def action():
            await self.session.delete(entity)
            await self.session.flush()

        await self._execute_cud("delete", entity_type, action)

# backend/app/api/v1/routes/crud.py
"""Shared list/get/create/update/delete endpoints for registered entities."""

from typing import Optional, Sequence, Type
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from ....api.deps import db_session
from ....config import get_settings
from ....schemas.common import PaginatedResponse
from ....services.data_management import CoreDataService
from ....services.data_retrieval import DataRetrievalService

settings = get_settings()


def register_crud_routes(
    router: APIRouter,
    entity_type: str,
    read_schema: Type[BaseModel],
    create_schema: Optional[Type[BaseModel]] = None,
    update_schema: Optional[Type[BaseModel]] = None,
    filters: Sequence[str] = (),
) -> APIRouter:
    """
    Attach the standard endpoints for ``entity_type`` to ``router``.

    Create and update are only added when their schemas are given, so modules
    with conflict-checked writes can supply their own. Call this after any
    custom GET routes so fixed paths are matched before ``/{entity_id}``.
    """
    label = entity_type.replace("_", " ")
    allowed_filters = frozenset(filters)

    @router.get("/", response_model=PaginatedResponse[read_schema])
    async def list_entities(
        request: Request,
        page: int = Query(1, ge=1),
        page_size: int = Query(
            settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE
        ),
        db: AsyncSession = Depends(db_session),
    ):
        query_filters = {
            key: value
            for key, value in request.query_params.items()
            if key in allowed_filters
        }
        service = DataRetrievalService(db)
        result = await service.get_paginated_entities(
            entity_type, page=page, page_size=page_size, filters=query_filters
        )
        result["data"] = [read_schema.model_validate(row) for row in result["data"]]
        return result

    list_entities.__doc__ = f"Retrieve a paginated list of {label} records."

    @router.get("/{entity_id}", response_model=read_schema)
    async def get_entity(entity_id: UUID, db: AsyncSession = Depends(db_session)):
        service = DataRetrievalService(db)
        return await service.get_entity_or_404(entity_type, entity_id)

    get_entity.__doc__ = f"Retrieve a single {label} by its ID."

    if create_schema is not None:

        @router.post(
            "/", response_model=read_schema, status_code=status.HTTP_201_CREATED
        )
        async def create_entity(
            payload: create_schema, db: AsyncSession = Depends(db_session)
        ):
            service = CoreDataService(db)
            return await service.create(entity_type, payload.model_dump())

        create_entity.__doc__ = f"Create a new {label}."

    if update_schema is not None:

        @router.put("/{entity_id}", response_model=read_schema)
        async def update_entity(
            entity_id: UUID,
            payload: update_schema,
            db: AsyncSession = Depends(db_session),
        ):
            service = CoreDataService(db)
            return await service.update(
                entity_type, entity_id, payload.model_dump(exclude_unset=True)
            )

        update_entity.__doc__ = f"Update an existing {label}."

    @router.delete("/{entity_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_entity(entity_id: UUID, db: AsyncSession = Depends(db_session)):
        service = CoreDataService(db)
        await service.delete(entity_type, entity_id)
        return None

    delete_entity.__doc__ = f"Delete a {label}."

    return router

# app/schemas/common.py
"""Shared response envelopes."""

from __future__ import annotations

from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")

MODEL_CONFIG = ConfigDict(from_attributes=True)


class PaginatedResponse(BaseModel, Generic[T]):
    """Generic structure for paginated responses."""

    data: List[T]
    total: int
    page: int
    page_size: int
    total_pages: int


class ConflictItem(BaseModel):
    message: str
    resource_type: str
    resource_id: str
    owner_id: str
    label: Optional[str] = None
    interval: Dict[str, Any]
    candidate_interval: Dict[str, Any]


class ConflictCheckResponse(BaseModel):
    has_conflicts: bool
    conflicts: List[ConflictItem]

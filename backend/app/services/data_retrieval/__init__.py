# backend/app/services/data_retrieval/__init__.py

"""
Data retrieval services package.

Read-only lookups and paginated listings for every registered entity.
"""

from .data_retrieval_service import DataRetrievalService, resolve_model

__all__ = [
    "DataRetrievalService",
    "resolve_model",
]

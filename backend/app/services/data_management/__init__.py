# backend/app/services/data_management/__init__.py

"""
Services for direct data manipulation and core entity management.
"""

from .core_data_service import CoreDataService

__all__ = [
    "CoreDataService",
]

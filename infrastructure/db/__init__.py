"""
Infrastructure Database Layer.

This package provides Supabase-backed implementations of the repository interfaces
defined in application.ports. These implementations can be injected into services
and routers for clean separation of concerns and testability.

Usage:
    from supabase import create_client
    from infrastructure.db import SupabaseExerciseCatalogRepository

    client = create_client(url, key)
    catalog_repo = SupabaseExerciseCatalogRepository(client)
    documents = catalog_repo.get_all()
"""

from infrastructure.db.exercise_catalog_repository import SupabaseExerciseCatalogRepository

__all__ = [
    "SupabaseExerciseCatalogRepository",
]

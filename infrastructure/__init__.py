"""
Infrastructure Layer for the exercise catalog content engine.

This package contains concrete implementations of repository interfaces:
- db/: Supabase database implementations
- cache/: In-memory draft storage
"""

# Re-export implementations for convenient access
from infrastructure.cache import InMemoryDraftStore
from infrastructure.db import SupabaseExerciseCatalogRepository

__all__ = [
    "SupabaseExerciseCatalogRepository",
    "InMemoryDraftStore",
]

"""
Repository Interfaces (Ports) for the exercise catalog content engine.

This package defines abstract interfaces that decouple domain logic from
infrastructure (database, cache). Implementations are provided in the
infrastructure layer.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the domain needs)
- Adapters: Concrete implementations in infrastructure/ (how it's provided)

Usage:
    from application.ports import ExerciseCatalogRepository

    class CatalogService:
        def __init__(self, catalog_repo: ExerciseCatalogRepository):
            self.catalog_repo = catalog_repo
"""

# Exercise document store
from application.ports.exercise_catalog_repository import ExerciseCatalogRepository

# Editor drafts
from application.ports.draft_store import DraftStore

__all__ = [
    "ExerciseCatalogRepository",
    "DraftStore",
]

"""
Fake Repository Implementations for Testing.

This package provides in-memory fake implementations of repository interfaces
for fast, isolated testing. No database or external dependencies required.

Features:
- All fakes implement the same Protocol interfaces as real implementations
- Supports seeding with test data
- Supports reset() for test isolation
- Factory functions for common test scenarios

Usage:
    from tests.fakes import FakeExerciseCatalogRepository, create_catalog_repo

    # Direct instantiation
    repo = FakeExerciseCatalogRepository()
    repo.seed([{"id": "pull-up", "name": {"he": "מתח"}}])

    # Factory function with pre-populated data
    repo = create_catalog_repo(num_exercises=3)
"""
from typing import Any, Dict, List, Optional

from tests.fakes.exercise_catalog_repository import FakeExerciseCatalogRepository
from tests.fakes.draft_store import FakeDraftStore


# =============================================================================
# Document Builders
# =============================================================================


def make_method(
    method_name: str = "Method",
    locations: Optional[List[str]] = None,
    video: Optional[str] = None,
    image: Optional[str] = None,
    workflow: Optional[Dict[str, Any]] = None,
    **extra: Any,
) -> Dict[str, Any]:
    """Build a stored execution method document."""
    method: Dict[str, Any] = {
        "methodName": method_name,
        "locationMapping": locations if locations is not None else ["home"],
        "media": {"mainVideoUrl": video, "imageUrl": image},
        "workflow": workflow or {"filmed": False, "audio": False, "edited": False, "uploaded": False},
    }
    method.update(extra)
    return method


def make_exercise(
    exercise_id: str,
    name: str = "Exercise",
    methods: Optional[List[Dict[str, Any]]] = None,
    **extra: Any,
) -> Dict[str, Any]:
    """Build a stored exercise document carrying its id."""
    document: Dict[str, Any] = {
        "id": exercise_id,
        "name": {"he": name, "en": name},
        "execution_methods": methods if methods is not None else [],
    }
    document.update(extra)
    return document


# =============================================================================
# Factory Functions
# =============================================================================


def create_catalog_repo(num_exercises: int = 3) -> FakeExerciseCatalogRepository:
    """
    Create a catalog repository with filmed-and-uploaded home methods.

    Args:
        num_exercises: Number of exercises to create

    Returns:
        Seeded FakeExerciseCatalogRepository
    """
    done = {"filmed": True, "audio": True, "edited": True, "uploaded": True}
    return FakeExerciseCatalogRepository(
        [
            make_exercise(
                f"exercise-{i}",
                name=f"Exercise {i}",
                methods=[make_method("Home", ["home"], video=f"https://cdn/e{i}.mp4", workflow=done)],
                base_movement_id="push_up",
            )
            for i in range(num_exercises)
        ]
    )


__all__ = [
    # Fakes
    "FakeExerciseCatalogRepository",
    "FakeDraftStore",
    # Builders
    "make_method",
    "make_exercise",
    # Factories
    "create_catalog_repo",
]

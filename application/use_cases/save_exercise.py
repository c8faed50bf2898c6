"""
SaveExercise Use Case.

Orchestrates exercise persistence for the catalog editor, handling both
create (new document) and partial update (merge into the stored document)
operations.

Workflow for updates:
1. Fetch the stored document via repository
2. Merge the partial payload into it (absent keys keep stored values,
   methods merge by index so workflow state survives)
3. Normalize the merged document into a canonical Exercise
4. Persist the canonical document, keeping fields the model does not know
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from application.exceptions import MalformedExerciseError
from application.ports import ExerciseCatalogRepository
from backend.core.normalize import (
    convert_undefined_to_null,
    merge_exercise_update,
    normalize_exercise,
    to_store_document,
)
from domain.models import Exercise

logger = logging.getLogger(__name__)


@dataclass
class SaveExerciseResult:
    """Result of the SaveExercise use case execution."""

    success: bool
    exercise: Optional[Exercise] = None
    exercise_id: Optional[str] = None
    is_update: bool = False
    error: Optional[str] = None
    error_type: Optional[str] = None


class SaveExerciseUseCase:
    """
    Use case for creating and updating catalog exercises.

    Dependencies are injected via constructor for testability.

    Usage:
        >>> use_case = SaveExerciseUseCase(catalog_repo=repo)
        >>> result = use_case.update("pull-up", {"requiredLocations": ["park"]})
        >>> if result.success:
        ...     print(result.exercise.required_locations)
    """

    def __init__(
        self, catalog_repo: ExerciseCatalogRepository, *, language: str = "he"
    ) -> None:
        """
        Initialize the use case with required dependencies.

        Args:
            catalog_repo: Repository for exercise documents
            language: Language kept when a localized object is written where
                a string belongs
        """
        self._catalog_repo = catalog_repo
        self._language = language

    def create(self, exercise_id: str, payload: Dict[str, Any]) -> SaveExerciseResult:
        """
        Create a new exercise.

        Args:
            exercise_id: Id of the new document
            payload: Editor payload in store shape

        Returns:
            SaveExerciseResult; ``error_type`` is conflict, malformed or
            store_error on failure
        """
        if self._catalog_repo.get_by_id(exercise_id) is not None:
            return SaveExerciseResult(
                success=False,
                exercise_id=exercise_id,
                error=f"Exercise already exists: {exercise_id}",
                error_type="conflict",
            )
        try:
            exercise = normalize_exercise(
                exercise_id, convert_undefined_to_null(payload), language=self._language
            )
        except MalformedExerciseError as e:
            return SaveExerciseResult(
                success=False, exercise_id=exercise_id, error=str(e), error_type="malformed"
            )

        saved = self._catalog_repo.create(exercise_id, to_store_document({}, exercise))
        if saved is None:
            return SaveExerciseResult(
                success=False,
                exercise_id=exercise_id,
                error="Failed to save exercise",
                error_type="store_error",
            )
        logger.info(f"Exercise {exercise_id} created with {len(exercise.execution_methods)} method(s)")
        return SaveExerciseResult(success=True, exercise=exercise, exercise_id=exercise_id)

    def update(self, exercise_id: str, changes: Dict[str, Any]) -> SaveExerciseResult:
        """
        Apply a partial update to an existing exercise.

        Args:
            exercise_id: Document id
            changes: Partial document; absent keys keep their stored value,
                None clears a value, an empty list clears a list

        Returns:
            SaveExerciseResult; ``error_type`` is not_found, malformed or
            store_error on failure
        """
        stored = self._catalog_repo.get_by_id(exercise_id)
        if stored is None:
            return SaveExerciseResult(
                success=False,
                exercise_id=exercise_id,
                is_update=True,
                error=f"Exercise not found: {exercise_id}",
                error_type="not_found",
            )

        body = {key: value for key, value in stored.items() if key != "id"}
        merged = merge_exercise_update(body, changes)
        try:
            exercise = normalize_exercise(exercise_id, merged, language=self._language)
        except MalformedExerciseError as e:
            return SaveExerciseResult(
                success=False,
                exercise_id=exercise_id,
                is_update=True,
                error=str(e),
                error_type="malformed",
            )

        saved = self._catalog_repo.update(exercise_id, to_store_document(merged, exercise))
        if saved is None:
            return SaveExerciseResult(
                success=False,
                exercise_id=exercise_id,
                is_update=True,
                error="Failed to save exercise",
                error_type="store_error",
            )
        logger.info(f"Exercise {exercise_id} updated")
        return SaveExerciseResult(
            success=True, exercise=exercise, exercise_id=exercise_id, is_update=True
        )

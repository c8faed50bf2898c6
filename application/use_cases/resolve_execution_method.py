"""
ResolveExecutionMethod Use Case.

Fetches an exercise and resolves the execution method (and media URLs) to
present for a runtime context.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from application.exceptions import MalformedExerciseError
from application.ports import ExerciseCatalogRepository
from backend.core.normalize import normalize_exercise
from backend.core.resolution import Resolution, image_url_for, resolve, video_url_for
from domain.models import Exercise, ResolutionContext

logger = logging.getLogger(__name__)


@dataclass
class ResolveResult:
    """Result of the ResolveExecutionMethod use case execution."""

    success: bool
    exercise: Optional[Exercise] = None
    resolution: Optional[Resolution] = None
    video_url: Optional[str] = None
    image_url: Optional[str] = None
    error: Optional[str] = None
    error_type: Optional[str] = None


class ResolveExecutionMethodUseCase:
    """
    Use case for resolving the execution method of one exercise.

    Usage:
        >>> use_case = ResolveExecutionMethodUseCase(catalog_repo=repo)
        >>> result = use_case.execute("pull-up", ResolutionContext(location="park"))
        >>> result.resolution.method.method_name
        'Park bar'
    """

    def __init__(
        self, catalog_repo: ExerciseCatalogRepository, *, language: str = "he"
    ) -> None:
        self._catalog_repo = catalog_repo
        self._language = language

    def execute(self, exercise_id: str, context: ResolutionContext) -> ResolveResult:
        """
        Resolve the method to present.

        Args:
            exercise_id: Exercise document id
            context: Runtime location, persona tags and brand

        Returns:
            ResolveResult; ``resolution.method`` is None only when the
            exercise has no execution methods
        """
        stored = self._catalog_repo.get_by_id(exercise_id)
        if stored is None:
            return ResolveResult(
                success=False,
                error=f"Exercise not found: {exercise_id}",
                error_type="not_found",
            )
        try:
            exercise = normalize_exercise(exercise_id, stored, language=self._language)
        except MalformedExerciseError as e:
            logger.error(f"Cannot resolve malformed exercise {exercise_id}: {e}")
            return ResolveResult(success=False, error=str(e), error_type="malformed")

        resolution = resolve(exercise, context)
        return ResolveResult(
            success=True,
            exercise=exercise,
            resolution=resolution,
            video_url=video_url_for(exercise, resolution.method),
            image_url=image_url_for(exercise, resolution.method),
        )

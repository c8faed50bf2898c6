"""
BuildContentMatrix Use Case.

Loads every exercise document from the catalog, normalizes it, and runs the
content analysis: matrix rows, production task queues and Smart Swap
diagnostics for the admin dashboard.

Workflow:
1. Fetch raw documents via repository
2. Normalize each document (malformed documents are reported, not fatal)
3. Apply the dashboard filter
4. Analyze exercises into matrix rows / task queues / Smart Swap report
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from application.exceptions import MalformedExerciseError
from application.ports import ExerciseCatalogRepository
from backend.core.content_matrix import build_content_matrix, filter_exercises
from backend.core.normalize import normalize_exercise
from backend.core.smart_swap import (
    SmartSwapDiagnosis,
    collect_base_movement_ids,
    diagnose_smart_swap_gaps,
)
from backend.core.task_list import generate_task_list
from domain.models import (
    ContentMatrixFilter,
    ContentMatrixRow,
    Exercise,
    TaskListSummary,
)

logger = logging.getLogger(__name__)


def load_catalog(
    catalog_repo: ExerciseCatalogRepository, language: str = "he"
) -> Tuple[List[Exercise], List[str]]:
    """
    Load and normalize every exercise in the catalog.

    Args:
        catalog_repo: Exercise document store
        language: Language kept when localized objects collapse to strings

    Returns:
        ``(exercises, malformed_ids)``; documents that cannot be interpreted
        at all are skipped and their ids reported
    """
    exercises: List[Exercise] = []
    malformed: List[str] = []
    for document in catalog_repo.get_all():
        exercise_id = document.get("id") or ""
        try:
            exercises.append(normalize_exercise(exercise_id, document, language=language))
        except MalformedExerciseError as e:
            logger.error(f"Skipping malformed exercise {exercise_id}: {e}")
            malformed.append(exercise_id)
    return exercises, malformed


@dataclass
class ContentMatrixResult:
    """Result of the BuildContentMatrix use case execution."""

    success: bool
    rows: List[ContentMatrixRow] = field(default_factory=list)
    tasks: Optional[TaskListSummary] = None
    malformed_ids: List[str] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def total_critical_gaps(self) -> int:
        return sum(row.critical_gap_count for row in self.rows)

    @property
    def total_workflow_gaps(self) -> int:
        return sum(row.workflow_gap_count for row in self.rows)


@dataclass
class SmartSwapResult:
    """Result of the Smart Swap diagnosis."""

    success: bool
    diagnosis: SmartSwapDiagnosis = field(default_factory=SmartSwapDiagnosis)
    base_movement_ids: List[str] = field(default_factory=list)
    malformed_ids: List[str] = field(default_factory=list)
    error: Optional[str] = None


class BuildContentMatrixUseCase:
    """
    Use case for the production dashboard reports.

    Dependencies are injected via constructor for testability.

    Usage:
        >>> use_case = BuildContentMatrixUseCase(catalog_repo=repo)
        >>> result = use_case.execute(ContentMatrixFilter(locations=["park"]))
        >>> if result.success:
        ...     print(f"{len(result.rows)} rows, {result.total_critical_gaps} critical gaps")
    """

    def __init__(
        self, catalog_repo: ExerciseCatalogRepository, *, language: str = "he"
    ) -> None:
        """
        Initialize the use case with required dependencies.

        Args:
            catalog_repo: Repository for exercise documents
            language: Language of exercise names in the reports and of
                localized values collapsed to strings
        """
        self._catalog_repo = catalog_repo
        self.language = language

    def execute(
        self,
        matrix_filter: Optional[ContentMatrixFilter] = None,
        *,
        include_tasks: bool = False,
    ) -> ContentMatrixResult:
        """
        Build the content matrix.

        Args:
            matrix_filter: Optional dashboard filter
            include_tasks: Also build the production task queues

        Returns:
            ContentMatrixResult with one row per matching exercise
        """
        exercises, malformed = load_catalog(self._catalog_repo, self.language)
        if matrix_filter is not None and not matrix_filter.is_empty:
            exercises = filter_exercises(exercises, matrix_filter)

        rows = build_content_matrix(exercises, self.language)
        tasks = generate_task_list(rows) if include_tasks else None

        logger.info(
            f"Content matrix built: {len(rows)} row(s), "
            f"{len(malformed)} malformed document(s) skipped"
        )
        return ContentMatrixResult(
            success=True,
            rows=rows,
            tasks=tasks,
            malformed_ids=malformed,
        )

    def diagnose_smart_swap(self) -> SmartSwapResult:
        """Report exercises missing a base movement id."""
        exercises, malformed = load_catalog(self._catalog_repo, self.language)
        return SmartSwapResult(
            success=True,
            diagnosis=diagnose_smart_swap_gaps(exercises),
            base_movement_ids=collect_base_movement_ids(exercises),
            malformed_ids=malformed,
        )

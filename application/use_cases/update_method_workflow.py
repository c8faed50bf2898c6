"""
UpdateMethodWorkflow Use Case.

Marks production workflow steps of execution methods as complete or
incomplete, one at a time or in batches from the production dashboard.

Workflow:
1. Fetch the exercise document via repository
2. Normalize it and locate the method by index
3. Apply the step (strict ordering only when enabled)
4. Persist the canonical document
5. Return the new workflow and derived production status
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

from application.exceptions import (
    ExerciseNotFoundError,
    InvalidMethodIndexError,
    MalformedExerciseError,
    WorkflowOrderError,
)
from application.ports import ExerciseCatalogRepository
from backend.core.normalize import normalize_exercise, to_store_document
from backend.core.workflow import (
    apply_workflow_step,
    method_production_status,
    workflow_order_violations,
)
from domain.models import ProductionStatus, Workflow, WorkflowStep

logger = logging.getLogger(__name__)


@dataclass
class WorkflowUpdate:
    """One requested workflow change."""

    exercise_id: str
    method_index: int
    step: WorkflowStep
    completed: bool = True


@dataclass
class WorkflowUpdateResult:
    """Result of a single workflow update."""

    success: bool
    exercise_id: str
    method_index: int
    workflow: Optional[Workflow] = None
    production_status: Optional[ProductionStatus] = None
    error: Optional[str] = None
    error_type: Optional[str] = None


@dataclass
class BatchWorkflowUpdateResult:
    """Result of a batch of workflow updates."""

    success: int = 0
    failed: int = 0
    errors: List[str] = field(default_factory=list)
    results: List[WorkflowUpdateResult] = field(default_factory=list)


def _error_type(error: Exception) -> str:
    if isinstance(error, ExerciseNotFoundError):
        return "not_found"
    if isinstance(error, InvalidMethodIndexError):
        return "invalid_index"
    if isinstance(error, WorkflowOrderError):
        return "workflow_order"
    if isinstance(error, MalformedExerciseError):
        return "malformed"
    return "store_error"


class UpdateMethodWorkflowUseCase:
    """
    Use case for updating the production workflow of execution methods.

    Dependencies are injected via constructor for testability.

    Usage:
        >>> use_case = UpdateMethodWorkflowUseCase(catalog_repo=repo)
        >>> result = use_case.execute("pull-up", 0, WorkflowStep.FILMED, True)
        >>> result.production_status
        <ProductionStatus.IN_POST_PRODUCTION: 'in_post_production'>
    """

    def __init__(
        self,
        catalog_repo: ExerciseCatalogRepository,
        *,
        enforce_order: bool = False,
        clock: Optional[Callable[[], datetime]] = None,
        language: str = "he",
    ) -> None:
        """
        Initialize the use case with required dependencies.

        Args:
            catalog_repo: Repository for exercise documents
            enforce_order: Reject updates that break the pipeline order
            clock: Returns the completion timestamp, defaults to UTC now
            language: Language kept when localized objects collapse to strings
        """
        self._catalog_repo = catalog_repo
        self._enforce_order = enforce_order
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._language = language

    def execute(
        self,
        exercise_id: str,
        method_index: int,
        step: WorkflowStep,
        completed: bool = True,
    ) -> WorkflowUpdateResult:
        """
        Set one workflow step of one method.

        Args:
            exercise_id: Exercise document id
            method_index: Position of the method in execution_methods
            step: Workflow step to update
            completed: New value of the step

        Returns:
            WorkflowUpdateResult; on failure ``error_type`` is one of
            not_found, invalid_index, workflow_order, malformed, store_error
        """
        try:
            return self._apply(exercise_id, method_index, WorkflowStep(step), completed)
        except (
            ExerciseNotFoundError,
            InvalidMethodIndexError,
            WorkflowOrderError,
            MalformedExerciseError,
        ) as e:
            logger.warning(f"Workflow update rejected for {exercise_id}[{method_index}]: {e}")
            return WorkflowUpdateResult(
                success=False,
                exercise_id=exercise_id,
                method_index=method_index,
                error=str(e),
                error_type=_error_type(e),
            )

    def mark_filmed(self, exercise_id: str, method_index: int) -> WorkflowUpdateResult:
        """Shorthand for completing the filming step."""
        return self.execute(exercise_id, method_index, WorkflowStep.FILMED, True)

    def execute_batch(self, updates: List[WorkflowUpdate]) -> BatchWorkflowUpdateResult:
        """
        Apply several updates in order; failures do not stop the batch.

        Returns:
            Counts of applied and failed updates plus one error message per
            failure
        """
        batch = BatchWorkflowUpdateResult()
        for update in updates:
            result = self.execute(
                update.exercise_id, update.method_index, update.step, update.completed
            )
            batch.results.append(result)
            if result.success:
                batch.success += 1
            else:
                batch.failed += 1
                batch.errors.append(
                    f"{update.exercise_id}[{update.method_index}]: {result.error}"
                )
        logger.info(f"Batch workflow update: {batch.success} applied, {batch.failed} failed")
        return batch

    def _apply(
        self, exercise_id: str, method_index: int, step: WorkflowStep, completed: bool
    ) -> WorkflowUpdateResult:
        stored = self._catalog_repo.get_by_id(exercise_id)
        if stored is None:
            raise ExerciseNotFoundError(exercise_id)

        exercise = normalize_exercise(exercise_id, stored, language=self._language)
        methods = list(exercise.execution_methods)
        if not 0 <= method_index < len(methods):
            raise InvalidMethodIndexError(exercise_id, method_index, len(methods))

        method = methods[method_index]
        workflow = apply_workflow_step(
            method.workflow,
            step,
            completed,
            now=self._clock(),
            enforce_order=self._enforce_order,
        )
        out_of_order = workflow_order_violations(workflow)
        if out_of_order:
            logger.warning(
                f"Exercise {exercise_id} method {method_index} has steps complete out of order: "
                f"{[s.value for s in out_of_order]}"
            )
        methods[method_index] = method.model_copy(update={"workflow": workflow})
        updated = exercise.model_copy(update={"execution_methods": methods})

        saved = self._catalog_repo.update(exercise_id, to_store_document(stored, updated))
        if saved is None:
            return WorkflowUpdateResult(
                success=False,
                exercise_id=exercise_id,
                method_index=method_index,
                error="Failed to save exercise",
                error_type="store_error",
            )

        logger.info(f"Exercise {exercise_id} method {method_index}: {step.value}={completed}")
        return WorkflowUpdateResult(
            success=True,
            exercise_id=exercise_id,
            method_index=method_index,
            workflow=workflow,
            production_status=method_production_status(methods[method_index]),
        )

"""
Content router for the production dashboard.

This router provides endpoints for:
- The content matrix (per exercise, per location coverage and gaps)
- Production task queues (filming, audio, editing, upload)
- Smart Swap diagnostics (exercises missing a base movement id)
- Batch workflow updates from the dashboard
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from api.deps import (
    get_build_content_matrix_use_case,
    get_update_method_workflow_use_case,
)
from api.schemas import (
    AutoAssignmentResponse,
    BatchWorkflowRequest,
    BatchWorkflowResponse,
    ContentMatrixResponse,
    SmartSwapExerciseResponse,
    SmartSwapResponse,
    TaskListResponse,
)
from application.use_cases import (
    BuildContentMatrixUseCase,
    UpdateMethodWorkflowUseCase,
    WorkflowUpdate,
)
from domain.models import ContentMatrixFilter, ExecutionLocation, Exercise

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/content",
    tags=["Content"],
)


def get_matrix_filter(
    lifestyle_tag: Optional[List[str]] = Query(None, description="Keep exercises with a method carrying any of these tags"),
    location: Optional[List[ExecutionLocation]] = Query(None, description="Keep exercises with a method at any of these locations"),
    brand_id: Optional[List[str]] = Query(None, description="Keep exercises with a method of any of these brands"),
    movement_group: Optional[List[str]] = Query(None, description="Keep exercises in any of these movement groups"),
) -> ContentMatrixFilter:
    """Build the dashboard filter from repeated query parameters."""
    return ContentMatrixFilter(
        lifestyle_tags=lifestyle_tag or [],
        locations=location or [],
        brand_ids=brand_id or [],
        movement_groups=movement_group or [],
    )


def _exercise_ref(exercise: Exercise, language: str) -> SmartSwapExerciseResponse:
    return SmartSwapExerciseResponse(exercise_id=exercise.id, name=exercise.display_name(language))


# =============================================================================
# Dashboard Endpoints
# =============================================================================


@router.get("/matrix", response_model=ContentMatrixResponse)
def content_matrix(
    matrix_filter: ContentMatrixFilter = Depends(get_matrix_filter),
    use_case: BuildContentMatrixUseCase = Depends(get_build_content_matrix_use_case),
) -> ContentMatrixResponse:
    """
    Build the content matrix.

    One row per exercise with its methods bucketed by location, production
    readiness, and the detailed gap list. Malformed documents are skipped
    and reported in ``malformedIds``.
    """
    result = use_case.execute(matrix_filter)
    if not result.success:
        raise HTTPException(status_code=500, detail=result.error or "Failed to build content matrix")

    return ContentMatrixResponse(
        rows=result.rows,
        count=len(result.rows),
        total_critical_gaps=result.total_critical_gaps,
        total_workflow_gaps=result.total_workflow_gaps,
        malformed_ids=result.malformed_ids,
    )


@router.get("/tasks", response_model=TaskListResponse)
def content_tasks(
    matrix_filter: ContentMatrixFilter = Depends(get_matrix_filter),
    use_case: BuildContentMatrixUseCase = Depends(get_build_content_matrix_use_case),
) -> TaskListResponse:
    """
    Production task queues.

    Every method lands in at most one queue: the first workflow step it has
    not completed.
    """
    result = use_case.execute(matrix_filter, include_tasks=True)
    if not result.success or result.tasks is None:
        raise HTTPException(status_code=500, detail=result.error or "Failed to build task list")

    return TaskListResponse(
        tasks=result.tasks,
        total=result.tasks.total,
        malformed_ids=result.malformed_ids,
    )


@router.get("/smart-swap", response_model=SmartSwapResponse)
def smart_swap(
    use_case: BuildContentMatrixUseCase = Depends(get_build_content_matrix_use_case),
) -> SmartSwapResponse:
    """Exercises missing a base movement id, and the ids already in use."""
    result = use_case.diagnose_smart_swap()
    if not result.success:
        raise HTTPException(status_code=500, detail=result.error or "Failed to diagnose Smart Swap")

    diagnosis = result.diagnosis
    return SmartSwapResponse(
        missing=[_exercise_ref(e, use_case.language) for e in diagnosis.missing],
        auto_assignable=[
            AutoAssignmentResponse(
                exercise_id=a.exercise.id,
                name=a.exercise.display_name(use_case.language),
                movement_group=a.exercise.movement_group.value if a.exercise.movement_group else None,
                suggested_id=a.suggested_id,
            )
            for a in diagnosis.auto_assignable
        ],
        manual_only=[_exercise_ref(e, use_case.language) for e in diagnosis.manual_only],
        base_movement_ids=result.base_movement_ids,
        malformed_ids=result.malformed_ids,
    )


# =============================================================================
# Workflow Endpoints
# =============================================================================


@router.post("/workflow/batch", response_model=BatchWorkflowResponse)
def batch_workflow_update(
    request: BatchWorkflowRequest,
    use_case: UpdateMethodWorkflowUseCase = Depends(get_update_method_workflow_use_case),
) -> BatchWorkflowResponse:
    """
    Apply several workflow updates in order.

    A failing update does not stop the batch; its error is reported in
    ``errors``.
    """
    batch = use_case.execute_batch(
        [
            WorkflowUpdate(
                exercise_id=item.exercise_id,
                method_index=item.method_index,
                step=item.step,
                completed=item.completed,
            )
            for item in request.updates
        ]
    )
    return BatchWorkflowResponse(
        success=batch.success,
        failed=batch.failed,
        errors=batch.errors,
    )

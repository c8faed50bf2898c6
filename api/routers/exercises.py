"""
Exercises router for execution method resolution and catalog edits.

This router provides endpoints for:
- Resolving the execution method to present for a runtime context
- Setting workflow steps of a single execution method
- Creating exercises and applying partial updates
- Editor drafts of execution methods
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query

from api.deps import (
    get_draft_cache,
    get_resolve_execution_method_use_case,
    get_save_exercise_use_case,
    get_update_method_workflow_use_case,
)
from api.errors import http_error
from api.schemas import (
    DraftRequest,
    DraftResponse,
    ExerciseCreateRequest,
    ExerciseDocumentPayload,
    ResolveResponse,
    WorkflowUpdateRequest,
    WorkflowUpdateResponse,
)
from application.use_cases import (
    ResolveExecutionMethodUseCase,
    SaveExerciseUseCase,
    UpdateMethodWorkflowUseCase,
)
from backend.core.normalize import exercise_to_document, execution_method_to_document
from backend.services.draft_cache import DraftCache
from domain.models import ResolutionContext

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/exercises",
    tags=["Exercises"],
)


# =============================================================================
# Resolution Endpoints
# =============================================================================


@router.get("/{exercise_id}/resolve", response_model=ResolveResponse)
def resolve_method(
    exercise_id: str = Path(..., description="Exercise document id"),
    location: Optional[str] = Query(None, description="Where the user is training"),
    persona_tag: Optional[List[str]] = Query(None, description="Lifestyle tags of the user"),
    brand_id: Optional[str] = Query(None, description="Brand of the equipment at hand"),
    use_case: ResolveExecutionMethodUseCase = Depends(get_resolve_execution_method_use_case),
) -> ResolveResponse:
    """
    Resolve the execution method to present.

    Methods are narrowed by brand, then location, then persona, then gear
    tier. When nothing discriminates, the first method with media is
    returned and ``usedFallback`` is set.
    """
    context = ResolutionContext(
        location=location,
        persona_tags=persona_tag or [],
        brand_id=brand_id,
    )
    result = use_case.execute(exercise_id, context)
    if not result.success:
        raise http_error(result.error_type, result.error)

    resolution = result.resolution
    return ResolveResponse(
        exercise_id=exercise_id,
        method_index=resolution.index,
        method=execution_method_to_document(resolution.method) if resolution.method else None,
        stages=resolution.stages,
        used_fallback=resolution.used_fallback,
        video_url=result.video_url,
        image_url=result.image_url,
    )


# =============================================================================
# Workflow Endpoints
# =============================================================================


@router.post(
    "/{exercise_id}/methods/{method_index}/workflow",
    response_model=WorkflowUpdateResponse,
)
def update_method_workflow(
    request: WorkflowUpdateRequest,
    exercise_id: str = Path(..., description="Exercise document id"),
    method_index: int = Path(..., ge=0, description="Position of the method"),
    use_case: UpdateMethodWorkflowUseCase = Depends(get_update_method_workflow_use_case),
) -> WorkflowUpdateResponse:
    """
    Mark one workflow step of a method as complete or incomplete.

    Returns 409 when strict workflow ordering is enabled and the change
    would skip or undo a step out of order.
    """
    result = use_case.execute(exercise_id, method_index, request.step, request.completed)
    if not result.success:
        raise http_error(result.error_type, result.error)

    return WorkflowUpdateResponse(
        exercise_id=exercise_id,
        method_index=method_index,
        workflow=result.workflow.model_dump(by_alias=True, mode="json"),
        production_status=result.production_status,
    )


# =============================================================================
# Edit Endpoints
# =============================================================================


@router.post("", status_code=201)
def create_exercise(
    request: ExerciseCreateRequest,
    use_case: SaveExerciseUseCase = Depends(get_save_exercise_use_case),
) -> dict:
    """Create a new exercise from a store-shaped document."""
    result = use_case.create(request.id, request.document.to_document())
    if not result.success:
        raise http_error(result.error_type, result.error)
    return {"id": result.exercise_id, **exercise_to_document(result.exercise)}


@router.put("/{exercise_id}")
def update_exercise(
    payload: ExerciseDocumentPayload,
    exercise_id: str = Path(..., description="Exercise document id"),
    use_case: SaveExerciseUseCase = Depends(get_save_exercise_use_case),
) -> dict:
    """
    Apply a partial update to an exercise.

    Absent keys keep their stored value, ``null`` clears a value and ``[]``
    clears a list. Execution methods merge by position, so workflow state
    survives edits that do not send it.
    """
    result = use_case.update(exercise_id, payload.to_document())
    if not result.success:
        raise http_error(result.error_type, result.error)
    return {"id": result.exercise_id, **exercise_to_document(result.exercise)}


# =============================================================================
# Draft Endpoints
# =============================================================================


@router.get("/{exercise_id}/draft", response_model=DraftResponse)
def get_draft(
    exercise_id: str = Path(..., description="Exercise document id"),
    cache: DraftCache = Depends(get_draft_cache),
) -> DraftResponse:
    """Stored draft of the execution methods of an exercise, if any."""
    cache.flush_due()
    methods = cache.load(exercise_id)
    return DraftResponse(
        exercise_id=exercise_id,
        methods=methods,
        saved=methods is not None,
        pending=exercise_id in cache.pending_ids(),
    )


@router.put("/{exercise_id}/draft", response_model=DraftResponse)
def put_draft(
    request: DraftRequest,
    exercise_id: str = Path(..., description="Exercise document id"),
    save: bool = Query(False, description="Write the draft immediately"),
    cache: DraftCache = Depends(get_draft_cache),
) -> DraftResponse:
    """
    Stage a draft.

    Staged drafts are written once they have been unchanged for the debounce
    window; ``save=true`` writes immediately.
    """
    cache.stage(exercise_id, request.methods)
    saved = cache.save_now(exercise_id) if save else False
    written = cache.flush_due()
    return DraftResponse(
        exercise_id=exercise_id,
        methods=request.methods,
        saved=saved or exercise_id in written,
        pending=exercise_id in cache.pending_ids(),
    )


@router.delete("/{exercise_id}/draft", status_code=204)
def delete_draft(
    exercise_id: str = Path(..., description="Exercise document id"),
    cache: DraftCache = Depends(get_draft_cache),
) -> None:
    """Discard the staged and stored draft of an exercise."""
    cache.discard(exercise_id)
    logger.info(f"Draft discarded for exercise {exercise_id}")

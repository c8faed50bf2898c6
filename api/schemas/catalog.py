"""
Pydantic models for the exercise catalog API.

Request and response models for:
- Production dashboard (content matrix, task queues, Smart Swap report)
- Workflow updates (single and batch)
- Execution method resolution
- Exercise edits and editor drafts
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from backend.core.normalize import normalize_gendered_text
from domain.models import (
    MAX_NOTIFICATION_TEXT_LENGTH,
    ContentMatrixRow,
    ProductionStatus,
    TaskListSummary,
    WorkflowStep,
)
from domain.models.gendered_text import text_length
from domain.models.localized_text import LANGUAGE_ORDER


# =============================================================================
# Content matrix
# =============================================================================


class ContentMatrixResponse(BaseModel):
    """Content matrix rows plus dashboard totals."""
    rows: List[ContentMatrixRow]
    count: int
    total_critical_gaps: int = Field(..., alias="totalCriticalGaps")
    total_workflow_gaps: int = Field(..., alias="totalWorkflowGaps")
    malformed_ids: List[str] = Field(default_factory=list, alias="malformedIds")

    model_config = ConfigDict(populate_by_name=True)


class TaskListResponse(BaseModel):
    """The four production queues."""
    tasks: TaskListSummary
    total: int
    malformed_ids: List[str] = Field(default_factory=list, alias="malformedIds")

    model_config = ConfigDict(populate_by_name=True)


class AutoAssignmentResponse(BaseModel):
    """Exercise whose base movement id can be inferred from its movement group."""
    exercise_id: str = Field(..., alias="exerciseId")
    name: str
    movement_group: Optional[str] = Field(None, alias="movementGroup")
    suggested_id: str = Field(..., alias="suggestedId")

    model_config = ConfigDict(populate_by_name=True)


class SmartSwapExerciseResponse(BaseModel):
    """Exercise reference in the Smart Swap report."""
    exercise_id: str = Field(..., alias="exerciseId")
    name: str

    model_config = ConfigDict(populate_by_name=True)


class SmartSwapResponse(BaseModel):
    """Exercises missing a base movement id, split by how they can be fixed."""
    missing: List[SmartSwapExerciseResponse]
    auto_assignable: List[AutoAssignmentResponse] = Field(..., alias="autoAssignable")
    manual_only: List[SmartSwapExerciseResponse] = Field(..., alias="manualOnly")
    base_movement_ids: List[str] = Field(..., alias="baseMovementIds")
    malformed_ids: List[str] = Field(default_factory=list, alias="malformedIds")

    model_config = ConfigDict(populate_by_name=True)


# =============================================================================
# Workflow
# =============================================================================


class WorkflowUpdateRequest(BaseModel):
    """Request model for setting one workflow step of one method."""
    step: WorkflowStep = Field(..., description="Workflow step to update")
    completed: bool = Field(True, description="New value of the step")


class WorkflowUpdateResponse(BaseModel):
    """Workflow of a method after an update."""
    exercise_id: str = Field(..., alias="exerciseId")
    method_index: int = Field(..., alias="methodIndex")
    workflow: Dict[str, Any]
    production_status: ProductionStatus = Field(..., alias="productionStatus")

    model_config = ConfigDict(populate_by_name=True)


class BatchWorkflowItem(BaseModel):
    """One update of a batch."""
    exercise_id: str = Field(..., alias="exerciseId", min_length=1)
    method_index: int = Field(..., alias="methodIndex", ge=0)
    step: WorkflowStep
    completed: bool = True

    model_config = ConfigDict(populate_by_name=True)


class BatchWorkflowRequest(BaseModel):
    """Request model for applying several workflow updates."""
    updates: List[BatchWorkflowItem] = Field(
        ...,
        description="Updates applied in order",
        min_length=1,
        max_length=500,
    )


class BatchWorkflowResponse(BaseModel):
    """Counts of applied and failed updates."""
    success: int
    failed: int
    errors: List[str] = Field(default_factory=list)


# =============================================================================
# Resolution
# =============================================================================


class ResolveResponse(BaseModel):
    """Execution method picked for a runtime context."""
    exercise_id: str = Field(..., alias="exerciseId")
    method_index: Optional[int] = Field(None, alias="methodIndex")
    method: Optional[Dict[str, Any]] = None
    stages: List[str] = Field(default_factory=list)
    used_fallback: bool = Field(False, alias="usedFallback")
    video_url: Optional[str] = Field(None, alias="videoUrl")
    image_url: Optional[str] = Field(None, alias="imageUrl")

    model_config = ConfigDict(populate_by_name=True)


# =============================================================================
# Exercise edits
# =============================================================================


def _check_notification_texts(methods: Any) -> None:
    # Shape anomalies are repaired on write; only the length is rejected here
    if not isinstance(methods, list):
        return
    for index, method in enumerate(methods):
        if not isinstance(method, dict) or "notificationText" not in method:
            continue
        length = max(
            text_length(normalize_gendered_text(method["notificationText"], language))
            for language in LANGUAGE_ORDER
        )
        if length > MAX_NOTIFICATION_TEXT_LENGTH:
            raise ValueError(
                f"executionMethods[{index}].notificationText is {length} characters, "
                f"maximum is {MAX_NOTIFICATION_TEXT_LENGTH}"
            )


class ExerciseDocumentPayload(BaseModel):
    """
    Exercise document in store shape.

    Any document key is accepted; execution method notification texts are
    limited to MAX_NOTIFICATION_TEXT_LENGTH characters.
    """

    model_config = ConfigDict(extra="allow")

    @model_validator(mode="after")
    def check_notification_texts(self) -> "ExerciseDocumentPayload":
        extra = self.model_extra or {}
        _check_notification_texts(extra.get("execution_methods"))
        _check_notification_texts(extra.get("executionMethods"))
        return self

    def to_document(self) -> Dict[str, Any]:
        return dict(self.model_extra or {})


class ExerciseCreateRequest(BaseModel):
    """Request model for creating an exercise."""
    id: str = Field(..., min_length=1, description="Document id of the new exercise")
    document: ExerciseDocumentPayload


class DraftRequest(BaseModel):
    """Editor draft of the execution methods of an exercise."""
    methods: List[Dict[str, Any]] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_notification_texts(self) -> "DraftRequest":
        _check_notification_texts(self.methods)
        return self


class DraftResponse(BaseModel):
    """Stored draft of an exercise."""
    exercise_id: str = Field(..., alias="exerciseId")
    methods: Optional[List[Dict[str, Any]]] = None
    saved: bool = False
    pending: bool = False

    model_config = ConfigDict(populate_by_name=True)

"""
Pydantic schemas for API requests and responses.

Organized by feature/domain:
- catalog: Production dashboard, workflow, resolution and exercise edit models
"""

from api.schemas.catalog import (
    AutoAssignmentResponse,
    BatchWorkflowItem,
    BatchWorkflowRequest,
    BatchWorkflowResponse,
    ContentMatrixResponse,
    DraftRequest,
    DraftResponse,
    ExerciseCreateRequest,
    ExerciseDocumentPayload,
    ResolveResponse,
    SmartSwapExerciseResponse,
    SmartSwapResponse,
    TaskListResponse,
    WorkflowUpdateRequest,
    WorkflowUpdateResponse,
)

__all__ = [
    "AutoAssignmentResponse",
    "BatchWorkflowItem",
    "BatchWorkflowRequest",
    "BatchWorkflowResponse",
    "ContentMatrixResponse",
    "DraftRequest",
    "DraftResponse",
    "ExerciseCreateRequest",
    "ExerciseDocumentPayload",
    "ResolveResponse",
    "SmartSwapExerciseResponse",
    "SmartSwapResponse",
    "TaskListResponse",
    "WorkflowUpdateRequest",
    "WorkflowUpdateResponse",
]

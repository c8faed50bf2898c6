"""
Derived content-matrix models.

These are computed from exercises on demand and never persisted. The task
list models serialize with the camelCase keys the admin dashboard reads.
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from domain.models.execution_method import ExecutionLocation, ExplanationStatus
from domain.models.workflow import ProductionStatus


class GapType(str, Enum):
    """
    Kinds of content gaps.

    - MISSING_MEDIA: a method at a location has neither video nor image
    - MISSING_REQUIRED_METHOD: a required location has no method
    - INCOMPLETE_WORKFLOW: a method is filmed but not uploaded
    """

    MISSING_MEDIA = "missing_media"
    MISSING_REQUIRED_METHOD = "missing_required_method"
    INCOMPLETE_WORKFLOW = "incomplete_workflow"


# Gap types counted in critical_gap_count
CRITICAL_GAP_TYPES = frozenset(
    {GapType.MISSING_MEDIA, GapType.MISSING_REQUIRED_METHOD}
)


class CompletenessStatus(str, Enum):
    COMPLETE = "complete"
    PARTIAL = "partial"
    MISSING = "missing"


class ReadinessStatus(str, Enum):
    """Aggregate media readiness of an exercise and all its methods."""

    PRODUCTION_READY = "production_ready"
    MISSING_ALL_MEDIA = "missing_all_media"
    PENDING_FILMING = "pending_filming"


class MethodMediaStatus(BaseModel):
    method_name: str = Field(..., alias="methodName")
    has_image: bool = Field(default=False, alias="hasImage")
    has_video: bool = Field(default=False, alias="hasVideo")

    model_config = {"frozen": True, "populate_by_name": True}


class ProductionReadiness(BaseModel):
    """
    Media slot report of an exercise.

    The exercise itself has an image and a video slot; every execution
    method adds one more of each.
    """

    status: ReadinessStatus
    has_main_image: bool = Field(default=False, alias="hasMainImage")
    has_main_video: bool = Field(default=False, alias="hasMainVideo")
    execution_methods_status: List[MethodMediaStatus] = Field(
        default_factory=list, alias="executionMethodsStatus"
    )
    missing_count: int = Field(default=0, ge=0, alias="missingCount")
    total_media_slots: int = Field(default=2, ge=2, alias="totalMediaSlots")

    model_config = {"frozen": True, "populate_by_name": True}


class ContentMatrixGap(BaseModel):
    """A single gap found while analyzing one exercise."""

    type: GapType
    location: ExecutionLocation
    method_name: Optional[str] = Field(default=None, alias="methodName")
    message: str
    critical: bool

    model_config = {"frozen": True, "populate_by_name": True}


class MethodAtLocation(BaseModel):
    """A method bucketed under one location of the matrix."""

    index: int = Field(..., ge=0, description="Position in execution_methods")
    method_name: str = Field(..., alias="methodName")
    has_video: bool = Field(default=False, alias="hasVideo")
    has_image: bool = Field(default=False, alias="hasImage")
    production_status: ProductionStatus = Field(..., alias="productionStatus")
    filmed: bool = False
    audio: bool = False
    edited: bool = False
    uploaded: bool = False
    needs_long_explanation: bool = Field(default=False, alias="needsLongExplanation")
    explanation_status: Optional[ExplanationStatus] = Field(
        default=None, alias="explanationStatus"
    )

    model_config = {"frozen": True, "populate_by_name": True}


class ContentMatrixRow(BaseModel):
    """Per-exercise coverage and gap report."""

    exercise_id: str = Field(..., alias="exerciseId")
    name: str
    level: int = 1
    description_status: CompletenessStatus = Field(..., alias="descriptionStatus")
    general_cues_status: CompletenessStatus = Field(..., alias="generalCuesStatus")
    production_readiness: ProductionReadiness = Field(
        ..., alias="productionReadiness"
    )
    locations: Dict[ExecutionLocation, List[MethodAtLocation]] = Field(
        default_factory=dict,
        description="Canonical location -> methods bucketed there, scan order",
    )
    required_locations: List[ExecutionLocation] = Field(
        default_factory=list, alias="requiredLocations"
    )
    gaps_detailed: List[ContentMatrixGap] = Field(
        default_factory=list, alias="gapsDetailed"
    )
    gaps: List[str] = Field(default_factory=list, description="Legacy gap messages")
    critical_gap_count: int = Field(default=0, ge=0, alias="criticalGapCount")
    workflow_gap_count: int = Field(default=0, ge=0, alias="workflowGapCount")
    unmapped_method_indexes: List[int] = Field(
        default_factory=list, alias="unmappedMethodIndexes"
    )

    model_config = {"frozen": True, "populate_by_name": True}


class TaskItem(BaseModel):
    """One production task: an (exercise, location, method) triple."""

    exercise_id: str = Field(..., alias="exerciseId")
    exercise_name: str = Field(..., alias="exerciseName")
    location: ExecutionLocation
    method_name: str = Field(..., alias="methodName")

    model_config = {"frozen": True, "populate_by_name": True}


class TaskListSummary(BaseModel):
    """Production queues, one per pending workflow step."""

    for_filming: List[TaskItem] = Field(default_factory=list, alias="forFilming")
    for_audio: List[TaskItem] = Field(default_factory=list, alias="forAudio")
    for_editing: List[TaskItem] = Field(default_factory=list, alias="forEditing")
    for_upload: List[TaskItem] = Field(default_factory=list, alias="forUpload")

    @property
    def total(self) -> int:
        return (
            len(self.for_filming)
            + len(self.for_audio)
            + len(self.for_editing)
            + len(self.for_upload)
        )

    model_config = {"frozen": True, "populate_by_name": True}


class ContentMatrixFilter(BaseModel):
    """
    Dashboard filter. Empty lists mean no restriction on that dimension.
    """

    lifestyle_tags: List[str] = Field(default_factory=list)
    locations: List[ExecutionLocation] = Field(default_factory=list)
    brand_ids: List[str] = Field(default_factory=list)
    movement_groups: List[str] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (
            self.lifestyle_tags or self.locations or self.brand_ids or self.movement_groups
        )

    model_config = {"frozen": True}

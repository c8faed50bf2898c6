"""
Production workflow value object.

Every execution method carries the status of its video production pipeline:

    filmed -> audio -> edited -> uploaded

Each step is an independent boolean with an optional completion timestamp.
The order above is the intended order, but stored data is not guaranteed to
follow it (a method may be marked uploaded while not filmed).
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class WorkflowStep(str, Enum):
    """Production pipeline steps, declared in pipeline order."""

    FILMED = "filmed"
    AUDIO = "audio"
    EDITED = "edited"
    UPLOADED = "uploaded"


# Pipeline order used by every sequential scan of the workflow flags
WORKFLOW_STEPS: tuple = (
    WorkflowStep.FILMED,
    WorkflowStep.AUDIO,
    WorkflowStep.EDITED,
    WorkflowStep.UPLOADED,
)


class ProductionStatus(str, Enum):
    """
    Production status derived from workflow flags and media presence.

    - NOT_STARTED: media exists but the pipeline has not produced a final upload
    - NEEDS_MEDIA: no video or image yet
    - IN_POST_PRODUCTION: filmed but not uploaded
    - READY: uploaded and media present
    """

    NOT_STARTED = "not_started"
    NEEDS_MEDIA = "needs_media"
    IN_POST_PRODUCTION = "in_post_production"
    READY = "ready"


class Workflow(BaseModel):
    """
    Value object for the production pipeline of one execution method.

    Examples:
        >>> workflow = Workflow(filmed=True)
        >>> workflow.is_complete(WorkflowStep.FILMED)
        True
        >>> workflow.completed_steps()
        [<WorkflowStep.FILMED: 'filmed'>]
    """

    filmed: bool = Field(default=False, description="Method has been filmed")
    filmed_at: Optional[datetime] = Field(default=None, alias="filmedAt")
    audio: bool = Field(default=False, description="Audio has been recorded")
    audio_at: Optional[datetime] = Field(default=None, alias="audioAt")
    edited: bool = Field(default=False, description="Editing is complete")
    edited_at: Optional[datetime] = Field(default=None, alias="editedAt")
    uploaded: bool = Field(default=False, description="Final video is uploaded")
    uploaded_at: Optional[datetime] = Field(default=None, alias="uploadedAt")

    def is_complete(self, step: WorkflowStep) -> bool:
        """Check whether a pipeline step is marked complete."""
        return bool(getattr(self, WorkflowStep(step).value))

    def completed_at(self, step: WorkflowStep) -> Optional[datetime]:
        """Completion timestamp of a step, if recorded."""
        return getattr(self, f"{WorkflowStep(step).value}_at")

    def completed_steps(self) -> List[WorkflowStep]:
        """Completed steps in pipeline order."""
        return [step for step in WORKFLOW_STEPS if self.is_complete(step)]

    @property
    def is_fully_complete(self) -> bool:
        return all(self.is_complete(step) for step in WORKFLOW_STEPS)

    model_config = {"frozen": True, "populate_by_name": True}

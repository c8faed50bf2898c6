"""
Production workflow state machine.

The production status of a method is derived from its workflow flags and
media presence every time it is needed; it is never stored. Status
derivation is permissive and accepts any combination of flags found in
stored data. Strict ordering only applies to writes, and only when asked
for (``enforce_order=True``).
"""

import logging
from datetime import datetime
from typing import Any, List, Optional

from application.exceptions import WorkflowOrderError
from domain.models.execution_method import ExecutionMethod
from domain.models.workflow import (
    WORKFLOW_STEPS,
    ProductionStatus,
    Workflow,
    WorkflowStep,
)

logger = logging.getLogger(__name__)


def derive_production_status(
    workflow: Workflow, has_video: bool, has_image: bool
) -> ProductionStatus:
    """
    Derive the production status of one method.

    Rules, first match wins:
    - READY: uploaded and media present
    - IN_POST_PRODUCTION: filmed and not uploaded
    - NEEDS_MEDIA: neither video nor image
    - NOT_STARTED: otherwise

    Args:
        workflow: Workflow flags of the method
        has_video: Whether a non-blank video URL exists
        has_image: Whether a non-blank image URL exists

    Returns:
        The derived ProductionStatus
    """
    has_media = has_video or has_image
    if workflow.uploaded and has_media:
        return ProductionStatus.READY
    if workflow.filmed and not workflow.uploaded:
        return ProductionStatus.IN_POST_PRODUCTION
    if not has_media:
        return ProductionStatus.NEEDS_MEDIA
    return ProductionStatus.NOT_STARTED


def method_production_status(method: ExecutionMethod) -> ProductionStatus:
    """Production status of a method from its own workflow and media."""
    return derive_production_status(method.workflow, method.has_video, method.has_image)


def next_pending_step(flags: Any) -> Optional[WorkflowStep]:
    """
    First incomplete step in pipeline order, or None when all are done.

    ``flags`` is a Workflow or anything else carrying the four step flags
    as attributes, such as a content matrix entry.
    """
    for step in WORKFLOW_STEPS:
        if not getattr(flags, step.value):
            return step
    return None


def workflow_order_violations(workflow: Workflow) -> List[WorkflowStep]:
    """
    Steps marked complete while an earlier step is not.

    Historical data may contain such combinations (uploaded but never
    filmed). This is a diagnostic only; derivation does not reject them.
    """
    violations = []
    gap_seen = False
    for step in WORKFLOW_STEPS:
        if not workflow.is_complete(step):
            gap_seen = True
        elif gap_seen:
            violations.append(step)
    return violations


def apply_workflow_step(
    workflow: Workflow,
    step: WorkflowStep,
    completed: bool,
    *,
    now: datetime,
    enforce_order: bool = False,
) -> Workflow:
    """
    Return a new workflow with one step marked complete or incomplete.

    Completing a step stamps it with ``now``; un-completing clears the
    timestamp. Re-completing an already complete step keeps the original
    timestamp.

    Args:
        workflow: Current workflow
        step: Step to update
        completed: New value of the step flag
        now: Timestamp for a newly completed step
        enforce_order: Reject updates that break pipeline order

    Returns:
        The updated Workflow

    Raises:
        WorkflowOrderError: If ``enforce_order`` is set and the update breaks
            pipeline order
    """
    step = WorkflowStep(step)
    position = WORKFLOW_STEPS.index(step)

    if enforce_order:
        if completed and position > 0:
            previous = WORKFLOW_STEPS[position - 1]
            if not workflow.is_complete(previous):
                raise WorkflowOrderError(
                    f"Cannot mark {step.value} before {previous.value}", step.value
                )
        if not completed and position < len(WORKFLOW_STEPS) - 1:
            following = WORKFLOW_STEPS[position + 1]
            if workflow.is_complete(following):
                raise WorkflowOrderError(
                    f"Cannot clear {step.value} while {following.value} is complete",
                    step.value,
                )

    if completed:
        timestamp = workflow.completed_at(step) if workflow.is_complete(step) else now
        timestamp = timestamp or now
    else:
        timestamp = None

    updated = workflow.model_copy(
        update={step.value: completed, f"{step.value}_at": timestamp}
    )
    logger.debug(f"Workflow step {step.value} set to {completed}")
    return updated

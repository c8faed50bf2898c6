"""
Production task list generation.

Turns content matrix rows into four work queues for the filming and editing
team. Each bucketed (exercise, location, method) triple is placed in the
queue of its first incomplete workflow step; finished methods are skipped.
"""

from typing import Dict, Iterable, List

from backend.core.workflow import next_pending_step
from domain.models.content_matrix import ContentMatrixRow, TaskItem, TaskListSummary
from domain.models.execution_method import CANONICAL_LOCATIONS
from domain.models.workflow import WorkflowStep

# Queue receiving a triple whose first incomplete step is the key
QUEUE_BY_STEP: Dict[WorkflowStep, str] = {
    WorkflowStep.FILMED: "for_filming",
    WorkflowStep.AUDIO: "for_audio",
    WorkflowStep.EDITED: "for_editing",
    WorkflowStep.UPLOADED: "for_upload",
}


def generate_task_list(rows: Iterable[ContentMatrixRow]) -> TaskListSummary:
    """
    Build the production queues.

    Iteration order is row order, then canonical location order, then
    bucket order, so queues are stable for a given matrix.

    Args:
        rows: Content matrix rows

    Returns:
        TaskListSummary with the four queues
    """
    queues: Dict[str, List[TaskItem]] = {name: [] for name in QUEUE_BY_STEP.values()}

    for row in rows:
        for location in CANONICAL_LOCATIONS:
            for entry in row.locations.get(location, []):
                step = next_pending_step(entry)
                if step is None:
                    continue
                queues[QUEUE_BY_STEP[step]].append(
                    TaskItem(
                        exercise_id=row.exercise_id,
                        exercise_name=row.name,
                        location=location,
                        method_name=entry.method_name,
                    )
                )

    return TaskListSummary(**queues)

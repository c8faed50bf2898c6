"""
Smart Swap grouping diagnostics.

Smart Swap replaces an exercise with another variation of the same base
movement, so every exercise with execution methods needs a
``base_movement_id``. This module reports which exercises lack one and
suggests an id from the movement group when possible.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional

from domain.models.exercise import Exercise, MovementGroup

# Best-guess base movement for an exercise that only has a movement group
MOVEMENT_GROUP_TO_BASE: Mapping[MovementGroup, str] = MappingProxyType(
    {
        MovementGroup.HORIZONTAL_PUSH: "push_up",
        MovementGroup.VERTICAL_PUSH: "handstand",
        MovementGroup.HORIZONTAL_PULL: "row",
        MovementGroup.VERTICAL_PULL: "pull_up",
        MovementGroup.SQUAT: "pistol_squat",
        MovementGroup.HINGE: "pistol_squat",
        MovementGroup.CORE: "l_sit",
        MovementGroup.ISOLATION: "ring_work",
    }
)


@dataclass
class AutoAssignment:
    exercise: Exercise
    suggested_id: str


@dataclass
class SmartSwapDiagnosis:
    """Exercises missing a base movement id, split by how they can be fixed."""

    missing: List[Exercise] = field(default_factory=list)
    auto_assignable: List[AutoAssignment] = field(default_factory=list)
    manual_only: List[Exercise] = field(default_factory=list)


def infer_base_movement_id(exercise: Exercise) -> Optional[str]:
    """Existing base movement id, else the movement group guess, else None."""
    if exercise.base_movement_id:
        return exercise.base_movement_id
    if exercise.movement_group is None:
        return None
    return MOVEMENT_GROUP_TO_BASE.get(exercise.movement_group)


def diagnose_smart_swap_gaps(exercises: Iterable[Exercise]) -> SmartSwapDiagnosis:
    """
    Split exercises without a base movement id into auto-assignable and
    manual-only, keeping input order.
    """
    diagnosis = SmartSwapDiagnosis()
    for exercise in exercises:
        if exercise.base_movement_id:
            continue
        diagnosis.missing.append(exercise)
        suggested = infer_base_movement_id(exercise)
        if suggested:
            diagnosis.auto_assignable.append(AutoAssignment(exercise, suggested))
        else:
            diagnosis.manual_only.append(exercise)
    return diagnosis


def collect_base_movement_ids(exercises: Iterable[Exercise]) -> List[str]:
    """Sorted unique base movement ids in use."""
    return sorted(
        {exercise.base_movement_id for exercise in exercises if exercise.base_movement_id}
    )

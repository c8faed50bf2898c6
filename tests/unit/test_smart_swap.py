"""
Unit tests for backend/core/smart_swap.py
"""

import pytest

from backend.core.smart_swap import (
    MOVEMENT_GROUP_TO_BASE,
    collect_base_movement_ids,
    diagnose_smart_swap_gaps,
    infer_base_movement_id,
)
from domain.models import Exercise, MovementGroup


@pytest.mark.unit
class TestInferBaseMovementId:
    """Tests for infer_base_movement_id."""

    def test_existing_id_wins(self):
        """An assigned id is kept."""
        exercise = Exercise(id="x", base_movement_id="row", movement_group="vertical_pull")
        assert infer_base_movement_id(exercise) == "row"

    def test_guess_from_movement_group(self):
        """Without an id, the movement group suggests one."""
        exercise = Exercise(id="x", movement_group="vertical_pull")
        assert infer_base_movement_id(exercise) == "pull_up"

    def test_no_group_no_guess(self):
        """Without id or group, nothing can be inferred."""
        assert infer_base_movement_id(Exercise(id="x")) is None

    def test_table_covers_every_group(self):
        """Every movement group has a suggestion."""
        assert set(MOVEMENT_GROUP_TO_BASE) == set(MovementGroup)

    def test_table_is_read_only(self):
        """The heuristic table cannot be modified."""
        with pytest.raises(TypeError):
            MOVEMENT_GROUP_TO_BASE[MovementGroup.CORE] = "plank"


@pytest.mark.unit
class TestDiagnoseSmartSwapGaps:
    """Tests for diagnose_smart_swap_gaps."""

    def test_splits_missing_exercises(self):
        """Exercises without ids are split by whether a guess exists."""
        exercises = [
            Exercise(id="ok", base_movement_id="push_up"),
            Exercise(id="auto", movement_group="squat"),
            Exercise(id="manual"),
        ]
        diagnosis = diagnose_smart_swap_gaps(exercises)

        assert [e.id for e in diagnosis.missing] == ["auto", "manual"]
        assert [(a.exercise.id, a.suggested_id) for a in diagnosis.auto_assignable] == [
            ("auto", "pistol_squat")
        ]
        assert [e.id for e in diagnosis.manual_only] == ["manual"]

    def test_nothing_missing(self):
        """A fully grouped catalog has no gaps."""
        diagnosis = diagnose_smart_swap_gaps([Exercise(id="a", base_movement_id="row")])
        assert diagnosis.missing == []

    def test_collect_ids_sorted_unique(self):
        """Ids in use are sorted and deduplicated."""
        exercises = [
            Exercise(id="a", base_movement_id="row"),
            Exercise(id="b", base_movement_id="l_sit"),
            Exercise(id="c", base_movement_id="row"),
            Exercise(id="d"),
        ]
        assert collect_base_movement_ids(exercises) == ["l_sit", "row"]

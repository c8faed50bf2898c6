"""
Unit tests for the catalog domain models.

Covers the value objects (gendered and localized text, workflow), the
execution method and exercise models, and their serialization to the
stored document shape.
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from domain.models import (
    ContentMatrixFilter,
    ExecutionLocation,
    ExecutionMethod,
    Exercise,
    LocalizedText,
    ResolutionContext,
    TaskItem,
    TaskListSummary,
    Workflow,
    WorkflowStep,
)
from domain.models.gendered_text import (
    GenderedText,
    PlainText,
    UserGender,
    resolve_text,
    text_length,
    text_value_to_document,
    to_text_value,
)


# =============================================================================
# Gendered text
# =============================================================================


@pytest.mark.unit
class TestGenderedText:
    """Tests for the PlainText | GenderedText variant and its resolver."""

    def test_string_lifts_to_plain_text(self):
        """A stored string becomes PlainText."""
        assert to_text_value("Keep your core tight") == PlainText(text="Keep your core tight")

    def test_pair_lifts_to_gendered_text(self):
        """A stored {male, female} pair becomes GenderedText."""
        value = to_text_value({"male": "תרים", "female": "תרימי"})
        assert isinstance(value, GenderedText)
        assert value.female == "תרימי"

    def test_unsupported_shape_raises(self):
        """A value that is neither shape is rejected."""
        with pytest.raises(ValueError):
            to_text_value(42)

    def test_resolve_plain_ignores_gender(self):
        """Plain texts resolve to themselves for any gender."""
        assert resolve_text(PlainText(text="Go"), UserGender.FEMALE) == "Go"

    def test_resolve_gendered_picks_variant(self):
        """Gendered texts resolve to the requested variant."""
        text = GenderedText(male="Lift", female="Lift!")
        assert resolve_text(text, "female") == "Lift!"
        assert resolve_text(text, UserGender.MALE) == "Lift"

    def test_resolve_unknown_gender_falls_back_to_male(self):
        """Neutral or unknown gender falls back to the male variant."""
        text = GenderedText(male="m", female="f")
        assert resolve_text(text, "neutral") == "m"

    def test_resolve_none_is_empty(self):
        """A missing text resolves to an empty string."""
        assert resolve_text(None) == ""

    def test_document_shape_round_trip(self):
        """Serialization restores the stored shapes."""
        assert text_value_to_document(PlainText(text="a")) == "a"
        assert text_value_to_document(GenderedText(male="m", female="f")) == {
            "male": "m",
            "female": "f",
        }

    def test_text_length_uses_longest_variant(self):
        """Length limits apply to the longest variant."""
        assert text_length(GenderedText(male="ab", female="abcd")) == 4
        assert text_length(None) == 0


# =============================================================================
# Localized text
# =============================================================================


@pytest.mark.unit
class TestLocalizedText:
    """Tests for LocalizedText language fallback."""

    def test_get_preferred_language(self):
        """The requested language wins when populated."""
        assert LocalizedText(he="מתח", en="Pull-up").get("en") == "Pull-up"

    def test_get_falls_back_in_canonical_order(self):
        """A missing language falls back to Hebrew, then English, then Spanish."""
        assert LocalizedText(en="Pull-up").get("es") == "Pull-up"
        assert LocalizedText(es="Dominada").get("he") == "Dominada"

    def test_get_empty(self):
        """An empty value resolves to an empty string."""
        assert LocalizedText().get() == ""

    def test_populated_languages(self):
        """Blank languages are not counted."""
        assert LocalizedText(he="x", en="  ", es="y").populated_languages() == ["he", "es"]


# =============================================================================
# Workflow
# =============================================================================


@pytest.mark.unit
class TestWorkflow:
    """Tests for the Workflow value object."""

    def test_defaults_to_nothing_done(self):
        """A new workflow has every step incomplete."""
        workflow = Workflow()
        assert workflow.completed_steps() == []
        assert workflow.is_fully_complete is False

    def test_completed_steps_in_pipeline_order(self):
        """Completed steps are listed in pipeline order."""
        workflow = Workflow(uploaded=True, filmed=True)
        assert workflow.completed_steps() == [WorkflowStep.FILMED, WorkflowStep.UPLOADED]

    def test_completed_at_reads_timestamp(self):
        """Timestamps are accessible per step, by alias too."""
        filmed_at = datetime(2024, 5, 1, tzinfo=timezone.utc)
        workflow = Workflow(filmed=True, filmedAt=filmed_at)
        assert workflow.completed_at(WorkflowStep.FILMED) == filmed_at

    def test_is_frozen(self):
        """Workflow is immutable."""
        with pytest.raises(ValidationError):
            Workflow().filmed = True


# =============================================================================
# Execution method
# =============================================================================


@pytest.mark.unit
class TestExecutionMethod:
    """Tests for the ExecutionMethod model."""

    def test_accepts_stored_aliases(self):
        """Camel-case store keys populate the model."""
        method = ExecutionMethod(
            methodName="Park bar",
            locationMapping=["park"],
            lifestyleTags=["parent"],
            media={"mainVideoUrl": "https://cdn/v.mp4"},
        )
        assert method.method_name == "Park bar"
        assert method.location_mapping == [ExecutionLocation.PARK]
        assert method.has_video is True
        assert method.has_image is False

    def test_blank_video_is_not_media(self):
        """A whitespace URL does not count as media."""
        method = ExecutionMethod(media={"mainVideoUrl": "   "})
        assert method.has_media is False

    def test_universal_when_untagged(self):
        """A method without lifestyle tags applies to everyone."""
        assert ExecutionMethod().is_universal is True
        assert ExecutionMethod(lifestyle_tags=["office_worker"]).is_universal is False

    def test_display_name_falls_back_to_position(self):
        """Blank method names get a positional label."""
        assert ExecutionMethod(method_name=" ").display_name(2) == "Method 3"
        assert ExecutionMethod(method_name="Rings").display_name(0) == "Rings"

    def test_cues_lift_and_dump_stored_shapes(self):
        """Cue lists accept stored strings and pairs and dump back to them."""
        method = ExecutionMethod(specificCues=["a", {"male": "m", "female": "f"}])
        assert isinstance(method.specific_cues[1], GenderedText)
        document = method.model_dump(by_alias=True, mode="json")
        assert document["specificCues"] == ["a", {"male": "m", "female": "f"}]

    def test_dump_has_no_legacy_fields(self):
        """Only canonical gear fields are serialized."""
        document = ExecutionMethod(gear_ids=["g1"]).model_dump(by_alias=True)
        assert document["gearIds"] == ["g1"]
        assert "gearId" not in document
        assert "equipmentId" not in document

    def test_rejects_unknown_location(self):
        """Model construction validates locations; normalization filters them first."""
        with pytest.raises(ValidationError):
            ExecutionMethod(location_mapping=["moon"])


# =============================================================================
# Exercise
# =============================================================================


@pytest.mark.unit
class TestExercise:
    """Tests for the Exercise aggregate."""

    def test_level_defaults_to_one(self):
        """An exercise without target programs is level 1."""
        assert Exercise(id="push-up").level == 1

    def test_level_from_first_program(self):
        """Level comes from the first target program."""
        exercise = Exercise(
            id="push-up",
            targetPrograms=[{"programId": "p1", "level": 4}, {"programId": "p2", "level": 2}],
        )
        assert exercise.level == 4

    def test_display_name_prefers_language(self):
        """Display name uses localized fallback."""
        exercise = Exercise(id="x", name=LocalizedText(he="מתח", en="Pull-up"))
        assert exercise.display_name() == "מתח"
        assert exercise.display_name("en") == "Pull-up"

    def test_requires_id(self):
        """An exercise needs a non-empty id."""
        with pytest.raises(ValidationError):
            Exercise(id="")

    def test_method_order_is_preserved(self):
        """Execution methods keep insertion order."""
        exercise = Exercise(
            id="x",
            execution_methods=[ExecutionMethod(method_name="b"), ExecutionMethod(method_name="a")],
        )
        assert [m.method_name for m in exercise.execution_methods] == ["b", "a"]


# =============================================================================
# Context, filter and task list
# =============================================================================


@pytest.mark.unit
class TestSupportingModels:
    """Tests for the resolution context, dashboard filter and task summary."""

    def test_context_location_value_from_enum_or_string(self):
        """Location may be given as enum or string."""
        assert ResolutionContext(location=ExecutionLocation.GYM).location_value == "gym"
        assert ResolutionContext(location="park").location_value == "park"
        assert ResolutionContext().location_value is None

    def test_filter_is_empty(self):
        """A filter without dimensions matches everything."""
        assert ContentMatrixFilter().is_empty is True
        assert ContentMatrixFilter(brand_ids=["acme"]).is_empty is False

    def test_task_summary_total(self):
        """Total counts every queue."""
        item = TaskItem(
            exercise_id="x", exercise_name="X", location="home", method_name="m"
        )
        summary = TaskListSummary(for_filming=[item], for_upload=[item, item])
        assert summary.total == 3
        assert set(summary.model_dump(by_alias=True)) == {
            "forFilming",
            "forAudio",
            "forEditing",
            "forUpload",
        }

"""
Unit tests for backend/core/content_matrix.py
"""

import pytest

from backend.core.content_matrix import (
    analyze_exercise_for_matrix,
    bucket_methods,
    build_content_matrix,
    description_status,
    filter_exercises,
    general_cues_status,
    get_production_readiness,
    matches_filter,
)
from backend.core.normalize import normalize_exercise
from domain.models import (
    CANONICAL_LOCATIONS,
    CRITICAL_GAP_TYPES,
    CompletenessStatus,
    ContentMatrixFilter,
    ExecutionLocation,
    ExecutionMethod,
    Exercise,
    GapType,
    ReadinessStatus,
    Workflow,
)

VIDEO = {"mainVideoUrl": "https://cdn/v.mp4"}


def _exercise(*methods, **extra) -> Exercise:
    return Exercise(id="x", execution_methods=list(methods), **extra)


@pytest.fixture
def scenario_a() -> Exercise:
    """Home method with video, gym method without media, home and office required."""
    return normalize_exercise(
        "push-up",
        {
            "name": {"he": "שכיבות סמיכה"},
            "base_movement_id": "push_up",
            "requiredLocations": ["home", "office"],
            "execution_methods": [
                {"location": "home", "locationMapping": ["home"], "media": {"mainVideoUrl": "x"}},
                {"location": "gym", "locationMapping": ["gym"], "media": {}},
            ],
        },
    )


@pytest.mark.unit
class TestAnalyzeExercise:
    """Tests for gap analysis of one exercise."""

    def test_scenario_a_gaps(self, scenario_a):
        """Missing gym media and missing office method are the only gaps."""
        row = analyze_exercise_for_matrix(scenario_a)

        gaps = {(gap.type, gap.location) for gap in row.gaps_detailed}
        assert gaps == {
            (GapType.MISSING_MEDIA, ExecutionLocation.GYM),
            (GapType.MISSING_REQUIRED_METHOD, ExecutionLocation.OFFICE),
        }
        assert row.critical_gap_count == 2
        assert row.workflow_gap_count == 0

    def test_critical_count_matches_critical_gaps(self, scenario_a):
        """The critical counter equals the number of critical gaps."""
        row = analyze_exercise_for_matrix(scenario_a)
        assert row.critical_gap_count == sum(1 for gap in row.gaps_detailed if gap.critical)

    def test_critical_flag_follows_critical_gap_types(self):
        """Only missing media and missing required methods are critical."""
        exercise = normalize_exercise(
            "x",
            {
                "requiredLocations": ["office"],
                "execution_methods": [
                    {"locationMapping": ["park"]},
                    {
                        "locationMapping": ["gym"],
                        "media": VIDEO,
                        "workflow": {"filmed": True},
                    },
                ],
            },
        )
        row = analyze_exercise_for_matrix(exercise)

        assert {gap.type for gap in row.gaps_detailed} == set(GapType)
        for gap in row.gaps_detailed:
            assert gap.critical == (gap.type in CRITICAL_GAP_TYPES)
        assert row.critical_gap_count == 2
        assert row.workflow_gap_count == 1

    def test_gaps_follow_scan_order(self, scenario_a):
        """Gaps are emitted in canonical location order."""
        row = analyze_exercise_for_matrix(scenario_a)
        order = [CANONICAL_LOCATIONS.index(gap.location) for gap in row.gaps_detailed]
        assert order == sorted(order)

    def test_gap_types_are_disjoint_per_location(self):
        """A location never has both a missing-method gap and method gaps."""
        exercise = _exercise(
            ExecutionMethod(method_name="a", location_mapping=["home"], workflow=Workflow(filmed=True)),
            required_locations=["home", "park"],
        )
        row = analyze_exercise_for_matrix(exercise)
        by_location = {}
        for gap in row.gaps_detailed:
            by_location.setdefault(gap.location, set()).add(gap.type)
        assert by_location[ExecutionLocation.PARK] == {GapType.MISSING_REQUIRED_METHOD}
        assert GapType.MISSING_REQUIRED_METHOD not in by_location[ExecutionLocation.HOME]

    def test_unrequired_empty_location_has_no_gap(self):
        """Locations that are not required and have no method are silent."""
        row = analyze_exercise_for_matrix(
            _exercise(ExecutionMethod(location_mapping=["home"], media=VIDEO))
        )
        assert row.gaps_detailed == []
        assert row.gaps == []

    def test_post_production_gap_messages(self):
        """Filmed methods get a non-critical workflow gap naming the pending work."""
        filmed = ExecutionMethod(method_name="a", location_mapping=["home"], workflow=Workflow(filmed=True))
        edited = ExecutionMethod(
            method_name="b",
            location_mapping=["park"],
            media=VIDEO,
            workflow=Workflow(filmed=True, audio=True, edited=True),
        )
        row = analyze_exercise_for_matrix(_exercise(filmed, edited))

        workflow_gaps = [g for g in row.gaps_detailed if g.type == GapType.INCOMPLETE_WORKFLOW]
        assert [g.message for g in workflow_gaps] == [
            "home: in post-production (filmed, not edited)",
            "park: in post-production (edited, not uploaded)",
        ]
        assert all(not g.critical for g in workflow_gaps)
        assert row.workflow_gap_count == 2
        assert "park: edited but not uploaded" in row.gaps

    def test_filmed_without_media_has_both_gaps(self):
        """A filmed method without media misses media and is in post-production."""
        row = analyze_exercise_for_matrix(
            _exercise(ExecutionMethod(location_mapping=["home"], workflow=Workflow(filmed=True)))
        )
        assert {g.type for g in row.gaps_detailed} == {
            GapType.MISSING_MEDIA,
            GapType.INCOMPLETE_WORKFLOW,
        }
        assert row.critical_gap_count == 1

    def test_shared_location_labels_name_the_method(self):
        """When a location holds several methods, gap messages name the method."""
        row = analyze_exercise_for_matrix(
            _exercise(
                ExecutionMethod(method_name="Rings", location_mapping=["home"]),
                ExecutionMethod(method_name="", location_mapping=["home"], media=VIDEO),
            )
        )
        assert [g.message for g in row.gaps_detailed] == ["home/Rings: missing media"]

    def test_method_in_several_locations_is_bucketed_in_each(self):
        """A method mapped to two locations appears in both buckets."""
        row = analyze_exercise_for_matrix(
            _exercise(ExecutionMethod(location_mapping=["home", "office"]))
        )
        assert len(row.locations[ExecutionLocation.HOME]) == 1
        assert len(row.locations[ExecutionLocation.OFFICE]) == 1
        assert row.critical_gap_count == 2

    def test_row_metadata(self, scenario_a):
        """Rows carry id, Hebrew name and level."""
        row = analyze_exercise_for_matrix(scenario_a)
        assert row.exercise_id == "push-up"
        assert row.name == "שכיבות סמיכה"
        assert row.level == 1


@pytest.mark.unit
class TestBucketMethods:
    """Tests for bucket_methods."""

    def test_every_canonical_location_has_a_bucket(self):
        """Buckets exist for every scanned location, library excluded."""
        buckets, _ = bucket_methods(_exercise())
        assert list(buckets) == list(CANONICAL_LOCATIONS)
        assert ExecutionLocation.LIBRARY not in buckets

    def test_unmapped_methods_are_reported(self):
        """Methods with an empty mapping are not bucketed but reported."""
        buckets, unmapped = bucket_methods(
            _exercise(ExecutionMethod(), ExecutionMethod(location_mapping=["gym"]))
        )
        assert unmapped == [0]
        assert [entry.index for entry in buckets[ExecutionLocation.GYM]] == [1]

    def test_library_only_method_lands_nowhere(self):
        """A library-only method is mapped but not scanned."""
        buckets, unmapped = bucket_methods(_exercise(ExecutionMethod(location_mapping=["library"])))
        assert unmapped == []
        assert all(not entries for entries in buckets.values())


@pytest.mark.unit
class TestReadinessAndContent:
    """Tests for production readiness and content completeness."""

    def test_readiness_missing_all_media(self):
        """No media anywhere is missing_all_media."""
        readiness = get_production_readiness(_exercise(ExecutionMethod()))
        assert readiness.status == ReadinessStatus.MISSING_ALL_MEDIA
        assert readiness.total_media_slots == 4
        assert readiness.missing_count == 4

    def test_readiness_production_ready(self):
        """Every slot filled is production_ready."""
        exercise = _exercise(
            ExecutionMethod(media={"mainVideoUrl": "v", "imageUrl": "i"}),
            media={"videoUrl": "v", "imageUrl": "i"},
        )
        assert get_production_readiness(exercise).status == ReadinessStatus.PRODUCTION_READY

    def test_readiness_pending(self):
        """Some slots filled is pending_filming."""
        readiness = get_production_readiness(_exercise(ExecutionMethod(media=VIDEO)))
        assert readiness.status == ReadinessStatus.PENDING_FILMING
        assert readiness.missing_count == 3
        assert readiness.execution_methods_status[0].method_name == "Method 1"

    def test_description_status(self):
        """Two languages complete a description; a goal alone is partial."""
        complete = normalize_exercise("x", {"content": {"description": {"he": "a", "en": "b"}}})
        partial = normalize_exercise("x", {"content": {"goal": "strength"}})
        missing = normalize_exercise("x", {})
        assert description_status(complete) == CompletenessStatus.COMPLETE
        assert description_status(partial) == CompletenessStatus.PARTIAL
        assert description_status(missing) == CompletenessStatus.MISSING

    def test_general_cues_status(self):
        """Three cues and highlights complete the general cues."""
        complete = normalize_exercise(
            "x", {"content": {"specificCues": ["a", "b"], "highlights": ["c"]}}
        )
        partial = normalize_exercise("x", {"content": {"highlights": ["c"]}})
        assert general_cues_status(complete) == CompletenessStatus.COMPLETE
        assert general_cues_status(partial) == CompletenessStatus.PARTIAL
        assert general_cues_status(_exercise()) == CompletenessStatus.MISSING


@pytest.mark.unit
class TestFilter:
    """Tests for dashboard filtering."""

    @pytest.fixture
    def exercises(self):
        return [
            Exercise(
                id="a",
                movement_group="squat",
                execution_methods=[ExecutionMethod(location_mapping=["home"], lifestyle_tags=["parent"])],
            ),
            Exercise(
                id="b",
                movement_group="vertical_pull",
                execution_methods=[ExecutionMethod(location_mapping=["park"], brand_id="acme")],
            ),
        ]

    def test_empty_filter_matches_everything(self, exercises):
        """No dimensions means no restriction."""
        assert all(matches_filter(e, ContentMatrixFilter()) for e in exercises)

    def test_filter_by_location(self, exercises):
        """Location matches any method mapping."""
        result = filter_exercises(exercises, ContentMatrixFilter(locations=["park"]))
        assert [e.id for e in result] == ["b"]

    def test_filter_by_tag_and_group(self, exercises):
        """Dimensions combine with AND."""
        matrix_filter = ContentMatrixFilter(lifestyle_tags=["parent"], movement_groups=["vertical_pull"])
        assert filter_exercises(exercises, matrix_filter) == []

    def test_filter_by_brand(self, exercises):
        """Brand matches any method brand."""
        result = filter_exercises(exercises, ContentMatrixFilter(brand_ids=["acme", "other"]))
        assert [e.id for e in result] == ["b"]

    def test_build_matrix_keeps_order(self, exercises):
        """One row per exercise, in input order."""
        assert [row.exercise_id for row in build_content_matrix(exercises)] == ["a", "b"]

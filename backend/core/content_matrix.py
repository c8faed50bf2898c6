"""
Content matrix analysis.

Builds the per-exercise, per-location coverage report used by the
production dashboard. Each execution method is bucketed under every
canonical location in its location mapping, then every canonical location
is scanned in a fixed order for gaps:

- missing_media (critical): a bucketed method has neither video nor image
- incomplete_workflow: a bucketed method is filmed but not uploaded
- missing_required_method (critical): a required location has no method

Locations that are not required and have no method produce no gap.
"""

import logging
from typing import Dict, Iterable, List, Tuple

from backend.core.workflow import method_production_status
from domain.models.content_matrix import (
    CRITICAL_GAP_TYPES,
    CompletenessStatus,
    ContentMatrixFilter,
    ContentMatrixGap,
    ContentMatrixRow,
    GapType,
    MethodAtLocation,
    MethodMediaStatus,
    ProductionReadiness,
    ReadinessStatus,
)
from domain.models.execution_method import CANONICAL_LOCATIONS, ExecutionLocation
from domain.models.exercise import Exercise
from domain.models.workflow import ProductionStatus

logger = logging.getLogger(__name__)

# Minimum number of cues + highlights for complete general cues
MIN_GENERAL_CUES = 3

# Minimum number of populated description languages for a complete description
MIN_DESCRIPTION_LANGUAGES = 2


def _is_present(url) -> bool:
    return bool(url and url.strip())


def get_production_readiness(exercise: Exercise) -> ProductionReadiness:
    """
    Count the filled media slots of an exercise.

    Args:
        exercise: Exercise to inspect

    Returns:
        ProductionReadiness with per-method media status and the overall
        status: production_ready when nothing is missing, missing_all_media
        when every slot is empty, pending_filming otherwise.
    """
    has_main_image = _is_present(exercise.media.image_url)
    has_main_video = _is_present(exercise.media.video_url)
    missing = int(not has_main_image) + int(not has_main_video)
    total = 2

    methods_status = []
    for index, method in enumerate(exercise.execution_methods):
        methods_status.append(
            MethodMediaStatus(
                method_name=method.display_name(index),
                has_image=method.has_image,
                has_video=method.has_video,
            )
        )
        total += 2
        missing += int(not method.has_image) + int(not method.has_video)

    if missing == 0:
        status = ReadinessStatus.PRODUCTION_READY
    elif missing == total:
        status = ReadinessStatus.MISSING_ALL_MEDIA
    else:
        status = ReadinessStatus.PENDING_FILMING

    return ProductionReadiness(
        status=status,
        has_main_image=has_main_image,
        has_main_video=has_main_video,
        execution_methods_status=methods_status,
        missing_count=missing,
        total_media_slots=total,
    )


def description_status(exercise: Exercise) -> CompletenessStatus:
    """Complete with two or more languages; a legacy goal alone is partial."""
    populated = len(exercise.content.description.populated_languages())
    if populated >= MIN_DESCRIPTION_LANGUAGES:
        return CompletenessStatus.COMPLETE
    if populated == 1 or (exercise.content.goal or "").strip():
        return CompletenessStatus.PARTIAL
    return CompletenessStatus.MISSING


def general_cues_status(exercise: Exercise) -> CompletenessStatus:
    count = len(exercise.content.specific_cues) + len(exercise.content.highlights)
    if count >= MIN_GENERAL_CUES:
        return CompletenessStatus.COMPLETE
    if count > 0:
        return CompletenessStatus.PARTIAL
    return CompletenessStatus.MISSING


def bucket_methods(
    exercise: Exercise,
) -> Tuple[Dict[ExecutionLocation, List[MethodAtLocation]], List[int]]:
    """
    Bucket methods by canonical location.

    Returns:
        ``(buckets, unmapped)`` where buckets maps every canonical location
        (in scan order) to its methods, and unmapped lists the indexes of
        methods with an empty location mapping.
    """
    buckets: Dict[ExecutionLocation, List[MethodAtLocation]] = {
        location: [] for location in CANONICAL_LOCATIONS
    }
    unmapped: List[int] = []
    for index, method in enumerate(exercise.execution_methods):
        if not method.location_mapping:
            unmapped.append(index)
            continue
        entry = MethodAtLocation(
            index=index,
            method_name=method.display_name(index),
            has_video=method.has_video,
            has_image=method.has_image,
            production_status=method_production_status(method),
            filmed=method.workflow.filmed,
            audio=method.workflow.audio,
            edited=method.workflow.edited,
            uploaded=method.workflow.uploaded,
            needs_long_explanation=method.needs_long_explanation,
            explanation_status=method.explanation_status,
        )
        for location in method.location_mapping:
            if location in buckets:
                buckets[location].append(entry)
    return buckets, unmapped


def analyze_exercise_for_matrix(exercise: Exercise, language: str = "he") -> ContentMatrixRow:
    """
    Analyze one exercise into a content matrix row.

    Args:
        exercise: Normalized exercise
        language: Language of the row name

    Returns:
        ContentMatrixRow with bucketed methods, typed gaps and counters
    """
    buckets, unmapped = bucket_methods(exercise)
    required = set(exercise.required_locations)

    gaps: List[ContentMatrixGap] = []
    legacy_gaps: List[str] = []

    for location in CANONICAL_LOCATIONS:
        methods = buckets[location]
        if not methods:
            if location in required:
                gaps.append(
                    ContentMatrixGap(
                        type=GapType.MISSING_REQUIRED_METHOD,
                        location=location,
                        message=f"{location.value}: missing required execution method",
                        critical=GapType.MISSING_REQUIRED_METHOD in CRITICAL_GAP_TYPES,
                    )
                )
                legacy_gaps.append(f"{location.value}: missing required method")
            continue

        for entry in methods:
            label = (
                f"{location.value}/{entry.method_name}"
                if len(methods) > 1
                else location.value
            )
            if not entry.has_video and not entry.has_image:
                gaps.append(
                    ContentMatrixGap(
                        type=GapType.MISSING_MEDIA,
                        location=location,
                        method_name=entry.method_name,
                        message=f"{label}: missing media",
                        critical=GapType.MISSING_MEDIA in CRITICAL_GAP_TYPES,
                    )
                )
                legacy_gaps.append(f"{label}: missing media")

            if entry.production_status == ProductionStatus.IN_POST_PRODUCTION:
                if not entry.edited:
                    detail, legacy = "filmed, not edited", "filmed but not edited"
                else:
                    detail, legacy = "edited, not uploaded", "edited but not uploaded"
                gaps.append(
                    ContentMatrixGap(
                        type=GapType.INCOMPLETE_WORKFLOW,
                        location=location,
                        method_name=entry.method_name,
                        message=f"{label}: in post-production ({detail})",
                        critical=GapType.INCOMPLETE_WORKFLOW in CRITICAL_GAP_TYPES,
                    )
                )
                legacy_gaps.append(f"{label}: {legacy}")

    critical_count = sum(1 for gap in gaps if gap.type in CRITICAL_GAP_TYPES)
    workflow_count = sum(1 for gap in gaps if gap.type == GapType.INCOMPLETE_WORKFLOW)

    if unmapped:
        logger.debug(f"Exercise {exercise.id} has unmapped methods: {unmapped}")

    return ContentMatrixRow(
        exercise_id=exercise.id,
        name=exercise.display_name(language),
        level=exercise.level,
        description_status=description_status(exercise),
        general_cues_status=general_cues_status(exercise),
        production_readiness=get_production_readiness(exercise),
        locations=buckets,
        required_locations=list(exercise.required_locations),
        gaps_detailed=gaps,
        gaps=legacy_gaps,
        critical_gap_count=critical_count,
        workflow_gap_count=workflow_count,
        unmapped_method_indexes=unmapped,
    )


def build_content_matrix(
    exercises: Iterable[Exercise], language: str = "he"
) -> List[ContentMatrixRow]:
    """Analyze exercises in order, one row each."""
    return [analyze_exercise_for_matrix(exercise, language) for exercise in exercises]


def matches_filter(exercise: Exercise, matrix_filter: ContentMatrixFilter) -> bool:
    """
    Check an exercise against a dashboard filter.

    Each non-empty dimension must match; within a dimension any value
    matches. Tag, location and brand dimensions match on any method.
    """
    methods = exercise.execution_methods
    if matrix_filter.lifestyle_tags:
        wanted = set(matrix_filter.lifestyle_tags)
        if not any(wanted.intersection(method.lifestyle_tags) for method in methods):
            return False
    if matrix_filter.locations:
        wanted_locations = set(matrix_filter.locations)
        if not any(wanted_locations.intersection(method.location_mapping) for method in methods):
            return False
    if matrix_filter.brand_ids:
        if not any(method.brand_id in matrix_filter.brand_ids for method in methods):
            return False
    if matrix_filter.movement_groups:
        group = exercise.movement_group.value if exercise.movement_group else None
        if group not in matrix_filter.movement_groups:
            return False
    return True


def filter_exercises(
    exercises: Iterable[Exercise], matrix_filter: ContentMatrixFilter
) -> List[Exercise]:
    """Exercises matching the filter, in input order."""
    return [exercise for exercise in exercises if matches_filter(exercise, matrix_filter)]

"""
Normalization and migration of stored exercise documents.

Stored documents have accumulated several shapes over time (singular gear
ids, missing location mappings, localized objects where strings belong,
partial workflow objects). This module is the single place that knows about
those shapes:

- read path: raw dict -> canonical ``Exercise`` / ``ExecutionMethod``
- write path: canonical entity or editor payload -> store-writable dict

Every rule is idempotent: normalizing the document of a normalized entity
yields the same entity. Data-quality problems are repaired and logged as
warnings; only a structurally impossible document raises.
"""

import copy
import logging
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from pydantic import TypeAdapter, ValidationError

from application.exceptions import MalformedExerciseError
from backend.core.classification import (
    map_mechanical_type,
    map_movement_type,
    map_symmetry,
)
from domain.models.execution_method import (
    ExecutionLocation,
    ExecutionMethod,
    ExplanationStatus,
    InstructionalVideo,
    InstructionalVideoLang,
    MethodMedia,
    RequiredGearType,
)
from domain.models.exercise import (
    Exercise,
    ExerciseContent,
    ExerciseMedia,
    MovementGroup,
    TargetProgramRef,
)
from domain.models.gendered_text import (
    GenderedText,
    PlainText,
    TextValue,
    is_gendered_shape,
)
from domain.models.localized_text import LANGUAGE_ORDER, LocalizedText
from domain.models.workflow import WORKFLOW_STEPS, Workflow

logger = logging.getLogger(__name__)

_DATETIME = TypeAdapter(datetime)


class _Unset:
    """Marker for a value that was never provided (as opposed to ``None``)."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET = _Unset()


# =============================================================================
# Text helpers
# =============================================================================


def _is_localized_shape(value: Any) -> bool:
    return isinstance(value, Mapping) and any(
        lang in value for lang in LANGUAGE_ORDER
    )


def coerce_to_string(value: Any, language: str = "he") -> str:
    """
    Coerce a value that should be a string into one.

    Localized objects (``{"he": ..., "en": ...}``) collapse to the requested
    language, then the first other populated language, then ``""``.

    Args:
        value: Raw stored value
        language: Preferred language for localized objects

    Returns:
        A string, never None
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if _is_localized_shape(value):
        text = LocalizedText(
            **{lang: str(value.get(lang) or "") for lang in LANGUAGE_ORDER}
        ).get(language)
        logger.warning(f"Coerced localized object to string: {text!r}")
        return text
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    logger.warning(f"Dropped non-text value of type {type(value).__name__}")
    return ""


def normalize_localized_text(value: Any, language: str = "he") -> LocalizedText:
    """Build a LocalizedText from a stored object; a bare string is Hebrew."""
    if isinstance(value, LocalizedText):
        return value
    if isinstance(value, str):
        return LocalizedText(he=value)
    if isinstance(value, Mapping):
        return LocalizedText(
            **{lang: coerce_to_string(value.get(lang), language) for lang in LANGUAGE_ORDER}
        )
    return LocalizedText()


def normalize_gendered_text(value: Any, language: str = "he") -> Optional[TextValue]:
    """
    Lift a stored cue / highlight / notification text into a TextValue.

    Strings become PlainText, ``{male, female}`` pairs become GenderedText,
    and localized objects are coerced to a single string in ``language``.
    """
    if value is None:
        return None
    if isinstance(value, (PlainText, GenderedText)):
        return value
    if isinstance(value, str):
        return PlainText(text=value)
    if is_gendered_shape(value):
        return GenderedText(male=value["male"], female=value["female"])
    if isinstance(value, Mapping) and value.get("kind") in ("plain", "gendered"):
        if value["kind"] == "plain":
            return PlainText(text=coerce_to_string(value.get("text"), language))
        return GenderedText(
            male=coerce_to_string(value.get("male"), language),
            female=coerce_to_string(value.get("female"), language),
        )
    return PlainText(text=coerce_to_string(value, language))


def normalize_text_list(value: Any, language: str = "he") -> List[TextValue]:
    """Normalize a list of gendered texts; non-lists become empty."""
    if not isinstance(value, list):
        return []
    items = []
    for item in value:
        normalized = normalize_gendered_text(item, language)
        if normalized is not None:
            items.append(normalized)
    return items


def _normalize_string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


def _optional_string(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


# =============================================================================
# Execution method fields
# =============================================================================


def migrate_id_list(raw: Mapping[str, Any], plural_key: str, singular_key: str) -> List[str]:
    """
    Read a gear/equipment id list, migrating the legacy singular field.

    Args:
        raw: Raw method document
        plural_key: Canonical list key, e.g. ``gearIds``
        singular_key: Deprecated single-id key, e.g. ``gearId``

    Returns:
        Trimmed, non-blank ids
    """
    plural = raw.get(plural_key)
    if isinstance(plural, list):
        return _normalize_string_list(plural)
    singular = raw.get(singular_key)
    if isinstance(singular, str) and singular.strip():
        logger.debug(f"Migrated legacy {singular_key} to {plural_key}")
        return [singular.strip()]
    return []


def _parse_location(value: Any) -> Optional[ExecutionLocation]:
    if isinstance(value, ExecutionLocation):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return ExecutionLocation(value.strip().lower())
    except ValueError:
        logger.warning(f"Unknown location {value!r} dropped")
        return None


def normalize_location_mapping(raw: Mapping[str, Any]) -> List[ExecutionLocation]:
    """
    Resolve a method's location mapping.

    A present list keeps its valid entries (an explicitly empty list stays
    empty). An absent mapping is migrated from the legacy ``location``.
    """
    mapping = raw.get("locationMapping")
    if isinstance(mapping, list):
        locations: List[ExecutionLocation] = []
        for item in mapping:
            location = _parse_location(item)
            if location is not None and location not in locations:
                locations.append(location)
        return locations
    if mapping is not None:
        logger.warning(f"locationMapping is not a list ({type(mapping).__name__}), ignored")
    legacy = _parse_location(raw.get("location"))
    if legacy is not None:
        logger.debug(f"Migrated legacy location {legacy.value!r} to locationMapping")
        return [legacy]
    return []


def _parse_gear_type(value: Any) -> Optional[RequiredGearType]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        return RequiredGearType(str(value).strip().lower())
    except ValueError:
        logger.warning(f"Unknown requiredGearType {value!r} dropped")
        return None


def _parse_timestamp(value: Any, field_name: str) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, Mapping) and "seconds" in value:
        value = value["seconds"]
    try:
        return _DATETIME.validate_python(value)
    except ValidationError:
        logger.warning(f"Unparseable workflow timestamp {field_name}={value!r}, cleared")
        return None


_TRUE_STRINGS = frozenset({"true", "yes", "1"})
_FALSE_STRINGS = frozenset({"false", "no", "0", ""})


def coerce_flag(value: Any, field_name: str) -> bool:
    """
    Read a stored boolean flag.

    Real booleans pass through, None is false, and the strings and 0/1
    integers older editors wrote are mapped. Anything else is false with a
    warning.
    """
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    logger.warning(f"Unrecognized flag {field_name}={value!r}, treated as false")
    return False


def normalize_workflow(value: Any) -> Workflow:
    """
    Normalize a stored workflow object.

    Missing workflow means nothing is done yet. A partial object is completed
    field by field.
    """
    if isinstance(value, Workflow):
        return value
    if not isinstance(value, Mapping):
        return Workflow()
    fields: Dict[str, Any] = {}
    for step in WORKFLOW_STEPS:
        name = step.value
        fields[name] = coerce_flag(value.get(name), name)
        fields[f"{name}_at"] = _parse_timestamp(
            value.get(f"{name}At", value.get(f"{name}_at")), f"{name}At"
        )
    return Workflow(**fields)


def _parse_duration(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        duration = float(value)
    except (TypeError, ValueError):
        return None
    return duration if duration > 0 else None


def normalize_media(value: Any) -> MethodMedia:
    """Normalize a method media bundle; blank URLs become None."""
    if isinstance(value, MethodMedia):
        return value
    if not isinstance(value, Mapping):
        return MethodMedia()
    videos: List[InstructionalVideo] = []
    raw_videos = value.get("instructionalVideos")
    for item in raw_videos if isinstance(raw_videos, list) else []:
        if not isinstance(item, Mapping):
            continue
        url = _optional_string(item.get("url"))
        try:
            lang = InstructionalVideoLang(item.get("lang"))
        except ValueError:
            lang = None
        if url is None or lang is None:
            logger.warning(f"Dropped instructional video with lang={item.get('lang')!r}")
            continue
        videos.append(InstructionalVideo(lang=lang, url=url))
    return MethodMedia(
        main_video_url=_optional_string(value.get("mainVideoUrl")),
        image_url=_optional_string(value.get("imageUrl")),
        video_duration_seconds=_parse_duration(value.get("videoDurationSeconds")),
        instructional_videos=videos,
    )


def _normalize_explanation(raw: Mapping[str, Any]) -> tuple:
    needs_long = coerce_flag(raw.get("needsLongExplanation"), "needsLongExplanation")
    status = raw.get("explanationStatus")
    if status is None:
        return needs_long, ExplanationStatus.MISSING if needs_long else None
    try:
        return needs_long, ExplanationStatus(status)
    except ValueError:
        return needs_long, ExplanationStatus.MISSING


def normalize_execution_method(
    raw: Any, *, index: Optional[int] = None, language: str = "he"
) -> ExecutionMethod:
    """
    Convert a raw stored method into a canonical ExecutionMethod.

    Args:
        raw: Raw method mapping (or an ExecutionMethod, returned as-is)
        index: Position in the parent list, used in error messages
        language: Language kept when a localized object stands in for a string

    Returns:
        The canonical method

    Raises:
        MalformedExerciseError: If ``raw`` is not a mapping
    """
    if isinstance(raw, ExecutionMethod):
        return raw
    if not isinstance(raw, Mapping):
        where = f" at index {index}" if index is not None else ""
        raise MalformedExerciseError(
            f"Execution method{where} must be a mapping, got {type(raw).__name__}"
        )
    needs_long, explanation_status = _normalize_explanation(raw)
    return ExecutionMethod(
        method_name=coerce_to_string(raw.get("methodName"), language),
        location=_parse_location(raw.get("location")),
        location_mapping=normalize_location_mapping(raw),
        required_gear_type=_parse_gear_type(raw.get("requiredGearType")),
        gear_ids=migrate_id_list(raw, "gearIds", "gearId"),
        equipment_ids=migrate_id_list(raw, "equipmentIds", "equipmentId"),
        brand_id=_optional_string(raw.get("brandId")),
        lifestyle_tags=_normalize_string_list(raw.get("lifestyleTags")),
        media=normalize_media(raw.get("media")),
        specific_cues=normalize_text_list(raw.get("specificCues"), language),
        highlights=normalize_text_list(raw.get("highlights"), language),
        notification_text=normalize_gendered_text(raw.get("notificationText"), language),
        workflow=normalize_workflow(raw.get("workflow")),
        needs_long_explanation=needs_long,
        explanation_status=explanation_status,
    )


# =============================================================================
# Exercise
# =============================================================================


def _parse_movement_group(value: Any) -> Optional[MovementGroup]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        return MovementGroup(str(value).strip().lower())
    except ValueError:
        logger.warning(f"Unknown movementGroup {value!r}, field will be absent")
        return None


def _normalize_required_locations(value: Any) -> List[ExecutionLocation]:
    if not isinstance(value, list):
        return []
    locations: List[ExecutionLocation] = []
    for item in value:
        location = _parse_location(item)
        if location is not None and location not in locations:
            locations.append(location)
    return locations


def _normalize_target_programs(value: Any) -> List[TargetProgramRef]:
    if not isinstance(value, list):
        return []
    programs = []
    for item in value:
        if not isinstance(item, Mapping) or not _optional_string(item.get("programId")):
            continue
        try:
            level = max(1, int(item.get("level") or 1))
        except (TypeError, ValueError):
            level = 1
        programs.append(TargetProgramRef(program_id=item["programId"].strip(), level=level))
    return programs


def _normalize_content(value: Any, language: str) -> ExerciseContent:
    if not isinstance(value, Mapping):
        return ExerciseContent()
    goal = coerce_to_string(value.get("goal"), language).strip()
    return ExerciseContent(
        description=normalize_localized_text(value.get("description"), language),
        instructions=normalize_localized_text(value.get("instructions"), language),
        specific_cues=normalize_text_list(value.get("specificCues"), language),
        highlights=normalize_text_list(value.get("highlights"), language),
        goal=goal or None,
    )


def _normalize_exercise_media(value: Any) -> ExerciseMedia:
    if not isinstance(value, Mapping):
        return ExerciseMedia()
    return ExerciseMedia(
        video_url=_optional_string(value.get("videoUrl")),
        image_url=_optional_string(value.get("imageUrl")),
    )


def normalize_exercise(
    exercise_id: str, raw: Mapping[str, Any], *, language: str = "he"
) -> Exercise:
    """
    Convert a raw exercise document into a canonical Exercise.

    Args:
        exercise_id: Document id
        raw: Stored document
        language: Language kept when a localized object stands in for a
            string (method names, cues, notification texts)

    Returns:
        The canonical exercise

    Raises:
        MalformedExerciseError: If ``execution_methods`` is not a list, or one
            of its items is not a mapping
    """
    if not isinstance(raw, Mapping):
        raise MalformedExerciseError(
            f"Exercise {exercise_id} must be a mapping, got {type(raw).__name__}"
        )
    raw_methods = raw.get("execution_methods")
    if raw_methods is None:
        raw_methods = raw.get("executionMethods", [])
    if raw_methods is None:
        raw_methods = []
    if not isinstance(raw_methods, list):
        raise MalformedExerciseError(
            f"Exercise {exercise_id}: execution_methods must be a list, "
            f"got {type(raw_methods).__name__}"
        )

    methods = [
        normalize_execution_method(item, index=i, language=language)
        for i, item in enumerate(raw_methods)
    ]
    base_movement_id = _optional_string(
        raw.get("base_movement_id") or raw.get("baseMovementId")
    )

    exercise = Exercise(
        id=exercise_id,
        name=normalize_localized_text(raw.get("name"), language),
        execution_methods=methods,
        base_movement_id=base_movement_id,
        movement_group=_parse_movement_group(raw.get("movementGroup")),
        required_locations=_normalize_required_locations(raw.get("requiredLocations")),
        movement_type=map_movement_type(raw.get("movementType")),
        symmetry=map_symmetry(raw.get("symmetry")),
        mechanical_type=map_mechanical_type(raw.get("mechanicalType")),
        content=_normalize_content(raw.get("content"), language),
        media=_normalize_exercise_media(raw.get("media")),
        target_programs=_normalize_target_programs(raw.get("targetPrograms")),
    )

    if methods and not base_movement_id:
        logger.warning(
            f"Missing base_movement_id for exercise {exercise.display_name(language)!r} "
            f"(ID: {exercise_id}), Smart Swap cannot group it"
        )
    return exercise


# =============================================================================
# Write path
# =============================================================================


def convert_undefined_to_null(obj: Any) -> Any:
    """
    Recursively replace ``UNSET`` with ``None``.

    Empty lists stay empty lists so that the store clears the field rather
    than nulling it.
    """
    if obj is UNSET:
        return None
    if isinstance(obj, list):
        return [convert_undefined_to_null(item) for item in obj]
    if isinstance(obj, tuple):
        return [convert_undefined_to_null(item) for item in obj]
    if isinstance(obj, Mapping):
        return {key: convert_undefined_to_null(value) for key, value in obj.items()}
    return obj


def execution_method_to_document(method: ExecutionMethod) -> Dict[str, Any]:
    """Full store document of a method; optional scalars are explicit nulls."""
    return method.model_dump(by_alias=True, mode="json")


def exercise_to_document(exercise: Exercise) -> Dict[str, Any]:
    """
    Full store document of an exercise.

    The id is the row key and is not part of the document body.
    """
    return exercise.model_dump(by_alias=True, mode="json", exclude={"id"})


def merge_exercise_update(existing: Any, incoming: Any) -> Any:
    """
    Merge a partial update into a stored document.

    - keys absent from ``incoming`` keep the stored value
    - keys present with None clear the stored value
    - lists merge by index; an empty list clears the field
    - a falsy incoming ``workflow`` never overwrites a stored workflow

    Args:
        existing: Stored document (or sub-document)
        incoming: Partial update

    Returns:
        The merged document; inputs are not mutated
    """
    if incoming is UNSET:
        return copy.deepcopy(existing)
    if incoming is None or not isinstance(incoming, (Mapping, list)):
        return incoming
    if isinstance(incoming, list):
        if not isinstance(existing, list):
            return copy.deepcopy(incoming)
        merged_items = []
        for i, item in enumerate(incoming):
            if i < len(existing) and existing[i]:
                merged_items.append(merge_exercise_update(existing[i], item))
            else:
                merged_items.append(copy.deepcopy(item))
        return merged_items
    if not isinstance(existing, Mapping):
        return copy.deepcopy(dict(incoming))

    merged = copy.deepcopy(dict(existing))
    for key, value in incoming.items():
        if value is UNSET:
            continue
        if key == "workflow" and existing.get(key) and not value:
            continue
        merged[key] = merge_exercise_update(existing.get(key), value)
    return merged


# Keys replaced by their canonical counterparts on write
LEGACY_METHOD_KEYS = ("gearId", "equipmentId")
LEGACY_EXERCISE_KEYS = ("executionMethods", "baseMovementId")


def to_store_document(stored: Mapping[str, Any], exercise: Exercise) -> Dict[str, Any]:
    """
    Build the document to write for an exercise.

    The canonical document is merged over the stored one, so fields the
    canonical model does not know about (stats, tags, timing) survive the
    write. Legacy keys that were migrated are removed.

    Args:
        stored: Current stored document body ({} for a new exercise)
        exercise: Canonical exercise to write

    Returns:
        Store-writable document body
    """
    body = {key: value for key, value in stored.items() if key != "id"}
    document = merge_exercise_update(body, exercise_to_document(exercise))
    for key in LEGACY_EXERCISE_KEYS:
        document.pop(key, None)
    for method in document.get("execution_methods") or []:
        for key in LEGACY_METHOD_KEYS:
            method.pop(key, None)
    return convert_undefined_to_null(document)

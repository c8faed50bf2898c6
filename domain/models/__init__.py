"""
Domain models for the exercise catalog content engine.

This package contains pure domain models that are independent of
infrastructure concerns (database, API, external services).

These models represent the core business concepts:
- Exercise: The aggregate root owning an ordered list of execution methods
- ExecutionMethod: One way to perform an exercise (location, gear, media)
- Workflow: Production pipeline flags of one method
- ResolutionContext: Runtime context used to pick a method
- ContentMatrixRow / TaskListSummary: Derived production reports

Usage:
    >>> from domain.models import Exercise, ExecutionMethod, LocalizedText

    >>> exercise = Exercise(
    ...     id="pull-up",
    ...     name=LocalizedText(he="מתח", en="Pull-up"),
    ...     execution_methods=[
    ...         ExecutionMethod(method_name="Park bar", location_mapping=["park"]),
    ...     ],
    ... )

    >>> # Serialize to the document-store shape
    >>> document = exercise.model_dump(by_alias=True, mode="json")
"""

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
    TaskItem,
    TaskListSummary,
)
from domain.models.context import ResolutionContext
from domain.models.execution_method import (
    CANONICAL_LOCATIONS,
    GEAR_TIER_ORDER,
    MAX_NOTIFICATION_TEXT_LENGTH,
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
    MechanicalType,
    MovementGroup,
    MovementType,
    Symmetry,
    TargetProgramRef,
)
from domain.models.gendered_text import (
    GenderedText,
    PlainText,
    TextValue,
    UserGender,
    resolve_text,
)
from domain.models.localized_text import AppLanguage, LocalizedText
from domain.models.workflow import (
    WORKFLOW_STEPS,
    ProductionStatus,
    Workflow,
    WorkflowStep,
)

__all__ = [
    # Main entities
    "Exercise",
    "ExerciseContent",
    "ExerciseMedia",
    "TargetProgramRef",
    "ExecutionMethod",
    "MethodMedia",
    "InstructionalVideo",
    "Workflow",
    "ResolutionContext",
    # Text values
    "LocalizedText",
    "PlainText",
    "GenderedText",
    "TextValue",
    "resolve_text",
    # Derived reports
    "ContentMatrixRow",
    "ContentMatrixGap",
    "ContentMatrixFilter",
    "MethodAtLocation",
    "MethodMediaStatus",
    "ProductionReadiness",
    "TaskItem",
    "TaskListSummary",
    # Enums
    "AppLanguage",
    "CompletenessStatus",
    "ExecutionLocation",
    "ExplanationStatus",
    "GapType",
    "InstructionalVideoLang",
    "MechanicalType",
    "MovementGroup",
    "MovementType",
    "ReadinessStatus",
    "ProductionStatus",
    "RequiredGearType",
    "Symmetry",
    "UserGender",
    "WorkflowStep",
    # Constants
    "CANONICAL_LOCATIONS",
    "CRITICAL_GAP_TYPES",
    "GEAR_TIER_ORDER",
    "MAX_NOTIFICATION_TEXT_LENGTH",
    "WORKFLOW_STEPS",
]

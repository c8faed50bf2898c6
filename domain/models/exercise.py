"""
Exercise aggregate root.

An exercise is owned by the catalog: editors create and edit it, while the
resolution and analysis components only read it. It groups the ordered list
of execution methods together with classification metadata used elsewhere
in the product (Smart Swap grouping, workout balancing).
"""

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_serializer, field_validator

from domain.models.execution_method import ExecutionLocation, ExecutionMethod
from domain.models.gendered_text import (
    TextValue,
    text_value_to_document,
    to_text_value,
)
from domain.models.localized_text import LocalizedText


class MovementGroup(str, Enum):
    """High-level movement pattern, keeps Smart Swap replacements in family."""

    SQUAT = "squat"
    HINGE = "hinge"
    HORIZONTAL_PUSH = "horizontal_push"
    VERTICAL_PUSH = "vertical_push"
    HORIZONTAL_PULL = "horizontal_pull"
    VERTICAL_PULL = "vertical_pull"
    CORE = "core"
    ISOLATION = "isolation"


class MovementType(str, Enum):
    COMPOUND = "compound"
    ISOLATION = "isolation"


class Symmetry(str, Enum):
    """Unilateral exercises take twice as long per set."""

    BILATERAL = "bilateral"
    UNILATERAL = "unilateral"


class MechanicalType(str, Enum):
    """
    Calisthenics classification used to balance straight arm and bent arm work.

    - STRAIGHT_ARM: planche, front lever, back lever
    - BENT_ARM: pull-ups, dips, push-ups
    - HYBRID: muscle-up
    - NONE: mobility, cardio and other non-calisthenics work
    """

    STRAIGHT_ARM = "straight_arm"
    BENT_ARM = "bent_arm"
    HYBRID = "hybrid"
    NONE = "none"


class ExerciseContent(BaseModel):
    """Written content of an exercise."""

    description: LocalizedText = Field(default_factory=LocalizedText)
    instructions: LocalizedText = Field(default_factory=LocalizedText)
    specific_cues: List[TextValue] = Field(default_factory=list, alias="specificCues")
    highlights: List[TextValue] = Field(default_factory=list)
    goal: Optional[str] = Field(
        default=None, description="Legacy single-language description"
    )

    @field_validator("specific_cues", "highlights", mode="before")
    @classmethod
    def lift_text_list(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [to_text_value(item) for item in value if item is not None]
        return value

    @field_serializer("specific_cues", "highlights")
    def dump_text_list(self, value: List[TextValue]) -> list:
        return [text_value_to_document(item) for item in value]

    model_config = {"frozen": True, "populate_by_name": True}


class ExerciseMedia(BaseModel):
    """Legacy exercise-level media, superseded by per-method media."""

    video_url: Optional[str] = Field(default=None, alias="videoUrl")
    image_url: Optional[str] = Field(default=None, alias="imageUrl")

    model_config = {"frozen": True, "populate_by_name": True}


class TargetProgramRef(BaseModel):
    """Link from an exercise to a program at a given level."""

    program_id: str = Field(..., alias="programId")
    level: int = Field(default=1, ge=1)

    model_config = {"frozen": True, "populate_by_name": True}


class Exercise(BaseModel):
    """
    Aggregate root for a catalog exercise.

    ``execution_methods`` keeps insertion order; resolution falls back to
    that order, so it must never be re-sorted.

    Examples:
        >>> exercise = Exercise(
        ...     id="push-up",
        ...     name=LocalizedText(he="שכיבות סמיכה", en="Push-up"),
        ...     execution_methods=[ExecutionMethod(location="home")],
        ...     required_locations=["home", "park"],
        ... )
        >>> exercise.level
        1
    """

    id: str = Field(..., min_length=1, description="Document id")
    name: LocalizedText = Field(default_factory=LocalizedText)
    execution_methods: List[ExecutionMethod] = Field(default_factory=list)
    base_movement_id: Optional[str] = Field(
        default=None,
        description="Groups interchangeable variations of the same movement",
    )
    movement_group: Optional[MovementGroup] = Field(default=None, alias="movementGroup")
    required_locations: List[ExecutionLocation] = Field(
        default_factory=list,
        alias="requiredLocations",
        description="Locations where a method is contractually expected",
    )
    movement_type: Optional[MovementType] = Field(default=None, alias="movementType")
    symmetry: Optional[Symmetry] = None
    mechanical_type: Optional[MechanicalType] = Field(
        default=None, alias="mechanicalType"
    )
    content: ExerciseContent = Field(default_factory=ExerciseContent)
    media: ExerciseMedia = Field(default_factory=ExerciseMedia)
    target_programs: List[TargetProgramRef] = Field(
        default_factory=list, alias="targetPrograms"
    )

    @property
    def level(self) -> int:
        """Level of the first target program, 1 when not linked."""
        if self.target_programs:
            return self.target_programs[0].level
        return 1

    def display_name(self, language: str = "he") -> str:
        return self.name.get(language)

    model_config = {"frozen": True, "populate_by_name": True}

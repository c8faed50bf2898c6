"""
Execution method entity.

An execution method is one concrete way to perform an exercise: a location,
the gear it needs, the media filmed for it, and the audience it targets.
An exercise owns an ordered list of methods; the order is significant and is
the deterministic fallback order used by resolution.

Field aliases are the document-store keys, so a canonical method can be
dumped straight back to the store with ``model_dump(by_alias=True)``.
"""

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_serializer, field_validator

from domain.models.gendered_text import (
    TextValue,
    text_value_to_document,
    to_text_value,
)
from domain.models.workflow import Workflow


# Maximum length of a push-notification text
MAX_NOTIFICATION_TEXT_LENGTH = 100


class ExecutionLocation(str, Enum):
    """Physical contexts an execution method can be filmed for."""

    HOME = "home"
    PARK = "park"
    STREET = "street"
    OFFICE = "office"
    SCHOOL = "school"
    GYM = "gym"
    AIRPORT = "airport"
    LIBRARY = "library"


# Gap-scan set, in scan order. LIBRARY is reserved and not scanned yet.
CANONICAL_LOCATIONS: tuple = (
    ExecutionLocation.HOME,
    ExecutionLocation.PARK,
    ExecutionLocation.OFFICE,
    ExecutionLocation.GYM,
    ExecutionLocation.STREET,
    ExecutionLocation.SCHOOL,
    ExecutionLocation.AIRPORT,
)


class RequiredGearType(str, Enum):
    """
    Kind of gear a method depends on.

    - FIXED_EQUIPMENT: installed equipment (gym machines, park stations)
    - USER_GEAR: gear the user owns (bands, rings)
    - IMPROVISED: household items (chair, towel)
    """

    FIXED_EQUIPMENT = "fixed_equipment"
    USER_GEAR = "user_gear"
    IMPROVISED = "improvised"


# Preference order used as a resolution tie-break
GEAR_TIER_ORDER: tuple = (
    RequiredGearType.FIXED_EQUIPMENT,
    RequiredGearType.USER_GEAR,
    RequiredGearType.IMPROVISED,
)


class ExplanationStatus(str, Enum):
    """Status of the long-form explanation video."""

    MISSING = "missing"
    READY = "ready"


class InstructionalVideoLang(str, Enum):
    """Languages of external instructional videos."""

    HE = "he"
    EN = "en"
    ES = "es"


class InstructionalVideo(BaseModel):
    """Deep-dive instructional video link (YouTube/Vimeo) for one language."""

    lang: InstructionalVideoLang
    url: str = Field(..., min_length=1)

    model_config = {"frozen": True}


class MethodMedia(BaseModel):
    """Media bundle of an execution method. URLs are opaque strings."""

    main_video_url: Optional[str] = Field(
        default=None,
        alias="mainVideoUrl",
        description="Video played in the in-app player (loop or follow-along)",
    )
    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    video_duration_seconds: Optional[float] = Field(
        default=None,
        alias="videoDurationSeconds",
        gt=0,
        description="Video length, used to auto-advance follow-along workouts",
    )
    instructional_videos: List[InstructionalVideo] = Field(
        default_factory=list,
        alias="instructionalVideos",
    )

    @property
    def has_video(self) -> bool:
        return bool(self.main_video_url and self.main_video_url.strip())

    @property
    def has_image(self) -> bool:
        return bool(self.image_url and self.image_url.strip())

    model_config = {"frozen": True, "populate_by_name": True}


class ExecutionMethod(BaseModel):
    """
    One way to perform the parent exercise.

    Only the canonical plural ``gear_ids`` / ``equipment_ids`` exist here;
    the deprecated singular store fields are migrated by the normalization
    layer and never reach this model.

    Examples:
        >>> method = ExecutionMethod(
        ...     method_name="Park bars",
        ...     location="park",
        ...     location_mapping=["park"],
        ...     required_gear_type="fixed_equipment",
        ...     media={"mainVideoUrl": "https://cdn.example/pullup.mp4"},
        ... )
        >>> method.has_media
        True
        >>> method.is_universal
        True
    """

    method_name: str = Field(default="", alias="methodName")
    location: Optional[ExecutionLocation] = Field(
        default=None,
        description="Legacy single-location tag, kept for backward compatibility",
    )
    location_mapping: List[ExecutionLocation] = Field(
        default_factory=list,
        alias="locationMapping",
        description="Locations this method applies to; empty means undefined",
    )
    required_gear_type: Optional[RequiredGearType] = Field(
        default=None, alias="requiredGearType"
    )
    gear_ids: List[str] = Field(default_factory=list, alias="gearIds")
    equipment_ids: List[str] = Field(default_factory=list, alias="equipmentIds")
    brand_id: Optional[str] = Field(
        default=None,
        alias="brandId",
        description="Manufacturer/brand for brand-specific media",
    )
    lifestyle_tags: List[str] = Field(
        default_factory=list,
        alias="lifestyleTags",
        description="Personas this method targets; empty applies to everyone",
    )
    media: MethodMedia = Field(default_factory=MethodMedia)
    specific_cues: List[TextValue] = Field(default_factory=list, alias="specificCues")
    highlights: List[TextValue] = Field(default_factory=list)
    notification_text: Optional[TextValue] = Field(
        default=None, alias="notificationText"
    )
    workflow: Workflow = Field(default_factory=Workflow)
    needs_long_explanation: bool = Field(default=False, alias="needsLongExplanation")
    explanation_status: Optional[ExplanationStatus] = Field(
        default=None, alias="explanationStatus"
    )

    @field_validator("specific_cues", "highlights", mode="before")
    @classmethod
    def lift_text_list(cls, value: Any) -> Any:
        """Accept stored strings / gender pairs as list items."""
        if isinstance(value, list):
            return [to_text_value(item) for item in value if item is not None]
        return value

    @field_validator("notification_text", mode="before")
    @classmethod
    def lift_text(cls, value: Any) -> Any:
        return to_text_value(value)

    @field_serializer("specific_cues", "highlights")
    def dump_text_list(self, value: List[TextValue]) -> list:
        return [text_value_to_document(item) for item in value]

    @field_serializer("notification_text")
    def dump_text(self, value: Optional[TextValue]) -> Any:
        return text_value_to_document(value)

    @property
    def has_video(self) -> bool:
        return self.media.has_video

    @property
    def has_image(self) -> bool:
        return self.media.has_image

    @property
    def has_media(self) -> bool:
        """True when a video or an image is present."""
        return self.has_video or self.has_image

    @property
    def is_universal(self) -> bool:
        """A method without lifestyle tags applies to every persona."""
        return not self.lifestyle_tags

    def display_name(self, index: int) -> str:
        """Method name, or a positional label when the name is blank."""
        return self.method_name if self.method_name.strip() else f"Method {index + 1}"

    model_config = {"frozen": True, "populate_by_name": True}

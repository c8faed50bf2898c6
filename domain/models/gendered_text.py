"""
Gendered text value objects.

Coaching cues, highlights and notification texts are stored either as a
plain string or as a ``{"male": ..., "female": ...}`` pair. Instead of
duck-typing on the stored shape at every use site, the shape is lifted into
an explicit tagged variant:

- PlainText: the same text for every user
- GenderedText: one text per gender

and a single resolver, ``resolve_text()``, picks the string to display.

Usage:
    >>> from domain.models.gendered_text import GenderedText, PlainText, resolve_text

    >>> resolve_text(PlainText(text="Keep your core tight"), "female")
    'Keep your core tight'

    >>> resolve_text(GenderedText(male="Push!", female="Push harder!"), "female")
    'Push harder!'
"""

from enum import Enum
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, Field


class UserGender(str, Enum):
    """Gender used to pick the gendered variant of a text."""

    MALE = "male"
    FEMALE = "female"


class PlainText(BaseModel):
    """Text shown identically to every user."""

    kind: Literal["plain"] = "plain"
    text: str = Field(default="", description="Display text")

    model_config = {"frozen": True}


class GenderedText(BaseModel):
    """Text with a male and a female variant."""

    kind: Literal["gendered"] = "gendered"
    male: str = Field(default="", description="Text addressed to male users")
    female: str = Field(default="", description="Text addressed to female users")

    model_config = {"frozen": True}


TextValue = Union[PlainText, GenderedText]


def is_gendered_shape(value: Any) -> bool:
    """Check whether a raw value has the stored ``{male, female}`` shape."""
    return (
        isinstance(value, dict)
        and isinstance(value.get("male"), str)
        and isinstance(value.get("female"), str)
    )


def to_text_value(value: Any) -> Optional[TextValue]:
    """
    Lift a stored text into its tagged variant.

    Args:
        value: A string, a ``{male, female}`` dict, or an existing TextValue

    Returns:
        The matching TextValue, or None for None

    Raises:
        ValueError: If the value has neither supported shape
    """
    if value is None:
        return None
    if isinstance(value, (PlainText, GenderedText)):
        return value
    if isinstance(value, str):
        return PlainText(text=value)
    if is_gendered_shape(value):
        return GenderedText(male=value["male"], female=value["female"])
    if isinstance(value, dict) and value.get("kind") in ("plain", "gendered"):
        if value["kind"] == "plain":
            return PlainText(text=value.get("text", ""))
        return GenderedText(male=value.get("male", ""), female=value.get("female", ""))
    raise ValueError(f"Unsupported text shape: {type(value).__name__}")


def text_value_to_document(value: Optional[TextValue]) -> Union[str, dict, None]:
    """Serialize a TextValue back to its stored shape (string or pair)."""
    if value is None:
        return None
    if isinstance(value, PlainText):
        return value.text
    return {"male": value.male, "female": value.female}


def resolve_text(
    value: Optional[TextValue],
    gender: Union[UserGender, str] = UserGender.MALE,
) -> str:
    """
    Resolve a text for the given gender.

    Plain texts are returned as-is. Gendered texts return the requested
    variant, falling back to the male variant, then to an empty string.

    Args:
        value: Text to resolve (None resolves to "")
        gender: Gender preference, defaults to male for neutral/unknown

    Returns:
        The display string
    """
    if value is None:
        return ""
    if isinstance(value, PlainText):
        return value.text
    gender_key = gender.value if isinstance(gender, UserGender) else str(gender)
    if gender_key not in ("male", "female"):
        gender_key = UserGender.MALE.value
    return getattr(value, gender_key) or value.male or ""


def text_length(value: Optional[TextValue]) -> int:
    """Length of the longest variant of a text."""
    if value is None:
        return 0
    if isinstance(value, PlainText):
        return len(value.text)
    return max(len(value.male), len(value.female))

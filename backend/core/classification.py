"""
Classification field mapping.

Imported exercise data spells movement type, symmetry and mechanical type in
many ways (``"SA"``, ``"Straight Arm"``, Hebrew labels). The accepted
spellings live in ``shared/dictionaries/classification.yaml``; this module
maps raw values onto the canonical enums.
"""

import logging
import pathlib
from functools import lru_cache
from typing import Any, Dict, Optional, Type, TypeVar

import yaml

from domain.models.exercise import MechanicalType, MovementType, Symmetry

logger = logging.getLogger(__name__)

ROOT = pathlib.Path(__file__).resolve().parents[2]
DICTIONARY_PATH = ROOT / "shared/dictionaries/classification.yaml"

E = TypeVar("E", MovementType, Symmetry, MechanicalType)


@lru_cache(maxsize=1)
def load_synonyms() -> Dict[str, Dict[str, str]]:
    """
    Load the synonym dictionary as ``{field: {synonym: canonical}}``.

    Cached; the file is read once per process.
    """
    raw = yaml.safe_load(DICTIONARY_PATH.read_text(encoding="utf-8")) or {}
    lookup: Dict[str, Dict[str, str]] = {}
    for field_name, values in raw.items():
        lookup[field_name] = {}
        for canonical, synonyms in (values or {}).items():
            lookup[field_name][str(canonical).lower()] = str(canonical)
            for synonym in synonyms or []:
                lookup[field_name][str(synonym).strip().lower()] = str(canonical)
    return lookup


def _map(field_name: str, enum_cls: Type[E], value: Any) -> Optional[E]:
    if value is None:
        return None
    if isinstance(value, enum_cls):
        return value
    key = str(value).strip().lower()
    if not key:
        return None
    canonical = load_synonyms().get(field_name, {}).get(key)
    if canonical is None:
        logger.warning(
            f"Unrecognized {field_name} value {value!r}, field will be absent"
        )
        return None
    return enum_cls(canonical)


def map_movement_type(value: Any) -> Optional[MovementType]:
    """Map a raw movement type; blank and unknown values become None."""
    return _map("movement_type", MovementType, value)


def map_symmetry(value: Any) -> Optional[Symmetry]:
    """Map a raw symmetry; blank and unknown values become None."""
    return _map("symmetry", Symmetry, value)


def map_mechanical_type(value: Any) -> Optional[MechanicalType]:
    """
    Map a raw mechanical type.

    Unlike the other classification fields, an explicitly blank value means
    "not a calisthenics movement" and maps to ``MechanicalType.NONE``.

    Args:
        value: Raw stored value (string, enum or None)

    Returns:
        The canonical MechanicalType, or None when absent or unrecognized
    """
    if isinstance(value, str) and not value.strip():
        return MechanicalType.NONE
    return _map("mechanical_type", MechanicalType, value)

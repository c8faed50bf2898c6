"""
Execution method resolution.

Picks the single best execution method of an exercise for a runtime
context. The candidate list is narrowed by a cascade of filters, in fixed
priority order:

    brand > location > persona > gear tier

A filter only narrows when at least one candidate survives it; an empty
intersection skips the stage. Catalog order is the only tie-breaker, so the
result is deterministic for a given exercise and context.

Usage:
    >>> from backend.core.resolution import resolve_execution_method
    >>> method = resolve_execution_method(exercise, ResolutionContext(location="park"))
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from domain.models.context import ResolutionContext
from domain.models.execution_method import GEAR_TIER_ORDER, ExecutionMethod
from domain.models.exercise import Exercise

logger = logging.getLogger(__name__)

# (catalog index, method)
Candidate = Tuple[int, ExecutionMethod]


@dataclass
class Resolution:
    """Outcome of resolving a method for a context."""

    method: Optional[ExecutionMethod] = None
    index: Optional[int] = None
    stages: List[str] = field(default_factory=list)
    used_fallback: bool = False

    @property
    def found(self) -> bool:
        return self.method is not None


def _narrow(
    candidates: List[Candidate], predicate: Callable[[ExecutionMethod], bool]
) -> Optional[List[Candidate]]:
    """Candidates matching the predicate, or None when nothing matches."""
    matched = [candidate for candidate in candidates if predicate(candidate[1])]
    return matched or None


def _brand_stage(candidates: List[Candidate], context: ResolutionContext) -> Optional[List[Candidate]]:
    if not context.brand_id:
        return None
    return _narrow(candidates, lambda m: m.brand_id == context.brand_id)


def _location_stage(candidates: List[Candidate], context: ResolutionContext) -> Optional[List[Candidate]]:
    location = context.location_value
    if not location:
        return None
    by_mapping = _narrow(
        candidates, lambda m: any(loc.value == location for loc in m.location_mapping)
    )
    if by_mapping is not None:
        return by_mapping
    return _narrow(
        candidates, lambda m: m.location is not None and m.location.value == location
    )


def _persona_stage(candidates: List[Candidate], context: ResolutionContext) -> Optional[List[Candidate]]:
    tags = set(context.persona_tags)
    if tags:
        by_tag = _narrow(candidates, lambda m: bool(tags.intersection(m.lifestyle_tags)))
        if by_tag is not None:
            return by_tag
    return _narrow(candidates, lambda m: m.is_universal)


def _gear_rank(method: ExecutionMethod) -> int:
    if method.required_gear_type is None:
        return len(GEAR_TIER_ORDER)
    return GEAR_TIER_ORDER.index(method.required_gear_type)


def _gear_stage(candidates: List[Candidate]) -> Optional[List[Candidate]]:
    if len(candidates) < 2:
        return None
    best = min(_gear_rank(method) for _, method in candidates)
    return [candidate for candidate in candidates if _gear_rank(candidate[1]) == best]


def resolve(exercise: Exercise, context: ResolutionContext) -> Resolution:
    """
    Resolve the execution method to present for a context.

    Args:
        exercise: Exercise with its ordered execution methods
        context: Runtime location, persona tags and brand

    Returns:
        Resolution with the chosen method and its index. ``method`` is None
        only when the exercise has no execution methods.
    """
    methods = exercise.execution_methods
    if not methods:
        return Resolution()

    candidates: List[Candidate] = list(enumerate(methods))
    stages: List[str] = []

    for name, stage in (
        ("brand", lambda c: _brand_stage(c, context)),
        ("location", lambda c: _location_stage(c, context)),
        ("persona", lambda c: _persona_stage(c, context)),
        ("gear", _gear_stage),
    ):
        narrowed = stage(candidates)
        if narrowed is not None and len(narrowed) < len(candidates):
            stages.append(name)
            candidates = narrowed

    if not stages:
        # Nothing discriminated between methods
        for index, method in enumerate(methods):
            if method.has_media:
                return Resolution(method=method, index=index, used_fallback=True)
        return Resolution(method=methods[0], index=0, used_fallback=True)

    index, method = candidates[0]
    logger.debug(f"Resolved {exercise.id} to method {index} via {stages}")
    return Resolution(method=method, index=index, stages=stages)


def resolve_execution_method(
    exercise: Exercise, context: ResolutionContext
) -> Optional[ExecutionMethod]:
    """Resolved method only; None only for an exercise without methods."""
    return resolve(exercise, context).method


def video_url_for(exercise: Exercise, method: Optional[ExecutionMethod]) -> Optional[str]:
    """Video of a method, falling back to the exercise video."""
    if method is not None and method.has_video:
        return method.media.main_video_url
    return exercise.media.video_url


def image_url_for(exercise: Exercise, method: Optional[ExecutionMethod]) -> Optional[str]:
    """
    Image of a method.

    Falls back to the method video (used as a poster), then to the
    exercise-level image.
    """
    if method is not None:
        if method.has_image:
            return method.media.image_url
        if method.has_video:
            return method.media.main_video_url
    return exercise.media.image_url

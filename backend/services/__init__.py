"""Backend services for the exercise catalog content API."""

from backend.services.draft_cache import DraftCache, draft_key

__all__ = [
    "DraftCache",
    "draft_key",
]

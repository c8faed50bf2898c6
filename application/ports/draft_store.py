"""
Draft Store Interface (Port).

Key-value storage for editor drafts. The draft cache service owns the
record format; a store only keeps opaque dicts by key.
"""
from typing import Protocol, Optional, Dict, Any


class DraftStore(Protocol):
    """Abstract interface for persisting editor drafts."""

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        """
        Read a stored draft record.

        Args:
            key: Draft key

        Returns:
            The stored record or None
        """
        ...

    def put(self, key: str, record: Dict[str, Any]) -> None:
        """Write a draft record, replacing any previous one."""
        ...

    def delete(self, key: str) -> None:
        """Remove a draft record; missing keys are ignored."""
        ...

"""
Infrastructure Cache Layer.

In-process implementations of the cache-like ports defined in
application.ports.
"""

from infrastructure.cache.draft_store import InMemoryDraftStore

__all__ = [
    "InMemoryDraftStore",
]

"""
In-memory implementation of DraftStore.

Drafts only need to survive for the editing session of one process, so a
locked dict is enough.
"""
import copy
import threading
from typing import Optional, Dict, Any


class InMemoryDraftStore:
    """Thread-safe dict-backed DraftStore."""

    def __init__(self) -> None:
        self._records: Dict[str, Dict[str, Any]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            record = self._records.get(key)
            return copy.deepcopy(record) if record is not None else None

    def put(self, key: str, record: Dict[str, Any]) -> None:
        with self._lock:
            self._records[key] = copy.deepcopy(record)

    def delete(self, key: str) -> None:
        with self._lock:
            self._records.pop(key, None)

    def keys(self):
        with self._lock:
            return list(self._records)

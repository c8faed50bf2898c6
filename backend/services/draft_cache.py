"""
Draft cache for execution method edits.

Editors change execution methods in many small steps. To avoid losing work
on a crash without hammering the store, changes are staged in memory and
written to a DraftStore only after they have been stable for a debounce
window, or when a save is requested explicitly.

Stored records are versioned; a record written by an incompatible version
is discarded on load instead of being migrated.

Usage:
    >>> cache = DraftCache(InMemoryDraftStore(), debounce_seconds=2.0)
    >>> cache.stage("pull-up", [{"methodName": "Park bar"}])
    >>> cache.flush_due()      # writes once the draft is 2s old
    >>> cache.load("pull-up")
"""

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Optional

from application.ports import DraftStore

logger = logging.getLogger(__name__)

DRAFT_SCHEMA_VERSION = 1
DRAFT_KEY_PREFIX = "exercise-methods-draft-"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def draft_key(exercise_id: str) -> str:
    return f"{DRAFT_KEY_PREFIX}{exercise_id}"


@dataclass
class _PendingDraft:
    methods: List[Dict[str, Any]]
    changed_at: datetime


class DraftCache:
    """
    Debounced, versioned draft cache.

    The clock is injectable so that debounce behaviour can be tested without
    sleeping.
    """

    def __init__(
        self,
        store: DraftStore,
        debounce_seconds: float = 2.0,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """
        Args:
            store: Where drafts are persisted
            debounce_seconds: How long a draft must be unchanged before it
                is written by ``flush_due``
            clock: Returns the current time
        """
        self._store = store
        self._debounce = timedelta(seconds=debounce_seconds)
        self._clock = clock
        self._pending: Dict[str, _PendingDraft] = {}
        self._last_written: Dict[str, str] = {}

    def stage(self, exercise_id: str, methods: List[Dict[str, Any]]) -> None:
        """Record the latest methods of an exercise; restarts its debounce window."""
        if not exercise_id or not methods:
            logger.debug(f"Nothing to stage for exercise {exercise_id!r}")
            return
        self._pending[exercise_id] = _PendingDraft(list(methods), self._clock())

    def pending_ids(self) -> List[str]:
        return list(self._pending)

    def flush_due(self) -> List[str]:
        """
        Write every staged draft older than the debounce window.

        Returns:
            Ids of the exercises whose drafts were written
        """
        now = self._clock()
        written = []
        for exercise_id in list(self._pending):
            pending = self._pending[exercise_id]
            if now - pending.changed_at >= self._debounce:
                del self._pending[exercise_id]
                if self._write(exercise_id, pending.methods):
                    written.append(exercise_id)
        return written

    def save_now(self, exercise_id: str) -> bool:
        """
        Write the staged draft of one exercise immediately.

        Returns:
            True if a record was written, False if nothing was staged or the
            draft is identical to the last one written
        """
        pending = self._pending.pop(exercise_id, None)
        if pending is None:
            return False
        return self._write(exercise_id, pending.methods)

    def load(self, exercise_id: str) -> Optional[List[Dict[str, Any]]]:
        """
        Load the stored draft of an exercise.

        Records with an invalid shape or another schema version are deleted.

        Returns:
            The drafted methods, or None
        """
        record = self._store.get(draft_key(exercise_id))
        if record is None:
            return None
        methods = record.get("methods")
        if not isinstance(methods, list):
            logger.warning(f"Invalid draft format for exercise {exercise_id}, clearing")
            self.discard(exercise_id)
            return None
        if record.get("version") != DRAFT_SCHEMA_VERSION:
            logger.warning(
                f"Draft version mismatch for exercise {exercise_id} "
                f"({record.get('version')!r} != {DRAFT_SCHEMA_VERSION}), clearing"
            )
            self.discard(exercise_id)
            return None
        logger.debug(
            f"Draft loaded for exercise {exercise_id}: {len(methods)} method(s), "
            f"saved at {record.get('savedAt')}"
        )
        return methods

    def discard(self, exercise_id: str) -> None:
        """Drop both the staged and the stored draft of an exercise."""
        self._pending.pop(exercise_id, None)
        self._last_written.pop(exercise_id, None)
        self._store.delete(draft_key(exercise_id))

    def _write(self, exercise_id: str, methods: List[Dict[str, Any]]) -> bool:
        serialized = json.dumps(methods, sort_keys=True, default=str)
        if self._last_written.get(exercise_id) == serialized:
            return False
        record = {
            "methods": methods,
            "savedAt": self._clock().isoformat(),
            "exerciseId": exercise_id,
            "version": DRAFT_SCHEMA_VERSION,
        }
        self._store.put(draft_key(exercise_id), record)
        self._last_written[exercise_id] = serialized
        logger.debug(f"Draft saved for exercise {exercise_id}: {len(methods)} method(s)")
        return True

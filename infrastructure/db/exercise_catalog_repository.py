"""
Supabase implementation of ExerciseCatalogRepository.

Exercises are stored one row per document:

    id          text primary key
    data        jsonb, the exercise document body
    updated_at  timestamptz

The jsonb column keeps explicit nulls and empty arrays, and has no notion
of an undefined value; the write path converts those to null before
anything reaches this repository.
"""
import logging
from datetime import datetime, timezone
from typing import Optional, List, Dict, Any

from supabase import Client

logger = logging.getLogger(__name__)

DEFAULT_TABLE = "exercises"


def _row_to_document(row: Dict[str, Any]) -> Dict[str, Any]:
    """Flatten a ``{id, data}`` row into a document with its id."""
    document = dict(row.get("data") or {})
    document["id"] = row.get("id")
    return document


class SupabaseExerciseCatalogRepository:
    """
    Supabase implementation of ExerciseCatalogRepository protocol.

    Read failures are logged and reported as empty results, write failures
    as None / False, so that a flaky store degrades the dashboard instead of
    crashing it.
    """

    def __init__(self, client: Client, table: str = DEFAULT_TABLE):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected, not global)
            table: Table holding the exercise documents
        """
        self._client = client
        self._table = table

    def get_all(self, limit: int = 1000) -> List[Dict[str, Any]]:
        """Get all exercise documents, ordered by id."""
        try:
            result = (
                self._client.table(self._table)
                .select("id, data")
                .order("id")
                .limit(limit)
                .execute()
            )
            return [_row_to_document(row) for row in result.data or []]
        except Exception:
            logger.exception("Error fetching all exercises")
            return []

    def get_by_id(self, exercise_id: str) -> Optional[Dict[str, Any]]:
        """Get an exercise document by id."""
        try:
            result = (
                self._client.table(self._table)
                .select("id, data")
                .eq("id", exercise_id)
                .execute()
            )
            if result.data:
                return _row_to_document(result.data[0])
            return None
        except Exception:
            logger.exception(f"Error fetching exercise by id {exercise_id}")
            return None

    def create(self, exercise_id: str, document: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Insert a new exercise document."""
        try:
            result = self._client.table(self._table).insert({
                "id": exercise_id,
                "data": document,
                "updated_at": datetime.now(timezone.utc).isoformat(),
            }).execute()
            if result.data:
                logger.info(f"Exercise {exercise_id} created")
                return _row_to_document(result.data[0])
            return None
        except Exception:
            logger.exception(f"Failed to create exercise {exercise_id}")
            return None

    def update(self, exercise_id: str, document: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Replace the body of an exercise document."""
        try:
            result = (
                self._client.table(self._table)
                .update({
                    "data": document,
                    "updated_at": datetime.now(timezone.utc).isoformat(),
                })
                .eq("id", exercise_id)
                .execute()
            )
            if result.data:
                logger.info(f"Exercise {exercise_id} updated")
                return _row_to_document(result.data[0])
            logger.warning(f"No exercise found with id {exercise_id} (0 rows updated)")
            return None
        except Exception:
            logger.exception(f"Failed to update exercise {exercise_id}")
            return None

    def delete(self, exercise_id: str) -> bool:
        """Delete an exercise document."""
        try:
            result = self._client.table(self._table).delete().eq("id", exercise_id).execute()
            deleted = len(result.data or [])
            if deleted:
                logger.info(f"Exercise {exercise_id} deleted")
            return deleted > 0
        except Exception:
            logger.exception(f"Failed to delete exercise {exercise_id}")
            return False

"""
Exercise Catalog Repository Interface (Port).

This module defines the abstract interface for the exercise document store.
Documents are raw, untyped dicts exactly as stored; converting them into
canonical entities is the job of the normalization layer.
"""
from typing import Protocol, Optional, List, Dict, Any


class ExerciseCatalogRepository(Protocol):
    """
    Abstract interface for exercise document persistence.

    Every returned document carries its row key under ``"id"``; the rest of
    the keys are the stored document body.
    """

    def get_all(self, limit: int = 1000) -> List[Dict[str, Any]]:
        """
        Get all exercise documents.

        Args:
            limit: Maximum number of documents to return

        Returns:
            List of exercise documents
        """
        ...

    def get_by_id(self, exercise_id: str) -> Optional[Dict[str, Any]]:
        """
        Get an exercise document by id.

        Args:
            exercise_id: Document id

        Returns:
            Exercise document or None if not found
        """
        ...

    def create(self, exercise_id: str, document: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Store a new exercise document.

        Args:
            exercise_id: Document id
            document: Store-writable document body (no ``id`` key)

        Returns:
            Stored document, or None on failure
        """
        ...

    def update(self, exercise_id: str, document: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Replace the body of an existing exercise document.

        Args:
            exercise_id: Document id
            document: Full store-writable document body

        Returns:
            Stored document, or None if not found or on failure
        """
        ...

    def delete(self, exercise_id: str) -> bool:
        """
        Delete an exercise document.

        Args:
            exercise_id: Document id

        Returns:
            True if a document was deleted
        """
        ...

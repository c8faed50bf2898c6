"""
Application-layer exceptions.

These exceptions are used across the core, application and infrastructure
layers. Data-quality problems in stored documents never raise; they are
repaired by normalization and logged. Only structurally impossible input
and rejected editor operations raise.
"""


class CatalogError(Exception):
    """Base class for exercise catalog errors."""

    pass


class MalformedExerciseError(CatalogError, TypeError):
    """A stored exercise cannot be interpreted at all.

    Raised when ``execution_methods`` is not a list, or one of its items
    is not a mapping.
    """

    pass


class ExerciseNotFoundError(CatalogError, LookupError):
    """No exercise exists with the requested id."""

    def __init__(self, exercise_id: str):
        super().__init__(f"Exercise not found: {exercise_id}")
        self.exercise_id = exercise_id


class InvalidMethodIndexError(CatalogError, IndexError):
    """An execution method index is out of range for its exercise."""

    def __init__(self, exercise_id: str, index: int, method_count: int):
        super().__init__(
            f"Exercise {exercise_id} has {method_count} execution method(s), "
            f"index {index} is out of range"
        )
        self.exercise_id = exercise_id
        self.index = index
        self.method_count = method_count


class WorkflowOrderError(CatalogError, ValueError):
    """A workflow update would break the filmed -> audio -> edited -> uploaded order.

    Only raised when strict workflow ordering is enabled.
    """

    def __init__(self, message: str, step: str):
        super().__init__(message)
        self.step = step

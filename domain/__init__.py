"""
Domain layer for the exercise catalog content engine.

This package contains pure domain models that are independent of
infrastructure concerns (database, API, external services).
"""

from domain.models import (
    ExecutionLocation,
    ExecutionMethod,
    Exercise,
    ResolutionContext,
    Workflow,
    WorkflowStep,
)

__all__ = [
    "ExecutionLocation",
    "ExecutionMethod",
    "Exercise",
    "ResolutionContext",
    "Workflow",
    "WorkflowStep",
]

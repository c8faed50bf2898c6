"""
Application Use Cases for the exercise catalog content engine.

This package contains application-level use cases that orchestrate the pure
core (normalization, resolution, workflow, content analysis) and coordinate
between ports/adapters. Use cases are the entry points for business
operations and contain the application's workflow logic.

Architecture follows Clean Architecture / Hexagonal pattern:
- Use cases orchestrate domain objects and repository ports
- Dependencies are injected via constructors for testability
- Use cases return domain models, not API responses

Usage:
    from application.use_cases import (
        BuildContentMatrixUseCase,
        ResolveExecutionMethodUseCase,
        SaveExerciseUseCase,
        UpdateMethodWorkflowUseCase,
    )

    # Build the production dashboard
    matrix_use_case = BuildContentMatrixUseCase(catalog_repo=catalog_repo)
    result = matrix_use_case.execute(include_tasks=True)

    # Mark a method as filmed
    workflow_use_case = UpdateMethodWorkflowUseCase(catalog_repo=catalog_repo)
    result = workflow_use_case.mark_filmed("pull-up", 0)
"""

from application.use_cases.build_content_matrix import (
    BuildContentMatrixUseCase,
    ContentMatrixResult,
    SmartSwapResult,
    load_catalog,
)
from application.use_cases.resolve_execution_method import (
    ResolveExecutionMethodUseCase,
    ResolveResult,
)
from application.use_cases.save_exercise import (
    SaveExerciseResult,
    SaveExerciseUseCase,
)
from application.use_cases.update_method_workflow import (
    BatchWorkflowUpdateResult,
    UpdateMethodWorkflowUseCase,
    WorkflowUpdate,
    WorkflowUpdateResult,
)

__all__ = [
    # BuildContentMatrix
    "BuildContentMatrixUseCase",
    "ContentMatrixResult",
    "SmartSwapResult",
    "load_catalog",
    # ResolveExecutionMethod
    "ResolveExecutionMethodUseCase",
    "ResolveResult",
    # SaveExercise
    "SaveExerciseUseCase",
    "SaveExerciseResult",
    # UpdateMethodWorkflow
    "UpdateMethodWorkflowUseCase",
    "WorkflowUpdate",
    "WorkflowUpdateResult",
    "BatchWorkflowUpdateResult",
]

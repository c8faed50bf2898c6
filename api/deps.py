"""
FastAPI Dependency Providers for the exercise catalog API.

This module provides FastAPI dependency injection functions that return
interface types (Protocols) rather than concrete implementations. This
enables clean separation of concerns and easy testing with fake implementations.

Architecture:
- Settings, Supabase client and the draft store are cached per-process (lru_cache)
- Repository and use case providers create new instances per-request

Usage in routers:
    from api.deps import get_build_content_matrix_use_case
    from application.use_cases import BuildContentMatrixUseCase

    @router.get("/content/matrix")
    def content_matrix(
        use_case: BuildContentMatrixUseCase = Depends(get_build_content_matrix_use_case),
    ):
        return use_case.execute()

Testing:
    # Override dependencies in tests
    app.dependency_overrides[get_exercise_catalog_repo] = lambda: FakeExerciseCatalogRepository()
"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends
from supabase import Client, create_client

# Protocol types (interfaces)
from application.ports import DraftStore, ExerciseCatalogRepository

# Concrete implementations
from infrastructure import InMemoryDraftStore, SupabaseExerciseCatalogRepository

from application.use_cases import (
    BuildContentMatrixUseCase,
    ResolveExecutionMethodUseCase,
    SaveExerciseUseCase,
    UpdateMethodWorkflowUseCase,
)
from backend.services.draft_cache import DraftCache
from backend.settings import Settings, get_settings as _get_settings


# =============================================================================
# Settings Provider
# =============================================================================


def get_settings() -> Settings:
    """
    Get application settings.

    Returns cached Settings instance from backend.settings.
    Use this as a FastAPI dependency for settings access.

    Returns:
        Settings: Application settings instance
    """
    return _get_settings()


# =============================================================================
# Supabase Client Provider
# =============================================================================


@lru_cache
def get_supabase_client() -> Optional[Client]:
    """
    Get Supabase client instance (cached).

    Creates a Supabase client using credentials from settings.
    Returns None if credentials are not configured.

    Returns:
        Client: Supabase client instance, or None if not configured
    """
    settings = _get_settings()

    if not settings.supabase_url or not settings.supabase_key:
        return None

    return create_client(settings.supabase_url, settings.supabase_key)


def get_supabase_client_required() -> Client:
    """
    Get Supabase client instance, raising if not configured.

    Use this dependency when the endpoint requires database access.
    Raises HTTPException 503 if database is not available.

    Returns:
        Client: Supabase client instance

    Raises:
        HTTPException: 503 if Supabase is not configured
    """
    from fastapi import HTTPException

    client = get_supabase_client()
    if client is None:
        raise HTTPException(
            status_code=503,
            detail="Database not available. Supabase credentials not configured.",
        )
    return client


# =============================================================================
# Repository Providers
# =============================================================================


def get_exercise_catalog_repo(
    client: Client = Depends(get_supabase_client_required),
    settings: Settings = Depends(get_settings),
) -> ExerciseCatalogRepository:
    """
    Get exercise catalog repository instance.

    Args:
        client: Supabase client (injected)
        settings: Application settings (injected)

    Returns:
        ExerciseCatalogRepository: Repository for exercise documents
    """
    return SupabaseExerciseCatalogRepository(client, table=settings.exercises_table)


@lru_cache
def get_draft_store() -> DraftStore:
    """
    Get draft store instance (cached).

    Drafts live for the lifetime of the process.

    Returns:
        DraftStore: In-memory draft store
    """
    return InMemoryDraftStore()


@lru_cache
def get_draft_cache() -> DraftCache:
    """
    Get the draft cache over the shared draft store (cached).

    Staged drafts must outlive a single request for the debounce window
    to apply, so one cache is kept per process.

    Returns:
        DraftCache: Debounced draft cache
    """
    settings = _get_settings()
    return DraftCache(get_draft_store(), debounce_seconds=settings.draft_debounce_seconds)


# =============================================================================
# Use Case Providers
# =============================================================================


def get_build_content_matrix_use_case(
    catalog_repo: ExerciseCatalogRepository = Depends(get_exercise_catalog_repo),
    settings: Settings = Depends(get_settings),
) -> BuildContentMatrixUseCase:
    """Get BuildContentMatrixUseCase with injected dependencies."""
    return BuildContentMatrixUseCase(
        catalog_repo=catalog_repo,
        language=settings.canonical_language,
    )


def get_update_method_workflow_use_case(
    catalog_repo: ExerciseCatalogRepository = Depends(get_exercise_catalog_repo),
    settings: Settings = Depends(get_settings),
) -> UpdateMethodWorkflowUseCase:
    """
    Get UpdateMethodWorkflowUseCase with injected dependencies.

    Strict step ordering follows ``settings.enforce_workflow_order``.
    """
    return UpdateMethodWorkflowUseCase(
        catalog_repo=catalog_repo,
        enforce_order=settings.enforce_workflow_order,
        language=settings.canonical_language,
    )


def get_resolve_execution_method_use_case(
    catalog_repo: ExerciseCatalogRepository = Depends(get_exercise_catalog_repo),
    settings: Settings = Depends(get_settings),
) -> ResolveExecutionMethodUseCase:
    """Get ResolveExecutionMethodUseCase with injected dependencies."""
    return ResolveExecutionMethodUseCase(
        catalog_repo=catalog_repo,
        language=settings.canonical_language,
    )


def get_save_exercise_use_case(
    catalog_repo: ExerciseCatalogRepository = Depends(get_exercise_catalog_repo),
    settings: Settings = Depends(get_settings),
) -> SaveExerciseUseCase:
    """
    Get SaveExerciseUseCase with injected dependencies.

    Localized objects written where a string belongs collapse to
    ``settings.canonical_language``.
    """
    return SaveExerciseUseCase(
        catalog_repo=catalog_repo,
        language=settings.canonical_language,
    )


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    # Settings
    "get_settings",
    # Database
    "get_supabase_client",
    "get_supabase_client_required",
    # Repositories
    "get_exercise_catalog_repo",
    "get_draft_store",
    "get_draft_cache",
    # Use cases
    "get_build_content_matrix_use_case",
    "get_update_method_workflow_use_case",
    "get_resolve_execution_method_use_case",
    "get_save_exercise_use_case",
]

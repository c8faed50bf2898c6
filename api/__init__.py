"""
API package for the exercise catalog content engine.

This package contains:
- deps.py: FastAPI dependency providers for DI
- errors.py: Use case error types mapped to HTTP errors
- routers/: API route handlers
- schemas/: Request and response models
"""

# Re-export dependency providers for convenient access
from api.deps import (
    get_settings,
    get_supabase_client,
    get_supabase_client_required,
    get_exercise_catalog_repo,
    get_draft_store,
    get_draft_cache,
)

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
]

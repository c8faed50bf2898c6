"""
Router package for the exercise catalog API.

This package contains all API routers organized by domain:
- health: Health check endpoints
- content: Production dashboard (content matrix, task queues, Smart Swap,
  batch workflow updates)
- exercises: Execution method resolution, workflow updates, exercise edits
  and editor drafts
"""

from api.routers.health import router as health_router
from api.routers.content import router as content_router
from api.routers.exercises import router as exercises_router

__all__ = [
    "health_router",
    "content_router",
    "exercises_router",
]

"""
FastAPI API routes and endpoints.

- routes.py: POST /route, GET /health
- dependencies.py: Singletons for settings, token cache, orchestrator
- models.py: API-specific request/response models
- error_handlers.py: Exception handlers for structured error responses
- middleware.py: Request id tracing
"""

from luis_router.api import dependencies, error_handlers, models
from luis_router.api.routes import router

__all__ = [
    "router",
    "dependencies",
    "error_handlers",
    "models",
]

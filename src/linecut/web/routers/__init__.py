"""API routers for the REST API."""

from linecut.web.routers.optimize import router as optimize_router
from linecut.web.routers.validate import router as validate_router

__all__ = [
    "optimize_router",
    "validate_router",
]

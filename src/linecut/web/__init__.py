"""FastAPI REST API for cutlist optimization.

Usage:
    uvicorn linecut.web:app --reload
"""

from linecut.web.app import app, create_app

__all__ = ["app", "create_app"]

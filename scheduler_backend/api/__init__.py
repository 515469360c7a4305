"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from scheduler_backend.api import app

    uvicorn scheduler_backend.api:app --reload
"""

from scheduler_backend.api.app import app, create_app

__all__ = ["app", "create_app"]

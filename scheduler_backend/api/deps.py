"""FastAPI dependencies shared by the routers.

The store handle and settings live on ``app.state``; they are created once
by the application factory / lifespan and read by every request.
"""

from __future__ import annotations

from fastapi import HTTPException, Request

from scheduler_backend.config import Settings
from scheduler_backend.store import StoreNotConfiguredError, TableStore


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> TableStore:
    """Return the shared store, or fail with a configuration error."""
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise StoreNotConfiguredError()
    return store


# Path segments owned by fixed routes; never addressable as tables
RESERVED_RESOURCES = frozenset({"ai", "hello"})


def _check_resource(resource: str, request: Request) -> str:
    if resource in RESERVED_RESOURCES:
        raise HTTPException(status_code=404, detail="Not found")
    if not get_settings(request).resource_allowed(resource):
        raise HTTPException(status_code=400, detail=f"Unknown resource: {resource}")
    return resource


def allowed_resource(resource: str, request: Request) -> str:
    """Check the ``{resource}`` path segment against the allow-list."""
    return _check_resource(resource, request)


def shifts_allowed(request: Request) -> str:
    """Apply the allow-list to the fixed ``shifts`` week route."""
    return _check_resource("shifts", request)

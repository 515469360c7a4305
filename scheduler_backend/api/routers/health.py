"""Liveness endpoints.  None of these touch the store.

Routes
------
GET /healthz     ``{"ok": true}``
GET /            Plain-text banner
GET /api/hello   Greeting for frontend smoke tests (optional, see ``ENABLE_HELLO``)
"""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter()
hello_router = APIRouter()


@router.get("/healthz")
def healthz() -> dict[str, bool]:
    return {"ok": True}


@router.get("/", response_class=PlainTextResponse)
def root() -> str:
    return "Scheduler backend is running"


@hello_router.get("/api/hello")
def hello() -> dict[str, str]:
    """Simple endpoint a frontend can call to confirm it reaches the API."""
    return {"message": "Hello from the scheduler backend"}

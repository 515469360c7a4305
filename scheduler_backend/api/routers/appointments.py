"""Legacy fixed-resource appointment endpoints.

Routes
------
GET  /api/appointments    All appointments, earliest ``start_time`` first
POST /api/appointments    Create one; ``title``, ``start_time`` and
                          ``end_time`` are required and the only fields kept

Mounted ahead of the generic table proxy when
``ENABLE_LEGACY_APPOINTMENTS`` is on, so these take precedence over
``/api/{resource}`` for the ``appointments`` table.
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, HTTPException

from scheduler_backend.api.deps import get_store
from scheduler_backend.store import TableStore

router = APIRouter()

TABLE = "appointments"
REQUIRED_FIELDS = ("title", "start_time", "end_time")


@router.get("", response_model=list[dict[str, Any]])
async def list_appointments(store: TableStore = Depends(get_store)) -> list[dict[str, Any]]:
    return await store.select(TABLE, order_by="start_time", ascending=True)


@router.post("", status_code=201, response_model=dict[str, Any])
async def create_appointment(
    payload: Optional[dict[str, Any]] = Body(default=None),
    store: TableStore = Depends(get_store),
) -> dict[str, Any]:
    """Create an appointment from the three required fields."""
    payload = payload or {}
    if not all(payload.get(name) for name in REQUIRED_FIELDS):
        raise HTTPException(
            status_code=400,
            detail=f"Missing required fields: {', '.join(REQUIRED_FIELDS)}",
        )
    record = {name: payload[name] for name in REQUIRED_FIELDS}
    return await store.insert(TABLE, record)

"""Generic table-proxy endpoints.

One set of handlers serves every resource: the ``{resource}`` path segment
names the backend table.  It is checked against ``ALLOWED_RESOURCES``
before any store call.

Routes
------
GET    /api/shifts/week/{start_date}    Shifts dated start_date .. start_date+6
GET    /api/{resource}                  All rows of a table
GET    /api/{resource}/{record_id}      One row by primary key
POST   /api/{resource}                  Insert one row
PUT    /api/{resource}/{record_id}      Update one row
DELETE /api/{resource}/{record_id}      Delete one row
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Response

from scheduler_backend.api.deps import allowed_resource, get_store, shifts_allowed
from scheduler_backend.store import TableStore

router = APIRouter()

_RECORD_NOT_FOUND = "Record not found"


@router.get("/shifts/week/{start_date}", response_model=list[dict[str, Any]])
async def shifts_for_week(
    start_date: str,
    table: str = Depends(shifts_allowed),
    store: TableStore = Depends(get_store),
) -> list[dict[str, Any]]:
    """Return shifts whose ``date`` falls in the seven days from *start_date*."""
    try:
        start = datetime.strptime(start_date, "%Y-%m-%d").date()
    except ValueError:
        raise HTTPException(
            status_code=400, detail=f"Invalid start date {start_date!r}; expected YYYY-MM-DD"
        ) from None
    end = start + timedelta(days=6)
    return await store.select_range(table, "date", gte=start.isoformat(), lte=end.isoformat())


@router.get("/{resource}", response_model=list[dict[str, Any]])
async def list_records(
    resource: str = Depends(allowed_resource),
    store: TableStore = Depends(get_store),
) -> list[dict[str, Any]]:
    return await store.select(resource)


@router.get("/{resource}/{record_id}", response_model=dict[str, Any])
async def get_record(
    record_id: str,
    resource: str = Depends(allowed_resource),
    store: TableStore = Depends(get_store),
) -> dict[str, Any]:
    record = await store.select_one(resource, record_id)
    if record is None:
        raise HTTPException(status_code=404, detail=_RECORD_NOT_FOUND)
    return record


@router.post("/{resource}", status_code=201, response_model=dict[str, Any])
async def create_record(
    body: dict[str, Any] = Body(...),
    resource: str = Depends(allowed_resource),
    store: TableStore = Depends(get_store),
) -> dict[str, Any]:
    """Insert *body* as-is and return the row the store echoes back."""
    return await store.insert(resource, body)


@router.put("/{resource}/{record_id}", response_model=dict[str, Any])
async def update_record(
    record_id: str,
    body: dict[str, Any] = Body(...),
    resource: str = Depends(allowed_resource),
    store: TableStore = Depends(get_store),
) -> dict[str, Any]:
    if not body:
        raise HTTPException(status_code=400, detail="No fields provided to update.")
    rows = await store.update(resource, record_id, body)
    if not rows:
        raise HTTPException(status_code=404, detail=_RECORD_NOT_FOUND)
    return rows[0]


@router.delete("/{resource}/{record_id}", status_code=204)
async def delete_record(
    record_id: str,
    resource: str = Depends(allowed_resource),
    store: TableStore = Depends(get_store),
) -> Response:
    rows = await store.delete(resource, record_id)
    if not rows:
        raise HTTPException(status_code=404, detail=_RECORD_NOT_FOUND)
    return Response(status_code=204)

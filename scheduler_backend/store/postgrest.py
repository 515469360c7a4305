"""Supabase-hosted store, spoken to over its PostgREST HTTP API.

Every method is exactly one HTTP round trip::

    GET    /rest/v1/<table>?select=*&order=<col>.asc
    GET    /rest/v1/<table>?select=*&<col>=gte.<a>&<col>=lte.<b>
    POST   /rest/v1/<table>                 (Prefer: return=representation)
    PATCH  /rest/v1/<table>?id=eq.<id>      (Prefer: return=representation)
    DELETE /rest/v1/<table>?id=eq.<id>      (Prefer: return=representation)

Any non-2xx response, or any transport failure, raises
:class:`~scheduler_backend.store.errors.StoreError` carrying the backend's
own ``message`` text.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from scheduler_backend.store.base import Record, TableStore
from scheduler_backend.store.errors import StoreError

logger = logging.getLogger(__name__)

_RETURN_ROWS = {"Prefer": "return=representation"}


def _error_message(response: httpx.Response) -> str:
    """Pull the human-readable message out of a PostgREST error body."""
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(body, dict):
        for key in ("message", "error_description", "error", "msg"):
            if body.get(key):
                return str(body[key])
    return response.text or f"HTTP {response.status_code}"


class PostgrestStore(TableStore):
    """Async client for ``{base_url}/rest/v1``.

    Args:
        base_url: Project URL, e.g. ``https://xyz.supabase.co``.
        api_key: Service or anon key; sent as ``apikey`` and bearer token.
        timeout: Transport timeout in seconds.
        transport: Optional custom httpx transport (used by tests).
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=f"{base_url.rstrip('/')}/rest/v1",
            headers={
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
                "Accept": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    async def _request(
        self,
        method: str,
        table: str,
        *,
        params: list[tuple[str, str]] | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> list[Record]:
        logger.debug("%s /%s params=%s", method, table, params)
        try:
            response = await self._client.request(
                method, f"/{quote(table, safe='')}", params=params, json=json, headers=headers
            )
        except httpx.HTTPError as exc:
            raise StoreError(str(exc) or exc.__class__.__name__) from exc

        if response.is_error:
            raise StoreError(_error_message(response), status_code=response.status_code)

        if not response.content:
            return []
        try:
            data = response.json()
        except ValueError as exc:
            raise StoreError(
                f"Non-JSON response from store (HTTP {response.status_code})",
                status_code=response.status_code,
            ) from exc
        if isinstance(data, dict):
            return [data]
        return data

    async def select(
        self,
        table: str,
        *,
        order_by: str | None = None,
        ascending: bool = True,
    ) -> list[Record]:
        params = [("select", "*")]
        if order_by:
            params.append(("order", f"{order_by}.{'asc' if ascending else 'desc'}"))
        return await self._request("GET", table, params=params)

    async def select_range(
        self, table: str, column: str, *, gte: str, lte: str
    ) -> list[Record]:
        params = [
            ("select", "*"),
            (column, f"gte.{gte}"),
            (column, f"lte.{lte}"),
        ]
        return await self._request("GET", table, params=params)

    async def select_one(self, table: str, record_id: str) -> Record | None:
        rows = await self._request(
            "GET", table, params=[("select", "*"), ("id", f"eq.{record_id}")]
        )
        return rows[0] if rows else None

    async def insert(self, table: str, record: Record) -> Record:
        rows = await self._request(
            "POST", table, params=[("select", "*")], json=[record], headers=_RETURN_ROWS
        )
        if not rows:
            raise StoreError(f"Insert into {table!r} returned no rows")
        return rows[0]

    async def update(self, table: str, record_id: str, changes: Record) -> list[Record]:
        return await self._request(
            "PATCH",
            table,
            params=[("id", f"eq.{record_id}"), ("select", "*")],
            json=changes,
            headers=_RETURN_ROWS,
        )

    async def delete(self, table: str, record_id: str) -> list[Record]:
        return await self._request(
            "DELETE",
            table,
            params=[("id", f"eq.{record_id}"), ("select", "*")],
            headers=_RETURN_ROWS,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

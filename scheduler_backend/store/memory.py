"""In-process store for local development and tests.

Tables spring into existence on first write.  Ids are assigned from a
per-table counter, the way a serial primary key would be.
"""

from __future__ import annotations

import asyncio
import copy
from collections import defaultdict
from typing import Any

from scheduler_backend.store.base import Record, TableStore


def _sort_key(value: Any) -> tuple[bool, str]:
    # Missing values sort last, everything else by its string form
    return (value is None, "" if value is None else str(value))


class MemoryStore(TableStore):
    """Dict-of-lists store guarded by one :class:`asyncio.Lock`.

    Range bounds are compared as strings, which matches calendar order for
    ISO ``YYYY-MM-DD`` dates.
    """

    def __init__(self, seed: dict[str, list[Record]] | None = None) -> None:
        self._tables: dict[str, list[Record]] = defaultdict(list)
        self._next_id: dict[str, int] = defaultdict(lambda: 1)
        self._lock = asyncio.Lock()
        for table, rows in (seed or {}).items():
            for row in rows:
                self._insert_locked(table, row)

    def _insert_locked(self, table: str, record: Record) -> Record:
        row = copy.deepcopy(record)
        if row.get("id") is None:
            row["id"] = self._next_id[table]
        if isinstance(row["id"], int):
            self._next_id[table] = max(self._next_id[table], row["id"] + 1)
        self._tables[table].append(row)
        return copy.deepcopy(row)

    def _find(self, table: str, record_id: str) -> list[Record]:
        return [r for r in self._tables.get(table, []) if str(r.get("id")) == str(record_id)]

    async def select(
        self,
        table: str,
        *,
        order_by: str | None = None,
        ascending: bool = True,
    ) -> list[Record]:
        async with self._lock:
            rows = copy.deepcopy(self._tables.get(table, []))
        if order_by:
            rows.sort(key=lambda r: _sort_key(r.get(order_by)), reverse=not ascending)
        return rows

    async def select_range(
        self, table: str, column: str, *, gte: str, lte: str
    ) -> list[Record]:
        async with self._lock:
            rows = copy.deepcopy(self._tables.get(table, []))
        return [
            r for r in rows
            if r.get(column) is not None and gte <= str(r[column]) <= lte
        ]

    async def select_one(self, table: str, record_id: str) -> Record | None:
        async with self._lock:
            matches = self._find(table, record_id)
            return copy.deepcopy(matches[0]) if matches else None

    async def insert(self, table: str, record: Record) -> Record:
        async with self._lock:
            return self._insert_locked(table, record)

    async def update(self, table: str, record_id: str, changes: Record) -> list[Record]:
        async with self._lock:
            touched = self._find(table, record_id)
            for row in touched:
                row.update({k: v for k, v in changes.items() if k != "id"})
            return copy.deepcopy(touched)

    async def delete(self, table: str, record_id: str) -> list[Record]:
        async with self._lock:
            removed = self._find(table, record_id)
            if removed:
                self._tables[table] = [
                    r for r in self._tables[table] if str(r.get("id")) != str(record_id)
                ]
            return copy.deepcopy(removed)

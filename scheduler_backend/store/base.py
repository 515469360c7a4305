"""Abstract interface every backend store implements.

A store addresses *tables* by name and exchanges records as plain dicts.
It never validates record shape; that is the backend's business.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

Record = dict[str, Any]


class TableStore(ABC):
    """One long-lived handle shared by every request."""

    @abstractmethod
    async def select(
        self,
        table: str,
        *,
        order_by: str | None = None,
        ascending: bool = True,
    ) -> list[Record]:
        """Return every row of *table*, optionally ordered by one column."""

    @abstractmethod
    async def select_range(
        self, table: str, column: str, *, gte: str, lte: str
    ) -> list[Record]:
        """Return rows whose *column* lies in ``[gte, lte]`` inclusive."""

    @abstractmethod
    async def select_one(self, table: str, record_id: str) -> Record | None:
        """Return the row with primary key *record_id*, or ``None``."""

    @abstractmethod
    async def insert(self, table: str, record: Record) -> Record:
        """Insert *record* and return it as stored (generated fields included)."""

    @abstractmethod
    async def update(self, table: str, record_id: str, changes: Record) -> list[Record]:
        """Apply *changes* to the row with *record_id*; return the rows touched."""

    @abstractmethod
    async def delete(self, table: str, record_id: str) -> list[Record]:
        """Delete the row with *record_id*; return the rows removed."""

    async def aclose(self) -> None:
        """Release any network resources held by the store."""

"""Backend store layer.

Public re-exports so callers can write::

    from scheduler_backend.store import build_store, StoreError
"""

from __future__ import annotations

from scheduler_backend.config import Settings
from scheduler_backend.store.base import Record, TableStore
from scheduler_backend.store.errors import StoreError, StoreNotConfiguredError
from scheduler_backend.store.memory import MemoryStore
from scheduler_backend.store.postgrest import PostgrestStore


def build_store(settings: Settings) -> TableStore | None:
    """Construct the store selected by ``settings.store_backend``.

    Returns ``None`` when the hosted store is selected but its URL or key is
    missing; store-backed routes then answer with a configuration error.

    Raises:
        ValueError: For an unrecognised ``STORE_BACKEND``.
    """
    if settings.store_backend == "memory":
        return MemoryStore()
    if settings.store_backend != "supabase":
        raise ValueError(
            f"Unknown STORE_BACKEND {settings.store_backend!r}. Use: supabase | memory"
        )
    if not settings.store_configured:
        return None
    return PostgrestStore(
        settings.supabase_url,
        settings.supabase_key,
        timeout=settings.store_timeout,
    )


__all__ = [
    "build_store",
    "Record",
    "TableStore",
    "MemoryStore",
    "PostgrestStore",
    "StoreError",
    "StoreNotConfiguredError",
]

"""Exceptions raised by the store layer.

The API layer translates these once, at the edge, into JSON error bodies.
"""

from __future__ import annotations


class StoreError(Exception):
    """The backend store rejected a call or could not be reached.

    ``message`` is the backend-provided text and is surfaced to the caller
    verbatim.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class StoreNotConfiguredError(StoreError):
    """No store client is available (URL or key missing)."""

    def __init__(self) -> None:
        super().__init__("Supabase not configured")

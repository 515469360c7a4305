"""Exception handlers: every error leaves the gateway as ``{"error": msg}``."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from scheduler_backend.ai import AIConfigError, AIGenerationError
from scheduler_backend.store import StoreError, StoreNotConfiguredError

logger = logging.getLogger(__name__)

NOT_FOUND = {"error": "Not found"}


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Unrouted paths and unsupported methods both read as "no such route"
    if exc.status_code == 405 or (exc.status_code == 404 and exc.detail == "Not Found"):
        return JSONResponse(status_code=404, content=NOT_FOUND)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    if errors and errors[0].get("type") == "missing":
        return _error(400, "Request body must be a JSON object")
    detail = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    return _error(400, f"Invalid request body: {detail}")


async def store_not_configured_handler(
    request: Request, exc: StoreNotConfiguredError
) -> JSONResponse:
    return _error(500, exc.message)


async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    logger.error("Supabase error on %s %s: %s", request.method, request.url.path, exc.message)
    return _error(500, exc.message)


async def ai_config_error_handler(request: Request, exc: AIConfigError) -> JSONResponse:
    return _error(500, str(exc))


async def ai_generation_error_handler(request: Request, exc: AIGenerationError) -> JSONResponse:
    logger.error("AI route error: %s", exc, exc_info=exc)
    return _error(500, "AI generation failed")


def register_exception_handlers(app: FastAPI) -> None:
    """Attach every handler above to *app*."""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StoreNotConfiguredError, store_not_configured_handler)
    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(AIConfigError, ai_config_error_handler)
    app.add_exception_handler(AIGenerationError, ai_generation_error_handler)

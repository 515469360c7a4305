"""FastAPI application factory.

Lifespan
--------
On startup the app builds a single store client (shared across all
requests via ``request.app.state.store``) unless one was injected into
:func:`create_app`.  On shutdown it closes the client it built.

Routers
-------
Fixed routes are mounted before the generic table proxy so they win:

    /healthz, /           liveness
    /api/hello            greeting (ENABLE_HELLO)
    /api/ai               generative-text relay (ENABLE_AI_RELAY)
    /api/appointments     legacy validated endpoints (ENABLE_LEGACY_APPOINTMENTS)
    /api/...              generic table proxy
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from scheduler_backend.api.errors import register_exception_handlers
from scheduler_backend.api.routers import ai as ai_router
from scheduler_backend.api.routers import appointments as appointments_router
from scheduler_backend.api.routers import health as health_router
from scheduler_backend.api.routers import tables as tables_router
from scheduler_backend.config import Settings, settings as default_settings
from scheduler_backend.store import TableStore, build_store

logger = logging.getLogger(__name__)

_QUIET_PATHS = {"/healthz"}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build the store on startup (if none was injected) and close it on shutdown."""
    owned: Optional[TableStore] = None
    if app.state.store is None:
        owned = build_store(app.state.settings)
        app.state.store = owned
        if owned is None:
            logger.warning("Supabase not configured; store-backed routes will return 500")
    try:
        yield
    finally:
        if owned is not None:
            await owned.aclose()
            app.state.store = None


def create_app(
    cfg: Optional[Settings] = None,
    store: Optional[TableStore] = None,
) -> FastAPI:
    """Return a fully-configured FastAPI application instance.

    Args:
        cfg: Settings to run with.  Defaults to the module-level ``settings``.
        store: Pre-built store to use instead of building one from *cfg*.
            The caller keeps ownership and must close it.
    """
    cfg = cfg or default_settings
    app = FastAPI(
        title="Studio Scheduler API",
        description=(
            "Generic CRUD gateway over the scheduler's Supabase tables "
            "(shifts, employees, appointments, ...) plus a generative-text relay."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = cfg
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_logging_middleware(request: Request, call_next):
        """Log every request with its status and timing."""
        start_time = time.time()
        response = await call_next(request)
        if request.url.path not in _QUIET_PATHS:
            logger.info(
                "%s %s -> %s (%.3fs)",
                request.method,
                request.url.path,
                response.status_code,
                time.time() - start_time,
            )
        return response

    register_exception_handlers(app)

    app.include_router(health_router.router, tags=["health"])
    if cfg.enable_hello:
        app.include_router(health_router.hello_router, tags=["health"])
    if cfg.enable_ai_relay:
        app.include_router(ai_router.router, tags=["ai"])
    if cfg.enable_legacy_appointments:
        app.include_router(
            appointments_router.router, prefix="/api/appointments", tags=["appointments"]
        )
    app.include_router(tables_router.router, prefix="/api", tags=["tables"])

    return app


# Module-level instance used by uvicorn:
#   uvicorn scheduler_backend.api.app:app --reload
app = create_app()

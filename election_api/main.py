"""FastAPI application entry point.

Configures CORS, structured logging, error handlers, the storage lifespan,
and router registration.

The storage handle is opened inside the lifespan before the app starts
serving; if it cannot be opened the error propagates, startup aborts and
the server process exits non-zero.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from election_api.core.config import Settings, settings
from election_api.core.errors import register_error_handlers
from election_api.core.logging import setup_logging
from election_api.db.storage import Storage
from election_api.routers import api, health

logger = logging.getLogger(__name__)


def _parse_origins(raw: str) -> list[str]:
    raw = raw.strip()
    if raw == "*":
        return ["*"]
    return [o.strip() for o in raw.split(",") if o.strip()]


def create_app(
    app_settings: Settings | None = None,
    storage: Storage | None = None,
) -> FastAPI:
    """Build the application.

    *storage* may be supplied to inject a pre-built handle; otherwise one is
    constructed from ``DATABASE_PATH``.  Either way it is opened at startup
    and closed at shutdown.
    """
    cfg = app_settings or settings
    store = storage or Storage(cfg.DATABASE_PATH, echo=cfg.DATABASE_ECHO)

    @asynccontextmanager
    async def lifespan(application: FastAPI) -> AsyncIterator[None]:
        """Application lifespan: open storage, serve, close storage."""
        setup_logging(cfg.LOG_LEVEL)
        logger.info("Application starting up")
        store.open()
        application.state.storage = store
        try:
            yield
        finally:
            store.close()
            logger.info("Application shutting down")

    application = FastAPI(
        title="Election API",
        description="REST API for election candidates and parties",
        version="0.1.0",
        lifespan=lifespan,
    )

    # -----------------------------------------------------------------------
    # CORS Configuration
    # -----------------------------------------------------------------------
    application.add_middleware(
        CORSMiddleware,
        allow_origins=_parse_origins(cfg.ALLOWED_ORIGINS),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(application)

    # -----------------------------------------------------------------------
    # Router Registration
    # -----------------------------------------------------------------------
    application.include_router(health.router, tags=["Health"])
    application.include_router(api.router, prefix=cfg.API_PREFIX)

    return application


app = create_app()


def run() -> None:
    """Console-script entry point: serve ``app`` with uvicorn."""
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from relay_service.api.deps import build_relay
from relay_service.api.middleware.correlation_id import CorrelationIdMiddleware
from relay_service.api.v1.routers import (
    accounts,
    health,
    messages,
    presence,
    ws,
)
from relay_service.application.exceptions import (
    ConflictError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from relay_service.config import settings
from relay_service.infrastructure.db.session import create_schema, engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup / shutdown lifecycle."""
    if app.state.create_schema:
        await create_schema()
        logger.info("Database schema ensured")

    yield

    # Presence is process-local; clients re-announce after a restart.
    logger.info("Shutting down with %d users online", len(app.state.relay.registry))
    await engine.dispose()


def create_app(*, create_tables: bool = True) -> FastAPI:
    app = FastAPI(
        title="Direct Message Relay",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.relay = build_relay()
    app.state.create_schema = create_tables

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(CorrelationIdMiddleware)

    _register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(accounts.router)
    app.include_router(messages.router)
    app.include_router(presence.router)
    app.include_router(ws.router)

    return app


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(NotFoundError)
    async def _not_found(_req: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": exc.detail})

    @app.exception_handler(ConflictError)
    async def _conflict(_req: Request, exc: ConflictError) -> JSONResponse:
        return JSONResponse(status_code=409, content={"detail": exc.detail})

    @app.exception_handler(ValidationError)
    async def _validation(_req: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": exc.detail})

    @app.exception_handler(PersistenceError)
    async def _persistence(_req: Request, exc: PersistenceError) -> JSONResponse:
        return JSONResponse(status_code=500, content={"detail": exc.detail})

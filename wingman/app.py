"""FastAPI application exposing the Wingman collections."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from wingman.core.config import Settings, get_settings
from wingman.core.log import configure_logging
from wingman.domain.records import InvalidRecordError
from wingman.repositories.errors import CascadeError, DecodeError, NotFoundError, PersistenceError
from wingman.repositories.storage import Storage
from wingman.routers import exercises as exercises_router
from wingman.routers import journal as journal_router
from wingman.routers import journeys as journeys_router
from wingman.services.catalog_service import CatalogService

logger = logging.getLogger(__name__)


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(NotFoundError)
    async def _not_found(request: Request, exc: NotFoundError):
        return JSONResponse({"detail": str(exc)}, status_code=404)

    @app.exception_handler(InvalidRecordError)
    async def _invalid(request: Request, exc: InvalidRecordError):
        return JSONResponse({"detail": str(exc)}, status_code=422)

    @app.exception_handler(DecodeError)
    async def _corrupt(request: Request, exc: DecodeError):
        logger.error("Stored data is corrupt: %s", exc)
        return JSONResponse({"detail": "Stored data is corrupt"}, status_code=500)

    @app.exception_handler(PersistenceError)
    async def _write_failed(request: Request, exc: PersistenceError):
        body = {"detail": str(exc)}
        if isinstance(exc, CascadeError):
            body["failedSteps"] = exc.failed_steps
        return JSONResponse(body, status_code=503)


def create_app(storage: Storage | None = None, settings: Settings | None = None) -> FastAPI:
    """Factory compatible with uvicorn (``uvicorn wingman.app:create_app --factory``)."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.storage_backend == "sql" and storage is None:
            from wingman.db.create_tables import create_all

            create_all()
        if settings.seed_on_empty:
            await CatalogService(app.state.storage).seed_if_empty()
        yield

    app = FastAPI(title="Wingman API", lifespan=lifespan)
    app.state.storage = storage or Storage.from_settings(settings)
    app.state.settings = settings

    if settings.app_env != "prod":
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["http://localhost:8081", "http://127.0.0.1:8081", "http://localhost:19006"],
            allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            allow_headers=["*"],
        )

    _register_error_handlers(app)
    app.include_router(exercises_router.router)
    app.include_router(journal_router.router)
    app.include_router(journeys_router.router)
    return app

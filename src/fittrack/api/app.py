"""
fittrack.api.app

FastAPI app factory for the FitTrack service.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Initialize and dispose shared infrastructure (DB engine/session factory, coach client).
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from fittrack import __version__
from fittrack.api.routers.admin import router as admin_router
from fittrack.api.routers.calories import router as calories_router
from fittrack.api.routers.catalog import router as catalog_router
from fittrack.api.routers.coach import router as coach_router
from fittrack.api.routers.dev_auth import router as dev_auth_router
from fittrack.api.routers.health import router as health_router
from fittrack.api.routers.profiles import router as profiles_router
from fittrack.api.routers.progress import router as progress_router
from fittrack.api.routers.workouts import router as workouts_router
from fittrack.clients.gemini import GeminiClient, TextModel
from fittrack.db.init_db import init_db
from fittrack.db.session import create_engine, create_sessionmaker
from fittrack.observability.logging import configure_logging, get_logger
from fittrack.observability.middleware import RequestContextMiddleware
from fittrack.services.coach import CoachService
from fittrack.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings, coach_model: TextModel | None = None) -> FastAPI:
    configure_logging(
        service_name=settings.service_name,
        level=settings.log_level,
        json_logs=settings.env != "dev",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        if settings.env in ("dev", "test"):
            # Dev/test convenience; production tables and RLS policies live in the hosted project.
            await init_db(engine)
        try:
            yield
        finally:
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="FitTrack API",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(RequestContextMiddleware)
    app.include_router(health_router, tags=["health"])
    app.include_router(dev_auth_router)
    app.include_router(profiles_router)
    app.include_router(catalog_router)
    app.include_router(workouts_router)
    app.include_router(progress_router)
    app.include_router(calories_router)
    app.include_router(coach_router)
    app.include_router(admin_router)

    if coach_model is None and settings.gemini_api_key:
        coach_model = GeminiClient(api_key=settings.gemini_api_key, model=settings.gemini_model)
    if coach_model is None:
        log.warning("coach_disabled", reason="missing GEMINI api key")
    app.state.coach = CoachService(model=coach_model)

    return app


# --- Module Notes -----------------------------------------------------------
# `coach_model` lets tests inject a fake language model without touching the network.

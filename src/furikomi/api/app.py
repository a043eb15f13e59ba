"""FastAPI application with lifespan and router mounting."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from furikomi.api.routes import health, zengin
from furikomi.core.config import AppSettings
from furikomi.core.log_config import configure_logging
from furikomi.core.protocols import IReferenceData
from furikomi.persistence import create_reference_data

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Wire settings and the reference-data source onto app state."""
    settings: AppSettings = app.state.settings
    configure_logging(settings.log_level)
    if getattr(app.state, "reference_data", None) is None:
        app.state.reference_data = create_reference_data(settings)
    logger.info(
        "Furikomi started (environment=%s, reference source=%s)",
        settings.environment, settings.reference.source,
    )
    yield


def create_app(
    settings: AppSettings | None = None,
    reference_data: IReferenceData | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    ``reference_data`` overrides the source built from settings, e.g. with
    in-memory fixtures.
    """
    settings = settings or AppSettings()
    app = FastAPI(
        title="Furikomi Zengin Validation Service",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.reference_data = reference_data

    if settings.api.cors_allow_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_allow_origins,
            allow_methods=["GET", "OPTIONS"],
            allow_headers=["Content-Type"],
        )

    app.include_router(health.router)
    app.include_router(zengin.router)
    return app

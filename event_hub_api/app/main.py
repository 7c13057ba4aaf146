"""
Main entrypoint for the Event Hub API.

This module assembles the FastAPI application, sets up logging and
includes versioned routers.  ``create_app`` builds a fully configured
app from a ``Settings`` object; the module‑level ``app`` is created
from environment variables so that ASGI servers can discover it::

    uvicorn event_hub_api.app.main:app --reload

The settings and the database handle are stored on ``app.state`` and
reach request handlers through the providers in ``core.dependencies``.
"""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.v1.router import router as v1_router
from .core.config import Settings
from .core.db import Database
from .core.errors import register_exception_handlers
from .core.logging_config import setup_logging

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use.  Read from the environment when omitted.

    Returns
    -------
    FastAPI
        A configured application; the schema is migrated on startup.
    """
    settings = settings or Settings.from_env()
    # Initialise logging before anything else so that the setup below
    # can already log.
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)
    app.state.settings = settings
    app.state.database = Database.from_settings(settings)

    register_exception_handlers(app, debug=settings.debug)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(v1_router, prefix="/api/v1")

    @app.get("/health", tags=["health"])
    async def health() -> dict:
        return {"status": "healthy"}

    @app.on_event("startup")
    async def startup_event() -> None:
        # Creates the database file on first run and brings the schema
        # up to date.
        app.state.database.init_db()
        logger.info("Database ready at %s", app.state.database.path)

    return app


app = create_app()

"""
Main entrypoint for the Subject Links API.

This module assembles the FastAPI application: it sets up logging,
selects the storage backend, registers error handlers, includes the
versioned router and, when a front-end directory is configured, serves
it as static files.  The ``create_app`` function builds and configures
the app, which is then instantiated at module import time as ``app``::

    uvicorn subject_links_api.app.main:app --reload

Settings are read from the environment unless a ``Settings`` instance
is passed to ``create_app`` (as the tests do).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from .api.v1.router import router as v1_router
from .core.config import Settings
from .core.errors import LinkServiceError
from .core.logging_config import setup_logging
from .core.subjects import SUBJECTS
from .services.link_service import LinkService
from .storage import create_backend


logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use.  Defaults to ``Settings.from_env()``.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or Settings.from_env()
    setup_logging(settings)

    # The backend is chosen here, once, and never changes for the
    # lifetime of the process.
    backend = create_backend(settings, SUBJECTS)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # Create the data file or apply migrations before serving.
        await backend.initialise()
        yield

    app = FastAPI(title=settings.project_name, version=settings.api_version, lifespan=lifespan)
    app.state.settings = settings
    app.state.link_service = LinkService(backend, SUBJECTS)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(LinkServiceError)
    async def link_service_error_handler(request: Request, exc: LinkServiceError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.debug("Rejected request body for %s: %s", request.url.path, exc.errors())
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": "Invalid request body"})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )

    # The front-end calls ``/api``; ``/api/v1`` is kept for clients that
    # address the versioned prefix explicitly.
    app.include_router(v1_router, prefix="/api")
    app.include_router(v1_router, prefix="/api/v1")

    # Mounted last so that it only receives paths no API route matched.
    if settings.static_dir:
        static_path = settings.resolve_path(settings.static_dir)
        if static_path.is_dir():
            app.mount("/", StaticFiles(directory=static_path, html=True), name="static")
        else:
            logger.warning("Static directory %s does not exist; front-end not served", static_path)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()

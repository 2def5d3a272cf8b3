"""
Main entrypoint for the Users API.

This module assembles the FastAPI application, sets up logging,
middleware and exception handlers, and includes the routers.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``.  Importing the app here
makes it easy to run with uvicorn or another ASGI server, e.g.::

    uvicorn users_api.app.main:app --reload

The storage backend is chosen from ``Settings`` during startup, so
importing this module never touches the database.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .api import health
from .api.v1.router import router as v1_router
from .core.config import Settings, get_settings
from .core.logging_config import setup_logging
from .core.middleware import install_middleware
from .repositories import UserRepository, create_repository
from .services.user_service import UserService

logger = logging.getLogger(__name__)

DESCRIPTION = """
REST API for managing users.

Users have a generated ``id``, a non-empty ``name``, an ``email``
containing ``@`` and a positive ``age``.  Updates are partial: only the
fields present in the request body are changed.
"""


def jsonable_errors(exc: RequestValidationError) -> list:
    """Reduce pydantic error dicts to their JSON‑safe parts."""
    return [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg", ""), "type": error.get("type", "")}
        for error in exc.errors()
    ]


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Answer malformed or schema‑invalid bodies with 400 instead of 422."""
    logger.debug("Rejected request body for %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "invalid request body", "errors": jsonable_errors(exc)},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected exceptions and answer with a generic 500."""
    logger.exception("Unexpected error handling %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "internal server error"},
    )


def create_app(
    settings: Optional[Settings] = None,
    repository: Optional[UserRepository] = None,
) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use.  Read from the environment when omitted.
    repository : Optional[UserRepository]
        Storage backend to inject.  When omitted the backend named by
        ``settings.storage_backend`` is created at startup; a SQLite
        database that cannot be opened aborts startup.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or get_settings()

    # Initialise logging before anything else so that startup messages
    # are formatted consistently.
    setup_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        backend = repository if repository is not None else create_repository(settings)
        app.state.user_service = UserService(backend)
        logger.info(
            "Starting %s %s with %s storage",
            settings.project_name,
            settings.api_version,
            type(backend).__name__,
        )
        yield
        logger.info("Shutting down %s", settings.project_name)

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        description=DESCRIPTION,
        contact={"name": "API Support", "email": "support@example.com"},
        license_info={
            "name": "Apache 2.0",
            "url": "http://www.apache.org/licenses/LICENSE-2.0.html",
        },
        docs_url="/swagger/index.html",
        openapi_url="/swagger/doc.json",
        redoc_url=None,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings

    install_middleware(app, settings)

    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(health.router, tags=["health"])
    # Mount versioned routes under /api/v1.  Additional versions can be
    # added later by including their respective routers with a
    # different prefix.
    app.include_router(v1_router, prefix="/api/v1")

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()

"""
HTTP middleware: CORS headers and an access log.
"""

import logging
import time
from typing import Awaitable, Callable

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings
from .logging_config import ACCESS_LOGGER

access_logger = logging.getLogger(ACCESS_LOGGER)

CORS_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
CORS_HEADERS = ["Content-Type", "Authorization"]


async def log_requests(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Log method, path, client address, status code and duration.

    A request whose handler raises is logged with status 500 before the
    exception continues to the server error handler.
    """
    start = time.perf_counter()
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        return response
    finally:
        duration_ms = (time.perf_counter() - start) * 1000
        path = request.url.path
        if request.url.query:
            path = f"{path}?{request.url.query}"
        client = request.client.host if request.client else "-"
        access_logger.info(
            "%s %s %s %d %.2fms",
            request.method,
            path,
            client,
            status_code,
            duration_ms,
        )


def install_middleware(app: FastAPI, settings: Settings) -> None:
    """Attach CORS and access logging.  Logging ends up outermost."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
    )
    app.middleware("http")(log_requests)

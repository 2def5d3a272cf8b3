"""
Health check endpoint.

Mounted at the application root (``/health``) rather than under the
versioned prefix so load balancers do not need to track API versions.
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter()


@router.get("/health", response_class=PlainTextResponse)
def health() -> str:
    """Return ``OK`` while the process is serving requests."""
    return "OK"

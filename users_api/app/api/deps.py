"""
Shared dependencies for route handlers.

The service is created once during application startup and stored on
``app.state``; handlers receive it through ``Depends``.
"""

from typing import Annotated

from fastapi import Depends, Request

from ..services.user_service import UserService


def get_user_service(request: Request) -> UserService:
    """Return the ``UserService`` built at startup."""
    return request.app.state.user_service


# Type alias for dependency injection
UserServiceDep = Annotated[UserService, Depends(get_user_service)]

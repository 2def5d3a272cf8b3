"""
User endpoints for API v1.

Each handler calls one ``UserService`` operation and translates domain
errors into HTTP responses: validation errors become 400, unknown ids
404 and storage failures 500.  Handlers are plain functions, so FastAPI
runs every request on its own worker thread.
"""

from typing import List

from fastapi import APIRouter, HTTPException, status

from users_api.app.api.deps import UserServiceDep
from users_api.app.core.errors import (
    StorageError,
    UserNotFoundError,
    UserValidationError,
)
from users_api.app.schemas.user import Message, User, UserCreate, UserUpdate

router = APIRouter()

ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"description": "Invalid payload"},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"description": "Storage failure"},
}
NOT_FOUND_RESPONSE = {status.HTTP_404_NOT_FOUND: {"description": "User not found"}}


@router.post(
    "",
    response_model=User,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
)
def create_user(user_in: UserCreate, service: UserServiceDep) -> User:
    """Create a new user.

    ``name`` must not be empty, ``email`` must contain ``@`` and ``age``
    must be greater than 0.  The response carries the generated ``id``.
    """
    try:
        return service.create_user(user_in)
    except UserValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except StorageError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)


@router.get("", response_model=List[User])
def list_users(service: UserServiceDep) -> List[User]:
    """Return all users, most recently created first."""
    try:
        return service.list_users()
    except StorageError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)


@router.get("/{user_id}", response_model=User, responses=NOT_FOUND_RESPONSE)
def get_user(user_id: str, service: UserServiceDep) -> User:
    try:
        return service.get_user_by_id(user_id)
    except UserNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except StorageError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)


@router.put(
    "/{user_id}",
    response_model=User,
    responses={**ERROR_RESPONSES, **NOT_FOUND_RESPONSE},
)
def update_user(user_id: str, user_in: UserUpdate, service: UserServiceDep) -> User:
    """Partially update a user.

    Only the fields present in the body are validated and overwritten;
    omitted fields keep their stored values.
    """
    try:
        return service.update_user(user_id, user_in)
    except UserNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except UserValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except StorageError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)


@router.delete("/{user_id}", response_model=Message, responses=NOT_FOUND_RESPONSE)
def delete_user(user_id: str, service: UserServiceDep) -> Message:
    try:
        service.delete_user(user_id)
    except UserNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except StorageError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)
    return Message(message="user deleted successfully")

"""
Business logic for users.

``UserService`` validates incoming payloads, turns them into ``User``
records and delegates persistence to the injected repository.  It keeps
no state of its own.

Validation always runs in the same order (name, email, age) and stops at
the first violation, both on creation and on partial updates.
"""

import logging
import uuid
from typing import Any, Dict, List

from ..core.errors import (
    InvalidAgeError,
    InvalidEmailError,
    InvalidNameError,
    StorageError,
)
from ..repositories.base import UserRepository
from ..schemas.user import User, UserCreate, UserUpdate

logger = logging.getLogger(__name__)


def is_valid_email(email: str) -> bool:
    """Basic email check: non‑empty and containing ``@``."""
    return email != "" and "@" in email


def validate_name(name: str) -> None:
    if name == "":
        raise InvalidNameError()


def validate_email(email: str) -> None:
    if not is_valid_email(email):
        raise InvalidEmailError()


def validate_age(age: int) -> None:
    if age <= 0:
        raise InvalidAgeError()


class UserService:
    """Validation and orchestration on top of a ``UserRepository``."""

    def __init__(self, repository: UserRepository):
        self.repository = repository

    def create_user(self, data: UserCreate) -> User:
        """Validate ``data`` and persist a new user with a generated id.

        Raises the ``UserValidationError`` subclass for the first invalid
        field, or ``StorageError`` if the record cannot be saved.
        """
        validate_name(data.name)
        validate_email(data.email)
        validate_age(data.age)

        user = User(id=str(uuid.uuid4()), name=data.name, email=data.email, age=data.age)
        try:
            self.repository.create(user)
        except StorageError as exc:
            raise StorageError(f"failed to create user: {exc}") from exc
        logger.info("Created user %s", user.id)
        return user

    def get_user_by_id(self, user_id: str) -> User:
        """Return the user or raise ``UserNotFoundError``."""
        logger.debug("Fetching user %s", user_id)
        try:
            return self.repository.get_by_id(user_id)
        except StorageError as exc:
            raise StorageError(f"failed to get user: {exc}") from exc

    def list_users(self) -> List[User]:
        """Return every user, newest first."""
        try:
            return self.repository.get_all()
        except StorageError as exc:
            raise StorageError(f"failed to list users: {exc}") from exc

    def update_user(self, user_id: str, data: UserUpdate) -> User:
        """Apply a partial update.

        The stored record is loaded first, so an unknown id is reported
        as ``UserNotFoundError`` even if the payload is invalid.  Every
        present field is then validated; only when all of them pass are
        they merged and written.  A payload with no fields changes
        nothing and returns the stored record.
        """
        existing = self.get_user_by_id(user_id)

        changes: Dict[str, Any] = {}
        if data.name is not None:
            validate_name(data.name)
            changes["name"] = data.name
        if data.email is not None:
            validate_email(data.email)
            changes["email"] = data.email
        if data.age is not None:
            validate_age(data.age)
            changes["age"] = data.age

        if not changes:
            logger.debug("Empty update for user %s", user_id)
            return existing

        updated = existing.model_copy(update=changes)
        try:
            self.repository.update(user_id, updated)
        except StorageError as exc:
            raise StorageError(f"failed to update user: {exc}") from exc
        logger.info("Updated user %s (%s)", user_id, ", ".join(sorted(changes)))
        return updated

    def delete_user(self, user_id: str) -> None:
        """Remove the user or raise ``UserNotFoundError``."""
        try:
            self.repository.delete(user_id)
        except StorageError as exc:
            raise StorageError(f"failed to delete user: {exc}") from exc
        logger.info("Deleted user %s", user_id)

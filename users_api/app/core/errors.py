"""
Domain errors raised by the service and repository layers.

The HTTP layer is the only place that turns these into status codes:
validation errors become 400, missing users 404 and everything else 500.
"""

from typing import Optional


class UserServiceError(Exception):
    """Base class for every error raised by the users domain."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UserValidationError(UserServiceError):
    """A user field failed validation.  Always correctable by the client."""

    field: Optional[str] = None
    default_message = "invalid user"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)


class InvalidNameError(UserValidationError):
    field = "name"
    default_message = "name must not be empty"


class InvalidEmailError(UserValidationError):
    field = "email"
    default_message = "invalid email"


class InvalidAgeError(UserValidationError):
    field = "age"
    default_message = "age must be greater than 0"


class UserNotFoundError(UserServiceError):
    """No user is stored under the requested id."""

    def __init__(self, user_id: str):
        super().__init__(f"user {user_id} not found")
        self.user_id = user_id


class StorageError(UserServiceError):
    """The storage backend failed.  Not retried."""

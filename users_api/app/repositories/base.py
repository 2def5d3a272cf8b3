"""
Storage contract shared by every user backend.
"""

from abc import ABC, abstractmethod
from typing import List

from ..schemas.user import User


class UserRepository(ABC):
    """Persistence for ``User`` records keyed by ``id``.

    Implementations raise ``UserNotFoundError`` when an id is absent and
    ``StorageError`` when the backend itself fails.  ``get_all`` returns
    records newest first.
    """

    @abstractmethod
    def create(self, user: User) -> None:
        """Insert a new record."""

    @abstractmethod
    def get_by_id(self, user_id: str) -> User:
        """Return the record stored under ``user_id``."""

    @abstractmethod
    def get_all(self) -> List[User]:
        """Return every record, most recently created first."""

    @abstractmethod
    def update(self, user_id: str, user: User) -> None:
        """Overwrite name, email and age of an existing record."""

    @abstractmethod
    def delete(self, user_id: str) -> None:
        """Remove an existing record."""

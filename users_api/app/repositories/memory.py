"""
In‑process user storage.

A single dict guarded by one reader/writer lock.  Lookups share the lock,
mutations take it exclusively.  Records are copied on the way in and on
the way out so no caller ever holds a reference into the dict.
"""

from typing import Dict, List

from ..core.errors import UserNotFoundError
from ..core.locks import ReadWriteLock
from ..schemas.user import User
from .base import UserRepository


class InMemoryUserRepository(UserRepository):
    """``UserRepository`` backed by a dict.  Data is lost on restart."""

    def __init__(self) -> None:
        self._users: Dict[str, User] = {}
        self._lock = ReadWriteLock()

    def create(self, user: User) -> None:
        with self._lock.write_locked():
            self._users[user.id] = user.model_copy()

    def get_by_id(self, user_id: str) -> User:
        with self._lock.read_locked():
            user = self._users.get(user_id)
            if user is None:
                raise UserNotFoundError(user_id)
            return user.model_copy()

    def get_all(self) -> List[User]:
        # Dicts keep insertion order, which is creation order here.
        with self._lock.read_locked():
            return [user.model_copy() for user in reversed(self._users.values())]

    def update(self, user_id: str, user: User) -> None:
        with self._lock.write_locked():
            if user_id not in self._users:
                raise UserNotFoundError(user_id)
            self._users[user_id] = user.model_copy(update={"id": user_id})

    def delete(self, user_id: str) -> None:
        with self._lock.write_locked():
            if user_id not in self._users:
                raise UserNotFoundError(user_id)
            del self._users[user_id]

"""
SQLite user storage.

All queries use parameterized statements to avoid SQL injection
vulnerabilities.  Every ``sqlite3.Error`` is re‑raised as
``StorageError`` with the failed action attached, so the service never
sees driver exceptions.
"""

import logging
import sqlite3
from contextlib import contextmanager
from typing import Iterator, List

from ..core.db import get_cursor, init_db
from ..core.errors import StorageError, UserNotFoundError
from ..schemas.user import User
from .base import UserRepository

logger = logging.getLogger(__name__)


@contextmanager
def _storage_errors(action: str) -> Iterator[None]:
    try:
        yield
    except sqlite3.Error as exc:
        logger.error("SQLite error while trying to %s: %s", action, exc)
        raise StorageError(f"failed to {action}: {exc}") from exc


def _row_to_user(row: sqlite3.Row) -> User:
    return User(id=row["id"], name=row["name"], email=row["email"], age=row["age"])


class SqliteUserRepository(UserRepository):
    """``UserRepository`` backed by the ``users`` table of a SQLite file.

    The schema is created when the repository is constructed; failing to
    open the database raises ``StorageError`` and should abort startup.
    """

    def __init__(self, db_path: str) -> None:
        self.db_path = db_path
        with _storage_errors("initialise database"):
            init_db(db_path)

    def create(self, user: User) -> None:
        with _storage_errors("create user"), get_cursor(self.db_path) as cursor:
            cursor.execute(
                "INSERT INTO users (id, name, email, age) VALUES (?, ?, ?, ?)",
                (user.id, user.name, user.email, user.age),
            )

    def get_by_id(self, user_id: str) -> User:
        with _storage_errors("get user"), get_cursor(self.db_path) as cursor:
            row = cursor.execute(
                "SELECT id, name, email, age FROM users WHERE id = ?",
                (user_id,),
            ).fetchone()
        if row is None:
            raise UserNotFoundError(user_id)
        return _row_to_user(row)

    def get_all(self) -> List[User]:
        # CURRENT_TIMESTAMP has one‑second resolution; rowid breaks ties.
        with _storage_errors("list users"), get_cursor(self.db_path) as cursor:
            rows = cursor.execute(
                "SELECT id, name, email, age FROM users ORDER BY created_at DESC, rowid DESC"
            ).fetchall()
        return [_row_to_user(row) for row in rows]

    def update(self, user_id: str, user: User) -> None:
        with _storage_errors("update user"), get_cursor(self.db_path) as cursor:
            cursor.execute(
                "UPDATE users SET name = ?, email = ?, age = ?, updated_at = CURRENT_TIMESTAMP "
                "WHERE id = ?",
                (user.name, user.email, user.age, user_id),
            )
            affected = cursor.rowcount
        if affected == 0:
            raise UserNotFoundError(user_id)

    def delete(self, user_id: str) -> None:
        with _storage_errors("delete user"), get_cursor(self.db_path) as cursor:
            cursor.execute("DELETE FROM users WHERE id = ?", (user_id,))
            affected = cursor.rowcount
        if affected == 0:
            raise UserNotFoundError(user_id)

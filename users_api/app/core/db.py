"""
SQLite database integration.

This module provides functions for resolving the database location
(``get_database_path``), obtaining a connection (``get_connection``),
running statements inside a committed cursor (``get_cursor``) and
creating the schema on application start (``init_db``).  It uses SQLite
as a lightweight embedded database; to switch to another DBMS you would
replace connection logic and adapt SQL syntax accordingly.

Each call opens its own connection, so concurrent requests are
serialised by SQLite itself rather than by application locks.
"""

import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

# The email index is never queried by the application; it is kept so the
# table layout matches databases created by earlier deployments.
SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    email TEXT NOT NULL,
    age INTEGER NOT NULL,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE INDEX IF NOT EXISTS idx_users_email ON users (email);
"""

# Seconds a connection waits for a competing writer before giving up.
BUSY_TIMEOUT = 5.0


def get_database_path(database_url: str) -> str:
    """Compute the path to the SQLite database file.

    If ``database_url`` is an absolute path, use it directly.
    Otherwise resolve it relative to the current working directory.
    """
    if os.path.isabs(database_url):
        return database_url
    return str(Path(database_url).resolve())


def get_connection(db_path: str) -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    The connection uses a row factory to access columns by name.  No
    type detection/parsing is enabled; values are returned as they are
    stored in the database.
    """
    conn = sqlite3.connect(db_path, timeout=BUSY_TIMEOUT)
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def get_cursor(db_path: str) -> Iterator[sqlite3.Cursor]:
    """Yield a cursor, commit on success, roll back on error, always close."""
    conn = get_connection(db_path)
    try:
        yield conn.cursor()
        conn.commit()
    except BaseException:
        conn.rollback()
        raise
    finally:
        conn.close()


def init_db(db_path: str) -> None:
    """Create the ``users`` table and its index if they do not exist.

    Safe to call on every start.  The parent directory of ``db_path`` is
    created when missing.
    """
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    conn = get_connection(db_path)
    try:
        conn.executescript(SCHEMA)
        conn.commit()
    finally:
        conn.close()

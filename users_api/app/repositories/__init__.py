"""
Storage backends for users.

``UserRepository`` is the contract; ``InMemoryUserRepository`` and
``SqliteUserRepository`` implement it.  ``create_repository`` picks one
from the settings once at startup; nothing else in the application
branches on the backend.
"""

import logging

from ..core.config import Settings
from ..core.db import get_database_path
from .base import UserRepository
from .memory import InMemoryUserRepository
from .sqlite import SqliteUserRepository

__all__ = [
    "UserRepository",
    "InMemoryUserRepository",
    "SqliteUserRepository",
    "create_repository",
]

logger = logging.getLogger(__name__)


def create_repository(settings: Settings) -> UserRepository:
    """Build the backend named by ``settings.storage_backend``.

    Raises ``StorageError`` if the SQLite database cannot be opened.
    There is no fallback to memory: that has to be chosen explicitly.
    """
    if settings.storage_backend == "memory":
        logger.warning("Using in-memory user storage; data will be lost on restart")
        return InMemoryUserRepository()

    db_path = get_database_path(settings.database_url)
    logger.info("Opening SQLite user storage at %s", db_path)
    repository = SqliteUserRepository(db_path)
    logger.info("SQLite user storage ready")
    return repository

# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up environment variables before any application imports
# - Provides repositories, a service and an HTTP client for each backend
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# users_api.app.main builds a module-level app from the environment on import

os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient

from users_api.app.core.config import Settings
from users_api.app.main import create_app
from users_api.app.repositories import InMemoryUserRepository, SqliteUserRepository
from users_api.app.schemas.user import UserCreate
from users_api.app.services.user_service import UserService


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def memory_repository():
    """Empty in-memory repository."""
    return InMemoryUserRepository()


@pytest.fixture
def sqlite_repository(tmp_path):
    """Repository backed by a fresh SQLite file."""
    return SqliteUserRepository(str(tmp_path / "users.db"))


@pytest.fixture(params=["memory", "sqlite"])
def repository(request, tmp_path):
    """Each contract test runs once per backend."""
    if request.param == "memory":
        return InMemoryUserRepository()
    return SqliteUserRepository(str(tmp_path / "users.db"))


@pytest.fixture
def service(memory_repository):
    """UserService on top of an in-memory repository."""
    return UserService(memory_repository)


@pytest.fixture
def valid_create():
    """A creation payload that passes every rule."""
    return UserCreate(name="Juan Pérez", email="juan@example.com", age=30)


@pytest.fixture
def memory_settings():
    return Settings(storage_backend="memory", log_level="WARNING")


@pytest.fixture
def sqlite_settings(tmp_path):
    return Settings(
        storage_backend="sqlite",
        database_url=str(tmp_path / "api.db"),
        log_level="WARNING",
    )


@pytest.fixture(params=["memory", "sqlite"])
def client(request, memory_settings, sqlite_settings):
    """TestClient with the lifespan running, once per backend."""
    settings = memory_settings if request.param == "memory" else sqlite_settings
    with TestClient(create_app(settings)) as test_client:
        yield test_client

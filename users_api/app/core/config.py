"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from environment
variables.  Defaults are provided for all fields.  A ``.env`` file in the
working directory is loaded first, if present, so local development does
not require exporting variables by hand; variables already set in the
environment take precedence over the file.

Values are read when ``Settings`` is instantiated rather than when this
module is imported, so tests can adjust ``os.environ`` and build a fresh
instance.
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()

STORAGE_BACKENDS = ("sqlite", "memory")


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = field(default_factory=lambda: os.getenv("PROJECT_NAME", "Users API"))
    api_version: str = field(default_factory=lambda: os.getenv("API_VERSION", "1.0.0"))
    debug: bool = field(
        default_factory=lambda: os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    )
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    # Optional path of a file that receives a copy of every log record.
    log_file: Optional[str] = field(default_factory=lambda: os.getenv("LOG_FILE") or None)

    # One INFO line per request on the ``users_api.access`` logger.
    access_log: bool = field(
        default_factory=lambda: os.getenv("ACCESS_LOG", "true").lower() in {"1", "true", "yes"}
    )

    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8080")))

    # Which repository backs the service: ``sqlite`` persists users in the
    # database at ``database_url``, ``memory`` keeps them in process and
    # loses them on restart.  The choice is made once at startup.
    storage_backend: str = field(
        default_factory=lambda: os.getenv("STORAGE_BACKEND", "sqlite").lower()
    )

    # Path of the SQLite database file.  Relative paths are resolved
    # against the working directory by ``core.db``.
    database_url: str = field(default_factory=lambda: os.getenv("DATABASE_URL", "users.db"))

    # Comma‑separated list of allowed CORS origins.  ``*`` allows any.
    cors_origins: str = field(default_factory=lambda: os.getenv("CORS_ORIGINS", "*"))

    def __post_init__(self) -> None:
        if self.storage_backend not in STORAGE_BACKENDS:
            raise ValueError(
                f"Unknown STORAGE_BACKEND {self.storage_backend!r}; "
                f"expected one of {', '.join(STORAGE_BACKENDS)}"
            )

    @property
    def effective_log_level(self) -> str:
        """``DEBUG`` when debug mode is on, otherwise ``log_level``."""
        return "DEBUG" if self.debug else self.log_level

    @property
    def cors_origins_list(self) -> List[str]:
        """
        Parse ``cors_origins`` into a list.

        Example: "http://localhost:3000, https://myapp.com" ->
        ["http://localhost:3000", "https://myapp.com"]
        """
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


def get_settings() -> Settings:
    """Build settings from the current environment."""
    return Settings()

"""
Logging setup for the Users API.

Two streams are configured from ``Settings``:

* the application log, through the root logger, at ``LOG_LEVEL`` (or
  ``DEBUG`` when ``DEBUG`` is on) to stderr and optionally ``LOG_FILE``;
* the access log, the ``users_api.access`` logger written by
  ``core.middleware``, which is switched on or off with ``ACCESS_LOG``
  independently of ``LOG_LEVEL``.

Root handlers are only attached when nobody (uvicorn, pytest, an earlier
``create_app``) has attached any; logger levels are applied every time.
"""

import logging
from pathlib import Path

from .config import Settings

ACCESS_LOGGER = "users_api.access"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _add_handlers(root: logging.Logger, settings: Settings) -> None:
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if settings.log_file:
        log_path = Path(settings.log_file).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)


def setup_logging(settings: Settings) -> None:
    """Configure the application and access loggers from ``settings``."""
    root = logging.getLogger()
    if not root.handlers:
        _add_handlers(root, settings)
    root.setLevel(getattr(logging, settings.effective_log_level.upper(), logging.INFO))

    # Access records are INFO; they reach the root handlers through
    # propagation even when the root level is higher.
    access_logger = logging.getLogger(ACCESS_LOGGER)
    access_logger.setLevel(logging.INFO if settings.access_log else logging.WARNING)

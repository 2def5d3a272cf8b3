"""
Application package initializer.

The project is organised in layers: HTTP endpoints in ``api``, business
rules in ``services``, persistence in ``repositories`` and pydantic
payloads in ``schemas``.  Shared plumbing (configuration, logging, the
SQLite helpers and the error taxonomy) lives in ``core``.  Versioning is
handled by grouping routers under the ``api/<version>/`` hierarchy.
"""

from .main import app  # noqa: F401

"""Entry point for the Users API.

This script starts the FastAPI application under Uvicorn.  It is
intended to be executed from the project root, for example under Docker,
where you only specify a single Python file to run.

Configuration such as PORT, STORAGE_BACKEND and DATABASE_URL is read
from the environment or from a `.env` file in the same directory.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from users_api.app.core.config import get_settings
from users_api.app.main import create_app

# Seconds an idle keep-alive connection is held open.
KEEP_ALIVE_TIMEOUT = 60


async def main() -> None:
    """Serve the API on the configured host and port."""
    settings = get_settings()
    app = create_app(settings)
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.effective_log_level.lower(),
        timeout_keep_alive=KEEP_ALIVE_TIMEOUT,
        # Requests are logged by the app on "users_api.access".
        access_log=False,
    )
    server = Server(config)
    logging.getLogger(__name__).info(
        "Serving on http://%s:%s (health: /health, API: /api/v1/users, docs: /swagger/index.html)",
        settings.host,
        settings.port,
    )
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass

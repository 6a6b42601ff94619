"""Entry point for the User Records API.

This script serves the FastAPI application with Uvicorn.  It is meant
to be executed from the project root, for example under Docker, where
you only specify a single Python file to run.

Configuration (``HOST``, ``PORT``, ``STORAGE_BACKEND``, ``DATABASE_URL``,
``LOG_LEVEL``) is read from the environment; see
``user_records_api/app/core/config.py``.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from user_records_api.app.core.config import settings
from user_records_api.app.main import app


async def run_api() -> None:
    """Start the API using Uvicorn on ``settings.host``/``settings.port``."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


def main() -> None:
    logging.getLogger(__name__).info("Serving on %s:%s", settings.host, settings.port)
    asyncio.run(run_api())


if __name__ == "__main__":
    main()

"""Entry point for the Subject Links API.

Starts the FastAPI application under Uvicorn.  It is intended to be
executed from the project root, for example under Docker, where you
only specify a single Python file to run.

Configuration is read from environment variables: ``PORT`` and
``HOST`` for the listener, ``DATABASE_URL`` to use the database
instead of the local ``data.json`` file, ``STATIC_DIR`` for the
front-end.  See ``subject_links_api/app/core/config.py`` for the full
list.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from subject_links_api.app.core.config import Settings
from subject_links_api.app.main import create_app


async def main() -> None:
    """Build the app from the environment and serve it until stopped."""
    settings = Settings.from_env()
    app = create_app(settings)
    config = Config(app=app, host=settings.host, port=settings.port, reload=False, log_level=settings.log_level.lower())
    server = Server(config)
    logging.getLogger(__name__).info("Server listening on http://localhost:%s", settings.port)
    await server.serve()


if __name__ == "__main__":
    asyncio.run(main())

"""Entry point for the Bug Tracker API.

Serves ``bug_tracker_api.app.main:app`` with Uvicorn.  Host and port
are read from the ``API_HOST`` and ``API_PORT`` environment variables;
everything else (database path, secret key, log level) is configured
through the variables documented in ``bug_tracker_api.app.core.config``.

Usage:
    python run.py
"""
import asyncio
import logging
import os

from uvicorn import Config, Server

from bug_tracker_api.app.main import app


async def main() -> None:
    """Run the API server until it is stopped."""
    host = os.getenv("API_HOST", "0.0.0.0")
    port = int(os.getenv("API_PORT", "8000"))
    config = Config(app=app, host=host, port=port, reload=False, log_level=os.getenv("LOG_LEVEL", "info").lower())
    server = Server(config)
    logging.getLogger(__name__).info("Starting Bug Tracker API on %s:%s", host, port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass

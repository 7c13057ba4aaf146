"""Entry point for serving the Event Hub API.

Builds the application from environment variables (see
``event_hub_api.app.core.config.Settings.from_env``) and serves it
with Uvicorn.  Configuration such as SECRET_KEY, DATABASE_URL, HOST
and PORT can be placed in the environment or exported from a ``.env``
file by your process manager.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from event_hub_api.app.core.config import Settings
from event_hub_api.app.main import create_app


async def run_api(settings: Settings) -> None:
    """Start the API using Uvicorn on ``settings.host``/``settings.port``."""
    config = Config(
        app=create_app(settings),
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


def main() -> None:
    settings = Settings.from_env()
    try:
        asyncio.run(run_api(settings))
    except (KeyboardInterrupt, SystemExit):
        logging.getLogger(__name__).info("Shutting down")


if __name__ == "__main__":
    main()

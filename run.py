"""Entry point for serving the Medication Reference API.

Host and port are read from ``settings`` (``HOST`` and ``PORT``
environment variables, defaulting to ``0.0.0.0`` and ``8000``).  Set
``DATABASE_URL`` to a SQLite file to use durable storage; without it
the service runs on seeded in‑memory data.

Usage:
    python run.py
"""
import asyncio

from uvicorn import Config, Server

from medref_api.app.core.config import settings


async def main() -> None:
    """Start the API using Uvicorn."""
    config = Config(
        app="medref_api.app.main:app",
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass

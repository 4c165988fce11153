"""Entry point for serving the ZaiBoost API.

Host and port come from the ``HOST`` and ``PORT`` environment variables
(or a ``.env`` file), defaulting to ``0.0.0.0`` and ``3000``.  The
snapshot file is created next to this script on first start unless
``DATA_PATH`` points elsewhere.

Usage:
    python run.py
"""
import asyncio

from uvicorn import Config, Server

from zaiboost_api.app.core.config import settings
from zaiboost_api.app.main import app


async def main() -> None:
    config = Config(app=app, host=settings.host, port=settings.port, reload=False, log_level=settings.log_level.lower())
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass

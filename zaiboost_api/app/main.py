"""
Main entrypoint for the ZaiBoost API.

This module assembles the FastAPI application: logging, error handlers
and the versioned routers.  ``create_app`` builds and configures the
app, which is instantiated at module import time as ``app`` so it can
be served directly::

    uvicorn zaiboost_api.app.main:app --reload

Startup fails with ``RuntimeError`` when ``JWT_SECRET`` or
``ENCRYPTION_KEY`` is not configured.
"""

import logging
import time
from typing import Optional

from fastapi import FastAPI

from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.errors import register_error_handlers
from .core.logging_config import setup_logging
from .core.store import Ledger, init_store, set_ledger

logger = logging.getLogger(__name__)


def create_app(ledger: Optional[Ledger] = None, config: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    ledger : Optional[Ledger]
        Ledger to serve.  When omitted the JSON snapshot file is loaded
        (and seeded) on startup.
    config : Optional[Settings]
        Settings to validate and use for titles and logging.  Defaults
        to the module-level settings.
    """
    config = config or default_settings
    config.validate()
    setup_logging(config.log_level, config.log_file or None)

    app = FastAPI(title=config.project_name, version=config.api_version)
    app.state.started_at = time.monotonic()

    register_error_handlers(app)
    app.include_router(v1_router, prefix="/api/v1")

    if ledger is not None:
        set_ledger(ledger)
    else:
        @app.on_event("startup")
        async def startup_event() -> None:
            # Loads the snapshot file, creating it with the default catalog
            # and admin account on first run.
            init_store()
            logger.info("%s %s ready", config.project_name, config.api_version)

    return app


app = create_app()

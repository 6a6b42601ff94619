"""
Main entrypoint for the User Records API.

This module assembles the FastAPI application, sets up logging,
registers the error envelope handlers and includes the versioned
router.  The ``create_app`` function builds and configures the app,
which is then instantiated at module import time as ``app``, so it can
be served directly, e.g.::

    uvicorn user_records_api.app.main:app --port 8080

The routes are served at the application root (``/users``), matching
the public contract of the service.
"""

import logging
from typing import Optional

from fastapi import FastAPI

from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.errors import add_exception_handlers
from .core.logging_config import setup_logging
from .services.record_store import RecordStore
from .services.user_service import UserService, build_store

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[RecordStore] = None,
) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use; defaults to the module-level settings
        read from the environment.
    store : Optional[RecordStore]
        Record store to serve.  When omitted the store named by
        ``settings.storage_backend`` is built.

    Returns
    -------
    FastAPI
        A configured FastAPI instance with its ``UserService`` on
        ``app.state.user_service``.
    """
    settings = settings or default_settings
    setup_logging(settings.log_level, settings.log_file or None)

    if store is None:
        store = build_store(settings)

    app = FastAPI(title=settings.project_name, version=settings.api_version)
    app.state.settings = settings
    app.state.user_service = UserService(store)

    add_exception_handlers(app)
    app.include_router(v1_router)

    logger.info("%s ready with %s", settings.project_name, type(store).__name__)
    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()

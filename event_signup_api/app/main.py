"""
Main entrypoint for the Event Sign-up API.

``create_app`` assembles the FastAPI application: it configures
logging, validates the settings, builds the objects shared by all
requests (database handle, password hasher and token manager), stores
them on ``app.state`` and mounts the routers.  Run it with uvicorn's
factory mode, e.g.::

    uvicorn event_signup_api.app.main:create_app --factory --reload

or via ``run.py`` at the repository root.
"""

import logging
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.router import router
from .core.config import Settings
from .core.db import Database, open_database
from .core.errors import EventApiError, app_error_handler, http_error_handler, validation_error_handler
from .core.logging_config import setup_logging
from .core.security import PasswordHasher, TokenManager


logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use.  Read from the environment when omitted.
    database : Optional[Database]
        An already opened database.  When omitted one is opened from
        ``settings.database_path`` and closed again on shutdown.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.

    Raises
    ------
    ConfigError
        If the settings are unusable, most commonly a missing
        ``SECRET_KEY``.
    """
    settings = settings or Settings()
    setup_logging(settings.log_level, settings.log_file or None)
    settings.validate()

    owns_database = database is None
    if database is None:
        database = open_database(
            settings.database_path,
            max_open=settings.db_max_open_conns,
            max_idle=settings.db_max_idle_conns,
        )
    else:
        database.initialize()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("%s %s started", settings.project_name, settings.api_version)
        yield
        if owns_database:
            database.close()
        logger.info("%s stopped", settings.project_name)

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.db = database
    app.state.hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    app.state.tokens = TokenManager(
        settings.secret_key,
        algorithm=settings.algorithm,
        ttl=timedelta(minutes=settings.access_token_expire_minutes),
    )

    app.add_exception_handler(EventApiError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    app.include_router(router)

    return app

"""Entry point for the Event Sign-up API.

Starts the API with Uvicorn.  Configuration is taken from environment
variables (see ``event_signup_api/app/core/config.py``); at minimum
``SECRET_KEY`` has to be set.

Usage:
    SECRET_KEY=... python run.py
"""
import logging

import uvicorn

from event_signup_api.app.core.config import ConfigError, Settings
from event_signup_api.app.main import create_app


def main() -> None:
    try:
        settings = Settings()
        app = create_app(settings)
    except ConfigError as exc:
        logging.getLogger(__name__).error("Invalid configuration: %s", exc)
        raise SystemExit(2) from exc
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower(), log_config=None)


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        pass

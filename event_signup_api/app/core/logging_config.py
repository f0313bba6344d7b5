"""
Logging setup for the API process.

``setup_logging`` installs one console handler (and optionally a file
handler) on the root logger, and lines uvicorn's own loggers up with
it: their records propagate to the root handlers instead of uvicorn's
default formatter, and per-request access lines are only emitted at
``DEBUG``.  Handler installation happens once; the uvicorn levels are
re-applied on every call so a second ``create_app`` with another level
takes effect.
"""

import logging
from pathlib import Path
from typing import Optional


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def _configure_uvicorn(numeric_level: int) -> None:
    for name in UVICORN_LOGGERS:
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.propagate = True
    access_level = logging.DEBUG if numeric_level <= logging.DEBUG else logging.WARNING
    logging.getLogger("uvicorn.access").setLevel(access_level)


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger and the uvicorn loggers.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive; unknown names fall back to ``INFO``.
    logfile : Optional[str]
        Path to a file that receives the same records as the console.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    _configure_uvicorn(numeric_level)

    root = logging.getLogger()
    if root.handlers:
        return
    root.setLevel(numeric_level)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        log_path = Path(logfile).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

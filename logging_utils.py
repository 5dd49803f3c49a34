"""Application logging utilities.

- One shared app logger (``seed``); modules get children via ``get_logger``.
- Each child also writes its own file under ``logs/`` (or ``$LOG_DIR``).
- UTC timestamps, rotated daily at midnight UTC.
- A stderr handler is attached to the shared logger for local runs.
"""

from __future__ import annotations

import logging
import os
import time
from logging.handlers import TimedRotatingFileHandler


class _UTCFormatter(logging.Formatter):
    """Formatter that forces UTC timestamps."""

    converter = staticmethod(time.gmtime)


_APP_LOGGER_NAME = "seed"

_FORMAT = "%(asctime)sZ %(levelname)s pid=%(process)d %(name)s: %(message)s"
_DATEFMT = "%Y-%m-%dT%H:%M:%S"


def _logs_dir() -> str:
    override = os.getenv("LOG_DIR")
    if override:
        return override
    return os.path.join(os.path.dirname(__file__), "logs")


def _sanitize_filename(name: str) -> str:
    # "install.installer" -> "install_installer"
    name = (name or "app").strip() or "app"
    return "".join(ch if (ch.isalnum() or ch in {"-", "_"}) else "_" for ch in name)


def _file_handler(file_name: str, level: int) -> TimedRotatingFileHandler:
    fh = TimedRotatingFileHandler(
        os.path.join(_logs_dir(), file_name),
        when="midnight",
        interval=1,
        backupCount=14,
        utc=True,
        encoding="utf-8",
    )
    fh.setLevel(level)
    fh.setFormatter(_UTCFormatter(fmt=_FORMAT, datefmt=_DATEFMT))
    return fh


def configure_app_logging(level_name: str = "INFO") -> logging.Logger:
    """Configure and return the shared application logger.

    Safe to call multiple times; only the level changes after the first call.
    """

    level = getattr(logging, (level_name or "INFO").upper(), logging.INFO)
    app_logger = logging.getLogger(_APP_LOGGER_NAME)
    app_logger.setLevel(level)

    if getattr(app_logger, "_configured", False):
        return app_logger

    os.makedirs(_logs_dir(), exist_ok=True)

    sh = logging.StreamHandler()
    sh.setLevel(level)
    sh.setFormatter(_UTCFormatter(fmt=_FORMAT, datefmt=_DATEFMT))

    app_logger.addHandler(sh)
    app_logger.addHandler(_file_handler("app.log", level))

    # Do not propagate to the global root logger (prevents double logging).
    app_logger.propagate = False

    app_logger._configured = True  # type: ignore[attr-defined]
    return app_logger


def get_logger(module_name: str | None = None) -> logging.Logger:
    """Get a module-specific logger that writes to its own log file.

    Example:
        logger = get_logger(__name__)
    """

    base = configure_app_logging(os.getenv("LOG_LEVEL", "INFO"))

    child_name = module_name or "app"
    logger = logging.getLogger(f"{_APP_LOGGER_NAME}.{child_name}")

    if not getattr(logger, "_file_configured", False):
        # Records still reach the shared logger's console and app.log handlers.
        logger.setLevel(base.level)
        logger.addHandler(
            _file_handler(_sanitize_filename(child_name) + ".log", base.level)
        )
        logger._file_configured = True  # type: ignore[attr-defined]

    return logger

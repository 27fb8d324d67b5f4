# kerbside/utils/logger.py
"""
Logging setup shared by the API, services and operator scripts.
Console output plus a rotating file at LOG_DIR/LOG_FILE. The root logger is
configured on the first get_logger() call.
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from kerbside.config import settings

# httpx logs one INFO line per request; the sensor feed is polled every few minutes
_NOISY_LOGGERS = ("httpx", "httpcore")

_configured = False


def _configure_root_logger():
    global _configured
    if _configured:
        return
    _configured = True

    level = settings.LOG_LEVEL.upper()
    fmt = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    root = logging.getLogger()
    root.setLevel(level)

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(fmt)
    root.addHandler(console)

    os.makedirs(settings.LOG_DIR, exist_ok=True)
    # 10 × 5MB
    file_handler = RotatingFileHandler(
        filename=os.path.join(settings.LOG_DIR, settings.LOG_FILE),
        maxBytes=5 * 1024 * 1024,
        backupCount=10,
        encoding="utf-8",
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    if level != "DEBUG":
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Named logger; every module calls this once at import time."""
    _configure_root_logger()
    return logging.getLogger(name)
